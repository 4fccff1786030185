import calendar
from collections import Counter
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobhub.core.exceptions import ForbiddenException, UnauthorizedException
from jobhub.models.application import Application
from jobhub.models.company import Company
from jobhub.models.enums import ApplicationStatus, Role
from jobhub.models.recruitment import Recruitment
from jobhub.models.user import User
from jobhub.schemas.company import CompanyResponse
from jobhub.schemas.statistics import (
    AdminStatisticsResponse,
    ApplicationCounts,
    ChartEntry,
    CompanyStatisticsResponse,
    TopCompany,
)
from jobhub.schemas.user import CurrentUser

TOP_COMPANIES_LIMIT = 5


class StatisticService:
    def __init__(self, db: Session):
        self.db = db

    def _application_counts(self, company_id=None) -> ApplicationCounts:
        query = self.db.query(Application.status, func.count(Application.id))
        if company_id is not None:
            query = query.join(Recruitment, Application.recruitment_id == Recruitment.id).filter(
                Recruitment.company_id == company_id
            )
        by_status = dict(query.group_by(Application.status).all())
        return ApplicationCounts(
            total=sum(by_status.values()),
            pending=by_status.get(ApplicationStatus.PENDING, 0),
            accepted=by_status.get(ApplicationStatus.APPROVED, 0),
            rejected=by_status.get(ApplicationStatus.REJECTED, 0),
        )

    def get_user_chart_statistics(self) -> List[ChartEntry]:
        """USER registrations per calendar month, January first."""
        rows = self.db.query(User.created_at).filter(User.role == Role.USER).all()
        per_month = Counter(created_at.month for (created_at,) in rows if created_at is not None)
        return [ChartEntry(label=calendar.month_name[month], data=per_month.get(month, 0)) for month in range(1, 13)]

    def _top_companies(self) -> List[TopCompany]:
        recruitment_count = func.count(Recruitment.id)
        rows = (
            self.db.query(Company, recruitment_count)
            .outerjoin(Recruitment, Recruitment.company_id == Company.id)
            .group_by(Company.id)
            .order_by(recruitment_count.desc(), Company.id.asc())
            .limit(TOP_COMPANIES_LIMIT)
            .all()
        )
        result = []
        for company, count in rows:
            application_count = (
                self.db.query(func.count(Application.id))
                .join(Recruitment, Application.recruitment_id == Recruitment.id)
                .filter(Recruitment.company_id == company.id)
                .scalar()
            )
            result.append(
                TopCompany(
                    **CompanyResponse.model_validate(company).model_dump(),
                    recruitment_count=count,
                    application_count=application_count or 0,
                )
            )
        return result

    def get_admin_statistics(self) -> AdminStatisticsResponse:
        return AdminStatisticsResponse(
            totalUsers=self.db.query(User).filter(User.role == Role.USER).count(),
            totalCompanies=self.db.query(Company).count(),
            totalRecruitments=self.db.query(Recruitment).count(),
            totalApplications=self._application_counts(),
            userChartStatistics=self.get_user_chart_statistics(),
            topCompanies=self._top_companies(),
        )

    def get_company_statistics(self, actor: CurrentUser) -> CompanyStatisticsResponse:
        user = self.db.query(User).filter(User.id == actor.id).first()
        if not user:
            raise UnauthorizedException()
        if not user.company_id:
            raise ForbiddenException()

        company_id = user.company_id
        return CompanyStatisticsResponse(
            totalRecruitments=self.db.query(Recruitment).filter(Recruitment.company_id == company_id).count(),
            totalApplications=self._application_counts(company_id),
            totalHRs=self.db.query(User)
            .filter(User.company_id == company_id, User.role == Role.COMPANY_HR)
            .count(),
        )
