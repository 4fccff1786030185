import logging
from typing import List

from sqlalchemy.orm import Session

from jobhub.core.exceptions import BadRequestException, ForbiddenException, NotFoundException, UnauthorizedException
from jobhub.core.messages import Message
from jobhub.models.company import Company
from jobhub.models.enums import Role
from jobhub.models.user import User
from jobhub.schemas.common import PageResult
from jobhub.schemas.company import CompanyCreate, CompanyFilter, CompanyUpdate
from jobhub.schemas.user import CreateCompanyHRRequest, CurrentUser, RegisterRequest
from jobhub.services.pagination import paginate
from jobhub.services.user_service import UserService

logger = logging.getLogger(__name__)


class CompanyService:
    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)

    def find_all(self, filter: CompanyFilter) -> PageResult:
        query = self.db.query(Company)
        if filter.code:
            query = query.filter(Company.code.contains(filter.code))
        if filter.name:
            query = query.filter(Company.name.contains(filter.name))
        return paginate(query, Company, filter)

    def find_by_id(self, company_id: int) -> Company:
        company = self.db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundException(Message.COMPANY_NOT_FOUND)
        return company

    def find_by_code(self, code: str) -> Company:
        company = self.db.query(Company).filter(Company.code == code).first()
        if not company:
            raise NotFoundException(Message.COMPANY_CODE_NOT_FOUND(code))
        return company

    def create_company(self, data: CompanyCreate) -> Company:
        """Create the company and its first COMPANY_ADMIN account in one transaction."""
        if self.db.query(Company).filter(Company.code == data.code).first():
            raise BadRequestException(Message.COMPANY_CODE_ALREADY_EXISTS(data.code))

        try:
            admin = self.user_service.create_company_admin_account(
                RegisterRequest(
                    email=data.company_account_email,
                    first_name=data.company_account_first_name,
                    last_name=data.company_account_last_name,
                    password=data.company_account_password,
                )
            )
            company = Company(
                code=data.code,
                name=data.name,
                description=data.description,
                address=data.address,
                logo=data.logo,
            )
            self.db.add(company)
            self.db.flush()

            admin.company_id = company.id
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(company)
        logger.info(f"Company created: id={company.id}, code={company.code}, admin={admin.id}")
        return company

    def update_company(self, company_id: int, data: CompanyUpdate) -> Company:
        company = self.find_by_id(company_id)

        if data.code != company.code and self.db.query(Company).filter(Company.code == data.code).first():
            raise BadRequestException(Message.COMPANY_CODE_ALREADY_EXISTS(data.code))

        company.code = data.code
        company.name = data.name
        company.description = data.description
        company.address = data.address
        if data.logo is not None:
            company.logo = data.logo
        self.db.commit()
        self.db.refresh(company)
        return company

    def delete_company(self, company_id: int) -> None:
        """Delete the company with its staff accounts and recruitments."""
        company = self.find_by_id(company_id)
        try:
            for account in list(company.accounts):
                self.db.delete(account)
            self.db.delete(company)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"Company deleted: id={company_id}")

    # --- HR accounts of the actor's own company ---

    def _get_company_admin(self, actor: CurrentUser) -> User:
        """Re-read the actor and require a COMPANY_ADMIN with a company."""
        user = self.user_service.find_by_id(actor.id)
        if not user:
            raise UnauthorizedException()
        if not user.company_id:
            raise ForbiddenException()
        if user.role != Role.COMPANY_ADMIN:
            raise ForbiddenException()
        return user

    def create_company_hr(self, data: List[CreateCompanyHRRequest], actor: CurrentUser) -> List[User]:
        admin = self._get_company_admin(actor)
        try:
            accounts = [self.user_service.create_company_hr_account(item, admin.company_id) for item in data]
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for account in accounts:
            self.db.refresh(account)
        logger.info(f"Created {len(accounts)} HR account(s) for company id={admin.company_id}")
        return accounts

    def get_company_hr_list(self, actor: CurrentUser) -> List[User]:
        admin = self._get_company_admin(actor)
        return (
            self.db.query(User)
            .filter(User.company_id == admin.company_id, User.role == Role.COMPANY_HR)
            .order_by(User.id.asc())
            .all()
        )

    def delete_company_hr(self, hr_id: int, actor: CurrentUser) -> None:
        admin = self._get_company_admin(actor)
        hr = (
            self.db.query(User)
            .filter(
                User.id == hr_id,
                User.company_id == admin.company_id,
                User.role == Role.COMPANY_HR,
            )
            .first()
        )
        if not hr:
            raise NotFoundException(Message.COMPANY_HR_NOT_FOUND(hr_id))

        self.db.delete(hr)
        self.db.commit()
        logger.info(f"HR account deleted: id={hr_id}, company={admin.company_id}")
