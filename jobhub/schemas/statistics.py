from typing import List
from pydantic import BaseModel

from jobhub.schemas.company import CompanyResponse


class ApplicationCounts(BaseModel):
    total: int
    pending: int
    accepted: int
    rejected: int


class ChartEntry(BaseModel):
    label: str
    data: int


class TopCompany(CompanyResponse):
    recruitment_count: int
    application_count: int


class AdminStatisticsResponse(BaseModel):
    totalUsers: int
    totalCompanies: int
    totalRecruitments: int
    totalApplications: ApplicationCounts
    userChartStatistics: List[ChartEntry]
    topCompanies: List[TopCompany]


class CompanyStatisticsResponse(BaseModel):
    totalRecruitments: int
    totalApplications: ApplicationCounts
    totalHRs: int
