from pydantic import EmailStr, Field
from typing import ClassVar, List, Optional, Tuple
from datetime import datetime

from jobhub.schemas.common import BaseFilter, CamelModel


class CompanyBase(CamelModel):
    code: str = Field(min_length=3, max_length=10)
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=5000)
    address: str = Field(min_length=1, max_length=255)
    logo: Optional[str] = None


class CompanyCreate(CompanyBase):
    # first admin account, created together with the company
    company_account_email: EmailStr
    company_account_first_name: str = Field(min_length=1)
    company_account_last_name: str = Field(min_length=1)
    company_account_password: str = Field(min_length=10)


class CompanyUpdate(CompanyBase):
    pass


class CompanyResponse(CompanyBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CompanyFilter(BaseFilter):
    accepted_sort_fields: ClassVar[Tuple[str, ...]] = ("id", "code", "name")

    code: Optional[str] = Field(default=None, max_length=10)
    name: Optional[str] = Field(default=None, max_length=255)


class CompanyRecruitmentSummary(CamelModel):
    id: int
    title: str
    deadline: datetime


class CompanyDetailResponse(CompanyResponse):
    recruitments: List[CompanyRecruitmentSummary] = []
