from pydantic import Field, model_validator
from typing import ClassVar, Optional, Tuple
from datetime import datetime

from jobhub.models.enums import JobType
from jobhub.schemas.common import BaseFilter, CamelModel
from jobhub.schemas.company import CompanyResponse


class RecruitmentBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1, max_length=5000)
    max_salary: int = Field(ge=0)
    min_salary: int = Field(ge=0)
    experience: int = Field(ge=0)
    job_type: JobType
    deadline: datetime

    @model_validator(mode="after")
    def _check_salary_range(self):
        if self.min_salary > self.max_salary:
            raise ValueError("minSalary must be less than or equal to maxSalary")
        return self


class RecruitmentCreate(RecruitmentBase):
    pass


class RecruitmentUpdate(RecruitmentBase):
    pass


class RecruitmentResponse(CamelModel):
    id: int
    company_id: int
    title: str
    content: str
    max_salary: int
    min_salary: int
    experience: int
    job_type: JobType
    deadline: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RecruitmentWithCompanyResponse(RecruitmentResponse):
    company: Optional[CompanyResponse] = None


class RecruitmentFilter(BaseFilter):
    accepted_sort_fields: ClassVar[Tuple[str, ...]] = ("id", "updated_at", "deadline")

    title: Optional[str] = None
    job_type: Optional[JobType] = None
    company_id: Optional[int] = None
    min_salary: Optional[int] = Field(default=None, ge=0)
    max_salary: Optional[int] = Field(default=None, ge=0)
    experience: Optional[int] = Field(default=None, ge=0)
