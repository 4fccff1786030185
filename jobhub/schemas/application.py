from pydantic import Field, StrictBool
from typing import ClassVar, Optional, Tuple
from datetime import datetime

from jobhub.models.enums import ApplicationStatus
from jobhub.schemas.common import BaseFilter, CamelModel
from jobhub.schemas.file import FileResponse
from jobhub.schemas.recruitment import RecruitmentWithCompanyResponse
from jobhub.schemas.user import UserPublic


class ApplicationCreate(CamelModel):
    message: str = Field(min_length=1)
    cv_id: str = Field(min_length=1)
    recruitment_id: int


class ApplicationUpdate(CamelModel):
    message: str = Field(min_length=1)
    cv_id: str = Field(min_length=1)
    status: Optional[ApplicationStatus] = None


class ApplicationStatusUpdate(CamelModel):
    is_approved: StrictBool


class ApplicationResponse(CamelModel):
    id: int
    message: str
    status: ApplicationStatus
    cv_id: Optional[str] = None
    recruitment_id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # signed, time-limited download link of the CV (detail views only)
    cv_url: Optional[str] = None


class ApplicationWithUserResponse(ApplicationResponse):
    user: UserPublic
    cv: Optional[FileResponse] = None


class ApplicationDetailResponse(ApplicationWithUserResponse):
    recruitment: RecruitmentWithCompanyResponse


class ApplicationFilter(BaseFilter):
    accepted_sort_fields: ClassVar[Tuple[str, ...]] = ("id",)

    recruitment_id: Optional[int] = None
    user_id: Optional[int] = None
    status: Optional[ApplicationStatus] = None
