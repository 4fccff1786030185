from pydantic import BaseModel, EmailStr, Field
from typing import ClassVar, Optional, Tuple
from datetime import datetime

from jobhub.models.enums import Role
from jobhub.schemas.common import BaseFilter, CamelModel


class UserPublic(CamelModel):
    """Applicant fields that company staff may see."""
    id: int
    email: str
    first_name: str
    last_name: str
    display_name: Optional[str] = None
    avatar: Optional[str] = None


class UserResponse(UserPublic):
    role: Role
    company_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegisterRequest(CamelModel):
    email: EmailStr
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    password: str = Field(min_length=6)


class CreateCompanyHRRequest(RegisterRequest):
    display_name: Optional[str] = None


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class UserFilter(BaseFilter):
    accepted_sort_fields: ClassVar[Tuple[str, ...]] = ("id", "first_name", "created_at")

    name: Optional[str] = None
    email: Optional[str] = None


class CurrentUser(BaseModel):
    """Principal decoded from the access token; may be stale against the store."""
    id: int
    email: str
    first_name: str = ""
    last_name: str = ""
    role: Role
    company_id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
