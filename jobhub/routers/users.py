from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobhub.core.messages import Message
from jobhub.database.database import get_db
from jobhub.models.enums import Role
from jobhub.routers.deps import get_current_user, require_roles
from jobhub.schemas.common import success_response
from jobhub.schemas.user import ChangePasswordRequest, CurrentUser, UserFilter, UserResponse
from jobhub.services.user_service import UserService

router = APIRouter()


@router.put("/users/change-password", response_model=dict)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    UserService(db).change_password(payload, current_user)
    return success_response(message=Message.PASSWORD_CHANGED)


@router.get("/admin/users", response_model=dict)
async def list_users(
    filter: Annotated[UserFilter, Query()],
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db)
):
    page = UserService(db).find_all(filter)
    return success_response(page.map(UserResponse.model_validate))


@router.get("/admin/users/email/{email}", response_model=dict)
async def get_user_by_email(
    email: str,
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db)
):
    user = UserService(db).get_user_by_email(email)
    return success_response(UserResponse.model_validate(user))


@router.get("/admin/users/{user_id}", response_model=dict)
async def get_user(
    user_id: int,
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db)
):
    user = UserService(db).get_user_by_id(user_id)
    return success_response(UserResponse.model_validate(user))
