from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobhub.core.messages import Message
from jobhub.database.database import get_db
from jobhub.schemas.auth import LoginRequest, RefreshTokenRequest
from jobhub.schemas.common import success_response
from jobhub.schemas.user import RegisterRequest
from jobhub.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=dict)
async def login(
    payload: LoginRequest,
    db: Session = Depends(get_db)
):
    """Exchange email/password for an access and refresh token."""
    auth_service = AuthService(db)
    tokens = auth_service.login(payload.email, payload.password)
    return success_response(tokens, Message.LOGIN_SUCCESSFUL)


@router.post("/register", response_model=dict)
async def register(
    payload: RegisterRequest,
    db: Session = Depends(get_db)
):
    """Self registration; the account always gets the USER role."""
    auth_service = AuthService(db)
    auth_service.register(payload)
    return success_response(message=Message.REGISTER_SUCCESSFUL)


@router.post("/refresh-token", response_model=dict)
async def refresh_token(
    payload: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    auth_service = AuthService(db)
    tokens = auth_service.refresh_access_token(payload.refresh_token)
    return success_response(tokens)
