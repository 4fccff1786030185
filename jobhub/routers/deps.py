import logging
from typing import Optional

from fastapi import Depends, Request
from pydantic import ValidationError

from jobhub.core.exceptions import ForbiddenException, UnauthorizedException
from jobhub.core.messages import Message
from jobhub.core.security import verify_token
from jobhub.models.enums import Role
from jobhub.schemas.user import CurrentUser
from jobhub.services.amqp_service import AmqpService
from jobhub.services.mail_service import MailService
from jobhub.services.s3_service import S3Service

logger = logging.getLogger(__name__)


def _get_authorization_header(request: Request) -> Optional[str]:
    return request.headers.get("Authorization")


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Depends(_get_authorization_header),
) -> CurrentUser:
    """Principal decoded from the bearer token.

    The store is not consulted here; services re-read the actor when
    role or company membership matters.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedException(Message.MISSING_TOKEN)

    token = authorization.split(" ", 1)[1].strip()
    payload = verify_token(token)
    if not payload or "sub" not in payload:
        raise UnauthorizedException(Message.INVALID_TOKEN)

    try:
        user = CurrentUser(
            id=int(payload["sub"]),
            email=payload.get("email", ""),
            first_name=payload.get("first_name") or "",
            last_name=payload.get("last_name") or "",
            role=payload.get("role"),
            company_id=payload.get("company_id"),
        )
    except (ValueError, ValidationError):
        logger.warning("Access token carries malformed claims")
        raise UnauthorizedException(Message.INVALID_TOKEN)

    # picked up by the request logging middleware
    request.state.user_id = user.id
    return user


def require_roles(*roles: Role):
    async def _check(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise ForbiddenException()
        return current_user

    return _check


_s3_service: Optional[S3Service] = None


def get_s3_service() -> S3Service:
    global _s3_service
    if _s3_service is None:
        _s3_service = S3Service()
    return _s3_service


def get_amqp_service(request: Request) -> AmqpService:
    return request.app.state.amqp_service


def get_mail_service() -> MailService:
    return MailService()
