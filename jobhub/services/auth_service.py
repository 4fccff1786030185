from datetime import timedelta
import logging

from sqlalchemy.orm import Session

from jobhub.core.config import settings
from jobhub.core.exceptions import BadRequestException
from jobhub.core.messages import Message
from jobhub.core.security import create_access_token, generate_refresh_token, verify_password
from jobhub.core.utils import as_utc, utcnow
from jobhub.models.token import Token
from jobhub.models.user import User
from jobhub.schemas.auth import TokenResponse
from jobhub.schemas.user import RegisterRequest, UserResponse
from jobhub.services.user_service import UserService

logger = logging.getLogger(__name__)


def build_token_claims(user: User) -> dict:
    """Claims embedded in the access token; ``sub`` is the user id."""
    return {
        "sub": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role.value,
        "company_id": user.company_id,
    }


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)

    def authenticate_user(self, email: str, password: str) -> User:
        user = self.user_service.find_by_email(email)
        if not user or not verify_password(password, user.password):
            raise BadRequestException(Message.WRONG_EMAIL_OR_PASSWORD)
        return user

    def login(self, email: str, password: str) -> TokenResponse:
        user = self.authenticate_user(email, password)
        access_token = create_access_token(build_token_claims(user))
        token = self._save_token(user, access_token)
        logger.info(f"User id={user.id} logged in")
        return TokenResponse(
            access_token=access_token,
            refresh_token=token.refresh_token,
            user=UserResponse.model_validate(user),
        )

    def register(self, data: RegisterRequest) -> None:
        self.user_service.create_user(data)

    def refresh_access_token(self, refresh_token: str) -> TokenResponse:
        token = self.db.query(Token).filter(Token.refresh_token == refresh_token).first()
        if not token or as_utc(token.expires_at) <= utcnow():
            raise BadRequestException(Message.INVALID_REFRESH_TOKEN)

        # claims come from the current user row, not from the old access token
        user = token.user
        access_token = create_access_token(build_token_claims(user))
        self._save_token(user, access_token, token)
        return TokenResponse(
            access_token=access_token,
            refresh_token=token.refresh_token,
            user=UserResponse.model_validate(user),
        )

    def _save_token(self, user: User, access_token: str, existing: Token = None) -> Token:
        """Keep a single token row per user, reusing it on refresh."""
        token = existing or self.db.query(Token).filter(Token.user_id == user.id).first()
        if token and existing is None:
            # fresh login: rotate the refresh token as well
            token.refresh_token = generate_refresh_token()
            token.expires_at = utcnow() + timedelta(days=settings.refresh_token_expire_days)
        if token:
            token.access_token = access_token
        else:
            token = Token(
                access_token=access_token,
                refresh_token=generate_refresh_token(),
                expires_at=utcnow() + timedelta(days=settings.refresh_token_expire_days),
                user_id=user.id,
            )
            self.db.add(token)
        self.db.commit()
        self.db.refresh(token)
        return token
