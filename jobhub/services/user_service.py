import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobhub.core.exceptions import BadRequestException, NotFoundException, UnauthorizedException
from jobhub.core.messages import Message
from jobhub.core.security import get_password_hash, verify_password
from jobhub.models.enums import Role
from jobhub.models.user import User
from jobhub.schemas.common import PageResult
from jobhub.schemas.user import ChangePasswordRequest, CurrentUser, RegisterRequest, UserFilter
from jobhub.services.pagination import paginate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_id(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if not user:
            raise NotFoundException(Message.USER_NOT_FOUND(str(user_id)))
        return user

    def get_user_by_email(self, email: str) -> User:
        user = self.find_by_email(email)
        if not user:
            raise NotFoundException(Message.USER_NOT_FOUND(email))
        return user

    def find_all(self, filter: UserFilter) -> PageResult:
        query = self.db.query(User)
        if filter.name:
            pattern = f"%{filter.name}%"
            query = query.filter(or_(User.first_name.ilike(pattern), User.last_name.ilike(pattern)))
        if filter.email:
            query = query.filter(User.email.ilike(f"%{filter.email}%"))
        return paginate(query, User, filter)

    def _build_user(self, data: RegisterRequest, role: Role, company_id: Optional[int] = None) -> User:
        if self.find_by_email(data.email):
            raise BadRequestException(Message.USER_ALREADY_EXISTS(data.email))
        return User(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            display_name=getattr(data, "display_name", None) or f"{data.first_name} {data.last_name}",
            password=get_password_hash(data.password),
            role=role,
            company_id=company_id,
        )

    def create_user(self, data: RegisterRequest) -> User:
        """Self registration; the role is always USER."""
        user = self._build_user(data, Role.USER)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Registered user id={user.id}")
        return user

    def create_company_admin_account(self, data: RegisterRequest) -> User:
        """Add a COMPANY_ADMIN to the session without committing.

        The caller owns the transaction and links the company.
        """
        user = self._build_user(data, Role.COMPANY_ADMIN)
        self.db.add(user)
        self.db.flush()
        return user

    def create_company_hr_account(self, data: RegisterRequest, company_id: int) -> User:
        user = self._build_user(data, Role.COMPANY_HR, company_id)
        self.db.add(user)
        self.db.flush()
        return user

    def change_password(self, data: ChangePasswordRequest, actor: CurrentUser) -> None:
        user = self.find_by_id(actor.id)
        if not user:
            raise UnauthorizedException()

        if not verify_password(data.current_password, user.password):
            raise BadRequestException(Message.WRONG_CURRENT_PASSWORD)

        user.password = get_password_hash(data.new_password)
        self.db.commit()
        logger.info(f"Password changed for user id={user.id}")
