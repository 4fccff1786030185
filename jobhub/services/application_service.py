import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobhub.core.constants import QueueName
from jobhub.core.exceptions import (
    BadRequestException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from jobhub.core.messages import Message
from jobhub.core.utils import as_utc, utcnow
from jobhub.models.application import Application
from jobhub.models.enums import ApplicationStatus, Role
from jobhub.models.file import File
from jobhub.models.recruitment import Recruitment
from jobhub.models.user import User
from jobhub.schemas.application import (
    ApplicationCreate,
    ApplicationDetailResponse,
    ApplicationFilter,
    ApplicationUpdate,
)
from jobhub.schemas.common import PageResult
from jobhub.schemas.user import CurrentUser
from jobhub.services.amqp_service import AmqpService
from jobhub.services.file_service import FileService
from jobhub.services.pagination import paginate

logger = logging.getLogger(__name__)

STAFF_ROLES = (Role.COMPANY_ADMIN, Role.COMPANY_HR)


class ApplicationService:
    """Application lifecycle and the rules for who may see or change an application.

    Every privileged operation re-reads the actor from the store instead of
    trusting the role and company carried by the access token.
    """

    def __init__(
        self,
        db: Session,
        file_service: Optional[FileService] = None,
        amqp_service: Optional[AmqpService] = None,
    ):
        self.db = db
        self.file_service = file_service
        self.amqp_service = amqp_service

    # --- helpers ---

    def _get_actor(self, actor_id: int) -> User:
        user = self.db.query(User).filter(User.id == actor_id).first()
        if not user:
            raise UnauthorizedException()
        return user

    def _get_application(self, application_id: int) -> Application:
        application = self.db.query(Application).filter(Application.id == application_id).first()
        if not application:
            raise NotFoundException(Message.APPLICATION_NOT_FOUND(str(application_id)))
        return application

    def _with_cv_url(self, application: Application) -> ApplicationDetailResponse:
        detail = ApplicationDetailResponse.model_validate(application)
        if application.cv_id and self.file_service is not None:
            detail = detail.model_copy(update={"cv_url": self.file_service.get_url(application.cv_id)})
        return detail

    # --- applicant side ---

    def create(self, data: ApplicationCreate, applicant_user_id: int) -> Application:
        user = self.db.query(User).filter(User.id == applicant_user_id).first()
        if not user:
            raise BadRequestException(Message.USER_NOT_FOUND(str(applicant_user_id)))

        if user.role != Role.USER:
            raise ForbiddenException(Message.USER_NOT_ALLOWED_TO_APPLY)

        recruitment = self.db.query(Recruitment).filter(Recruitment.id == data.recruitment_id).first()
        if not recruitment:
            raise BadRequestException(Message.RECRUITMENT_NOT_FOUND)

        # exactly at the deadline is still accepted
        if as_utc(recruitment.deadline) < utcnow():
            raise BadRequestException(Message.RECRUITMENT_DEADLINE_PASSED)

        cv = self.db.query(File).filter(File.id == data.cv_id).first()
        if not cv:
            raise BadRequestException(Message.CV_NOT_FOUND(data.cv_id))

        existing = (
            self.db.query(Application)
            .filter(Application.recruitment_id == recruitment.id, Application.user_id == user.id)
            .first()
        )
        if existing:
            raise BadRequestException(Message.USER_ALREADY_APPLIED(user.full_name))

        application = Application(
            message=data.message,
            status=ApplicationStatus.PENDING,
            cv_id=cv.id,
            recruitment_id=recruitment.id,
            user_id=user.id,
        )
        self.db.add(application)
        try:
            self.db.commit()
        except IntegrityError:
            # a concurrent request for the same pair won the race
            self.db.rollback()
            raise BadRequestException(Message.USER_ALREADY_APPLIED(user.full_name))
        self.db.refresh(application)
        logger.info(f"Application created: id={application.id}, recruitment={recruitment.id}, user={user.id}")
        return application

    def find_by_recruitment_and_user(self, recruitment_id: int, user: CurrentUser) -> ApplicationDetailResponse:
        application = (
            self.db.query(Application)
            .filter(Application.recruitment_id == recruitment_id, Application.user_id == user.id)
            .first()
        )
        if not application:
            raise NotFoundException(Message.USER_NOT_APPLIED(user.full_name))

        if application.user_id != user.id:
            raise ForbiddenException()

        return self._with_cv_url(application)

    # --- company staff side ---

    def find_by_recruitment(self, recruitment_id: int, actor: CurrentUser) -> List[Application]:
        user = self._get_actor(actor.id)
        if not user.company_id:
            raise ForbiddenException()

        recruitment = self.db.query(Recruitment).filter(Recruitment.id == recruitment_id).first()
        if not recruitment:
            raise NotFoundException(Message.RECRUITMENT_NOT_FOUND)

        if recruitment.company_id != user.company_id:
            raise ForbiddenException(Message.RECRUITMENT_COMPANY_FORBIDDEN)

        return (
            self.db.query(Application)
            .filter(Application.recruitment_id == recruitment_id)
            .order_by(Application.id.asc())
            .all()
        )

    def get_application_detail(self, application_id: int, actor: CurrentUser) -> ApplicationDetailResponse:
        user = self._get_actor(actor.id)
        if not user.company_id:
            raise ForbiddenException()

        application = self._get_application(application_id)
        if application.recruitment.company_id != user.company_id:
            raise ForbiddenException(Message.APPLICATION_NOT_BELONG_TO_USER)

        return self._with_cv_url(application)

    def update_application_status(self, application_id: int, actor: CurrentUser, is_approved: bool) -> Application:
        user = self._get_actor(actor.id)
        if not user.company_id:
            raise ForbiddenException(Message.APPLICATION_NOT_BELONG_TO_USER)

        if user.role not in STAFF_ROLES:
            raise ForbiddenException()

        application = self._get_application(application_id)
        if application.recruitment.company_id != user.company_id:
            raise ForbiddenException(Message.APPLICATION_NOT_BELONG_TO_USER)

        # re-approving or re-rejecting is accepted as is
        application.status = ApplicationStatus.APPROVED if is_approved else ApplicationStatus.REJECTED
        self.db.commit()
        self.db.refresh(application)
        logger.info(f"Application {application.id} set to {application.status.value} by user {user.id}")

        self._notify_status(application)
        return application

    def _notify_status(self, application: Application) -> None:
        if self.amqp_service is None:
            logger.warning("AMQP service not configured, status event dropped")
            return
        payload = ApplicationDetailResponse.model_validate(application).model_dump(mode="json", by_alias=True)
        self.amqp_service.emit_message(QueueName.NOTIFICATION_SERVICE_QUEUE, application.status.value, payload)

    # --- unguarded paths ---

    def update_application(self, application_id: int, data: ApplicationUpdate) -> Application:
        """Content edit: message, status and CV are overwritten without ownership checks."""
        application = self._get_application(application_id)

        application.message = data.message
        if data.status is not None:
            application.status = data.status
        application.cv_id = data.cv_id
        self.db.commit()
        self.db.refresh(application)
        return application

    def find_all(self, filter: ApplicationFilter) -> PageResult:
        query = self.db.query(Application)
        if filter.user_id is not None:
            query = query.filter(Application.user_id == filter.user_id)
        if filter.recruitment_id is not None:
            query = query.filter(Application.recruitment_id == filter.recruitment_id)
        if filter.status is not None:
            query = query.filter(Application.status == filter.status)
        return paginate(query, Application, filter)
