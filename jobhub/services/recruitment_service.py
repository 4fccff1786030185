import logging
from typing import Optional

from sqlalchemy.orm import Session

from jobhub.core.constants import QueueName, SuggestServiceMessageType
from jobhub.core.exceptions import ForbiddenException, NotFoundException, UnauthorizedException
from jobhub.core.messages import Message
from jobhub.core.utils import utcnow
from jobhub.models.company import Company
from jobhub.models.enums import Role
from jobhub.models.recruitment import Recruitment
from jobhub.models.user import User
from jobhub.schemas.common import PageResult
from jobhub.schemas.recruitment import RecruitmentCreate, RecruitmentFilter, RecruitmentResponse, RecruitmentUpdate
from jobhub.schemas.user import CurrentUser
from jobhub.services.amqp_service import AmqpService
from jobhub.services.pagination import paginate

logger = logging.getLogger(__name__)


class RecruitmentService:
    def __init__(self, db: Session, amqp_service: Optional[AmqpService] = None):
        self.db = db
        self.amqp_service = amqp_service

    def _emit(self, pattern: str, data) -> None:
        if self.amqp_service is None:
            logger.warning(f"AMQP service not configured, dropping '{pattern}'")
            return
        self.amqp_service.emit_message(QueueName.SUGGEST_SERVICE_QUEUE, pattern, data)

    @staticmethod
    def _payload(recruitment: Recruitment) -> dict:
        return RecruitmentResponse.model_validate(recruitment).model_dump(mode="json", by_alias=True)

    def _get_actor(self, actor: CurrentUser) -> User:
        user = self.db.query(User).filter(User.id == actor.id).first()
        if not user:
            raise UnauthorizedException()
        return user

    def find_by_id(self, recruitment_id: int) -> Recruitment:
        recruitment = self.db.query(Recruitment).filter(Recruitment.id == recruitment_id).first()
        if not recruitment:
            raise NotFoundException(Message.RECRUITMENT_NOT_FOUND)
        return recruitment

    def find_owned(self, recruitment_id: int, actor: CurrentUser) -> Recruitment:
        """Recruitment detail for company staff; other companies get 403."""
        user = self._get_actor(actor)
        recruitment = self.find_by_id(recruitment_id)
        if not user.company_id or recruitment.company_id != user.company_id:
            raise ForbiddenException(Message.RECRUITMENT_COMPANY_FORBIDDEN)
        return recruitment

    def find_all(self, filter: RecruitmentFilter, actor: CurrentUser) -> PageResult:
        query = self.db.query(Recruitment)
        if filter.title:
            query = query.filter(Recruitment.title.contains(filter.title))
        if filter.company_id is not None:
            query = query.filter(Recruitment.company_id == filter.company_id)
        if filter.job_type is not None:
            query = query.filter(Recruitment.job_type == filter.job_type)
        if filter.min_salary is not None:
            query = query.filter(Recruitment.min_salary >= filter.min_salary)
        if filter.max_salary is not None:
            query = query.filter(Recruitment.max_salary <= filter.max_salary)
        if filter.experience is not None:
            query = query.filter(Recruitment.experience <= filter.experience)
        # applicants only browse open recruitments
        if actor.role == Role.USER:
            query = query.filter(Recruitment.deadline >= utcnow())
        return paginate(query, Recruitment, filter)

    def find_all_for_company(self, filter: RecruitmentFilter, actor: CurrentUser) -> PageResult:
        user = self._get_actor(actor)
        if not user.company_id:
            raise ForbiddenException()
        scoped = filter.model_copy(update={"company_id": user.company_id})
        return self.find_all(scoped, actor)

    def create_recruitment(self, data: RecruitmentCreate, actor: CurrentUser) -> Recruitment:
        user = self._get_actor(actor)
        company = None
        if user.company_id:
            company = self.db.query(Company).filter(Company.id == user.company_id).first()
        if not company:
            raise NotFoundException(Message.COMPANY_NOT_FOUND)

        recruitment = Recruitment(company_id=company.id, **data.model_dump())
        self.db.add(recruitment)
        self.db.commit()
        self.db.refresh(recruitment)
        logger.info(f"Recruitment created: id={recruitment.id}, company={company.id}")

        self._emit(SuggestServiceMessageType.CREATE_RECRUITMENT, self._payload(recruitment))
        return recruitment

    def update_recruitment(self, recruitment_id: int, data: RecruitmentUpdate, actor: CurrentUser) -> Recruitment:
        user = self._get_actor(actor)
        if not user.company_id:
            raise ForbiddenException(Message.RECRUITMENT_COMPANY_FORBIDDEN)

        recruitment = self.find_by_id(recruitment_id)
        if recruitment.company_id != user.company_id:
            raise ForbiddenException(Message.RECRUITMENT_COMPANY_FORBIDDEN)

        for field, value in data.model_dump().items():
            setattr(recruitment, field, value)
        self.db.commit()
        self.db.refresh(recruitment)
        logger.info(f"Recruitment updated: id={recruitment.id}")

        self._emit(SuggestServiceMessageType.UPDATE_RECRUITMENT, self._payload(recruitment))
        return recruitment

    def delete_recruitment(self, recruitment_id: int, actor: CurrentUser) -> None:
        user = self._get_actor(actor)
        recruitment = self.find_by_id(recruitment_id)
        if not user.company_id or recruitment.company_id != user.company_id:
            raise ForbiddenException(Message.RECRUITMENT_COMPANY_FORBIDDEN)

        self.db.delete(recruitment)
        self.db.commit()
        logger.info(f"Recruitment deleted: id={recruitment_id}")

        self._emit(SuggestServiceMessageType.DELETE_RECRUITMENT, {"id": recruitment_id})
