import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.orm import Session

from jobhub.core.config import settings
from jobhub.core.messages import Message
from jobhub.database.database import get_db
from jobhub.models.application import Application
from jobhub.models.enums import ApplicationStatus, Role
from jobhub.routers.deps import (
    get_amqp_service,
    get_current_user,
    get_mail_service,
    get_s3_service,
    require_roles,
)
from jobhub.schemas.application import (
    ApplicationCreate,
    ApplicationFilter,
    ApplicationResponse,
    ApplicationStatusUpdate,
    ApplicationUpdate,
    ApplicationWithUserResponse,
)
from jobhub.schemas.common import success_response
from jobhub.schemas.user import CurrentUser
from jobhub.services.amqp_service import AmqpService
from jobhub.services.application_service import ApplicationService
from jobhub.services.file_service import FileService
from jobhub.services.mail_service import MailService
from jobhub.services.s3_service import S3Service
from jobhub.templates.mail import approve_template, rejected_template

logger = logging.getLogger(__name__)

router = APIRouter()

staff_only = require_roles(Role.COMPANY_ADMIN, Role.COMPANY_HR)


def _status_mail(application: Application):
    """Recipient, subject and body for the applicant's status mail."""
    recruitment = application.recruitment
    company_name = recruitment.company.name if recruitment.company else ""
    if application.status == ApplicationStatus.APPROVED:
        subject = Message.APPLICATION_APPROVED_SUBJECT(recruitment.title)
        body = approve_template(application.user.full_name, recruitment.title, company_name)
    else:
        subject = Message.APPLICATION_REJECTED_SUBJECT(recruitment.title)
        body = rejected_template(application.user.full_name, recruitment.title, company_name)
    return application.user.email, subject, body


# --- applicant side ---

@router.post("/applications", response_model=dict)
async def create_application(
    payload: ApplicationCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    application = ApplicationService(db).create(payload, current_user.id)
    return success_response(ApplicationResponse.model_validate(application), Message.CREATE_APPLICATION_SUCCESSFULLY)


@router.put("/applications/{application_id}", response_model=dict)
async def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    application = ApplicationService(db).update_application(application_id, payload)
    return success_response(ApplicationResponse.model_validate(application), Message.UPDATE_APPLICATION_SUCCESSFULLY)


@router.get("/applications", response_model=dict)
async def list_applications(
    filter: Annotated[ApplicationFilter, Query()],
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    page = ApplicationService(db).find_all(filter)
    return success_response(page.map(ApplicationResponse.model_validate))


@router.get("/applications/recruitment/{recruitment_id}", response_model=dict)
async def get_my_application(
    recruitment_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    s3_service: S3Service = Depends(get_s3_service)
):
    service = ApplicationService(db, FileService(db, s3_service))
    return success_response(service.find_by_recruitment_and_user(recruitment_id, current_user))


# --- company staff side ---

@router.get("/admin/recruitments/{recruitment_id}/applications", response_model=dict)
async def list_recruitment_applications(
    recruitment_id: int,
    current_user: CurrentUser = Depends(staff_only),
    db: Session = Depends(get_db)
):
    applications = ApplicationService(db).find_by_recruitment(recruitment_id, current_user)
    return success_response([ApplicationWithUserResponse.model_validate(a) for a in applications])


@router.get("/admin/applications/{application_id}", response_model=dict)
async def get_application_detail(
    application_id: int,
    current_user: CurrentUser = Depends(staff_only),
    db: Session = Depends(get_db),
    s3_service: S3Service = Depends(get_s3_service)
):
    service = ApplicationService(db, FileService(db, s3_service))
    return success_response(service.get_application_detail(application_id, current_user))


@router.put("/admin/applications/{application_id}/status", response_model=dict)
async def update_application_status(
    application_id: int,
    payload: ApplicationStatusUpdate,
    background_tasks: BackgroundTasks,
    current_user: CurrentUser = Depends(staff_only),
    db: Session = Depends(get_db),
    amqp_service: AmqpService = Depends(get_amqp_service),
    mail_service: MailService = Depends(get_mail_service)
):
    service = ApplicationService(db, amqp_service=amqp_service)
    application = service.update_application_status(application_id, current_user, payload.is_approved)

    if settings.send_status_mail:
        # rendered now, the session is closed before background tasks run
        to, subject, body = _status_mail(application)
        background_tasks.add_task(mail_service.send_mail, to, subject, body)
        logger.info(f"Status mail scheduled for application {application.id}")

    return success_response(ApplicationResponse.model_validate(application))
