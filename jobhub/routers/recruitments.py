from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobhub.core.messages import Message
from jobhub.database.database import get_db
from jobhub.models.enums import Role
from jobhub.routers.deps import get_amqp_service, get_current_user, require_roles
from jobhub.schemas.common import success_response
from jobhub.schemas.recruitment import (
    RecruitmentCreate,
    RecruitmentFilter,
    RecruitmentResponse,
    RecruitmentUpdate,
    RecruitmentWithCompanyResponse,
)
from jobhub.schemas.user import CurrentUser
from jobhub.services.amqp_service import AmqpService
from jobhub.services.recruitment_service import RecruitmentService

router = APIRouter()

company_admin_only = require_roles(Role.COMPANY_ADMIN)


@router.get("/recruitments", response_model=dict)
async def list_recruitments(
    filter: Annotated[RecruitmentFilter, Query()],
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    page = RecruitmentService(db).find_all(filter, current_user)
    return success_response(page.map(RecruitmentWithCompanyResponse.model_validate))


@router.get("/recruitments/{recruitment_id}", response_model=dict)
async def get_recruitment(
    recruitment_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    recruitment = RecruitmentService(db).find_by_id(recruitment_id)
    return success_response(RecruitmentWithCompanyResponse.model_validate(recruitment))


@router.get("/admin/recruitments/all", response_model=dict)
async def admin_list_all_recruitments(
    filter: Annotated[RecruitmentFilter, Query()],
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db)
):
    page = RecruitmentService(db).find_all(filter, current_user)
    return success_response(page.map(RecruitmentWithCompanyResponse.model_validate))


@router.get("/admin/recruitments", response_model=dict)
async def list_company_recruitments(
    filter: Annotated[RecruitmentFilter, Query()],
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db)
):
    page = RecruitmentService(db).find_all_for_company(filter, current_user)
    return success_response(page.map(RecruitmentResponse.model_validate))


@router.post("/admin/recruitments", response_model=dict)
async def create_recruitment(
    payload: RecruitmentCreate,
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db),
    amqp_service: AmqpService = Depends(get_amqp_service)
):
    recruitment = RecruitmentService(db, amqp_service).create_recruitment(payload, current_user)
    return success_response(RecruitmentResponse.model_validate(recruitment), Message.RECRUITMENT_CREATED)


@router.get("/admin/recruitments/{recruitment_id}", response_model=dict)
async def get_company_recruitment(
    recruitment_id: int,
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db)
):
    recruitment = RecruitmentService(db).find_owned(recruitment_id, current_user)
    return success_response(RecruitmentWithCompanyResponse.model_validate(recruitment))


@router.put("/admin/recruitments/{recruitment_id}", response_model=dict)
async def update_recruitment(
    recruitment_id: int,
    payload: RecruitmentUpdate,
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db),
    amqp_service: AmqpService = Depends(get_amqp_service)
):
    recruitment = RecruitmentService(db, amqp_service).update_recruitment(recruitment_id, payload, current_user)
    return success_response(RecruitmentResponse.model_validate(recruitment), Message.RECRUITMENT_UPDATED)


@router.delete("/admin/recruitments/{recruitment_id}", response_model=dict)
async def delete_recruitment(
    recruitment_id: int,
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db),
    amqp_service: AmqpService = Depends(get_amqp_service)
):
    RecruitmentService(db, amqp_service).delete_recruitment(recruitment_id, current_user)
    return success_response(message=Message.RECRUITMENT_DELETED)
