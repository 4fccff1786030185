from typing import Annotated, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobhub.core.messages import Message
from jobhub.database.database import get_db
from jobhub.models.enums import Role
from jobhub.routers.deps import get_current_user, require_roles
from jobhub.schemas.common import success_response
from jobhub.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyFilter,
    CompanyResponse,
    CompanyUpdate,
)
from jobhub.schemas.user import CreateCompanyHRRequest, CurrentUser, UserResponse
from jobhub.services.company_service import CompanyService

router = APIRouter()

admin_only = require_roles(Role.ADMIN)
company_admin_only = require_roles(Role.COMPANY_ADMIN)


# --- browsing ---

@router.get("/companies", response_model=dict)
async def list_companies(
    filter: Annotated[CompanyFilter, Query()],
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    page = CompanyService(db).find_all(filter)
    return success_response(page.map(CompanyResponse.model_validate))


@router.get("/companies/{company_id}", response_model=dict)
async def get_company(
    company_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    company = CompanyService(db).find_by_id(company_id)
    return success_response(CompanyDetailResponse.model_validate(company))


# --- HR accounts of the caller's company ---

@router.post("/admin/companies/my-company/hr", response_model=dict)
async def create_company_hr(
    payload: List[CreateCompanyHRRequest],
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db)
):
    accounts = CompanyService(db).create_company_hr(payload, current_user)
    return success_response([UserResponse.model_validate(a) for a in accounts])


@router.get("/admin/companies/my-company/hr", response_model=dict)
async def list_company_hr(
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db)
):
    accounts = CompanyService(db).get_company_hr_list(current_user)
    return success_response([UserResponse.model_validate(a) for a in accounts])


@router.delete("/admin/companies/my-company/hr/{hr_id}", response_model=dict)
async def delete_company_hr(
    hr_id: int,
    current_user: CurrentUser = Depends(company_admin_only),
    db: Session = Depends(get_db)
):
    CompanyService(db).delete_company_hr(hr_id, current_user)
    return success_response(message=Message.COMPANY_HR_DELETED)


# --- platform administration ---

@router.get("/admin/companies", response_model=dict)
async def admin_list_companies(
    filter: Annotated[CompanyFilter, Query()],
    current_user: CurrentUser = Depends(admin_only),
    db: Session = Depends(get_db)
):
    page = CompanyService(db).find_all(filter)
    return success_response(page.map(CompanyResponse.model_validate))


@router.get("/admin/companies/code/{code}", response_model=dict)
async def admin_get_company_by_code(
    code: str,
    current_user: CurrentUser = Depends(admin_only),
    db: Session = Depends(get_db)
):
    company = CompanyService(db).find_by_code(code)
    return success_response(CompanyResponse.model_validate(company))


@router.get("/admin/companies/{company_id}", response_model=dict)
async def admin_get_company(
    company_id: int,
    current_user: CurrentUser = Depends(admin_only),
    db: Session = Depends(get_db)
):
    company = CompanyService(db).find_by_id(company_id)
    return success_response(CompanyDetailResponse.model_validate(company))


@router.post("/admin/companies", response_model=dict)
async def admin_create_company(
    payload: CompanyCreate,
    current_user: CurrentUser = Depends(admin_only),
    db: Session = Depends(get_db)
):
    company = CompanyService(db).create_company(payload)
    return success_response(CompanyResponse.model_validate(company), Message.COMPANY_CREATED)


@router.put("/admin/companies/{company_id}", response_model=dict)
async def admin_update_company(
    company_id: int,
    payload: CompanyUpdate,
    current_user: CurrentUser = Depends(admin_only),
    db: Session = Depends(get_db)
):
    company = CompanyService(db).update_company(company_id, payload)
    return success_response(CompanyResponse.model_validate(company), Message.COMPANY_UPDATED)


@router.delete("/admin/companies/{company_id}", response_model=dict)
async def admin_delete_company(
    company_id: int,
    current_user: CurrentUser = Depends(admin_only),
    db: Session = Depends(get_db)
):
    CompanyService(db).delete_company(company_id)
    return success_response(message=Message.COMPANY_DELETED)
