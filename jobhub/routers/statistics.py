from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobhub.database.database import get_db
from jobhub.models.enums import Role
from jobhub.routers.deps import require_roles
from jobhub.schemas.common import success_response
from jobhub.schemas.user import CurrentUser
from jobhub.services.statistic_service import StatisticService

router = APIRouter(prefix="/admin/statistics")


@router.get("", response_model=dict)
async def admin_statistics(
    current_user: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: Session = Depends(get_db)
):
    return success_response(StatisticService(db).get_admin_statistics())


@router.get("/company", response_model=dict)
async def company_statistics(
    current_user: CurrentUser = Depends(require_roles(Role.COMPANY_ADMIN, Role.COMPANY_HR)),
    db: Session = Depends(get_db)
):
    return success_response(StatisticService(db).get_company_statistics(current_user))
