from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from jobhub.database.database import get_db
from jobhub.routers.deps import get_current_user, get_s3_service
from jobhub.schemas.common import success_response
from jobhub.schemas.file import FileResponse
from jobhub.schemas.user import CurrentUser
from jobhub.services.file_service import FileService
from jobhub.services.s3_service import S3Service

router = APIRouter(prefix="/files")


@router.post("", response_model=dict)
async def upload_file(
    file: UploadFile = File(...),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    s3_service: S3Service = Depends(get_s3_service)
):
    """Upload a file (CV, logo, avatar) and return its id."""
    saved = await FileService(db, s3_service).upload(file, current_user)
    return success_response(FileResponse.model_validate(saved))


@router.get("/{file_id}", response_model=dict)
async def get_file_url(
    file_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    s3_service: S3Service = Depends(get_s3_service)
):
    url = FileService(db, s3_service).get_url(file_id)
    return success_response({"id": file_id, "url": url})
