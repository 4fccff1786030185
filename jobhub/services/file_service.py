import logging
import uuid

from fastapi import UploadFile
from sqlalchemy.orm import Session

from jobhub.core.config import settings
from jobhub.core.exceptions import BadRequestException, NotFoundException
from jobhub.core.messages import Message
from jobhub.models.file import File
from jobhub.schemas.user import CurrentUser
from jobhub.services.s3_service import S3Service

logger = logging.getLogger(__name__)


class FileService:
    def __init__(self, db: Session, s3_service: S3Service):
        self.db = db
        self.s3_service = s3_service

    async def upload(self, file: UploadFile, actor: CurrentUser) -> File:
        """Store the upload in the bucket and record it as owned by ``actor``."""
        content = await file.read()
        if len(content) > settings.max_file_size:
            raise BadRequestException(Message.FILE_TOO_LARGE)

        original_name = file.filename or "file"
        key = f"{uuid.uuid4()}-{original_name}"

        upload_result = await self.s3_service.upload_file(key, content, file.content_type)

        saved = File(
            key=upload_result["key"],
            name=original_name,
            size=upload_result["size"],
            content_type=upload_result["content_type"],
            created_by_id=actor.id,
        )
        self.db.add(saved)
        self.db.commit()
        self.db.refresh(saved)
        logger.info(f"File uploaded: id={saved.id}, size={saved.size}, user={actor.id}")
        return saved

    def find_by_id(self, file_id: str):
        return self.db.query(File).filter(File.id == file_id).first()

    def get_url(self, file_id: str) -> str:
        """Resolve a time-limited retrieval URL for the stored file."""
        file = self.find_by_id(file_id)
        if not file:
            raise NotFoundException(Message.FILE_NOT_FOUND)
        return self.s3_service.get_file_url(file.key)
