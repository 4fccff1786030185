import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from jobhub.core.config import settings

logger = logging.getLogger(__name__)


class S3Service:
    """Thin wrapper around the boto3 S3 client for the files bucket."""

    def __init__(self, client=None, bucket_name: Optional[str] = None):
        self.bucket_name = bucket_name or settings.aws_bucket_name
        self.expires_in = settings.presigned_url_expires_seconds
        self.client = client or boto3.client(
            "s3",
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
        logger.info(f"S3 service initialised - bucket: {self.bucket_name}, region: {settings.aws_region}")

    async def upload_file(self, key: str, content: bytes, content_type: Optional[str]) -> dict:
        """
        Store ``content`` under ``key``.

        Args:
            key: object key in the bucket
            content: raw bytes
            content_type: MIME type sent as ContentType

        Returns:
            dict: key, size and content type of the stored object
        """
        def put_sync():
            # boto3 client is synchronous, so run it in the threadpool
            return self.client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )

        try:
            await run_in_threadpool(put_sync)
        except (BotoCoreError, ClientError):
            logger.exception(f"S3 upload failed: {key}")
            raise

        return {"key": key, "size": len(content), "content_type": content_type}

    def get_file_url(self, key: str) -> str:
        """Signed GET URL valid for ``presigned_url_expires_seconds``."""
        return self.client.generate_presigned_url(
            "get_object",
            Params={"Bucket": self.bucket_name, "Key": key},
            ExpiresIn=self.expires_in,
        )
