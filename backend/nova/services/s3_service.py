"""S3 service for storing proof-of-expense documents"""

import logging
import os
import re
import time
from typing import Optional
import boto3
from botocore.exceptions import ClientError
from botocore.config import Config

from nova.config import settings
from nova.services.exceptions import NovaServiceError, ValidationFailedError

logger = logging.getLogger(__name__)


class S3ServiceError(NovaServiceError):
    """Base exception for S3 service errors"""

    status_code = 502
    title = "Storage Error"


class S3ConnectionError(S3ServiceError):
    """S3 connection error"""
    pass


class InvalidFileTypeError(ValidationFailedError):
    """Invalid file type error"""
    pass


class FileTooLargeError(ValidationFailedError):
    """File too large or empty"""
    pass


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class S3Service:
    """Service for uploading receipts and invoices backing actual costs"""

    ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "application/pdf"}

    def __init__(self):
        """Initialize S3 client with retry configuration"""
        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": settings.aws_region,
            "config": retry_config,
        }

        # Add credentials if provided (not needed for IAM roles)
        if settings.aws_access_key_id and settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

        # Use custom endpoint for local development (MinIO)
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
            logger.info(f"S3 client initialized for bucket: {settings.s3_bucket}")
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise S3ConnectionError(f"Failed to initialize S3 client: {e}")

    def validate_file(self, file_size: int, mime_type: Optional[str]) -> None:
        """
        Validate proof size and MIME type.

        Raises:
            FileTooLargeError: If file is empty or exceeds the configured maximum
            InvalidFileTypeError: If MIME type is not allowed
        """
        if file_size <= 0:
            raise FileTooLargeError("Uploaded file is empty")

        if file_size > settings.proof_max_file_size:
            raise FileTooLargeError(
                f"File size {file_size} bytes exceeds maximum of "
                f"{settings.proof_max_file_size} bytes"
            )

        if mime_type not in self.ALLOWED_MIME_TYPES:
            raise InvalidFileTypeError(
                f"MIME type {mime_type} not allowed. "
                f"Allowed types: {', '.join(sorted(self.ALLOWED_MIME_TYPES))}"
            )

    @staticmethod
    def generate_proof_key(project_id: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
        """
        Generate the key for a proof document:
        receipts/{project_id}/{timestamp_ms}_{filename}
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        base = os.path.basename(filename or "") or "proof"
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", base)
        return f"receipts/{project_id}/{timestamp_ms}_{safe_name}"

    @staticmethod
    def public_url(s3_key: str) -> str:
        """Public URL of an object in the proofs bucket"""
        if settings.aws_endpoint_url:
            # For local development with MinIO
            return f"{settings.aws_endpoint_url}/{settings.s3_bucket}/{s3_key}"
        return f"https://{settings.s3_bucket}.s3.{settings.aws_region}.amazonaws.com/{s3_key}"

    def upload_bytes(
        self, file_bytes: bytes, s3_key: str, content_type: str = "application/octet-stream"
    ) -> str:
        """
        Upload bytes to S3.

        Returns:
            Public URL of uploaded object

        Raises:
            S3ConnectionError: If upload fails
        """
        try:
            self.s3_client.put_object(
                Bucket=settings.s3_bucket,
                Key=s3_key,
                Body=file_bytes,
                ContentType=content_type,
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"Error uploading bytes: {error_code} - {e}")
            raise S3ConnectionError(f"Failed to upload file: {error_code}")
        except Exception as e:
            logger.error(f"Unexpected error uploading bytes: {e}")
            raise S3ConnectionError(f"Failed to upload file: {str(e)}")

        url = self.public_url(s3_key)
        logger.info(f"Uploaded {len(file_bytes)} bytes to {url}")
        return url

    def upload_proof(
        self, project_id: str, filename: str, file_bytes: bytes, content_type: Optional[str]
    ) -> tuple[str, str]:
        """
        Validate and store a proof document for a project.

        Returns:
            (public_url, s3_key)
        """
        self.validate_file(len(file_bytes), content_type)
        s3_key = self.generate_proof_key(project_id, filename)
        url = self.upload_bytes(file_bytes, s3_key, content_type=content_type)
        return url, s3_key

    def check_bucket(self) -> None:
        """Raise ClientError when the proofs bucket is unreachable"""
        self.s3_client.head_bucket(Bucket=settings.s3_bucket)
