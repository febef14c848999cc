"""Unit tests for S3 service"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from nova.services.s3_service import (
    S3Service,
    S3ConnectionError,
    InvalidFileTypeError,
    FileTooLargeError,
)


@pytest.fixture
def mock_s3_client():
    """Mock S3 client"""
    with patch("boto3.client") as mock_client:
        mock_instance = Mock()
        mock_client.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def mock_settings():
    with patch("nova.services.s3_service.settings") as mock_settings:
        mock_settings.aws_region = "us-east-1"
        mock_settings.s3_bucket = "test-bucket"
        mock_settings.aws_access_key_id = None
        mock_settings.aws_secret_access_key = None
        mock_settings.aws_endpoint_url = None
        mock_settings.proof_max_file_size = 10 * 1024 * 1024
        yield mock_settings


@pytest.fixture
def s3_service(mock_s3_client, mock_settings):
    """S3 service instance with mocked client"""
    return S3Service()


class TestS3ServiceValidation:
    """Test file validation"""

    def test_validate_file_success(self, s3_service):
        # Should not raise exception
        s3_service.validate_file(1024 * 100, "image/jpeg")
        s3_service.validate_file(1024 * 100, "image/png")
        s3_service.validate_file(1024 * 100, "application/pdf")

    def test_validate_file_too_large(self, s3_service):
        with pytest.raises(FileTooLargeError, match="exceeds maximum"):
            s3_service.validate_file(11 * 1024 * 1024, "application/pdf")

    def test_validate_empty_file(self, s3_service):
        with pytest.raises(FileTooLargeError, match="empty"):
            s3_service.validate_file(0, "image/jpeg")

    def test_validate_file_invalid_mime_type(self, s3_service):
        with pytest.raises(InvalidFileTypeError, match="not allowed"):
            s3_service.validate_file(1024 * 100, "image/gif")

        with pytest.raises(InvalidFileTypeError, match="not allowed"):
            s3_service.validate_file(1024 * 100, None)


class TestProofKeyGeneration:
    """Test S3 key generation"""

    def test_generate_proof_key(self):
        project_id = "550e8400-e29b-41d4-a716-446655440000"

        key = S3Service.generate_proof_key(project_id, "receipt.pdf", timestamp_ms=1700000000000)

        assert key == f"receipts/{project_id}/1700000000000_receipt.pdf"

    def test_unsafe_filename_sanitized(self):
        key = S3Service.generate_proof_key("p1", "../lens rental (final).pdf", timestamp_ms=1)

        assert key == "receipts/p1/1_lens_rental_final_.pdf"

    def test_missing_filename(self):
        key = S3Service.generate_proof_key("p1", None, timestamp_ms=1)

        assert key == "receipts/p1/1_proof"


class TestS3Upload:
    """Test uploads"""

    def test_upload_proof_success(self, s3_service, mock_s3_client):
        data = b"%PDF-1.4 receipt"

        url, key = s3_service.upload_proof("p1", "receipt.pdf", data, "application/pdf")

        assert key.startswith("receipts/p1/")
        assert key.endswith("_receipt.pdf")
        assert url == f"https://test-bucket.s3.us-east-1.amazonaws.com/{key}"
        mock_s3_client.put_object.assert_called_once_with(
            Bucket="test-bucket",
            Key=key,
            Body=data,
            ContentType="application/pdf",
        )

    def test_upload_proof_rejects_before_upload(self, s3_service, mock_s3_client):
        with pytest.raises(InvalidFileTypeError):
            s3_service.upload_proof("p1", "receipt.gif", b"GIF89a", "image/gif")

        mock_s3_client.put_object.assert_not_called()

    def test_upload_client_error(self, s3_service, mock_s3_client):
        mock_s3_client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            "PutObject",
        )

        with pytest.raises(S3ConnectionError, match="AccessDenied"):
            s3_service.upload_bytes(b"data", "receipts/p1/1_a.pdf", "application/pdf")

    def test_local_endpoint_url(self, s3_service, mock_settings):
        mock_settings.aws_endpoint_url = "http://localhost:9000"

        assert S3Service.public_url("receipts/p1/1_a.pdf") == (
            "http://localhost:9000/test-bucket/receipts/p1/1_a.pdf"
        )


class TestS3ServiceInitialization:
    """Test S3 service initialization"""

    def test_init_with_credentials(self, mock_settings):
        mock_settings.aws_access_key_id = "test-key"
        mock_settings.aws_secret_access_key = "test-secret"

        with patch("boto3.client") as mock_client:
            S3Service()

        call_kwargs = mock_client.call_args[1]
        assert call_kwargs["aws_access_key_id"] == "test-key"
        assert call_kwargs["aws_secret_access_key"] == "test-secret"
        assert call_kwargs["region_name"] == "us-east-1"

    def test_init_failure(self, mock_settings):
        with patch("boto3.client", side_effect=Exception("no credentials")):
            with pytest.raises(S3ConnectionError, match="Failed to initialize"):
                S3Service()
