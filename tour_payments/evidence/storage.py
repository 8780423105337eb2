from __future__ import annotations

import re
import uuid
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from tour_payments.core.config import Config
from tour_payments.core.exceptions import ExternalServiceError, ValidationException
from tour_payments.core.messages import ErrorMessage
from tour_payments.core.middlewares import logger


_UNSAFE_FILE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _build_s3_client():
    client_kwargs: dict[str, str] = {}
    if Config.AWS_REGION:
        client_kwargs["region_name"] = Config.AWS_REGION
    if Config.AWS_ACCESS_KEY and Config.AWS_SECRET_KEY:
        client_kwargs["aws_access_key_id"] = Config.AWS_ACCESS_KEY
        client_kwargs["aws_secret_access_key"] = Config.AWS_SECRET_KEY
    return boto3.client("s3", **client_kwargs)


def extract_bucket_key_from_url(url: str) -> tuple[str, str]:
    parsed = urlparse(url)
    host_parts = parsed.netloc.split(".")
    path = parsed.path.lstrip("/")

    # Virtual-hosted-style: https://bucket.s3.amazonaws.com/key
    if len(host_parts) >= 3 and host_parts[1] == "s3":
        bucket = host_parts[0]
        if bucket and path:
            return bucket, path

    # Path-style: https://s3.amazonaws.com/bucket/key or regional variant
    if host_parts and host_parts[0] == "s3":
        path_parts = path.split("/", 1)
        if len(path_parts) == 2 and path_parts[0] and path_parts[1]:
            return path_parts[0], path_parts[1]

    raise ValueError("Unsupported S3 URL format")


def build_screenshot_key(booking_document_id: uuid.UUID, file_name: str) -> str:
    base_name = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    safe_name = _UNSAFE_FILE_CHARS.sub("_", base_name).strip("._") or "screenshot"
    prefix = Config.EVIDENCE_UPLOAD_PREFIX.strip("/")
    return f"{prefix}/{booking_document_id}/{uuid.uuid4().hex[:12]}-{safe_name}"


def create_screenshot_upload(
    booking_document_id: uuid.UUID, file_name: str, content_type: str
) -> tuple[str, str]:
    """Presigned PUT URL for a transfer screenshot, plus its stable reference."""
    if not Config.S3_BUCKET:
        raise ExternalServiceError("Evidence storage is not configured")

    key = build_screenshot_key(booking_document_id, file_name)
    try:
        upload_url = _build_s3_client().generate_presigned_url(
            ClientMethod="put_object",
            Params={"Bucket": Config.S3_BUCKET, "Key": key, "ContentType": content_type},
            ExpiresIn=Config.EVIDENCE_URL_EXPIRES_IN,
        )
    except (BotoCoreError, ClientError) as exc:
        logger.error(f"Unable to presign evidence upload {key}: {str(exc)}")
        raise ExternalServiceError("Unable to prepare screenshot upload") from exc

    return upload_url, f"https://{Config.S3_BUCKET}.s3.amazonaws.com/{key}"


def screenshot_view_url(screenshot_ref: str, expires_in: int | None = None) -> str:
    try:
        bucket, key = extract_bucket_key_from_url(screenshot_ref)
    except ValueError as exc:
        raise ValidationException(ErrorMessage.SCREENSHOT_URL_UNAVAILABLE) from exc

    try:
        return _build_s3_client().generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in or Config.EVIDENCE_URL_EXPIRES_IN,
        )
    except (BotoCoreError, ClientError) as exc:
        logger.error(f"Unable to presign screenshot {key}: {str(exc)}")
        raise ExternalServiceError("Unable to create screenshot link") from exc
