import logging
import uuid
from io import BytesIO

from app.core.config import settings
from app.core.minio_client import get_minio, ensure_bucket, get_presigned_url

logger = logging.getLogger(__name__)


def build_object_name(student_id: int, filename: str) -> str:
    """activities/{student_id}/{uuid}.ext; the uploaded filename is kept on the row."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"activities/{student_id}/{uuid.uuid4().hex}.{ext}"


async def upload_activity_attachment(
    file_bytes: bytes,
    content_type: str,
    filename: str,
    student_id: int,
) -> str:
    """
    Uploads a proof attachment (certificate scan, report, photo) to MinIO
    and returns its object name. Links are built per request with
    attachment_url(), so nothing that expires is ever persisted.
    """
    minio = get_minio()
    bucket = settings.MINIO_BUCKET
    ensure_bucket(minio, bucket)

    object_name = build_object_name(student_id, filename)

    # MinIO SDK is sync; fine for attachment sizes capped by MAX_UPLOAD_MB.
    minio.put_object(
        bucket,
        object_name,
        BytesIO(file_bytes),
        length=len(file_bytes),
        content_type=content_type or "application/octet-stream",
    )
    logger.info("Stored attachment %s (%d bytes) for student %s", object_name, len(file_bytes), student_id)
    return object_name


def attachment_url(object_name: str) -> str:
    """Public link when MINIO_PUBLIC_BASE is set, otherwise a short-lived presigned one."""
    bucket = settings.MINIO_BUCKET
    public_base = (settings.MINIO_PUBLIC_BASE or "").rstrip("/")
    if public_base:
        return f"{public_base}/{bucket}/{object_name}"

    return get_presigned_url(
        bucket,
        object_name,
        expiry_seconds=settings.ATTACHMENT_URL_EXPIRE_MINUTES * 60,
    )
