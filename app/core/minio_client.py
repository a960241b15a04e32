from datetime import timedelta
from minio import Minio

from app.core.config import settings


def get_minio() -> Minio:
    return Minio(
        endpoint=settings.MINIO_ENDPOINT.strip(),
        access_key=settings.MINIO_ACCESS_KEY.strip(),
        secret_key=settings.MINIO_SECRET_KEY.strip(),
        secure=settings.MINIO_SECURE,  # keep false for http
    )


def ensure_bucket(minio: Minio, bucket: str) -> None:
    if not minio.bucket_exists(bucket):
        minio.make_bucket(bucket)


def get_presigned_url(bucket: str, object_name: str, expiry_seconds: int = 900) -> str:
    minio = get_minio()
    return minio.presigned_get_object(
        bucket_name=bucket,
        object_name=object_name,
        expires=timedelta(seconds=int(expiry_seconds or 900)),
    )
