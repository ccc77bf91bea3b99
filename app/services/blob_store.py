import io
import logging
import mimetypes
import time
import uuid

from flask import current_app
from werkzeug.utils import secure_filename

from app.errors import UploadError
from app.extensions.minio_client import ensure_public_bucket, get_minio_client


logger = logging.getLogger(__name__)


def build_object_key(prefix: str, filename: str | None) -> str:
    safe_name = secure_filename(filename or "") or "upload"
    stamp = int(time.time() * 1000)
    return f"{prefix}/{stamp}-{uuid.uuid4().hex[:8]}-{safe_name}"


def build_public_url(object_name: str) -> str:
    return (
        f"{current_app.config['MINIO_PUBLIC_BASE_URL'].rstrip('/')}/"
        f"{current_app.config['MINIO_BUCKET']}/"
        f"{object_name}"
    )


def upload(data: bytes, key: str, content_type: str) -> str:
    """Store ``data`` under ``key`` and return its public URL.

    Raises ``UploadError`` on any storage failure; nothing is retried.
    """
    bucket = current_app.config["MINIO_BUCKET"]

    try:
        minio = get_minio_client()
        ensure_public_bucket(minio, bucket)
        minio.put_object(
            bucket_name=bucket,
            object_name=key,
            data=io.BytesIO(data),
            length=len(data),
            content_type=content_type,
        )
    except Exception as e:
        logger.exception("Upload of %s to bucket %s failed", key, bucket)
        raise UploadError() from e

    logger.info("Uploaded %s (%s, %d bytes)", key, content_type, len(data))
    return build_public_url(key)


def has_file(file_storage) -> bool:
    return file_storage is not None and bool(getattr(file_storage, "filename", ""))


def sniff_content_type(file_storage) -> str:
    mimetype = (getattr(file_storage, "mimetype", None) or "").lower()
    if mimetype and mimetype != "application/octet-stream":
        return mimetype

    guessed, _ = mimetypes.guess_type(getattr(file_storage, "filename", "") or "")
    return guessed or "application/octet-stream"


def upload_file(file_storage, prefix: str) -> tuple[str, str]:
    """Upload a request file under ``prefix``; returns ``(url, content_type)``."""
    content_type = sniff_content_type(file_storage)
    key = build_object_key(prefix, file_storage.filename)

    stream = getattr(file_storage, "stream", file_storage)
    if stream.seekable():
        stream.seek(0)
    data = stream.read()

    return upload(data, key, content_type), content_type
