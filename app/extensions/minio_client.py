import json
import urllib3
from threading import Lock

from flask import current_app
from minio import Minio


_minio_client = None
_minio_signature = None
_minio_lock = Lock()
_ready_buckets = set()


def _build_signature():
    return (
        current_app.config["MINIO_ENDPOINT"],
        current_app.config["MINIO_ACCESS_KEY"],
        current_app.config["MINIO_SECRET_KEY"],
        current_app.config["MINIO_SECURE"],
        current_app.config["MINIO_CONNECT_TIMEOUT"],
        current_app.config["MINIO_READ_TIMEOUT"],
        current_app.config.get("MINIO_HTTP_POOL_MAXSIZE", 32),
    )


def get_minio_client():
    global _minio_client, _minio_signature

    signature = _build_signature()
    with _minio_lock:
        if _minio_client is not None and _minio_signature == signature:
            return _minio_client

        timeout = urllib3.Timeout(
            connect=current_app.config["MINIO_CONNECT_TIMEOUT"],
            read=current_app.config["MINIO_READ_TIMEOUT"],
        )
        http_client = urllib3.PoolManager(
            timeout=timeout,
            retries=False,
            maxsize=current_app.config.get("MINIO_HTTP_POOL_MAXSIZE", 32),
        )

        _minio_client = Minio(
            current_app.config["MINIO_ENDPOINT"],
            access_key=current_app.config["MINIO_ACCESS_KEY"],
            secret_key=current_app.config["MINIO_SECRET_KEY"],
            secure=current_app.config["MINIO_SECURE"],
            http_client=http_client,
        )
        _minio_signature = signature
        _ready_buckets.clear()
        return _minio_client


def public_read_policy(bucket: str) -> str:
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"AWS": ["*"]},
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket}/*"],
            }
        ],
    })


def ensure_public_bucket(minio, bucket: str):
    """Create ``bucket`` if missing and make its objects anonymously readable."""
    if bucket in _ready_buckets:
        return

    if not minio.bucket_exists(bucket):
        minio.make_bucket(bucket)
    minio.set_bucket_policy(bucket, public_read_policy(bucket))

    with _minio_lock:
        _ready_buckets.add(bucket)
