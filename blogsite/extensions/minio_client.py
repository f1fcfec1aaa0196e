"""Per-app MinIO client for the upload bucket.

The client lives in ``app.extensions`` so each app built by the factory
talks to the server named in its own config.
"""

import urllib3
from flask import current_app
from minio import Minio


EXTENSION_KEY = "minio"


def _client_from_config(config) -> Minio:
    http_client = urllib3.PoolManager(
        timeout=urllib3.Timeout(
            connect=config["MINIO_CONNECT_TIMEOUT"],
            read=config["MINIO_READ_TIMEOUT"],
        ),
        retries=False,
        maxsize=config["MINIO_HTTP_POOL_MAXSIZE"],
    )
    return Minio(
        config["MINIO_ENDPOINT"],
        access_key=config["MINIO_ACCESS_KEY"],
        secret_key=config["MINIO_SECRET_KEY"],
        secure=config["MINIO_SECURE"],
        http_client=http_client,
    )


def get_minio_client() -> Minio:
    client = current_app.extensions.get(EXTENSION_KEY)
    if client is None:
        # Concurrent first requests may both build one; the first stored wins.
        client = current_app.extensions.setdefault(
            EXTENSION_KEY, _client_from_config(current_app.config)
        )
    return client


def ensure_bucket(client, bucket: str) -> None:
    if not client.bucket_exists(bucket):
        client.make_bucket(bucket)
