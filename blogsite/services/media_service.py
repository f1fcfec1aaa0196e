import os
import uuid

from flask import current_app

from blogsite.errors import StorageError, ValidationError
from blogsite.extensions.minio_client import ensure_bucket, get_minio_client
from blogsite.logger import logger


ALLOWED_IMAGE_MIME_TYPES = {
    "image/jpeg": "jpeg",
    "image/png": "png",
    "image/webp": "webp",
}


def has_upload(file_storage) -> bool:
    return bool(file_storage is not None and getattr(file_storage, "filename", ""))


def build_media_url(reference):
    if not reference:
        return None

    if reference.startswith("static/"):
        return f"/{reference}"

    return (
        f"{current_app.config['MINIO_PUBLIC_BASE_URL'].rstrip('/')}/"
        f"{current_app.config['MINIO_BUCKET']}/"
        f"{reference}"
    )


def _get_stream_and_length(file_storage):
    stream = getattr(file_storage, "stream", file_storage)
    try:
        stream.seek(0, 2)
        length = stream.tell()
        stream.seek(0)
        return stream, length
    except (OSError, ValueError):
        return stream, -1


def _store_locally(file_storage, object_name: str) -> str:
    relative_path = os.path.join("uploads", *object_name.split("/"))
    absolute_path = os.path.join(current_app.static_folder, relative_path)
    os.makedirs(os.path.dirname(absolute_path), exist_ok=True)

    stream = getattr(file_storage, "stream", None)
    if stream is not None:
        stream.seek(0)

    file_storage.save(absolute_path)
    return f"static/uploads/{object_name}"


def _store_in_bucket(file_storage, object_name: str, mimetype: str) -> None:
    minio = get_minio_client()
    bucket = current_app.config["MINIO_BUCKET"]
    ensure_bucket(minio, bucket)

    stream, length = _get_stream_and_length(file_storage)
    upload_kwargs = {
        "bucket_name": bucket,
        "object_name": object_name,
        "data": stream,
        "length": length,
        "content_type": mimetype,
    }
    if length == -1:
        upload_kwargs["part_size"] = 10 * 1024 * 1024

    minio.put_object(**upload_kwargs)


def store_image(file_storage, folder: str) -> str:
    """Persist an uploaded image and return its reference string."""
    if not has_upload(file_storage):
        raise ValidationError("Image file is required")

    mimetype = getattr(file_storage, "mimetype", None) or ""
    extension = ALLOWED_IMAGE_MIME_TYPES.get(mimetype)
    if extension is None:
        raise ValidationError(f"Unsupported media type: {mimetype}")

    object_name = f"{folder}/{uuid.uuid4()}.{extension}"

    try:
        _store_in_bucket(file_storage, object_name, mimetype)
        return object_name
    except Exception as e:
        if not current_app.config.get("MEDIA_LOCAL_FALLBACK_ENABLED", True):
            raise StorageError("Media storage is unavailable") from e
        logger.warning(f"Bucket upload failed, storing {object_name} locally: {e}")

    try:
        return _store_locally(file_storage, object_name)
    except OSError as e:
        raise StorageError("Media storage is unavailable") from e


def remove_image(reference) -> None:
    """Best-effort delete of a stored image; failures are only logged."""
    if not reference:
        return

    try:
        if reference.startswith("static/"):
            os.remove(os.path.join(current_app.static_folder, *reference.split("/")[1:]))
        else:
            get_minio_client().remove_object(current_app.config["MINIO_BUCKET"], reference)
    except Exception as e:
        logger.warning(f"Could not remove orphaned image {reference}: {e}")
