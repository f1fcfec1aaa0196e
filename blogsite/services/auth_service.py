from blogsite.errors import StorageError, ValidationError
from blogsite.logger import logger
from blogsite.repositories import user_repository
from blogsite.services import media_service
from blogsite.services.password_service import hash_password, verify_password
from blogsite.services.token_service import issue_token


INVALID_CREDENTIALS = "Invalid username or password"


def _require_non_empty_string(value):
    return isinstance(value, str) and value.strip()


def register(full_name, email, username, password, profile_image):
    if (
        not _require_non_empty_string(full_name)
        or not _require_non_empty_string(email)
        or not _require_non_empty_string(username)
        or not _require_non_empty_string(password)
        or not media_service.has_upload(profile_image)
    ):
        raise ValidationError("All fields are required")

    username = username.strip()
    if user_repository.get_by_username(username):
        raise ValidationError("Username already exists")

    password_hash = hash_password(password)
    image_reference = media_service.store_image(profile_image, "profiles")

    try:
        user = user_repository.create_user(
            full_name=full_name.strip(),
            email=email.strip(),
            username=username,
            password_hash=password_hash,
            profile_image=image_reference,
        )
    except (ValidationError, StorageError):
        media_service.remove_image(image_reference)
        raise

    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def login(username, password):
    if not _require_non_empty_string(username) or not _require_non_empty_string(password):
        raise ValidationError(INVALID_CREDENTIALS)

    user = user_repository.get_by_username(username.strip())
    if not user or not verify_password(password, user.password_hash):
        logger.info(f"Failed login for {username.strip()!r}")
        raise ValidationError(INVALID_CREDENTIALS)

    return issue_token(user.id)
