from blogsite.errors import NotFound, ValidationError
from blogsite.repositories import user_repository
from blogsite.schemas.user_schema import ProfileSchema


def _get_user(user_id: int):
    user = user_repository.get_by_id(user_id)
    if not user:
        raise NotFound("User not found")
    return user


def get_profile(user_id: int):
    return ProfileSchema().dump(_get_user(user_id))


def update_profile(user_id: int, full_name=None, email=None, username=None):
    user = _get_user(user_id)

    if full_name is None and email is None and username is None:
        raise ValidationError("At least one field is required")

    changes = {}
    for field, value in (("full_name", full_name), ("email", email), ("username", username)):
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"{field} must be a non-empty string")
        changes[field] = value.strip()

    new_username = changes.get("username")
    if new_username and new_username != user.username:
        if user_repository.get_by_username(new_username):
            raise ValidationError("Username already exists")

    user_repository.update_user(user, **changes)
    return ProfileSchema().dump(user)
