from flask import current_app
from werkzeug.security import check_password_hash, generate_password_hash

from blogsite.errors import ValidationError


DEFAULT_HASH_METHOD = "scrypt:32768:8:1"
SALT_LENGTH = 16


def hash_password(plain: str) -> str:
    if not isinstance(plain, str) or not plain:
        raise ValidationError("Password is required")

    method = current_app.config.get("PASSWORD_HASH_METHOD", DEFAULT_HASH_METHOD)
    return generate_password_hash(plain, method=method, salt_length=SALT_LENGTH)


def verify_password(plain: str, hashed: str) -> bool:
    if not plain or not hashed:
        return False
    return check_password_hash(hashed, plain)
