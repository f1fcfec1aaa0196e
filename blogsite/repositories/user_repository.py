from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blogsite.db import db
from blogsite.errors import StorageError, ValidationError
from blogsite.models.user_model import User


def _commit():
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise ValidationError("Username already exists") from e
    except SQLAlchemyError as e:
        db.session.rollback()
        raise StorageError("Could not save user") from e


def get_by_username(username: str):
    return User.query.filter_by(username=username).first()


def get_by_id(user_id: int):
    return db.session.get(User, user_id)


def create_user(full_name, email, username, password_hash, profile_image=None):
    user = User(
        full_name=full_name,
        email=email,
        username=username,
        password_hash=password_hash,
        profile_image=profile_image,
    )
    db.session.add(user)
    _commit()
    return user


def update_user(user, full_name=None, email=None, username=None):
    if full_name is not None:
        user.full_name = full_name
    if email is not None:
        user.email = email
    if username is not None:
        user.username = username

    _commit()
    return user
