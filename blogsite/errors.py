from http import HTTPStatus

from flask import jsonify, redirect, request, url_for
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from blogsite.db import db
from blogsite.logger import logger


GENERIC_ERROR_MESSAGE = "Server Error"


class AppError(Exception):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = GENERIC_ERROR_MESSAGE

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(AppError):
    status = HTTPStatus.BAD_REQUEST
    message = "Invalid request"


class NotFound(AppError):
    status = HTTPStatus.NOT_FOUND
    message = "Not found"


class Forbidden(AppError):
    status = HTTPStatus.FORBIDDEN
    message = "Unauthorized access"


class StorageError(AppError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Storage unavailable"


class Unauthenticated(AppError):
    """Raised by the hard gate; answered with a redirect to the login page."""

    status = HTTPStatus.FOUND
    message = "Login required"


def _generic_error():
    return jsonify({"error": GENERIC_ERROR_MESSAGE}), HTTPStatus.INTERNAL_SERVER_ERROR


def register_error_handlers(app):
    @app.errorhandler(Unauthenticated)
    def _handle_unauthenticated(_exc):
        return redirect(url_for("auth.login_form"))

    @app.errorhandler(StorageError)
    def _handle_storage(exc):
        logger.opt(exception=exc).error(
            f"Storage failure on {request.method} {request.path}: {exc.message}"
        )
        return _generic_error()

    @app.errorhandler(AppError)
    def _handle_app_error(exc):
        logger.warning(
            f"{type(exc).__name__} on {request.method} {request.path}: {exc.message}"
        )
        return jsonify(exc.to_dict()), exc.status

    @app.errorhandler(SQLAlchemyError)
    def _handle_database(exc):
        db.session.rollback()
        logger.opt(exception=exc).error(
            f"Database failure on {request.method} {request.path}"
        )
        return _generic_error()

    @app.errorhandler(HTTPException)
    def _handle_http(exc):
        return exc

    @app.errorhandler(Exception)
    def _handle_unexpected(exc):
        logger.opt(exception=exc).error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.path}"
        )
        return _generic_error()
