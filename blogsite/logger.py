"""Loguru setup shared by the app factory and the request hooks."""

import logging
import sys
import time
import uuid
from contextvars import ContextVar

from flask import g, request
from loguru import logger

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[request_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="-")


def _inject_request_id(record):
    record["extra"].setdefault("request_id", _REQUEST_ID.get())


class _InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = str(record.levelno)
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", log_file: str = "") -> None:
    level = (level or "INFO").upper()

    logger.remove()
    logger.configure(patcher=_inject_request_id)
    logger.add(
        sys.stderr,
        level=level,
        format=_FMT,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    if log_file:
        logger.add(
            log_file,
            level=level,
            format=_FMT,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=True,
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def bind_request_logging(app) -> None:
    @app.before_request
    def _start_request():
        g._t0 = time.perf_counter()
        _REQUEST_ID.set(request.headers.get("X-Request-ID") or uuid.uuid4().hex)

    @app.after_request
    def _log_response(response):
        elapsed = (time.perf_counter() - g.get("_t0", time.perf_counter())) * 1000.0
        logger.info(
            f"{request.method} {request.path} -> {response.status_code} in {elapsed:.1f} ms"
        )
        return response

    @app.teardown_request
    def _clear_request_id(_exc):
        _REQUEST_ID.set("-")
