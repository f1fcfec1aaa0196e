from flask import Flask

from blogsite.config import Config
from blogsite.db import db
from blogsite.errors import register_error_handlers
from blogsite.extensions.extensions import jwt, ma
from blogsite.logger import bind_request_logging, logger, setup_logging


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY must be set")

    setup_logging(app.config["LOG_LEVEL"], app.config["LOG_FILE"])
    bind_request_logging(app)

    db.init_app(app)
    jwt.init_app(app)
    ma.init_app(app)
    register_error_handlers(app)

    from blogsite.routes.auth_routes import auth_bp
    from blogsite.routes.post_routes import post_bp
    from blogsite.routes.profile_routes import profile_bp

    app.register_blueprint(post_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(profile_bp)

    with app.app_context():
        from blogsite.models import post_model, user_model  # noqa: F401
        db.create_all()

    logger.info("Application ready")
    return app
