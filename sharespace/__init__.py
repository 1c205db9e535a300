"""
Application factory for the ShareSpace API.

This module provides a function to create and configure the Flask
application. All extensions (SQLAlchemy, Migrate, JWT) are initialised
here, the post and comment services are built with the database
session they should use, and the blueprints for the different parts of
the API are registered so that tests can create isolated apps.

Environment variables control the database connection, the secret key
and the log level. In production, set ``DATABASE_URL`` and
``JWT_SECRET_KEY`` in your environment. A default configuration is
provided for development, using SQLite when no database URL is
available.
"""

from __future__ import annotations

import logging
import os
import time
from datetime import timedelta

from flask import Flask, g, request
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager

# instantiate extensions without binding them to an app yet.  They will
# be bound in create_app().
from .db import db  # use shared db object from db.py
migrate = Migrate()
jwt = JWTManager()

SERVICE_NAME = "sharespace-backend"


def _configure_logging(app: Flask) -> None:
    if app.debug or app.testing:
        return
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(test_config: dict | None = None) -> Flask:
    """Create and configure a Flask application.

    Parameters
    ----------
    test_config: dict | None, optional
        Optional configuration overrides used when running tests.

    Returns
    -------
    Flask
        A configured Flask application instance.
    """
    app = Flask(__name__)

    # Default configuration. Override using environment variables or
    # by passing a ``test_config`` mapping.
    app.config.update(
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL", "sqlite:///sharespace.db"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JWT_SECRET_KEY=os.environ.get("JWT_SECRET_KEY", "please-change-this-secret-key"),
        JWT_ACCESS_TOKEN_EXPIRES=timedelta(days=1),
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO").upper(),
        MAX_CONTENT_LENGTH=10 * 1024,
    )

    if test_config:
        app.config.update(test_config)

    _configure_logging(app)

    # Initialise extensions with the app
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Register custom error handlers
    from .errors import register_error_handlers
    from .util.auth import register_jwt_handlers
    register_error_handlers(app)
    register_jwt_handlers(jwt)

    # Services share the request-scoped session of the app's db.
    from .services import PostService, CommentService
    app.services = {
        "posts": PostService(db.session),
        "comments": CommentService(db.session),
    }

    # Register blueprints. Importing here avoids circular imports.
    from .routes.auth import auth_bp
    from .routes.users import users_bp
    from .routes.posts import posts_bp
    from .routes.comments import comments_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(posts_bp, url_prefix="/api")
    app.register_blueprint(comments_bp, url_prefix="/api")

    # One access log line per request
    access_log = logging.getLogger(__name__)

    @app.before_request
    def _start_timer() -> None:
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        access_log.info("%s %s %s %.1fms", request.method, request.path, response.status_code, elapsed_ms)
        return response

    # Provide simple health check routes
    @app.route("/")
    @app.route("/health")
    def health_check() -> dict[str, str]:
        """Return a simple health check response.

        This endpoint can be used by deployment platforms to verify
        that the application has started correctly.
        """
        return {"status": "ok", "service": SERVICE_NAME}

    logging.getLogger(__name__).info("ShareSpace app created")
    return app
