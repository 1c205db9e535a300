"""Centralised error handling and custom exceptions.

This module defines custom exception classes and provides
Flask error handlers that serialise them into JSON responses.
By using custom exceptions, the service layer can signal
specific error conditions without coupling itself to HTTP
response codes. The Flask app will register these handlers
during application factory initialisation.

Every error body carries a top-level ``message`` so clients can
show it as-is, plus an ``error`` object with a machine readable
``code``. Stack traces never leave the process.
"""
from __future__ import annotations

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from .db import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP status."""

    code = "ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"code": self.code, "message": self.message}

    def to_response(self, status_code: int | None = None):
        response = {"message": self.message, "error": self.payload()}
        return jsonify(response), status_code or self.status_code


class ValidationError(ApiError):
    """Raised when input validation fails."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, fields: dict | None = None) -> None:
        super().__init__(message)
        self.fields = fields or {}

    def payload(self) -> dict:
        payload = super().payload()
        payload["fields"] = self.fields
        return payload


class NotFoundError(ApiError):
    """Raised when a requested resource cannot be found."""

    code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(ApiError):
    """Raised when the caller does not own the resource it tries to change."""

    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


class ConflictError(ApiError):
    """Raised when a uniqueness or resource conflict occurs."""

    code = "CONFLICT"
    status_code = 409


class InternalError(ApiError):
    """Raised when storage fails in a way the caller cannot fix."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


def register_error_handlers(app) -> None:
    """Register custom error handlers on the given Flask app."""
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        if err.status_code >= 500:
            db.session.rollback()
            logger.error("Request failed: %s", err.message, exc_info=err)
        return err.to_response()

    @app.errorhandler(404)
    def handle_unknown_route(err):
        return jsonify({"message": "Route not found"}), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(err):
        return jsonify({"message": "Method not allowed"}), 405

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"message": err.description or err.name}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Anything that reaches this point is a bug or a storage failure
        db.session.rollback()
        logger.error("An unhandled exception occurred: %s", err, exc_info=True)
        return InternalError().to_response()
