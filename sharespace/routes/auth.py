"""
Authentication routes for ShareSpace.

Provides endpoints for registering new users and logging in to obtain
JSON Web Tokens (JWTs). These tokens are required for accessing
protected resources throughout the API. The token identity is the
user's id as a string.
"""

from __future__ import annotations

import logging

from flask import Blueprint
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError

from ..db import db
from ..errors import ConflictError, ValidationError
from ..models import EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, User
from ..schemas import UserSchema
from ..util.requests import json_body
from ..util.sanitization import clean_email, clean_text

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[dict, int]:
    """Register a new user.

    Expects JSON with ``name``, ``email`` and ``password``. Emails are
    stored lower-cased and must be unique.
    """
    data = json_body()
    name = clean_text(data.get("name"))
    email = clean_email(data.get("email"))
    password = data.get("password") if isinstance(data.get("password"), str) else ""

    missing = [field for field, value in (("name", name), ("email", email), ("password", password)) if not value]
    if missing:
        raise ValidationError(
            f"Missing fields: {', '.join(missing)}",
            {field: "required" for field in missing},
        )
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Name must be {NAME_MAX_LENGTH} characters or fewer",
            {"name": f"max length {NAME_MAX_LENGTH}"},
        )
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValidationError(
            f"Email must be {EMAIL_MAX_LENGTH} characters or fewer",
            {"email": f"max length {EMAIL_MAX_LENGTH}"},
        )
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            {"password": f"min length {PASSWORD_MIN_LENGTH}"},
        )
    if User.query.filter_by(email=email).first():
        raise ConflictError("Email already registered")

    user = User(name=name, email=email)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        # Lost a race with another registration for the same address
        db.session.rollback()
        raise ConflictError("Email already registered") from exc
    logger.info("User %s registered", user.id)
    return {"message": "User registered successfully", "user": UserSchema().dump(user)}, 201


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[dict, int]:
    """Authenticate a user and return a JWT.

    Expects JSON with ``email`` and ``password``. Invalid credentials
    return 401.
    """
    data = json_body()
    email = clean_email(data.get("email"))
    password = data.get("password") if isinstance(data.get("password"), str) else ""
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return {"message": "Invalid email or password."}, 401

    token = create_access_token(identity=str(user.id))
    return {"message": "Logged in successfully", "token": token, "user": UserSchema().dump(user)}, 200
