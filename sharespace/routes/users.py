"""Routes for the signed-in user's own profile."""
from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import jwt_required

from ..db import db
from ..errors import NotFoundError, ValidationError
from ..models import BIO_MAX_LENGTH, NAME_MAX_LENGTH, PICTURE_URL_MAX_LENGTH, User
from ..schemas import UserSchema
from ..util.auth import current_user_id
from ..util.requests import json_body
from ..util.sanitization import clean_optional, clean_text


users_bp = Blueprint("users", __name__)


def _current_user() -> User:
    user = db.session.get(User, current_user_id())
    if user is None:
        raise NotFoundError("User not found")
    return user


def _bounded(value, field: str, limit: int):
    if value is not None and len(value) > limit:
        raise ValidationError(f"{field} must be {limit} characters or fewer", {field: f"max length {limit}"})
    return value


@users_bp.route("/users/me", methods=["GET"])
@jwt_required()
def get_me() -> tuple[dict, int]:
    return {"user": UserSchema().dump(_current_user())}, 200


@users_bp.route("/users/me", methods=["PUT"])
@jwt_required()
def update_me() -> tuple[dict, int]:
    """Update the caller's profile.

    Accepts any of ``name``, ``bio`` and ``profilePictureUrl``. Fields
    that are absent are left unchanged; a blank name is rejected.
    """
    user = _current_user()
    data = json_body()
    if "name" in data:
        name = clean_text(data["name"])
        if not name:
            raise ValidationError("Name cannot be empty", {"name": "required"})
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name must be {NAME_MAX_LENGTH} characters or fewer", {"name": "too long"})
        user.name = name
    if "bio" in data:
        user.bio = _bounded(clean_optional(data["bio"]), "bio", BIO_MAX_LENGTH)
    if "profilePictureUrl" in data:
        user.profile_picture_url = _bounded(
            clean_optional(data["profilePictureUrl"]), "profilePictureUrl", PICTURE_URL_MAX_LENGTH
        )
    db.session.commit()
    return {"message": "Profile updated successfully", "user": UserSchema().dump(user)}, 200
