"""Helpers for reading the authenticated caller.

Tokens are issued by the auth blueprint with the user's id as the JWT
identity. Routes protected by ``jwt_required()`` call
``current_user_id`` to obtain that id as an integer.
"""
from __future__ import annotations

from flask_jwt_extended import get_jwt_identity


def current_user_id() -> int:
    """Return the id of the user making the current request."""
    return int(get_jwt_identity())


def register_jwt_handlers(jwt) -> None:
    """Render every authentication failure as a 401 JSON body."""
    @jwt.unauthorized_loader
    def handle_missing_token(reason: str):
        return {"message": "Authorization header is missing or invalid"}, 401

    @jwt.invalid_token_loader
    def handle_invalid_token(reason: str):
        return {"message": "Invalid token"}, 401

    @jwt.expired_token_loader
    def handle_expired_token(jwt_header: dict, jwt_payload: dict):
        return {"message": "Token has expired"}, 401

    @jwt.revoked_token_loader
    def handle_revoked_token(jwt_header: dict, jwt_payload: dict):
        return {"message": "Token has been revoked"}, 401
