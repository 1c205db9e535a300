"""Routes for individual comments.

Comments are created and listed through their post (see
``routes/posts.py``); this blueprint only exposes deletion, which is
addressed by the comment's own id.
"""
from __future__ import annotations

from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required

from ..util.auth import current_user_id


comments_bp = Blueprint("comments", __name__)


@comments_bp.route("/comments/<int:comment_id>", methods=["DELETE"])
@jwt_required()
def delete_comment(comment_id: int) -> tuple[dict, int]:
    """Delete a comment. Only its author may do this."""
    current_app.services["comments"].delete_comment(comment_id, current_user_id())
    return {"message": "Comment deleted successfully"}, 200
