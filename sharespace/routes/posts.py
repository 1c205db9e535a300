"""
Routes for the community feed.

Listing the feed is public; everything else requires a bearer token.
The handlers only parse the request and shape the response. Rules
about content length, ownership and cascading deletes live in
``PostService`` and ``CommentService``, whose exceptions are turned
into JSON errors by the handlers in ``sharespace.errors``.
"""

from __future__ import annotations

from flask import Blueprint, current_app
from flask_jwt_extended import jwt_required

from ..schemas import CommentSchema, PostSchema
from ..services import CommentService, PostService
from ..util.auth import current_user_id
from ..util.requests import json_body


posts_bp = Blueprint("posts", __name__)


def _posts() -> PostService:
    return current_app.services["posts"]


def _comments() -> CommentService:
    return current_app.services["comments"]


@posts_bp.route("/posts", methods=["GET"])
def list_posts() -> tuple[dict, int]:
    """Return every post, newest first."""
    posts = _posts().list_posts()
    return {"message": "Posts fetched successfully", "posts": PostSchema(many=True).dump(posts)}, 200


@posts_bp.route("/posts", methods=["POST"])
@jwt_required()
def create_post() -> tuple[dict, int]:
    """Create a post.

    Expects JSON with ``content`` (1-500 characters once trimmed) and
    an optional ``imageUrl``.
    """
    data = json_body()
    post = _posts().create_post(current_user_id(), data.get("content"), data.get("imageUrl"))
    return {"message": "Post created successfully", "post": PostSchema().dump(post)}, 201


@posts_bp.route("/posts/<int:post_id>", methods=["GET"])
@jwt_required()
def get_post(post_id: int) -> tuple[dict, int]:
    post = _posts().get_post(post_id)
    return {"message": "Post fetched successfully", "post": PostSchema().dump(post)}, 200


@posts_bp.route("/posts/<int:post_id>", methods=["DELETE"])
@jwt_required()
def delete_post(post_id: int) -> tuple[dict, int]:
    """Delete a post and all of its comments. Only the author may do this."""
    _posts().delete_post(post_id, current_user_id())
    return {"message": "Post deleted successfully"}, 200


@posts_bp.route("/posts/<int:post_id>/like", methods=["POST"])
@jwt_required()
def toggle_like(post_id: int) -> tuple[dict, int]:
    """Toggle the caller's kindness on a post.

    The response message says whether the kindness was added or
    removed, and ``liked`` carries the same information as a boolean.
    """
    post, liked = _posts().toggle_like(post_id, current_user_id())
    return {
        "message": "Kindness added" if liked else "Kindness removed",
        "liked": liked,
        "post": PostSchema().dump(post),
    }, 200


@posts_bp.route("/posts/<int:post_id>/comments", methods=["POST"])
@jwt_required()
def add_comment(post_id: int) -> tuple[dict, int]:
    """Comment on a post. Expects JSON with ``text`` (1-300 characters)."""
    data = json_body()
    comment = _comments().add_comment(post_id, current_user_id(), data.get("text"))
    return {"message": "Comment added successfully", "comment": CommentSchema().dump(comment)}, 201


@posts_bp.route("/posts/<int:post_id>/comments", methods=["GET"])
@jwt_required()
def list_comments(post_id: int) -> tuple[dict, int]:
    """Return the comments of a post, oldest first."""
    comments = _comments().list_comments(post_id)
    return {
        "message": "Comments fetched successfully",
        "comments": CommentSchema(many=True).dump(comments),
    }, 200
