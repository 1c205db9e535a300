"""
Serialization schemas using Marshmallow for ShareSpace.

These schemas convert SQLAlchemy models to the JSON shapes the
frontend consumes. Keys are camelCase on the wire. Sensitive fields,
such as password hashes and email addresses of other users, are
never part of a post or comment payload: authors are reduced to
their public summary.
"""

from __future__ import annotations

from marshmallow import fields
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema, auto_field

from .models import User, Post, Comment


class AuthorSchema(SQLAlchemyAutoSchema):
    """Public summary of a user joined into posts and comments."""

    profile_picture_url = auto_field(data_key="profilePictureUrl")

    class Meta:
        model = User
        fields = ("id", "name", "profile_picture_url")


class UserSchema(SQLAlchemyAutoSchema):
    """Schema for serialising the signed-in user's own profile."""

    profile_picture_url = auto_field(data_key="profilePictureUrl")
    created_at = auto_field(data_key="createdAt")

    class Meta:
        model = User
        # Exclude password_hash from the serialised output
        exclude = ("password_hash",)


class PostSchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``Post`` objects.

    ``likes`` and ``comments`` are lists of ids, and the two counts are
    derived from them on every dump.
    """

    user = fields.Nested(AuthorSchema, attribute="author")
    image_url = auto_field(data_key="imageUrl")
    likes = fields.List(fields.Integer(), attribute="liker_ids")
    comments = fields.List(fields.Integer(), attribute="comment_ids")
    like_count = fields.Integer(data_key="likeCount")
    comment_count = fields.Integer(data_key="commentCount")
    created_at = auto_field(data_key="createdAt")

    class Meta:
        model = Post
        fields = (
            "id",
            "user",
            "content",
            "image_url",
            "likes",
            "comments",
            "like_count",
            "comment_count",
            "created_at",
        )


class CommentSchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``Comment`` objects."""

    user = fields.Nested(AuthorSchema, attribute="author")
    post = fields.Integer(attribute="post_id")
    created_at = auto_field(data_key="createdAt")

    class Meta:
        model = Comment
        fields = ("id", "user", "post", "text", "created_at")
