"""
Database models for ShareSpace.

Three entities make up the community feed: users, the posts they
share and the comments left on those posts. A user's "kindness" on a
post is stored as a row in ``post_likes``; the unique constraint on
``(post_id, user_id)`` is what turns the likes of a post into a set,
so a user can never be counted twice even when two toggles race.

A post's comments are not stored on the post. They are the comment
rows pointing at it, which means the list of comment ids on a post
always names live comments and always contains every one of them.
Deleting a post cascades to its comments and likes inside the same
unit of work.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from werkzeug.security import generate_password_hash, check_password_hash

from .db import db


CONTENT_MAX_LENGTH = 500
COMMENT_MAX_LENGTH = 300
NAME_MAX_LENGTH = 80
BIO_MAX_LENGTH = 300
PICTURE_URL_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 120


class User(db.Model):
    __allow_unmapped__ = True  # allow unmapped type annotations for SQLAlchemy 2.0
    """A registered member of the community.

    Only ``id``, ``name`` and ``profile_picture_url`` are ever joined
    into posts and comments. Passwords are stored as salted hashes.
    """
    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(NAME_MAX_LENGTH), nullable=False)
    email: str = db.Column(db.String(EMAIL_MAX_LENGTH), unique=True, nullable=False)
    password_hash: str = db.Column(db.String(256), nullable=False)
    bio: Optional[str] = db.Column(db.String(BIO_MAX_LENGTH))
    profile_picture_url: Optional[str] = db.Column(db.String(PICTURE_URL_MAX_LENGTH))
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # Collections carry no annotation: a bare List[...] would be mapped as a scalar
    posts = db.relationship("Post", back_populates="author")

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class Post(db.Model):
    __allow_unmapped__ = True
    """A short text update shared with the community."""
    __tablename__ = "posts"

    id: int = db.Column(db.Integer, primary_key=True)
    user_id: int = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    content: str = db.Column(db.String(CONTENT_MAX_LENGTH), nullable=False)
    image_url: Optional[str] = db.Column(db.Text)
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    author: User = db.relationship("User", back_populates="posts")
    likes = db.relationship(
        "PostLike", back_populates="post", cascade="all, delete-orphan"
    )
    comments = db.relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by=lambda: [Comment.created_at, Comment.id],
    )

    @property
    def liker_ids(self) -> list[int]:
        return sorted(like.user_id for like in self.likes)

    @property
    def comment_ids(self) -> list[int]:
        return [comment.id for comment in self.comments]

    @property
    def like_count(self) -> int:
        return len(self.likes)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def is_liked_by(self, user_id: int) -> bool:
        return any(like.user_id == user_id for like in self.likes)

    def __repr__(self) -> str:
        return f"<Post {self.id} by {self.user_id}>"


class PostLike(db.Model):
    __allow_unmapped__ = True
    """Membership of a user in a post's set of likers."""
    __tablename__ = "post_likes"

    id: int = db.Column(db.Integer, primary_key=True)
    post_id: int = db.Column(db.Integer, db.ForeignKey("posts.id"), nullable=False, index=True)
    user_id: int = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    post: Post = db.relationship("Post", back_populates="likes")

    # A user appears at most once in a post's likers
    __table_args__ = (
        db.UniqueConstraint("post_id", "user_id", name="uix_post_like"),
    )

    def __repr__(self) -> str:
        return f"<PostLike post={self.post_id} user={self.user_id}>"


class Comment(db.Model):
    __allow_unmapped__ = True
    """A reply left on a post."""
    __tablename__ = "comments"

    id: int = db.Column(db.Integer, primary_key=True)
    user_id: int = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    post_id: int = db.Column(db.Integer, db.ForeignKey("posts.id"), nullable=False, index=True)
    text: str = db.Column(db.String(COMMENT_MAX_LENGTH), nullable=False)
    created_at: datetime = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    author: User = db.relationship("User")
    post: Post = db.relationship("Post", back_populates="comments")

    def __repr__(self) -> str:
        return f"<Comment {self.id} on post={self.post_id}>"
