"""Post aggregate: creation, listing, deletion and kindness toggles.

A post owns its likes and its comments. Every operation that touches
more than one row does so inside a single database transaction, so a
failure part-way through leaves the aggregate exactly as it was.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..errors import ForbiddenError, InternalError, NotFoundError, ValidationError
from ..models import CONTENT_MAX_LENGTH, Post, PostLike, User
from ..util.sanitization import clean_optional, clean_text

logger = logging.getLogger(__name__)


def validate_content(content: Any) -> str:
    """Return the trimmed post content or raise ``ValidationError``."""
    text = clean_text(content)
    if not text:
        raise ValidationError("Content is required", {"content": "required"})
    if len(text) > CONTENT_MAX_LENGTH:
        raise ValidationError(
            f"Content must be {CONTENT_MAX_LENGTH} characters or fewer",
            {"content": f"max length {CONTENT_MAX_LENGTH}"},
        )
    return text


class PostService:
    """Business rules for posts.

    The service is handed a SQLAlchemy session when the application is
    built and never reaches for a global one.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _load(self, post_id: int) -> Post:
        post = self.session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def create_post(self, author_id: int, content: Any, image_url: Optional[Any] = None) -> Post:
        """Create a post authored by ``author_id``.

        Content is trimmed and must be between 1 and 500 characters.
        A blank ``image_url`` is stored as no image at all.
        """
        text = validate_content(content)
        if self.session.get(User, author_id) is None:
            raise NotFoundError("User not found")

        post = Post(user_id=author_id, content=text, image_url=clean_optional(image_url))
        self.session.add(post)
        self.session.commit()
        logger.info("Post %s created by user %s", post.id, author_id)
        return post

    def list_posts(self) -> list[Post]:
        """Return every post, newest first, with authors, likes and comments loaded."""
        stmt = (
            select(Post)
            .options(
                selectinload(Post.author),
                selectinload(Post.likes),
                selectinload(Post.comments),
            )
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(self.session.scalars(stmt))

    def get_post(self, post_id: int) -> Post:
        return self._load(post_id)

    def delete_post(self, post_id: int, caller_id: int) -> None:
        """Delete a post together with its comments and likes.

        Only the author may delete a post. Comments are removed in the
        same transaction as the post, so none can outlive it.
        """
        post = self._load(post_id)
        if post.user_id != caller_id:
            raise ForbiddenError()

        removed_comments = post.comment_count
        try:
            # Cascades on Post.comments and Post.likes remove the children
            # before the post row itself.
            self.session.delete(post)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise InternalError("Could not delete post") from exc
        logger.info("Post %s deleted with %d comment(s)", post_id, removed_comments)

    def toggle_like(self, post_id: int, caller_id: int) -> tuple[Post, bool]:
        """Add or remove ``caller_id`` from the post's likers.

        Returns the refreshed post and whether the caller likes it now.
        The removal is one conditional DELETE and the addition is one
        INSERT guarded by the unique constraint, so concurrent toggles
        from different users never overwrite each other.
        """
        post = self._load(post_id)

        result = self.session.execute(
            delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == caller_id)
        )
        if result.rowcount:
            self.session.commit()
            liked = False
        else:
            self.session.add(PostLike(post_id=post_id, user_id=caller_id))
            try:
                self.session.commit()
            except IntegrityError as exc:
                self.session.rollback()
                # Only a concurrent like by the same caller counts as success;
                # any other constraint failure left nothing behind.
                existing = self.session.scalar(
                    select(PostLike.id).where(PostLike.post_id == post_id, PostLike.user_id == caller_id)
                )
                if existing is None:
                    logger.error("Like by user %s on post %s failed", caller_id, post_id, exc_info=True)
                    raise InternalError("Could not update kindness") from exc
            liked = True

        logger.debug("User %s %s post %s", caller_id, "liked" if liked else "unliked", post_id)
        return post, liked
