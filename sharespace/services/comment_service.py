"""Comment aggregate.

A comment is attached to a post by its ``post_id``; inserting or
deleting the comment row is what adds it to or removes it from the
post's comment list, so there is no second write to keep in step.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models import COMMENT_MAX_LENGTH, Comment, Post
from ..util.sanitization import clean_text

logger = logging.getLogger(__name__)


def validate_comment_text(text: Any) -> str:
    body = clean_text(text)
    if not body:
        raise ValidationError("Text is required", {"text": "required"})
    if len(body) > COMMENT_MAX_LENGTH:
        raise ValidationError(
            f"Text must be {COMMENT_MAX_LENGTH} characters or fewer",
            {"text": f"max length {COMMENT_MAX_LENGTH}"},
        )
    return body


class CommentService:
    """Business rules for comments on posts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _require_post(self, post_id: int) -> Post:
        post = self.session.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def add_comment(self, post_id: int, author_id: int, text: Any) -> Comment:
        """Attach a comment by ``author_id`` to an existing post.

        The post is looked up before the text is validated, so a
        comment on a missing post is reported as 404 even when the
        text is also invalid.
        """
        post = self._require_post(post_id)
        body = validate_comment_text(text)

        comment = Comment(post_id=post.id, user_id=author_id, text=body)
        self.session.add(comment)
        self.session.commit()
        logger.info("Comment %s added to post %s by user %s", comment.id, post_id, author_id)
        return comment

    def list_comments(self, post_id: int) -> list[Comment]:
        """Return the comments of a post, oldest first."""
        self._require_post(post_id)
        stmt = (
            select(Comment)
            .options(selectinload(Comment.author))
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
        )
        return list(self.session.scalars(stmt))

    def get_comment(self, comment_id: int) -> Comment:
        comment = self.session.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    def delete_comment(self, comment_id: int, caller_id: int) -> None:
        """Delete a comment. Only its author may do so."""
        comment = self.get_comment(comment_id)
        if comment.user_id != caller_id:
            raise ForbiddenError()

        post_id = comment.post_id
        self.session.delete(comment)
        self.session.commit()
        logger.info("Comment %s deleted from post %s", comment_id, post_id)
