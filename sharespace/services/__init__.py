"""Service layer for ShareSpace.

This package contains business logic that sits between the
Flask route handlers and the database models. Separating
services into their own modules keeps the routes thin and
makes the aggregate rules (validation, ownership and the
post/comment consistency guarantees) easy to unit test.

Nothing in this package should perform any HTTP handling.
Instead, services return model objects and raise exceptions
defined in ``sharespace.errors`` when something goes wrong.
Services receive their database session through the
constructor; the application factory builds one instance of
each and stores them on ``app.services``.
"""

from .post_service import PostService, validate_content
from .comment_service import CommentService, validate_comment_text

__all__ = [
    "PostService",
    "CommentService",
    "validate_content",
    "validate_comment_text",
]
