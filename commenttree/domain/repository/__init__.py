"""Domain repository interfaces."""

from .comment import CommentRepository

__all__ = [
    "CommentRepository",
]
