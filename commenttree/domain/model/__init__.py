"""Domain models."""

from .comment import Comment, NewComment
from .common import DomainModel
from .listing import RootListingRequest

__all__ = [
    "Comment",
    "DomainModel",
    "NewComment",
    "RootListingRequest",
]
