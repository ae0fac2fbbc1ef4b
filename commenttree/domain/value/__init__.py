"""Domain value objects for the comment tree."""

from commenttree.domain.value.identifiers import CommentId
from commenttree.domain.value.types import DeletionMode, SortDirection, SortField

__all__ = [
    # Identifiers
    "CommentId",
    # Types
    "DeletionMode",
    "SortDirection",
    "SortField",
]
