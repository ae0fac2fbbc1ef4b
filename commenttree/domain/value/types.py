"""Domain value types for comment listings."""

from enum import Enum


class SortField(str, Enum):
    """Column that root comment listings can be sorted by.

    Values are the storage column names.
    """

    AUTHOR = "author"
    CONTENT = "content"
    CREATED = "created_at"


class SortDirection(str, Enum):
    """Direction of a root comment listing sort."""

    ASC = "asc"
    DESC = "desc"


class DeletionMode(str, Enum):
    """How a comment is deleted.

    SOFT masks the comment and keeps its replies.
    HARD removes the comment and every descendant.
    """

    SOFT = "soft"
    HARD = "hard"
