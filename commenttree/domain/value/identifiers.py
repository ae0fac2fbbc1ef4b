"""Strongly typed identifiers for comment tree entities.

Comment identifiers are positive integers assigned by storage on creation.
NewType keeps them from being mixed up with page numbers and limits.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
