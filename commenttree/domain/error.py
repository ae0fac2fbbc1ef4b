"""Domain layer errors.

Every error carries a stable ``code`` so the interface layer can map it to
a response without string matching.
"""


class DomainError(Exception):
    """Base domain error."""

    code = "domain_error"


class InternalError(DomainError):
    """Unexpected storage or infrastructure failure.

    The underlying exception is chained as ``__cause__``.
    """

    code = "internal_error"

    def __init__(self, message: str = "Something went wrong. Try again later"):
        super().__init__(message)


class InvalidQueryError(DomainError):
    """Malformed caller input."""

    code = "invalid_query"

    def __init__(self, message: str = "Incorrect query parameters"):
        super().__init__(message)


class InvalidIdError(DomainError):
    """Comment identifier is not a positive integer."""

    code = "invalid_id"

    def __init__(self, comment_id: object):
        self.comment_id = comment_id
        super().__init__(f"Incorrect comment ID: {comment_id}")


class ParentNotFoundError(DomainError):
    """Referenced comment does not exist."""

    code = "parent_not_found"

    def __init__(self, comment_id: object):
        self.comment_id = comment_id
        super().__init__(f"Specified parent comment not found: {comment_id}")


class ParentDeletedError(DomainError):
    """Referenced comment exists but has been deleted."""

    code = "parent_deleted"

    def __init__(self, comment_id: object):
        self.comment_id = comment_id
        super().__init__(f"Specified parent comment is deleted: {comment_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    code = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ThreadTooDeepError(DomainError):
    """Reply chain under a comment is nested deeper than can be rendered."""

    code = "thread_too_deep"

    def __init__(self, comment_id: object, depth: int, max_depth: int):
        self.comment_id = comment_id
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Comment thread is too deep to render: {comment_id} "
            f"({depth} levels, at most {max_depth})"
        )
