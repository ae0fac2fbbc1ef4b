"""Root comment listing request."""

from dataclasses import dataclass


@dataclass
class RootListingRequest:
    """Pagination and sorting parameters for a root comment listing.

    Built per call from raw caller input and normalized in place before it
    reaches storage. After normalization ``sort`` holds a ``SortField`` and
    ``order`` a ``SortDirection`` (both are ``str`` enums).
    """

    page: int = 0
    limit: int = 0
    sort: str = ""
    order: str = ""

    @property
    def offset(self) -> int:
        """Number of root comments to skip for the current page."""
        return (self.page - 1) * self.limit
