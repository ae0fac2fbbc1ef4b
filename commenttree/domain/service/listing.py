"""Root listing request normalization.

Turns whatever the caller sent for page, limit, sort and order into values
storage can use directly. Never fails: anything unusable falls back to a
default.
"""

from commenttree.domain.model.listing import RootListingRequest
from commenttree.domain.value import SortDirection, SortField

DEFAULT_PAGE_SIZE = 30
MAX_PAGE_SIZE = 100

# Checked in order; the first keyword containing the caller's value wins.
_SORT_KEYWORDS: tuple[tuple[str, SortField], ...] = (
    ("author", SortField.AUTHOR),
    ("text_content", SortField.CONTENT),
    ("created", SortField.CREATED),
)

_ORDER_KEYWORDS: tuple[tuple[str, SortDirection], ...] = (
    ("ascending", SortDirection.ASC),
    ("descending", SortDirection.DESC),
)


def resolve_sort_field(raw: str | None) -> SortField:
    """Resolve a free-form sort value to a sort column.

    Matching is case-insensitive and ignores surrounding whitespace. A value
    resolves to a category when it is a fragment of the category keyword
    (``"auth"`` -> author, ``"content"`` -> text content) or equals the
    column name itself (``"created_at"``).

    Args:
        raw: Sort value as sent by the caller

    Returns:
        Matching sort field, creation time when nothing matches
    """
    value = (raw or "").strip().lower()
    if not value:
        return SortField.CREATED

    for keyword, field in _SORT_KEYWORDS:
        if value in keyword or value == field.value:
            return field

    return SortField.CREATED


def resolve_sort_direction(raw: str | None) -> SortDirection:
    """Resolve a free-form order value to a sort direction.

    ``"asc"``, ``"ASCENDING"``, ``" desc "`` and the like are recognized.

    Args:
        raw: Order value as sent by the caller

    Returns:
        Matching direction, ascending when nothing matches
    """
    value = (raw or "").strip().lower()
    if not value:
        return SortDirection.ASC

    for keyword, direction in _ORDER_KEYWORDS:
        if value in keyword:
            return direction

    return SortDirection.ASC


def normalize_root_request(
    request: RootListingRequest,
    default_limit: int = DEFAULT_PAGE_SIZE,
    max_limit: int = MAX_PAGE_SIZE,
) -> RootListingRequest:
    """Normalize a root listing request in place.

    - page <= 0 becomes 1
    - limit <= 0 or above ``max_limit`` becomes ``default_limit``
    - sort and order are resolved to storage values

    Args:
        request: Request to normalize (mutated)
        default_limit: Page size used when the given one is unusable
        max_limit: Largest page size accepted as-is

    Returns:
        The same request object, for chaining
    """
    if request.page <= 0:
        request.page = 1
    if request.limit <= 0 or request.limit > max_limit:
        request.limit = default_limit

    request.sort = resolve_sort_field(request.sort)
    request.order = resolve_sort_direction(request.order)
    return request
