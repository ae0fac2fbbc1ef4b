"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span storage calls and do not
    belong to a single entity.
    """

    pass
