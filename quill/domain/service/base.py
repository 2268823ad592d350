"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold the rules that span an aggregate and its repository:
    slug assignment, publication state, category association.
    """

    pass
