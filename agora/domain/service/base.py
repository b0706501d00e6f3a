"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the interaction rules that span more than one
    aggregate, such as a like that touches both a relationship row and the
    target's counter.
    """

    pass
