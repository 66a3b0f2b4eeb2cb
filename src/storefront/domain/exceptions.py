"""Domain-level exceptions.

All cart and catalog rule violations are expressed as subclasses of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A quantity was non-positive or not an integer."""


class StockExceededError(ValidationError):
    """The requested quantity exceeds the product's available stock."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class UnknownProductError(EntityNotFoundError):
    """A product ID does not resolve in the current catalog."""


class NetworkFailureError(DomainException):
    """The store backend rejected a request or could not be reached."""


class CheckoutIncompleteError(NetworkFailureError):
    """A line-by-line checkout failed partway through.

    Lines that were already accepted by the backend stay accepted;
    ``submitted`` and ``unsent`` list the product IDs on each side.
    """

    def __init__(self, message: str, submitted: list[int], unsent: list[int]) -> None:
        super().__init__(message)
        self.submitted = submitted
        self.unsent = unsent
