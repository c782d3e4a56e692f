"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidLineError(DomainException):
    """An order line has no resolvable product identifier."""


class CapacityExceededError(DomainException):
    """Adding a line would exceed the composer's product limit."""

    def __init__(self, max_products: int) -> None:
        super().__init__(f"Maximum {max_products} products allowed")
        self.max_products = max_products


class VariantRequiredError(ValidationError):
    """A product with variants was added without choosing one."""


class CatalogUnavailableError(DomainException):
    """The catalog service could not answer a search or variant lookup.

    ``status_code`` is the HTTP status when the service responded, or None
    for transport failures (timeouts, refused connections).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code == 401


class OrderSubmissionError(DomainException):
    """The backend rejected or never received an order submission."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
