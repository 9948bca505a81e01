"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and translate them into
status codes or user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist, or is not visible to the caller."""


class Unauthenticated(DomainException):
    """No credential was supplied, or it could not be verified."""


class Forbidden(DomainException):
    """The caller is authenticated but lacks the required role."""


class EmptyCartError(DomainException):
    """An order was requested from a cart with no entries."""


class OutOfStockError(DomainException):
    """A product in the cart is currently unavailable."""

    def __init__(self, product_id: str, product_name: str) -> None:
        super().__init__(f"Product '{product_name}' is out of stock")
        self.product_id = product_id


class ConflictError(DomainException):
    """The operation conflicts with existing state."""


class StorageUnavailable(DomainException):
    """The document store could not be read or written."""


class StorageTimeout(StorageUnavailable):
    """A storage lock could not be acquired in time."""
