"""Domain-level exceptions.

Every business rule violation is a subclass of DomainException so the CLI
layer can catch them uniformly and turn them into user-facing messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input or a violated invariant."""


class EntityNotFoundError(DomainException):
    """A referenced customer, branch, product or sale does not exist."""


class InactiveEntityError(DomainException):
    """A referenced customer, branch or product exists but is disabled."""


class DuplicateProductError(ValidationError):
    """The same product appears more than once in one sale request."""


class InvalidQuantityError(ValidationError):
    """Quantity is zero or negative."""


class QuantityExceedsLimitError(ValidationError):
    """Quantity is above the per-item ceiling."""


class InvalidDiscountError(ValidationError):
    """A manually supplied discount breaks the tier rules."""


class InsufficientStockError(DomainException):
    """A product does not have enough stock to cover a request."""


class SaleCancelledError(DomainException):
    """A mutation was attempted on a cancelled sale."""


class SaleAlreadyCancelledError(DomainException):
    pass


class SaleNotCancelledError(DomainException):
    pass


class DuplicateSaleNumberError(DomainException):
    """A sale number is already assigned to another sale."""
