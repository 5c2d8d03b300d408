"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a stable ``code`` that callers can map to their own
result types.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "VALIDATION_ERROR"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class ConcurrencyConflict(DomainException):
    """The aggregate was changed by someone else between load and save.

    The only retryable failure: reload the aggregate and re-apply the command.
    """

    code = "CONCURRENCY_CONFLICT"


# --- Value objects -----------------------------------------------------------


class InvalidMoney(ValidationError):
    code = "INVALID_MONEY"


class CurrencyMismatch(ValidationError):
    code = "CURRENCY_MISMATCH"


class InvalidQuantity(ValidationError):
    code = "INVALID_QUANTITY"


# --- Lifecycle ---------------------------------------------------------------


class InvalidStatusTransition(ValidationError):
    code = "INVALID_STATUS_TRANSITION"


class OrderNotModifiable(ValidationError):
    code = "ORDER_NOT_MODIFIABLE"


class CustomerInfoNotModifiable(ValidationError):
    code = "CUSTOMER_INFO_NOT_MODIFIABLE"


class CannotSubmitOrder(ValidationError):
    code = "CANNOT_SUBMIT_ORDER"


# --- Item collection ---------------------------------------------------------


class DuplicateItem(ValidationError):
    code = "DUPLICATE_ITEM"


class ItemNotFound(ValidationError):
    code = "ITEM_NOT_FOUND"


# --- Cross-context and domain service ----------------------------------------


class ProductNotAvailable(ValidationError):
    code = "PRODUCT_NOT_AVAILABLE"


class BelowMinimumOrderAmount(ValidationError):
    code = "ORDER_BELOW_MINIMUM"


class DuplicateSku(ValidationError):
    code = "DUPLICATE_SKU"


class DuplicateOrderNumber(ValidationError):
    code = "DUPLICATE_ORDER_NUMBER"


# --- Lookups -----------------------------------------------------------------


class OrderNotFound(EntityNotFoundError):
    code = "ORDER_NOT_FOUND"


class ProductNotFound(EntityNotFoundError):
    code = "PRODUCT_NOT_FOUND"
