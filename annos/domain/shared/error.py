"""Error hierarchy for annos.

Error layers:
- AnnosError: Base class for all annos errors
- DomainError: Business rule violations, validation failures
- InfrastructureError: Ledger and store failures

Errors are returned inside ``Err`` across component boundaries rather than raised.
Adapters raise library exceptions internally and convert them at their edge.
"""


class AnnosError(Exception):
    """Base class for all annos errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(AnnosError):
    """Base class for domain/business errors."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class NotFoundError(DomainError):
    """Resource not found."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="NOT_FOUND")


class TypeMismatchError(DomainError):
    """Declared value type does not match the field's type."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TYPE_MISMATCH")


class InvalidValueTypeError(TypeMismatchError):
    """Replacement value has a different type than the current one."""

    def __init__(self, message: str = "New value must have the same type as the current value") -> None:
        super().__init__(message)


class InvariantViolationError(DomainError):
    """Aggregate invariant would be broken."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVARIANT_VIOLATION")


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(AnnosError):
    """Base class for infrastructure/system errors."""


class PublishError(InfrastructureError):
    """Ledger write failed or returned an unexpected shape."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, code="PUBLISH_FAILED")
        self.cause = cause


class PersistError(InfrastructureError):
    """Local store write failed after a successful publish."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message, code="PERSIST_FAILED")
        self.cause = cause


class ExternalServiceError(InfrastructureError):
    """External service (ledger host) is unavailable or failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""


class UnexpectedError(AnnosError):
    """Any failure not covered above, wrapped generically."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"An unexpected error occurred: {cause}", code="UNEXPECTED")
        self.cause = cause
