"""Domain error classes.

Protocol-agnostic errors that represent business failures.
Every error can describe itself as a field-error map (field name -> ordered
list of messages), which protocol adapters place into their response format.
"""

from typing import Any

FieldErrors = dict[str, list[str]]

GLOBAL_FIELD = "global"


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains business error information that
    can be translated to HTTP (or any other protocol) by an adapter.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def field_errors(self) -> FieldErrors:
        """Errors keyed by field. Errors without a field land under ``global``."""
        return {GLOBAL_FIELD: [self.message]}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            "errors": self.field_errors(),
            **self.context,
        }


class ValidationError(DomainError):
    """Input validation error.

    Carries every violation found, keyed by field, so a single response
    can report several fields and several messages per field.

    Examples:
        - msrp with three decimal places
        - year outside [1900, next year]
        - page=0 on the list endpoint

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: FieldErrors | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: Field-error map, e.g. {"year": ["This value should be of type digit."]}
            **context: Additional context
        """
        self.errors: FieldErrors = {field: list(messages) for field, messages in (errors or {}).items()}
        msg = message or ("Validation failed" if self.errors else "Validation error")

        super().__init__(msg, **context)

    def field_errors(self) -> FieldErrors:
        if self.errors:
            return self.errors
        return super().field_errors()


class EmptyPayloadError(ValidationError):
    """No fields were submitted to a create or update operation.

    Kept distinct from field-level errors: the map only ever holds ``data``.
    """

    error_code: str = "EMPTY_PAYLOAD"

    MESSAGE = "No data sent to update."

    def __init__(self, **context: Any) -> None:
        super().__init__(self.MESSAGE, errors={"data": [self.MESSAGE]}, **context)


class NotFoundError(DomainError):
    """Vehicle not found (absent, or outside the served partition).

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, identifier: int | str, **context: Any) -> None:
        """Create a not found error.

        Args:
            identifier: Vehicle id that was looked up
            **context: Additional context
        """
        self.identifier = identifier
        super().__init__(f"No product found for id {identifier}", **context)

    def field_errors(self) -> FieldErrors:
        return {"id": [self.message]}


class ConflictError(DomainError):
    """Business constraint conflict detected at write time.

    Examples:
        - Duplicate VIN slipping past validation (concurrent creates)

    Protocol mappings:
        - REST: 409 Conflict
    """

    error_code: str = "CONFLICT"

    def __init__(self, message: str, field: str | None = None, **context: Any) -> None:
        self.field = field
        super().__init__(message, **context)

    def field_errors(self) -> FieldErrors:
        if self.field:
            return {self.field: [self.message]}
        return super().field_errors()


class InternalError(DomainError):
    """Internal domain error (unexpected conditions).

    Should be logged for investigation.

    Protocol mappings:
        - REST: 500 Internal Server Error
    """

    error_code: str = "INTERNAL_ERROR"
