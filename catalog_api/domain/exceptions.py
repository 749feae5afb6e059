"""Domain exceptions.

All domain-level errors raised by the catalog service when a request
cannot be honoured. The API layer maps each class to an HTTP status.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    status_code: int = 400
    error_code: str = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
            error_code: Optional machine-readable code overriding the class default.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code


class ValidationError(DomainError):
    """Raised when input is malformed or references missing rows."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Raised when the addressed entity does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(
        self,
        entity_type: str,
        entity_id: Any = None,
        message: str | None = None,
    ) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Product", "File").
            entity_id: ID of the missing entity, if there is a single one.
            message: Optional message replacing the generated one.
        """
        if message is None:
            message = f"{entity_type} not found"
            if entity_id is not None:
                message = f"{entity_type} not found: {entity_id}"
        super().__init__(
            message,
            details={"entity_type": entity_type, "entity_id": entity_id},
            error_code=f"{_to_code(entity_type)}_NOT_FOUND",
        )


class ConflictError(DomainError):
    """Raised when a write would violate a uniqueness or restrict rule."""

    status_code = 409
    error_code = "CONFLICT"


def _to_code(entity_type: str) -> str:
    """Convert an entity name such as "ProductFile" to "PRODUCT_FILE"."""
    chars = []
    for i, char in enumerate(entity_type):
        if char.isupper() and i > 0:
            chars.append("_")
        chars.append(char.upper())
    return "".join(chars).replace(" ", "_")
