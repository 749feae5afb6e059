"""Domain layer - catalog error types.

Example usage:
    from catalog_api.domain import NotFoundError

    raise NotFoundError("Product", 42)
"""

from catalog_api.domain.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "ConflictError",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
