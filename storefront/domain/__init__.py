"""Domain layer - error taxonomy shared by services and the API."""

from storefront.domain.exceptions import (
    DomainError,
    DuplicateSkuError,
    ForbiddenError,
    NotFoundError,
    ProductRetrievalError,
    UnauthorizedError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "DuplicateSkuError",
    "ForbiddenError",
    "NotFoundError",
    "ProductRetrievalError",
    "UnauthorizedError",
    "ValidationError",
]
