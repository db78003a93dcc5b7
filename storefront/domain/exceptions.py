"""Domain exceptions.

All domain-level errors that represent business rule violations.
Services raise these; the API layer maps each class onto an HTTP
status and a machine-readable error code.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(DomainError):
    """Raised when input fields are malformed or out of range.

    Carries one message per offending field so callers can report
    them field-by-field.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        """Initialize validation error.

        Args:
            field_errors: Mapping of field name to error message.
        """
        fields = ", ".join(field_errors)
        super().__init__(
            f"Invalid value for: {fields}",
            details={"fields": dict(field_errors)},
        )
        self.field_errors = dict(field_errors)


# ============================================================================
# Lookup Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Product", "Category").
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id

    @property
    def error_code(self) -> str:
        """Machine-readable code, e.g. PRODUCT_NOT_FOUND."""
        return f"{self.entity_type.upper()}_NOT_FOUND"


# ============================================================================
# Authorization Errors
# ============================================================================


class UnauthorizedError(DomainError):
    """Raised when an admin operation is attempted without a session."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when the session user does not own the target store."""

    def __init__(self, store_id: str, user_id: str) -> None:
        super().__init__(
            f"User {user_id} is not allowed to manage store {store_id}",
            details={"store_id": store_id, "user_id": user_id},
        )


# ============================================================================
# Persistence Errors
# ============================================================================


class DuplicateSkuError(DomainError):
    """Raised when a product SKU is already taken."""

    def __init__(self, sku: str) -> None:
        super().__init__(f"SKU already exists: {sku}", details={"sku": sku})
        self.sku = sku


class ProductRetrievalError(DomainError):
    """Raised when the product filter query fails.

    The caller gets no partial result.
    """

    def __init__(self) -> None:
        super().__init__("Failed to fetch filtered products")
