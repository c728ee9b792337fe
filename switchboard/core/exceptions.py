"""
Core Exceptions

Custom exceptions for the Switchboard platform.
Routers translate these into HTTP responses.
"""


class AccessDeniedError(Exception):
    """
    Raised when a user does not have access to an entity.

    Used by repositories when the entity exists but belongs to
    another user.
    """

    def __init__(self, message: str = "Access denied"):
        self.message = message
        super().__init__(self.message)


class CatalogError(Exception):
    """Raised when integration schema files cannot be loaded."""


class MissingFieldError(ValueError):
    """Raised when a request is prepared without a required field value."""

    def __init__(self, field_name: str, operation_id: str):
        self.field_name = field_name
        self.operation_id = operation_id
        super().__init__(
            f"Missing required field '{field_name}' for operation '{operation_id}'"
        )


class BillingError(Exception):
    """Base class for billing failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PlanNotFoundError(BillingError):
    """Raised when a checkout references an unknown plan."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__("Plan not found")


class FreePlanError(BillingError):
    """Raised when a checkout is requested for a plan with no price."""

    def __init__(self) -> None:
        super().__init__("This plan is free and does not require payment")


class NoBillingAccountError(BillingError):
    """Raised when the user has no payment provider customer yet."""

    def __init__(self) -> None:
        super().__init__("No subscription found for user")


class BillingProviderError(BillingError):
    """Raised when the payment provider rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
