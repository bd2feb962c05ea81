class CartaException(Exception):
    """Base exception for the menu platform.

    Every subclass carries a machine-readable ``code`` that the shared
    exception handlers put next to the human-readable ``detail``.
    """

    default_code = "error"

    def __init__(self, message: str = "", code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class UnauthorizedException(CartaException):
    """Raised when there is no valid session or credentials are rejected"""

    default_code = "unauthorized"


class ForbiddenException(CartaException):
    """Raised when the session is valid but not allowed to perform the action"""

    default_code = "forbidden"


class PlanRestrictionException(ForbiddenException):
    """Raised when the tenant's subscription plan does not include a feature"""

    default_code = "plan_restriction"


class NotFoundException(CartaException):
    """Raised when resource not found or owned by another tenant"""

    default_code = "not_found"


class ConflictException(CartaException):
    """Raised when a unique key (slug, code, username, email) is already taken"""

    default_code = "conflict"


class GoneException(CartaException):
    """Raised for invitations that were already used or have expired"""

    default_code = "gone"


class ValidationException(CartaException):
    """Raised for business logic validation errors"""

    default_code = "validation_error"
