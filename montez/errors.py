"""Error types raised by the calculation services."""


class BillingError(Exception):
    """Base billing error."""

    def __init__(self, message: str, code: str = "billing_error"):
        """Initialize error."""
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(BillingError, ValueError):
    """Input violates a numeric or lookup invariant.

    Also a ValueError so callers that already catch ValueError keep working.
    """

    def __init__(self, message: str, code: str = "validation_error"):
        super().__init__(message, code)


def error_response(error: BillingError) -> dict:
    """Create a standardized error payload for presentation layers."""
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }
