from __future__ import annotations


class EmailNotConfigured(Exception):
    """No email transport was configured at startup."""

    message = "Email service not configured. Please contact administrator."


class DeliveryError(Exception):
    """The email transport rejected (or never completed) a send."""

    message = "An error occurred while processing your submission."


class DeliveryAuthError(DeliveryError):
    """Credential rejected or missing permission at the provider."""

    message = "Email service configuration error. Please contact administrator."


class DeliveryConnectionError(DeliveryError):
    """Name resolution, network failure or timeout talking to the provider."""

    message = "Network connectivity issue. Please try again."


class PayloadTooLarge(Exception):
    message = "Request body too large"


class RateLimitExceeded(Exception):
    message = "Too many submissions, please try again later."

    def __init__(self, retry_after: int, limit: int):
        super().__init__(self.message)
        self.retry_after = retry_after
        self.limit = limit


def public_message(exc: Exception) -> str:
    """User-facing message for a failure on the submission path."""
    if isinstance(exc, (DeliveryError, EmailNotConfigured)):
        return exc.message
    return DeliveryError.message
