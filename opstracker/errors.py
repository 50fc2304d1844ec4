"""Error taxonomy shared by services, webhooks and the worker.

Every error carries the HTTP status the API layer should answer with and a
message that is safe to show to the end user verbatim.
"""

from __future__ import annotations


class OpsTrackerError(Exception):
    """Base class for all domain errors."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationRequired(OpsTrackerError):
    """The caller has no resolvable identity."""

    status_code = 401

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class NotFoundError(OpsTrackerError):
    """The row does not exist or is owned by someone else.

    Both cases share this one kind so callers cannot probe for rows
    belonging to other users.
    """

    status_code = 404

    @classmethod
    def for_label(cls, label: str) -> "NotFoundError":
        return cls(f"{label} not found or unauthorized")


class ValidationFailed(OpsTrackerError):
    """Malformed or out-of-range input rejected before touching the store."""

    status_code = 422


class PlanLimitExceeded(OpsTrackerError):
    """The caller's plan does not allow another row in this table."""

    status_code = 402

    def __init__(self, message: str, *, table: str, limit: int) -> None:
        super().__init__(message)
        self.table = table
        self.limit = limit


class WebhookSignatureInvalid(OpsTrackerError):
    """An inbound webhook failed signature verification."""

    status_code = 400


class WebhookNotConfigured(OpsTrackerError):
    """The webhook secret is missing from the server configuration."""

    status_code = 500


class StoreError(OpsTrackerError):
    """The backing store failed; usually transient."""

    status_code = 503


__all__ = [
    "OpsTrackerError",
    "AuthenticationRequired",
    "NotFoundError",
    "ValidationFailed",
    "PlanLimitExceeded",
    "WebhookSignatureInvalid",
    "WebhookNotConfigured",
    "StoreError",
]
