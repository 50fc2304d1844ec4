"""Signature verification for Clerk identity and billing webhooks (delivered through Svix)."""

from __future__ import annotations

import binascii
from typing import Any, Dict, Mapping, Optional

from svix.webhooks import Webhook, WebhookVerificationError

from ..errors import WebhookNotConfigured, WebhookSignatureInvalid


def verify_webhook(body: bytes, headers: Mapping[str, str], secret: Optional[str]) -> Dict[str, Any]:
    """Verify the ``svix-*`` headers against ``body`` and return the decoded event.

    Raises ``WebhookNotConfigured`` when ``secret`` is missing or malformed and
    ``WebhookSignatureInvalid`` for anything wrong with the request itself.
    """

    if not secret:
        raise WebhookNotConfigured("Webhook secret is not configured")

    try:
        webhook = Webhook(secret)
    except (binascii.Error, ValueError):
        raise WebhookNotConfigured("Webhook secret is not valid base64") from None

    try:
        event = webhook.verify(body, dict(headers))
    except WebhookVerificationError as exc:
        raise WebhookSignatureInvalid(f"Invalid webhook signature: {exc}") from None
    except ValueError:
        raise WebhookSignatureInvalid("Webhook body is not valid JSON") from None

    if not isinstance(event, dict):
        raise WebhookSignatureInvalid("Webhook body must be a JSON object")
    return event
