from .handlers import handle_billing_event, handle_clerk_event
from .verification import verify_webhook

__all__ = ["handle_billing_event", "handle_clerk_event", "verify_webhook"]
