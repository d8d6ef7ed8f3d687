"""LINE Transport Layer - Module Exports"""

from .client import LineApiError, LineMessagingClient
from .dispatcher import DispatchPolicy, EventHandler, EventHandlerError, dispatch_events
from .handlers import handle_event
from .messages import (
    build_flex_bubble,
    chunk_lines,
    push_flex_or_text,
    safe_push,
    safe_reply,
    text_message,
)
from .schemas import EventOutcome, WebhookPayload
from .security import (
    SignatureVerificationError,
    compute_signature,
    validate_signature,
    verify_signature,
)
from .webhook import router

__all__ = [
    # Schemas
    "WebhookPayload",
    "EventOutcome",
    # Security
    "compute_signature",
    "validate_signature",
    "verify_signature",
    "SignatureVerificationError",
    # Dispatch
    "dispatch_events",
    "DispatchPolicy",
    "EventHandler",
    "EventHandlerError",
    "handle_event",
    # Client
    "LineMessagingClient",
    "LineApiError",
    # Messages
    "text_message",
    "build_flex_bubble",
    "chunk_lines",
    "safe_reply",
    "safe_push",
    "push_flex_or_text",
    # Router
    "router",
]
