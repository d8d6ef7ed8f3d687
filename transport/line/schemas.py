"""
LINE Transport Layer - Pydantic Schemas

PURE DATA MODELS - NO LOGIC
Events are kept as raw dicts: their shape belongs to LINE.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# WEBHOOK PAYLOAD (INPUT)
# ============================================================================

class WebhookPayload(BaseModel):
    """
    Full LINE webhook payload, one per HTTP request.

    ref: https://developers.line.biz/en/reference/messaging-api/#request-body
    """

    destination: Optional[str] = Field(
        None,
        description="User ID of the bot that should receive the events"
    )
    events: list[dict[str, Any]] = Field(
        ...,
        description="Event batch. May be empty (webhook verification)."
    )

    model_config = ConfigDict(extra="allow")  # LINE may add fields


# ============================================================================
# DISPATCH RESULT (OUTPUT)
# ============================================================================

class EventOutcome(BaseModel):
    """
    Per-event result when failures are isolated.

    Exactly one of result/error is meaningful, selected by ok.
    """

    ok: bool
    result: Any = None
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)
