"""
Default per-event handler.

Echoes text messages back to the sender. Everything else is ignored.
"""

import logging
from typing import Any, Optional

from .client import LineMessagingClient
from .messages import text_message

logger = logging.getLogger(__name__)


async def handle_event(event: dict[str, Any], client: LineMessagingClient) -> Optional[dict[str, Any]]:
    """
    Handle one LINE event.

    Returns:
        Messaging API response for echoed text, None for ignored events

    Raises:
        LineApiError: reply failed
    """

    message = event.get("message") or {}
    if event.get("type") != "message" or message.get("type") != "text":
        logger.debug(f"Ignoring event type={event.get('type')}")
        return None

    return await client.reply_message(event["replyToken"], text_message(message["text"]))
