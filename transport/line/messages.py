"""
LINE message builders and safe senders.

Flex bubbles are paged at MAX_LINES_PER_BUBBLE rows. When a Flex push is
rejected the same content goes out once more as plain text.
"""

import logging
from datetime import datetime
from typing import Any, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from .client import LineApiError, LineMessagingClient, Message

logger = logging.getLogger(__name__)

MAX_LINES_PER_BUBBLE = 10
DEFAULT_TIMEZONE = "Asia/Bangkok"


def text_message(text: str) -> Message:
    """Plain text message object."""
    return {"type": "text", "text": text}


def now_local(tz: str = DEFAULT_TIMEZONE) -> str:
    """Current time as shown in bubble headers."""
    return datetime.now(ZoneInfo(tz)).strftime("%d/%m/%Y %H:%M:%S")


def build_flex_bubble(
    title: str,
    lines: Sequence[str],
    subtitle: Optional[str] = None,
) -> Message:
    """
    Build a Flex bubble: bold title and timestamp header, one wrapped
    text row per line in the body.
    """
    return {
        "type": "flex",
        "altText": title,
        "contents": {
            "type": "bubble",
            "header": {
                "type": "box",
                "layout": "vertical",
                "contents": [
                    {"type": "text", "text": title, "weight": "bold", "size": "lg"},
                    {
                        "type": "text",
                        "text": subtitle if subtitle is not None else now_local(),
                        "size": "xs",
                        "color": "#999999",
                    },
                ],
            },
            "body": {
                "type": "box",
                "layout": "vertical",
                "spacing": "sm",
                "contents": [
                    {"type": "text", "text": line, "wrap": True} for line in lines
                ],
            },
        },
    }


def chunk_lines(lines: Sequence[str], size: int = MAX_LINES_PER_BUBBLE) -> list[list[str]]:
    """Split lines into pages of at most size."""
    if size < 1:
        raise ValueError("size must be positive")
    return [list(lines[i:i + size]) for i in range(0, len(lines), size)]


async def safe_reply(
    client: LineMessagingClient,
    reply_token: str,
    messages: Union[Message, list[Message]],
) -> Optional[dict[str, Any]]:
    """Reply, logging API failures instead of raising."""
    try:
        return await client.reply_message(reply_token, messages)
    except LineApiError as e:
        logger.error(f"Reply failed: {e}", extra={"error_body": e.body})
        return None


async def safe_push(
    client: LineMessagingClient,
    to: str,
    messages: Union[Message, list[Message]],
) -> Optional[dict[str, Any]]:
    """Push, logging API failures instead of raising."""
    try:
        return await client.push_message(to, messages)
    except LineApiError as e:
        logger.error(f"Push to {to} failed: {e}", extra={"error_body": e.body})
        return None


async def push_flex_or_text(
    client: LineMessagingClient,
    to: str,
    title: str,
    lines: Sequence[str],
) -> bool:
    """
    Push lines as paged Flex bubbles, falling back to one text message.

    An empty line list sends nothing.

    Returns:
        True if every Flex page was sent, False if the text fallback was used
    """

    pages = chunk_lines(lines)
    try:
        for i, page in enumerate(pages, start=1):
            page_title = f"{title} (page {i}/{len(pages)})" if len(pages) > 1 else title
            await client.push_message(to, build_flex_bubble(page_title, page))
        return True
    except LineApiError as e:
        logger.error(
            f"Flex push failed, falling back to plain text: {e}",
            extra={"error_body": e.body}
        )

    await safe_push(client, to, text_message("\n".join([title, *lines])))
    return False
