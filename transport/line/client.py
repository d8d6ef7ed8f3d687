"""
LINE Messaging API Client

Sends reply and push messages.
No formatting intelligence. No retries. No logic.
"""

import logging
from typing import Any, Optional, Union

import httpx

from config import Config

logger = logging.getLogger(__name__)

Message = dict[str, Any]


class LineApiError(Exception):
    """LINE Messaging API call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class LineMessagingClient:
    """
    Thin async client for the Messaging API.

    Holds the channel access token read-only; one httpx.AsyncClient per call.
    """

    def __init__(
        self,
        channel_access_token: str,
        base_url: str = "https://api.line.me",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._access_token = channel_access_token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "LineMessagingClient":
        """Create client from loaded configuration."""
        return cls(
            channel_access_token=config.channel_access_token,
            base_url=config.api_base_url,
            **kwargs,
        )

    async def reply_message(
        self,
        reply_token: str,
        messages: Union[Message, list[Message]],
    ) -> dict[str, Any]:
        """Reply to an event using its single-use reply token."""
        return await self._post(
            "/v2/bot/message/reply",
            {"replyToken": reply_token, "messages": _as_list(messages)},
        )

    async def push_message(
        self,
        to: str,
        messages: Union[Message, list[Message]],
    ) -> dict[str, Any]:
        """Push messages to a user, group or room ID."""
        return await self._post(
            "/v2/bot/message/push",
            {"to": to, "messages": _as_list(messages)},
        )

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"HTTP request failed: {e}", extra={"path": path})
            raise LineApiError(f"HTTP request failed: {e}") from e

        if not response.is_success:
            try:
                error_body = response.json()
            except ValueError:
                error_body = response.text
            logger.error(
                f"LINE API error: {response.status_code}",
                extra={
                    "path": path,
                    "status_code": response.status_code,
                    "error_body": error_body,
                }
            )
            raise LineApiError(
                f"LINE API returned {response.status_code}",
                status_code=response.status_code,
                body=error_body,
            )

        logger.debug(f"LINE API call succeeded: {path}")
        if not response.content:
            return {}
        return response.json()


def _as_list(messages: Union[Message, list[Message]]) -> list[Message]:
    if isinstance(messages, dict):
        return [messages]
    return list(messages)
