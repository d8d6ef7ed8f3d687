"""
LINE Message Builder Tests

Flex bubbles, paging and the plain-text fallback.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from transport.line.client import LineApiError
from transport.line.messages import (
    build_flex_bubble,
    chunk_lines,
    now_local,
    push_flex_or_text,
    safe_push,
    safe_reply,
    text_message,
)


def _mock_client(push_side_effect=None):
    client = MagicMock()
    client.push_message = AsyncMock(return_value={}, side_effect=push_side_effect)
    client.reply_message = AsyncMock(return_value={})
    return client


class TestBuilders:

    def test_text_message(self):
        assert text_message("hi") == {"type": "text", "text": "hi"}

    def test_flex_bubble_structure(self):
        bubble = build_flex_bubble("Round 1", ["a vs b", "c vs d"], subtitle="now")

        assert bubble["type"] == "flex"
        assert bubble["altText"] == "Round 1"
        header = bubble["contents"]["header"]["contents"]
        assert header[0] == {"type": "text", "text": "Round 1", "weight": "bold", "size": "lg"}
        assert header[1]["text"] == "now"
        body = bubble["contents"]["body"]["contents"]
        assert body == [
            {"type": "text", "text": "a vs b", "wrap": True},
            {"type": "text", "text": "c vs d", "wrap": True},
        ]

    def test_flex_bubble_defaults_subtitle_to_timestamp(self):
        bubble = build_flex_bubble("T", ["x"])
        assert bubble["contents"]["header"]["contents"][1]["text"]

    def test_now_local_format(self):
        value = now_local("UTC")
        # dd/mm/YYYY HH:MM:SS
        assert len(value) == 19
        assert value[2] == "/" and value[5] == "/"


class TestChunkLines:

    def test_pages_of_ten(self):
        lines = [str(i) for i in range(23)]
        pages = chunk_lines(lines)
        assert [len(p) for p in pages] == [10, 10, 3]
        assert sum(pages, []) == lines

    def test_empty(self):
        assert chunk_lines([]) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            chunk_lines(["a"], size=0)


class TestSafeSend:

    @pytest.mark.asyncio
    async def test_safe_push_swallows_api_error(self):
        client = _mock_client(push_side_effect=LineApiError("nope", status_code=400))
        assert await safe_push(client, "U1", text_message("x")) is None

    @pytest.mark.asyncio
    async def test_safe_reply_returns_result(self):
        client = _mock_client()
        client.reply_message.return_value = {"sentMessages": []}
        assert await safe_reply(client, "rt", text_message("x")) == {"sentMessages": []}


class TestPushFlexOrText:

    @pytest.mark.asyncio
    async def test_single_page_keeps_title(self):
        client = _mock_client()

        assert await push_flex_or_text(client, "G1", "Round", ["a", "b"]) is True

        client.push_message.assert_awaited_once()
        to, bubble = client.push_message.await_args.args
        assert to == "G1"
        assert bubble["altText"] == "Round"

    @pytest.mark.asyncio
    async def test_multiple_pages_numbered(self):
        client = _mock_client()
        lines = [str(i) for i in range(15)]

        assert await push_flex_or_text(client, "G1", "Round", lines) is True

        titles = [call.args[1]["altText"] for call in client.push_message.await_args_list]
        assert titles == ["Round (page 1/2)", "Round (page 2/2)"]

    @pytest.mark.asyncio
    async def test_empty_lines_send_nothing(self):
        client = _mock_client()

        assert await push_flex_or_text(client, "G1", "Round", []) is True

        client.push_message.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_text_on_flex_failure(self):
        client = _mock_client(push_side_effect=[LineApiError("bad flex", status_code=400), {}])

        assert await push_flex_or_text(client, "G1", "Round", ["a", "b"]) is False

        assert client.push_message.await_count == 2
        to, fallback = client.push_message.await_args.args
        assert to == "G1"
        assert fallback == {"type": "text", "text": "Round\na\nb"}

    @pytest.mark.asyncio
    async def test_fallback_failure_is_logged_not_raised(self):
        client = _mock_client(push_side_effect=LineApiError("down", status_code=503))

        assert await push_flex_or_text(client, "G1", "Round", ["a"]) is False
