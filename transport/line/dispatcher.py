"""
LINE Event Dispatcher

Fans one verified event batch out to the per-event handler and joins the
results back in batch order.

Launch all, then join all: every handler is started immediately with no
concurrency limit and no timeout. A handler that never settles holds the
request open.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence

from .client import LineMessagingClient
from .schemas import EventOutcome

logger = logging.getLogger(__name__)

EventHandler = Callable[[dict[str, Any], LineMessagingClient], Awaitable[Any]]


class DispatchPolicy(str, Enum):
    """How a failing handler affects the rest of its batch."""

    FAIL_ALL = "fail_all"  # any failure fails the whole batch
    ISOLATE = "isolate"  # capture success/failure per event


class EventHandlerError(Exception):
    """A per-event handler failed."""

    def __init__(self, index: int, event: dict[str, Any], cause: BaseException):
        super().__init__(f"Handler failed for event {index}: {cause!r}")
        self.index = index
        self.event = event
        self.cause = cause


async def dispatch_events(
    events: Sequence[dict[str, Any]],
    handler: EventHandler,
    client: LineMessagingClient,
    policy: DispatchPolicy = DispatchPolicy.FAIL_ALL,
) -> list[Any]:
    """
    Run handler once per event, concurrently, and return outcomes in order.

    Args:
        events: Verified event batch (not validated further)
        handler: async (event, client) -> outcome
        client: Shared read-only messaging client
        policy: FAIL_ALL raises on the first failure, ISOLATE returns
            an EventOutcome per event

    Returns:
        One outcome per event, same positions as the input

    Raises:
        EventHandlerError: any handler failed (FAIL_ALL only)
    """

    if not events:
        return []

    async def run(index: int, event: dict[str, Any]) -> Any:
        try:
            return await handler(event, client)
        except Exception as e:
            raise EventHandlerError(index, event, e) from e

    logger.debug(f"Dispatching {len(events)} event(s)", extra={"policy": policy.value})

    if policy is DispatchPolicy.ISOLATE:
        results = await asyncio.gather(
            *(run(i, event) for i, event in enumerate(events)),
            return_exceptions=True,
        )
        outcomes = []
        for result in results:
            if isinstance(result, EventHandlerError):
                logger.warning(
                    f"Event {result.index} failed: {result.cause!r}",
                    extra={"event_type": result.event.get("type")}
                )
                outcomes.append(EventOutcome(ok=False, error=str(result.cause)))
            elif isinstance(result, BaseException):
                raise result
            else:
                outcomes.append(EventOutcome(ok=True, result=result))
        return outcomes

    return list(await asyncio.gather(*(run(i, event) for i, event in enumerate(events))))
