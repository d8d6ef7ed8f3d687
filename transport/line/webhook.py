"""
LINE Webhook Receiver

FastAPI router: verify signature, parse the event batch, dispatch every
event, answer with the ordered outcomes.
No handler logic. Pure transport.
"""

import json
import logging

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .dispatcher import DispatchPolicy, EventHandlerError, dispatch_events
from .schemas import WebhookPayload
from .security import SignatureVerificationError, verify_signature

logger = logging.getLogger(__name__)

router = APIRouter(tags=["LINE Transport"])


@router.post("/webhook")
async def line_webhook_receiver(request: Request) -> JSONResponse:
    """
    Receive a LINE event batch.

    Flow:
    1. Get raw body
    2. Verify signature (401 if missing, 403 if invalid)
    3. Parse into WebhookPayload (400 if malformed)
    4. Dispatch every event concurrently
    5. Return outcomes in event order

    Returns:
        JSON array, one outcome per event

    Raises:
        HTTPException(401): Missing signature
        HTTPException(403): Invalid signature
        HTTPException(400): Invalid payload
        HTTPException(500): A handler failed (fail_all policy)
    """

    state = request.app.state

    # Step 1: Get raw body for signature verification
    body = await request.body()

    # Step 2: Verify signature (security boundary)
    try:
        await verify_signature(request, body, state.config.channel_secret)
        logger.debug("Signature verified for LINE webhook")
    except HTTPException as e:
        logger.warning(f"Signature verification failed: {e.detail}")
        raise
    except SignatureVerificationError as e:
        logger.warning(f"Signature verification failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid signature"
        )

    # Step 3: Parse the event batch
    try:
        payload = WebhookPayload(**json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, RecursionError, ValidationError) as e:
        logger.warning(f"Invalid webhook payload: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid webhook payload"
        )

    logger.info(
        f"Received {len(payload.events)} event(s)",
        extra={"destination": payload.destination}
    )

    # Step 4: Dispatch
    policy: DispatchPolicy = state.dispatch_policy
    try:
        outcomes = await dispatch_events(payload.events, state.handler, state.client, policy)
    except EventHandlerError as e:
        logger.error(
            f"Event handling failed: {e}",
            exc_info=e.cause,
            extra={
                "event_index": e.index,
                "event_type": e.event.get("type"),
            }
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event handling failed"
        )

    return JSONResponse(content=jsonable_encoder(outcomes))
