"""
LINE Signature Verification

SECURITY BOUNDARY - Verify the X-Line-Signature HMAC.
No handler imports. No retries. No logic.
"""

import base64
import hashlib
import hmac

from fastapi import HTTPException, Request, status

SIGNATURE_HEADER = "X-Line-Signature"


class SignatureVerificationError(Exception):
    """Signature verification failed."""
    pass


def compute_signature(body: bytes, channel_secret: str) -> str:
    """Return base64(HMAC-SHA256(channel_secret, body))."""
    digest = hmac.new(
        key=channel_secret.encode("utf-8"),
        msg=body,
        digestmod=hashlib.sha256
    ).digest()
    return base64.b64encode(digest).decode("utf-8")


def validate_signature(body: bytes, channel_secret: str, signature: str) -> bool:
    """Compare signature to the expected one in constant time."""
    expected = compute_signature(body, channel_secret)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))


async def verify_signature(
    request: Request,
    body: bytes,
    channel_secret: str,
) -> None:
    """
    Verify LINE HMAC-SHA256 signature on a webhook request.

    LINE sends:
    - X-Line-Signature header with base64 HMAC
    - Request body

    Raises:
        HTTPException(401): Missing signature
        HTTPException(403): Invalid signature

    Args:
        request: FastAPI Request object
        body: Raw request body bytes
        channel_secret: LINE channel secret from config
    """

    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {SIGNATURE_HEADER} header"
        )

    if not validate_signature(body, channel_secret, signature):
        raise SignatureVerificationError("Invalid signature")
