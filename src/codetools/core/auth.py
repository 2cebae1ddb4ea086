"""
Gateway request signatures.

The gateway signs every forwarded request with HMAC-SHA256 over the request
timestamp followed by the raw body, and sends the hex digest and the
timestamp (milliseconds since the epoch) in headers.
"""

import hashlib
import hmac
import time

from codetools.core.errors import AuthenticationError

SIGNATURE_HEADER = "x-auth-signature"
TIMESTAMP_HEADER = "x-auth-timestamp"


def compute_signature(secret: str, timestamp: str, body: bytes = b"") -> str:
    """
    Compute the hex HMAC-SHA256 signature of a request.

    Args:
        secret: Shared secret
        timestamp: Timestamp header value, signed as sent
        body: Raw request body

    Returns:
        Hex digest
    """
    mac = hmac.new(secret.encode("utf-8"), digestmod=hashlib.sha256)
    mac.update(timestamp.encode("utf-8"))
    if body:
        mac.update(body)
    return mac.hexdigest()


def verify_signature(
    secret: str,
    signature: str | None,
    timestamp: str | None,
    body: bytes = b"",
    max_skew_ms: int = 60000,
    now_ms: int | None = None,
) -> None:
    """
    Verify a signed request.

    Args:
        secret: Shared secret
        signature: Signature header value
        timestamp: Timestamp header value
        body: Raw request body
        max_skew_ms: Maximum allowed distance between timestamp and now
        now_ms: Current time in milliseconds (defaults to the wall clock)

    Raises:
        AuthenticationError: If headers are missing, the request is expired
            or the signature does not match
    """
    if not signature or not timestamp:
        raise AuthenticationError("Missing auth headers")

    try:
        sent_ms = int(timestamp)
    except ValueError:
        raise AuthenticationError("Invalid timestamp") from None

    current_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    if abs(current_ms - sent_ms) > max_skew_ms:
        raise AuthenticationError("Request expired")

    expected = compute_signature(secret, timestamp, body)
    if not hmac.compare_digest(signature.lower().encode("utf-8"), expected.encode("ascii")):
        raise AuthenticationError("Invalid Signature")
