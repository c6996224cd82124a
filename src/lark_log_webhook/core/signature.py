"""Signature generation utilities for Lark webhook security.

Lark custom bots with signature verification enabled expect a ``timestamp``
and a ``sign`` field in every request body. The signature is an
HMAC-SHA256 whose *key* is ``"{timestamp}\\n{secret}"`` and whose message is
empty. Lark rejects signatures whose timestamp is more than one hour away
from its own clock.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import time

SIGNATURE_TOLERANCE_SECONDS = 3600


def generate_sign(secret: str, timestamp: int | str | None = None) -> tuple[str, str]:
    """Generate the HMAC-SHA256 signature for a Lark webhook request.

    The signature is computed as:
    sign = base64(hmac-sha256(key="{timestamp}\\n{secret}", msg=""))

    Args:
        secret: Webhook secret key.
        timestamp: Unix timestamp in seconds. If None, current time is used.

    Returns:
        Tuple of (signature, timestamp) with the timestamp as a decimal string.

    Example:
        ```python
        sign, ts = generate_sign("my_secret")
        payload["sign"] = sign
        payload["timestamp"] = ts
        ```
    """
    if timestamp is None:
        timestamp = int(time.time())
    timestamp = str(timestamp)

    string_to_sign = f"{timestamp}\n{secret}"
    hmac_code = hmac.new(
        string_to_sign.encode("utf-8"),
        b"",
        digestmod=hashlib.sha256,
    ).digest()

    signature = base64.b64encode(hmac_code).decode("utf-8")
    return signature, timestamp


def verify_sign(
    secret: str,
    timestamp: int | str,
    signature: str,
    tolerance_seconds: int = SIGNATURE_TOLERANCE_SECONDS,
    now: float | None = None,
) -> bool:
    """Verify a Lark webhook signature.

    Args:
        secret: Webhook secret key.
        timestamp: Timestamp from the request.
        signature: Signature from the request.
        tolerance_seconds: Maximum distance between timestamp and now.
        now: Current time override, defaults to ``time.time()``.

    Returns:
        True if the signature is valid and inside the time window.
    """
    try:
        ts_value = int(timestamp)
    except (TypeError, ValueError):
        return False

    current_time = int(now if now is not None else time.time())
    if abs(current_time - ts_value) > tolerance_seconds:
        return False

    expected_sign, _ = generate_sign(secret, ts_value)

    # Constant-time comparison
    return hmac.compare_digest(expected_sign, signature)
