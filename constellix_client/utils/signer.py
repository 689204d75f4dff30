"""
Token signer - Request authentication for the Constellix API

Every request carries an ``x-cns-security-token`` header proving possession of
the secret key without sending it. The token is built from the API key, an
HMAC-SHA1 of the current epoch time in milliseconds, and that timestamp.
"""

import base64
import hashlib
import hmac
import time
from typing import Union

SECURITY_TOKEN_HEADER = "x-cns-security-token"


def current_millis() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def sign(api_key: str, secret_key: Union[str, bytes], now_millis: int) -> str:
    """
    Build a signed token for a single request.

    Args:
        api_key: The account API key
        secret_key: The account secret key, used as the HMAC key
        now_millis: Epoch time in milliseconds

    Returns:
        Token in the form ``api_key:base64(hmac):now_millis``
    """
    if isinstance(secret_key, str):
        secret_key = secret_key.encode("utf-8")

    timestamp = str(now_millis)
    digest = hmac.new(secret_key, timestamp.encode("utf-8"), hashlib.sha1).digest()
    signature = base64.b64encode(digest).decode("ascii")

    return f"{api_key}:{signature}:{timestamp}"


def get_token(api_key: str, secret_key: Union[str, bytes]) -> str:
    """Sign a token with the current time."""
    return sign(api_key, secret_key, current_millis())
