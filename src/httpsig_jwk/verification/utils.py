"""
Utility functions for signature verification
"""

import base64
import time
from typing import Optional, Union

from ..signing.types import SignatureParameters


def strip_signature_delimiters(signature: str) -> str:
    """Remove surrounding whitespace and at most one colon on each side."""
    text = signature.strip()
    if text.startswith(':'):
        text = text[1:]
    if text.endswith(':'):
        text = text[:-1]
    return text


def decode_signature(signature: Union[str, bytes]) -> bytes:
    """
    Decode a transported signature.

    Leading and trailing colon delimiters are optional, so ':AAAA:' and
    'AAAA' decode to the same bytes.

    Raises:
        binascii.Error: If the value is not valid base64
    """
    if isinstance(signature, bytes):
        signature = signature.decode('ascii')

    return base64.b64decode(strip_signature_delimiters(signature), validate=True)


def check_signature_window(
    params: SignatureParameters,
    now: Optional[int] = None,
    max_age: Optional[int] = None,
    clock_skew: int = 0
) -> bool:
    """
    Check created and expires against the current time.

    The raw verifier never applies this policy; callers that want staleness
    checks call it themselves after a successful verification.

    Args:
        params: Signature parameters of the verified signature
        now: Current time (uses the clock if None)
        max_age: Maximum accepted age in seconds, measured from created
        clock_skew: Tolerance in seconds for clock differences

    Returns:
        bool: True if the signature is inside its validity window
    """
    if now is None:
        now = int(time.time())

    if params.created is not None and params.created > now + clock_skew:
        return False

    if params.expires is not None and params.expires < now - clock_skew:
        return False

    if max_age is not None:
        if params.created is None:
            return False
        if now - params.created > max_age + clock_skew:
            return False

    return True
