"""
Utility functions for HTTP message signing

This module provides timestamp resolution for the created and expires
parameters, structured-field value formatting, component line formatting,
and content digest calculation.
"""

import base64
import hashlib
import re
import time
from typing import Mapping, Optional, Union

from ..exceptions import ConfigurationError, ErrorCodes

INTEGER_PATTERN = re.compile(r'^-?[0-9]+$')
OFFSET_PATTERN = re.compile(r'^\+([0-9]+)$')

DIGEST_ALGORITHMS = {
    "sha-256": hashlib.sha256,
    "sha-512": hashlib.sha512,
}

TimeInput = Union[int, str, None]


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def parse_integer(name: str, value: str) -> int:
    """
    Parse a decimal integer option value.

    Raises:
        ConfigurationError: If the value is not an integer
    """
    text = value.strip()
    if not INTEGER_PATTERN.match(text):
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}",
            ErrorCodes.INVALID_INTEGER,
            {"parameter": name, "value": value}
        )
    return int(text)


def resolve_created(value: TimeInput, now: Optional[int] = None) -> Optional[int]:
    """
    Resolve the created parameter.

    Args:
        value: Epoch seconds, "now", or None
        now: Current time override (uses the clock if None)

    Returns:
        int or None: Absolute creation time
    """
    if value is None:
        return None

    if isinstance(value, int) and not isinstance(value, bool):
        return value

    if str(value).strip() == "now":
        return generate_timestamp() if now is None else now

    return parse_integer("created", str(value))


def resolve_expires(
    value: TimeInput,
    created: Optional[int] = None,
    now: Optional[int] = None
) -> Optional[int]:
    """
    Resolve the expires parameter.

    "+N" is an offset from created when created is set, otherwise from the
    current time. Anything else is an absolute epoch value.

    Args:
        value: Epoch seconds, "+N", or None
        created: Resolved creation time, if any
        now: Current time override (uses the clock if None)

    Returns:
        int or None: Absolute expiry time
    """
    if value is None:
        return None

    if isinstance(value, int) and not isinstance(value, bool):
        return value

    text = str(value).strip()
    match = OFFSET_PATTERN.match(text)
    if match:
        if created is not None:
            start = created
        else:
            start = generate_timestamp() if now is None else now
        return start + int(match.group(1))

    return parse_integer("expires", text)


def format_parameter_value(value: Union[int, str, bool]) -> str:
    """
    Serialize a parameter value as a structured-field bare item.

    Integers are written as-is, strings are double-quoted with backslash and
    double quote escaped.
    """
    if isinstance(value, bool):
        return "?1" if value else "?0"
    if isinstance(value, int):
        return str(value)
    escaped = str(value).replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def format_component_line(
    name: str,
    value: str,
    params: Optional[Mapping[str, Union[int, str, bool]]] = None
) -> str:
    """
    Format one covered component as a signature base line.

    Args:
        name: Component name, e.g. "@method" or "content-type"
        value: Component value
        params: Optional component parameters such as {"req": True}

    Returns:
        str: Line of the form '"name";params: value'
    """
    identifier = f'"{name}"'
    for param_name, param_value in (params or {}).items():
        if param_value is True:
            identifier += f";{param_name}"
        else:
            identifier += f";{param_name}={format_parameter_value(param_value)}"
    return f"{identifier}: {value}"


def encode_signature(signature: bytes) -> str:
    """Base64-encode raw signature bytes without delimiters."""
    return base64.b64encode(signature).decode('ascii')


def calculate_content_digest(content: Union[str, bytes, None], algorithm: str = "sha-256") -> str:
    """
    Calculate a Content-Digest header value for a message body.

    Args:
        content: Body content (string, bytes, or None)
        algorithm: "sha-256" or "sha-512"

    Returns:
        str: Header value such as 'sha-256=:<base64>:'

    Raises:
        ConfigurationError: If the algorithm is not supported
    """
    hasher = DIGEST_ALGORITHMS.get(algorithm)
    if hasher is None:
        raise ConfigurationError(
            f"Unsupported digest algorithm: {algorithm}",
            ErrorCodes.INVALID_PARAMETER,
            {"algorithm": algorithm, "supported": sorted(DIGEST_ALGORITHMS)}
        )

    if content is None:
        content = b""
    elif isinstance(content, str):
        content = content.encode('utf-8')

    digest_b64 = base64.b64encode(hasher(content).digest()).decode('ascii')
    return f"{algorithm}=:{digest_b64}:"
