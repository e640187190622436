"""
Signature-Input and Signature header handling

Signatures travel as structured-field dictionaries keyed by a label:
Signature-Input carries the metadata and Signature the colon-delimited
base64 signature.
"""

from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError, ErrorCodes
from .types import SF_KEY_PATTERN
from .utils import encode_signature

DEFAULT_SIGNATURE_LABEL = "sig1"


def format_signature_headers(
    label: str,
    signature_metadata: str,
    signature: bytes
) -> Dict[str, str]:
    """
    Build Signature-Input and Signature header values.

    Args:
        label: Dictionary key naming the signature
        signature_metadata: The @signature-params value
        signature: Raw signature bytes

    Returns:
        dict: Header name to header value
    """
    if not isinstance(label, str) or not SF_KEY_PATTERN.match(label):
        raise ConfigurationError(
            f"Invalid signature label: {label!r}",
            ErrorCodes.INVALID_PARAMETER,
            {"label": label}
        )

    return {
        'Signature-Input': f"{label}={signature_metadata}",
        'Signature': f"{label}=:{encode_signature(signature)}:",
    }


def _split_members(value: str) -> List[str]:
    # Split a dictionary on top-level commas, outside strings and inner lists
    members = []
    current = []
    depth = 0
    in_string = False
    escaped = False

    for char in value:
        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
        elif char == ',' and depth == 0:
            members.append(''.join(current).strip())
            current = []
            continue
        current.append(char)

    tail = ''.join(current).strip()
    if tail:
        members.append(tail)
    return members


def parse_dictionary_header(value: str) -> List[Tuple[str, str]]:
    """
    Split a structured-field dictionary header into (label, member value) pairs.

    Raises:
        ConfigurationError: If a member has no label
    """
    pairs = []
    for member in _split_members(value):
        label, sep, member_value = member.partition('=')
        label = label.strip()
        if not sep or not SF_KEY_PATTERN.match(label):
            raise ConfigurationError(
                f"Malformed dictionary member: {member!r}",
                ErrorCodes.INVALID_SIGNATURE_HEADER,
                {"member": member}
            )
        pairs.append((label, member_value.strip()))
    return pairs


def _select_member(header_name: str, value: str, label: Optional[str]) -> str:
    pairs = parse_dictionary_header(value)
    if not pairs:
        raise ConfigurationError(
            f"{header_name} header is empty",
            ErrorCodes.INVALID_SIGNATURE_HEADER
        )

    if label is None:
        return pairs[0][1]

    for member_label, member_value in pairs:
        if member_label == label:
            return member_value

    raise ConfigurationError(
        f"{header_name} header has no signature labelled {label}",
        ErrorCodes.INVALID_SIGNATURE_HEADER,
        {"label": label, "available": [name for name, _ in pairs]}
    )


def parse_signature_header(value: str, label: Optional[str] = None) -> str:
    """
    Extract the ':<base64>:' signature for a label from a Signature header.

    Args:
        value: Signature header value
        label: Signature label (first member if None)

    Returns:
        str: Colon-delimited base64 signature
    """
    return _select_member('Signature', value, label)


def parse_signature_input_header(value: str, label: Optional[str] = None) -> str:
    """
    Extract the signature metadata for a label from a Signature-Input header.

    Args:
        value: Signature-Input header value
        label: Signature label (first member if None)

    Returns:
        str: The @signature-params value
    """
    return _select_member('Signature-Input', value, label)
