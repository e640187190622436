"""
Signature base construction for RFC 9421 HTTP Message Signatures
"""

from typing import Sequence, Tuple, Optional

from .metadata import build_signature_metadata
from .types import SignatureParameters

SIGNATURE_PARAMS_IDENTIFIER = '"@signature-params"'


def build_signature_params_line(signature_metadata: str) -> str:
    return f"{SIGNATURE_PARAMS_IDENTIFIER}: {signature_metadata}"


def build_signature_base(component_lines: Sequence[str], signature_metadata: str) -> str:
    """
    Build the signature base.

    Every component line is followed by a line feed; the @signature-params
    line comes last and has no trailing line feed.

    Args:
        component_lines: Component lines, used verbatim and in order
        signature_metadata: The @signature-params value

    Returns:
        str: The exact text that is signed or verified
    """
    lines = list(component_lines)
    lines.append(build_signature_params_line(signature_metadata))
    return "\n".join(lines)


def build_signature_base_for(
    component_lines: Sequence[str],
    params: Optional[SignatureParameters] = None
) -> Tuple[str, str]:
    """
    Build metadata and signature base together.

    Returns:
        tuple: (signature_base, signature_metadata)
    """
    signature_metadata = build_signature_metadata(component_lines, params)
    return build_signature_base(component_lines, signature_metadata), signature_metadata


def signature_base_bytes(signature_base) -> bytes:
    """Signing input for a signature base given as text or bytes."""
    if isinstance(signature_base, bytes):
        return signature_base
    return signature_base.encode('utf-8')
