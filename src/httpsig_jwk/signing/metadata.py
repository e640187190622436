"""
Signature metadata construction for RFC 9421 HTTP Message Signatures

This module collects signature parameters from caller input and serializes
the covered component identifiers and parameters into the @signature-params
structured-field value.
"""

from typing import Iterable, Mapping, Optional, Sequence

from .types import SignatureParameters, ParameterValue
from .utils import TimeInput, format_parameter_value, resolve_created, resolve_expires


def extract_component_identifier(component_line: str) -> str:
    """
    Return the component identifier of a component line.

    The identifier is everything before the first colon, kept verbatim,
    e.g. '"@query-param";name="id"' for '"@query-param";name="id": 7'.
    """
    return component_line.split(":", 1)[0]


def build_component_list(component_lines: Iterable[str]) -> str:
    """Inner list of component identifiers in the order supplied."""
    identifiers = " ".join(extract_component_identifier(line) for line in component_lines)
    return f"({identifiers})"


def build_signature_metadata(
    component_lines: Sequence[str],
    params: Optional[SignatureParameters] = None
) -> str:
    """
    Build the @signature-params value.

    Args:
        component_lines: Component lines in signature base order
        params: Signature parameters (None for no parameters)

    Returns:
        str: Value such as '("@method" "@target-uri");created=1;keyid="K1"'
    """
    metadata = build_component_list(component_lines)

    if params is not None:
        for name, value in params.items():
            metadata += f";{name}={format_parameter_value(value)}"

    return metadata


def collect_signature_parameters(
    alg: Optional[str] = None,
    created: TimeInput = None,
    expires: TimeInput = None,
    keyid: Optional[str] = None,
    nonce: Optional[str] = None,
    tag: Optional[str] = None,
    extensions: Optional[Mapping[str, ParameterValue]] = None,
    now: Optional[int] = None
) -> SignatureParameters:
    """
    Collect caller input into SignatureParameters.

    created accepts "now", which resolves to the current time here. expires
    accepts "+N", an offset from created when set, otherwise from now.

    Args:
        alg: Algorithm name
        created: Epoch seconds, "now", or None
        expires: Epoch seconds, "+N", or None
        keyid: Key identifier
        nonce: Nonce
        tag: Application tag
        extensions: Additional parameters in serialization order
        now: Current time override (uses the clock if None)

    Returns:
        SignatureParameters: Resolved parameters

    Raises:
        ConfigurationError: If created or expires is not an integer
    """
    created_at = resolve_created(created, now=now)
    expires_at = resolve_expires(expires, created=created_at, now=now)

    return SignatureParameters(
        alg=alg,
        created=created_at,
        expires=expires_at,
        keyid=keyid,
        nonce=nonce,
        tag=tag,
        extensions=dict(extensions or {})
    )
