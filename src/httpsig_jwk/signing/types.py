"""
Type definitions for HTTP message signing

This module provides the data classes shared by the metadata builder, the
signature base builder, and the raw signer and verifier.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from ..exceptions import ConfigurationError, ErrorCodes
from .utils import encode_signature

# Fixed serialization order of the signature parameters
PARAMETER_ORDER: Tuple[str, ...] = ("alg", "created", "expires", "keyid", "nonce", "tag")

INTEGER_PARAMETERS = ("created", "expires")

# Structured-field key (RFC 8941 section 3.1.2)
SF_KEY_PATTERN = re.compile(r'^[a-z*][a-z0-9_\-.*]*$')

ParameterValue = Union[int, str]
ComponentLine = str


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class SignatureParameters:
    """
    Signature parameters for RFC 9421 signature metadata

    Attributes:
        alg: Algorithm name advertised in the metadata
        created: Unix timestamp when the signature was created
        expires: Unix timestamp after which the signature expires
        keyid: Key identifier
        nonce: Nonce value
        tag: Application-specific tag
        extensions: Additional parameters, serialized after tag in insertion order
    """
    alg: Optional[str] = None
    created: Optional[int] = None
    expires: Optional[int] = None
    keyid: Optional[str] = None
    nonce: Optional[str] = None
    tag: Optional[str] = None
    extensions: Dict[str, ParameterValue] = field(default_factory=dict)

    def __post_init__(self):
        """Validate parameter types"""
        for name in PARAMETER_ORDER:
            value = getattr(self, name)
            if value is None:
                continue
            if name in INTEGER_PARAMETERS:
                if not _is_integer(value):
                    raise ConfigurationError(
                        f"{name} must be an integer, got {value!r}",
                        ErrorCodes.INVALID_INTEGER,
                        {"parameter": name}
                    )
            elif not isinstance(value, str):
                raise ConfigurationError(
                    f"{name} must be a string, got {type(value).__name__}",
                    ErrorCodes.INVALID_PARAMETER,
                    {"parameter": name}
                )

        for name, value in self.extensions.items():
            if name in PARAMETER_ORDER:
                raise ConfigurationError(
                    f"Extension parameter {name} shadows a standard parameter",
                    ErrorCodes.INVALID_PARAMETER,
                    {"parameter": name}
                )
            if not isinstance(name, str) or not SF_KEY_PATTERN.match(name):
                raise ConfigurationError(
                    f"Invalid parameter name: {name!r}",
                    ErrorCodes.INVALID_PARAMETER,
                    {"parameter": name}
                )
            if not (_is_integer(value) or isinstance(value, str)):
                raise ConfigurationError(
                    f"Parameter {name} must be an integer or string",
                    ErrorCodes.INVALID_PARAMETER,
                    {"parameter": name, "type": type(value).__name__}
                )

    def items(self) -> List[Tuple[str, ParameterValue]]:
        """
        Present parameters in serialization order.

        Returns:
            list: (name, value) pairs, standard parameters first
        """
        present = [
            (name, getattr(self, name))
            for name in PARAMETER_ORDER
            if getattr(self, name) is not None
        ]
        present.extend(self.extensions.items())
        return present


@dataclass
class SignatureResult:
    """
    Result of signing a set of component lines

    Attributes:
        signature: Raw signature bytes
        signature_base: The exact text that was signed
        signature_metadata: The @signature-params value
    """
    signature: bytes
    signature_base: str
    signature_metadata: str

    @property
    def encoded_signature(self) -> str:
        """Base64 signature without delimiters"""
        return encode_signature(self.signature)

    @property
    def structured_signature(self) -> str:
        """Colon-delimited structured-field byte sequence"""
        return f":{self.encoded_signature}:"
