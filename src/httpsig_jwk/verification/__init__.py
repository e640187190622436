"""
Signature verification module for httpsig-jwk
"""

from .raw_verifier import (
    RawVerifier,
    verify_signature_base,
    verify_components,
)

from .utils import (
    strip_signature_delimiters,
    decode_signature,
    check_signature_window,
)

__all__ = [
    'RawVerifier',
    'verify_signature_base',
    'verify_components',
    'strip_signature_delimiters',
    'decode_signature',
    'check_signature_window',
]
