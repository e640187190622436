"""
httpsig-jwk
RFC 9421 HTTP Message Signatures with JSON Web Keys
"""

from .version import __version__
from .exceptions import (
    HttpSigError,
    ConfigurationError,
    SigningError,
    JWKError,
    ErrorCodes,
)
from .crypto import (
    JWKKey,
    KeyAlgorithm,
    detect_algorithm,
    load_jwk_file,
    load_key,
)
from .signing import (
    # Types
    SignatureParameters,
    SignatureResult,
    # Metadata and signature base
    extract_component_identifier,
    build_signature_metadata,
    collect_signature_parameters,
    build_signature_base,
    # Signing
    RawSigner,
    sign_signature_base,
    sign_components,
    # Transport headers
    format_signature_headers,
    parse_signature_header,
    parse_signature_input_header,
    # Utilities
    format_component_line,
    # HTTP Integration
    HTTPMessageSignatureAuth,
)
from .verification import (
    RawVerifier,
    verify_signature_base,
    verify_components,
    decode_signature,
    check_signature_window,
)

__all__ = [
    '__version__',
    # Errors
    'HttpSigError',
    'ConfigurationError',
    'SigningError',
    'JWKError',
    'ErrorCodes',
    # Keys
    'JWKKey',
    'KeyAlgorithm',
    'detect_algorithm',
    'load_jwk_file',
    'load_key',
    # Signing
    'SignatureParameters',
    'SignatureResult',
    'extract_component_identifier',
    'build_signature_metadata',
    'collect_signature_parameters',
    'build_signature_base',
    'RawSigner',
    'sign_signature_base',
    'sign_components',
    'format_signature_headers',
    'parse_signature_header',
    'parse_signature_input_header',
    'format_component_line',
    'HTTPMessageSignatureAuth',
    # Verification
    'RawVerifier',
    'verify_signature_base',
    'verify_components',
    'decode_signature',
    'check_signature_window',
]
