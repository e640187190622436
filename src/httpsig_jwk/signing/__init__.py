"""
Request signing module for httpsig-jwk

RFC 9421 HTTP Message Signatures: signature metadata and signature base
construction, and raw signing with JWKs.
"""

from .types import (
    SignatureParameters,
    SignatureResult,
    PARAMETER_ORDER,
)

from .metadata import (
    extract_component_identifier,
    build_signature_metadata,
    collect_signature_parameters,
)

from .signature_base import (
    build_signature_base,
    build_signature_base_for,
)

from .raw_signer import (
    RawSigner,
    sign_signature_base,
    sign_components,
)

from .headers import (
    DEFAULT_SIGNATURE_LABEL,
    format_signature_headers,
    parse_signature_header,
    parse_signature_input_header,
)

from .utils import (
    generate_timestamp,
    resolve_created,
    resolve_expires,
    format_component_line,
    encode_signature,
    calculate_content_digest,
)

from .integration import (
    HTTPMessageSignatureAuth,
    build_request_component_lines,
)

__all__ = [
    # Types
    'SignatureParameters',
    'SignatureResult',
    'PARAMETER_ORDER',
    # Metadata and signature base
    'extract_component_identifier',
    'build_signature_metadata',
    'collect_signature_parameters',
    'build_signature_base',
    'build_signature_base_for',
    # Signing
    'RawSigner',
    'sign_signature_base',
    'sign_components',
    # Transport headers
    'DEFAULT_SIGNATURE_LABEL',
    'format_signature_headers',
    'parse_signature_header',
    'parse_signature_input_header',
    # Utilities
    'generate_timestamp',
    'resolve_created',
    'resolve_expires',
    'format_component_line',
    'encode_signature',
    'calculate_content_digest',
    # HTTP Integration
    'HTTPMessageSignatureAuth',
    'build_request_component_lines',
]
