"""
JWK key material for httpsig-jwk
"""

from .jwk import (
    JWKKey,
    KeyAlgorithm,
    EC_CURVE_ALGORITHMS,
    OKP_CURVE_ALGORITHMS,
    RSA_ALGORITHMS,
    HTTP_SIGNATURE_ALGORITHMS,
    detect_algorithm,
    algorithm_conflicts,
    http_signature_algorithm_for,
    parse_jwk,
    load_jwk_file,
    load_key,
)

__all__ = [
    'JWKKey',
    'KeyAlgorithm',
    'EC_CURVE_ALGORITHMS',
    'OKP_CURVE_ALGORITHMS',
    'RSA_ALGORITHMS',
    'HTTP_SIGNATURE_ALGORITHMS',
    'detect_algorithm',
    'algorithm_conflicts',
    'http_signature_algorithm_for',
    'parse_jwk',
    'load_jwk_file',
    'load_key',
]
