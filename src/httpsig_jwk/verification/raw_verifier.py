"""
Raw verifier for RFC 9421 HTTP Message Signatures

The verifier re-derives the signature base from the same inputs the signer
used and checks the signature against it with the public key. Any failure,
from a malformed signature to an unusable key, is reported as False.
"""

import logging
from typing import Optional, Sequence, Union

from ..crypto.jwk import JWKInput, JWKKey, algorithm_conflicts, load_key
from ..signing.signature_base import build_signature_base_for, signature_base_bytes
from ..signing.types import SignatureParameters
from .utils import decode_signature

logger = logging.getLogger(__name__)


class RawVerifier:
    """
    Verifies signatures over signature bases with a JWK

    The algorithm is detected from the key exactly as the signer detects it.
    A private JWK is accepted and its public half is used.
    """

    def __init__(self, jwk: Union[JWKInput, JWKKey]):
        """
        Initialize the verifier.

        Args:
            jwk: Public (or private) JWK

        Raises:
            JWKError: If the key does not determine an algorithm
        """
        self.key = load_key(jwk)

    def verify(
        self,
        signature_base: Union[str, bytes],
        signature: Union[str, bytes],
        alg: Optional[str] = None
    ) -> bool:
        """
        Verify a signature over a signature base.

        Args:
            signature_base: The exact text that was signed
            signature: Base64 signature, optionally colon-delimited
            alg: The "alg" signature parameter, checked against the key

        Returns:
            bool: True only if the signature is valid
        """
        try:
            if algorithm_conflicts(alg, self.key.algorithm):
                logger.debug(f"Signature algorithm {alg} conflicts with {self.key.algorithm.jwa} key")
                return False

            signature_bytes = decode_signature(signature)
            return bool(self.key.jwa.verify(
                signature_base_bytes(signature_base),
                self.key.public_key(),
                signature_bytes
            ))
        except Exception as e:
            logger.debug(f"Signature verification failed: {e}")
            return False

    def verify_components(
        self,
        component_lines: Sequence[str],
        params: Optional[SignatureParameters],
        signature: Union[str, bytes]
    ) -> bool:
        """
        Rebuild the signature base from component lines and verify it.

        Returns:
            bool: True only if the signature is valid
        """
        signature_base, _ = build_signature_base_for(component_lines, params)
        return self.verify(signature_base, signature, alg=params.alg if params else None)


def verify_signature_base(
    signature_base: Union[str, bytes],
    signature: Union[str, bytes],
    jwk: Union[JWKInput, JWKKey],
    alg: Optional[str] = None
) -> bool:
    """
    Verify a signature over a signature base with a JWK.

    Key errors are reported as False like any other failure.

    Returns:
        bool: True only if the signature is valid
    """
    try:
        verifier = RawVerifier(jwk)
    except Exception as e:
        logger.debug(f"Verification key rejected: {e}")
        return False

    return verifier.verify(signature_base, signature, alg=alg)


def verify_components(
    component_lines: Sequence[str],
    params: Optional[SignatureParameters],
    signature: Union[str, bytes],
    jwk: Union[JWKInput, JWKKey]
) -> bool:
    """
    Verify a signature over component lines and signature parameters.

    Returns:
        bool: True only if the signature is valid
    """
    signature_base, _ = build_signature_base_for(component_lines, params)
    return verify_signature_base(
        signature_base,
        signature,
        jwk,
        alg=params.alg if params else None
    )
