"""
Raw signer for RFC 9421 HTTP Message Signatures

The signature base is the literal signing input: unlike JWS, it is not
base64url-encoded and no JOSE header is prepended before the JWA algorithm
is applied.
"""

import logging
from typing import Optional, Sequence, Union

from ..crypto.jwk import JWKInput, JWKKey, algorithm_conflicts, load_key
from ..exceptions import HttpSigError, SigningError, JWKError, ErrorCodes
from .signature_base import build_signature_base_for, signature_base_bytes
from .types import SignatureParameters, SignatureResult

logger = logging.getLogger(__name__)


class RawSigner:
    """
    Signs signature bases with a private JWK

    The algorithm is detected from the key type and curve of the JWK.
    """

    def __init__(self, jwk: Union[JWKInput, JWKKey]):
        """
        Initialize the signer with a private key.

        Args:
            jwk: Private JWK (JSON text, mapping, or loaded JWKKey)

        Raises:
            JWKError: If the key does not determine an algorithm or is not private
        """
        self.key = load_key(jwk)
        if not self.key.is_private:
            raise JWKError(
                "Signing requires a private key",
                ErrorCodes.PRIVATE_KEY_REQUIRED,
                {"kty": self.key.algorithm.kty}
            )

    @property
    def algorithm(self) -> str:
        return self.key.algorithm.jwa

    def sign(self, signature_base: Union[str, bytes], alg: Optional[str] = None) -> bytes:
        """
        Sign a signature base.

        Args:
            signature_base: The exact text to sign
            alg: The "alg" signature parameter, checked against the key

        Returns:
            bytes: Raw signature

        Raises:
            SigningError: If alg conflicts with the key or the primitive fails
        """
        if algorithm_conflicts(alg, self.key.algorithm):
            raise SigningError(
                f"Signature algorithm {alg} conflicts with {self.algorithm} key",
                ErrorCodes.ALGORITHM_KEY_MISMATCH,
                {"alg": alg, "key_algorithm": self.algorithm}
            )

        try:
            signature = self.key.jwa.sign(signature_base_bytes(signature_base), self.key.key)
        except HttpSigError:
            raise
        except Exception as e:
            raise SigningError(
                f"Signing with {self.algorithm} failed: {e}",
                ErrorCodes.SIGNING_FAILED,
                {"algorithm": self.algorithm, "original_error": str(e)}
            )

        logger.debug(f"Signed {len(signature_base)}-character signature base with {self.algorithm}")
        return signature

    def sign_components(
        self,
        component_lines: Sequence[str],
        params: Optional[SignatureParameters] = None
    ) -> SignatureResult:
        """
        Build metadata and signature base from component lines and sign them.

        Args:
            component_lines: Component lines in signature base order
            params: Signature parameters

        Returns:
            SignatureResult: Signature with the base and metadata it covers
        """
        signature_base, signature_metadata = build_signature_base_for(component_lines, params)
        signature = self.sign(signature_base, alg=params.alg if params else None)

        return SignatureResult(
            signature=signature,
            signature_base=signature_base,
            signature_metadata=signature_metadata
        )


def sign_signature_base(
    signature_base: Union[str, bytes],
    jwk: Union[JWKInput, JWKKey],
    alg: Optional[str] = None
) -> bytes:
    """
    Sign a signature base with a private JWK.

    Args:
        signature_base: The exact text to sign
        jwk: Private JWK
        alg: The "alg" signature parameter, checked against the key

    Returns:
        bytes: Raw signature
    """
    return RawSigner(jwk).sign(signature_base, alg=alg)


def sign_components(
    component_lines: Sequence[str],
    params: Optional[SignatureParameters],
    jwk: Union[JWKInput, JWKKey]
) -> SignatureResult:
    """
    Sign component lines and signature parameters with a private JWK.

    Returns:
        SignatureResult: Signature, signature base and metadata
    """
    return RawSigner(jwk).sign_components(component_lines, params)
