"""
JSON Web Key handling for HTTP Message Signatures

This module loads JWKs, selects the JWA signing algorithm from the key type
and curve through an explicit lookup table, and converts the JWK into a
cryptography key object using the JWA primitives shipped with PyJWT.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey
from cryptography.hazmat.primitives.asymmetric.ed448 import Ed448PrivateKey
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from jwt.algorithms import Algorithm, get_default_algorithms
from jwt.exceptions import InvalidKeyError

from ..exceptions import ConfigurationError, JWKError, ErrorCodes

logger = logging.getLogger(__name__)

# Elliptic-curve keys admit exactly one algorithm per curve
EC_CURVE_ALGORITHMS: Dict[str, str] = {
    "P-256": "ES256",
    "P-384": "ES384",
    "P-521": "ES512",
    "secp256k1": "ES256K",
}

OKP_CURVE_ALGORITHMS: Dict[str, str] = {
    "Ed25519": "EdDSA",
    "Ed448": "EdDSA",
}

RSA_ALGORITHMS: Tuple[str, ...] = ("RS256", "RS384", "RS512", "PS256", "PS384", "PS512")
RSA_DEFAULT_ALGORITHM = "RS256"

# RFC 9421 algorithm registry: name -> (JWA algorithm, required curve)
HTTP_SIGNATURE_ALGORITHMS: Dict[str, Tuple[str, Optional[str]]] = {
    "rsa-pss-sha512": ("PS512", None),
    "rsa-v1_5-sha256": ("RS256", None),
    "ecdsa-p256-sha256": ("ES256", "P-256"),
    "ecdsa-p384-sha384": ("ES384", "P-384"),
    "ed25519": ("EdDSA", "Ed25519"),
}

PRIVATE_KEY_TYPES = (EllipticCurvePrivateKey, RSAPrivateKey, Ed25519PrivateKey, Ed448PrivateKey)

JWKInput = Union[str, bytes, Mapping[str, Any]]


@dataclass(frozen=True)
class KeyAlgorithm:
    """
    Algorithm selected for a JWK

    Attributes:
        jwa: JWA algorithm identifier (e.g. "ES256")
        kty: JWK key type the algorithm was derived from
        crv: JWK curve, if the key type has one
    """
    jwa: str
    kty: str
    crv: Optional[str] = None

    @property
    def http_signature_algorithm(self) -> Optional[str]:
        """Registered RFC 9421 algorithm name, or None if the JWA has none"""
        for name, (jwa, crv) in HTTP_SIGNATURE_ALGORITHMS.items():
            if jwa == self.jwa and (crv is None or crv == self.crv):
                return name
        return None


@dataclass
class JWKKey:
    """
    A parsed JWK together with its detected algorithm and key object

    Attributes:
        jwk: The JWK members as supplied
        algorithm: Algorithm detected from the key type and curve
        key: cryptography private or public key object
    """
    jwk: Dict[str, Any]
    algorithm: KeyAlgorithm
    key: Any = field(repr=False)

    @property
    def is_private(self) -> bool:
        return isinstance(self.key, PRIVATE_KEY_TYPES)

    @property
    def key_id(self) -> Optional[str]:
        return self.jwk.get("kid")

    @property
    def jwa(self) -> Algorithm:
        return get_jwa_algorithm(self.algorithm.jwa)

    def public_key(self) -> Any:
        if self.is_private:
            return self.key.public_key()
        return self.key


def detect_algorithm(jwk: Mapping[str, Any]) -> KeyAlgorithm:
    """
    Select the signing algorithm for a JWK from its key type and curve.

    A JWK "alg" member is honoured only when it is valid for the key type.
    Symmetric keys are never accepted.

    Args:
        jwk: JWK members

    Returns:
        KeyAlgorithm: The detected algorithm

    Raises:
        JWKError: If the JWK does not determine a supported algorithm
    """
    kty = jwk.get("kty")
    if not kty:
        raise JWKError(
            "JWK does not declare a key type (kty)",
            ErrorCodes.INSUFFICIENT_KEY_MATERIAL,
            {"members": sorted(jwk)}
        )

    crv = None
    if kty in ("EC", "OKP"):
        crv = jwk.get("crv")
        if not crv:
            raise JWKError(
                f"{kty} JWK does not declare a curve (crv)",
                ErrorCodes.INSUFFICIENT_KEY_MATERIAL,
                {"kty": kty}
            )
        table = EC_CURVE_ALGORITHMS if kty == "EC" else OKP_CURVE_ALGORITHMS
        if crv not in table:
            raise JWKError(
                f"Unsupported curve for {kty} key: {crv}",
                ErrorCodes.UNSUPPORTED_CURVE,
                {"kty": kty, "crv": crv, "supported": sorted(table)}
            )
        detected = table[crv]
        allowed: Tuple[str, ...] = (detected,)
    elif kty == "RSA":
        if not jwk.get("n"):
            raise JWKError(
                "RSA JWK is missing its modulus (n)",
                ErrorCodes.INSUFFICIENT_KEY_MATERIAL,
                {"kty": kty}
            )
        detected = RSA_DEFAULT_ALGORITHM
        allowed = RSA_ALGORITHMS
    elif kty == "oct":
        raise JWKError(
            "Symmetric (oct) keys are not used for HTTP message signatures",
            ErrorCodes.UNSUPPORTED_KEY_TYPE,
            {"kty": kty}
        )
    else:
        raise JWKError(
            f"Unsupported key type: {kty}",
            ErrorCodes.UNSUPPORTED_KEY_TYPE,
            {"kty": kty}
        )

    declared = jwk.get("alg")
    if declared:
        if declared not in allowed:
            raise JWKError(
                f"JWK algorithm {declared} does not match {kty} key",
                ErrorCodes.ALGORITHM_KEY_MISMATCH,
                {"alg": declared, "kty": kty, "crv": crv, "allowed": list(allowed)}
            )
        detected = declared

    return KeyAlgorithm(jwa=detected, kty=kty, crv=crv)


def algorithm_conflicts(alg: Optional[str], key_algorithm: KeyAlgorithm) -> bool:
    """
    Check a signature "alg" parameter against the algorithm detected from a key.

    Only registered RFC 9421 algorithm names can conflict; any other value is
    treated as opaque metadata.
    """
    if not alg:
        return False

    registered = HTTP_SIGNATURE_ALGORITHMS.get(alg)
    if registered is None:
        return False

    jwa, crv = registered
    return jwa != key_algorithm.jwa or (crv is not None and crv != key_algorithm.crv)


def http_signature_algorithm_for(key_algorithm: KeyAlgorithm) -> str:
    """
    Registered RFC 9421 algorithm name to advertise in the "alg" parameter.

    Raises:
        ConfigurationError: If the key's algorithm has no registered name
    """
    name = key_algorithm.http_signature_algorithm
    if name is None:
        raise ConfigurationError(
            f"No registered HTTP signature algorithm for {key_algorithm.jwa} keys",
            ErrorCodes.INVALID_PARAMETER,
            {"alg": key_algorithm.jwa, "kty": key_algorithm.kty, "crv": key_algorithm.crv}
        )
    return name


def get_jwa_algorithm(name: str) -> Algorithm:
    """Look up the PyJWT algorithm object for a JWA identifier."""
    algorithms = get_default_algorithms()
    try:
        return algorithms[name]
    except KeyError:
        raise JWKError(
            f"Algorithm {name} is not available",
            ErrorCodes.UNSUPPORTED_KEY_TYPE,
            {"alg": name}
        )


def parse_jwk(data: JWKInput) -> Dict[str, Any]:
    """
    Parse JWK input into a dictionary of members.

    Args:
        data: JSON text or an already-decoded mapping

    Returns:
        dict: JWK members

    Raises:
        JWKError: If the input is not a JSON object
    """
    if isinstance(data, Mapping):
        return dict(data)

    try:
        parsed = json.loads(data)
    except (TypeError, ValueError) as e:
        raise JWKError(
            f"JWK is not valid JSON: {e}",
            ErrorCodes.KEY_PARSE_ERROR,
            {"original_error": str(e)}
        )

    if not isinstance(parsed, dict):
        raise JWKError(
            "JWK must be a JSON object",
            ErrorCodes.KEY_PARSE_ERROR,
            {"type": type(parsed).__name__}
        )

    return parsed


def load_jwk_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a JWK from a JSON file.

    Raises:
        JWKError: If the file cannot be read or does not hold a JSON object
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise JWKError(
            f"Cannot read key file {path}: {e}",
            ErrorCodes.KEY_FILE_UNREADABLE,
            {"path": str(path)}
        )

    return parse_jwk(text)


def load_key(jwk: Union[JWKInput, JWKKey]) -> JWKKey:
    """
    Build a JWKKey from JWK input, detecting its algorithm.

    Args:
        jwk: JWK as JSON text, mapping, or an already loaded JWKKey

    Returns:
        JWKKey: Parsed key

    Raises:
        JWKError: If the key is unusable
    """
    if isinstance(jwk, JWKKey):
        return jwk

    members = parse_jwk(jwk)
    algorithm = detect_algorithm(members)
    jwa = get_jwa_algorithm(algorithm.jwa)

    try:
        key = jwa.from_jwk(members)
    except (InvalidKeyError, ValueError, KeyError, TypeError) as e:
        raise JWKError(
            f"JWK rejected for {algorithm.jwa}: {e}",
            ErrorCodes.KEY_PARSE_ERROR,
            {"alg": algorithm.jwa, "kty": algorithm.kty, "original_error": str(e)}
        )

    logger.debug(f"Loaded {algorithm.kty} JWK, algorithm {algorithm.jwa}")
    return JWKKey(jwk=members, algorithm=algorithm, key=key)
