"""
requests integration for HTTP message signing

This module provides an authentication handler for the requests library
that derives component lines from an outgoing request, signs them, and adds
the Signature-Input and Signature headers.
"""

import logging
from typing import Iterable, List, Optional, Union
from urllib.parse import urlsplit

from requests.auth import AuthBase
from requests.models import PreparedRequest

from ..crypto.jwk import JWKInput, JWKKey, http_signature_algorithm_for
from ..exceptions import SigningError, ErrorCodes
from .headers import DEFAULT_SIGNATURE_LABEL, format_signature_headers
from .metadata import collect_signature_parameters
from .raw_signer import RawSigner
from .types import SignatureParameters, SignatureResult
from .utils import TimeInput, calculate_content_digest, format_component_line

logger = logging.getLogger(__name__)

DEFAULT_COVERED_COMPONENTS = ("@method", "@target-uri")

DEFAULT_PORTS = {"http": 80, "https": 443}


def _derived_component_value(name: str, request: PreparedRequest) -> str:
    url = urlsplit(request.url)

    if name == "@method":
        return request.method.upper()
    if name == "@target-uri":
        return request.url
    if name == "@scheme":
        return url.scheme.lower()
    if name == "@authority":
        authority = url.netloc.rpartition("@")[2].lower()
        if url.port is not None and url.port == DEFAULT_PORTS.get(url.scheme.lower()):
            authority = authority[:authority.rindex(":")]
        return authority
    if name == "@path":
        return url.path or "/"
    if name == "@query":
        return f"?{url.query}"
    if name == "@request-target":
        target = url.path or "/"
        if url.query:
            target += f"?{url.query}"
        return target

    raise SigningError(
        f"Unsupported derived component: {name}",
        ErrorCodes.SIGNING_FAILED,
        {"component": name}
    )


def build_request_component_lines(
    request: PreparedRequest,
    covered_components: Iterable[str]
) -> List[str]:
    """
    Build component lines for a prepared request.

    Args:
        request: Request about to be sent
        covered_components: Derived components ("@method", ...) and header names

    Returns:
        list: Component lines in the order of covered_components

    Raises:
        SigningError: If a covered header is missing or a derived component is unknown
    """
    lines = []
    for component in covered_components:
        if component.startswith("@"):
            value = _derived_component_value(component, request)
            lines.append(format_component_line(component, value))
            continue

        name = component.lower()
        value = request.headers.get(name)
        if value is None:
            raise SigningError(
                f"Covered header missing from request: {name}",
                ErrorCodes.SIGNING_FAILED,
                {"component": name, "request_headers": list(request.headers.keys())}
            )
        lines.append(format_component_line(name, str(value).strip()))

    return lines


class HTTPMessageSignatureAuth(AuthBase):
    """
    requests authentication handler that signs each request with a JWK

    Example:
        >>> auth = HTTPMessageSignatureAuth(jwk, covered_components=("@method", "@authority"))
        >>> requests.get("https://example.com/x", auth=auth)
    """

    def __init__(
        self,
        jwk: Union[JWKInput, JWKKey],
        covered_components: Iterable[str] = DEFAULT_COVERED_COMPONENTS,
        params: Optional[SignatureParameters] = None,
        label: str = DEFAULT_SIGNATURE_LABEL,
        created: TimeInput = "now",
        expires: TimeInput = None,
        include_key_id: bool = False,
        include_alg: bool = False,
        digest_algorithm: str = "sha-256"
    ):
        """
        Initialize the handler.

        Args:
            jwk: Private JWK used for every request
            covered_components: Components to cover, in signature base order
            params: Template for alg, keyid, nonce, tag and extensions
            label: Signature label in the Signature-Input and Signature headers
            created: created parameter, resolved per request ("now" by default)
            expires: expires parameter, "+N" is relative to created
            include_key_id: Use the JWK "kid" as keyid when none is set
            include_alg: Advertise the key's registered algorithm name as alg when none is set
            digest_algorithm: Algorithm for a covered content-digest header
        """
        self.signer = RawSigner(jwk)
        self.covered_components = [c if c.startswith("@") else c.lower() for c in covered_components]
        self.params = params or SignatureParameters()
        self.label = label
        self.created = created
        self.expires = expires
        self.include_key_id = include_key_id
        self.include_alg = include_alg
        self.digest_algorithm = digest_algorithm

    def _parameters_for_request(self) -> SignatureParameters:
        keyid = self.params.keyid
        if keyid is None and self.include_key_id:
            keyid = self.signer.key.key_id

        alg = self.params.alg
        if alg is None and self.include_alg:
            alg = http_signature_algorithm_for(self.signer.key.algorithm)

        return collect_signature_parameters(
            alg=alg,
            created=self.params.created if self.params.created is not None else self.created,
            expires=self.params.expires if self.params.expires is not None else self.expires,
            keyid=keyid,
            nonce=self.params.nonce,
            tag=self.params.tag,
            extensions=self.params.extensions
        )

    def sign(self, request: PreparedRequest) -> SignatureResult:
        """
        Sign a prepared request and return the result.

        Adds a Content-Digest header when content-digest is covered and the
        request has none; Signature-Input and Signature are left to __call__.
        """
        if "content-digest" in self.covered_components and "content-digest" not in request.headers:
            request.headers["Content-Digest"] = calculate_content_digest(request.body, self.digest_algorithm)

        component_lines = build_request_component_lines(request, self.covered_components)
        return self.signer.sign_components(component_lines, self._parameters_for_request())

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        result = self.sign(request)
        request.headers.update(
            format_signature_headers(self.label, result.signature_metadata, result.signature)
        )
        logger.debug(f"Signed {request.method} request to {request.url}")
        return request
