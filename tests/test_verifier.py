"""
Test suite for the raw verifier

This module tests that verification is a pure boolean check: valid
signatures pass, and tampering, garbage input, or key trouble yield False
instead of an exception.
"""

import pytest

from httpsig_jwk.signing import SignatureParameters, sign_signature_base, sign_components, encode_signature
from httpsig_jwk.verification import (
    RawVerifier,
    verify_signature_base,
    verify_components,
    decode_signature,
    strip_signature_delimiters,
    check_signature_window,
)
from httpsig_jwk.exceptions import JWKError

from conftest import SCENARIO_COMPONENTS, make_key_pair

BASE = '"@method": GET\n"@target-uri": https://example.com/x\n"@signature-params": ("@method" "@target-uri");created=1728051074'


def _flip(data: bytes, index: int) -> bytes:
    tampered = bytearray(data)
    tampered[index] ^= 0x01
    return bytes(tampered)


class TestRawVerifier:
    """Test verification of signature bases"""

    def test_round_trip(self, key_pair):
        private_jwk, public_jwk = key_pair
        signature = encode_signature(sign_signature_base(BASE, private_jwk))

        assert verify_signature_base(BASE, signature, public_jwk) is True

    def test_colon_delimiters_are_optional(self, p256_keys):
        private_jwk, public_jwk = p256_keys
        encoded = encode_signature(sign_signature_base(BASE, private_jwk))

        assert verify_signature_base(BASE, encoded, public_jwk)
        assert verify_signature_base(BASE, f":{encoded}:", public_jwk)
        assert verify_signature_base(BASE, f":{encoded}", public_jwk)

    @pytest.mark.parametrize("index", [0, 3, BASE.index("\n"), BASE.index("https"), BASE.rindex("\n") + 1, len(BASE) - 1])
    def test_tampered_base(self, key_pair, index):
        """Changing any single byte, from the first line to the last byte of the metadata, fails"""
        private_jwk, public_jwk = key_pair
        signature = encode_signature(sign_signature_base(BASE, private_jwk))
        tampered = _flip(BASE.encode("utf-8"), index)

        assert verify_signature_base(tampered, signature, public_jwk) is False

    def test_tampered_signature(self, key_pair):
        private_jwk, public_jwk = key_pair
        signature = sign_signature_base(BASE, private_jwk)

        assert verify_signature_base(BASE, encode_signature(_flip(signature, 0)), public_jwk) is False
        assert verify_signature_base(BASE, encode_signature(_flip(signature, len(signature) - 1)), public_jwk) is False

    def test_trailing_newline_changes_base(self, ed25519_keys):
        private_jwk, public_jwk = ed25519_keys
        signature = encode_signature(sign_signature_base(BASE, private_jwk))

        assert not verify_signature_base(BASE + "\n", signature, public_jwk)

    @pytest.mark.parametrize("signature", ["", "::", "not base64!", ":AAAA:", "AAAA", b"\xff\xfe"])
    def test_garbage_signature_is_false(self, p256_keys, signature):
        assert verify_signature_base(BASE, signature, p256_keys[1]) is False

    def test_wrong_key(self, p256_keys):
        other_private, other_public = make_key_pair('P-256')
        signature = encode_signature(sign_signature_base(BASE, other_private))

        assert verify_signature_base(BASE, signature, other_public)
        assert not verify_signature_base(BASE, signature, p256_keys[1])

    def test_private_jwk_verifies(self, ed25519_keys):
        private_jwk, _ = ed25519_keys
        signature = encode_signature(sign_signature_base(BASE, private_jwk))

        assert RawVerifier(private_jwk).verify(BASE, signature)

    def test_unusable_keys_are_false(self):
        assert verify_signature_base(BASE, "AAAA", {"kty": "oct", "k": "c2VjcmV0"}) is False
        assert verify_signature_base(BASE, "AAAA", {"kty": "EC"}) is False
        assert verify_signature_base(BASE, "AAAA", "{not json") is False

    def test_verifier_constructor_rejects_bad_key(self):
        with pytest.raises(JWKError):
            RawVerifier({"kty": "oct", "k": "c2VjcmV0"})

    def test_conflicting_alg_parameter(self, p256_keys):
        private_jwk, public_jwk = p256_keys
        signature = encode_signature(sign_signature_base(BASE, private_jwk))

        assert verify_signature_base(BASE, signature, public_jwk, alg="ecdsa-p256-sha256")
        assert verify_signature_base(BASE, signature, public_jwk, alg="vendor-alg")
        assert not verify_signature_base(BASE, signature, public_jwk, alg="ed25519")


class TestVerifyComponents:
    """Test verification from component lines and parameters"""

    def test_round_trip(self, rsa_keys):
        private_jwk, public_jwk = rsa_keys
        params = SignatureParameters(created=1728051074, keyid="K1", tag="demo")
        result = sign_components(SCENARIO_COMPONENTS, params, private_jwk)

        assert verify_components(SCENARIO_COMPONENTS, params, result.structured_signature, public_jwk)

    def test_changed_parameter_fails(self, ed25519_keys):
        private_jwk, public_jwk = ed25519_keys
        params = SignatureParameters(created=1728051074, tag="demo")
        result = sign_components(SCENARIO_COMPONENTS, params, private_jwk)
        changed = SignatureParameters(created=1728051075, tag="demo")

        assert not verify_components(SCENARIO_COMPONENTS, changed, result.encoded_signature, public_jwk)

    def test_reordered_components_fail(self, ed25519_keys):
        private_jwk, public_jwk = ed25519_keys
        result = sign_components(SCENARIO_COMPONENTS, None, private_jwk)

        assert not RawVerifier(public_jwk).verify_components(
            list(reversed(SCENARIO_COMPONENTS)), None, result.encoded_signature
        )


class TestDecodeSignature:
    """Test transported signature decoding"""

    def test_colons_stripped(self):
        assert decode_signature(":AAAA:") == decode_signature("AAAA") == b"\x00\x00\x00"

    def test_only_one_delimiter_stripped(self):
        assert strip_signature_delimiters(" ::AAAA:: ") == ":AAAA:"
        with pytest.raises(ValueError):
            decode_signature("::AAAA::")

    def test_bytes_input(self):
        assert decode_signature(b":AAAA:") == b"\x00\x00\x00"

    def test_invalid_base64(self):
        with pytest.raises(ValueError):
            decode_signature("AA$A")


class TestSignatureWindow:
    """Test the optional created/expires policy helper"""

    def test_inside_window(self):
        params = SignatureParameters(created=1000, expires=1300)
        assert check_signature_window(params, now=1100)

    def test_expired(self):
        params = SignatureParameters(created=1000, expires=1300)
        assert not check_signature_window(params, now=1301)
        assert check_signature_window(params, now=1301, clock_skew=5)

    def test_created_in_future(self):
        assert not check_signature_window(SignatureParameters(created=2000), now=1000)

    def test_max_age(self):
        params = SignatureParameters(created=1000)
        assert check_signature_window(params, now=1050, max_age=60)
        assert not check_signature_window(params, now=1100, max_age=60)

    def test_max_age_requires_created(self):
        assert not check_signature_window(SignatureParameters(), now=1000, max_age=60)

    def test_no_timestamps(self):
        assert check_signature_window(SignatureParameters(), now=1000)
