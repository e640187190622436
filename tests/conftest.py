"""
Shared fixtures: JWK key pairs generated at test time
"""

import json

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from jwt.algorithms import ECAlgorithm, OKPAlgorithm, RSAAlgorithm

SCENARIO_COMPONENTS = [
    '"@method": GET',
    '"@target-uri": https://example.com/x',
]


def _jwk_pair(algorithm_cls, private_key, kid=None):
    private_jwk = algorithm_cls.to_jwk(private_key, as_dict=True)
    public_jwk = algorithm_cls.to_jwk(private_key.public_key(), as_dict=True)
    if kid:
        private_jwk['kid'] = kid
        public_jwk['kid'] = kid
    return private_jwk, public_jwk


def make_key_pair(kind, kid=None):
    """Generate (private_jwk, public_jwk) for a key kind"""
    if kind in ('P-256', 'P-384', 'P-521', 'secp256k1'):
        curve = {
            'P-256': ec.SECP256R1(),
            'P-384': ec.SECP384R1(),
            'P-521': ec.SECP521R1(),
            'secp256k1': ec.SECP256K1(),
        }[kind]
        return _jwk_pair(ECAlgorithm, ec.generate_private_key(curve), kid)
    if kind == 'Ed25519':
        return _jwk_pair(OKPAlgorithm, ed25519.Ed25519PrivateKey.generate(), kid)
    if kind == 'RSA':
        return _jwk_pair(RSAAlgorithm, rsa.generate_private_key(public_exponent=65537, key_size=2048), kid)
    raise ValueError(kind)


@pytest.fixture(scope='session')
def p256_keys():
    return make_key_pair('P-256', kid='test-p256')


@pytest.fixture(scope='session')
def ed25519_keys():
    return make_key_pair('Ed25519', kid='test-ed25519')


@pytest.fixture(scope='session')
def rsa_keys():
    return make_key_pair('RSA', kid='test-rsa')


@pytest.fixture(scope='session', params=['P-256', 'P-384', 'P-521', 'secp256k1', 'Ed25519', 'RSA'])
def key_pair(request):
    return make_key_pair(request.param)


@pytest.fixture
def key_files(tmp_path, p256_keys):
    """Write the P-256 key pair to JWK files"""
    private_jwk, public_jwk = p256_keys
    private_path = tmp_path / 'private.jwk'
    public_path = tmp_path / 'public.jwk'
    private_path.write_text(json.dumps(private_jwk), encoding='utf-8')
    public_path.write_text(json.dumps(public_jwk), encoding='utf-8')
    return str(private_path), str(public_path)
