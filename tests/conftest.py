"""Shared fixtures: sample tokens and freshly generated key pairs."""

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

# jwt.io sample token, signed with SAMPLE_SECRET
SAMPLE_JWT = (
    "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
    ".eyJzdWIiOiIxMjM0NTY3ODkwIiwibmFtZSI6IkpvaG4gRG9lIiwiaWF0IjoxNTE2MjM5MDIyfQ"
    ".SflKxwRJSMeKKF2QT4fwpMeJf36POk6yJV_adQssw5c"
)
SAMPLE_SECRET = "your-256-bit-secret"
SAMPLE_HEADER = {"alg": "HS256", "typ": "JWT"}
SAMPLE_PAYLOAD = {"sub": "1234567890", "name": "John Doe", "iat": 1516239022}


def _private_pem(key, fmt=serialization.PrivateFormat.PKCS8) -> str:
    return key.private_bytes(
        serialization.Encoding.PEM,
        fmt,
        serialization.NoEncryption(),
    ).decode("ascii")


def _public_pem(key) -> str:
    return key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def rsa_keys(rsa_private_key) -> tuple[str, str]:
    """PKCS#8 private and SPKI public PEM for RS256."""
    return _private_pem(rsa_private_key), _public_pem(rsa_private_key)


@pytest.fixture(scope="session")
def ec_keys(ec_private_key) -> tuple[str, str]:
    """PKCS#8 private and SPKI public PEM for ES256."""
    return _private_pem(ec_private_key), _public_pem(ec_private_key)


@pytest.fixture(scope="session")
def p384_keys() -> tuple[str, str]:
    """EC key pair on the wrong curve for ES256."""
    key = ec.generate_private_key(ec.SECP384R1())
    return _private_pem(key), _public_pem(key)


@pytest.fixture(scope="session")
def rsa_pkcs1_private_pem(rsa_private_key) -> str:
    """RSA private key in PKCS#1 ("RSA PRIVATE KEY") armor."""
    return _private_pem(rsa_private_key, serialization.PrivateFormat.TraditionalOpenSSL)


@pytest.fixture(scope="session")
def key_pairs(rsa_keys, ec_keys) -> dict[str, tuple[str, str]]:
    """Signing and verification key for every supported algorithm."""
    return {
        "HS256": ("a-string-secret-at-least-256-bits-long", "a-string-secret-at-least-256-bits-long"),
        "RS256": rsa_keys,
        "ES256": ec_keys,
    }
