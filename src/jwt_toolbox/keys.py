"""
Key import for the supported signing algorithms.

Key material arrives as text: an HMAC secret for HS256, PEM for RS256 and
ES256 (PKCS#8 private keys for signing, SPKI public keys for verification).
It is turned into an opaque ``KeyHandle`` that lives for one operation.
"""

from __future__ import annotations

from typing import Any, Callable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from .errors import KeyFormatError, KeyImportError
from .models import Algorithm
from .pem import pem_label, pem_to_der

SIGN = "sign"
VERIFY = "verify"

PRIVATE_KEY_LABEL = "PRIVATE KEY"
PUBLIC_KEY_LABEL = "PUBLIC KEY"


class KeyHandle:
    """
    Opaque key capability scoped to a single sign or verify call.

    Only the algorithm and usage are observable; the key itself is never
    exposed through attributes, repr or pickling.
    """

    __slots__ = ("_algorithm", "_usage", "_key")

    def __init__(self, algorithm: Algorithm, usage: str, key: Any):
        self._algorithm = algorithm
        self._usage = usage
        self._key = key

    @property
    def algorithm(self) -> Algorithm:
        return self._algorithm

    @property
    def usage(self) -> str:
        return self._usage

    def __repr__(self) -> str:
        return f"<KeyHandle {self._algorithm.value} {self._usage}>"

    def __reduce__(self) -> Any:
        raise TypeError("KeyHandle cannot be serialized")


def unwrap(handle: KeyHandle, algorithm: Algorithm, usage: str) -> Any:
    """
    Return the backing key of a handle issued for ``algorithm`` and ``usage``.

    Raises:
        KeyImportError: If the handle was imported for something else.
    """
    if handle.algorithm is not algorithm:
        raise KeyImportError(
            f"Key was imported for {handle.algorithm.value}, not {algorithm.value}"
        )
    # HMAC handles serve both directions
    if algorithm is not Algorithm.HS256 and handle.usage != usage:
        raise KeyImportError(f"Key was imported for {handle.usage}, not {usage}")
    return handle._key


def _hmac_secret(key_material: str) -> bytes:
    if not key_material:
        raise KeyImportError("Secret is empty")
    return key_material.encode("utf-8")


def _der_body(key_material: str, expected_label: str) -> bytes:
    if not key_material or not key_material.strip():
        raise KeyFormatError("Key is empty")

    label = pem_label(key_material)
    if label is not None and label != expected_label:
        raise KeyFormatError(
            f'Expected a "{expected_label}" PEM block, got "{label}"'
        )
    return pem_to_der(key_material)


def _load_private(key_material: str) -> Any:
    der = _der_body(key_material, PRIVATE_KEY_LABEL)
    try:
        return serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise KeyImportError(f"Could not import PKCS#8 private key: {e}") from e


def _load_public(key_material: str) -> Any:
    der = _der_body(key_material, PUBLIC_KEY_LABEL)
    try:
        return serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise KeyImportError(f"Could not import SPKI public key: {e}") from e


def _require_rsa(key: Any) -> Any:
    if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        raise KeyImportError("RS256 requires an RSA key")
    return key


def _require_p256(key: Any) -> Any:
    if not isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        raise KeyImportError("ES256 requires an EC key")
    if not isinstance(key.curve, ec.SECP256R1):
        raise KeyImportError(f"ES256 requires curve P-256, got {key.curve.name}")
    return key


# algorithm -> (signing loader, verification loader)
_LOADERS: dict[Algorithm, tuple[Callable[[str], Any], Callable[[str], Any]]] = {
    Algorithm.HS256: (_hmac_secret, _hmac_secret),
    Algorithm.RS256: (
        lambda material: _require_rsa(_load_private(material)),
        lambda material: _require_rsa(_load_public(material)),
    ),
    Algorithm.ES256: (
        lambda material: _require_p256(_load_private(material)),
        lambda material: _require_p256(_load_public(material)),
    ),
}


def import_signing_key(algorithm: Algorithm, key_material: str) -> KeyHandle:
    """
    Import key material for signing.

    Args:
        algorithm: Algorithm the key will sign with
        key_material: HMAC secret (HS256) or PKCS#8 PEM private key (RS256, ES256)

    Returns:
        Opaque signing key handle

    Raises:
        KeyImportError: If the material is empty, malformed, or the wrong
            kind of key for ``algorithm``.
    """
    loader, _ = _LOADERS[algorithm]
    return KeyHandle(algorithm, SIGN, loader(key_material))


def import_verification_key(algorithm: Algorithm, key_material: str) -> KeyHandle:
    """
    Import key material for verification.

    Args:
        algorithm: Algorithm the signature was made with
        key_material: HMAC secret (HS256) or SPKI PEM public key (RS256, ES256)

    Returns:
        Opaque verification key handle

    Raises:
        KeyImportError: If the material is empty, malformed, or the wrong
            kind of key for ``algorithm``.
    """
    _, loader = _LOADERS[algorithm]
    return KeyHandle(algorithm, VERIFY, loader(key_material))
