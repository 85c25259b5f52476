"""
Sign and verify handlers, one per supported algorithm.
"""

from __future__ import annotations

import hashlib
import hmac

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding

from .keys import SIGN, VERIFY, KeyHandle, import_signing_key, import_verification_key, unwrap
from .models import Algorithm
from .sigformat import SignatureFormat, from_jose, to_jose


class SignatureAlgorithm:
    """
    Base class for a JWS signing algorithm.

    ``sign`` returns signature bytes in their JWS wire form and ``verify``
    takes them in the same form; any back-end specific encoding stays inside
    the handler.
    """

    algorithm: Algorithm

    def prepare_signing_key(self, key_material: str) -> KeyHandle:
        return import_signing_key(self.algorithm, key_material)

    def prepare_verification_key(self, key_material: str) -> KeyHandle:
        return import_verification_key(self.algorithm, key_material)

    def sign(self, key: KeyHandle, data: bytes) -> bytes:
        raise NotImplementedError

    def verify(self, key: KeyHandle, data: bytes, signature: bytes) -> bool:
        raise NotImplementedError


class HMACSHA256(SignatureAlgorithm):
    """HS256: HMAC with SHA-256 over a shared secret."""

    algorithm = Algorithm.HS256

    def sign(self, key: KeyHandle, data: bytes) -> bytes:
        secret = unwrap(key, self.algorithm, SIGN)
        return hmac.new(secret, data, hashlib.sha256).digest()

    def verify(self, key: KeyHandle, data: bytes, signature: bytes) -> bool:
        # Recompute and compare in constant time
        return hmac.compare_digest(self.sign(key, data), signature)


class RSAPKCS1v15SHA256(SignatureAlgorithm):
    """RS256: RSASSA-PKCS1-v1_5 with SHA-256."""

    algorithm = Algorithm.RS256

    def sign(self, key: KeyHandle, data: bytes) -> bytes:
        private_key = unwrap(key, self.algorithm, SIGN)
        return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())

    def verify(self, key: KeyHandle, data: bytes, signature: bytes) -> bool:
        public_key = unwrap(key, self.algorithm, VERIFY)
        try:
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        except InvalidSignature:
            return False
        return True


class ECDSAP256SHA256(SignatureAlgorithm):
    """
    ES256: ECDSA on P-256 with SHA-256.

    ``native_format`` is what the ``cryptography`` back-end produces from
    ``sign`` and expects in ``verify``. Both directions convert through it,
    so tokens always carry raw R||S on the wire.
    """

    algorithm = Algorithm.ES256
    native_format = SignatureFormat.DER

    def sign(self, key: KeyHandle, data: bytes) -> bytes:
        private_key = unwrap(key, self.algorithm, SIGN)
        native = private_key.sign(data, ec.ECDSA(hashes.SHA256()))
        return to_jose(native, self.native_format)

    def verify(self, key: KeyHandle, data: bytes, signature: bytes) -> bool:
        public_key = unwrap(key, self.algorithm, VERIFY)
        native = from_jose(signature, self.native_format)
        try:
            public_key.verify(native, data, ec.ECDSA(hashes.SHA256()))
        except InvalidSignature:
            return False
        return True


_HANDLERS: dict[Algorithm, SignatureAlgorithm] = {
    handler.algorithm: handler
    for handler in (HMACSHA256(), RSAPKCS1v15SHA256(), ECDSAP256SHA256())
}


def get_handler(algorithm: Algorithm) -> SignatureAlgorithm:
    """Return the handler registered for ``algorithm``."""
    return _HANDLERS[algorithm]
