"""
Data models for JWT decoding, encoding and verification.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import UnsupportedAlgorithmError


class KeyType(str, Enum):
    """Key topology of a signing algorithm."""

    SYMMETRIC = "symmetric"
    ASYMMETRIC = "asymmetric"


class Algorithm(str, Enum):
    """Closed set of supported JWS algorithms."""

    HS256 = "HS256"
    RS256 = "RS256"
    ES256 = "ES256"

    @classmethod
    def from_name(cls, value: Any) -> Algorithm:
        """
        Look up an algorithm by its ``alg`` header value.

        Raises:
            UnsupportedAlgorithmError: If the value is not a supported algorithm.
        """
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise UnsupportedAlgorithmError(
            f'Algorithm "{value}" is not supported. '
            f"Supported: {', '.join(SUPPORTED_ALGORITHMS)}"
        )

    @property
    def info(self) -> AlgorithmInfo:
        return ALGORITHM_INFO[self]


@dataclass(frozen=True)
class AlgorithmInfo:
    """
    Display metadata for an algorithm.

    Attributes:
        name: Human readable algorithm name
        description: One-line description of the key setup
        key_type: Whether the algorithm uses a shared secret or a key pair
    """
    name: str
    description: str
    key_type: KeyType

    @property
    def symmetric(self) -> bool:
        return self.key_type is KeyType.SYMMETRIC


SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(alg.value for alg in Algorithm)

ALGORITHM_INFO: dict[Algorithm, AlgorithmInfo] = {
    Algorithm.HS256: AlgorithmInfo(
        name="HMAC with SHA-256",
        description="Symmetric algorithm using a shared secret",
        key_type=KeyType.SYMMETRIC,
    ),
    Algorithm.RS256: AlgorithmInfo(
        name="RSA with SHA-256",
        description="Asymmetric algorithm using RSA public/private key pair",
        key_type=KeyType.ASYMMETRIC,
    ),
    Algorithm.ES256: AlgorithmInfo(
        name="ECDSA with SHA-256",
        description="Asymmetric algorithm using Elliptic Curve (P-256) key pair",
        key_type=KeyType.ASYMMETRIC,
    ),
}


@dataclass
class DecodeResult:
    """
    Structural decode of a compact token.

    ``is_valid`` only means the token has three segments and that header and
    payload are JSON objects. It says nothing about the signature.

    Attributes:
        header: Decoded header, or None if it could not be decoded
        payload: Decoded payload, or None if it could not be decoded
        signature: Signature segment exactly as found on the wire
        is_valid: Whether the token is structurally well-formed
        error: Reason the token is not well-formed
    """
    header: dict[str, Any] | None = None
    payload: dict[str, Any] | None = None
    signature: str = ""
    is_valid: bool = False
    error: str | None = None


@dataclass
class EncodeResult:
    """
    Result of signing a header and payload.

    Attributes:
        token: Compact serialization, empty when ``error`` is set
        error: Reason encoding failed
    """
    token: str
    error: str | None = None


@dataclass
class VerificationResult:
    """
    Result of a local signature check.

    Attributes:
        verified: Whether the signature matched
        algorithm: ``alg`` value from the token header, when it was readable
        error: Reason verification failed
    """
    verified: bool
    algorithm: str | None = None
    error: str | None = None


@dataclass
class JWTState:
    """
    Bearer token state attached to requests by the middleware.

    Attributes:
        present: Whether the request carried a bearer token
        result: Verification result if a token was present
        claims: Decoded payload, only set when the signature verified
    """
    present: bool
    result: VerificationResult | None = None
    claims: dict[str, Any] | None = None
