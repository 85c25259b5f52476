"""
ECDSA P-256 signature format conversion.

JWS (RFC 7518, section 3.4) carries ES256 signatures as the raw 64-byte
concatenation R||S. Many crypto back-ends, ``cryptography`` included, emit and
expect the ASN.1 DER form instead:

    30 <len> 02 <lenR> <R> 02 <lenS> <S>
"""

from enum import Enum

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .errors import SignatureFormatError

COORDINATE_SIZE = 32
RAW_SIZE = 2 * COORDINATE_SIZE


class SignatureFormat(str, Enum):
    """Signature encoding a crypto back-end emits and accepts for ECDSA."""

    RAW = "raw"
    DER = "der"


def _check_raw(signature: bytes) -> None:
    if len(signature) != RAW_SIZE:
        raise SignatureFormatError(
            f"Raw ES256 signature must be {RAW_SIZE} bytes, got {len(signature)}"
        )


def raw_to_der(raw: bytes) -> bytes:
    """
    Convert a raw R||S signature into a DER ``SEQUENCE { r, s }``.

    Args:
        raw: 64-byte signature, R then S, big-endian

    Returns:
        DER-encoded signature

    Raises:
        SignatureFormatError: If ``raw`` is not exactly 64 bytes.
    """
    _check_raw(raw)
    r = int.from_bytes(raw[:COORDINATE_SIZE], "big")
    s = int.from_bytes(raw[COORDINATE_SIZE:], "big")
    return encode_dss_signature(r, s)


def der_to_raw(der: bytes) -> bytes:
    """
    Convert a DER ``SEQUENCE { r, s }`` into a raw 64-byte R||S signature.

    Args:
        der: DER-encoded ECDSA signature

    Returns:
        R and S, each left-padded to 32 bytes, concatenated

    Raises:
        SignatureFormatError: If ``der`` is not a well-formed DER signature
            or an integer does not fit in 32 bytes.
    """
    try:
        r, s = decode_dss_signature(der)
    except ValueError as e:
        raise SignatureFormatError(f"Invalid DER signature: {e}") from e

    try:
        return r.to_bytes(COORDINATE_SIZE, "big") + s.to_bytes(COORDINATE_SIZE, "big")
    except OverflowError as e:
        raise SignatureFormatError(
            f"Invalid DER signature: INTEGER does not fit in {COORDINATE_SIZE} bytes"
        ) from e


def to_jose(signature: bytes, native: SignatureFormat) -> bytes:
    """Turn a signature emitted by a back-end in ``native`` format into raw R||S."""
    if native is SignatureFormat.DER:
        return der_to_raw(signature)
    _check_raw(signature)
    return signature


def from_jose(signature: bytes, native: SignatureFormat) -> bytes:
    """Turn a raw R||S signature into what a ``native`` format back-end verifies."""
    if native is SignatureFormat.DER:
        return raw_to_der(signature)
    _check_raw(signature)
    return signature
