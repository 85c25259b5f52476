"""
URL-safe, unpadded base64 as used by JWS compact serialization.
"""

import base64
import binascii
import re

from .errors import DecodeError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode_bytes(data: bytes) -> str:
    """Encode bytes to base64url without ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode_to_bytes(value: str) -> bytes:
    """
    Decode a base64url string, restoring the stripped padding.

    Args:
        value: Unpadded base64url text

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the text has characters outside the base64url
            alphabet, a length no base64 encoding can produce, or unused
            low bits set in its last character.

    Examples:
        >>> decode_to_bytes("aGk")
        b'hi'
    """
    if not _ALPHABET.fullmatch(value):
        raise DecodeError("Invalid Base64 encoding")

    padded = value + "=" * ((4 - len(value) % 4) % 4)
    try:
        data = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Invalid Base64 encoding: {e}") from e

    # One encoding per byte string; the unused low bits must be zero
    if encode_bytes(data) != value:
        raise DecodeError("Invalid Base64 encoding: non-canonical trailing bits")
    return data


def encode_utf8(text: str) -> str:
    """Encode text as UTF-8, then base64url."""
    return encode_bytes(text.encode("utf-8"))


def decode_to_utf8(value: str) -> str:
    """
    Decode base64url text and interpret the bytes as UTF-8.

    Raises:
        DecodeError: On invalid base64url or malformed UTF-8.
    """
    raw = decode_to_bytes(value)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Invalid UTF-8 sequence: {e.reason}") from e
