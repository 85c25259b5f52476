"""
Structural decoding of compact JWTs.

Decoding is synchronous and never touches key material or crypto; a token
that decodes with ``is_valid=True`` carries no trust guarantee.
"""

from __future__ import annotations

import json
from typing import Any

from .base64url import decode_to_utf8
from .errors import DecodeError, StructuralError
from .models import DecodeResult


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} in JSON")


def decode_segment(segment: str) -> dict[str, Any]:
    """
    Decode one base64url JSON segment into an object.

    Raises:
        DecodeError: On invalid base64url, UTF-8 or JSON, or when the JSON
            document is not an object.
    """
    text = decode_to_utf8(segment)
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise DecodeError(str(e) or type(e).__name__) from e

    if not isinstance(value, dict):
        raise DecodeError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def split_token(token: str) -> list[str]:
    """
    Split a compact token into its three wire segments.

    Raises:
        StructuralError: If the token is empty or does not have exactly
            three dot-separated segments.
    """
    token = (token or "").strip()
    if not token:
        raise StructuralError("No token provided")

    parts = token.split(".")
    if len(parts) != 3:
        raise StructuralError(
            f"Invalid JWT structure. Expected 3 parts, got {len(parts)}"
        )
    return parts


def decode(token: str) -> DecodeResult:
    """
    Split a token into header, payload and signature.

    Args:
        token: Compact JWS string; surrounding whitespace is ignored

    Returns:
        DecodeResult; ``error`` explains why ``is_valid`` is False

    Examples:
        >>> decode("").error
        'No token provided'
        >>> decode("a.b").error
        'Invalid JWT structure. Expected 3 parts, got 2'
    """
    try:
        parts = split_token(token)
    except StructuralError as e:
        return DecodeResult(error=str(e))

    try:
        header = decode_segment(parts[0])
    except DecodeError as e:
        return DecodeResult(error=f"Invalid header: {e}")

    try:
        payload = decode_segment(parts[1])
    except DecodeError as e:
        return DecodeResult(header=header, error=f"Invalid payload: {e}")

    return DecodeResult(
        header=header,
        payload=payload,
        signature=parts[2],
        is_valid=True,
    )
