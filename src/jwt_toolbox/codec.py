"""
Signing and verification of compact JWTs.

``encode`` and ``verify`` are coroutines: key import and the signature
primitive run off the event loop. ``encode_sync`` and ``verify_sync`` do the
same work inline for synchronous callers. None of them raise; failures come
back in the result's ``error`` field.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Iterable, Mapping

from .algorithms import get_handler
from .base64url import decode_to_bytes, encode_bytes, encode_utf8
from .decoder import decode_segment, split_token
from .errors import DecodeError, StructuralError, UnsupportedAlgorithmError
from .models import Algorithm, EncodeResult, VerificationResult

logger = logging.getLogger(__name__)


def _to_json(value: Mapping[str, Any]) -> str:
    # Compact, non-ASCII kept verbatim, key order preserved
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _check_encode_request(
    header: Mapping[str, Any],
    key: str,
) -> tuple[Algorithm | None, EncodeResult | None]:
    """
    Validate algorithm and key before any crypto work.

    Returns the algorithm and None if signing can proceed, or None and an
    EncodeResult carrying the error.
    """
    alg = header.get("alg") if isinstance(header, Mapping) else None
    if not alg:
        return None, EncodeResult(token="", error="Header must include 'alg' field")

    try:
        algorithm = Algorithm.from_name(alg)
    except UnsupportedAlgorithmError as e:
        return None, EncodeResult(token="", error=str(e))

    if not key:
        if algorithm.info.symmetric:
            return None, EncodeResult(token="", error="Secret is required for signing")
        return None, EncodeResult(token="", error="Private key is required for signing")

    return algorithm, None


def _signing_input(header: Mapping[str, Any], payload: Mapping[str, Any]) -> str:
    return f"{encode_utf8(_to_json(header))}.{encode_utf8(_to_json(payload))}"


def _sign(algorithm: Algorithm, signing_input: str, key: str) -> str:
    handler = get_handler(algorithm)
    signing_key = handler.prepare_signing_key(key)
    signature = handler.sign(signing_key, signing_input.encode("utf-8"))
    return f"{signing_input}.{encode_bytes(signature)}"


def _encode_failed(algorithm: Algorithm, e: Exception) -> EncodeResult:
    logger.warning("JWT encoding failed for %s: %s", algorithm.value, e)
    return EncodeResult(token="", error=f"Encoding failed: {e}")


async def encode(
    header: Mapping[str, Any],
    payload: Mapping[str, Any],
    key: str,
) -> EncodeResult:
    """
    Sign a header and payload into a compact JWT.

    Args:
        header: JWT header; ``alg`` selects the algorithm
        payload: Claims to sign
        key: Shared secret (HS256) or PKCS#8 PEM private key (RS256, ES256)

    Returns:
        EncodeResult with the token, or an empty token and an error

    Example:
        >>> result = await encode({"alg": "HS256", "typ": "JWT"}, {"sub": "1"}, "secret")
        >>> result.token.count(".")
        2
    """
    algorithm, error = _check_encode_request(header, key)
    if error is not None:
        return error

    try:
        signing_input = _signing_input(header, payload)
        token = await asyncio.to_thread(_sign, algorithm, signing_input, key)
    except Exception as e:
        return _encode_failed(algorithm, e)

    logger.debug("Encoded %s token", algorithm.value)
    return EncodeResult(token=token)


def encode_sync(
    header: Mapping[str, Any],
    payload: Mapping[str, Any],
    key: str,
) -> EncodeResult:
    """
    Sign a header and payload into a compact JWT synchronously.

    Args:
        header: JWT header; ``alg`` selects the algorithm
        payload: Claims to sign
        key: Shared secret (HS256) or PKCS#8 PEM private key (RS256, ES256)

    Returns:
        EncodeResult with the token, or an empty token and an error
    """
    algorithm, error = _check_encode_request(header, key)
    if error is not None:
        return error

    try:
        token = _sign(algorithm, _signing_input(header, payload), key)
    except Exception as e:
        return _encode_failed(algorithm, e)

    logger.debug("Encoded %s token", algorithm.value)
    return EncodeResult(token=token)


def _check_verify_request(
    token: str,
    key: str,
    algorithms: Iterable[str] | None,
) -> tuple[tuple[Algorithm, list[str]] | None, VerificationResult | None]:
    """
    Validate token structure and header before any crypto work.

    Returns the algorithm with the wire segments and None if verification
    can proceed, or None and a VerificationResult carrying the error.
    """
    if not token or not key:
        return None, VerificationResult(verified=False, error="Token and key are required")

    try:
        parts = split_token(token)
    except StructuralError:
        return None, VerificationResult(verified=False, error="Invalid JWT structure")

    try:
        header = decode_segment(parts[0])
    except DecodeError:
        return None, VerificationResult(verified=False, error="Invalid header")

    alg = header.get("alg")
    if not alg:
        return None, VerificationResult(
            verified=False,
            error="Header must include 'alg' field",
        )

    try:
        algorithm = Algorithm.from_name(alg)
    except UnsupportedAlgorithmError as e:
        return None, VerificationResult(verified=False, algorithm=str(alg), error=str(e))

    if algorithms is not None:
        if isinstance(algorithms, str):
            algorithms = [algorithms]
        allowed = [str(getattr(a, "value", a)) for a in algorithms]
        if algorithm.value not in allowed:
            return None, VerificationResult(
                verified=False,
                algorithm=algorithm.value,
                error=f'Algorithm "{algorithm.value}" is not allowed. '
                f"Allowed: {', '.join(allowed)}",
            )

    return (algorithm, parts), None


def _verify(algorithm: Algorithm, parts: list[str], key: str) -> bool:
    handler = get_handler(algorithm)
    # Reuse the wire segments; re-serializing the JSON could change the bytes
    signing_input = f"{parts[0]}.{parts[1]}".encode("utf-8")
    signature = decode_to_bytes(parts[2])
    verification_key = handler.prepare_verification_key(key)
    return handler.verify(verification_key, signing_input, signature)


def _verification_result(algorithm: Algorithm, verified: bool) -> VerificationResult:
    if not verified:
        logger.debug("%s signature does not match", algorithm.value)
        return VerificationResult(
            verified=False,
            algorithm=algorithm.value,
            error="Signature does not match",
        )
    return VerificationResult(verified=True, algorithm=algorithm.value)


def _verify_failed(algorithm: Algorithm, e: Exception) -> VerificationResult:
    logger.warning("JWT verification failed for %s: %s", algorithm.value, e)
    return VerificationResult(
        verified=False,
        algorithm=algorithm.value,
        error=f"Verification failed: {e}",
    )


async def verify(
    token: str,
    key: str,
    algorithms: Iterable[str] | None = None,
) -> VerificationResult:
    """
    Verify a compact JWT's signature asynchronously.

    Only the signature is checked; claims such as ``exp`` are not.

    Args:
        token: Compact JWS string
        key: Shared secret (HS256) or SPKI PEM public key (RS256, ES256)
        algorithms: Optional allow-list of ``alg`` values to accept

    Returns:
        VerificationResult with verified status, the token's algorithm and,
        when not verified, the reason
    """
    checked, error = _check_verify_request(token, key, algorithms)
    if error is not None:
        return error
    algorithm, parts = checked

    try:
        verified = await asyncio.to_thread(_verify, algorithm, parts, key)
    except Exception as e:
        return _verify_failed(algorithm, e)

    return _verification_result(algorithm, verified)


def verify_sync(
    token: str,
    key: str,
    algorithms: Iterable[str] | None = None,
) -> VerificationResult:
    """
    Verify a compact JWT's signature synchronously.

    Args:
        token: Compact JWS string
        key: Shared secret (HS256) or SPKI PEM public key (RS256, ES256)
        algorithms: Optional allow-list of ``alg`` values to accept

    Returns:
        VerificationResult with verified status, the token's algorithm and,
        when not verified, the reason
    """
    checked, error = _check_verify_request(token, key, algorithms)
    if error is not None:
        return error
    algorithm, parts = checked

    try:
        verified = _verify(algorithm, parts, key)
    except Exception as e:
        return _verify_failed(algorithm, e)

    return _verification_result(algorithm, verified)
