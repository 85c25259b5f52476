"""
Exception types raised by the JWT toolbox internals.

Public operations (decode, encode, verify) never let these escape; they are
caught at the operation boundary and turned into the ``error`` field of the
returned result.
"""


class JWTError(Exception):
    """Base class for every error raised by jwt_toolbox."""


class StructuralError(JWTError, ValueError):
    """Token is empty or does not have three dot-separated segments."""


class DecodeError(JWTError, ValueError):
    """Invalid base64url, invalid UTF-8 or invalid JSON in a token segment."""


class UnsupportedAlgorithmError(JWTError, ValueError):
    """The ``alg`` header value is missing or outside the supported set."""


class KeyImportError(JWTError, ValueError):
    """Key material could not be turned into a usable key handle."""


class KeyFormatError(KeyImportError):
    """PEM armor or its base64 body is malformed."""


class SignatureFormatError(JWTError, ValueError):
    """ECDSA signature bytes are not valid raw R||S or DER."""
