"""
JWT toolbox for Python

Decode, sign and verify JSON Web Tokens with HS256, RS256 and ES256.
"""

import logging

from .models import (
    ALGORITHM_INFO,
    SUPPORTED_ALGORITHMS,
    Algorithm,
    AlgorithmInfo,
    DecodeResult,
    EncodeResult,
    JWTState,
    KeyType,
    VerificationResult,
)
from .errors import (
    DecodeError,
    JWTError,
    KeyFormatError,
    KeyImportError,
    SignatureFormatError,
    StructuralError,
    UnsupportedAlgorithmError,
)
from .decoder import decode
from .codec import encode, encode_sync, verify, verify_sync
from .headers import extract_bearer_token, has_bearer_token
from .middleware.wsgi import JWTBearerWSGIMiddleware

__version__ = "0.1.0"

__all__ = [
    "ALGORITHM_INFO",
    "SUPPORTED_ALGORITHMS",
    "Algorithm",
    "AlgorithmInfo",
    "DecodeResult",
    "EncodeResult",
    "JWTState",
    "KeyType",
    "VerificationResult",
    "DecodeError",
    "JWTError",
    "KeyFormatError",
    "KeyImportError",
    "SignatureFormatError",
    "StructuralError",
    "UnsupportedAlgorithmError",
    "decode",
    "encode",
    "encode_sync",
    "verify",
    "verify_sync",
    "extract_bearer_token",
    "has_bearer_token",
    "JWTBearerWSGIMiddleware",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

# ASGI middleware - optional, requires starlette
try:
    from .middleware.asgi import JWTBearerASGIMiddleware
    __all__.append("JWTBearerASGIMiddleware")
except ImportError:
    pass
