"""
WSGI middleware for bearer JWT verification (Flask).
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable

from ..codec import verify_sync
from ..decoder import decode
from ..headers import extract_bearer_token
from ..models import JWTState

DECISION_HEADER = "X-JWT-Decision"
ENVIRON_KEY = "jwt_toolbox.jwt"


def _extract_headers(environ: dict[str, Any]) -> dict[str, str]:
    """Extract HTTP headers from WSGI environ."""
    headers: dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith("HTTP_"):
            # HTTP_AUTHORIZATION -> authorization
            header_name = key[5:].replace("_", "-").lower()
            headers[header_name] = value
    return headers


class JWTBearerWSGIMiddleware:
    """
    WSGI middleware that verifies ``Authorization: Bearer`` JWTs locally.

    Attaches verification state to `environ["jwt_toolbox.jwt"]` with:
    - present: bool - whether request had a bearer token
    - result: VerificationResult | None - verification result if present
    - claims: dict | None - decoded payload if the signature verified

    Args:
        app: WSGI application
        key: Shared secret (HS256) or SPKI PEM public key (RS256, ES256)
        algorithms: Accepted ``alg`` values
        require_verified: If True, return 401 for missing or failed tokens.
            If False (default), operate in observe mode - attach state but allow all.

    Example (Flask):
        >>> from flask import Flask, g, request
        >>> from jwt_toolbox.middleware.wsgi import JWTBearerWSGIMiddleware
        >>>
        >>> app = Flask(__name__)
        >>> app.wsgi_app = JWTBearerWSGIMiddleware(app.wsgi_app, key=SECRET, algorithms=["HS256"])
        >>>
        >>> @app.route("/me")
        >>> def me():
        ...     jwt = request.environ.get("jwt_toolbox.jwt")
        ...     if jwt and jwt.present and jwt.result.verified:
        ...         return {"sub": jwt.claims.get("sub")}
        ...     return {"error": "Not verified"}, 401
    """

    def __init__(
        self,
        app: Callable[..., Iterable[bytes]],
        key: str,
        algorithms: Iterable[str] | None = None,
        require_verified: bool = False,
    ):
        self.app = app
        self.key = key
        self.algorithms = list(algorithms) if algorithms is not None else None
        self.require_verified = require_verified

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        token = extract_bearer_token(_extract_headers(environ))

        if token is None:
            environ[ENVIRON_KEY] = JWTState(present=False)

            if self.require_verified:
                return self._error_response(start_response, "Missing bearer token")

            return self.app(environ, start_response)

        result = verify_sync(token, self.key, algorithms=self.algorithms)

        claims = decode(token).payload if result.verified else None
        environ[ENVIRON_KEY] = JWTState(present=True, result=result, claims=claims)

        if self.require_verified and not result.verified:
            return self._error_response(
                start_response,
                result.error or "Signature verification failed",
            )

        def custom_start_response(
            status: str,
            response_headers: list[tuple[str, str]],
            exc_info: Any = None,
        ) -> Any:
            decision = "allow" if result.verified else "observe"
            response_headers.append((DECISION_HEADER, decision))
            return start_response(status, response_headers, exc_info)

        return self.app(environ, custom_start_response)

    def _error_response(
        self,
        start_response: Callable[..., Any],
        error: str,
    ) -> Iterable[bytes]:
        """Return 401 error response."""
        body = json.dumps({"error": error}).encode("utf-8")
        start_response(
            "401 Unauthorized",
            [
                ("Content-Type", "application/json"),
                ("Content-Length", str(len(body))),
                ("WWW-Authenticate", "Bearer"),
                (DECISION_HEADER, "deny"),
            ],
        )
        return [body]
