"""
ASGI middleware for bearer JWT verification (FastAPI/Starlette).
"""

from typing import Any, Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from ..codec import verify
from ..decoder import decode
from ..headers import extract_bearer_token
from ..models import JWTState

DECISION_HEADER = "X-JWT-Decision"


class JWTBearerASGIMiddleware(BaseHTTPMiddleware):
    """
    ASGI middleware that verifies ``Authorization: Bearer`` JWTs locally.

    Attaches verification state to `request.state.jwt` with:
    - present: bool - whether request had a bearer token
    - result: VerificationResult | None - verification result if present
    - claims: dict | None - decoded payload if the signature verified

    Only the signature is checked; claims such as ``exp`` are left to the
    application.

    Args:
        app: ASGI application
        key: Shared secret (HS256) or SPKI PEM public key (RS256, ES256)
        algorithms: Accepted ``alg`` values. Pin this when ``key`` is a public
            key so an HS256 token cannot be checked against the PEM text.
        require_verified: If True, return 401 for missing or failed tokens.
            If False (default), operate in observe mode - attach state but allow all.

    Example (FastAPI):
        >>> from fastapi import FastAPI, Request
        >>> from jwt_toolbox import JWTBearerASGIMiddleware
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(JWTBearerASGIMiddleware, key=PUBLIC_PEM, algorithms=["RS256"])
        >>>
        >>> @app.get("/me")
        >>> async def me(request: Request):
        ...     jwt = request.state.jwt
        ...     if jwt.present and jwt.result.verified:
        ...         return {"sub": jwt.claims.get("sub")}
        ...     return {"error": "Not verified"}
    """

    def __init__(
        self,
        app: Any,
        key: str,
        algorithms: Iterable[str] | None = None,
        require_verified: bool = False,
    ):
        super().__init__(app)
        self.key = key
        self.algorithms = list(algorithms) if algorithms is not None else None
        self.require_verified = require_verified

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        token = extract_bearer_token(request.headers)

        if token is None:
            request.state.jwt = JWTState(present=False)

            if self.require_verified:
                return JSONResponse(
                    status_code=401,
                    content={"error": "Missing bearer token"},
                    headers={DECISION_HEADER: "deny"},
                )

            return await call_next(request)

        result = await verify(token, self.key, algorithms=self.algorithms)

        claims = decode(token).payload if result.verified else None
        request.state.jwt = JWTState(present=True, result=result, claims=claims)

        if self.require_verified and not result.verified:
            return JSONResponse(
                status_code=401,
                content={
                    "error": result.error or "Signature verification failed",
                },
                headers={DECISION_HEADER: "deny"},
            )

        response = await call_next(request)
        response.headers[DECISION_HEADER] = "allow" if result.verified else "observe"
        return response
