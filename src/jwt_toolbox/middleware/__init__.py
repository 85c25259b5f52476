"""
Bearer JWT middleware for ASGI and WSGI frameworks.

Re-exports middleware classes for convenient imports:
    from jwt_toolbox.middleware import JWTBearerASGIMiddleware
    from jwt_toolbox.middleware import JWTBearerWSGIMiddleware
"""

from .wsgi import JWTBearerWSGIMiddleware

__all__: list[str] = ["JWTBearerWSGIMiddleware"]

# ASGI middleware (FastAPI, Starlette)
try:
    from .asgi import JWTBearerASGIMiddleware
    __all__.append("JWTBearerASGIMiddleware")
except ImportError:
    pass
