"""
Bearer token extraction from HTTP request headers.
"""

from typing import Mapping

AUTHORIZATION_HEADER = "authorization"
BEARER_SCHEME = "bearer"


def extract_bearer_token(headers: Mapping[str, str]) -> str | None:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    Header name and scheme are matched case-insensitively.

    Args:
        headers: Request headers

    Returns:
        The token, or None if there is no bearer credential

    Examples:
        >>> extract_bearer_token({"Authorization": "Bearer abc.def.ghi"})
        'abc.def.ghi'
        >>> extract_bearer_token({"authorization": "Basic dXNlcjpwdw=="}) is None
        True
    """
    value = None
    for name, header_value in headers.items():
        if name.lower() == AUTHORIZATION_HEADER:
            value = header_value
            break

    if not value:
        return None

    scheme, _, credentials = value.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None

    token = credentials.strip()
    return token or None


def has_bearer_token(headers: Mapping[str, str]) -> bool:
    """Check if the headers carry a bearer credential."""
    return extract_bearer_token(headers) is not None
