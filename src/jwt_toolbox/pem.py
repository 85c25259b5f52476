"""
PEM armor handling for key import.
"""

import base64
import binascii
import re

from .errors import KeyFormatError

# Matches: -----BEGIN PUBLIC KEY----- / -----END RSA PRIVATE KEY-----
_MARKER = re.compile(r"-----(BEGIN|END) ([\w ]+)-----")
_WHITESPACE = re.compile(r"\s+")


def pem_label(pem: str) -> str | None:
    """
    Return the label of the first BEGIN marker.

    Examples:
        >>> pem_label("-----BEGIN PUBLIC KEY-----\\nMFkw...\\n-----END PUBLIC KEY-----")
        'PUBLIC KEY'
        >>> pem_label("MFkw...") is None
        True
    """
    for match in _MARKER.finditer(pem):
        if match.group(1) == "BEGIN":
            return match.group(2).strip()
    return None


def pem_to_der(pem: str) -> bytes:
    """
    Strip PEM markers and whitespace and decode the DER body.

    The DER content is not checked against the label; a mismatch surfaces
    when the key is imported.

    Args:
        pem: PEM text, or bare base64 without markers

    Returns:
        DER-encoded bytes

    Raises:
        KeyFormatError: If nothing is left after stripping or the remainder
            is not valid standard base64.
    """
    body = _WHITESPACE.sub("", _MARKER.sub("", pem))
    if not body:
        raise KeyFormatError("PEM contains no key data")

    try:
        return base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise KeyFormatError(f"Invalid PEM base64 content: {e}") from e
