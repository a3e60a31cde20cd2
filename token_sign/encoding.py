"""URL-safe base64 for token segments."""

import base64
import binascii
from typing import Union

from token_sign.exceptions import DecodeFailedError

# Fixed 1:1 transliteration; all replacements are RFC 3986 unreserved.
_TO_URL_SAFE = str.maketrans("+/=", "-_~")
_FROM_URL_SAFE = str.maketrans("-_~", "+/=")


def base64url_encode(data: Union[bytes, str], encoding: str = "utf-8") -> str:
    """
    Encode bytes as base64 with ``+``, ``/`` and ``=`` replaced by ``-``, ``_`` and ``~``.

    Args:
        data: Bytes to encode; str is encoded with ``encoding`` first
        encoding: Text encoding for str input (default: utf-8)

    Returns:
        URL-safe ASCII string
    """
    if isinstance(data, str):
        data = data.encode(encoding)
    return base64.b64encode(data).decode("ascii").translate(_TO_URL_SAFE)


def base64url_decode(text: Union[str, bytes]) -> bytes:
    """
    Decode a string produced by base64url_encode.

    Args:
        text: Encoded segment; bytes must be ASCII

    Raises:
        DecodeFailedError: If the text is not valid base64 after reversing the substitution
        TypeError: If text is not str, bytes or bytearray
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise TypeError(f"Expected str or bytes, got {type(text).__name__}")
    try:
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("ascii")
        return base64.b64decode(text.translate(_FROM_URL_SAFE), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeFailedError(f"Invalid base64 payload: {e}") from e
