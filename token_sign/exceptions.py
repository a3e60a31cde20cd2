"""Exceptions raised by the token signing core."""

from typing import Optional, Sequence


class TokenSignError(Exception):
    """Base exception for all token signing errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedAlgorithmError(TokenSignError, ValueError):
    """Requested algorithm name is not in the registry."""

    def __init__(self, algorithm: str, supported: Optional[Sequence[str]] = None):
        self.algorithm = algorithm
        self.supported = list(supported or [])
        message = f"Unsupported algorithm: {algorithm}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class SigningFailedError(TokenSignError):
    """The signature engine rejected the operation."""


class DecodeFailedError(TokenSignError, ValueError):
    """URL-safe base64 payload could not be decoded."""


class JsonError(TokenSignError, ValueError):
    """JSON parse or serialize failure."""
