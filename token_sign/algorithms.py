"""
Algorithm registry.

Maps the public, case-insensitive algorithm names used in token headers
to the signing family that realizes them and the digest that family is
handed.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from token_sign.exceptions import UnsupportedAlgorithmError


class SigningFamily(Enum):
    """Structural category of a signing scheme."""

    SYMMETRIC_HASH = "hmac"
    ASYMMETRIC_SIGNATURE = "openssl"


@dataclass(frozen=True)
class AlgorithmSpec:
    """How a named algorithm is realized."""

    family: SigningFamily
    cipher: str  # hashlib name for HMAC, engine digest name for asymmetric


DEFAULT_ALGORITHM = "HS256"

ALGORITHMS: Mapping[str, AlgorithmSpec] = MappingProxyType(
    {
        "HS256": AlgorithmSpec(SigningFamily.SYMMETRIC_HASH, "sha256"),
        "HS384": AlgorithmSpec(SigningFamily.SYMMETRIC_HASH, "sha384"),
        "HS512": AlgorithmSpec(SigningFamily.SYMMETRIC_HASH, "sha512"),
        "RS256": AlgorithmSpec(SigningFamily.ASYMMETRIC_SIGNATURE, "SHA256"),
        "RS384": AlgorithmSpec(SigningFamily.ASYMMETRIC_SIGNATURE, "SHA384"),
        "RS512": AlgorithmSpec(SigningFamily.ASYMMETRIC_SIGNATURE, "SHA512"),
    }
)


def is_algorithm_supported(name: Any) -> bool:
    """Check whether ``name`` (any case) is a registered algorithm."""
    if not isinstance(name, str):
        return False
    return name.upper() in ALGORITHMS


def list_supported_algorithms() -> list[str]:
    """Return all registered algorithm names, sorted."""
    return sorted(ALGORITHMS)


def resolve_algorithm(name: str) -> AlgorithmSpec:
    """
    Look up the spec for an algorithm name.

    Args:
        name: Algorithm name, case-insensitive (e.g. "HS256", "rs512")

    Returns:
        The AlgorithmSpec registered for the name

    Raises:
        UnsupportedAlgorithmError: If the name is not registered
    """
    if not is_algorithm_supported(name):
        raise UnsupportedAlgorithmError(str(name), list_supported_algorithms())
    return ALGORITHMS[name.upper()]
