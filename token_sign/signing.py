"""
Signature dispatch for token signing.

Resolves an algorithm name through the registry and hands the message to
the keyed-hash (HMAC) or the asymmetric (private key) signing routine.
"""

import hmac
import logging
from types import MappingProxyType
from typing import Mapping, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, padding, rsa
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes

from token_sign.algorithms import DEFAULT_ALGORITHM, SigningFamily, resolve_algorithm
from token_sign.exceptions import SigningFailedError

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, str]

# Digest names understood by the asymmetric family. None marks a digest the
# engine knows by name but does not implement.
ENGINE_DIGESTS: Mapping[str, Optional[type[hashes.HashAlgorithm]]] = MappingProxyType(
    {
        "SHA1": hashes.SHA1,
        "SHA224": hashes.SHA224,
        "SHA256": hashes.SHA256,
        "SHA384": hashes.SHA384,
        "SHA512": hashes.SHA512,
        "MD5": hashes.MD5,
        "MD4": None,
        "MD2": None,
        "RMD160": None,
        "RIPEMD160": None,
        "DSS1": hashes.SHA1,  # legacy DSA alias
    }
)

FALLBACK_DIGEST = hashes.SHA256


def _to_bytes(value: BytesLike, encoding: str = "utf-8") -> bytes:
    if isinstance(value, str):
        return value.encode(encoding)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise TypeError(f"Expected bytes or str, got {type(value).__name__}")


def engine_digest(cipher: str) -> hashes.HashAlgorithm:
    """
    Map a digest name to the engine's hash instance.

    Names missing from ENGINE_DIGESTS fall back to SHA-256 instead of
    failing. Callers relying on an exotic digest name should check
    ``cipher.upper() in ENGINE_DIGESTS`` first.

    Raises:
        SigningFailedError: If the digest is known but not provided by the engine
    """
    name = cipher.upper()
    if name not in ENGINE_DIGESTS:
        logger.debug("Unknown digest %r, falling back to %s", cipher, FALLBACK_DIGEST.name)
        return FALLBACK_DIGEST()

    digest_cls = ENGINE_DIGESTS[name]
    if digest_cls is None:
        raise SigningFailedError(f"Digest {name} is not available in the signature engine")
    return digest_cls()


def compute_hmac_signature(cipher: str, message: bytes, key: bytes) -> bytes:
    """Raw HMAC digest of ``message`` under ``key`` using hashlib digest ``cipher``."""
    return hmac.new(key, message, cipher).digest()


def _load_private_key(private_key_pem: bytes) -> PrivateKeyTypes:
    """Load an unencrypted private key from PEM bytes."""
    return serialization.load_pem_private_key(private_key_pem, password=None)


def compute_asymmetric_signature(cipher: str, message: bytes, private_key_pem: bytes) -> bytes:
    """
    Sign ``message`` with a PEM-encoded private key.

    The padding/scheme follows the key type: PKCS#1 v1.5 for RSA, ECDSA
    (DER signature) for EC, DSA for DSA keys and pure EdDSA for Ed25519
    and Ed448, where ``cipher`` is ignored.

    Args:
        cipher: Engine digest name (e.g. "SHA256")
        message: Bytes to sign
        private_key_pem: PEM-encoded, unencrypted private key

    Returns:
        Raw signature bytes

    Raises:
        SigningFailedError: If the key cannot be loaded or the engine refuses to sign
    """
    digest = engine_digest(cipher)
    try:
        private_key = _load_private_key(private_key_pem)

        if isinstance(private_key, rsa.RSAPrivateKey):
            return private_key.sign(message, padding.PKCS1v15(), digest)
        if isinstance(private_key, ec.EllipticCurvePrivateKey):
            return private_key.sign(message, ec.ECDSA(digest))
        if isinstance(private_key, dsa.DSAPrivateKey):
            return private_key.sign(message, digest)
        if isinstance(private_key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
            return private_key.sign(message)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningFailedError(f"Unable to sign data: {e}") from e

    raise SigningFailedError(
        f"Unable to sign data: {type(private_key).__name__} keys cannot produce signatures"
    )


def sign(message: BytesLike, key: BytesLike, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    """
    Sign a message with the named algorithm.

    Args:
        message: Data to sign; str is UTF-8 encoded
        key: HMAC secret, or PEM private key for asymmetric algorithms; str is UTF-8 encoded
        algorithm: Algorithm name, case-insensitive (default: HS256)

    Returns:
        Raw signature bytes

    Raises:
        UnsupportedAlgorithmError: If the algorithm is not registered
        SigningFailedError: If the signature engine rejects the key or digest
        TypeError: If message or key is not bytes, bytearray or str
    """
    spec = resolve_algorithm(algorithm)
    message_bytes = _to_bytes(message)
    key_bytes = _to_bytes(key)

    logger.debug(
        "Signing %d bytes with %s (%s/%s)",
        len(message_bytes),
        algorithm.upper(),
        spec.family.value,
        spec.cipher,
    )

    if spec.family is SigningFamily.SYMMETRIC_HASH:
        return compute_hmac_signature(spec.cipher, message_bytes, key_bytes)
    if spec.family is SigningFamily.ASYMMETRIC_SIGNATURE:
        return compute_asymmetric_signature(spec.cipher, message_bytes, key_bytes)

    raise SigningFailedError(f"No signing routine for family {spec.family.value}")
