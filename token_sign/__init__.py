"""
Token Signing Core.

Algorithm registry, signature dispatch and the URL-safe base64 and JSON
codecs a token encoding layer builds on.

Signing:
    from token_sign import sign, base64url_encode

    signature = sign(b"header.payload", b"shared-secret", "HS256")
    segment = base64url_encode(signature)

    # RS* algorithms take a PEM-encoded private key
    signature = sign(b"header.payload", private_key_pem, "RS256")

Algorithms:
    from token_sign import is_algorithm_supported, list_supported_algorithms

    is_algorithm_supported("hs512")  # True
    list_supported_algorithms()      # ['HS256', 'HS384', ..., 'RS512']

JSON:
    from token_sign import JsonOptions, json_decode, json_encode

    text = json_encode({"sub": "user-1", "n": 2**70})
    claims = json_decode(text)  # {"sub": "user-1", "n": "1180591620717411303424"}
    claims = json_decode(text, JsonOptions(preserve_big_integers_as_text=False))

All failures are raised as subclasses of TokenSignError.
"""

import logging

from token_sign.algorithms import (
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    AlgorithmSpec,
    SigningFamily,
    is_algorithm_supported,
    list_supported_algorithms,
    resolve_algorithm,
)

from token_sign.encoding import (
    base64url_decode,
    base64url_encode,
)

from token_sign.exceptions import (
    DecodeFailedError,
    JsonError,
    SigningFailedError,
    TokenSignError,
    UnsupportedAlgorithmError,
)

from token_sign.json_codec import (
    JsonOptions,
    json_decode,
    json_encode,
)

from token_sign.signing import sign

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Registry
    "ALGORITHMS",
    "DEFAULT_ALGORITHM",
    "AlgorithmSpec",
    "SigningFamily",
    "is_algorithm_supported",
    "list_supported_algorithms",
    "resolve_algorithm",
    # Signing
    "sign",
    # Codecs
    "base64url_decode",
    "base64url_encode",
    "JsonOptions",
    "json_decode",
    "json_encode",
    # Errors
    "DecodeFailedError",
    "JsonError",
    "SigningFailedError",
    "TokenSignError",
    "UnsupportedAlgorithmError",
]
