"""
Unit tests for the algorithm registry.

Covers name lookups, case handling and the consistency of the shipped table.
"""

import hashlib
import unittest

from token_sign.algorithms import (
    ALGORITHMS,
    DEFAULT_ALGORITHM,
    AlgorithmSpec,
    SigningFamily,
    is_algorithm_supported,
    list_supported_algorithms,
    resolve_algorithm,
)
from token_sign.exceptions import TokenSignError, UnsupportedAlgorithmError
from token_sign.signing import ENGINE_DIGESTS


class TestAlgorithmLookup(unittest.TestCase):
    """Test membership and listing."""

    def test_list_supported_algorithms(self):
        """Test that all registered names are listed in sorted order."""
        self.assertEqual(
            list_supported_algorithms(),
            ["HS256", "HS384", "HS512", "RS256", "RS384", "RS512"],
        )

    def test_every_listed_name_is_supported(self):
        """Test that each listed name passes the membership check."""
        for name in list_supported_algorithms():
            self.assertTrue(is_algorithm_supported(name), name)

    def test_case_insensitive(self):
        """Test that lookups ignore case."""
        self.assertTrue(is_algorithm_supported("HS256"))
        self.assertTrue(is_algorithm_supported("hs256"))
        self.assertTrue(is_algorithm_supported("Rs512"))

    def test_unknown_names(self):
        """Test that unknown names are reported as unsupported without raising."""
        self.assertFalse(is_algorithm_supported("NOPE"))
        self.assertFalse(is_algorithm_supported(""))
        self.assertFalse(is_algorithm_supported(" HS256"))
        self.assertFalse(is_algorithm_supported(None))
        self.assertFalse(is_algorithm_supported(256))

    def test_default_algorithm(self):
        """Test that the default algorithm is HMAC-SHA256."""
        self.assertEqual(DEFAULT_ALGORITHM, "HS256")
        self.assertEqual(
            resolve_algorithm(DEFAULT_ALGORITHM),
            AlgorithmSpec(SigningFamily.SYMMETRIC_HASH, "sha256"),
        )


class TestResolveAlgorithm(unittest.TestCase):
    """Test resolving names to specs."""

    def test_resolve_hmac(self):
        """Test resolving an HMAC algorithm."""
        spec = resolve_algorithm("hs384")
        self.assertIs(spec.family, SigningFamily.SYMMETRIC_HASH)
        self.assertEqual(spec.cipher, "sha384")

    def test_resolve_asymmetric(self):
        """Test resolving an asymmetric algorithm."""
        spec = resolve_algorithm("RS512")
        self.assertIs(spec.family, SigningFamily.ASYMMETRIC_SIGNATURE)
        self.assertEqual(spec.cipher, "SHA512")

    def test_resolve_unknown(self):
        """Test that unknown names raise with the supported names as a hint."""
        with self.assertRaises(UnsupportedAlgorithmError) as ctx:
            resolve_algorithm("ES256")

        self.assertEqual(ctx.exception.algorithm, "ES256")
        self.assertEqual(ctx.exception.supported, list_supported_algorithms())
        self.assertIn("ES256", str(ctx.exception))
        self.assertIsInstance(ctx.exception, TokenSignError)
        self.assertIsInstance(ctx.exception, ValueError)


class TestRegistryTable(unittest.TestCase):
    """Test the shipped registry table."""

    def test_table_is_read_only(self):
        """Test that the registry cannot be modified."""
        with self.assertRaises(TypeError):
            ALGORITHMS["XX256"] = AlgorithmSpec(SigningFamily.SYMMETRIC_HASH, "sha256")

    def test_specs_are_frozen(self):
        """Test that specs are immutable."""
        with self.assertRaises(AttributeError):
            ALGORITHMS["HS256"].cipher = "md5"

    def test_names_are_canonical(self):
        """Test that registry keys are stored upper case."""
        for name in ALGORITHMS:
            self.assertEqual(name, name.upper())

    def test_ciphers_are_realizable(self):
        """Test that no entry names a cipher its family cannot use."""
        for name, spec in ALGORITHMS.items():
            if spec.family is SigningFamily.SYMMETRIC_HASH:
                hashlib.new(spec.cipher)
            else:
                self.assertIs(spec.family, SigningFamily.ASYMMETRIC_SIGNATURE)
                self.assertIsNotNone(ENGINE_DIGESTS.get(spec.cipher), name)


if __name__ == "__main__":
    unittest.main()
