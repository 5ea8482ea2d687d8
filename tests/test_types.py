"""Tests for type definitions and the error hierarchy."""

import pytest

import cipherkit
from cipherkit.crypto.rsa import block_sizes
from cipherkit.errors import (
    CipherKitError,
    CryptoOperationError,
    InvalidKeyError,
    InvalidParameterError,
    UnsupportedAlgorithmError,
)
from cipherkit.types import AesMode, AsymmetricKeyPair


class TestAsymmetricKeyPair:
    """Tests for AsymmetricKeyPair block size helpers."""

    @pytest.mark.parametrize(
        "key_size,encode_size,decode_size",
        [(512, 53, 64), (1024, 117, 128), (4096, 501, 512)],
    )
    def test_block_sizes(self, key_size: int, encode_size: int, decode_size: int) -> None:
        """Block sizes derive from the modulus length."""
        pair = AsymmetricKeyPair(public_key=b"", private_key=b"", key_size=key_size)
        assert pair.encode_block_size == encode_size
        assert pair.decode_block_size == decode_size

    @pytest.mark.parametrize("key_size", [520, 1000, 2048, 3072])
    def test_block_sizes_match_rsa_module(self, key_size: int) -> None:
        """Key pair helpers report the same sizes the RSA chunker uses."""
        pair = AsymmetricKeyPair(public_key=b"", private_key=b"", key_size=key_size)
        assert (pair.encode_block_size, pair.decode_block_size) == block_sizes(key_size)

    def test_frozen(self) -> None:
        """Key pairs are immutable."""
        pair = AsymmetricKeyPair(public_key=b"", private_key=b"", key_size=1024)
        with pytest.raises(AttributeError):
            pair.key_size = 2048  # type: ignore[misc]


class TestAesMode:
    """Tests for AesMode values."""

    def test_from_string(self) -> None:
        """Modes parse from their lowercase names."""
        assert AesMode("cbc") is AesMode.CBC
        assert AesMode("ecb") is AesMode.ECB


class TestErrors:
    """Tests for the error hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [InvalidKeyError, UnsupportedAlgorithmError, InvalidParameterError, CryptoOperationError],
    )
    def test_base_class(self, error: type[Exception]) -> None:
        """All errors share CipherKitError."""
        assert issubclass(error, CipherKitError)

    def test_public_exports(self) -> None:
        """The top-level package re-exports the public API."""
        for name in cipherkit.__all__:
            assert hasattr(cipherkit, name)
