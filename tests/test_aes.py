"""Tests for crypto/aes.py module."""

from __future__ import annotations

import base64
import logging

import pytest

from cipherkit import aes_decode, aes_encode
from cipherkit.crypto import aes, generate_symmetric_key
from cipherkit.crypto.constants import AES_BLOCK_SIZE, AES_IV_SIZE, AES_KEY_SIZES
from cipherkit.errors import CryptoOperationError, InvalidKeyError, InvalidParameterError
from cipherkit.types import AesMode

PAYLOADS = [b"", b"x", b"a" * 15, b"b" * 16, b"c" * 17, bytes(range(256)) * 4]


class TestRoundTrip:
    """Round trips for every key size, mode and payload shape."""

    @pytest.mark.parametrize("size", AES_KEY_SIZES)
    @pytest.mark.parametrize("mode", list(AesMode))
    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_bytes_round_trip(self, size: int, mode: AesMode, payload: bytes) -> None:
        """decode(encode(x, k), k) == x for bytes."""
        key = generate_symmetric_key(size)
        assert aes.decode(aes.encode(payload, key, mode), key, mode) == payload

    @pytest.mark.parametrize("mode", list(AesMode))
    def test_text_round_trip(self, mode: AesMode) -> None:
        """Text survives the round trip, including non-ASCII characters."""
        key = generate_symmetric_key()
        content = "测试一下 - encrypted text"
        token = aes_encode(content, key, mode)
        assert isinstance(token, str)
        assert aes_decode(token, key, mode) == content

    def test_text_key(self) -> None:
        """A 16-character text key works like its bytes."""
        key = "0123456789abcdef"
        token = aes_encode("hello", key)
        assert aes_decode(token, key.encode("utf-8")) == "hello"

    def test_text_output_is_base64(self) -> None:
        """Text ciphertext is standard Base64."""
        token = aes.encode_text("hello", generate_symmetric_key())
        base64.b64decode(token, validate=True)

    def test_type_dispatch(self) -> None:
        """Bytes in gives bytes out; text in gives text out."""
        key = generate_symmetric_key()
        assert isinstance(aes.encode(b"data", key), bytes)
        assert isinstance(aes.encode("data", key), str)


class TestModes:
    """Tests for CBC framing and ECB behavior."""

    def test_cbc_prefixes_iv(self) -> None:
        """CBC output is IV plus padded ciphertext."""
        key = generate_symmetric_key()
        ciphertext = aes.encode_bytes(b"a" * 20, key)
        assert len(ciphertext) == AES_IV_SIZE + 2 * AES_BLOCK_SIZE

    def test_cbc_is_randomized(self) -> None:
        """Encrypting the same plaintext twice gives different CBC output."""
        key = generate_symmetric_key()
        assert aes.encode_bytes(b"same", key) != aes.encode_bytes(b"same", key)

    def test_cbc_hides_repeated_blocks(self) -> None:
        """Identical plaintext blocks do not repeat in CBC ciphertext."""
        key = generate_symmetric_key()
        body = aes.encode_bytes(b"A" * 32, key)[AES_IV_SIZE:]
        assert body[:16] != body[16:32]

    def test_ecb_repeats_blocks(self, caplog: pytest.LogCaptureFixture) -> None:
        """ECB maps identical plaintext blocks to identical ciphertext blocks."""
        key = generate_symmetric_key()
        with caplog.at_level(logging.WARNING, logger="cipherkit"):
            ciphertext = aes.encode_bytes(b"A" * 32, key, AesMode.ECB)
        assert ciphertext[:16] == ciphertext[16:32]
        assert len(ciphertext) == 3 * AES_BLOCK_SIZE
        assert any("ECB" in record.getMessage() for record in caplog.records)

    def test_ecb_is_deterministic(self) -> None:
        """ECB carries no IV, so output is a function of key and plaintext."""
        key = generate_symmetric_key()
        assert aes.encode_bytes(b"data", key, "ecb") == aes.encode_bytes(b"data", key, "ecb")

    def test_unknown_mode(self) -> None:
        """Unknown modes raise InvalidParameterError."""
        with pytest.raises(InvalidParameterError, match="Unsupported AES mode"):
            aes.encode_bytes(b"data", generate_symmetric_key(), "gcm")


class TestErrors:
    """Tests for error reporting."""

    def test_encode_ten_byte_key(self) -> None:
        """A 10-byte key raises InvalidKeyError."""
        with pytest.raises(InvalidKeyError):
            aes_encode("hello", b"0123456789")

    def test_decode_ten_byte_key(self) -> None:
        """Decoding also validates the key."""
        with pytest.raises(InvalidKeyError):
            aes.decode_bytes(b"\x00" * 32, "short-key")

    def test_ciphertext_not_block_aligned(self) -> None:
        """Truncated ciphertext raises CryptoOperationError."""
        key = generate_symmetric_key()
        ciphertext = aes.encode_bytes(b"hello world", key)
        with pytest.raises(CryptoOperationError, match="multiple"):
            aes.decode_bytes(ciphertext[:-1], key)

    def test_ecb_ciphertext_not_block_aligned(self) -> None:
        """ECB checks block alignment too."""
        key = generate_symmetric_key()
        with pytest.raises(CryptoOperationError):
            aes.decode_bytes(b"\x00" * 15, key, AesMode.ECB)

    def test_cbc_missing_iv(self) -> None:
        """CBC input shorter than IV plus one block is rejected."""
        with pytest.raises(CryptoOperationError, match="too short"):
            aes.decode_bytes(b"\x00" * 16, generate_symmetric_key())

    def test_invalid_base64(self) -> None:
        """Malformed Base64 raises CryptoOperationError."""
        with pytest.raises(CryptoOperationError):
            aes.decode_text("***", generate_symmetric_key())

    def test_bad_padding(self) -> None:
        """A final block that decrypts to invalid padding is reported."""
        key = generate_symmetric_key()
        # First ECB block alone decrypts to sixteen zero bytes, which is not PKCS#7
        zeros = aes.encode_bytes(b"\x00" * 16, key, AesMode.ECB)[:16]
        with pytest.raises(CryptoOperationError, match="decryption failed"):
            aes.decode_bytes(zeros, key, AesMode.ECB)

    def test_invalid_utf8(self) -> None:
        """Plaintext that is not UTF-8 cannot be returned as text."""
        key = generate_symmetric_key()
        token = base64.b64encode(aes.encode_bytes(b"\xff\xfe", key)).decode("ascii")
        with pytest.raises(CryptoOperationError, match="UTF-8"):
            aes.decode_text(token, key)
