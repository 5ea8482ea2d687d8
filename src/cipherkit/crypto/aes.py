"""AES encryption over text and raw bytes for cipherkit.

The default mode is AES-CBC with PKCS#7 padding. Every encryption draws a
fresh 16-byte IV and emits it in front of the ciphertext (``iv || ct``);
decryption reads the IV back from the same prefix.

``AesMode.ECB`` reproduces raw AES without an IV. Identical plaintext blocks
encrypt to identical ciphertext blocks in that mode, so it is only offered
for data exchanged with legacy callers.

Text operations encode plaintext as UTF-8 and transport ciphertext as
standard Base64.
"""

from __future__ import annotations

import logging
import os
from typing import overload

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import CryptoOperationError, InvalidParameterError
from ..types import AesMode
from .constants import AES_BLOCK_SIZE, AES_IV_SIZE
from .keys import validate_symmetric_key
from .utils import from_base64, to_base64

logger = logging.getLogger("cipherkit")


def _resolve_mode(mode: AesMode | str) -> AesMode:
    try:
        resolved = AesMode(mode)
    except ValueError as e:
        raise InvalidParameterError(f"Unsupported AES mode: {mode!r}") from e
    if resolved is AesMode.ECB:
        logger.warning("AES-ECB leaks plaintext block equality; use CBC for new data")
    return resolved


def encode_bytes(data: bytes, key: str | bytes, mode: AesMode | str = AesMode.CBC) -> bytes:
    """Encrypt raw bytes.

    Args:
        data: The plaintext bytes.
        key: A 16, 24 or 32 byte AES key.
        mode: Cipher mode. CBC output is prefixed with its IV.

    Returns:
        The ciphertext bytes.

    Raises:
        InvalidKeyError: If the key length is unsupported.
        CryptoOperationError: If the cipher fails.
    """
    key_bytes = validate_symmetric_key(key)
    resolved = _resolve_mode(mode)

    padder = padding.PKCS7(AES_BLOCK_SIZE * 8).padder()
    padded = padder.update(bytes(data)) + padder.finalize()

    if resolved is AesMode.CBC:
        iv = os.urandom(AES_IV_SIZE)
        cipher_mode: modes.Mode = modes.CBC(iv)
        prefix = iv
    else:
        cipher_mode = modes.ECB()
        prefix = b""

    try:
        encryptor = Cipher(algorithms.AES(key_bytes), cipher_mode).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except ValueError as e:
        raise CryptoOperationError(f"AES encryption failed: {e}") from e

    logger.debug("AES-%s encrypted %d bytes", resolved.name, len(data))
    return prefix + ciphertext


def decode_bytes(data: bytes, key: str | bytes, mode: AesMode | str = AesMode.CBC) -> bytes:
    """Decrypt raw bytes produced by :func:`encode_bytes`.

    Args:
        data: The ciphertext bytes (IV-prefixed in CBC mode).
        key: The AES key used for encryption.
        mode: Cipher mode used for encryption.

    Returns:
        The plaintext bytes.

    Raises:
        InvalidKeyError: If the key length is unsupported.
        CryptoOperationError: If the ciphertext is truncated, not block
            aligned, or its padding is invalid.
    """
    key_bytes = validate_symmetric_key(key)
    resolved = _resolve_mode(mode)
    data = bytes(data)

    if resolved is AesMode.CBC:
        if len(data) < AES_IV_SIZE + AES_BLOCK_SIZE:
            raise CryptoOperationError(
                f"Ciphertext too short: {len(data)} bytes, "
                f"expected at least {AES_IV_SIZE + AES_BLOCK_SIZE}"
            )
        iv, body = data[:AES_IV_SIZE], data[AES_IV_SIZE:]
        cipher_mode: modes.Mode = modes.CBC(iv)
    else:
        body = data
        cipher_mode = modes.ECB()

    if not body or len(body) % AES_BLOCK_SIZE:
        raise CryptoOperationError(
            f"Invalid ciphertext length: {len(body)} bytes is not a positive "
            f"multiple of the {AES_BLOCK_SIZE}-byte block size"
        )

    try:
        decryptor = Cipher(algorithms.AES(key_bytes), cipher_mode).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()
        unpadder = padding.PKCS7(AES_BLOCK_SIZE * 8).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
    except ValueError as e:
        raise CryptoOperationError(f"AES decryption failed: {e}") from e

    logger.debug("AES-%s decrypted %d bytes", resolved.name, len(plaintext))
    return plaintext


def encode_text(content: str, key: str | bytes, mode: AesMode | str = AesMode.CBC) -> str:
    """Encrypt text and return the ciphertext as Base64."""
    return to_base64(encode_bytes(content.encode("utf-8"), key, mode))


def decode_text(content: str, key: str | bytes, mode: AesMode | str = AesMode.CBC) -> str:
    """Decrypt Base64 ciphertext produced by :func:`encode_text`.

    Raises:
        InvalidKeyError: If the key length is unsupported.
        CryptoOperationError: If the input is not valid Base64, decryption
            fails, or the plaintext is not valid UTF-8.
    """
    plaintext = decode_bytes(from_base64(content), key, mode)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CryptoOperationError(f"Decrypted content is not valid UTF-8: {e}") from e


@overload
def encode(plaintext: str, key: str | bytes, mode: AesMode | str = ...) -> str: ...
@overload
def encode(plaintext: bytes, key: str | bytes, mode: AesMode | str = ...) -> bytes: ...


def encode(plaintext: str | bytes, key: str | bytes, mode: AesMode | str = AesMode.CBC) -> str | bytes:
    """Encrypt text (Base64 out) or bytes (bytes out)."""
    if isinstance(plaintext, str):
        return encode_text(plaintext, key, mode)
    return encode_bytes(plaintext, key, mode)


@overload
def decode(ciphertext: str, key: str | bytes, mode: AesMode | str = ...) -> str: ...
@overload
def decode(ciphertext: bytes, key: str | bytes, mode: AesMode | str = ...) -> bytes: ...


def decode(ciphertext: str | bytes, key: str | bytes, mode: AesMode | str = AesMode.CBC) -> str | bytes:
    """Decrypt Base64 text (text out) or bytes (bytes out)."""
    if isinstance(ciphertext, str):
        return decode_text(ciphertext, key, mode)
    return decode_bytes(ciphertext, key, mode)
