"""RSA encryption with block chunking for cipherkit.

PKCS#1 v1.5 lets one RSA operation encrypt at most ``k - 11`` bytes, where
``k`` is the modulus length in bytes, and always produces exactly ``k``
bytes. Payloads are therefore split into ``k - 11`` byte chunks, each chunk
is encrypted on its own, and the ``k`` byte blocks are concatenated in order.
Decryption splits the ciphertext into ``k`` byte blocks and reverses this.

Both key directions are supported:

- public-key encryption (block type 2) with private-key decryption, for
  confidentiality;
- private-key encryption (block type 1) with public-key recovery, for
  signing-style use where anyone holding the public key can read the data.

Chunking has no bulk or hybrid mode. It suits keys and tokens; payloads over
``RSA_PAYLOAD_ADVISORY_SIZE`` log a warning and payloads over
``RSA_MAX_PAYLOAD_SIZE`` are rejected.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Callable, Iterator

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..errors import CryptoOperationError, InvalidParameterError
from .constants import PKCS1_V15_OVERHEAD, RSA_MAX_PAYLOAD_SIZE, RSA_PAYLOAD_ADVISORY_SIZE
from .keys import PrivateKeyInput, PublicKeyInput, load_private_key, load_public_key

logger = logging.getLogger("cipherkit")


def block_sizes(key_size: int) -> tuple[int, int]:
    """Return ``(encode_block_size, decode_block_size)`` for a modulus size in bits."""
    key_bytes = (key_size + 7) // 8
    return key_bytes - PKCS1_V15_OVERHEAD, key_bytes


def _chunks(data: bytes, size: int) -> Iterator[bytes]:
    for offset in range(0, len(data), size):
        yield data[offset : offset + size]


def _check_payload_size(data: bytes) -> None:
    if len(data) > RSA_MAX_PAYLOAD_SIZE:
        raise InvalidParameterError(
            f"RSA payload too large: {len(data)} bytes, limit is {RSA_MAX_PAYLOAD_SIZE}. "
            "Encrypt bulk data with AES and wrap only the key with RSA."
        )
    if len(data) > RSA_PAYLOAD_ADVISORY_SIZE:
        logger.warning(
            "RSA chunked encryption of %d bytes; consider AES for payloads over %d bytes",
            len(data),
            RSA_PAYLOAD_ADVISORY_SIZE,
        )


def _encrypt_blocks(data: bytes, key_size: int, encrypt_block: Callable[[bytes], bytes]) -> bytes:
    data = bytes(data)
    _check_payload_size(data)
    encode_size, decode_size = block_sizes(key_size)

    out = bytearray()
    for chunk in _chunks(data, encode_size):
        block = encrypt_block(chunk)
        if len(block) != decode_size:
            raise CryptoOperationError(
                f"RSA produced a {len(block)}-byte block, expected {decode_size}"
            )
        out += block

    logger.debug("RSA encrypted %d bytes into %d blocks", len(data), len(out) // decode_size)
    return bytes(out)


def _decrypt_blocks(data: bytes, key_size: int, decrypt_block: Callable[[bytes], bytes]) -> bytes:
    data = bytes(data)
    _, decode_size = block_sizes(key_size)
    if len(data) % decode_size:
        raise CryptoOperationError(
            f"Invalid RSA ciphertext length: {len(data)} bytes is not a multiple "
            f"of the {decode_size}-byte block size"
        )

    out = bytearray()
    for block in _chunks(data, decode_size):
        out += decrypt_block(block)

    logger.debug("RSA decrypted %d blocks into %d bytes", len(data) // decode_size, len(out))
    return bytes(out)


def _crt_exponentiate(numbers: rsa.RSAPrivateNumbers, value: int) -> int:
    """Raise ``value`` to the private exponent using the CRT parameters."""
    m1 = pow(value, numbers.dmp1, numbers.p)
    m2 = pow(value, numbers.dmq1, numbers.q)
    h = (numbers.iqmp * (m1 - m2)) % numbers.p
    return m2 + h * numbers.q


def _blinding_factor(n: int) -> int:
    """Draw a random r in [2, n) that is invertible modulo n."""
    size = (n.bit_length() + 7) // 8
    while True:
        r = int.from_bytes(os.urandom(size), "big") % n
        if r >= 2 and math.gcd(r, n) == 1:
            return r


def _private_encrypt_block(numbers: rsa.RSAPrivateNumbers, key_bytes: int, chunk: bytes) -> bytes:
    """Apply PKCS#1 v1.5 block type 1 padding and the raw RSA private operation.

    The backend exposes no raw private-key encryption, so the block is built
    as ``00 01 FF..FF 00 || chunk`` and exponentiated with the CRT parameters.
    The input is blinded with a fresh random factor, and the result is checked
    against the public exponent before it is released.
    """
    fill = key_bytes - 3 - len(chunk)
    if fill < 8:
        raise CryptoOperationError(
            f"RSA block of {len(chunk)} bytes exceeds the {key_bytes - PKCS1_V15_OVERHEAD}-byte limit"
        )
    encoded = b"\x00\x01" + b"\xff" * fill + b"\x00" + chunk

    n = numbers.public_numbers.n
    e = numbers.public_numbers.e
    m = int.from_bytes(encoded, "big")
    r = _blinding_factor(n)
    blinded = _crt_exponentiate(numbers, m * pow(r, e, n) % n)
    c = blinded * pow(r, -1, n) % n

    if pow(c, e, n) != m:
        raise CryptoOperationError("RSA private-key operation failed its consistency check")
    return c.to_bytes(key_bytes, "big")


def encrypt_by_private_key(data: bytes, private_key: PrivateKeyInput) -> bytes:
    """Encrypt with the private key so the holder of the public key can recover the data.

    Args:
        data: The plaintext bytes, any length up to ``RSA_MAX_PAYLOAD_SIZE``.
        private_key: PKCS#8 DER or PEM bytes, or a loaded RSA private key.

    Returns:
        Concatenated ciphertext blocks, each the modulus length in bytes.

    Raises:
        InvalidKeyError: If the key cannot be parsed.
        InvalidParameterError: If the payload exceeds the size limit.
        CryptoOperationError: If a block cannot be encrypted.
    """
    key = load_private_key(private_key)
    numbers = key.private_numbers()
    key_bytes = (key.key_size + 7) // 8
    return _encrypt_blocks(
        data, key.key_size, lambda chunk: _private_encrypt_block(numbers, key_bytes, chunk)
    )


def encrypt_by_public_key(data: bytes, public_key: PublicKeyInput) -> bytes:
    """Encrypt with the public key so only the private key holder can decrypt.

    Args:
        data: The plaintext bytes, any length up to ``RSA_MAX_PAYLOAD_SIZE``.
        public_key: X.509 SubjectPublicKeyInfo DER or PEM bytes, or a loaded key.

    Returns:
        Concatenated ciphertext blocks, each the modulus length in bytes.

    Raises:
        InvalidKeyError: If the key cannot be parsed.
        InvalidParameterError: If the payload exceeds the size limit.
        CryptoOperationError: If a block cannot be encrypted.
    """
    key = load_public_key(public_key)

    def encrypt_block(chunk: bytes) -> bytes:
        try:
            return key.encrypt(chunk, padding.PKCS1v15())
        except ValueError as e:
            raise CryptoOperationError(f"RSA public-key encryption failed: {e}") from e

    return _encrypt_blocks(data, key.key_size, encrypt_block)


def decrypt_by_private_key(data: bytes, private_key: PrivateKeyInput) -> bytes:
    """Decrypt ciphertext produced by :func:`encrypt_by_public_key`.

    Note that OpenSSL may apply implicit rejection to PKCS#1 v1.5 decryption,
    returning unrelated bytes instead of failing when the wrong key is used.

    Raises:
        InvalidKeyError: If the key cannot be parsed.
        CryptoOperationError: If the ciphertext length is not a multiple of the
            block size or a block fails to decrypt.
    """
    key = load_private_key(private_key)

    def decrypt_block(block: bytes) -> bytes:
        try:
            return key.decrypt(block, padding.PKCS1v15())
        except ValueError as e:
            raise CryptoOperationError(f"RSA private-key decryption failed: {e}") from e

    return _decrypt_blocks(data, key.key_size, decrypt_block)


def decrypt_by_public_key(data: bytes, public_key: PublicKeyInput) -> bytes:
    """Recover data produced by :func:`encrypt_by_private_key`.

    Raises:
        InvalidKeyError: If the key cannot be parsed.
        CryptoOperationError: If the ciphertext length is not a multiple of the
            block size or a block's padding does not verify under this key.
    """
    key = load_public_key(public_key)

    def decrypt_block(block: bytes) -> bytes:
        try:
            return key.recover_data_from_signature(block, padding.PKCS1v15(), None)
        except (InvalidSignature, ValueError) as e:
            raise CryptoOperationError(f"RSA public-key decryption failed: {e!r}") from e

    return _decrypt_blocks(data, key.key_size, decrypt_block)
