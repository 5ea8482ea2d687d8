"""Cryptographic operations for cipherkit."""

from . import aes, rsa
from .keys import (
    generate_key_pair,
    generate_symmetric_key,
    load_private_key,
    load_public_key,
    validate_key_size,
    validate_symmetric_key,
)
from .rsa import (
    block_sizes,
    decrypt_by_private_key,
    decrypt_by_public_key,
    encrypt_by_private_key,
    encrypt_by_public_key,
)
from .utils import from_base64, to_base64

__all__ = [
    "aes",
    "block_sizes",
    "decrypt_by_private_key",
    "decrypt_by_public_key",
    "encrypt_by_private_key",
    "encrypt_by_public_key",
    "from_base64",
    "generate_key_pair",
    "generate_symmetric_key",
    "load_private_key",
    "load_public_key",
    "rsa",
    "to_base64",
    "validate_key_size",
    "validate_symmetric_key",
]
