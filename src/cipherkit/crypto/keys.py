"""Key material generation, validation and loading for cipherkit."""

from __future__ import annotations

import logging
import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from ..constants import DEFAULT_RSA_KEY_SIZE
from ..errors import InvalidKeyError, InvalidParameterError, UnsupportedAlgorithmError
from ..types import AsymmetricKeyPair
from .constants import (
    AES_DEFAULT_KEY_SIZE,
    AES_KEY_SIZES,
    RSA_KEY_SIZE_STEP,
    RSA_MAX_KEY_SIZE,
    RSA_MIN_KEY_SIZE,
    RSA_PUBLIC_EXPONENT,
)
from .utils import to_bytes

logger = logging.getLogger("cipherkit")

PrivateKeyInput = bytes | rsa.RSAPrivateKey
PublicKeyInput = bytes | rsa.RSAPublicKey

_PEM_MARKER = b"-----BEGIN"


def validate_symmetric_key(key: str | bytes) -> bytes:
    """Validate an AES key and return its raw bytes.

    Text keys are UTF-8 encoded and used as-is; no key derivation is applied.

    Args:
        key: The key as bytes or text.

    Returns:
        The key bytes.

    Raises:
        InvalidKeyError: If the key length is not 16, 24 or 32 bytes.
    """
    if not isinstance(key, (str, bytes, bytearray)):
        raise InvalidKeyError(f"AES key must be str or bytes, got {type(key).__name__}")
    key_bytes = to_bytes(key)
    if len(key_bytes) not in AES_KEY_SIZES:
        raise InvalidKeyError(
            f"Invalid AES key length: {len(key_bytes)} bytes, expected one of {AES_KEY_SIZES}"
        )
    return key_bytes


def generate_symmetric_key(size: int = AES_DEFAULT_KEY_SIZE) -> bytes:
    """Generate a random AES key.

    Args:
        size: Key length in bytes (16, 24 or 32). Defaults to AES-256.

    Returns:
        Fresh key bytes from the operating system CSPRNG.

    Raises:
        InvalidKeyError: If ``size`` is not a supported AES key size.
    """
    if size not in AES_KEY_SIZES:
        raise InvalidKeyError(f"Invalid AES key size: {size} bytes, expected one of {AES_KEY_SIZES}")
    return os.urandom(size)


def validate_key_size(bits: int) -> int:
    """Check an RSA modulus size.

    Raises:
        InvalidParameterError: If ``bits`` is not a multiple of 64 in [512, 65536].
    """
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise InvalidParameterError(f"RSA key size must be an int, got {type(bits).__name__}")
    if not RSA_MIN_KEY_SIZE <= bits <= RSA_MAX_KEY_SIZE or bits % RSA_KEY_SIZE_STEP:
        raise InvalidParameterError(
            f"Invalid RSA key size: {bits}, expected a multiple of {RSA_KEY_SIZE_STEP} "
            f"between {RSA_MIN_KEY_SIZE} and {RSA_MAX_KEY_SIZE}"
        )
    return bits


def generate_key_pair(bits: int = DEFAULT_RSA_KEY_SIZE) -> AsymmetricKeyPair:
    """Generate an RSA key pair.

    Args:
        bits: Modulus size in bits.

    Returns:
        AsymmetricKeyPair with X.509 SPKI public and PKCS#8 private DER bytes.

    Raises:
        InvalidParameterError: If ``bits`` is out of range or not a multiple of 64.
        UnsupportedAlgorithmError: If the backend cannot generate keys of this size.
    """
    validate_key_size(bits)
    try:
        private_key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bits)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise UnsupportedAlgorithmError(f"Cannot generate {bits}-bit RSA key: {e}") from e

    logger.debug("Generated %d-bit RSA key pair", bits)
    return AsymmetricKeyPair(
        public_key=private_key.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        ),
        private_key=private_key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ),
        key_size=bits,
    )


def load_private_key(key: PrivateKeyInput) -> rsa.RSAPrivateKey:
    """Load an RSA private key from PKCS#8 DER or PEM bytes.

    Already-loaded key objects are returned unchanged.

    Raises:
        InvalidKeyError: If the encoding is malformed or the key is not RSA.
    """
    if isinstance(key, rsa.RSAPrivateKey):
        return key
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyError(f"Private key must be bytes, got {type(key).__name__}")
    data = bytes(key)
    try:
        if data.lstrip().startswith(_PEM_MARKER):
            loaded = serialization.load_pem_private_key(data, password=None)
        else:
            loaded = serialization.load_der_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InvalidKeyError(f"Invalid private key encoding: {e}") from e
    if not isinstance(loaded, rsa.RSAPrivateKey):
        raise InvalidKeyError(f"Expected an RSA private key, got {type(loaded).__name__}")
    return loaded


def load_public_key(key: PublicKeyInput) -> rsa.RSAPublicKey:
    """Load an RSA public key from X.509 SubjectPublicKeyInfo DER or PEM bytes.

    Already-loaded key objects are returned unchanged.

    Raises:
        InvalidKeyError: If the encoding is malformed or the key is not RSA.
    """
    if isinstance(key, rsa.RSAPublicKey):
        return key
    if not isinstance(key, (bytes, bytearray)):
        raise InvalidKeyError(f"Public key must be bytes, got {type(key).__name__}")
    data = bytes(key)
    try:
        if data.lstrip().startswith(_PEM_MARKER):
            loaded = serialization.load_pem_public_key(data)
        else:
            loaded = serialization.load_der_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise InvalidKeyError(f"Invalid public key encoding: {e}") from e
    if not isinstance(loaded, rsa.RSAPublicKey):
        raise InvalidKeyError(f"Expected an RSA public key, got {type(loaded).__name__}")
    return loaded
