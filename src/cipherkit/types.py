"""Type definitions for cipherkit."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cryptography.hazmat.primitives import serialization

from .constants import (
    DEFAULT_OTP_DIGITS,
    DEFAULT_OTP_EPOCH0_MS,
    DEFAULT_OTP_SKEW_MS,
    DEFAULT_OTP_STEP_MS,
    MAX_OTP_DIGITS,
    MIN_OTP_DIGITS,
)
from .errors import InvalidParameterError


class AesMode(str, Enum):
    """AES block cipher modes.

    CBC prefixes every ciphertext with its random IV. ECB has no IV and maps
    identical plaintext blocks to identical ciphertext blocks; it exists only
    to read and write data produced by legacy raw-AES callers.
    """

    CBC = "cbc"
    ECB = "ecb"


@dataclass(frozen=True)
class AsymmetricKeyPair:
    """RSA key pair in DER encodings.

    Attributes:
        public_key: X.509 SubjectPublicKeyInfo DER bytes.
        private_key: PKCS#8 DER bytes (unencrypted).
        key_size: Modulus length in bits.
    """

    public_key: bytes
    private_key: bytes
    key_size: int

    @property
    def encode_block_size(self) -> int:
        """Largest plaintext chunk one RSA operation can encrypt."""
        from .crypto.rsa import block_sizes

        return block_sizes(self.key_size)[0]

    @property
    def decode_block_size(self) -> int:
        """Size of every ciphertext block, equal to the modulus length in bytes."""
        from .crypto.rsa import block_sizes

        return block_sizes(self.key_size)[1]

    def public_key_pem(self) -> bytes:
        """Return the public key re-encoded as PEM."""
        key = serialization.load_der_public_key(self.public_key)
        return key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def private_key_pem(self) -> bytes:
        """Return the private key re-encoded as unencrypted PKCS#8 PEM."""
        key = serialization.load_der_private_key(self.private_key, password=None)
        return key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )


@dataclass(frozen=True)
class OtpConfig:
    """Configuration for a time-based one-time password generator.

    Instances are immutable and validated on construction, so one config can
    be shared by every thread that generates or verifies codes.

    Attributes:
        secret: Shared secret, text (UTF-8 encoded for HMAC) or bytes.
        epoch0: Reference timestamp in milliseconds where step counting begins.
        step: Time-step length in milliseconds. Must not be 0.
        digits: Number of digits in a generated code (1-9).
        skew: Backward tolerance window in milliseconds.
    """

    secret: str | bytes
    epoch0: int = DEFAULT_OTP_EPOCH0_MS
    step: int = DEFAULT_OTP_STEP_MS
    digits: int = DEFAULT_OTP_DIGITS
    skew: int = DEFAULT_OTP_SKEW_MS

    def __post_init__(self) -> None:
        if not isinstance(self.secret, (str, bytes)) or not self.secret.strip():
            raise InvalidParameterError("OTP secret cannot be blank")
        if self.step == 0:
            raise InvalidParameterError("OTP step cannot be 0")
        if not MIN_OTP_DIGITS <= self.digits <= MAX_OTP_DIGITS:
            raise InvalidParameterError(
                f"Invalid OTP digits: {self.digits}, "
                f"expected {MIN_OTP_DIGITS}-{MAX_OTP_DIGITS}"
            )
        if self.skew < 0:
            raise InvalidParameterError(f"OTP skew cannot be negative: {self.skew}")

    @property
    def secret_bytes(self) -> bytes:
        """The secret as HMAC key bytes."""
        if isinstance(self.secret, str):
            return self.secret.encode("utf-8")
        return self.secret
