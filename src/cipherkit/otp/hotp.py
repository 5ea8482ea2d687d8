"""HMAC-SHA1 one-time password primitives (RFC 4226)."""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes, hmac

from ..constants import DEFAULT_OTP_DIGITS, MAX_OTP_DIGITS, MIN_OTP_DIGITS
from ..errors import InvalidParameterError

SHA1_DIGEST_SIZE = 20


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """Compute HMAC-SHA1 of ``message`` under ``key`` (20 bytes)."""
    mac = hmac.HMAC(key, hashes.SHA1())
    mac.update(message)
    return mac.finalize()


def truncate(digest: bytes, digits: int = DEFAULT_OTP_DIGITS) -> str:
    """Reduce an HMAC-SHA1 digest to a decimal code with dynamic truncation.

    The low nibble of the last byte selects an offset; the four bytes at that
    offset form a 31-bit integer (top bit masked so the value is never
    negative), which is reduced modulo ``10**digits`` and zero-padded.

    Args:
        digest: A 20-byte HMAC-SHA1 digest.
        digits: Code length (1-9).

    Returns:
        The code as a string of exactly ``digits`` characters.

    Raises:
        InvalidParameterError: If the digest size or digit count is invalid.
    """
    if len(digest) != SHA1_DIGEST_SIZE:
        raise InvalidParameterError(
            f"Invalid digest size: {len(digest)} bytes, expected {SHA1_DIGEST_SIZE}"
        )
    if not MIN_OTP_DIGITS <= digits <= MAX_OTP_DIGITS:
        raise InvalidParameterError(
            f"Invalid OTP digits: {digits}, expected {MIN_OTP_DIGITS}-{MAX_OTP_DIGITS}"
        )

    offset = digest[-1] & 0x0F
    value = (
        (digest[offset] & 0x7F) << 24
        | (digest[offset + 1] & 0xFF) << 16
        | (digest[offset + 2] & 0xFF) << 8
        | (digest[offset + 3] & 0xFF)
    )
    return str(value % 10**digits).zfill(digits)


def hotp(secret: str | bytes, counter: int, digits: int = DEFAULT_OTP_DIGITS) -> str:
    """Generate an RFC 4226 HOTP code for an event counter.

    The counter is encoded as an 8-byte big-endian integer, which makes the
    output interoperable with standard authenticator apps.

    Raises:
        InvalidParameterError: If the secret is blank or the counter is out of range.
    """
    if not secret or not secret.strip():
        raise InvalidParameterError("HOTP secret cannot be blank")
    if not 0 <= counter < 2**64:
        raise InvalidParameterError(f"HOTP counter out of range: {counter}")
    key = secret.encode("utf-8") if isinstance(secret, str) else secret
    return truncate(hmac_sha1(key, counter.to_bytes(8, "big")), digits)
