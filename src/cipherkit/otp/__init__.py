"""One-time password generation and verification for cipherkit."""

from .generator import Clock, OtpGenerator, generate_otp_secret, otp_generator, system_clock
from .hotp import hmac_sha1, hotp, truncate

__all__ = [
    "Clock",
    "OtpGenerator",
    "generate_otp_secret",
    "hmac_sha1",
    "hotp",
    "otp_generator",
    "system_clock",
    "truncate",
]
