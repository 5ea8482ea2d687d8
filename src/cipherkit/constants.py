"""Default configuration constants for cipherkit."""

# RSA key generation (bits)
DEFAULT_RSA_KEY_SIZE = 1024

# OTP settings (milliseconds)
DEFAULT_OTP_STEP_MS = 30_000
DEFAULT_OTP_SKEW_MS = 5_000
DEFAULT_OTP_EPOCH0_MS = 0

# OTP output length
DEFAULT_OTP_DIGITS = 6
MIN_OTP_DIGITS = 1
MAX_OTP_DIGITS = 9

# Random OTP secret length in bytes (160 bits, RFC 4226 recommendation)
DEFAULT_OTP_SECRET_BYTES = 20
