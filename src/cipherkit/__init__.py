"""cipherkit - AES, chunked RSA and TOTP primitives.

Example:
    ```python
    from cipherkit import aes_encode, aes_decode, generate_symmetric_key

    key = generate_symmetric_key()
    token = aes_encode("hello", key)
    assert aes_decode(token, key) == "hello"
    ```
"""

from .constants import (
    DEFAULT_OTP_DIGITS,
    DEFAULT_OTP_EPOCH0_MS,
    DEFAULT_OTP_SKEW_MS,
    DEFAULT_OTP_STEP_MS,
    DEFAULT_RSA_KEY_SIZE,
)
from .crypto import (
    decrypt_by_private_key,
    decrypt_by_public_key,
    encrypt_by_private_key,
    encrypt_by_public_key,
    generate_key_pair,
    generate_symmetric_key,
)
from .crypto.aes import decode as aes_decode
from .crypto.aes import encode as aes_encode
from .errors import (
    CipherKitError,
    CryptoOperationError,
    InvalidKeyError,
    InvalidParameterError,
    UnsupportedAlgorithmError,
)
from .otp import OtpGenerator, generate_otp_secret, hotp, otp_generator
from .types import AesMode, AsymmetricKeyPair, OtpConfig

__version__ = "0.1.0"

__all__ = [
    # Symmetric
    "aes_decode",
    "aes_encode",
    "generate_symmetric_key",
    # Asymmetric
    "decrypt_by_private_key",
    "decrypt_by_public_key",
    "encrypt_by_private_key",
    "encrypt_by_public_key",
    "generate_key_pair",
    # OTP
    "OtpGenerator",
    "generate_otp_secret",
    "hotp",
    "otp_generator",
    # Constants
    "DEFAULT_OTP_DIGITS",
    "DEFAULT_OTP_EPOCH0_MS",
    "DEFAULT_OTP_SKEW_MS",
    "DEFAULT_OTP_STEP_MS",
    "DEFAULT_RSA_KEY_SIZE",
    # Data types
    "AesMode",
    "AsymmetricKeyPair",
    "OtpConfig",
    # Errors
    "CipherKitError",
    "CryptoOperationError",
    "InvalidKeyError",
    "InvalidParameterError",
    "UnsupportedAlgorithmError",
    # Version
    "__version__",
]
