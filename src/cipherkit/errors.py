"""Error hierarchy for cipherkit."""

from __future__ import annotations


class CipherKitError(Exception):
    """Base exception for all cipherkit errors."""

    pass


class InvalidKeyError(CipherKitError):
    """Key has the wrong length or an unparseable encoding."""

    pass


class UnsupportedAlgorithmError(CipherKitError):
    """Requested algorithm or key size is not available on this platform."""

    pass


class InvalidParameterError(CipherKitError):
    """Invalid argument, such as a zero time step or a blank secret."""

    pass


class CryptoOperationError(CipherKitError):
    """Cipher initialization or finalization failure.

    Raised for corrupted ciphertext, bad padding, malformed Base64 input and
    chunk-count mismatches on decryption. Should never be silently ignored.
    """

    pass
