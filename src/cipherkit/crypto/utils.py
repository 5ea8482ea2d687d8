"""Base64 and text/bytes helpers for cipherkit."""

from __future__ import annotations

import base64
import binascii

from ..errors import CryptoOperationError


def to_base64(data: bytes) -> str:
    """Encode bytes to standard base64.

    Args:
        data: The bytes to encode.

    Returns:
        Standard base64 string with padding.
    """
    return base64.b64encode(data).decode("ascii")


def from_base64(s: str) -> bytes:
    """Decode a standard base64 string to bytes.

    Decoding is strict: characters outside the base64 alphabet are rejected
    instead of being silently discarded.

    Args:
        s: The base64 string to decode.

    Returns:
        The decoded bytes.

    Raises:
        CryptoOperationError: If the input is not valid base64.
    """
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CryptoOperationError(f"Invalid base64 input: {e}") from e


def to_bytes(value: str | bytes | bytearray) -> bytes:
    """Return ``value`` as bytes, encoding text as UTF-8."""
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)
