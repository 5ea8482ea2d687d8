"""Time-based one-time passwords with a backward clock-skew window.

TOTP = HOTP(K, T) where T = floor((now - epoch0) / step). Unlike the RFC 6238
reference, the HMAC message is the decimal string of T, which is the format
existing callers of this library were issued codes with. Use
:func:`cipherkit.otp.hotp` for RFC-compatible counter encoding.

Example:
    ```python
    from cipherkit import otp_generator

    otp = otp_generator("base-secret")
    code = otp.generate()

    # Server side, per user
    otp.verify_flexibly("alice", "device-42", submitted_code)
    ```
"""

from __future__ import annotations

import base64
import hmac
import logging
import os
import time
from collections.abc import Callable

from cryptography.exceptions import UnsupportedAlgorithm

from ..constants import (
    DEFAULT_OTP_DIGITS,
    DEFAULT_OTP_EPOCH0_MS,
    DEFAULT_OTP_SECRET_BYTES,
    DEFAULT_OTP_SKEW_MS,
    DEFAULT_OTP_STEP_MS,
)
from ..errors import CipherKitError, InvalidParameterError
from ..types import OtpConfig
from .hotp import hmac_sha1, truncate

logger = logging.getLogger("cipherkit")

# Returns the current time in epoch milliseconds
Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class OtpGenerator:
    """Generate and verify TOTP codes for one :class:`OtpConfig`.

    The generator holds no mutable state. ``generate()`` is a pure function of
    the clock and the config, so concurrent calls within one time step return
    the same code.

    Args:
        config: The validated OTP configuration.
        clock: Callable returning epoch milliseconds. Defaults to the system clock.
    """

    def __init__(self, config: OtpConfig, clock: Clock | None = None) -> None:
        self._config = config
        self._clock = clock or system_clock

    @property
    def config(self) -> OtpConfig:
        return self._config

    def compute_time_factor(self, target_time: int) -> int:
        """Return the time-step index containing ``target_time`` (milliseconds)."""
        return (target_time - self._config.epoch0) // self._config.step

    def generate_at(self, target_time: int) -> str:
        """Generate the code valid at ``target_time`` (epoch milliseconds)."""
        time_factor = self.compute_time_factor(target_time)
        digest = hmac_sha1(self._config.secret_bytes, str(time_factor).encode("ascii"))
        return truncate(digest, self._config.digits)

    def generate(self) -> str:
        """Generate the code for the current time step."""
        return self.generate_at(self._clock())

    def generate_flexibly(self) -> str:
        """Generate the code that was valid ``skew`` milliseconds ago."""
        return self.generate_at(self._clock() - self._config.skew)

    def verify(self, code: str) -> bool:
        """Check ``code`` against the current and the skew-shifted time step.

        Both candidates are computed from a single clock reading and compared
        in constant time.

        Raises:
            InvalidParameterError: If ``code`` is blank.
        """
        if not isinstance(code, str) or not code.strip():
            raise InvalidParameterError("OTP code cannot be blank")
        now = self._clock()
        candidate = code.strip().encode("ascii", "replace")
        flexible = self.generate_at(now - self._config.skew).encode("ascii")
        current = self.generate_at(now).encode("ascii")
        # Both comparisons always run
        matches_flexible = hmac.compare_digest(candidate, flexible)
        matches_current = hmac.compare_digest(candidate, current)
        return matches_flexible or matches_current

    def derive(self, identity: str, secret_suffix: str) -> OtpGenerator:
        """Return a generator keyed to one identity.

        The derived secret is ``secret + identity + secret_suffix``, a plain
        concatenation rather than a KDF. Codes already issued depend on this
        exact construction.

        Raises:
            InvalidParameterError: If ``identity`` or ``secret_suffix`` is not text.
        """
        if not isinstance(identity, str) or not isinstance(secret_suffix, str):
            raise InvalidParameterError("OTP identity and secret suffix must be str")
        secret = self._config.secret
        if isinstance(secret, bytes):
            derived: str | bytes = secret + identity.encode("utf-8") + secret_suffix.encode("utf-8")
        else:
            derived = secret + identity + secret_suffix
        config = OtpConfig(
            secret=derived,
            epoch0=self._config.epoch0,
            step=self._config.step,
            digits=self._config.digits,
            skew=self._config.skew,
        )
        return OtpGenerator(config, self._clock)

    def verify_flexibly(self, identity: str, secret_suffix: str, code: str) -> bool:
        """Verify a code issued to ``identity`` within the skew window.

        Malformed input and internal failures both return False; callers cannot
        tell them apart from a wrong code.
        """
        try:
            return self.derive(identity, secret_suffix).verify(code)
        except (CipherKitError, UnsupportedAlgorithm, TypeError, ValueError) as e:
            logger.debug("OTP verification failed: %s", type(e).__name__)
            return False


def otp_generator(
    secret: str | bytes,
    step: int = DEFAULT_OTP_STEP_MS,
    digits: int = DEFAULT_OTP_DIGITS,
    skew: int = DEFAULT_OTP_SKEW_MS,
    epoch0: int = DEFAULT_OTP_EPOCH0_MS,
    clock: Clock | None = None,
) -> OtpGenerator:
    """Build an :class:`OtpGenerator`, validating the configuration up front.

    Args:
        secret: Shared secret, must not be blank.
        step: Time-step length in milliseconds, must not be 0.
        digits: Code length (1-9).
        skew: Backward tolerance window in milliseconds.
        epoch0: Reference timestamp in milliseconds.
        clock: Optional clock returning epoch milliseconds.

    Raises:
        InvalidParameterError: If any parameter is invalid.
    """
    config = OtpConfig(secret=secret, epoch0=epoch0, step=step, digits=digits, skew=skew)
    return OtpGenerator(config, clock)


def generate_otp_secret(length: int = DEFAULT_OTP_SECRET_BYTES) -> str:
    """Generate a random Base32 secret (no padding) for provisioning authenticators.

    Raises:
        InvalidParameterError: If ``length`` is not positive.
    """
    if length <= 0:
        raise InvalidParameterError(f"Secret length must be positive: {length}")
    return base64.b32encode(os.urandom(length)).decode("ascii").rstrip("=")
