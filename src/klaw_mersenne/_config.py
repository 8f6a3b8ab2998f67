"""Process configuration: RandConfig, init(), and environment detection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_mersenne._logging import configure_logging
from klaw_mersenne.errors import InvalidArgumentError

__all__ = [
    'DEFAULT_BYTE_LIMIT',
    'RandConfig',
    'get_config',
    'init',
    'reset_config',
]

DEFAULT_BYTE_LIMIT = 10 * 1024 * 1024

_UNLIMITED = ('none', 'unlimited')

# Sentinel for byte_limit arguments: take the limit from get_config()
FROM_CONFIG: object = object()


@dataclass(frozen=True)
class RandConfig:
    """Configuration shared by generators created in this process.

    Attributes:
        byte_limit: Largest buffer next_bytes() may return. None removes the cap.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    byte_limit: int | None = DEFAULT_BYTE_LIMIT
    log_level: str | None = None


# Process configuration (set by init() or built from the environment)
_config: RandConfig | None = None


def _detect_byte_limit() -> int | None:
    """Read the byte limit from KLAW_MERSENNE_BYTE_LIMIT.

    Accepts a positive integer, or "none"/"unlimited" to remove the cap.
    Anything else logs a warning and keeps the default.
    """
    raw = os.environ.get('KLAW_MERSENNE_BYTE_LIMIT', '').strip().lower()
    if not raw:
        return DEFAULT_BYTE_LIMIT
    if raw in _UNLIMITED:
        return None
    try:
        value = int(raw)
    except ValueError:
        logging.warning("Unknown KLAW_MERSENNE_BYTE_LIMIT value '%s', using default", raw)
        return DEFAULT_BYTE_LIMIT
    if value <= 0:
        logging.warning("KLAW_MERSENNE_BYTE_LIMIT must be positive, got %d, using default", value)
        return DEFAULT_BYTE_LIMIT
    return value


def check_byte_limit(byte_limit: object) -> int | None:
    """Validate a byte limit: a positive int, or None for no cap."""
    if byte_limit is not None and (
        isinstance(byte_limit, bool) or not isinstance(byte_limit, int) or byte_limit <= 0
    ):
        raise InvalidArgumentError('byte_limit', f'must be a positive integer or None, got {byte_limit!r}')
    return byte_limit


def _detect_log_level() -> str | None:
    return os.environ.get('KLAW_MERSENNE_LOG_LEVEL') or None


def init(
    byte_limit: int | None = DEFAULT_BYTE_LIMIT,
    log_level: str | None = None,
) -> RandConfig:
    """Set the process configuration.

    Args:
        byte_limit: Cap for next_bytes(). None removes the cap.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The RandConfig that was set.

    Raises:
        InvalidArgumentError: If byte_limit is not a positive integer.

    Example:
        ```python
        from klaw_mersenne import init

        init(byte_limit=64 * 1024 * 1024, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    _config = RandConfig(byte_limit=check_byte_limit(byte_limit), log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> RandConfig:
    """Get the current configuration.

    Builds it from the environment on first use if init() was never called.
    The environment's log level is recorded but logging is left alone; only
    an explicit init() or configure_logging() installs handlers.

    Returns:
        The current RandConfig.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = RandConfig(byte_limit=_detect_byte_limit(), log_level=_detect_log_level())
    return _config


def reset_config() -> None:
    """Forget the current configuration so the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
