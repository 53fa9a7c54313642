"""Process-wide configuration: EnumConfig, init() and get_config()."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from klaw_enum._logging import configure_logging

__all__ = [
    'EnumConfig',
    'get_config',
    'init',
]

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'0', 'false', 'no', 'off', ''})


@dataclass(frozen=True)
class EnumConfig:
    """Configuration for klaw-enum.

    Attributes:
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Render log events as JSON (True) or for the console.
        validate_payloads: Check payloads against their declared descriptor
            on every construction, not only when decoding bytes.
    """

    log_level: str | None = None
    json_logs: bool = True
    validate_payloads: bool = False


# Global configuration (set by init(), or lazily from the environment)
_config: EnumConfig | None = None


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean environment variable, warning on unknown values."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logging.getLogger(__name__).warning("Unknown %s value '%s', using %s", name, raw, default)
    return default


def _detect_log_level() -> str | None:
    """Read KLAW_ENUM_LOG_LEVEL; empty means silent."""
    return os.environ.get('KLAW_ENUM_LOG_LEVEL') or None


def init(
    log_level: str | None = None,
    *,
    json_logs: bool | None = None,
    validate_payloads: bool | None = None,
) -> EnumConfig:
    """Initialize klaw-enum with the given configuration.

    Arguments left as None fall back to the environment:
    ``KLAW_ENUM_LOG_LEVEL``, ``KLAW_ENUM_JSON_LOGS`` and
    ``KLAW_ENUM_VALIDATE_PAYLOADS``.

    Args:
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.
        json_logs: Emit JSON logs instead of console output.
        validate_payloads: Validate payloads on construction.

    Returns:
        The EnumConfig that was set.

    Example:
        ```python
        from klaw_enum import init

        init(log_level='DEBUG', validate_payloads=True)
        ```
    """
    global _config  # noqa: PLW0603

    _config = EnumConfig(
        log_level=log_level if log_level is not None else _detect_log_level(),
        json_logs=json_logs if json_logs is not None else _env_flag('KLAW_ENUM_JSON_LOGS', True),
        validate_payloads=(
            validate_payloads
            if validate_payloads is not None
            else _env_flag('KLAW_ENUM_VALIDATE_PAYLOADS', False)
        ),
    )

    # Configure logging if level specified
    if _config.log_level is not None:
        configure_logging(_config.log_level, json_output=_config.json_logs)

    return _config


def get_config() -> EnumConfig:
    """Get the current configuration, initializing from the environment once.

    Returns:
        The current EnumConfig.
    """
    if _config is None:
        return init()
    return _config
