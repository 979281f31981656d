"""
Configuration for textwindow.

Defaults can be overridden through ``TEXTWINDOW_*`` environment variables.
Settings are loaded once by the entry point and passed to the operations that
need them, so tests can build their own without touching the environment.

Example usage:
    from textwindow.config import Settings

    settings = Settings.from_env()
    print(settings.safe_margin)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "TEXTWINDOW_"


class ConfigValidationError(ValueError):
    """Exception raised when configuration validation fails."""

    pass


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse(value: str, var_name: str, kind=int):
    try:
        return kind(value)
    except ValueError as e:
        raise ConfigValidationError(
            f"{var_name} must be a valid {kind.__name__}, got '{value}'") from e


def validate_int_range(value: str, var_name: str, min_val: int,
                       max_val: Optional[int] = None) -> int:
    """Validate integer is at least `min_val` and, if given, at most `max_val`."""
    result = _parse(value, var_name)
    if max_val is None:
        if result < min_val:
            raise ConfigValidationError(f"{var_name} must be at least {min_val}, got {result}")
    elif result < min_val or result > max_val:
        raise ConfigValidationError(
            f"{var_name} must be between {min_val} and {max_val}, got {result}"
        )
    return result


def validate_positive_int(value: str, var_name: str) -> int:
    return validate_int_range(value, var_name, 1)


def validate_non_negative_int(value: str, var_name: str) -> int:
    return validate_int_range(value, var_name, 0)


def validate_positive_float(value: str, var_name: str) -> float:
    result = _parse(value, var_name, float)
    if result <= 0:
        raise ConfigValidationError(f"{var_name} must be positive, got {result}")
    return result


def validate_log_level(value: str, var_name: str) -> str:
    """Upper-case `value` and check it names a standard logging level."""
    if value.upper() not in LOG_LEVELS:
        raise ConfigValidationError(f"{var_name} must be one of {list(LOG_LEVELS)}, got '{value}'")
    return value.upper()


MAX_HITS_LIMIT = 1000


@dataclass(frozen=True)
class Settings:
    """Tunables shared by the fetch and search paths."""

    default_window: int = 1024 * 1024     # bytes served without a range / range end
    safe_margin: int = 4096               # context read around a range before trimming
    snippet_length: int = 80
    default_max_hits: int = 100
    read_chunk_size: int = 64 * 1024
    http_timeout: float = 30.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``TEXTWINDOW_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, default) -> str:
            return env.get(ENV_PREFIX + name, str(default))

        return cls(
            default_window=validate_positive_int(
                get("DEFAULT_WINDOW", defaults.default_window), ENV_PREFIX + "DEFAULT_WINDOW"
            ),
            safe_margin=validate_non_negative_int(
                get("SAFE_MARGIN", defaults.safe_margin), ENV_PREFIX + "SAFE_MARGIN"
            ),
            snippet_length=validate_positive_int(
                get("SNIPPET_LENGTH", defaults.snippet_length), ENV_PREFIX + "SNIPPET_LENGTH"
            ),
            default_max_hits=validate_int_range(
                get("DEFAULT_MAX_HITS", defaults.default_max_hits),
                ENV_PREFIX + "DEFAULT_MAX_HITS", 1, MAX_HITS_LIMIT,
            ),
            read_chunk_size=validate_positive_int(
                get("READ_CHUNK", defaults.read_chunk_size), ENV_PREFIX + "READ_CHUNK"
            ),
            http_timeout=validate_positive_float(
                get("HTTP_TIMEOUT", defaults.http_timeout), ENV_PREFIX + "HTTP_TIMEOUT"
            ),
            log_level=validate_log_level(
                get("LOG_LEVEL", defaults.log_level), ENV_PREFIX + "LOG_LEVEL"
            ),
        )


DEFAULT_SETTINGS = Settings()
