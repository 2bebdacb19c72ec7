"""Configuration: frozen Config with environment resolution and scoped overrides."""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass, replace
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from statusflow.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterator

load_dotenv()

_ENV_LOGGER = "STATUSFLOW_LOGGER"
_ENV_SEPARATOR = "STATUSFLOW_CONTEXT_SEPARATOR"
_ENV_LOG_LEVEL = "STATUSFLOW_LOG_LEVEL"

_override_var: contextvars.ContextVar[Config | None] = contextvars.ContextVar(
    "statusflow_config_override", default=None
)


def _parse_level(raw: str | int) -> int:
    if isinstance(raw, int):
        return raw
    text = raw.strip()
    if text.lstrip("-").isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ConfigurationError(
            f"Unknown log level: {raw!r}",
            hint="Use a standard level name such as 'ERROR' or 'WARNING', or an integer.",
        )
    return level


@dataclass(frozen=True)
class Config:
    """Immutable configuration for error builders.

    Example:
        with use_config(context_separator=" | "):
            ...  # builders created here join context with " | "
    """

    #: Logger that builder ``log()`` calls write to.
    logger_name: str = "statusflow"
    #: Joins appended or prepended context onto an existing message.
    context_separator: str = "; "
    #: Level used by ``ErrorBuilder.log()`` when none is given.
    log_level: int = logging.ERROR

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.logger_name, str) or not self.logger_name.strip():
            raise ConfigurationError(
                f"logger_name must be a non-empty string, got {self.logger_name!r}",
                hint=f"Set {_ENV_LOGGER} or pass logger_name=...",
            )
        if not isinstance(self.context_separator, str):
            raise ConfigurationError(
                f"context_separator must be a string, got {type(self.context_separator).__name__}",
                hint="Use '; ' for the default annotate style.",
            )
        object.__setattr__(self, "log_level", _parse_level(self.log_level))
        if self.log_level < 0:
            raise ConfigurationError(
                f"log_level must be >= 0, got {self.log_level}",
                hint="logging.DEBUG is 10, logging.CRITICAL is 50.",
            )

    @classmethod
    def from_env(cls) -> Config:
        """Build a Config from ``STATUSFLOW_*`` environment variables."""
        kwargs: dict[str, Any] = {}
        if (name := os.environ.get(_ENV_LOGGER)) is not None:
            kwargs["logger_name"] = name
        if (sep := os.environ.get(_ENV_SEPARATOR)) is not None:
            kwargs["context_separator"] = sep
        if (level := os.environ.get(_ENV_LOG_LEVEL)) is not None:
            kwargs["log_level"] = _parse_level(level)
        return cls(**kwargs)


@cache
def _env_config() -> Config:
    return Config.from_env()


def current_config() -> Config:
    """Return the scoped override when one is active, else the environment config."""
    override = _override_var.get()
    if override is not None:
        return override
    return _env_config()


def reload_config() -> Config:
    """Drop the cached environment config and resolve it again."""
    _env_config.cache_clear()
    return _env_config()


@contextmanager
def use_config(config: Config | None = None, **overrides: Any) -> Iterator[Config]:
    """Install ``config`` (with ``overrides`` applied) for the duration of the block."""
    base = config if config is not None else current_config()
    effective = replace(base, **overrides) if overrides else base
    token = _override_var.set(effective)
    try:
        yield effective
    finally:
        _override_var.reset(token)
