"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .constants import SERVER_NAME
from .exceptions import ConfigurationError


def _split(value: str | None, sep: str) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(sep) if part.strip())


@dataclass(frozen=True)
class Settings:
    """Broker server settings.

    Environment variables:
        TOOLKIT_SERVER_NAME: MCP server name (default 'toolkit-broker').
        LOGGING_LEVEL: Log level (default 'INFO').
        TOOLKIT_CATALOG_PATHS: Tool catalog JSON files, os.pathsep separated.
        TOOLKIT_DISABLED_CATEGORIES: Comma separated category keys to hide.
        TOOLKIT_EXECUTOR_URL: Base URL of the HTTP tool gateway.
        TOOLKIT_EXECUTOR_USER: X-User header sent to the gateway (default 'toolkit').
        TOOLKIT_EXECUTOR_TIMEOUT: Gateway timeout in seconds (default 30).
    """

    server_name: str = SERVER_NAME
    log_level: str = "INFO"
    catalog_paths: tuple[str, ...] = field(default_factory=tuple)
    disabled_categories: tuple[str, ...] = field(default_factory=tuple)
    executor_url: str | None = None
    executor_user: str = "toolkit"
    executor_timeout: float = 30.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: TOOLKIT_EXECUTOR_TIMEOUT is not a positive number.
        """
        env = os.environ if environ is None else environ

        raw_timeout = env.get("TOOLKIT_EXECUTOR_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(
                f"TOOLKIT_EXECUTOR_TIMEOUT must be a number, got {raw_timeout!r}",
                setting="TOOLKIT_EXECUTOR_TIMEOUT",
            ) from e
        if timeout <= 0:
            raise ConfigurationError(
                "TOOLKIT_EXECUTOR_TIMEOUT must be positive",
                setting="TOOLKIT_EXECUTOR_TIMEOUT",
            )

        return cls(
            server_name=env.get("TOOLKIT_SERVER_NAME", SERVER_NAME),
            log_level=env.get("LOGGING_LEVEL", "INFO"),
            catalog_paths=_split(env.get("TOOLKIT_CATALOG_PATHS"), os.pathsep),
            disabled_categories=_split(env.get("TOOLKIT_DISABLED_CATEGORIES"), ","),
            executor_url=env.get("TOOLKIT_EXECUTOR_URL") or None,
            executor_user=env.get("TOOLKIT_EXECUTOR_USER", "toolkit"),
            executor_timeout=timeout,
        )
