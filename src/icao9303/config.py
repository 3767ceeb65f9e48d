"""
Configuration settings for the ICAO 9303 encoding core.

Values are read from ``ICAO9303_*`` environment variables when the module is
imported. A YAML file can be loaded with :meth:`Settings.from_yaml`, and
:func:`configure` updates the shared ``settings`` instance in place so every
module holding a reference sees the change.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .logging_config import LOG_LEVELS, LOG_OFF, setup_logging

ENV_PREFIX = "ICAO9303_"

DEFAULT_YEAR_CUTOFF = 32
DEFAULT_SIGNATURE_LENGTH = 64
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "text"
LOGGING_FIELDS = frozenset({"log_level", "log_format"})


class ConfigurationError(Exception):
    """Raised when there's an error loading configuration."""


def _env_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Runtime settings shared by the encoders."""

    FIELDS = ("year_cutoff", "signature_length", "warn_unknown_codes", "log_level", "log_format")

    def __init__(
        self,
        year_cutoff: int = DEFAULT_YEAR_CUTOFF,
        signature_length: int = DEFAULT_SIGNATURE_LENGTH,
        warn_unknown_codes: bool = True,
        log_level: str = DEFAULT_LOG_LEVEL,
        log_format: str = DEFAULT_LOG_FORMAT,
    ) -> None:
        self.year_cutoff = year_cutoff
        self.signature_length = signature_length
        self.warn_unknown_codes = warn_unknown_codes
        self.log_level = log_level
        self.log_format = log_format
        self.validate()

    def validate(self) -> None:
        """Check value ranges, raising ConfigurationError on the first problem."""
        if not 0 <= self.year_cutoff <= 99:
            msg = f"year_cutoff must be a two-digit year, got {self.year_cutoff}"
            raise ConfigurationError(msg)
        if self.signature_length < 0:
            msg = f"signature_length must not be negative, got {self.signature_length}"
            raise ConfigurationError(msg)
        if str(self.log_level).upper() not in (*LOG_LEVELS, LOG_OFF):
            msg = f"log_level must be one of {', '.join([*LOG_LEVELS, LOG_OFF])}, got {self.log_level}"
            raise ConfigurationError(msg)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from ``ICAO9303_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        try:
            if f"{ENV_PREFIX}YEAR_CUTOFF" in environ:
                values["year_cutoff"] = int(environ[f"{ENV_PREFIX}YEAR_CUTOFF"])
            if f"{ENV_PREFIX}SIGNATURE_LENGTH" in environ:
                values["signature_length"] = int(environ[f"{ENV_PREFIX}SIGNATURE_LENGTH"])
        except ValueError as e:
            msg = f"Invalid integer in environment configuration: {e}"
            raise ConfigurationError(msg) from e
        if f"{ENV_PREFIX}WARN_UNKNOWN_CODES" in environ:
            values["warn_unknown_codes"] = _env_bool(environ[f"{ENV_PREFIX}WARN_UNKNOWN_CODES"])
        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            values["log_level"] = environ[f"{ENV_PREFIX}LOG_LEVEL"].upper()
        if f"{ENV_PREFIX}LOG_FORMAT" in environ:
            values["log_format"] = environ[f"{ENV_PREFIX}LOG_FORMAT"]
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """
        Load settings from a YAML file.

        The file holds a mapping whose keys are the attribute names of
        :class:`Settings`, optionally nested under an ``icao9303`` key.

        Raises:
            ConfigurationError: If the file is missing, unreadable or has unknown keys
        """
        config_path = Path(path)
        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise ConfigurationError(msg)
        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            msg = f"Error parsing YAML configuration file {config_path}: {e}"
            raise ConfigurationError(msg) from e

        if not isinstance(data, dict):
            msg = f"Configuration file {config_path} must contain a mapping"
            raise ConfigurationError(msg)
        data = data.get("icao9303", data)
        unknown = set(data) - set(cls.FIELDS)
        if unknown:
            msg = f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        return cls(**data)

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.FIELDS}


settings = Settings.from_env()


def configure(**overrides: Any) -> Settings:
    """
    Update the shared settings in place and return them.

    Passing ``log_level`` or ``log_format`` also (re)configures the package
    logger through :func:`icao9303.logging_config.setup_logging`.
    """
    unknown = set(overrides) - set(Settings.FIELDS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(sorted(unknown))}"
        raise ConfigurationError(msg)
    candidate = Settings(**{**settings.as_dict(), **overrides})
    for name, value in candidate.as_dict().items():
        setattr(settings, name, value)
    if LOGGING_FIELDS & set(overrides):
        setup_logging(settings.log_level, settings.log_format)
    return settings
