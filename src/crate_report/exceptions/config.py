"""Configuration exceptions: crate paths, config files and settings."""

from pathlib import Path
from typing import Any

from .base import CrateReportError


class ConfigurationError(CrateReportError):
    """Base class for configuration-related errors."""


class InvalidPathError(ConfigurationError):
    """Raised when the crate root is not a usable directory."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid crate path {path}", details={"reason": reason})
        self.path = path
        self.reason = reason


class ConfigFileError(ConfigurationError):
    """Raised when a TOML config file is missing, unreadable or malformed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot load config file {path}", details={"reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value fails validation."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value {value!r} for {key}",
            details={"reason": reason, "key": key},
        )
        self.key = key
        self.value = value
        self.reason = reason
