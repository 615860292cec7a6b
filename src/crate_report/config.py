"""Configuration loading and management for crate-report.

Configuration sources are merged in priority order:
    1. Defaults (defined in ReportConfig)
    2. Global config (~/.crate-report.toml)
    3. Project config (./crate-report.toml)
    4. Explicit config file (--config)
    5. Environment variables (CRATE_REPORT_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4)
    >>> config.workers
    4
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Literal, Optional

from .exceptions import ConfigFileError, ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITY_LEVELS = ("quiet", "normal", "verbose")

# Parallel extraction is I/O bound past a handful of threads
_MAX_AUTO_WORKERS = 8

ENV_PREFIX = "CRATE_REPORT_"
CONFIG_FILE_NAME = "crate-report.toml"


@dataclass(frozen=True)
class ReportConfig:
    """Configuration for a crate-report run.

    Attributes:
        Performance tuning:
            workers: Number of parallel extraction workers (None = auto-detect)

        File discovery:
            exclude_dirs: Directory names skipped while walking the crate root
            follow_symlinks: Follow symbolic links during discovery
            max_file_size_mb: Files above this size are reported as failures

        Sanity checks:
            require_cargo_toml: Refuse to run when the crate root has no Cargo.toml

        Output control:
            verbosity: Logging verbosity level
    """

    workers: Optional[int] = None

    exclude_dirs: list[str] = field(default_factory=lambda: ["target", ".git"])
    follow_symlinks: bool = False
    max_file_size_mb: float = 10.0

    require_cargo_toml: bool = True

    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError(
                "max_file_size_mb", self.max_file_size_mb, "must be positive"
            )
        if self.verbosity not in _VERBOSITY_LEVELS:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"expected one of {', '.join(_VERBOSITY_LEVELS)}"
            )
        if not isinstance(self.exclude_dirs, (list, tuple)) or any(
            not isinstance(name, str) or not name for name in self.exclude_dirs
        ):
            raise InvalidConfigError(
                "exclude_dirs", self.exclude_dirs, "entries must be non-empty strings"
            )

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)

    @property
    def effective_workers(self) -> int:
        """Worker count to use, capped to available parallelism when auto-detected."""
        if self.workers is not None:
            return self.workers
        return min(os.cpu_count() or 4, _MAX_AUTO_WORKERS)


DEFAULT_CONFIG = ReportConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> ReportConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask file values.

    Returns:
        Validated ReportConfig instance

    Raises:
        ConfigFileError: If a config file is invalid or missing
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILE_NAME}"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / CONFIG_FILE_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ReportConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise ValueError(f"expected true or false, got {value!r}")


def _parse_list(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


# Parser per ReportConfig field for CRATE_REPORT_<FIELD> variables
_ENV_PARSERS: dict[str, Callable[[str], Any]] = {
    "workers": int,
    "exclude_dirs": _parse_list,
    "follow_symlinks": _parse_bool,
    "max_file_size_mb": float,
    "require_cargo_toml": _parse_bool,
    "verbosity": str.strip,
}


def _load_env_vars() -> dict[str, Any]:
    """Read ``CRATE_REPORT_<FIELD>`` environment variables.

    Booleans accept true/false, 1/0, yes/no and on/off. ``exclude_dirs`` is a
    comma-separated list.

    Raises:
        InvalidConfigError: If a variable cannot be converted
    """
    values: dict[str, Any] = {}
    for name, parse in _ENV_PARSERS.items():
        env_key = f"{ENV_PREFIX}{name.upper()}"
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            values[name] = parse(raw)
        except ValueError as e:
            raise InvalidConfigError(name, raw, f"{env_key}: {e}")
    return values


def _load_toml_file(path: Path) -> dict:
    """Parse one TOML config file.

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e))
