"""Configuration loading and management for java-census.

Configuration sources are merged in priority order:
    1. Defaults (defined in ScanConfig)
    2. Project config (./java-census.toml)
    3. Explicit config file (--config)
    4. .env file in the working directory (JAVA_SRC)
    5. Environment variables (JAVA_SRC, JAVA_CENSUS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(root="src/main/java", workers=4)
    >>> config.workers
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from dotenv import dotenv_values

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]
Policy = Literal["strict", "warn"]

PROJECT_CONFIG_NAME = "java-census.toml"
ENV_PREFIX = "JAVA_CENSUS_"
# Root variable read by earlier releases; still honoured
ROOT_ENV_VAR = "JAVA_SRC"


@dataclass(frozen=True)
class ScanConfig:
    """Configuration for one scan.

    Attributes:
        root: Directory or file to scan (None = built-in sample source)
        findings_log: Path of the append-only findings log
        append_log: Append to an existing log instead of truncating it
        write_policy: "strict" aborts on a log write failure, "warn" continues
        workers: Number of parallel workers (None = auto-detect)
        extensions: File suffixes to scan (empty = every regular file)
        follow_symlinks: Follow symbolic links during the walk
        max_file_size_mb: Files larger than this are skipped
        verbosity: Logging verbosity level
        log_file: Also write diagnostic logging to this file (None = stderr only)
    """

    root: Optional[str] = None
    findings_log: str = "statistics.txt"
    append_log: bool = False
    write_policy: Policy = "strict"
    workers: Optional[int] = None
    extensions: list[str] = field(default_factory=lambda: [".java"])
    follow_symlinks: bool = True
    max_file_size_mb: float = 10.0
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.write_policy not in ("strict", "warn"):
            raise InvalidConfigError("write_policy", self.write_policy, "expected strict or warn")
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")
        if self.max_file_size_mb <= 0:
            raise InvalidConfigError("max_file_size_mb", self.max_file_size_mb, "must be positive")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )
        if not self.findings_log:
            raise InvalidConfigError("findings_log", self.findings_log, "must not be empty")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise InvalidConfigError("extensions", ext, "suffixes must start with '.'")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(
    config_file: Optional[Path] = None,
    env_file: Optional[Path] = Path(".env"),
    **overrides: Any,
) -> ScanConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file
        env_file: dotenv file to read JAVA_SRC from (None disables it)
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated ScanConfig instance

    Raises:
        ConfigurationError: If a config source is invalid or missing
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    if env_file is not None and env_file.exists():
        dotenv_root = dotenv_values(env_file).get(ROOT_ENV_VAR)
        if dotenv_root:
            merged["root"] = dotenv_root

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    if "root" in merged and merged["root"] is not None:
        merged["root"] = str(merged["root"])

    try:
        return ScanConfig(**merged)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from JAVA_SRC and JAVA_CENSUS_* environment variables.

    Supported environment variables:
        JAVA_SRC: root path
        JAVA_CENSUS_ROOT: root path (wins over JAVA_SRC)
        JAVA_CENSUS_FINDINGS_LOG: str
        JAVA_CENSUS_APPEND_LOG: bool (true/false/1/0)
        JAVA_CENSUS_WRITE_POLICY: strict/warn
        JAVA_CENSUS_WORKERS: int
        JAVA_CENSUS_EXTENSIONS: comma-separated suffixes
        JAVA_CENSUS_FOLLOW_SYMLINKS: bool
        JAVA_CENSUS_MAX_FILE_SIZE_MB: float
        JAVA_CENSUS_VERBOSITY: quiet/normal/verbose
        JAVA_CENSUS_LOG_FILE: str

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(ScanConfig)

    result: dict[str, Any] = {}

    legacy_root = os.environ.get(ROOT_ENV_VAR)
    if legacy_root:
        result["root"] = legacy_root

    for field_name in ScanConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Reads either the whole file or its [java-census] table when present.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        data = tomllib.load(f)
    section = data.get("java-census")
    return dict(section) if isinstance(section, dict) else data
