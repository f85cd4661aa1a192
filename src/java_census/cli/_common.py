"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ScanConfig, load_config

console = Console()


def resolve_config(
    path: Optional[Path] = None,
    config: Optional[Path] = None,
    log: Optional[Path] = None,
    workers: Optional[int] = None,
    policy: Optional[str] = None,
    append: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> ScanConfig:
    """Build scan configuration from CLI options."""
    overrides = {}
    if path is not None:
        overrides["root"] = str(path)
    if log is not None:
        overrides["findings_log"] = str(log)
    if workers is not None:
        overrides["workers"] = workers
    if policy is not None:
        overrides["write_policy"] = policy
    if append:
        overrides["append_log"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    if log_file is not None:
        overrides["log_file"] = str(log_file)
    return load_config(config_file=config, **overrides)
