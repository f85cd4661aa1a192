"""Public API for java-census.

Example:
    >>> from java_census import scan
    >>>
    >>> outcome = scan("/path/to/java/src", findings_log="statistics.txt")
    >>> outcome.result.as_dict()
    {'Methods': 12, 'Variables': 40}
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .aggregator import Aggregator, WritePolicy
from .config import ScanConfig, load_config
from .findings import FindingsSink, TextFindingsLog
from .logging_config import get_logger
from .orchestrator import ScanOrchestrator, ScanOutcome
from .sample import SAMPLE_FILE_ID, SAMPLE_SOURCE
from .visitor import FileVisitor

logger = get_logger(__name__)


def build_orchestrator(config: ScanConfig, sink: Optional[FindingsSink] = None) -> ScanOrchestrator:
    """Wire a ScanOrchestrator from configuration.

    Args:
        config: Scan configuration
        sink: Findings destination; defaults to a text log at config.findings_log
    """
    if sink is None:
        sink = TextFindingsLog(config.findings_log, append=config.append_log)
    aggregator = Aggregator(sink=sink, write_policy=WritePolicy(config.write_policy))
    visitor = FileVisitor(extensions=config.extensions, follow_symlinks=config.follow_symlinks)
    return ScanOrchestrator(
        aggregator=aggregator,
        visitor=visitor,
        workers=config.workers,
        max_file_size_bytes=config.max_file_size_bytes,
    )


def scan(
    root: Optional[str] = None,
    config_file: Optional[Path] = None,
    sink: Optional[FindingsSink] = None,
    **overrides,
) -> ScanOutcome:
    """Count method and variable declarations under a root path.

    With no root (from arguments, config files or JAVA_SRC) the built-in
    sample source is scanned instead.

    Args:
        root: Directory or file to scan
        config_file: Optional explicit config file path
        sink: Findings destination (default: text log from config)
        **overrides: Configuration overrides (e.g. workers=4, write_policy="warn")

    Returns:
        ScanOutcome with final counts and per-file errors

    Raises:
        FatalRootError: If the root cannot be visited
        PatternCompileError: If a construct pattern does not compile
        FindingsWriteError: If the findings log fails under the strict policy
        ConfigurationError: If configuration is invalid
    """
    if root is not None:
        overrides["root"] = root
    config = load_config(config_file=config_file, **overrides)
    orchestrator = build_orchestrator(config, sink=sink)

    if config.root is None:
        logger.debug("No root configured, scanning the built-in sample source")
        return orchestrator.run_source(SAMPLE_SOURCE, file_id=SAMPLE_FILE_ID)
    return orchestrator.run(config.root)
