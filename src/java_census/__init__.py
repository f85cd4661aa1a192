"""
java-census - method and variable declaration counts for Java source trees.

Parses every Java file under a root with tree-sitter, matches structural
patterns for each construct kind and aggregates the counts concurrently
into a summary and an append-only findings log.
"""

__version__ = "0.1.0"

from .aggregator import Aggregator, ScanResult, WritePolicy
from .api import scan
from .findings import Finding, MemoryFindingsLog, TextFindingsLog
from .orchestrator import ScanOrchestrator, ScanOutcome, ScanState
from .patterns import ConstructKind, PatternCatalog

__all__ = [
    "scan",  # Main entry point
    "ScanOrchestrator",
    "ScanOutcome",
    "ScanState",
    "ScanResult",
    "Aggregator",
    "WritePolicy",
    "Finding",
    "MemoryFindingsLog",
    "TextFindingsLog",
    "ConstructKind",
    "PatternCatalog",
]
