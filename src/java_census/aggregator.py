"""Aggregator: the shared counting and findings authority for a scan run.

All count mutation goes through ``Aggregator.record``. Each construct kind
has its own lock; the increment and the paired findings-log append happen
under it, so for every kind the log order equals the increment order and
no two records ever carry the same running count.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .exceptions import FindingsWriteError
from .findings import Finding, FindingsSink, MemoryFindingsLog
from .logging_config import get_logger
from .patterns import ConstructKind

logger = get_logger(__name__)

CounterSet = dict[ConstructKind, int]


class WritePolicy(str, Enum):
    """What to do when the findings log cannot be written."""

    STRICT = "strict"  # abort the run
    WARN = "warn"  # log a warning, keep counting


@dataclass(frozen=True)
class ScanResult:
    """Immutable snapshot of the per-kind counters."""

    counts: CounterSet = field(default_factory=dict)

    def __getitem__(self, kind: ConstructKind) -> int:
        return self.counts.get(kind, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def as_dict(self) -> dict[str, int]:
        """Counts keyed by summary label, in ConstructKind order."""
        return {kind.plural: self[kind] for kind in ConstructKind}


class Aggregator:
    """Per-kind counters with atomic increment-and-append.

    Args:
        sink: Findings destination (in-memory log by default)
        write_policy: STRICT re-raises FindingsWriteError and leaves the
            counter untouched; WARN logs the failure and still counts
    """

    def __init__(
        self,
        sink: Optional[FindingsSink] = None,
        write_policy: WritePolicy = WritePolicy.STRICT,
    ) -> None:
        self.sink: FindingsSink = sink if sink is not None else MemoryFindingsLog()
        self.write_policy = WritePolicy(write_policy)
        self._counts: CounterSet = {kind: 0 for kind in ConstructKind}
        self._locks = {kind: threading.Lock() for kind in ConstructKind}
        self._failure_lock = threading.Lock()
        self.write_failures = 0

    def open(self) -> None:
        """Open the findings sink before the first record."""
        try:
            self.sink.open()
        except FindingsWriteError as e:
            self._handle_write_error(e)

    def record(self, kind: ConstructKind, identifier: str, file_id: str) -> int:
        """Count one match of ``kind`` and append its finding.

        Returns:
            The post-increment count for ``kind``

        Raises:
            FindingsWriteError: If the append fails under the STRICT policy
        """
        with self._locks[kind]:
            count = self._counts[kind] + 1
            finding = Finding(kind=kind, running_count=count, file_id=file_id, identifier=identifier)
            try:
                self.sink.append(finding)
            except FindingsWriteError as e:
                self._handle_write_error(e)
            self._counts[kind] = count

        logger.info(f"  {finding.to_line()}")
        return count

    def snapshot(self) -> ScanResult:
        """Copy the counters.

        Only authoritative once every record() call of the run has returned.
        """
        counts: CounterSet = {}
        for kind in ConstructKind:
            with self._locks[kind]:
                counts[kind] = self._counts[kind]
        return ScanResult(counts=counts)

    def close(self) -> None:
        try:
            self.sink.close()
        except FindingsWriteError as e:
            self._handle_write_error(e)

    def _handle_write_error(self, error: FindingsWriteError) -> None:
        if self.write_policy is WritePolicy.STRICT:
            raise error
        with self._failure_lock:
            self.write_failures += 1
        logger.warning(f"Findings log write failed, continuing: {error.reason}")
