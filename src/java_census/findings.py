"""Findings: durable records of matched constructs and the sinks that keep them.

The text log is append-only, one line per finding:

    {kind_label}, {running_count}, {file_id}, {identifier}
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Optional, Protocol, Union

from .exceptions import FindingsWriteError
from .patterns import ConstructKind


@dataclass(frozen=True)
class Finding:
    """A single recorded construct occurrence."""

    kind: ConstructKind
    running_count: int
    file_id: str
    identifier: str

    def to_line(self) -> str:
        return f"{self.kind.label}, {self.running_count}, {self.file_id}, {self.identifier}"


class FindingsSink(Protocol):
    """Append-only destination for findings."""

    def open(self) -> None: ...

    def append(self, finding: Finding) -> None: ...

    def close(self) -> None: ...


class MemoryFindingsLog:
    """Keeps findings in memory, in append order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._findings: list[Finding] = []

    def append(self, finding: Finding) -> None:
        with self._lock:
            self._findings.append(finding)

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    @property
    def findings(self) -> list[Finding]:
        with self._lock:
            return list(self._findings)

    def __len__(self) -> int:
        with self._lock:
            return len(self._findings)


class TextFindingsLog:
    """Writes findings to a text file, one comma-separated line each.

    The file is opened by open(), or lazily on the first append; a run that
    fails before either leaves no log behind.

    Args:
        path: Log file location
        append: Keep existing content instead of truncating on first write
    """

    def __init__(self, path: Union[str, Path], append: bool = False) -> None:
        self.path = Path(path)
        self._mode = "a" if append else "w"
        self._lock = threading.Lock()
        self._handle: Optional[IO[str]] = None

    def append(self, finding: Finding) -> None:
        line = finding.to_line()
        with self._lock:
            self._open_locked()
            assert self._handle is not None
            try:
                self._handle.write(line + "\n")
            except OSError as e:
                raise FindingsWriteError(self.path, str(e)) from e

    def open(self) -> None:
        with self._lock:
            self._open_locked()

    def _open_locked(self) -> None:
        if self._handle is not None:
            return
        try:
            self._handle = open(self.path, self._mode, encoding="utf-8")
        except OSError as e:
            raise FindingsWriteError(self.path, str(e)) from e
        # reopening after close() must not truncate what was written
        self._mode = "a"

    def close(self) -> None:
        with self._lock:
            if self._handle is None:
                return
            handle, self._handle = self._handle, None
            try:
                handle.close()
            except OSError as e:
                raise FindingsWriteError(self.path, str(e)) from e
