"""ScanOrchestrator: drives a scan from root path to final counts.

States:
    IDLE -> SCANNING -> DONE
                     -> FAILED (root cannot be visited, or a fatal
                        findings-log write under the strict policy)

Files are processed on a thread pool with a bounded number in flight.
Each file is read, decoded, parsed and matched for every construct kind
before any of its matches are recorded, so a file contributes all of its
findings or none of them.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator
from concurrent.futures import (
    ALL_COMPLETED,
    FIRST_COMPLETED,
    Future,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .aggregator import Aggregator, ScanResult
from .exceptions import ErrorCode, FatalRootError, FileSkipError
from .logging_config import get_logger
from .matcher import Match, Matcher
from .parsing import JavaParser
from .patterns import PatternCatalog
from .visitor import FileVisitor

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8 to avoid overwhelming I/O
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)


class ScanState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class FileError:
    """A file excluded from the counts, and why."""

    path: str
    reason: str
    code: ErrorCode

    @classmethod
    def from_skip(cls, error: FileSkipError) -> FileError:
        return cls(path=str(error.path), reason=error.reason, code=error.code)


@dataclass(frozen=True)
class ScanOutcome:
    """What a finished scan hands to reporting.

    Attributes:
        state: Terminal state (always DONE for a returned outcome)
        result: Final per-kind counts
        errors: Files skipped because they could not be read or parsed
        files_scanned: Files whose matches were recorded
        entries_skipped: Directory entries the visitor passed over
        cancelled: Whether cancel() cut the file dispatch short
        write_failures: Findings-log writes lost under the warn policy
    """

    state: ScanState
    result: ScanResult
    errors: tuple[FileError, ...] = ()
    files_scanned: int = 0
    entries_skipped: int = 0
    cancelled: bool = False
    write_failures: int = 0


class ScanOrchestrator:
    """Runs one scan. Instances are single-use.

    Args:
        aggregator: Counting and findings authority (in-memory by default)
        catalog: Compiled construct patterns
        visitor: File enumeration strategy
        parser: Java parser
        workers: Thread pool size
        max_file_size_bytes: Files larger than this are skipped (None = no limit)
    """

    def __init__(
        self,
        aggregator: Optional[Aggregator] = None,
        catalog: Optional[PatternCatalog] = None,
        visitor: Optional[FileVisitor] = None,
        parser: Optional[JavaParser] = None,
        workers: Optional[int] = None,
        max_file_size_bytes: Optional[int] = None,
    ) -> None:
        self.aggregator = aggregator if aggregator is not None else Aggregator()
        self.catalog = catalog if catalog is not None else PatternCatalog()
        self.visitor = visitor if visitor is not None else FileVisitor()
        self.parser = parser if parser is not None else JavaParser()
        self.matcher = Matcher(self.catalog)
        self.workers = workers or _DEFAULT_WORKERS
        self.max_file_size_bytes = max_file_size_bytes

        self.state = ScanState.IDLE
        self._cancel = threading.Event()
        self._lock = threading.Lock()
        self._errors: list[FileError] = []
        self._files_scanned = 0

    # ── Public API ─────────────────────────────────────────────

    def run(self, root: Union[str, Path]) -> ScanOutcome:
        """Scan every file below ``root``.

        Raises:
            FatalRootError: If the root cannot be visited (state FAILED)
            FindingsWriteError: If the findings log fails under the strict policy
        """
        self._begin(f"Scanning {root}")
        try:
            files = self.visitor.visit(root)
        except FatalRootError as e:
            self.state = ScanState.FAILED
            logger.error(str(e))
            raise

        try:
            self.aggregator.open()
            try:
                self._dispatch(files)
            finally:
                self.aggregator.close()
        except Exception:
            self.state = ScanState.FAILED
            raise

        return self._finish()

    def run_source(self, source: Union[str, bytes], file_id: str = "") -> ScanOutcome:
        """Scan a single in-memory source as if it were one file."""
        self._begin("Scanning in-memory source")
        code = source.encode("utf-8") if isinstance(source, str) else source
        try:
            self.aggregator.open()
            try:
                self._process_source(code, file_id, label=file_id or "<source>")
            except FileSkipError as e:
                self._add_error(e)
            finally:
                self.aggregator.close()
        except Exception:
            self.state = ScanState.FAILED
            raise

        return self._finish()

    def cancel(self) -> None:
        """Stop dispatching new files; files already started still finish."""
        if not self._cancel.is_set():
            logger.warning("Scan cancellation requested")
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def errors(self) -> list[FileError]:
        with self._lock:
            return list(self._errors)

    # ── Dispatch ───────────────────────────────────────────────

    def _dispatch(self, files: Iterator[Path]) -> None:
        max_in_flight = self.workers * 2
        pending: dict[Future, Path] = {}

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            try:
                for path in files:
                    if self._cancel.is_set():
                        logger.warning("Scan cancelled, no further files dispatched")
                        break
                    if len(pending) >= max_in_flight:
                        self._collect(pending, FIRST_COMPLETED)
                    pending[executor.submit(self._process_path, path)] = path
                self._collect(pending, ALL_COMPLETED)
            except BaseException:
                self._cancel.set()
                for future in pending:
                    future.cancel()
                raise

    @staticmethod
    def _collect(pending: dict[Future, Path], return_when: str) -> None:
        done, _ = wait(pending, return_when=return_when)
        for future in done:
            pending.pop(future)
            # Re-raises fatal errors (e.g. FindingsWriteError) from workers
            future.result()

    # ── Per-file work ──────────────────────────────────────────

    def _process_path(self, path: Path) -> None:
        if self._cancel.is_set():
            logger.debug(f"Cancelled before start: {path}")
            return
        try:
            code = self._read(path)
            self._process_source(code, path.name, label=str(path))
        except FileSkipError as e:
            self._add_error(e)

    def _read(self, path: Path) -> bytes:
        try:
            if self.max_file_size_bytes is not None:
                size = path.stat().st_size
                if size > self.max_file_size_bytes:
                    raise FileSkipError(
                        path,
                        f"file size {size} exceeds limit {self.max_file_size_bytes}",
                        code=ErrorCode.CS104,
                    )
            return path.read_bytes()
        except OSError as e:
            raise FileSkipError(path, f"cannot read file: {e.strerror or e}", code=ErrorCode.CS101)

    def _process_source(self, code: bytes, file_id: str, label: str) -> None:
        try:
            code.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileSkipError(
                label, f"not valid UTF-8 at byte {e.start}: {e.reason}", code=ErrorCode.CS102
            )

        tree = self.parser.parse(code, label)
        matches: list[Match] = []
        for kind in self.catalog.kinds():
            matches.extend(self.matcher.find_matches(tree, code, kind))

        for match in matches:
            self.aggregator.record(match.kind, match.text, file_id)

        with self._lock:
            self._files_scanned += 1
        logger.debug(f"Processed {label}: {len(matches)} matches")

    def _add_error(self, error: FileSkipError) -> None:
        logger.warning(f"Skipping {error.path}: {error.reason}")
        with self._lock:
            self._errors.append(FileError.from_skip(error))

    # ── State ──────────────────────────────────────────────────

    def _begin(self, message: str) -> None:
        if self.state is not ScanState.IDLE:
            raise RuntimeError(f"Scan already started (state: {self.state.value})")
        self.state = ScanState.SCANNING
        logger.info(message)

    def _finish(self) -> ScanOutcome:
        self.state = ScanState.DONE
        result = self.aggregator.snapshot()
        with self._lock:
            errors = tuple(self._errors)
            files_scanned = self._files_scanned
        logger.info(
            f"Scan complete: {files_scanned} files, {len(errors)} skipped, "
            + ", ".join(f"{kind.plural.lower()}={count}" for kind, count in result.counts.items())
        )
        return ScanOutcome(
            state=self.state,
            result=result,
            errors=errors,
            files_scanned=files_scanned,
            entries_skipped=self.visitor.skipped,
            cancelled=self._cancel.is_set(),
            write_failures=self.aggregator.write_failures,
        )
