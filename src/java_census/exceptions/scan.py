"""Scan-related exceptions: root access, per-file skips, patterns, findings log."""

from pathlib import Path
from typing import Union

from .base import JavaCensusError
from .taxonomy import ErrorCode


class ScanError(JavaCensusError):
    """Base class for errors raised while scanning."""

    pass


class FatalRootError(ScanError):
    """Raised when the scan root cannot be visited at all."""

    code = ErrorCode.CS100

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot scan root: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason


class FileSkipError(ScanError):
    """Raised when a single file cannot be read, decoded or parsed.

    Never ends a scan: the orchestrator catches it at the per-file boundary
    and records it as a FileError.
    """

    def __init__(self, path: Union[str, Path], reason: str, code: ErrorCode = ErrorCode.CS101):
        super().__init__(
            f"Skipped file: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason
        self.code = code


class PatternCompileError(JavaCensusError):
    """Raised when a structural pattern does not compile against the grammar.

    This is a programming defect in the pattern catalog, surfaced at startup.
    """

    code = ErrorCode.CS200

    def __init__(self, kind: str, reason: str):
        super().__init__(
            f"Pattern for {kind} failed to compile",
            details={"kind": kind, "reason": reason},
        )
        self.kind = kind
        self.reason = reason


class FindingsWriteError(JavaCensusError):
    """Raised when a finding cannot be appended to the findings log."""

    code = ErrorCode.CS300

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot write findings log: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason
