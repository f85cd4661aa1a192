"""Exception hierarchy for java-census."""

from .base import JavaCensusError
from .config import ConfigurationError, InvalidConfigError
from .scan import (
    FatalRootError,
    FileSkipError,
    FindingsWriteError,
    PatternCompileError,
    ScanError,
)
from .taxonomy import ErrorCode

__all__ = [
    "JavaCensusError",
    "ErrorCode",
    "ScanError",
    "FatalRootError",
    "FileSkipError",
    "PatternCompileError",
    "FindingsWriteError",
    "ConfigurationError",
    "InvalidConfigError",
]
