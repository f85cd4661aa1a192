"""Base exception for java-census."""

from typing import Dict, Optional

from .taxonomy import ErrorCode


class JavaCensusError(Exception):
    """Base exception for all java-census errors."""

    code: Optional[ErrorCode] = None

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        prefix = f"[{self.code.value}] " if self.code is not None else ""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{prefix}{self.message} ({details_str})"
        return f"{prefix}{self.message}"
