"""Exception hierarchy shared by the extraction and generation layers."""

from __future__ import annotations


class ScaneoError(RuntimeError):
    """Base class for every fatal scaneo condition."""


class TargetError(ScaneoError):
    """Raised when a discovery target is malformed or points nowhere."""


class GoSyntaxError(ScaneoError):
    """Raised when a Go source file does not parse cleanly."""

    def __init__(self, file_path: str, error_count: int, reason: str = "") -> None:
        self.file_path = file_path
        self.error_count = error_count
        self.reason = reason or f"{error_count} error nodes"
        super().__init__(f"syntax error in {file_path} ({self.reason})")


class NothingToGenerateError(ScaneoError):
    """Raised when filtering and extraction leave no structs to render."""


class ConfigValidationError(ScaneoError):
    """Raised when a scan configuration file is invalid."""
