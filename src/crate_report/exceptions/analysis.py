"""Analysis exceptions: input files, parsing, baselines and report output."""

from pathlib import Path
from typing import Optional

from .base import CrateReportError


class AnalysisError(CrateReportError):
    """Base class for errors raised while producing a report."""


class FileAccessError(AnalysisError):
    """Raised when an input file (such as a baseline) cannot be read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot read {filepath}", details={"reason": reason})
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when Rust source has syntax errors.

    The extractor turns this into a ``ParseFailure`` record, so a single bad
    file never stops the batch.
    """

    def __init__(self, filepath: str, reason: str):
        super().__init__(f"Cannot parse {filepath}", details={"reason": reason})
        self.filepath = filepath
        self.reason = reason


class BaselineFormatError(AnalysisError):
    """Raised when a baseline CSV snapshot is malformed."""

    def __init__(self, source: str, reason: str, line: Optional[int] = None):
        details = {"reason": reason}
        if line is not None:
            details["line"] = str(line)
        super().__init__(f"Malformed baseline {source}", details=details)
        self.source = source
        self.reason = reason
        self.line = line


class ReportWriteError(AnalysisError):
    """Raised when the rendered report cannot be written."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(f"Cannot write report to {filepath}", details={"reason": reason})
        self.filepath = filepath
        self.reason = reason
