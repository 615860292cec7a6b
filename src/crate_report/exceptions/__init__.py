"""Exception hierarchy for crate-report.

CrateReportError
├── AnalysisError
│   ├── FileAccessError
│   ├── ParsingError
│   ├── BaselineFormatError
│   └── ReportWriteError
└── ConfigurationError
    ├── InvalidPathError
    ├── ConfigFileError
    └── InvalidConfigError
"""

from .analysis import (
    AnalysisError,
    BaselineFormatError,
    FileAccessError,
    ParsingError,
    ReportWriteError,
)
from .base import CrateReportError
from .config import (
    ConfigFileError,
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "CrateReportError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "BaselineFormatError",
    "ReportWriteError",
    "ConfigurationError",
    "InvalidPathError",
    "ConfigFileError",
    "InvalidConfigError",
]
