"""Baseline snapshots in the CSV wire format.

Header, in this exact order::

    filename,static_mut_items,total_fns,total_lines,total_statements,unsafe_fns,unsafe_statements,unwraps

One row per analyzed file. Files that failed to parse are not written.
"""

import csv
import io
from pathlib import Path
from typing import List

from .exceptions import BaselineFormatError, FileAccessError
from .logging_config import get_logger
from .metrics.models import METRIC_FIELDS, FileMetrics, ProjectMetrics

logger = get_logger(__name__)

CSV_HEADER: List[str] = ["filename", *METRIC_FIELDS]


def to_csv(project: ProjectMetrics) -> str:
    """Serialize per-file metrics as a CSV snapshot."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for metrics in project.files:
        writer.writerow([metrics.path, *(getattr(metrics, name) for name in METRIC_FIELDS)])
    return output.getvalue()


def parse_baseline(text: str, source: str = "<baseline>") -> ProjectMetrics:
    """Parse a CSV snapshot back into ProjectMetrics.

    Rows may appear in any order; file order is preserved.

    Raises:
        BaselineFormatError: On a missing or mismatched header, a row with the
            wrong number of fields, a value that is not a non-negative integer,
            or a duplicated filename.
    """
    reader = csv.reader(io.StringIO(text))
    try:
        header = next(reader)
    except StopIteration:
        raise BaselineFormatError(source, "file is empty")
    except csv.Error as e:
        raise BaselineFormatError(source, str(e), line=1)

    if [column.strip() for column in header] != CSV_HEADER:
        raise BaselineFormatError(
            source,
            f"expected header {','.join(CSV_HEADER)}, got {','.join(header)}",
            line=1,
        )

    files: List[FileMetrics] = []
    seen: set = set()
    try:
        for row in reader:
            if not row:
                continue
            files.append(_parse_row(row, source, reader.line_num, seen))
    except csv.Error as e:
        raise BaselineFormatError(source, str(e), line=reader.line_num)

    return ProjectMetrics(files=tuple(files))


def _parse_row(row: List[str], source: str, line: int, seen: set) -> FileMetrics:
    if len(row) != len(CSV_HEADER):
        raise BaselineFormatError(
            source, f"expected {len(CSV_HEADER)} fields, got {len(row)}", line=line
        )

    filename, *values = row
    if filename in seen:
        raise BaselineFormatError(source, f"duplicate filename {filename!r}", line=line)
    seen.add(filename)

    counts = {}
    for name, raw in zip(METRIC_FIELDS, values):
        value = raw.strip()
        if not (value.isascii() and value.isdigit()):
            raise BaselineFormatError(
                source, f"{name} must be a non-negative integer, got {raw!r}", line=line
            )
        counts[name] = int(value)

    return FileMetrics(path=filename, **counts)


def load_baseline(path: Path) -> ProjectMetrics:
    """Load a CSV snapshot from disk.

    Raises:
        FileAccessError: If the file cannot be read
        BaselineFormatError: If the contents are malformed
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(path, str(e))

    project = parse_baseline(text, source=str(path))
    logger.info(f"Loaded baseline with {len(project.files)} entries from {path}")
    return project
