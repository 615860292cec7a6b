"""Crate analysis: discover sources, measure them in parallel, aggregate."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_CONFIG, ReportConfig
from ..logging_config import get_logger
from ..metrics import MetricExtractor, ProjectMetrics, aggregate
from ..metrics.models import FileResult
from ..scanning import discover_sources

logger = get_logger(__name__)

# Below this many files a thread pool costs more than it saves
PARALLEL_THRESHOLD = 10


def measure_files(
    file_paths: list[Path],
    root_dir: Path,
    config: ReportConfig = DEFAULT_CONFIG,
    extractor: Optional[MetricExtractor] = None,
) -> list[FileResult]:
    """Measure every file, returning results in the order of ``file_paths``."""
    extractor = extractor or MetricExtractor()
    max_bytes = config.max_file_size_bytes

    def _measure(file_path: Path) -> FileResult:
        return extractor.measure_file(file_path, root_dir, max_bytes)

    workers = config.effective_workers
    if workers == 1 or len(file_paths) < PARALLEL_THRESHOLD:
        return [_measure(fp) for fp in file_paths]

    logger.debug(f"Measuring {len(file_paths)} files with {workers} workers")
    # map() yields in submission order regardless of completion order
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_measure, file_paths))


def analyze_crate(root_dir: Path, config: ReportConfig = DEFAULT_CONFIG) -> ProjectMetrics:
    """Measure every Rust source file under ``root_dir``.

    Raises:
        InvalidPathError: If ``root_dir`` is not a directory
    """
    root_dir = Path(root_dir)
    files = discover_sources(root_dir, config)
    logger.info(f"Analyzing {len(files)} files under {root_dir}")
    return aggregate(measure_files(files, root_dir, config))
