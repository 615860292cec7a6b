"""Shared test fixtures for crate-report tests."""

import textwrap
from pathlib import Path
from typing import Callable, Dict

import pytest

from crate_report.metrics import FileMetrics, MetricExtractor
from crate_report.scanning import RustParser


@pytest.fixture
def parser():
    return RustParser()


@pytest.fixture
def extractor():
    return MetricExtractor()


@pytest.fixture
def measure(extractor) -> Callable[[str], FileMetrics]:
    """Measure dedented Rust source that is expected to parse."""

    def _measure(source: str, path: str = "src/lib.rs") -> FileMetrics:
        result = extractor.measure_source(textwrap.dedent(source), path)
        assert isinstance(result, FileMetrics), f"unexpected parse failure: {result}"
        return result

    return _measure


@pytest.fixture
def make_crate(tmp_path) -> Callable[..., Path]:
    """Create a crate under tmp_path from a mapping of relative path to source."""

    def _make(files: Dict[str, str], cargo_toml: bool = True) -> Path:
        root = tmp_path / "crate"
        root.mkdir(exist_ok=True)
        if cargo_toml:
            (root / "Cargo.toml").write_text('[package]\nname = "demo"\nversion = "0.1.0"\n')
        for rel, source in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source), encoding="utf-8")
        return root

    return _make
