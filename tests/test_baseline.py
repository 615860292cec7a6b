"""Tests for the CSV baseline snapshot format."""

import pytest

from crate_report.baseline import CSV_HEADER, load_baseline, parse_baseline, to_csv
from crate_report.exceptions import BaselineFormatError, FileAccessError
from crate_report.metrics import FileMetrics, ProjectMetrics

HEADER = "filename,static_mut_items,total_fns,total_lines,total_statements,unsafe_fns,unsafe_statements,unwraps"


def _project():
    return ProjectMetrics(
        files=(
            FileMetrics(
                path="src/lib.rs",
                static_mut_items=1,
                total_fns=4,
                total_lines=120,
                total_statements=30,
                unsafe_fns=2,
                unsafe_statements=7,
                unwraps=3,
            ),
            FileMetrics(path="src/util/mod.rs", total_fns=1, total_lines=8, total_statements=2),
        )
    )


class TestToCsv:
    def test_header_order(self):
        assert ",".join(CSV_HEADER) == HEADER
        assert to_csv(ProjectMetrics()) == HEADER + "\n"

    def test_rows(self):
        lines = to_csv(_project()).splitlines()
        assert lines[1] == "src/lib.rs,1,4,120,30,2,7,3"
        assert lines[2] == "src/util/mod.rs,0,1,8,2,0,0,0"

    def test_unix_line_endings(self):
        assert "\r" not in to_csv(_project())

    def test_awkward_filenames_are_quoted(self):
        project = ProjectMetrics(files=(FileMetrics(path="src/a,b.rs"),))
        restored = parse_baseline(to_csv(project))
        assert restored.files[0].path == "src/a,b.rs"

    def test_failures_are_not_written(self):
        from crate_report.metrics import ParseFailure

        project = ProjectMetrics(
            files=(FileMetrics(path="ok.rs"),),
            failures=(ParseFailure(path="bad.rs", message="syntax error"),),
        )
        assert "bad.rs" not in to_csv(project)


class TestParseBaseline:
    def test_round_trip(self):
        original = _project()
        restored = parse_baseline(to_csv(original))
        assert restored.files == original.files
        assert restored.totals == original.totals

    def test_row_order_is_irrelevant_to_totals(self):
        text = HEADER + "\nb.rs,0,1,1,1,0,0,2\na.rs,0,2,2,2,1,1,0\n"
        project = parse_baseline(text)
        assert [f.path for f in project.files] == ["b.rs", "a.rs"]
        assert project.totals.unwraps == 2
        assert project.totals.unsafe_fns == 1

    def test_blank_lines_skipped(self):
        project = parse_baseline(HEADER + "\n\na.rs,0,1,1,1,0,0,0\n\n")
        assert len(project.files) == 1

    def test_crlf_accepted(self):
        project = parse_baseline(HEADER + "\r\na.rs,0,1,1,1,0,0,0\r\n")
        assert project.files[0].total_fns == 1

    def test_header_only(self):
        assert parse_baseline(HEADER + "\n").files == ()

    def test_empty_file(self):
        with pytest.raises(BaselineFormatError, match="Malformed baseline"):
            parse_baseline("")

    def test_wrong_header(self):
        with pytest.raises(BaselineFormatError) as exc_info:
            parse_baseline("file,unsafe_fns\na.rs,1\n", source="old.csv")
        assert exc_info.value.line == 1
        assert exc_info.value.source == "old.csv"

    def test_reordered_header_rejected(self):
        columns = HEADER.split(",")
        columns[1], columns[2] = columns[2], columns[1]
        with pytest.raises(BaselineFormatError):
            parse_baseline(",".join(columns) + "\n")

    def test_wrong_field_count(self):
        with pytest.raises(BaselineFormatError) as exc_info:
            parse_baseline(HEADER + "\na.rs,0,1,1,1,0,0\n")
        assert exc_info.value.line == 2
        assert "fields" in exc_info.value.reason

    @pytest.mark.parametrize("value", ["-1", "1.5", "x", "", "١"])
    def test_non_integer_values(self, value):
        with pytest.raises(BaselineFormatError) as exc_info:
            parse_baseline(HEADER + f"\na.rs,0,1,1,1,0,0,{value}\n")
        assert "unwraps" in exc_info.value.reason

    def test_duplicate_filename(self):
        text = HEADER + "\na.rs,0,1,1,1,0,0,0\na.rs,0,1,1,1,0,0,0\n"
        with pytest.raises(BaselineFormatError) as exc_info:
            parse_baseline(text)
        assert exc_info.value.line == 3


class TestLoadBaseline:
    def test_load(self, tmp_path):
        path = tmp_path / "baseline.csv"
        path.write_text(to_csv(_project()), encoding="utf-8")
        assert load_baseline(path).files == _project().files

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileAccessError):
            load_baseline(tmp_path / "missing.csv")

    def test_malformed_file_names_source(self, tmp_path):
        path = tmp_path / "baseline.csv"
        path.write_text("nope\n", encoding="utf-8")
        with pytest.raises(BaselineFormatError) as exc_info:
            load_baseline(path)
        assert exc_info.value.source == str(path)
