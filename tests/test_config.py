"""Tests for configuration loading and validation."""

import os

import pytest

from crate_report.config import DEFAULT_CONFIG, ReportConfig, load_config
from crate_report.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """No global or project config files and no CRATE_REPORT_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for key in list(os.environ):
        if key.startswith("CRATE_REPORT_"):
            monkeypatch.delenv(key)
    return tmp_path


class TestReportConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.workers is None
        assert DEFAULT_CONFIG.exclude_dirs == ["target", ".git"]
        assert DEFAULT_CONFIG.follow_symlinks is False
        assert DEFAULT_CONFIG.require_cargo_toml is True
        assert DEFAULT_CONFIG.verbosity == "normal"

    def test_effective_workers(self):
        assert ReportConfig(workers=3).effective_workers == 3
        assert 1 <= DEFAULT_CONFIG.effective_workers <= 8

    def test_max_file_size_bytes(self):
        assert ReportConfig(max_file_size_mb=1.0).max_file_size_bytes == 1024 * 1024

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": 0},
            {"max_file_size_mb": 0},
            {"verbosity": "loud"},
            {"exclude_dirs": ["target", ""]},
            {"exclude_dirs": "target"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            ReportConfig(**kwargs)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.workers = 2


class TestLoadConfig:
    def test_defaults_when_nothing_configured(self, isolated):
        assert load_config() == ReportConfig()

    def test_project_file(self, isolated):
        (isolated / "work" / "crate-report.toml").write_text("workers = 2\n")
        assert load_config().workers == 2

    def test_global_file(self, isolated):
        (isolated / "home" / ".crate-report.toml").write_text("follow_symlinks = true\n")
        assert load_config().follow_symlinks is True

    def test_explicit_file_beats_project_file(self, isolated):
        (isolated / "work" / "crate-report.toml").write_text("workers = 2\n")
        explicit = isolated / "explicit.toml"
        explicit.write_text('workers = 5\nexclude_dirs = ["target", "vendor"]\n')
        config = load_config(config_file=explicit)
        assert config.workers == 5
        assert config.exclude_dirs == ["target", "vendor"]

    def test_env_beats_files(self, isolated, monkeypatch):
        (isolated / "work" / "crate-report.toml").write_text("workers = 2\n")
        monkeypatch.setenv("CRATE_REPORT_WORKERS", "6")
        monkeypatch.setenv("CRATE_REPORT_EXCLUDE_DIRS", "target, vendor")
        monkeypatch.setenv("CRATE_REPORT_REQUIRE_CARGO_TOML", "false")
        config = load_config()
        assert config.workers == 6
        assert config.exclude_dirs == ["target", "vendor"]
        assert config.require_cargo_toml is False

    def test_overrides_beat_env(self, isolated, monkeypatch):
        monkeypatch.setenv("CRATE_REPORT_WORKERS", "6")
        assert load_config(workers=1).workers == 1

    def test_none_override_is_ignored(self, isolated, monkeypatch):
        monkeypatch.setenv("CRATE_REPORT_WORKERS", "6")
        assert load_config(workers=None).workers == 6

    def test_verbose_and_quiet_flags(self, isolated):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"

    def test_missing_explicit_file(self, isolated):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=isolated / "nope.toml")

    def test_malformed_toml(self, isolated):
        bad = isolated / "bad.toml"
        bad.write_text("workers = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=bad)

    def test_unknown_key(self, isolated):
        extra = isolated / "extra.toml"
        extra.write_text("colour = true\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(config_file=extra)

    def test_bad_env_value(self, isolated, monkeypatch):
        monkeypatch.setenv("CRATE_REPORT_FOLLOW_SYMLINKS", "sometimes")
        with pytest.raises(InvalidConfigError):
            load_config()
