"""Tests for config loading, action inputs, and env var overrides."""

from pathlib import Path

import pytest

from covgate.config.loader import ConfigError, load_config, parse_number


class TestParseNumber:
    def test_valid(self):
        assert parse_number("2.5", 5.0) == 2.5
        assert parse_number(" 10 ", 5.0) == 10.0

    def test_invalid_falls_back(self):
        assert parse_number("abc", 5.0) == 5.0
        assert parse_number("", 5.0) == 5.0
        assert parse_number(None, 5.0) == 5.0

    def test_non_finite_falls_back(self):
        assert parse_number("nan", 0.03) == 0.03
        assert parse_number("inf", 0.03) == 0.03

    def test_zero_is_a_value(self):
        assert parse_number("0", 40.0) == 0.0


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path, env={})
        assert cfg.tolerance.general_coverage_tolerance == 0.03
        assert cfg.tolerance.single_line_coverage_tolerance == 5.0
        assert cfg.tolerance.new_file_coverage_threshold == 40.0
        assert cfg.exclude.ignored_paths == []
        assert cfg.input.base_path == "./coverage-base/coverage-summary.json"
        assert cfg.input.candidate_path == "./coverage-pr/coverage-summary.json"
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".covgate.toml").write_text(
            'version = "1.0"\n'
            "[tolerance]\n"
            "single_line_coverage_tolerance = 2\n"
            'new_file_coverage_threshold = "oops"\n'
            "[exclude]\n"
            'ignored_paths = ["migrations"]\n'
            'file_patterns = "\\\\.spec\\\\.ts$, ^index"\n'
        )
        cfg = load_config(tmp_path, env={})
        assert cfg.tolerance.single_line_coverage_tolerance == 2.0
        assert cfg.tolerance.new_file_coverage_threshold == 40.0
        assert cfg.exclude.ignored_paths == ["migrations"]
        assert cfg.exclude.file_patterns == [r"\.spec\.ts$", "^index"]

    def test_yaml_override(self, tmp_path: Path):
        custom = tmp_path / "covgate.yml"
        custom.write_text("tolerance:\n  general_coverage_tolerance: 0.5\n")
        cfg = load_config(tmp_path, config_override=str(custom), env={})
        assert cfg.tolerance.general_coverage_tolerance == 0.5

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml", env={})

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".covgate.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path, env={})

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / ".covgate.toml").write_text('[output]\nformat = "html"\n')
        with pytest.raises(ConfigError):
            load_config(tmp_path, env={})

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".covgate.toml").write_text("[tolerance]\nfoo = 1\n[extra]\nbar = 2\n")
        cfg = load_config(tmp_path, env={})
        assert cfg.tolerance.single_line_coverage_tolerance == 5.0


class TestActionInputs:
    def test_numeric_inputs(self, tmp_path: Path):
        env = {
            "INPUT_GENERALCOVERAGETOLERANCE": "0.5",
            "INPUT_SINGLELINECOVERAGETOLERANCE": "1",
            "INPUT_NEWFILECOVERAGETHRESHOLD": "80",
        }
        cfg = load_config(tmp_path, env=env)
        assert cfg.tolerance.general_coverage_tolerance == 0.5
        assert cfg.tolerance.single_line_coverage_tolerance == 1.0
        assert cfg.tolerance.new_file_coverage_threshold == 80.0

    def test_unparseable_inputs_use_defaults(self, tmp_path: Path):
        (tmp_path / ".covgate.toml").write_text("[tolerance]\nsingle_line_coverage_tolerance = 2\n")
        env = {
            "INPUT_GENERALCOVERAGETOLERANCE": "lots",
            "INPUT_SINGLELINECOVERAGETOLERANCE": "n/a",
        }
        cfg = load_config(tmp_path, env=env)
        assert cfg.tolerance.general_coverage_tolerance == 0.03
        assert cfg.tolerance.single_line_coverage_tolerance == 5.0

    def test_blank_inputs_are_unset(self, tmp_path: Path):
        (tmp_path / ".covgate.toml").write_text("[tolerance]\nsingle_line_coverage_tolerance = 2\n")
        cfg = load_config(tmp_path, env={"INPUT_SINGLELINECOVERAGETOLERANCE": "  "})
        assert cfg.tolerance.single_line_coverage_tolerance == 2.0

    def test_list_inputs(self, tmp_path: Path):
        env = {
            "INPUT_IGNOREDPATHS": "migrations, generated",
            "INPUT_EXCLUDEFILEPATTERNS": r"\.stories\.tsx$,[bad",
        }
        cfg = load_config(tmp_path, env=env)
        assert cfg.exclude.ignored_paths == ["migrations", "generated"]
        assert cfg.exclude.file_patterns == [r"\.stories\.tsx$", "[bad"]
        rules = cfg.exclusion_rules()
        assert [p.pattern for p in rules.patterns] == [r"\.stories\.tsx$"]


class TestEnvVarOverrides:
    def test_format_override(self, tmp_path: Path):
        cfg = load_config(tmp_path, env={"CI_COVGATE_FORMAT": "json"})
        assert cfg.output.format == "json"

    def test_invalid_format_ignored(self, tmp_path: Path):
        cfg = load_config(tmp_path, env={"CI_COVGATE_FORMAT": "pdf"})
        assert cfg.output.format == "terminal"

    def test_paths_override(self, tmp_path: Path):
        env = {"CI_COVGATE_BASE": "a.json", "CI_COVGATE_CANDIDATE": "b.json"}
        cfg = load_config(tmp_path, env=env)
        assert cfg.input.base_path == "a.json"
        assert cfg.input.candidate_path == "b.json"

    def test_fail_on_issues(self, tmp_path: Path):
        cfg = load_config(tmp_path, env={"CI_COVGATE_FAIL_ON_ISSUES": "true"})
        assert cfg.ci.fail_on_issues is True

    def test_reads_process_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("INPUT_NEWFILECOVERAGETHRESHOLD", "55")
        cfg = load_config(tmp_path)
        assert cfg.tolerance.new_file_coverage_threshold == 55.0
