"""Tests for ignored paths and file-name exclusion patterns."""

import logging
import re

from covgate.comparison.exclusion import (
    ExclusionRules,
    base_name,
    is_excluded,
    parse_exclude_patterns,
    parse_ignored_paths,
    split_list,
)


class TestSplitList:
    def test_trims_entries(self):
        assert split_list(" migrations , src/generated ") == ["migrations", "src/generated"]

    def test_empty_input(self):
        assert split_list("") == []
        assert split_list(None) == []

    def test_drops_blank_entries(self):
        assert split_list("a,, ,b") == ["a", "b"]


class TestParsePatterns:
    def test_valid_patterns(self):
        patterns = parse_exclude_patterns(r"\.spec\.ts$, ^index")
        assert [p.pattern for p in patterns] == [r"\.spec\.ts$", "^index"]

    def test_invalid_pattern_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            patterns = parse_exclude_patterns(r"[unclosed, \.test\.ts$")
        assert [p.pattern for p in patterns] == [r"\.test\.ts$"]
        assert 'Invalid regex pattern "[unclosed"' in caplog.text

    def test_all_invalid(self):
        assert parse_exclude_patterns("(, [") == []

    def test_ignored_paths(self):
        assert parse_ignored_paths("migrations,legacy") == ["migrations", "legacy"]


class TestBaseName:
    def test_nested(self):
        assert base_name("src/components/Button.tsx") == "Button.tsx"

    def test_no_separator(self):
        assert base_name("index.ts") == "index.ts"


class TestIsExcluded:
    def test_substring_match(self):
        assert is_excluded("src/migrations/001.ts", ["migrations"], []) is True

    def test_substring_not_segment_aware(self):
        assert is_excluded("src/mymigrations_helper.ts", ["migrations"], []) is True
        assert is_excluded("src/a.ts", ["src/a"], []) is True

    def test_pattern_matches_base_name_only(self):
        patterns = [re.compile("^src")]
        assert is_excluded("src/util.ts", [], patterns) is False
        assert is_excluded("lib/src_helpers.ts", [], patterns) is True

    def test_pattern_search_semantics(self):
        patterns = [re.compile(r"\.stories\.")]
        assert is_excluded("src/Button.stories.tsx", [], patterns) is True
        assert is_excluded("src/Button.tsx", [], patterns) is False

    def test_no_rules(self):
        assert is_excluded("src/a.ts", [], []) is False

    def test_either_kind_excludes(self):
        patterns = [re.compile(r"\.d\.ts$")]
        assert is_excluded("types/global.d.ts", ["vendor"], patterns) is True
        assert is_excluded("vendor/lib.ts", ["vendor"], patterns) is True
        assert is_excluded("src/lib.ts", ["vendor"], patterns) is False


class TestExclusionRules:
    def test_from_inputs(self):
        rules = ExclusionRules.from_inputs("migrations", r"\.spec\.ts$,[bad")
        assert rules.ignored_paths == ("migrations",)
        assert len(rules.patterns) == 1
        assert rules.is_excluded("src/migrations/001.ts")
        assert rules.is_excluded("src/a.spec.ts")
        assert not rules.is_excluded("src/a.ts")

    def test_empty_rules_exclude_nothing(self):
        rules = ExclusionRules()
        assert not rules.is_excluded("anything/at/all.ts")
