"""
Unit Tests - Version Grammar
============================
Tests for version tokens, interval expansion, the ordered grammar rules,
leftover detection and the no-loss reassembly of parsed sections.

Pure functions only; no HTTP app required.
"""
from unittest.mock import patch

import pytest

from bug_extractor.models.version_token import (
    InvalidSemverError,
    InvalidVersionIntervalError,
    VersionInterval,
    VersionToken,
)
from bug_extractor.parser.version_grammar import (
    FIXED_VERSION_RULES,
    GRAMMAR_RULES,
    parse_affected_versions,
    parse_fixed_versions,
)
from bug_extractor.utils.error_kinds import (
    INVALID_CONTENT,
    INVALID_SEMVER,
    INVALID_VERSION_INTERVAL,
)


def _strs(tokens):
    return [str(t) for t in tokens]


def _kinds(result):
    return [e.kind for e in result.errors]


# ===========================================================================
# 1. Version Tokens
# ===========================================================================
class TestVersionToken:

    def test_parse_with_leading_v(self):
        assert VersionToken.parse("v4.0.1") == VersionToken.release(4, 0, 1)

    def test_parse_without_v(self):
        assert VersionToken.parse("4.0.11") == VersionToken.release(4, 0, 11)

    @pytest.mark.parametrize("keyword", ["master", "unreleased", "unplanned", "unplaned"])
    def test_keywords_normalize_to_master(self, keyword):
        token = VersionToken.parse(keyword)
        assert token == VersionToken.master()
        assert str(token) == "master"

    def test_master_normalization_idempotent(self):
        once = VersionToken.parse("unplanned")
        assert VersionToken.parse(str(once)) == once

    def test_string_forms(self):
        assert str(VersionToken.release(4, 0, 1)) == "4.0.1"
        assert str(VersionToken.minor_line(4, 0)) == "4.0"

    def test_two_components_rejected(self):
        with pytest.raises(InvalidSemverError):
            VersionToken.parse("4.0")

    def test_four_components_rejected(self):
        with pytest.raises(InvalidSemverError):
            VersionToken.parse("4.0.1.2")

    def test_leading_zero_rejected(self):
        with pytest.raises(InvalidSemverError):
            VersionToken.parse("4.01.1")

    def test_prerelease_rejected(self):
        with pytest.raises(InvalidSemverError):
            VersionToken.parse("4.0.1rc1")

    def test_structural_equality_and_hash(self):
        assert len({VersionToken.release(4, 0, 1), VersionToken.parse("v4.0.1")}) == 1

    def test_predecessor(self):
        assert VersionToken.release(4, 0, 3).predecessor() == VersionToken.release(4, 0, 2)

    def test_no_predecessor_for_patch_zero(self):
        assert VersionToken.release(5, 0, 0).predecessor() is None

    def test_no_predecessor_for_master(self):
        assert VersionToken.master().predecessor() is None


# ===========================================================================
# 2. Version Intervals
# ===========================================================================
class TestVersionInterval:

    def test_expand_ascending_inclusive(self):
        interval = VersionInterval(VersionToken.release(4, 0, 1), VersionToken.release(4, 0, 3))
        assert _strs(interval.expand()) == ["4.0.1", "4.0.2", "4.0.3"]

    def test_single_patch_interval(self):
        interval = VersionInterval(VersionToken.release(4, 0, 2), VersionToken.release(4, 0, 2))
        assert _strs(interval.expand()) == ["4.0.2"]

    def test_patch_99_collapses_to_minor_line(self):
        interval = VersionInterval(VersionToken.release(4, 0, 1), VersionToken.release(4, 0, 99))
        assert interval.expand() == [VersionToken.minor_line(4, 0)]

    def test_differing_minor_rejected(self):
        with pytest.raises(InvalidVersionIntervalError):
            VersionInterval(VersionToken.release(4, 0, 1), VersionToken.release(4, 1, 2))

    def test_differing_major_rejected(self):
        with pytest.raises(InvalidVersionIntervalError):
            VersionInterval(VersionToken.release(3, 0, 1), VersionToken.release(4, 0, 2))

    def test_descending_rejected(self):
        with pytest.raises(InvalidVersionIntervalError):
            VersionInterval(VersionToken.release(4, 0, 5), VersionToken.release(4, 0, 1))

    def test_up_to_starts_at_patch_zero(self):
        interval = VersionInterval.up_to(VersionToken.release(4, 0, 2))
        assert interval.start == VersionToken.release(4, 0, 0)

    def test_oversized_span_rejected(self):
        with pytest.raises(InvalidVersionIntervalError, match="more than"):
            VersionInterval(VersionToken.release(4, 0, 0), VersionToken.release(4, 0, 3000000))

    def test_span_limit_is_configurable(self):
        with patch("bug_extractor.models.version_token.MAX_INTERVAL_PATCHES", 3):
            assert len(VersionInterval(VersionToken.release(4, 0, 1), VersionToken.release(4, 0, 3)).expand()) == 3
            with pytest.raises(InvalidVersionIntervalError):
                VersionInterval(VersionToken.release(4, 0, 1), VersionToken.release(4, 0, 4))

    def test_patch_99_exempt_from_span_limit(self):
        with patch("bug_extractor.models.version_token.MAX_INTERVAL_PATCHES", 3):
            interval = VersionInterval(VersionToken.release(4, 0, 1), VersionToken.release(4, 0, 99))
        assert interval.expand() == [VersionToken.minor_line(4, 0)]


# ===========================================================================
# 3. Grammar Rules
# ===========================================================================
class TestGrammarRules:

    def test_rule_precedence_order(self):
        assert [r.name for r in GRAMMAR_RULES] == ["closed_interval", "half_open_interval", "bare_token"]

    def test_fixed_versions_only_bare_tokens(self):
        assert [r.name for r in FIXED_VERSION_RULES] == ["bare_token"]


# ===========================================================================
# 4. Affected Versions
# ===========================================================================
class TestParseAffectedVersions:

    def test_closed_interval(self):
        result = parse_affected_versions("[v4.0.1:v4.0.3]")
        assert _strs(result.tokens) == ["4.0.1", "4.0.2", "4.0.3"]
        assert result.errors == []

    def test_closed_interval_patch_99(self):
        result = parse_affected_versions("[v4.0.1:v4.0.99]")
        assert _strs(result.tokens) == ["4.0"]

    def test_half_open_equals_closed_from_zero(self):
        half = parse_affected_versions("[:v4.0.5]")
        closed = parse_affected_versions("[v4.0.0:v4.0.5]")
        assert half.tokens == closed.tokens
        assert len(half.tokens) == 6

    @pytest.mark.parametrize("section", [
        "[v4.0.1：v4.0.2]",
        "[v4.0.1,v4.0.2]",
        "[v4.0.1，v4.0.2]",
        "[4.0.1 : 4.0.2]",
    ])
    def test_delimiter_spellings(self, section):
        result = parse_affected_versions(section)
        assert _strs(result.tokens) == ["4.0.1", "4.0.2"]
        assert result.errors == []

    def test_multiple_intervals_keep_order(self):
        result = parse_affected_versions("[v5.0.0:v5.0.1], [v4.0.1:v4.0.2]")
        assert _strs(result.tokens) == ["5.0.0", "5.0.1", "4.0.1", "4.0.2"]

    def test_duplicates_preserved(self):
        result = parse_affected_versions("[v4.0.1:v4.0.2], v4.0.2")
        assert _strs(result.tokens) == ["4.0.1", "4.0.2", "4.0.2"]

    def test_bare_tokens_and_brackets(self):
        result = parse_affected_versions("v3.0.13, [v4.0.5]\nunreleased")
        assert _strs(result.tokens) == ["3.0.13", "4.0.5", "master"]
        assert result.errors == []

    def test_mismatched_minor_is_invalid_interval(self):
        result = parse_affected_versions("[v4.0.1:v4.1.2]")
        assert _kinds(result) == [INVALID_VERSION_INTERVAL]
        assert result.tokens == []

    def test_invalid_interval_discards_whole_field(self):
        result = parse_affected_versions("[v3.0.1:v3.0.2], [v4.0.5:v4.0.1], garbage")
        assert _kinds(result) == [INVALID_VERSION_INTERVAL]
        assert result.tokens == []

    def test_huge_half_open_interval_rejected(self):
        result = parse_affected_versions("[:v4.0.300000000]")
        assert _kinds(result) == [INVALID_VERSION_INTERVAL]
        assert result.tokens == []

    def test_leading_zero_is_invalid_semver(self):
        result = parse_affected_versions("[v4.0.01:v4.0.03]")
        assert _kinds(result) == [INVALID_SEMVER]
        assert result.tokens == []

    def test_leftover_text_is_invalid_content(self):
        result = parse_affected_versions("[v4.0.1:v4.0.2] see the linked PR")
        assert _strs(result.tokens) == ["4.0.1", "4.0.2"]
        assert _kinds(result) == [INVALID_CONTENT]
        assert result.errors[0].detail == "see the linked PR"

    def test_separators_are_not_leftover(self):
        result = parse_affected_versions("v4.0.1 ,\tv4.0.2，\nv4.0.3")
        assert result.errors == []

    def test_empty_section(self):
        result = parse_affected_versions("")
        assert result.tokens == []
        assert result.errors == []


# ===========================================================================
# 5. Fixed Versions
# ===========================================================================
class TestParseFixedVersions:

    def test_bare_versions(self):
        result = parse_fixed_versions("v3.0.13, v4.0.5")
        assert _strs(result.tokens) == ["3.0.13", "4.0.5"]
        assert result.errors == []

    @pytest.mark.parametrize("keyword", ["master", "unplanned", "unplaned", "unreleased"])
    def test_keywords(self, keyword):
        result = parse_fixed_versions(keyword)
        assert _strs(result.tokens) == ["master"]

    def test_bracketed_version(self):
        result = parse_fixed_versions("[v4.0.7]")
        assert _strs(result.tokens) == ["4.0.7"]
        assert result.errors == []

    def test_interval_syntax_not_accepted(self):
        result = parse_fixed_versions("[v4.0.1:v4.0.3]")
        assert _strs(result.tokens) == ["4.0.1", "4.0.3"]
        assert _kinds(result) == [INVALID_CONTENT]
        assert result.errors[0].detail == ":"

    def test_unrecognized_text(self):
        result = parse_fixed_versions("will be fixed in the next release")
        assert result.tokens == []
        assert _kinds(result) == [INVALID_CONTENT]


# ===========================================================================
# 6. No-Loss Reassembly
# ===========================================================================
class TestReassemble:

    @pytest.mark.parametrize("section", [
        "[v4.0.1:v4.0.3], [:v5.0.2]",
        "[v4.0.1:v4.0.3] oops v5.0.1 trailing",
        "nothing recognizable here",
        "",
    ])
    def test_affected_reassembles_exactly(self, section):
        result = parse_affected_versions(section)
        assert result.reassemble() == section

    @pytest.mark.parametrize("section", [
        "v3.0.1, [v4.0.5:v4.0.1] tail",
        "x [v4.0.1:v4.1.2], v5.0.1",
        "[v4.0.01:v4.0.03]",
    ])
    def test_rejected_section_reassembles_exactly(self, section):
        result = parse_affected_versions(section)
        assert result.tokens == []
        assert result.reassemble() == section

    def test_fixed_reassembles_exactly(self):
        section = "[v4.0.1:v4.0.3]\nmaster, later"
        result = parse_fixed_versions(section)
        assert result.reassemble() == section

    def test_spans_plus_leftover_cover_all_content(self):
        section = "[v4.0.1:v4.0.3] x v5.0.1"
        result = parse_affected_versions(section)
        matched = "".join(s.text for s in result.spans)
        assert len(matched) + len(result.leftover) == len(section)
        assert [s.rule for s in result.spans] == ["closed_interval", "bare_token"]
