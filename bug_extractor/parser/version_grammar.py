"""
Version Grammar
===============
Recognizes version tokens and intervals in the "Affected versions" and
"Fixed versions" sections and expands intervals into concrete versions.

Grammar (tried in this order at every scan position, first match wins):
    1. closed_interval     [v4.0.1:v4.0.5]   delimiter ∈ { :  ：  ,  ， }
    2. half_open_interval  [:v4.0.5]         start implied as 4.0.0
    3. bare_token          v4.0.1 | [v4.0.1] | master | unreleased | unplanned | unplaned

Precedence is the order of GRAMMAR_RULES, not regex alternation order.
Characters no rule matches are left behind as residue; residue that is not a
separator (comma, fullwidth comma, whitespace) is reported as InvalidContent.

Contract:
    - DETERMINISTIC: same section text → same tokens, same errors.
    - Appearance order is preserved, duplicates included.
    - Tolerant: errors are returned as FieldErrors, never raised.
"""
import re
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from bug_extractor.core.constants import INTERVAL_DELIMITERS, LEFTOVER_SEPARATORS, MASTER_ALIASES
from bug_extractor.models.field_error import FieldError
from bug_extractor.models.version_token import (
    VersionInterval,
    VersionModelError,
    VersionToken,
)
from bug_extractor.utils.error_kinds import INVALID_CONTENT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pattern Building Blocks
# ---------------------------------------------------------------------------
_TRIPLE = r"v?([0-9]+\.[0-9]+\.[0-9]+)"
_DELIM = "[" + "".join(INTERVAL_DELIMITERS) + "]"
_KEYWORD = "|".join(sorted(MASTER_ALIASES, key=len, reverse=True))

_CLOSED_INTERVAL = re.compile(r"\[\s*" + _TRIPLE + r"\s*" + _DELIM + r"\s*" + _TRIPLE + r"\s*\]")
_HALF_OPEN_INTERVAL = re.compile(r"\[\s*" + _DELIM + r"\s*" + _TRIPLE + r"\s*\]")
_BARE_TOKEN = re.compile(r"\[?(?:v?([0-9]+\.[0-9]+\.[0-9]+)|(" + _KEYWORD + r"))\]?")

_SEPARATORS = re.compile("[" + "".join(LEFTOVER_SEPARATORS) + r"\s]+")


# ---------------------------------------------------------------------------
# Rule Handlers
# ---------------------------------------------------------------------------
def _closed_interval(m: re.Match) -> list[VersionToken]:
    start = VersionToken.parse_release(m.group(1))
    end = VersionToken.parse_release(m.group(2))
    return VersionInterval(start, end).expand()


def _half_open_interval(m: re.Match) -> list[VersionToken]:
    end = VersionToken.parse_release(m.group(1))
    return VersionInterval.up_to(end).expand()


def _bare_token(m: re.Match) -> list[VersionToken]:
    if m.group(2):
        return [VersionToken.master()]
    return [VersionToken.parse_release(m.group(1))]


@dataclass(frozen=True)
class GrammarRule:
    """A named surface form and the handler turning its match into tokens."""
    name: str
    pattern: re.Pattern
    handler: Callable[[re.Match], list[VersionToken]]


GRAMMAR_RULES: list[GrammarRule] = [
    GrammarRule("closed_interval", _CLOSED_INTERVAL, _closed_interval),
    GrammarRule("half_open_interval", _HALF_OPEN_INTERVAL, _half_open_interval),
    GrammarRule("bare_token", _BARE_TOKEN, _bare_token),
]

# The fixed-versions section accepts no interval syntax.
FIXED_VERSION_RULES: list[GrammarRule] = [r for r in GRAMMAR_RULES if r.name == "bare_token"]


# ---------------------------------------------------------------------------
# Parse Result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MatchedSpan:
    """A span of section text consumed by one grammar rule."""
    rule: str
    start: int
    end: int
    text: str


@dataclass
class VersionParseResult:
    section: str
    tokens: list[VersionToken] = field(default_factory=list)
    spans: list[MatchedSpan] = field(default_factory=list)
    leftover: str = ""
    errors: list[FieldError] = field(default_factory=list)

    def reassemble(self) -> str:
        """Interleave matched spans and leftover back into the section text."""
        parts: list[str] = []
        consumed = 0
        prev_end = 0
        for span in self.spans:
            gap = span.start - prev_end
            parts.append(self.leftover[consumed:consumed + gap])
            parts.append(span.text)
            consumed += gap
            prev_end = span.end
        parts.append(self.leftover[consumed:])
        return "".join(parts)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------
def _match_at(text: str, pos: int, rules: list[GrammarRule]) -> Optional[tuple[GrammarRule, re.Match]]:
    for rule in rules:
        m = rule.pattern.match(text, pos)
        if m and m.end() > pos:
            return rule, m
    return None


def _scan(section: str, rules: list[GrammarRule]) -> VersionParseResult:
    result = VersionParseResult(section=section)
    residue: list[str] = []
    pos = 0

    while pos < len(section):
        found = _match_at(section, pos, rules)
        if found is None:
            residue.append(section[pos])
            pos += 1
            continue

        rule, m = found
        try:
            result.tokens.extend(rule.handler(m))
        except VersionModelError as e:
            logger.debug("Rule %s rejected %r: %s", rule.name, m.group(0), e)
            # A malformed version or interval voids the whole field. The unscanned
            # rest of the section stays in leftover so reassemble() still holds.
            return VersionParseResult(
                section=section,
                spans=result.spans,
                leftover="".join(residue) + section[m.start():],
                errors=[FieldError.of(e.kind, m.group(0))],
            )

        result.spans.append(MatchedSpan(rule.name, m.start(), m.end(), m.group(0)))
        pos = m.end()

    result.leftover = "".join(residue)
    unexpected = _SEPARATORS.sub("", result.leftover)
    if unexpected:
        result.errors.append(FieldError.of(INVALID_CONTENT, result.leftover.strip()))

    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def parse_affected_versions(section: str) -> VersionParseResult:
    """
    Parse the "Affected versions" section.

    Parameters
    ----------
    section : str
        Section body produced by the splitter.

    Returns
    -------
    VersionParseResult
        Expanded tokens in appearance order plus any FieldErrors.
        An InvalidVersionInterval or InvalidSemver error empties the token list
        and skips the leftover check; spans and leftover still cover the section.
    """
    return _scan(section or "", GRAMMAR_RULES)


def parse_fixed_versions(section: str) -> VersionParseResult:
    """Parse the "Fixed versions" section: bare versions and keywords only."""
    return _scan(section or "", FIXED_VERSION_RULES)
