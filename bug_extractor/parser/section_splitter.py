"""
Section Splitter
================
Carves a normalized template comment into its six ordered sections.

Strategy:
    - Forward-only scan over the anchor list, one cursor into the text
    - Section i starts after the first occurrence of anchor i at or past the cursor
    - It ends at the first occurrence of anchor i+1 after it, or at end of input
    - A missing anchor yields an empty section and leaves the cursor where it was
    - Never backtracks: an anchor that appears out of order is ordinary body text

Body text is trimmed line by line and blank lines are dropped, so inconsistent
blank-line padding never changes what downstream parsers see.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from bug_extractor.core.config import SECTION_ANCHORS, validate_anchors

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data Structure
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SectionTexts:
    """The six section bodies, in template order."""
    root_cause: str = ""
    symptom: str = ""
    trigger_conditions: str = ""
    workaround: str = ""
    affected_versions: str = ""
    fixed_versions: str = ""


def _strip_blank_lines(body: str) -> str:
    lines = [line.strip() for line in body.split("\n")]
    return "\n".join(line for line in lines if line)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------
class SectionScanner:
    """Walks the anchor boundaries of one comment, left to right."""

    def __init__(self, text: str, anchors: list[str]):
        self.text = text or ""
        self.anchors = anchors
        self.cursor = 0

    def next_section(self, index: int) -> str:
        anchor = self.anchors[index]
        start = self.text.find(anchor, self.cursor)
        if start == -1:
            logger.debug("Anchor %d not found: %r", index + 1, anchor)
            return ""

        body_start = start + len(anchor)
        end = -1
        if index + 1 < len(self.anchors):
            end = self.text.find(self.anchors[index + 1], body_start)
        if end == -1:
            end = len(self.text)

        self.cursor = end
        return _strip_blank_lines(self.text[body_start:end])

    def sections(self) -> list[str]:
        return [self.next_section(i) for i in range(len(self.anchors))]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def resolve_anchors(anchors: Optional[list[str]] = None) -> list[str]:
    """Configured anchors when None, otherwise the validated caller list."""
    if anchors is None:
        return list(SECTION_ANCHORS)
    return validate_anchors(anchors)


def split_sections(text: str, anchors: Optional[list[str]] = None) -> SectionTexts:
    """
    Split a normalized comment into its six sections.

    Parameters
    ----------
    text : str
        Comment body with comment markup already removed.
    anchors : list[str] | None
        Six section headings; defaults to the configured template anchors.

    Returns
    -------
    SectionTexts
        Section bodies; sections whose anchor is missing are empty.

    Raises
    ------
    TemplateConfigError
        If `anchors` is not a list of six distinct non-blank strings.
    """
    scanner = SectionScanner(text, resolve_anchors(anchors))
    return SectionTexts(*scanner.sections())


def contains_template(comment: str, anchors: Optional[list[str]] = None) -> bool:
    """True when all six anchors occur in `comment`, in template order."""
    remaining = comment or ""
    for anchor in resolve_anchors(anchors):
        idx = remaining.find(anchor)
        if idx == -1:
            return False
        remaining = remaining[idx + len(anchor):]
    return True
