"""
Report Extractor
================
Converts a bug-template issue comment into an ExtractedReport plus its FieldErrorSet.

Pipeline:
    1. Strip <!-- ... --> markup
    2. Split into the six template sections
    3. Parse affected versions (intervals + bare tokens)
    4. Parse fixed versions (bare tokens only)
    5. Validate required fields and version gaps

Contract:
    - DETERMINISTIC and side-effect free: no I/O, no shared state.
    - Tolerant: a per-field error is recorded and extraction continues, so the
      caller always receives the best-effort report with the complete error set.
"""
import logging
from typing import Optional

from bug_extractor.models.extracted_report import ExtractedReport, ExtractionResult
from bug_extractor.models.field_error import FieldErrorSet
from bug_extractor.parser.comment_normalizer import strip_comment_markup
from bug_extractor.parser.consistency_validator import validate_report
from bug_extractor.parser.section_splitter import split_sections
from bug_extractor.parser.version_grammar import parse_affected_versions, parse_fixed_versions

logger = logging.getLogger(__name__)


def extract_report(comment: str, anchors: Optional[list[str]] = None) -> ExtractionResult:
    """
    Extract structured bug information from a template comment.

    Parameters
    ----------
    comment : str
        Raw comment body. The caller is expected to have checked it with
        `contains_template` first; this function does not re-check.
    anchors : list[str] | None
        Six section headings; defaults to the configured template anchors.

    Returns
    -------
    ExtractionResult
        The report and the per-field errors, always together.

    Raises
    ------
    TemplateConfigError
        Only for an invalid `anchors` list; malformed comment text never raises.
    """
    sections = split_sections(strip_comment_markup(comment), anchors)
    errors = FieldErrorSet()

    affected = parse_affected_versions(sections.affected_versions)
    for err in affected.errors:
        errors.add("affected_versions", err)

    fixed = parse_fixed_versions(sections.fixed_versions)
    for err in fixed.errors:
        errors.add("fixed_versions", err)

    report = ExtractedReport(
        root_cause=sections.root_cause,
        symptom=sections.symptom,
        trigger_conditions=sections.trigger_conditions,
        workaround=sections.workaround,
        affected_versions=tuple(affected.tokens),
        fixed_versions=tuple(fixed.tokens),
    )
    validate_report(report, errors)

    logger.info(
        "Extracted report: %d affected, %d fixed version(s), %d field(s) with errors",
        len(report.affected_versions),
        len(report.fixed_versions),
        len(errors.fields),
    )
    return ExtractionResult(report=report, errors=errors)
