"""
Consistency Validator
=====================
Cross-field checks over a populated ExtractedReport.

Checks (independent, none short-circuits another):
    1. Required fields  - affected_versions / fixed_versions must not be empty
    2. Version gap      - every released fix must have its immediate predecessor
                          (patch - 1) recorded as affected

Only the fixed → affected direction is checked: an affected version with no
corresponding fix is not a gap. `master` and minor-line fixes have no patch
lineage and are exempt. The report is never mutated.
"""
import logging
from typing import Optional

from bug_extractor.core.constants import REQUIRED_FIELDS
from bug_extractor.models.extracted_report import ExtractedReport
from bug_extractor.models.field_error import FieldError, FieldErrorSet
from bug_extractor.utils.error_kinds import FIELD_EMPTY, VERSION_GAP

logger = logging.getLogger(__name__)


def check_required_fields(report: ExtractedReport, errors: FieldErrorSet) -> None:
    for name in REQUIRED_FIELDS:
        if len(getattr(report, name)) == 0:
            errors.add(name, FieldError.of(FIELD_EMPTY))


def find_version_gaps(report: ExtractedReport) -> list[str]:
    """Return the fixed versions whose predecessor is not among the affected versions."""
    affected = set(report.affected_versions)
    gaps: list[str] = []
    for fixed in report.fixed_versions:
        if not fixed.is_release:
            continue
        if fixed.predecessor() not in affected:
            gaps.append(str(fixed))
    return gaps


def check_version_gaps(report: ExtractedReport, errors: FieldErrorSet) -> None:
    for fixed in find_version_gaps(report):
        errors.add("fixed_versions", FieldError.of(VERSION_GAP, fixed))


def validate_report(report: ExtractedReport, errors: Optional[FieldErrorSet] = None) -> FieldErrorSet:
    """
    Run every consistency check and accumulate into a FieldErrorSet.

    Parameters
    ----------
    report : ExtractedReport
        The extracted record. Not modified.
    errors : FieldErrorSet | None
        Existing diagnostics (e.g. parser errors) to append to.

    Returns
    -------
    FieldErrorSet
        `errors` when given, otherwise a new set.
    """
    if errors is None:
        errors = FieldErrorSet()

    check_required_fields(report, errors)
    check_version_gaps(report, errors)

    if errors.has_errors:
        logger.debug("Validation found errors on fields: %s", ", ".join(errors.fields))
    return errors
