"""
Extracted Report Model
======================
Pydantic model for the structured bug information extracted from a template comment.
This is the contract between the extraction layer and all downstream consumers
(storage sinks, issue bots, dashboards).

Fields:
    root_cause          - free text under "Root Cause Analysis"
    symptom             - free text under "Symptom"
    trigger_conditions  - free text under "All Trigger Conditions"
    workaround          - free text under "Workaround"
    affected_versions   - VersionTokens in appearance order, duplicates kept
    fixed_versions      - VersionTokens in appearance order, duplicates kept
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .field_error import FieldErrorSet
from .version_token import VersionToken


class ExtractedReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    root_cause: str = ""
    symptom: str = ""
    trigger_conditions: str = ""
    workaround: str = ""
    affected_versions: Tuple[VersionToken, ...] = ()
    fixed_versions: Tuple[VersionToken, ...] = ()

    def version_strings(self, field: str) -> list[str]:
        return [str(v) for v in getattr(self, field)]


class ExtractionResult(BaseModel):
    """The report and its diagnostics, always handed out together."""
    model_config = ConfigDict(frozen=True)

    report: ExtractedReport
    errors: FieldErrorSet

    @field_validator("errors")
    @classmethod
    def freeze_errors(cls, v: FieldErrorSet) -> FieldErrorSet:
        return v.freeze()

    @property
    def is_valid(self) -> bool:
        return not self.errors.has_errors
