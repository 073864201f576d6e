"""
Field Error Model
=================
Pydantic models for per-field validation diagnostics.

Fields:
    kind     - one of ALL_ERROR_KINDS (InvalidContent, VersionGap, ...)
    message  - human-readable description, safe to post back to the report author
    detail   - the offending text or version, empty when not applicable

FieldErrorSet keeps every error per field in the order it was recorded;
independent failures on the same field are never collapsed.
Once attached to an ExtractionResult the set is frozen and add() raises.
"""
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from bug_extractor.utils.error_kinds import ALL_ERROR_KINDS, INVALID_CONTENT, describe


class FieldError(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    message: str = ""
    detail: str = ""

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        if v not in ALL_ERROR_KINDS:
            raise ValueError(f"Unknown error kind: {v}")
        return v

    @classmethod
    def of(cls, kind: str, detail: str = "") -> "FieldError":
        message = describe(kind)
        if detail and kind == INVALID_CONTENT:
            message = f"{message}, got unexpected content: {detail}"
        elif detail:
            message = f"{message}: {detail}"
        return cls(kind=kind, message=message, detail=detail)


class FieldErrorSet(BaseModel):
    errors: Dict[str, List[FieldError]] = {}
    _frozen: bool = PrivateAttr(default=False)

    def freeze(self) -> "FieldErrorSet":
        """Return a copy that rejects further errors."""
        frozen = self.model_copy(deep=True)
        frozen._frozen = True
        return frozen

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def add(self, field: str, error: FieldError) -> None:
        if self._frozen:
            raise TypeError("FieldErrorSet is frozen")
        self.errors.setdefault(field, []).append(error)

    def extend(self, other: "FieldErrorSet") -> None:
        for field, errs in other.errors.items():
            for err in errs:
                self.add(field, err)

    def get(self, field: str) -> List[FieldError]:
        return list(self.errors.get(field, []))

    def kinds(self, field: str) -> List[str]:
        return [e.kind for e in self.errors.get(field, [])]

    @property
    def fields(self) -> List[str]:
        return list(self.errors)

    @property
    def has_errors(self) -> bool:
        return any(self.errors.values())

    def as_dict(self) -> Dict[str, List[dict]]:
        return {field: [e.model_dump() for e in errs] for field, errs in self.errors.items()}
