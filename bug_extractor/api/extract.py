"""
Extraction Endpoints
====================
HTTP surface over the pure extraction core, for callers such as an issue bot
that fetched a comment and wants the structured record back.

Routes:
    POST /template/check  - does the comment follow the bug template?
    POST /extract         - report + per-field errors

The endpoints hold no state and perform no I/O beyond the request itself.
Routes are plain `def`: extraction is CPU-bound, so FastAPI runs it in its threadpool.
"""
import logging
from typing import Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from bug_extractor.core.config import MAX_COMMENT_CHARS
from bug_extractor.models.field_error import FieldError
from bug_extractor.parser.report_extractor import extract_report
from bug_extractor.parser.section_splitter import contains_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Extract"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------
class CommentRequest(BaseModel):
    comment: str
    require_template: bool = True


class TemplateCheckResponse(BaseModel):
    contains_template: bool


class ReportBody(BaseModel):
    root_cause: str
    symptom: str
    trigger_conditions: str
    workaround: str
    affected_versions: List[str]
    fixed_versions: List[str]


class ExtractResponse(BaseModel):
    report: ReportBody
    errors: Dict[str, List[FieldError]]
    is_valid: bool


def _check_size(comment: str) -> None:
    if len(comment) > MAX_COMMENT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Comment exceeds {MAX_COMMENT_CHARS} characters",
        )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@router.post("/template/check", response_model=TemplateCheckResponse)
def check_template(req: CommentRequest):
    _check_size(req.comment)
    return TemplateCheckResponse(contains_template=contains_template(req.comment))


@router.post("/extract", response_model=ExtractResponse)
def extract(req: CommentRequest):
    _check_size(req.comment)

    if req.require_template and not contains_template(req.comment):
        raise HTTPException(status_code=422, detail="Comment does not follow the bug template")

    result = extract_report(req.comment)
    report = result.report

    if not result.is_valid:
        logger.info("Report has errors on fields: %s", ", ".join(result.errors.fields))

    return ExtractResponse(
        report=ReportBody(
            root_cause=report.root_cause,
            symptom=report.symptom,
            trigger_conditions=report.trigger_conditions,
            workaround=report.workaround,
            affected_versions=report.version_strings("affected_versions"),
            fixed_versions=report.version_strings("fixed_versions"),
        ),
        errors=result.errors.errors,
        is_valid=result.is_valid,
    )
