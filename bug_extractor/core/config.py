"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    TEMPLATE_CONFIG_PATH - Optional YAML file overriding the six section anchors
    LOG_LEVEL            - Root log level (default: INFO)
    LOG_DIR              - Directory for the daily log file (default: logs)
    MAX_COMMENT_CHARS    - Largest comment body accepted over HTTP (default: 65536)
    MAX_INTERVAL_PATCHES - Most patches one version interval may expand to (default: 1000)

Template Anchors:
    The bug template is carved into sections by six literal headings. They are
    configuration, not code, so the template can evolve without a release:

        anchors:
          - "#### 1. Root Cause Analysis (RCA) (optional)"
          - ...
          - "#### 6. Fixed versions"

    The list is validated when it is loaded. A malformed list (wrong length,
    blank or duplicated entries) raises TemplateConfigError instead of letting
    every section silently collapse into the remainder text.
"""
import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from bug_extractor.core.constants import DEFAULT_SECTION_ANCHORS, SECTION_COUNT

load_dotenv()

TEMPLATE_CONFIG_PATH = os.getenv("TEMPLATE_CONFIG_PATH")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
MAX_COMMENT_CHARS = int(os.getenv("MAX_COMMENT_CHARS", 65536))
MAX_INTERVAL_PATCHES = int(os.getenv("MAX_INTERVAL_PATCHES", 1000))


class TemplateConfigError(ValueError):
    """Raised when the section anchor configuration is unusable."""


class TemplateConfig(BaseModel):
    anchors: List[str]

    @field_validator("anchors")
    @classmethod
    def validate_anchors(cls, v: List[str]) -> List[str]:
        if len(v) != SECTION_COUNT:
            raise ValueError(f"expected {SECTION_COUNT} section anchors, got {len(v)}")
        if any(not a.strip() for a in v):
            raise ValueError("section anchors must not be blank")
        if len(set(v)) != len(v):
            raise ValueError("section anchors must be distinct")
        return v


def validate_anchors(anchors: List[str]) -> List[str]:
    """Validate a caller-supplied anchor list, raising TemplateConfigError."""
    try:
        return TemplateConfig(anchors=list(anchors)).anchors
    except (ValidationError, TypeError) as e:
        raise TemplateConfigError(f"Invalid section anchors: {e}") from e


def load_template_config(path: Optional[str] = None) -> TemplateConfig:
    """
    Load the section anchor configuration.

    Parameters
    ----------
    path : str | None
        YAML file with a top-level `anchors` list. None → built-in defaults.

    Returns
    -------
    TemplateConfig
        Validated configuration.

    Raises
    ------
    TemplateConfigError
        If the file is missing, is not valid YAML, or holds an invalid anchor list.
    """
    if not path:
        return TemplateConfig(anchors=list(DEFAULT_SECTION_ANCHORS))

    cfg_path = Path(path)
    if not cfg_path.is_file():
        raise TemplateConfigError(f"Template config not found: {cfg_path}")

    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise TemplateConfigError(f"Failed to parse YAML {cfg_path}: {e}") from e

    if not isinstance(data, dict) or "anchors" not in data:
        raise TemplateConfigError(f"Template config {cfg_path} has no 'anchors' list")

    try:
        return TemplateConfig(anchors=data["anchors"])
    except ValidationError as e:
        raise TemplateConfigError(f"Invalid section anchors in {cfg_path}: {e}") from e


# Anchors used when a caller does not pass its own list.
SECTION_ANCHORS: List[str] = load_template_config(TEMPLATE_CONFIG_PATH).anchors
