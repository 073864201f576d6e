"""
Constants
Centralised storage for template anchors, version keywords and grammar delimiters.
"""

# Section headings of the bug template, in template order.
DEFAULT_SECTION_ANCHORS = [
    "#### 1. Root Cause Analysis (RCA) (optional)",
    "#### 2. Symptom (optional)",
    "#### 3. All Trigger Conditions (optional)",
    "#### 4. Workaround (optional)",
    "#### 5. Affected versions",
    "#### 6. Fixed versions",
]
SECTION_COUNT = 6

# Version fields that must not be empty.
REQUIRED_FIELDS = ("affected_versions", "fixed_versions")

MASTER = "master"
MASTER_ALIASES = frozenset({"master", "unreleased", "unplanned", "unplaned"})

# Interval delimiters: ASCII and fullwidth colon / comma.
INTERVAL_DELIMITERS = (":", "：", ",", "，")

# Characters ignored when checking for leftover content.
LEFTOVER_SEPARATORS = (",", "，")

# Patch 99 marks "no patch release of this minor line will get the fix".
NO_FIX_PATCH = 99
