"""
Error Kinds
===========
Standardised constants for why a report field failed validation.

Used by FieldError.kind so that callers (bots commenting back on an issue,
dashboards, storage sinks) get clean, machine-readable failure reasons.
"""


# ---------------------------------------------------------------------------
# Error Kind Constants
# ---------------------------------------------------------------------------
INVALID_VERSION_INTERVAL = "InvalidVersionInterval"
INVALID_SEMVER = "InvalidSemver"
INVALID_CONTENT = "InvalidContent"
VERSION_GAP = "VersionGap"
FIELD_EMPTY = "FieldEmpty"

# All valid kinds (for validation)
ALL_ERROR_KINDS = frozenset({
    INVALID_VERSION_INTERVAL,
    INVALID_SEMVER,
    INVALID_CONTENT,
    VERSION_GAP,
    FIELD_EMPTY,
})


# ---------------------------------------------------------------------------
# Human-readable descriptions
# ---------------------------------------------------------------------------
_DESCRIPTIONS = {
    INVALID_VERSION_INTERVAL: "invalid version interval",
    INVALID_SEMVER: "invalid semver",
    INVALID_CONTENT: "invalid content",
    VERSION_GAP: "missing some versions between affected-version & fixed-version",
    FIELD_EMPTY: "field is empty",
}


def describe(kind: str) -> str:
    """
    Map an error kind to its human-readable description.

    Parameters
    ----------
    kind : str
        One of the ALL_ERROR_KINDS constants.

    Returns
    -------
    str
        Description text. Unknown kinds are returned unchanged.
    """
    return _DESCRIPTIONS.get(kind, kind)
