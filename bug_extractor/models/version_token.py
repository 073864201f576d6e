"""
Version Token Model
===================
Pydantic model for a single product version named in a bug report, plus the
closed patch interval used by the affected-versions grammar.

Token kinds:
    release     - concrete major.minor.patch (e.g. 4.0.1)
    master      - unreleased code line; absorbs "unreleased", "unplanned", "unplaned"
    minor_line  - synthetic bucket "major.minor" produced by a [x.y.a:x.y.99] interval,
                  meaning no patch release of that minor line will receive the fix

Tokens are frozen: equality and hashing are structural.
"""
from dataclasses import dataclass
from typing import Literal, Optional

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict

from bug_extractor.core.config import MAX_INTERVAL_PATCHES
from bug_extractor.core.constants import MASTER, MASTER_ALIASES, NO_FIX_PATCH
from bug_extractor.utils.error_kinds import INVALID_SEMVER, INVALID_VERSION_INTERVAL


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class VersionModelError(ValueError):
    """Base class for version errors; `kind` is the matching error-kind constant."""
    kind = ""

    def __init__(self, message: str, detail: str = ""):
        super().__init__(message)
        self.detail = detail


class InvalidSemverError(VersionModelError):
    kind = INVALID_SEMVER


class InvalidVersionIntervalError(VersionModelError):
    kind = INVALID_VERSION_INTERVAL


# ---------------------------------------------------------------------------
# Version Token
# ---------------------------------------------------------------------------
class VersionToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["release", "master", "minor_line"]
    major: Optional[int] = None
    minor: Optional[int] = None
    patch: Optional[int] = None

    @classmethod
    def release(cls, major: int, minor: int, patch: int) -> "VersionToken":
        return cls(kind="release", major=major, minor=minor, patch=patch)

    @classmethod
    def master(cls) -> "VersionToken":
        return cls(kind="master")

    @classmethod
    def minor_line(cls, major: int, minor: int) -> "VersionToken":
        return cls(kind="minor_line", major=major, minor=minor)

    @classmethod
    def parse(cls, text: str) -> "VersionToken":
        """
        Parse a keyword or a `major.minor.patch` triple.

        Parameters
        ----------
        text : str
            Raw token, e.g. "v4.0.1", "4.0.1", "master", "unplanned".

        Returns
        -------
        VersionToken
            Keywords normalize to master; triples become release tokens.

        Raises
        ------
        InvalidSemverError
            If the text is neither a known keyword nor a strict triple.
        """
        raw = (text or "").strip()
        if raw in MASTER_ALIASES:
            return cls.master()
        return cls.parse_release(raw)

    @classmethod
    def parse_release(cls, text: str) -> "VersionToken":
        """Parse a strict three-component release, rejecting leading zeros."""
        raw = (text or "").strip()
        if raw.startswith("v"):
            raw = raw[1:]

        parts = raw.split(".")
        if len(parts) != 3 or any(not (p.isascii() and p.isdigit()) or (len(p) > 1 and p[0] == "0") for p in parts):
            raise InvalidSemverError(f"not a major.minor.patch version: {text!r}", detail=text)

        try:
            version = Version(raw)
        except InvalidVersion as e:
            raise InvalidSemverError(f"not a major.minor.patch version: {text!r}", detail=text) from e

        if len(version.release) != 3 or version.epoch or version.is_prerelease or version.is_postrelease:
            raise InvalidSemverError(f"not a major.minor.patch version: {text!r}", detail=text)

        return cls.release(*version.release)

    @property
    def is_release(self) -> bool:
        return self.kind == "release"

    def predecessor(self) -> Optional["VersionToken"]:
        """The release immediately before this one, or None when there is no patch lineage."""
        if not self.is_release or self.patch == 0:
            return None
        return VersionToken.release(self.major, self.minor, self.patch - 1)

    def __str__(self) -> str:
        if self.kind == "master":
            return MASTER
        if self.kind == "minor_line":
            return f"{self.major}.{self.minor}"
        return f"{self.major}.{self.minor}.{self.patch}"


# ---------------------------------------------------------------------------
# Version Interval
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class VersionInterval:
    """
    Closed patch range within one minor line. Invalid bounds are rejected on construction,
    and so is a span wider than MAX_INTERVAL_PATCHES (never clamped).
    """
    start: VersionToken
    end: VersionToken

    def __post_init__(self):
        s, e = self.start, self.end
        if not (s.is_release and e.is_release):
            raise InvalidVersionIntervalError(
                f"interval bounds must be releases: [{s}:{e}]", detail=f"[{s}:{e}]"
            )
        if s.major != e.major or s.minor != e.minor or s.patch > e.patch:
            raise InvalidVersionIntervalError(
                f"interval bounds must share major.minor and be ascending: [{s}:{e}]",
                detail=f"[{s}:{e}]",
            )
        if e.patch != NO_FIX_PATCH and e.patch - s.patch + 1 > MAX_INTERVAL_PATCHES:
            raise InvalidVersionIntervalError(
                f"interval spans more than {MAX_INTERVAL_PATCHES} patches: [{s}:{e}]",
                detail=f"[{s}:{e}]",
            )

    @classmethod
    def up_to(cls, end: VersionToken) -> "VersionInterval":
        """Half-open form `[:end]`, starting at `major.minor.0` of `end`."""
        if not end.is_release:
            raise InvalidVersionIntervalError(f"interval end must be a release: {end}", detail=str(end))
        return cls(VersionToken.release(end.major, end.minor, 0), end)

    def expand(self) -> list[VersionToken]:
        """
        Expand into concrete tokens.

        End patch 99 collapses to a single minor_line token; otherwise every
        patch from start to end inclusive, ascending.
        """
        if self.end.patch == NO_FIX_PATCH:
            return [VersionToken.minor_line(self.start.major, self.start.minor)]
        return [
            VersionToken.release(self.start.major, self.start.minor, patch)
            for patch in range(self.start.patch, self.end.patch + 1)
        ]
