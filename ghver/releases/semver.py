"""Semantic versions as used for GitHub release tags.

Tags carry a leading "v" (v1.19.2, v1.20.0-rc.1). As in Go module
versions, the shorthands vMAJOR and vMAJOR.MINOR are accepted and mean
vMAJOR.0.0 / vMAJOR.MINOR.0; they cannot carry a pre-release or build
suffix. Ordering follows semver precedence, never string order:

    v1.20.0-rc.1 < v1.20.0 < v1.100.0
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "SemVer",
    "parse",
    "is_valid",
    "prerelease",
    "build",
    "canonical",
    "compare",
]

_NUM = r"0|[1-9]\d*"
_PRE_ID = r"0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*"
_BUILD_ID = r"[0-9A-Za-z-]+"

_SEMVER_RE = re.compile(
    rf"v(?P<major>{_NUM})"
    rf"(?:\.(?P<minor>{_NUM})"
    rf"(?:\.(?P<patch>{_NUM})"
    rf"(?P<prerelease>-(?:{_PRE_ID})(?:\.(?:{_PRE_ID}))*)?"
    rf"(?P<build>\+{_BUILD_ID}(?:\.{_BUILD_ID})*)?"
    r")?)?",
    re.ASCII,
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str = ""  # "-rc.1", leading dash included
    build: str = ""  # "+meta", ignored for precedence


def parse(v: str) -> SemVer | None:
    m = _SEMVER_RE.fullmatch(v)
    if m is None:
        return None
    return SemVer(
        major=int(m.group("major")),
        minor=int(m.group("minor") or 0),
        patch=int(m.group("patch") or 0),
        prerelease=m.group("prerelease") or "",
        build=m.group("build") or "",
    )


def is_valid(v: str) -> bool:
    return parse(v) is not None


def prerelease(v: str) -> str:
    """Pre-release suffix of v including the leading dash ("-beta.2").

    Empty for final releases and for invalid versions.
    """
    parsed = parse(v)
    return parsed.prerelease if parsed is not None else ""


def build(v: str) -> str:
    parsed = parse(v)
    return parsed.build if parsed is not None else ""


def canonical(v: str) -> str:
    """Full vMAJOR.MINOR.PATCH[-PRERELEASE] form, build dropped; "" if invalid."""
    parsed = parse(v)
    if parsed is None:
        return ""
    return f"v{parsed.major}.{parsed.minor}.{parsed.patch}{parsed.prerelease}"


def _cmp(a: int | str, b: int | str) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def _compare_prerelease(x: str, y: str) -> int:
    # Strings include the leading dash; "" is a final release.
    if x == y:
        return 0
    if x == "":
        return 1
    if y == "":
        return -1

    xs = x[1:].split(".")
    ys = y[1:].split(".")
    for dx, dy in zip(xs, ys):
        if dx == dy:
            continue
        x_num = dx.isdigit()
        y_num = dy.isdigit()
        if x_num and y_num:
            return _cmp(int(dx), int(dy))
        # Numeric identifiers have lower precedence than alphanumeric ones.
        if x_num:
            return -1
        if y_num:
            return 1
        return _cmp(dx, dy)
    return _cmp(len(xs), len(ys))


def compare(a: str, b: str) -> int:
    """Compare two versions by semver precedence.

    Returns -1, 0 or 1. An invalid version (including "") sorts below every
    valid one, and two invalid versions compare equal. Build metadata does
    not take part in the comparison.
    """
    pa = parse(a)
    pb = parse(b)
    if pa is None and pb is None:
        return 0
    if pa is None:
        return -1
    if pb is None:
        return 1

    for x, y in ((pa.major, pb.major), (pa.minor, pb.minor), (pa.patch, pb.patch)):
        if x != y:
            return _cmp(x, y)
    return _compare_prerelease(pa.prerelease, pb.prerelease)
