from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ghver.releases.model import ReleaseSet

ReleaseErrorKind = Literal[
    "invalid_input",
    "transport",
    "cancelled",
    "commit_not_found",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    # Only set for commit_not_found: whatever was resolved before giving up.
    releases: ReleaseSet | None = None
