from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Channel(IntEnum):
    """Release channels; the value is the slot index in a ReleaseSet."""

    STABLE = 0  # final releases: v1.19.2
    LATEST = 1  # rc / beta pre-releases: v1.20.0-rc.1, v1.20.0-beta.2
    EDGE = 2  # alpha pre-releases: v1.21.0-alpha.0

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Release:
    """A version tag and the commit it points to.

    An empty tag means no candidate was found; an empty commit means the
    tag has not been resolved.
    """

    tag: str = ""
    commit: str = ""


@dataclass(frozen=True, slots=True)
class ReleaseSet:
    stable: Release = Release()
    latest: Release = Release()
    edge: Release = Release()

    def __getitem__(self, channel: Channel) -> Release:
        return self.as_tuple()[channel]

    def as_tuple(self) -> tuple[Release, Release, Release]:
        return (self.stable, self.latest, self.edge)

    @classmethod
    def from_tags(cls, stable: str = "", latest: str = "", edge: str = "") -> ReleaseSet:
        return cls(Release(stable), Release(latest), Release(edge))

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            str(channel): {"tag": self[channel].tag, "commit": self[channel].commit}
            for channel in Channel
        }
