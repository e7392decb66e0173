"""Release classification and per-channel reduction.

Tags are folded one at a time into three running winners:

- stable: greatest tag without a pre-release suffix
- latest: greatest -rc* / -beta* tag, raised to stable when lower
- edge:   greatest tag containing -alpha, raised to latest when lower

The raise happens after every tag, so the result does not depend on the
order the listing returns tags in. Tags that are not semantic versions are
skipped without a trace: repositories routinely carry unrelated tags.
"""

from __future__ import annotations

from collections.abc import Iterable

from ghver.releases import semver
from ghver.releases.model import Channel, ReleaseSet

__all__ = ["ReleaseReducer", "classify", "classify_and_reduce"]


def classify(tag: str) -> Channel | None:
    """Channel a tag belongs to, or None if invalid or unrecognised."""
    if not semver.is_valid(tag):
        return None

    pre = semver.prerelease(tag)
    if pre == "":
        return Channel.STABLE
    if pre.startswith("-rc") or pre.startswith("-beta"):
        return Channel.LATEST
    if "-alpha" in pre:
        return Channel.EDGE
    return None


class ReleaseReducer:
    """Incremental form of classify_and_reduce."""

    def __init__(self) -> None:
        self._tags = ["", "", ""]

    def add(self, tag: str) -> None:
        channel = classify(tag)
        if channel is not None and semver.compare(tag, self._tags[channel]) > 0:
            self._tags[channel] = tag

        # latest >= stable, then edge >= latest
        if semver.compare(self._tags[Channel.LATEST], self._tags[Channel.STABLE]) < 0:
            self._tags[Channel.LATEST] = self._tags[Channel.STABLE]
        if semver.compare(self._tags[Channel.EDGE], self._tags[Channel.LATEST]) < 0:
            self._tags[Channel.EDGE] = self._tags[Channel.LATEST]

    def add_all(self, tags: Iterable[str]) -> None:
        for tag in tags:
            self.add(tag)

    @property
    def result(self) -> ReleaseSet:
        stable, latest, edge = self._tags
        return ReleaseSet.from_tags(stable, latest, edge)


def classify_and_reduce(tags: Iterable[str]) -> ReleaseSet:
    """Pick the stable/latest/edge tags out of an unordered tag stream.

    Commits in the returned set are empty.
    """
    reducer = ReleaseReducer()
    reducer.add_all(tags)
    return reducer.result
