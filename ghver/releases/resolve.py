from __future__ import annotations

import logging
from collections.abc import Iterable

from ghver.core.result import Err, Ok, Result
from ghver.github.api import TagCommit
from ghver.releases.errors import ReleaseError
from ghver.releases.model import Channel, Release, ReleaseSet

__all__ = ["resolve_commits"]

logger = logging.getLogger(__name__)


def resolve_commits(
    releases: ReleaseSet,
    tag_commits: Iterable[TagCommit],
) -> Result[ReleaseSet, ReleaseError]:
    """Fill in the commit of every non-empty tag in releases.

    Several channels may share one tag; it is looked up once and the commit
    is written to each of them. tag_commits is consumed only until every
    tag is resolved.

    Returns:
        Ok with the resolved set, or Err(commit_not_found) carrying the
        partially resolved set when tag_commits runs out first.
    """
    slots: list[Release] = list(releases.as_tuple())

    outstanding: dict[str, list[Channel]] = {}
    for channel in Channel:
        tag = slots[channel].tag
        if tag:
            outstanding.setdefault(tag, []).append(channel)

    if not outstanding:
        return Ok(releases)

    for tc in tag_commits:
        channels = outstanding.pop(tc.name, None)
        if channels is None:
            continue
        logger.debug("tag %s -> %s (%s)", tc.name, tc.sha, ", ".join(map(str, channels)))
        for channel in channels:
            slots[channel] = Release(tag=tc.name, commit=tc.sha)
        if not outstanding:
            return Ok(ReleaseSet(*slots))

    missing = sorted(outstanding)
    return Err(
        ReleaseError(
            kind="commit_not_found",
            message="wasn't able to find commit for releases",
            hint=", ".join(missing),
            releases=ReleaseSet(*slots),
        )
    )
