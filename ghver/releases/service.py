"""Resolve the stable / latest / edge releases of a GitHub repository.

Two passes over two listings:
1. /releases: classify every tag and keep the greatest per channel
2. /tags: look up the commit SHA of each winning tag

Both listings are capped at the page budget in ghver.github.limits.
"""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import TYPE_CHECKING

from ghver.core.config import DEFAULT_API_URL
from ghver.core.result import Err, Ok, Result
from ghver.github.api import (
    Page,
    PaginationAborted,
    TagCommit,
    iter_pages,
    list_releases,
    list_tags,
)
from ghver.releases import semver
from ghver.releases.classify import ReleaseReducer
from ghver.releases.errors import ReleaseError
from ghver.releases.model import ReleaseSet
from ghver.releases.resolve import resolve_commits

if TYPE_CHECKING:
    from ghver.core.cancel import CancelToken
    from ghver.github.http import HttpClient, HttpError

__all__ = ["get_releases", "get_stable_version", "parse_repo"]

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Za-z0-9._-]+")


def parse_repo(slug: str) -> Result[tuple[str, str], ReleaseError]:
    """Split "owner/repo" into its two parts."""
    owner, sep, repo = slug.strip().partition("/")
    if not sep or not _NAME_RE.fullmatch(owner) or not _NAME_RE.fullmatch(repo):
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid repository: {slug!r}",
                hint="expected owner/repo, e.g. kubernetes/minikube",
            )
        )
    return Ok((owner, repo))


def _aborted(e: PaginationAborted, what: str) -> ReleaseError:
    if e.cancel_reason is not None:
        return ReleaseError(kind="cancelled", message=f"{what}: {e.cancel_reason}")
    return ReleaseError(kind="transport", message=f"{what} failed", hint=str(e.http_error))


def get_releases(
    http: HttpClient,
    owner: str,
    repo: str,
    *,
    cancel: CancelToken | None = None,
    api_url: str = DEFAULT_API_URL,
) -> Result[ReleaseSet, ReleaseError]:
    """Greatest stable, rc/beta and alpha releases of owner/repo, with commits.

    latest is never lower than stable and edge never lower than latest, so a
    repo with only final releases gets the same tag in all three.

    Returns:
        Ok with the resolved ReleaseSet. Err(transport) or Err(cancelled) if
        a page fetch fails or the token fires; no partial result then.
        Err(commit_not_found) with the partial set if a winning tag is not
        found in the tag listing.
    """
    checked = parse_repo(f"{owner}/{repo}")
    if isinstance(checked, Err):
        return checked

    reducer = ReleaseReducer()
    try:
        reducer.add_all(
            iter_pages(partial(_fetch_release_tags, http, owner, repo, api_url), cancel)
        )
    except PaginationAborted as e:
        return Err(_aborted(e, f"listing releases of {owner}/{repo}"))

    releases = reducer.result
    logger.debug(
        "%s/%s: stable=%s latest=%s edge=%s",
        owner,
        repo,
        releases.stable.tag or "-",
        releases.latest.tag or "-",
        releases.edge.tag or "-",
    )

    try:
        return resolve_commits(
            releases,
            iter_pages(partial(_fetch_tag_commits, http, owner, repo, api_url), cancel),
        )
    except PaginationAborted as e:
        return Err(_aborted(e, f"listing tags of {owner}/{repo}"))


def get_stable_version(
    http: HttpClient,
    owner: str,
    repo: str,
    *,
    cancel: CancelToken | None = None,
    api_url: str = DEFAULT_API_URL,
) -> Result[str, ReleaseError]:
    """Stable release tag of owner/repo, or "" if it has none.

    A commit lookup failure is only reported when the stable tag itself is
    valid; otherwise the answer is "" with no error. Transport and
    cancellation errors are always reported.
    """
    result = get_releases(http, owner, repo, cancel=cancel, api_url=api_url)
    if isinstance(result, Ok):
        stable = result.value.stable.tag
        return Ok(stable if semver.is_valid(stable) else "")

    error = result.error
    if error.kind == "commit_not_found":
        stable = error.releases.stable.tag if error.releases is not None else ""
        if not semver.is_valid(stable):
            return Ok("")
    return Err(error)


def _fetch_release_tags(
    http: HttpClient,
    owner: str,
    repo: str,
    api_url: str,
    page: int,
    timeout: float | None,
) -> Result[Page[str], HttpError]:
    return list_releases(http, owner, repo, page, api_url=api_url, timeout=timeout)


def _fetch_tag_commits(
    http: HttpClient,
    owner: str,
    repo: str,
    api_url: str,
    page: int,
    timeout: float | None,
) -> Result[Page[TagCommit], HttpError]:
    return list_tags(http, owner, repo, page, api_url=api_url, timeout=timeout)
