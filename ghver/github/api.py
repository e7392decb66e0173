"""GitHub listing endpoints and the bounded pager.

This module provides:
- list_releases / list_tags: fetch a single page of a listing
- iter_pages: walk a listing page by page within the page budget

All fetchers take an HttpClient parameter for testability.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ghver.core.config import DEFAULT_API_URL
from ghver.core.result import Err, Ok, Result
from ghver.core.structured import as_obj_list, as_str_dict, get_exact_str, get_table
from ghver.github.http import HttpError
from ghver.github.limits import MAX_PAGES, PER_PAGE

if TYPE_CHECKING:
    from ghver.core.cancel import CancelToken
    from ghver.github.http import HttpClient

__all__ = [
    "Page",
    "PaginationAborted",
    "TagCommit",
    "iter_pages",
    "list_releases",
    "list_tags",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TagCommit:
    """A git tag and the commit SHA it points to."""

    name: str
    sha: str


@dataclass(frozen=True, slots=True)
class Page[T]:
    items: tuple[T, ...]
    next_page: int = 0


class PaginationAborted(Exception):
    """Raised out of iter_pages when a fetch fails or the token is cancelled.

    Exactly one of http_error / cancel_reason is set.
    """

    def __init__(
        self,
        *,
        http_error: HttpError | None = None,
        cancel_reason: str | None = None,
    ) -> None:
        self.http_error = http_error
        self.cancel_reason = cancel_reason
        super().__init__(str(http_error) if http_error is not None else cancel_reason)

    @property
    def cancelled(self) -> bool:
        return self.cancel_reason is not None


def _listing_url(api_url: str, owner: str, repo: str, what: str, page: int, per_page: int) -> str:
    return f"{api_url}/repos/{owner}/{repo}/{what}?per_page={per_page}&page={page}"


def _fetch_list(
    http: HttpClient,
    url: str,
    timeout: float | None,
) -> Result[tuple[list[object], int], HttpError]:
    result = http.get_page(url, timeout=timeout)
    if isinstance(result, Err):
        return result

    raw = as_obj_list(result.value.data)
    if raw is None:
        return Err(HttpError(url=url, status=0, message="Expected JSON array"))
    return Ok((raw, result.value.next_page))


def list_releases(
    http: HttpClient,
    owner: str,
    repo: str,
    page: int = 1,
    per_page: int = PER_PAGE,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float | None = None,
) -> Result[Page[str], HttpError]:
    """Fetch one page of release tag names.

    Args:
        http: HTTP client to use
        owner: Repository owner (e.g., "kubernetes")
        repo: Repository name (e.g., "minikube")
        page: 1-based page number
        per_page: Page size
        api_url: API root URL
        timeout: Request timeout override

    Returns:
        Ok with the page of tag names, or Err with HttpError.
        Entries without a tag_name are dropped.
    """
    url = _listing_url(api_url, owner, repo, "releases", page, per_page)
    result = _fetch_list(http, url, timeout)
    if isinstance(result, Err):
        return result

    raw, next_page = result.value
    tags: list[str] = []
    for item in raw:
        d = as_str_dict(item)
        if d is None:
            continue
        tag = get_exact_str(d, "tag_name")
        if tag is None:
            continue
        tags.append(tag)
    return Ok(Page(items=tuple(tags), next_page=next_page))


def list_tags(
    http: HttpClient,
    owner: str,
    repo: str,
    page: int = 1,
    per_page: int = PER_PAGE,
    *,
    api_url: str = DEFAULT_API_URL,
    timeout: float | None = None,
) -> Result[Page[TagCommit], HttpError]:
    """Fetch one page of tags with their commit SHAs.

    Same arguments as list_releases. Entries missing name or commit.sha
    are dropped.
    """
    url = _listing_url(api_url, owner, repo, "tags", page, per_page)
    result = _fetch_list(http, url, timeout)
    if isinstance(result, Err):
        return result

    raw, next_page = result.value
    tags: list[TagCommit] = []
    for item in raw:
        d = as_str_dict(item)
        if d is None:
            continue
        name = get_exact_str(d, "name")
        commit = get_table(d, "commit")
        if name is None or commit is None:
            continue
        sha = get_exact_str(commit, "sha")
        if sha is None:
            continue
        tags.append(TagCommit(name=name, sha=sha))
    return Ok(Page(items=tuple(tags), next_page=next_page))


type PageFetcher[T] = Callable[[int, float | None], Result[Page[T], HttpError]]


def iter_pages[T](fetch: PageFetcher[T], cancel: CancelToken | None = None) -> Iterator[T]:
    """Yield items from a paginated listing, at most MAX_PAGES pages.

    fetch(page, timeout) is called lazily: a consumer that stops early
    causes no further requests. The cancel token is checked before and
    after every fetch; a page that arrives after cancellation is dropped.

    Raises:
        PaginationAborted: On a fetch error or cancellation.
    """
    page = 1
    for fetched in range(MAX_PAGES):
        timeout: float | None = None
        if cancel is not None:
            reason = cancel.reason()
            if reason is not None:
                raise PaginationAborted(cancel_reason=reason)
            timeout = cancel.remaining

        result = fetch(page, timeout)

        if cancel is not None:
            # A request cut short by the deadline reports as cancellation.
            reason = cancel.reason()
            if reason is not None:
                raise PaginationAborted(cancel_reason=reason)
        if isinstance(result, Err):
            raise PaginationAborted(http_error=result.error)

        logger.debug("fetched page %d (%d items)", page, len(result.value.items))
        yield from result.value.items

        if result.value.next_page == 0:
            return
        if fetched + 1 == MAX_PAGES:
            logger.debug("page budget of %d pages exhausted", MAX_PAGES)
            return
        page = result.value.next_page
