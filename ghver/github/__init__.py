"""GitHub REST API access: HTTP transport and bounded page listings."""

from ghver.github.api import (
    Page,
    PaginationAborted,
    TagCommit,
    iter_pages,
    list_releases,
    list_tags,
)
from ghver.github.http import (
    HttpClient,
    HttpError,
    JsonPage,
    MockHttpClient,
    RealHttpClient,
)
from ghver.github.limits import MAX_PAGES, PER_PAGE, SEARCH_LIMIT

__all__ = [
    # API
    "Page",
    "PaginationAborted",
    "TagCommit",
    "iter_pages",
    "list_releases",
    "list_tags",
    # HTTP
    "HttpClient",
    "HttpError",
    "JsonPage",
    "MockHttpClient",
    "RealHttpClient",
    # Limits
    "MAX_PAGES",
    "PER_PAGE",
    "SEARCH_LIMIT",
]
