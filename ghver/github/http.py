"""HTTP client abstraction for the GitHub REST API.

This module provides:
- HttpClient: Protocol for paginated JSON GETs (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import re
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ghver.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
    "JsonPage",
    "parse_next_page",
]

_LINK_RE = re.compile(r'<([^>]*)>\s*;\s*rel="([^"]*)"')


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@dataclass(frozen=True, slots=True)
class JsonPage:
    """One page of a paginated JSON listing.

    Attributes:
        data: Decoded JSON body
        next_page: Page number of the next page, 0 if this is the last one
    """

    data: object
    next_page: int = 0


def parse_next_page(link_header: str | None) -> int:
    """Extract the rel="next" page number from a GitHub Link header.

    Returns 0 when there is no next link or it carries no page parameter.
    """
    if not link_header:
        return 0
    for url, rel in _LINK_RE.findall(link_header):
        if rel != "next":
            continue
        query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)
        values = query.get("page")
        if values and values[0].isdigit():
            return int(values[0])
    return 0


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    Lets tests inject canned pages instead of hitting api.github.com.
    """

    def get_page(self, url: str, timeout: float | None = None) -> Result[JsonPage, HttpError]:
        """Fetch URL, decode JSON and read the pagination cursor.

        Args:
            url: URL to fetch
            timeout: Per-request timeout override in seconds

        Returns:
            Ok with JsonPage, or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - GitHub API headers (Accept, API version, optional bearer token)
    - JSON decoding and Link-header pagination
    - Timeout handling
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "ghver",
        token: str | None = None,
    ) -> None:
        """Initialize HTTP client.

        Args:
            timeout: Default request timeout in seconds
            user_agent: User-Agent header value (GitHub rejects requests without one)
            token: Optional API token sent as a bearer token
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def get_page(self, url: str, timeout: float | None = None) -> Result[JsonPage, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers())
            with urllib.request.urlopen(
                req,
                timeout=timeout if timeout is not None else self.timeout,
                context=self._ssl_context,
            ) as response:
                body = response.read()
                link = response.headers.get("Link")
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except http.client.HTTPException as e:
            return Err(HttpError(url=url, status=0, message=f"{type(e).__name__}: {e}"))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

        return Ok(JsonPage(data=data, next_page=parse_next_page(link)))


class MockHttpClient:
    """Mock HTTP client for testing.

    Serves predefined pages for specific URLs. Unknown URLs answer 404.

    Usage:
        client = MockHttpClient()
        client.set_page(url, [{"tag_name": "v1.0.0"}], next_page=2)
        result = client.get_page(url)
    """

    def __init__(self) -> None:
        self._pages: dict[str, JsonPage | HttpError] = {}
        self.calls: list[str] = []

    def set_page(self, url: str, data: object, next_page: int = 0) -> None:
        """Set JSON body and next page cursor for URL."""
        self._pages[url] = JsonPage(data=data, next_page=next_page)

    def set_error(self, url: str, error: HttpError) -> None:
        self._pages[url] = error

    def get_page(self, url: str, timeout: float | None = None) -> Result[JsonPage, HttpError]:
        self.calls.append(url)

        if url not in self._pages:
            return Err(HttpError(url=url, status=404, message="Not found (mock)"))

        response = self._pages[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
