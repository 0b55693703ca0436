"""
HTTP Request Builder

Fluent, step-by-step construction of an immutable request description.
Nothing is ever sent: `to_requests()` only produces an unsent
`requests.Request` for callers that want to prepare or inspect it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional
from urllib.parse import urlencode, urlparse

import requests

from ..errors import InvalidArgumentError

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})
DEFAULT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class HttpRequest:
    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    follow_redirects: bool = True

    @property
    def full_url(self) -> str:
        if not self.query:
            return self.url
        return f"{self.url}?{urlencode(dict(self.query))}"

    def render(self) -> str:
        lines = [
            f"{self.method} {self.full_url}",
            f"Timeout: {self.timeout_ms}ms",
            f"Follow Redirects: {self.follow_redirects}",
        ]
        if self.headers:
            lines.append("Headers:")
            lines.extend(f"  {key}: {value}" for key, value in self.headers.items())
        if self.body:
            lines.append(f"Body: {self.body}")
        return "\n".join(lines)

    def to_requests(self) -> requests.Request:
        return requests.Request(
            method=self.method,
            url=self.url,
            headers=dict(self.headers),
            params=dict(self.query),
            data=self.body,
        )


class HttpRequestBuilder:
    def __init__(self) -> None:
        self._url: Optional[str] = None
        self._method = "GET"
        self._headers: dict[str, str] = {}
        self._query: dict[str, str] = {}
        self._body: Optional[str] = None
        self._timeout_ms = DEFAULT_TIMEOUT_MS
        self._follow_redirects = True

    def set_url(self, url: str) -> "HttpRequestBuilder":
        self._url = url
        return self

    def set_method(self, method: str) -> "HttpRequestBuilder":
        self._method = method.upper()
        return self

    def add_header(self, key: str, value: str) -> "HttpRequestBuilder":
        self._headers[key] = value
        return self

    def add_query_parameter(self, key: str, value: str) -> "HttpRequestBuilder":
        self._query[key] = value
        return self

    def set_body(self, body: str) -> "HttpRequestBuilder":
        self._body = body
        return self

    def set_timeout(self, milliseconds: int) -> "HttpRequestBuilder":
        self._timeout_ms = milliseconds
        return self

    def set_follow_redirects(self, follow: bool) -> "HttpRequestBuilder":
        self._follow_redirects = follow
        return self

    def build(self) -> HttpRequest:
        """Validate the accumulated state and freeze it into an HttpRequest."""
        if not self._url:
            raise InvalidArgumentError("url", self._url, "URL is required")
        parsed = urlparse(self._url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise InvalidArgumentError("url", self._url, expected="an absolute http(s) URL")
        if self._method not in ALLOWED_METHODS:
            raise InvalidArgumentError(
                "method", self._method, expected=", ".join(sorted(ALLOWED_METHODS))
            )
        if self._timeout_ms <= 0:
            raise InvalidArgumentError("timeout", self._timeout_ms, expected="a positive timeout")

        # Copies keep later builder calls from leaking into a built request.
        return HttpRequest(
            url=self._url,
            method=self._method,
            headers=MappingProxyType(dict(self._headers)),
            query=MappingProxyType(dict(self._query)),
            body=self._body,
            timeout_ms=self._timeout_ms,
            follow_redirects=self._follow_redirects,
        )
