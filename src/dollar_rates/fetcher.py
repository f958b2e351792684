"""HTTP fetcher for the rate source page."""

from __future__ import annotations

import warnings
from typing import Dict, Iterable, Optional
from urllib.parse import urlsplit

import requests
from requests import Response
from urllib3.exceptions import InsecureRequestWarning


class FetchError(RuntimeError):
    """Raised when fetching a URL fails."""

    def __init__(self, url: str, status: Optional[int], message: str | None = None) -> None:
        self.url = url
        self.status = status
        self.message = message or "Failed to fetch URL"
        super().__init__(f"{self.message}: {url} (status={status})")


class Fetcher:
    """Lightweight HTTP client returning decoded page text.

    Certificate validation is skipped only for hosts listed in
    ``insecure_hosts``. The BCV site serves an incomplete certificate chain,
    so the refresher registers that single host here; every other host is
    verified normally.
    """

    DEFAULT_HEADERS: Dict[str, str] = {
        "User-Agent": "dollar-rates/0.1 (+https://example.com)",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "es-VE,es;q=0.8,en-US;q=0.5",
    }

    def __init__(
        self,
        timeout: float = 10.0,
        headers: dict | None = None,
        insecure_hosts: Iterable[str] = (),
    ) -> None:
        self.timeout = timeout
        self.headers = {**self.DEFAULT_HEADERS, **(headers or {})}
        self.insecure_hosts = frozenset(host.lower() for host in insecure_hosts)

    def _verify_for(self, url: str) -> bool:
        host = (urlsplit(url).hostname or "").lower()
        return host not in self.insecure_hosts

    def _request(self, url: str) -> Response:
        verify = self._verify_for(url)
        if verify:
            return requests.get(url, headers=self.headers, timeout=self.timeout)
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", InsecureRequestWarning)
            return requests.get(url, headers=self.headers, timeout=self.timeout, verify=False)

    @staticmethod
    def _decode(url: str, response: Response) -> str:
        # requests falls back to ISO-8859-1 for text/* without a charset
        content_type = response.headers.get("Content-Type", "")
        if "charset" in content_type.lower() and response.encoding:
            encoding = response.encoding
        else:
            encoding = "utf-8"
        try:
            return response.content.decode(encoding)
        except (UnicodeDecodeError, LookupError) as exc:
            raise FetchError(url, response.status_code, f"Could not decode body as {encoding}") from exc

    def get(self, url: str) -> str:
        """Fetch a URL once and return the body text."""
        try:
            response = self._request(url)
        except requests.exceptions.RequestException as exc:
            raise FetchError(url, None, f"Request failed ({exc})") from exc
        if not 200 <= response.status_code < 300:
            raise FetchError(url, response.status_code, "Unexpected response status")
        return self._decode(url, response)
