"""Headless HTTP driver: fetches pages with requests, no JavaScript.

Supports goto / html / title / url / close. Clicking, filling fields and
screenshots need a real browser, so those stay unimplemented and raise
DriverNotImplementedError.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .driver import BaseDriver

logger = logging.getLogger(__name__)

USER_AGENT = os.getenv("BROWSER_USER_AGENT", "SharedTools-HttpDriver/1.0")
REQUEST_TIMEOUT = int(os.getenv("BROWSER_HTTP_TIMEOUT", "10"))
MAX_RETRIES = int(os.getenv("BROWSER_MAX_RETRIES", "3"))


def _http_session() -> requests.Session:
    """Build a requests.Session with retry + exponential backoff."""
    s = requests.Session()
    retries = Retry(
        total=MAX_RETRIES,
        backoff_factor=0.5,           # 0.5s, 1s, 2s
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "HEAD"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retries)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update({"User-Agent": USER_AGENT})
    return s


class HttpDriver(BaseDriver):
    def __init__(self, session: requests.Session | None = None):
        self._session = session
        self._url = "about:blank"
        self._html = ""

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = _http_session()
        return self._session

    def goto(self, url: str) -> dict:
        target = urljoin(self._url, url) if self._url.startswith("http") else url
        resp = self.session.get(target, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
        self._url = resp.url or target
        self._html = resp.text
        logger.info("GET %s -> %s (%d bytes)", target, resp.status_code, len(self._html))
        return {"url": self._url, "status": resp.status_code, "title": self.title()}

    def html(self) -> str:
        return self._html

    def title(self) -> str:
        if not self._html:
            return ""
        soup = BeautifulSoup(self._html, "html.parser")
        return soup.title.get_text(strip=True) if soup.title else ""

    def url(self) -> str:
        return self._url

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
