"""In-process browser driver used as a test double."""

from __future__ import annotations

from .driver import BaseDriver

_PNG_HEADER = b"\x89PNG\r\n\x1a\n"

DEFAULT_HTML = """
<html>
  <head><title>Mock Page</title></head>
  <body><h1>Mock Page</h1></body>
</html>
"""


class MockDriver(BaseDriver):
    """Serves canned HTML and records every call in ``calls``.

    ``pages`` maps URLs to HTML; unknown URLs get ``DEFAULT_HTML``.
    """

    def __init__(self, html: str = DEFAULT_HTML, pages: dict[str, str] | None = None,
                 screenshot_bytes: bytes = _PNG_HEADER):
        self.pages = dict(pages or {})
        self._html = html
        self._url = "about:blank"
        self._screenshot = screenshot_bytes
        self.calls: list[tuple[str, dict]] = []
        self.fields: dict[str, str] = {}
        self.closed = False

    def goto(self, url: str) -> dict:
        self.calls.append(("goto", {"url": url}))
        self._url = url
        if url in self.pages:
            self._html = self.pages[url]
        return {"url": url}

    def html(self) -> str:
        self.calls.append(("html", {}))
        return self._html

    def title(self) -> str:
        self.calls.append(("title", {}))
        return "Mock Page"

    def url(self) -> str:
        self.calls.append(("url", {}))
        return self._url

    def click(self, selector: str) -> dict:
        self.calls.append(("click", {"selector": selector}))
        return {"clicked": selector}

    def fill_in(self, selector: str, text: str) -> dict:
        self.calls.append(("fill_in", {"selector": selector, "text": text}))
        self.fields[selector] = text
        return {"selector": selector, "text": text}

    def screenshot(self) -> bytes:
        self.calls.append(("screenshot", {}))
        return self._screenshot

    def close(self) -> None:
        self.calls.append(("close", {}))
        self.closed = True
