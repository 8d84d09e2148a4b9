"""Driver decorator that logs every call before forwarding it."""

from __future__ import annotations

import logging

from .driver import BaseDriver


class LoggingDriver(BaseDriver):
    """Wraps another browser driver. Each method is forwarded explicitly."""

    def __init__(self, driver: BaseDriver, logger: logging.Logger | None = None):
        self.driver = driver
        self.logger = logger or logging.getLogger(__name__)

    def _log(self, method: str, **kwargs) -> None:
        args = " ".join(f"{k}={v!r}" for k, v in kwargs.items())
        self.logger.info("%s#%s %s", type(self.driver).__name__, method, args)

    def goto(self, url: str):
        self._log("goto", url=url)
        return self.driver.goto(url=url)

    def html(self) -> str:
        self._log("html")
        return self.driver.html()

    def title(self) -> str:
        self._log("title")
        return self.driver.title()

    def url(self) -> str:
        self._log("url")
        return self.driver.url()

    def click(self, selector: str):
        self._log("click", selector=selector)
        return self.driver.click(selector=selector)

    def fill_in(self, selector: str, text: str):
        self._log("fill_in", selector=selector, text=text)
        return self.driver.fill_in(selector=selector, text=text)

    def screenshot(self) -> bytes:
        self._log("screenshot")
        return self.driver.screenshot()

    def close(self) -> None:
        self._log("close")
        self.driver.close()
