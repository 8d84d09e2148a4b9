"""Browser sub-tools that act on the page: visit, click, fill, screenshot.

Each sub-tool is bound to one driver and one logger and forwards a single
action. Authorization is the facade's job, not theirs.
"""

from __future__ import annotations

import base64
import logging

from .driver import BaseDriver


class BrowserSubTool:
    def __init__(self, driver: BaseDriver, logger: logging.Logger | None = None):
        self.driver = driver
        self.logger = logger or logging.getLogger(__name__)


class VisitTool(BrowserSubTool):
    """Navigate to a URL (e.g. https://news.ycombinator.com)."""

    def execute(self, url: str):
        self.logger.info("VisitTool#execute url=%r", url)
        return self.driver.goto(url=url)


class ClickTool(BrowserSubTool):
    """Click an element located by CSS selector."""

    def execute(self, selector: str):
        self.logger.info("ClickTool#execute selector=%r", selector)
        return self.driver.click(selector=selector)


class TextFieldAreaSetTool(BrowserSubTool):
    """Set the text of a text field or text area."""

    def execute(self, selector: str, text: str):
        self.logger.info("TextFieldAreaSetTool#execute selector=%r", selector)
        return self.driver.fill_in(selector=selector, text=text)


class PageScreenshotTool(BrowserSubTool):
    """Screenshot the current page as a PNG data URI."""

    def execute(self) -> str:
        self.logger.info("PageScreenshotTool#execute")
        png = self.driver.screenshot()
        return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
