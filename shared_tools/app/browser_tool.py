"""Browser facade: navigate, inspect and interact with web pages.

Every action is handled by a sub-tool bound to the facade's driver. Sub-tools
are created on first use and reused for the facade's lifetime.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TypeVar

from .authorizer import Authorizer
from .base_tool import BaseTool
from .browser.action_tools import (
    BrowserSubTool,
    ClickTool,
    PageScreenshotTool,
    TextFieldAreaSetTool,
    VisitTool,
)
from .browser.driver import BaseDriver
from .browser.inspect_tools import InspectTool, PageInspectTool, SelectorInspectTool

T = TypeVar("T", bound=BrowserSubTool)


class BrowserTool(BaseTool):
    name = "browser_tool"
    description = "A browser automation tool for navigating, inspecting and interacting with web pages."

    class Action(str, Enum):
        VISIT = "visit"
        PAGE_INSPECT = "page_inspect"
        UI_INSPECT = "ui_inspect"
        SELECTOR_INSPECT = "selector_inspect"
        CLICK = "click"
        TEXT_FIELD_SET = "text_field_set"
        SCREENSHOT = "screenshot"

    HANDLERS = {
        Action.VISIT: "_visit",
        Action.PAGE_INSPECT: "_page_inspect",
        Action.UI_INSPECT: "_ui_inspect",
        Action.SELECTOR_INSPECT: "_selector_inspect",
        Action.CLICK: "_click",
        Action.TEXT_FIELD_SET: "_text_field_set",
        Action.SCREENSHOT: "_screenshot",
    }

    REQUIRED = {
        Action.VISIT: ("url",),
        Action.UI_INSPECT: ("text_content",),
        Action.SELECTOR_INSPECT: ("selector",),
        Action.CLICK: ("selector",),
        Action.TEXT_FIELD_SET: ("selector", "text"),
    }

    def __init__(
        self,
        driver: BaseDriver | None = None,
        logger: logging.Logger | None = None,
        authorizer: Authorizer | None = None,
    ):
        super().__init__(logger=logger, authorizer=authorizer)
        if driver is None:
            from .browser.playwright_driver import PlaywrightDriver
            driver = PlaywrightDriver()
        self.driver = driver
        self._sub_tools: dict[type, BrowserSubTool] = {}

    def sub_tool(self, cls: type[T]) -> T:
        """Return the cached sub-tool of type ``cls``, creating it once."""
        tool = self._sub_tools.get(cls)
        if tool is None:
            tool = cls(driver=self.driver, logger=self.logger)
            self._sub_tools[cls] = tool
        return tool

    def _visit(self, url):
        return self.sub_tool(VisitTool).execute(url=url)

    def _page_inspect(self, summarize=False):
        return self.sub_tool(PageInspectTool).execute(summarize=bool(summarize))

    def _ui_inspect(self, text_content, selector=None, context_size=2):
        return self.sub_tool(InspectTool).execute(
            text_content=text_content, selector=selector, context_size=int(context_size),
        )

    def _selector_inspect(self, selector, context_size=2):
        return self.sub_tool(SelectorInspectTool).execute(selector=selector, context_size=int(context_size))

    def _click(self, selector):
        return self.sub_tool(ClickTool).execute(selector=selector)

    def _text_field_set(self, selector, text):
        return self.sub_tool(TextFieldAreaSetTool).execute(selector=selector, text=text)

    def _screenshot(self):
        return self.sub_tool(PageScreenshotTool).execute()
