"""Chromium driver using the Playwright sync API."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor

from ..errors import MissingDependencyError
from .driver import BaseDriver

try:
    from playwright.sync_api import sync_playwright
except ImportError:  # pragma: no cover - depends on the environment
    sync_playwright = None

logger = logging.getLogger(__name__)

BROWSER_HEADLESS = os.getenv("BROWSER_HEADLESS", "true").lower() in ("1", "true", "yes")
NAVIGATION_TIMEOUT_MS = int(os.getenv("BROWSER_NAVIGATION_TIMEOUT_MS", "60000"))
ACTION_TIMEOUT_MS = int(os.getenv("BROWSER_ACTION_TIMEOUT_MS", "30000"))


class PlaywrightDriver(BaseDriver):
    """Drives one Chromium page.

    The browser is launched on first use and released by ``close``. The
    Playwright sync API is bound to the thread that started it, so every
    call runs on one worker thread owned by the driver.
    """

    def __init__(self, headless: bool | None = None, user_data_dir: str | None = None):
        if sync_playwright is None:
            raise MissingDependencyError(
                "Browser tools require a driver. Either install the 'playwright' package "
                "(pip install playwright && playwright install chromium) or pass a driver"
            )
        self.headless = BROWSER_HEADLESS if headless is None else headless
        self.user_data_dir = user_data_dir
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="playwright")
        self._playwright = None
        self._context = None
        self._browser = None
        self._page = None

    def _call(self, fn):
        """Run fn(page) on the driver's thread and return its result."""
        return self._executor.submit(lambda: fn(self.page)).result()

    @property
    def page(self):
        if self._page is None:
            self._launch()
        return self._page

    def _launch(self) -> None:
        self._playwright = sync_playwright().start()
        args = ["--no-sandbox", "--disable-setuid-sandbox"]
        try:
            if self.user_data_dir:
                self._context = self._playwright.chromium.launch_persistent_context(
                    self.user_data_dir, headless=self.headless, args=args,
                )
            else:
                self._browser = self._playwright.chromium.launch(headless=self.headless, args=args)
                self._context = self._browser.new_context()
            self._page = self._context.pages[0] if self._context.pages else self._context.new_page()
        except Exception:
            logger.error("Failed to launch Chromium")
            self._shutdown()
            raise
        logger.info("Launched Chromium (headless=%s)", self.headless)

    def goto(self, url: str) -> dict:
        def visit(page):
            page.goto(url, wait_until="domcontentloaded", timeout=NAVIGATION_TIMEOUT_MS)
            return {"url": page.url, "title": page.title()}
        return self._call(visit)

    def html(self) -> str:
        return self._call(lambda page: page.content())

    def title(self) -> str:
        return self._call(lambda page: page.title())

    def url(self) -> str:
        return self._call(lambda page: page.url)

    def click(self, selector: str) -> dict:
        self._call(lambda page: page.click(selector, timeout=ACTION_TIMEOUT_MS))
        return {"clicked": selector}

    def fill_in(self, selector: str, text: str) -> dict:
        self._call(lambda page: page.fill(selector, text, timeout=ACTION_TIMEOUT_MS))
        return {"selector": selector, "text": text}

    def screenshot(self) -> bytes:
        return self._call(lambda page: page.screenshot(full_page=True))

    def close(self) -> None:
        if self._playwright is None:
            return
        self._executor.submit(self._shutdown).result()
        logger.info("Closed Chromium")

    def _shutdown(self) -> None:
        try:
            if self._context is not None:
                self._context.close()
            if self._browser is not None:
                self._browser.close()
        finally:
            self._playwright.stop()
            self._playwright = self._context = self._browser = self._page = None
