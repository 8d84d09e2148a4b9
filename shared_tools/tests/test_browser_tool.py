"""Tests for the browser facade, its sub-tools and drivers.

Uses the in-process MockDriver; the Playwright driver runs against a faked
``sync_playwright``.
"""

import base64
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from shared_tools.app.browser import playwright_driver
from shared_tools.app.browser.action_tools import VisitTool
from shared_tools.app.browser.driver import BaseDriver
from shared_tools.app.browser.http_driver import HttpDriver
from shared_tools.app.browser.logging_driver import LoggingDriver
from shared_tools.app.browser.mock_driver import MockDriver
from shared_tools.app.browser_tool import BrowserTool
from shared_tools.app.errors import (
    DriverNotImplementedError,
    MissingDependencyError,
    ParameterError,
)

LOGIN_HTML = """
<html>
  <head>
    <title>Login</title>
    <script>alert('tracking')</script>
    <style>body { color: red }</style>
  </head>
  <body>
    <h1>Welcome back</h1>
    <!-- build 1234 -->
    <nav><a href="/help">Help</a></nav>
    <form id="login" action="/session" method="post">
      <div class="field">
        <label for="email">Email address</label>
        <input id="email" name="email" type="email" onclick="track()">
      </div>
      <div class="field">
        <label for="password">Password</label>
        <input id="password" name="password" type="password">
      </div>
      <div class="actions">
        <span>Ready?</span>
        <button class="primary" type="submit">Sign in</button>
      </div>
    </form>
  </body>
</html>
"""


@pytest.fixture()
def driver():
    return MockDriver(html=LOGIN_HTML)


@pytest.fixture()
def tool(driver, auto):
    return BrowserTool(driver=driver, authorizer=auto)


class TestActions:
    def test_visit_forwards_to_goto(self, tool, driver):
        tool.execute("visit", url="https://example.com")
        assert driver.calls[0] == ("goto", {"url": "https://example.com"})

    def test_visit_requires_url(self, tool, driver):
        with pytest.raises(ParameterError) as exc:
            tool.execute("visit")
        assert str(exc.value) == "browser_tool: 'url' param is required for action 'visit'"
        assert driver.calls == []

    def test_click(self, tool, driver):
        assert tool.execute("click", selector="button.primary") == {"clicked": "button.primary"}
        assert driver.calls == [("click", {"selector": "button.primary"})]

    def test_text_field_set(self, tool, driver):
        tool.execute("text_field_set", selector="#email", text="me@example.com")
        assert driver.fields == {"#email": "me@example.com"}

    def test_screenshot_is_png_data_uri(self, tool):
        uri = tool.execute("screenshot")
        prefix = "data:image/png;base64,"
        assert uri.startswith(prefix)
        assert base64.b64decode(uri[len(prefix):]).startswith(b"\x89PNG")

    def test_no_browser_action_is_gated(self, driver, decline):
        tool = BrowserTool(driver=driver, authorizer=decline)
        tool.execute("click", selector="#x")
        assert decline._stdout.getvalue() == ""

    def test_sub_tools_are_reused(self, tool):
        assert tool.sub_tool(VisitTool) is tool.sub_tool(VisitTool)

    def test_close_releases_driver(self, tool, driver):
        tool.close()
        assert driver.closed is True


class TestPageInspect:
    def test_strips_scripts_styles_comments_and_handlers(self, tool):
        html = tool.execute("page_inspect")
        assert "alert" not in html
        assert "color: red" not in html
        assert "build 1234" not in html
        assert "onclick" not in html
        assert 'id="email"' in html

    def test_summary(self, tool):
        summary = tool.execute("page_inspect", summarize=True)
        assert "Title: Login" in summary
        assert "h1: Welcome back" in summary
        assert "[Help](/help)" in summary
        assert "Buttons (1):" in summary
        assert "Form fields (2):" in summary
        assert "Forms (1):" in summary


class TestSelectorInspect:
    def test_match_with_context(self, tool):
        out = tool.execute("selector_inspect", selector="button.primary")
        assert out.startswith("Found 1 elements matching 'button.primary':")
        assert "--- Element 1 ---" in out
        assert "Context:" in out
        assert '<div class="actions">' in out
        assert 'Element: <button class="primary" type="submit">Sign in</button>' in out

    def test_no_match(self, tool):
        assert tool.execute("selector_inspect", selector=".missing") == "No elements found matching selector: .missing"

    def test_requires_selector(self, tool):
        with pytest.raises(ParameterError):
            tool.execute("selector_inspect")


class TestUiInspect:
    def test_label_leads_to_its_input(self, tool):
        out = tool.execute("ui_inspect", text_content="email address")
        assert "Found" in out
        assert '<input id="email" name="email" type="email"/>' in out

    def test_nearby_interactive_elements(self, tool):
        out = tool.execute("ui_inspect", text_content="Ready?")
        assert "Sign in" in out

    def test_selector_narrows_matches(self, tool):
        out = tool.execute("ui_inspect", text_content="sign in", selector="button")
        assert out.startswith("Found 1 elements containing 'sign in':")
        assert "Context:" not in out

    def test_no_match(self, tool):
        assert tool.execute("ui_inspect", text_content="Checkout") == "No elements found containing text: Checkout"


class TestDrivers:
    def test_bare_driver_not_implemented(self, auto):
        class BareDriver(BaseDriver):
            pass

        tool = BrowserTool(driver=BareDriver(), authorizer=auto)
        with pytest.raises(DriverNotImplementedError, match="BareDriver#goto is not implemented"):
            tool.execute("visit", url="https://example.com")

    def test_missing_playwright(self, monkeypatch):
        monkeypatch.setattr(playwright_driver, "sync_playwright", None)
        with pytest.raises(MissingDependencyError, match="playwright"):
            BrowserTool()

    def test_logging_driver_forwards(self, driver, caplog):
        wrapped = LoggingDriver(driver)
        with caplog.at_level(logging.INFO):
            wrapped.goto(url="https://example.com")
            wrapped.fill_in(selector="#q", text="python")
        assert driver.calls == [
            ("goto", {"url": "https://example.com"}),
            ("fill_in", {"selector": "#q", "text": "python"}),
        ]
        assert "MockDriver#goto url='https://example.com'" in caplog.text

    def test_http_driver_fetches_page(self):
        resp = MagicMock()
        resp.status_code = 200
        resp.url = "https://example.com/"
        resp.text = "<html><head><title>Example Domain</title></head><body><a href='/more'>More</a></body></html>"
        session = MagicMock()
        session.get.return_value = resp

        driver = HttpDriver(session=session)
        result = driver.goto(url="https://example.com")
        assert result == {"url": "https://example.com/", "status": 200, "title": "Example Domain"}
        assert driver.url() == "https://example.com/"

        driver.goto(url="/more")
        assert session.get.call_args_list[1].args[0] == "https://example.com/more"

    def test_http_driver_inspect_through_facade(self, auto):
        resp = MagicMock(status_code=200, url="https://example.com/", text=LOGIN_HTML)
        session = MagicMock()
        session.get.return_value = resp
        tool = BrowserTool(driver=HttpDriver(session=session), authorizer=auto)
        tool.execute("visit", url="https://example.com")
        assert "Title: Login" in tool.execute("page_inspect", summarize=True)

    def test_http_driver_cannot_click(self):
        with pytest.raises(DriverNotImplementedError, match="HttpDriver#click"):
            HttpDriver(session=MagicMock()).click(selector="a")

    def test_http_session_has_retries_and_user_agent(self):
        from shared_tools.app.browser.http_driver import USER_AGENT, _http_session
        s = _http_session()
        adapter = s.get_adapter("https://example.com")
        assert adapter.max_retries.total >= 1
        assert 503 in adapter.max_retries.status_forcelist
        assert s.headers["User-Agent"] == USER_AGENT


class TestPlaywrightDriver:
    @pytest.fixture()
    def fake_playwright(self, monkeypatch):
        """Patch sync_playwright; page.goto records the calling thread."""
        page = MagicMock()
        page.url = "https://example.com/"
        page.title.return_value = "Example"
        page.goto_threads = []
        page.goto.side_effect = lambda url, **kw: page.goto_threads.append(threading.get_ident())

        playwright = MagicMock()
        context = playwright.chromium.launch.return_value.new_context.return_value
        context.pages = []
        context.new_page.return_value = page

        starter = MagicMock()
        starter.return_value.start.return_value = playwright
        monkeypatch.setattr(playwright_driver, "sync_playwright", starter)
        return starter, playwright, page

    def test_calls_run_on_one_thread(self, fake_playwright):
        starter, _, page = fake_playwright
        driver = playwright_driver.PlaywrightDriver()
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda i: driver.goto(f"https://example.com/{i}"), range(8)))
        driver.goto("https://example.com/main")

        assert results[0] == {"url": "https://example.com/", "title": "Example"}
        assert len(page.goto_threads) == 9
        assert len(set(page.goto_threads)) == 1
        assert page.goto_threads[0] != threading.get_ident()
        starter.return_value.start.assert_called_once()
        driver.close()

    def test_failed_launch_stops_playwright(self, fake_playwright):
        starter, playwright, _ = fake_playwright
        playwright.chromium.launch.side_effect = RuntimeError("chromium not installed")
        driver = playwright_driver.PlaywrightDriver()

        with pytest.raises(RuntimeError, match="chromium not installed"):
            driver.goto("https://example.com")
        playwright.stop.assert_called_once()
        assert driver._playwright is None

        playwright.chromium.launch.side_effect = None
        assert driver.title() == "Example"
        assert starter.return_value.start.call_count == 2

        driver.close()
        assert playwright.stop.call_count == 2
        driver.close()
        assert playwright.stop.call_count == 2
