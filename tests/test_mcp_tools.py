"""
Tests for the MCP tool layer: response shape, error codes and session recovery.
"""

import pytest
from playwright.async_api import Error as PlaywrightError

from dom_inspector.browser_session import BrowserSession
from dom_inspector.config import InspectorConfig
from dom_inspector.dom_inspector import DOMInspector
from dom_inspector.mcp_tools import MCPInspectorTools, disconnect_code
from tests.helpers import (
    FakeBrowser, FakeDriver, FakeElement, FakePage, FakeSession, ancestor_record, node,
)


def make_tools(page=None, **session_kwargs):
    session = FakeSession(page, **session_kwargs)
    return MCPInspectorTools(session, DOMInspector(InspectorConfig())), session


class TestDisconnectCode:
    def test_page_closed(self):
        assert disconnect_code("locator.count: Target page, context or browser has been closed") == "PAGE_CLOSED"

    def test_browser_disconnected(self):
        assert disconnect_code("Browser has been disconnected") == "BROWSER_DISCONNECTED"

    def test_other_messages(self):
        assert disconnect_code("Timeout 30000ms exceeded") is None


class TestTools:
    @pytest.mark.asyncio
    async def test_navigate(self):
        tools, _ = make_tools()
        response = await tools.browser_navigate("https://example.com")

        assert response["status"] == "ok"
        assert response["text"] == "Navigated to https://example.com (HTTP 200)\nTitle: Example Domain"
        assert response["result"]["http_status"] == 200

    @pytest.mark.asyncio
    async def test_inspect_dom_ok(self):
        page = FakePage({"body": [FakeElement(root=node("body", [node("header"), node("main")]))]})
        tools, _ = make_tools(page)
        response = await tools.inspect_dom()

        assert response["status"] == "ok"
        assert response["text"].startswith("DOM Inspection: <body>")
        assert [c["tag"] for c in response["result"]["children"]] == ["header", "main"]
        assert response["result"]["layout_pattern"] == "grid"

    @pytest.mark.asyncio
    async def test_inspect_ancestors_ok(self):
        element = FakeElement(ancestors=[ancestor_record("button"), ancestor_record("form")])
        tools, _ = make_tools(FakePage({"#save": [element]}))
        response = await tools.inspect_ancestors("#save", limit=1)

        assert response["status"] == "ok"
        assert len(response["result"]["ancestors"]) == 1
        assert "[0] <button>" in response["text"]

    @pytest.mark.asyncio
    async def test_compare_ok(self):
        box = {"x": 0, "y": 0, "width": 100, "height": 40}
        page = FakePage({"#a": [FakeElement(box=box)], "#b": [FakeElement(box=box)]})
        tools, _ = make_tools(page)
        response = await tools.compare_element_alignment("#a", "#b")

        assert response["status"] == "ok"
        assert response["result"]["top"]["aligned"] is True
        assert "Width:  ✓ same (100px)" in response["text"]

    @pytest.mark.asyncio
    async def test_not_found(self):
        tools, _ = make_tools()
        response = await tools.inspect_dom("#missing")

        assert response == {"status": "error", "code": "NOT_FOUND", "error": "Element not found: #missing"}

    @pytest.mark.asyncio
    async def test_element_index_out_of_range(self):
        page = FakePage({"li": [FakeElement(root=node("li"))]})
        tools, _ = make_tools(page)
        response = await tools.inspect_dom("li", element_index=3)

        assert response["code"] == "ELEMENT_INDEX"
        assert "Only 1 element(s) found" in response["error"]

    @pytest.mark.asyncio
    async def test_invalid_selector(self):
        page = FakePage(count_errors={"div[": PlaywrightError("Unexpected token \"[\" while parsing selector")})
        tools, _ = make_tools(page)
        response = await tools.inspect_ancestors("div[")

        assert response["code"] == "INVALID_SELECTOR"
        assert response["error"].startswith('Invalid CSS selector: "div["')

    @pytest.mark.asyncio
    async def test_evaluation_failure(self):
        element = FakeElement(error=PlaywrightError("ReferenceError: x is not defined"))
        tools, session = make_tools(FakePage({"#app": [element]}))
        response = await tools.inspect_dom("#app")

        assert response["code"] == "EVALUATION_FAILED"
        assert response["error"] == "ReferenceError: x is not defined"
        assert session.reset_calls == 0

    @pytest.mark.asyncio
    async def test_page_closed_resets_session(self):
        page = FakePage(count_errors={"#app": PlaywrightError("Target page, context or browser has been closed")})
        tools, session = make_tools(page)
        response = await tools.inspect_dom("#app")

        assert response["code"] == "PAGE_CLOSED"
        assert "retry the call" in response["error"]
        assert session.reset_calls == 1
        assert session.driver_lost == [False]

    @pytest.mark.asyncio
    async def test_disconnect_resets_driver(self):
        page = FakePage(count_errors={"#app": PlaywrightError("Browser has been disconnected")})
        tools, session = make_tools(page)
        response = await tools.inspect_dom("#app")

        assert response["code"] == "BROWSER_DISCONNECTED"
        assert session.driver_lost == [True]

    @pytest.mark.asyncio
    async def test_navigation_failure(self):
        tools, session = make_tools(navigate_error=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
        response = await tools.browser_navigate("https://nope.invalid")

        assert response["code"] == "OPERATION_FAILED"
        assert response["error"] == "Failed to run browser_navigate: net::ERR_NAME_NOT_RESOLVED"
        assert session.reset_calls == 0

    @pytest.mark.asyncio
    async def test_close(self):
        tools, session = make_tools()
        response = await tools.browser_close()

        assert response == {"status": "ok", "text": "Browser closed"}
        assert session.closed


class TestUsageStats:
    @pytest.mark.asyncio
    async def test_counts_calls(self):
        tools, _ = make_tools()
        await tools.browser_navigate("https://example.com")
        await tools.inspect_dom("#missing")

        stats = tools.get_usage_stats()
        assert stats["total_calls"] == 2
        assert stats["successful_calls"] == 1
        assert stats["failed_calls"] == 1
        assert stats["success_rate"] == 0.5

    def test_empty(self):
        tools, _ = make_tools()
        assert tools.get_usage_stats()["success_rate"] == 0.0


def started_session(page, browser, driver):
    session = BrowserSession()
    session._pw = driver
    session._browser = browser
    session._context = object()
    session._page = page
    return session


class TestSessionRecovery:
    @pytest.mark.asyncio
    async def test_closed_page_closes_live_browser(self):
        page = FakePage(count_errors={"#app": PlaywrightError("Target closed")})
        browser, driver = FakeBrowser(), FakeDriver()
        session = started_session(page, browser, driver)
        tools = MCPInspectorTools(session, DOMInspector(InspectorConfig()))

        response = await tools.inspect_dom("#app")

        assert response["code"] == "PAGE_CLOSED"
        assert browser.closed
        assert not driver.stopped
        assert session._browser is None
        assert session._pw is driver

    @pytest.mark.asyncio
    async def test_close_after_reset_stops_driver(self):
        browser, driver = FakeBrowser(), FakeDriver()
        session = started_session(FakePage(), browser, driver)

        await session.reset()
        await session.close()

        assert browser.closed
        assert driver.stopped
        assert session._pw is None

    @pytest.mark.asyncio
    async def test_lost_connection_drops_driver(self):
        page = FakePage(count_errors={"#app": PlaywrightError("Connection closed")})
        browser, driver = FakeBrowser(connected=False), FakeDriver()
        session = started_session(page, browser, driver)
        tools = MCPInspectorTools(session, DOMInspector(InspectorConfig()))

        response = await tools.inspect_dom("#app")

        assert response["code"] == "BROWSER_DISCONNECTED"
        assert not browser.closed
        assert driver.stopped
        assert session._pw is None

    @pytest.mark.asyncio
    async def test_browser_close_error_is_logged_not_raised(self):
        class FailingBrowser(FakeBrowser):
            async def close(self):
                raise PlaywrightError("Target page, context or browser has been closed")

        driver = FakeDriver()
        session = started_session(FakePage(), FailingBrowser(), driver)

        await session.reset()

        assert session._browser is None
        assert session._pw is driver
