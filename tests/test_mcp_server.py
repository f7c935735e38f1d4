"""
Tests for server wiring and command line parsing.
"""

import pytest

from dom_inspector.config import InspectorConfig
from dom_inspector.dom_inspector import DOMInspector
from dom_inspector.mcp_server import create_server, parse_args
from dom_inspector.mcp_tools import MCPInspectorTools
from tests.helpers import FakeSession


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.headless is None
        assert args.browser is None
        assert args.config is None

    def test_headed(self):
        assert parse_args(["--headed"]).headless is False
        assert parse_args(["--headless"]).headless is True

    def test_headless_flags_conflict(self):
        with pytest.raises(SystemExit):
            parse_args(["--headless", "--headed"])

    def test_browser_choice(self):
        assert parse_args(["--browser", "webkit"]).browser == "webkit"
        with pytest.raises(SystemExit):
            parse_args(["--browser", "opera"])


class TestCreateServer:
    @pytest.mark.asyncio
    async def test_registers_tools(self):
        tools = MCPInspectorTools(FakeSession(), DOMInspector(InspectorConfig()))
        mcp = create_server(tools)

        names = {tool.name for tool in await mcp.list_tools()}
        assert names == {
            "browser_navigate", "inspect_dom", "inspect_ancestors",
            "compare_element_alignment", "browser_close",
        }
