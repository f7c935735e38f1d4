"""
MCP Server for DOM Inspector

Exposes the inspection tools over the MCP stdio transport. The server is built
around an injected MCPInspectorTools instance; nothing here is module-global.
"""

import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .browser_session import BrowserSession
from .config import load_config
from .dom_inspector import DOMInspector
from .mcp_tools import MCPInspectorTools


SERVER_NAME = "DOM Inspector"

INSPECT_DOM_DESCRIPTION = """START HERE FOR LAYOUT DEBUGGING: progressive DOM inspection that shows parent-child relationships, centering and spacing gaps. Skips wrapper divs and shows only semantic elements (header, nav, main, form, button, elements with test IDs, ARIA roles, etc.).

WORKFLOW: call without selector for a page overview, then drill down with a child's selector.

OUTPUT FORMAT:
[0] <button data-testid="menu">
    @ (16,8) 40x40px                         <- viewport position (x,y) and size
    from edges: ←16px →1144px ↑8px ↓8px      <- distance from parent edges
    "Menu"
    ✓ visible, ⚡ interactive

SYMBOLS: ✓=visible, ✗=hidden, ⚡=interactive. Equal left/right distances mean horizontally centered, equal top/bottom mean vertically centered.

For comparing two elements use compare_element_alignment. Supports testid:, data-test: and data-cy: shorthands."""

INSPECT_ANCESTORS_DESCRIPTION = """DEBUG LAYOUT CONSTRAINTS: walk up the DOM tree to find where width constraints, margins, borders and overflow clipping come from. For each ancestor shows position/size, w/max-w/min-w, margins with arrows, padding, display, borders, overflow (🔒=hidden, ↕️/↔️=scroll), flex and grid context, position/z-index/transform when set. Detects horizontal centering through margins and flags 🎯 CLIPPING POINT / SCROLLABLE CONTAINER / WIDTH CONSTRAINT. Default 10 ancestors, max 15. Use after inspect_dom."""

COMPARE_ALIGNMENT_DESCRIPTION = """COMPARE TWO ELEMENTS: edge alignment (top, left, right, bottom), center alignment (horizontal, vertical) and dimensions (width, height) in one call, with ✓/✗ and pixel differences (2px tolerance). For parent-child centering use inspect_dom instead."""


def create_server(tools: MCPInspectorTools, name: str = SERVER_NAME) -> FastMCP:
    """Build a FastMCP server with the inspection tools registered"""
    mcp = FastMCP(name=name)

    @mcp.tool(description="Open a URL in the inspected browser page.")
    async def browser_navigate(url: str, wait_until: Optional[str] = None) -> Dict:
        return await tools.browser_navigate(url, wait_until=wait_until)

    @mcp.tool(description=INSPECT_DOM_DESCRIPTION)
    async def inspect_dom(
        selector: Optional[str] = None,
        include_hidden: bool = False,
        max_children: Optional[int] = None,
        max_depth: Optional[int] = None,
        element_index: Optional[int] = None,
    ) -> Dict:
        """
        Args:
          selector: CSS selector or testid shorthand; omit for the page body
          include_hidden: include hidden elements (default false)
          max_children: maximum number of children to show (default 20)
          max_depth: levels of wrapper divs to drill through (default 5)
          element_index: 1-based match to use when the selector matches several
        """
        return await tools.inspect_dom(
            selector,
            include_hidden=include_hidden,
            max_children=max_children,
            max_depth=max_depth,
            element_index=element_index,
        )

    @mcp.tool(description=INSPECT_ANCESTORS_DESCRIPTION)
    async def inspect_ancestors(
        selector: str,
        limit: Optional[int] = None,
        element_index: Optional[int] = None,
    ) -> Dict:
        return await tools.inspect_ancestors(selector, limit=limit, element_index=element_index)

    @mcp.tool(description=COMPARE_ALIGNMENT_DESCRIPTION)
    async def compare_element_alignment(
        selector1: str,
        selector2: str,
        element_index1: Optional[int] = None,
        element_index2: Optional[int] = None,
    ) -> Dict:
        return await tools.compare_element_alignment(
            selector1, selector2,
            element_index1=element_index1,
            element_index2=element_index2,
        )

    @mcp.tool(description="Close the browser. The next call launches a fresh one.")
    async def browser_close() -> Dict:
        return await tools.browser_close()

    return mcp


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="DOM Inspector MCP server (stdio)")
    parser.add_argument("--config", help="YAML config file")
    headless = parser.add_mutually_exclusive_group()
    headless.add_argument("--headless", dest="headless", action="store_true",
                          help="Run the browser headless")
    headless.add_argument("--headed", dest="headless", action="store_false",
                          help="Show the browser window")
    parser.set_defaults(headless=None)
    parser.add_argument("--browser", choices=["chromium", "firefox", "webkit"], help="Browser engine")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)


async def serve(tools: MCPInspectorTools, mcp: FastMCP) -> None:
    logger = logging.getLogger("MCPInspectorServer")
    try:
        await mcp.run_stdio_async()
    finally:
        logger.info(f"Shutting down, usage: {tools.get_usage_stats()}")
        await tools.session.close()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = load_config(args.config)
    if args.headless is not None:
        config.browser.headless = args.headless
    if args.browser:
        config.browser.browser_type = args.browser
    if args.log_level:
        config.log_level = args.log_level.upper()

    # stdout carries the MCP protocol
    logging.basicConfig(
        level=logging.DEBUG if config.debug else getattr(logging, config.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    session = BrowserSession(config.browser)
    tools = MCPInspectorTools(session, DOMInspector(config), config)
    asyncio.run(serve(tools, create_server(tools)))


if __name__ == "__main__":
    main()
