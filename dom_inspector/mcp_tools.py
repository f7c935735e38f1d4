"""
MCP Tools for DOM Inspector

Tool layer between the MCP server and the inspection engine. Every tool
returns a JSON-ready dict: {"status": "ok", ...} on success and
{"status": "error", "code": ..., "error": ...} on failure.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from playwright.async_api import Error as PlaywrightError

from .browser_session import BrowserSession
from .config import InspectorConfig
from .dom_inspector import DOMInspector
from .errors import InspectionError
from .formatting import format_alignment, format_ancestor_chain, format_inspection


PAGE_CLOSED_MARKERS = (
    "Target page, context or browser has been closed",
    "Target closed",
)
DISCONNECT_MARKERS = (
    "Browser has been disconnected",
    "Protocol error",
    "Connection closed",
)


def disconnect_code(message: str) -> Optional[str]:
    """Error code for messages that mean the browser or page went away"""
    if any(marker in message for marker in PAGE_CLOSED_MARKERS):
        return "PAGE_CLOSED"
    if any(marker in message for marker in DISCONNECT_MARKERS):
        return "BROWSER_DISCONNECTED"
    return None


class MCPInspectorTools:
    """MCP tools for DOM inspection"""

    def __init__(self, session: BrowserSession, inspector: DOMInspector,
                 config: Optional[InspectorConfig] = None):
        self.session = session
        self.inspector = inspector
        self.config = config or inspector.config
        self.logger = logging.getLogger("MCPInspectorTools")

        # Usage statistics
        self._usage_stats = {
            'total_calls': 0,
            'successful_calls': 0,
            'failed_calls': 0
        }

    def _error(self, code: str, message: str) -> Dict[str, Any]:
        self._usage_stats['failed_calls'] += 1
        return {"status": "error", "code": code, "error": message}

    async def _call(self, name: str, operation: Callable[[], Awaitable[Dict[str, Any]]]) -> Dict[str, Any]:
        self._usage_stats['total_calls'] += 1
        try:
            response = await operation()
        except (InspectionError, PlaywrightError) as e:
            message = str(e)
            code = disconnect_code(message)
            if code is not None:
                self.logger.error(f"{name}: browser connection lost: {message}")
                await self.session.reset(driver_lost=code == "BROWSER_DISCONNECTED")
                return self._error(
                    code, f"{message}\nThe browser session was reset; retry the call to relaunch it."
                )
            if isinstance(e, InspectionError):
                self.logger.error(f"{name} failed [{e.code}]: {message}")
                return self._error(e.code, message)
            self.logger.error(f"{name} failed: {message}")
            return self._error("OPERATION_FAILED", f"Failed to run {name}: {message}")

        self._usage_stats['successful_calls'] += 1
        return response

    async def browser_navigate(self, url: str, wait_until: Optional[str] = None) -> Dict[str, Any]:
        """Open a URL in the inspected page"""
        async def run() -> Dict[str, Any]:
            self.logger.info(f"Navigating to {url}")
            info = await self.session.navigate(url, wait_until=wait_until)
            status = info["http_status"]
            text = f"Navigated to {info['url']}"
            if status is not None:
                text += f" (HTTP {status})"
            if info["title"]:
                text += f"\nTitle: {info['title']}"
            return {"status": "ok", "text": text, "result": info}

        return await self._call("browser_navigate", run)

    async def inspect_dom(self, selector: Optional[str] = None, include_hidden: bool = False,
                          max_children: Optional[int] = None, max_depth: Optional[int] = None,
                          element_index: Optional[int] = None) -> Dict[str, Any]:
        """Semantic children of an element, drilling through wrapper divs"""
        async def run() -> Dict[str, Any]:
            page = await self.session.get_page()
            result = await self.inspector.inspect_dom(
                page, selector,
                include_hidden=include_hidden,
                max_children=max_children,
                max_depth=max_depth,
                element_index=element_index,
            )
            return {"status": "ok", "text": format_inspection(result), "result": result.model_dump(mode="json")}

        return await self._call("inspect_dom", run)

    async def inspect_ancestors(self, selector: str, limit: Optional[int] = None,
                                element_index: Optional[int] = None) -> Dict[str, Any]:
        """Ancestor chain with layout-critical CSS and diagnostics"""
        async def run() -> Dict[str, Any]:
            page = await self.session.get_page()
            chain = await self.inspector.inspect_ancestors(page, selector, limit=limit, element_index=element_index)
            return {"status": "ok", "text": format_ancestor_chain(chain), "result": chain.model_dump(mode="json")}

        return await self._call("inspect_ancestors", run)

    async def compare_element_alignment(self, selector1: str, selector2: str,
                                        element_index1: Optional[int] = None,
                                        element_index2: Optional[int] = None) -> Dict[str, Any]:
        """Edge, center and dimension comparison of two elements"""
        async def run() -> Dict[str, Any]:
            page = await self.session.get_page()
            report = await self.inspector.compare_alignment(
                page, selector1, selector2,
                element_index1=element_index1,
                element_index2=element_index2,
            )
            return {"status": "ok", "text": format_alignment(report), "result": report.model_dump(mode="json")}

        return await self._call("compare_element_alignment", run)

    async def browser_close(self) -> Dict[str, Any]:
        """Close the browser; the next tool call launches a fresh one"""
        async def run() -> Dict[str, Any]:
            await self.session.close()
            return {"status": "ok", "text": "Browser closed"}

        return await self._call("browser_close", run)

    def get_usage_stats(self) -> Dict[str, Any]:
        """Usage statistics"""
        total_calls = self._usage_stats['total_calls']
        success_rate = 0.0

        if total_calls > 0:
            success_rate = self._usage_stats['successful_calls'] / total_calls

        return {
            **self._usage_stats,
            "success_rate": success_rate
        }
