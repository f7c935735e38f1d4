"""
Test helpers: captured-node builders, fake Playwright Page/Locator objects
and a fake browser session.

The fakes answer the three page scripts by identity, so the engine runs
end-to-end without a browser.
"""

from typing import Any, Dict, List, Optional

from dom_inspector.page_scripts import ancestor_chain_js, capture_subtree_js, element_descriptor_js
from dom_inspector.types import DomNode


def node(tag: str = "div", children: Optional[List[Dict[str, Any]]] = None,
         rect=(0, 0, 100, 20), visible: bool = True, **fields) -> Dict[str, Any]:
    """Raw node dict in the shape produced by the capture script"""
    children = children or []
    x, y, width, height = rect
    data = {
        "tag": tag,
        "id": None,
        "classes": [],
        "test_ids": {},
        "role": None,
        "has_onclick": False,
        "has_contenteditable": False,
        "direct_text": "",
        "text": "",
        "rect": {"x": x, "y": y, "width": width, "height": height},
        "visible": visible,
        "scroll_height": height,
        "client_height": height,
        "scroll_width": width,
        "client_width": width,
        "child_count": len(children),
        "children": children,
    }
    data.update(fields)
    return data


def dom(tag: str = "div", children=None, **kwargs) -> DomNode:
    return DomNode.model_validate(node(tag, children, **kwargs))


def nest(depth: int, leaf: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap leaf in plain divs so it sits `depth` levels below the returned node's parent"""
    current = leaf
    for _ in range(depth - 1):
        current = node("div", [current])
    return current


def ancestor_record(tag: str = "div", **overrides) -> Dict[str, Any]:
    """Raw record in the shape produced by the ancestor script"""
    record = {
        "tagName": tag,
        "testId": None,
        "classes": "",
        "rect": {"x": 0, "y": 0, "width": 800, "height": 600},
        "width": "800px",
        "maxWidth": "none",
        "minWidth": "0px",
        "margin": "0px",
        "marginTop": "0px",
        "marginRight": "0px",
        "marginBottom": "0px",
        "marginLeft": "0px",
        "padding": "0px",
        "display": "block",
        "overflow": "visible",
        "overflowX": "visible",
        "overflowY": "visible",
        "scrollHeight": 600,
        "scrollWidth": 800,
        "clientHeight": 600,
        "clientWidth": 800,
        "border": "0px none rgb(0, 0, 0)",
        "borderTop": "0px none rgb(0, 0, 0)",
        "borderRight": "0px none rgb(0, 0, 0)",
        "borderBottom": "0px none rgb(0, 0, 0)",
        "borderLeft": "0px none rgb(0, 0, 0)",
        "flexDirection": "row",
        "justifyContent": "normal",
        "alignItems": "normal",
        "gap": "normal",
        "gridTemplateColumns": "none",
        "gridTemplateRows": "none",
        "position": None,
        "zIndex": None,
        "transform": None,
    }
    record.update(overrides)
    return record


class FakeElement:
    """One matched element as the fake page sees it"""

    def __init__(self, root: Optional[Dict[str, Any]] = None, tree_counts: Optional[Dict[str, Any]] = None,
                 ancestors: Optional[List[Dict[str, Any]]] = None, box: Optional[Dict[str, float]] = None,
                 descriptor: Optional[Dict[str, Any]] = None, visible: bool = True,
                 error: Optional[Exception] = None):
        self.root = root
        self.tree_counts = tree_counts
        self.ancestors = ancestors or []
        self.box = box
        self.descriptor = descriptor or {"tagName": "div", "testId": None, "id": "", "classes": ""}
        self.visible = visible
        self.error = error
        self.evaluations: List[Any] = []


class FakeLocator:
    def __init__(self, elements: List[FakeElement], count_error: Optional[Exception] = None):
        self.elements = elements
        self.count_error = count_error

    async def count(self) -> int:
        if self.count_error is not None:
            raise self.count_error
        return len(self.elements)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator([self.elements[index]])

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    async def is_visible(self) -> bool:
        return self.elements[0].visible

    async def bounding_box(self) -> Optional[Dict[str, float]]:
        return self.elements[0].box

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        element = self.elements[0]
        element.evaluations.append(arg)
        if element.error is not None:
            raise element.error
        if script == capture_subtree_js():
            return {"root": element.root, "tree_counts": element.tree_counts}
        if script == ancestor_chain_js():
            return element.ancestors[:arg["limit"]]
        if script == element_descriptor_js():
            return element.descriptor
        raise AssertionError("unexpected script")


class FakePage:
    def __init__(self, elements: Optional[Dict[str, List[FakeElement]]] = None,
                 count_errors: Optional[Dict[str, Exception]] = None):
        self.elements = elements or {}
        self.count_errors = count_errors or {}
        self.selectors: List[str] = []
        self.closed = False

    def is_closed(self) -> bool:
        return self.closed

    def locator(self, selector: str) -> FakeLocator:
        self.selectors.append(selector)
        return FakeLocator(self.elements.get(selector, []), self.count_errors.get(selector))


class FakeSession:
    """Stands in for BrowserSession in the tool layer"""

    def __init__(self, page: Optional[FakePage] = None, navigate_error: Optional[Exception] = None):
        self.page = page or FakePage()
        self.navigate_error = navigate_error
        self.reset_calls = 0
        self.driver_lost: List[bool] = []
        self.closed = False

    async def get_page(self) -> FakePage:
        return self.page

    async def navigate(self, url: str, wait_until: Optional[str] = None,
                       timeout: Optional[int] = None) -> Dict[str, Any]:
        if self.navigate_error is not None:
            raise self.navigate_error
        return {"url": url, "title": "Example Domain", "http_status": 200}

    async def reset(self, driver_lost: bool = False) -> None:
        self.reset_calls += 1
        self.driver_lost.append(driver_lost)

    async def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self, connected: bool = True):
        self.connected = connected
        self.closed = False

    def is_connected(self) -> bool:
        return self.connected and not self.closed

    async def close(self) -> None:
        self.closed = True


class FakeDriver:
    """Stands in for the object returned by async_playwright().start()"""

    def __init__(self):
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True
