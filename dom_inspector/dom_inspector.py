"""
DOM Inspector

Entry points of the structural-analysis engine: wrapper-drilling inspection,
ancestor chain walk and two-element alignment comparison. Each call resolves
its selectors against the given page, reads the DOM with one injected script
and post-processes the snapshot in Python.
"""

import logging
import time
from typing import Any, Dict, Optional

from playwright.async_api import Error as PlaywrightError, Locator, Page

from .alignment import compare_boxes, rect_from_box
from .ancestors import build_ancestor_chain, clamp_limit
from .classifier import (
    INTERACTIVE_TAG_ORDER, TOP_LEVEL_CONTAINERS, is_interactive, is_semantic,
)
from .collector import collect_semantic_children
from .config import InspectorConfig
from .deep_preview import collector_depth, preview_ceiling, scan_deep_preview
from .errors import EvaluationError, HiddenOrZeroSizeError
from .layout import detect_children_layout
from .page_scripts import ancestor_chain_js, capture_subtree_js, element_descriptor_js
from .selection import normalize_selector, select_preferred_element
from .snapshot import build_snapshot
from .types import (
    AlignmentReport, AncestorChain, CapturedSubtree, ElementDescriptor,
    InspectionResult, TargetState,
)


TARGET_TEXT_LIMIT = 120


class DOMInspector:
    """Structural DOM analysis over a Playwright page"""

    def __init__(self, config: Optional[InspectorConfig] = None):
        self.config = config or InspectorConfig()
        self.logger = logging.getLogger("DOMInspector")

    async def _evaluate(self, locator: Locator, script: str, arg: Any) -> Any:
        try:
            return await locator.evaluate(script, arg)
        except PlaywrightError as e:
            raise EvaluationError(str(e)) from e

    async def _capture(self, locator: Locator, options: Dict[str, Any]) -> CapturedSubtree:
        raw = await self._evaluate(locator, capture_subtree_js(), options)
        return CapturedSubtree.model_validate(raw)

    async def inspect_dom(self, page: Page, selector: Optional[str] = None,
                          include_hidden: bool = False,
                          max_children: Optional[int] = None,
                          max_depth: Optional[int] = None,
                          element_index: Optional[int] = None) -> InspectionResult:
        """Surface the semantic children of an element (body by default)"""
        settings = self.config.inspection
        max_children = max(0, settings.default_max_children if max_children is None else max_children)
        max_depth = max(0, settings.default_max_depth if max_depth is None else max_depth)
        original = selector or "body"
        start_time = time.time()

        locator = page.locator(normalize_selector(selector) if selector else "body")
        selected = await select_preferred_element(locator, original, element_index)

        options = {
            "depthLimit": collector_depth(max_depth),
            "testIdAttributes": list(settings.test_id_attributes),
            "interactiveTags": list(INTERACTIVE_TAG_ORDER),
            "textLimit": TARGET_TEXT_LIMIT,
            "topLevelTags": sorted(TOP_LEVEL_CONTAINERS),
        }
        captured = await self._capture(selected.locator, options)
        root = captured.root

        collected = collect_semantic_children(root, include_hidden, max_depth)
        deep_preview = []
        if collected.skipped_wrappers > 0:
            # second read past max_depth, only when wrappers hid part of the tree
            deep = await self._capture(selected.locator, {
                **options, "depthLimit": preview_ceiling(max_depth), "topLevelTags": [],
            })
            deep_preview = scan_deep_preview(deep.root, include_hidden, max_depth, settings.deep_preview_limit)

        shown = collected.children[:max_children]
        result = InspectionResult(
            selection=selected.info,
            target=build_snapshot(root, TARGET_TEXT_LIMIT),
            target_state=TargetState(is_semantic=is_semantic(root), is_interactive=is_interactive(root)),
            max_depth=max_depth,
            children=shown,
            stats=collected.stats(max_children),
            element_counts=collected.element_counts,
            interactive_counts=collected.interactive_counts,
            tree_counts=captured.tree_counts if root.tag in TOP_LEVEL_CONTAINERS else None,
            layout_pattern=detect_children_layout(shown),
            deep_preview=deep_preview,
        )

        self.logger.info(
            f"Inspected {original!r} in {time.time() - start_time:.3f}s: "
            f"{result.stats.semantic_count} semantic, {result.stats.skipped_wrappers} wrappers skipped, "
            f"{len(deep_preview)} deep preview candidates"
        )
        return result

    async def inspect_ancestors(self, page: Page, selector: str,
                                limit: Optional[int] = None,
                                element_index: Optional[int] = None) -> AncestorChain:
        """Walk parentElement links from an element, capturing layout-critical CSS"""
        limit = clamp_limit(limit, self.config.ancestors.default_limit, self.config.ancestors.max_limit)

        locator = page.locator(normalize_selector(selector))
        selected = await select_preferred_element(locator, selector, element_index)

        records = await self._evaluate(selected.locator, ancestor_chain_js(), {
            "limit": limit,
            "testIdAttributes": list(self.config.inspection.test_id_attributes),
        })
        chain = AncestorChain(selection=selected.info, ancestors=build_ancestor_chain(records or []))

        self.logger.info(f"Walked {len(chain.ancestors)} ancestors of {selector!r} (limit {limit})")
        return chain

    async def _describe(self, locator: Locator, selector: str) -> Dict[str, str]:
        info = await self._evaluate(
            locator, element_descriptor_js(), list(self.config.inspection.test_id_attributes)
        )
        descriptor = f"<{info['tagName']}"
        if info.get("testId"):
            descriptor += f' data-testid="{info["testId"]}"'
        elif info.get("id"):
            descriptor += info["id"]
        elif info.get("classes"):
            descriptor += info["classes"]
        descriptor += ">"

        if info.get("testId"):
            short_name = info["testId"]
        elif info.get("id"):
            short_name = info["id"][1:]
        else:
            short_name = selector
        return {"descriptor": descriptor, "short_name": short_name}

    async def compare_alignment(self, page: Page, selector1: str, selector2: str,
                                element_index1: Optional[int] = None,
                                element_index2: Optional[int] = None) -> AlignmentReport:
        """Compare edges, centers and dimensions of two elements"""
        first = await select_preferred_element(
            page.locator(normalize_selector(selector1)), selector1, element_index1, "First")
        second = await select_preferred_element(
            page.locator(normalize_selector(selector2)), selector2, element_index2, "Second")

        box1 = await first.locator.bounding_box()
        box2 = await second.locator.bounding_box()
        names1 = await self._describe(first.locator, selector1)
        names2 = await self._describe(second.locator, selector2)

        if not box1:
            raise HiddenOrZeroSizeError(names1["descriptor"], "First")
        if not box2:
            raise HiddenOrZeroSizeError(names2["descriptor"], "Second")

        report = compare_boxes(
            box1, box2,
            ElementDescriptor(selection=first.info, rect=rect_from_box(box1), **names1),
            ElementDescriptor(selection=second.info, rect=rect_from_box(box2), **names2),
        )
        self.logger.info(
            f"Compared {selector1!r} and {selector2!r}: "
            f"{sum(m.aligned for m in report.edges.values())}/4 edges aligned"
        )
        return report
