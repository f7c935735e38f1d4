"""
Ancestor walker diagnostics

Turns the computed-style records captured for an element and its parents into
AncestorSnapshot objects and infers why a layout looks the way it does:
clipping points, scrollable containers, width constraints and horizontal
centering through margins.
"""

import re
from typing import Any, Dict, List, Optional

from .types import (
    AncestorDiagnostics, AncestorSnapshot, Borders, CenteringKind, Margins,
    Rect, ScrollableOverflow,
)


CENTERING_MIN_MARGIN = 100
CENTERING_TOLERANCE = 2

_PX_RE = re.compile(r"^(-?[\d.]+)px$")


def parse_px(value: str) -> float:
    """Numeric value of a "<n>px" string, 0 for anything else (auto, %, ...)"""
    match = _PX_RE.match(value or "")
    return float(match.group(1)) if match else 0.0


def is_clipping_point(snapshot: AncestorSnapshot) -> bool:
    return snapshot.overflow == "hidden" or snapshot.overflow_y == "hidden"


def scroll_overflow(snapshot: AncestorSnapshot) -> Optional[ScrollableOverflow]:
    vertical = snapshot.scroll_height > snapshot.client_height
    horizontal = snapshot.scroll_width > snapshot.client_width
    if not (vertical or horizontal):
        return None
    return ScrollableOverflow(
        vertical=vertical,
        horizontal=horizontal,
        overflow_y=snapshot.scroll_height - snapshot.client_height if vertical else None,
        overflow_x=snapshot.scroll_width - snapshot.client_width if horizontal else None,
    )


def has_width_constraint(snapshot: AncestorSnapshot) -> bool:
    # max-width on the starting element itself is not a constraint from above
    return snapshot.max_width != "none" and snapshot.index > 0


def detect_centering(margin: Margins) -> Optional[CenteringKind]:
    """Horizontal centering through margins.

    Literal auto margins win. Computed styles usually resolve auto to pixels,
    so equal large left/right margins with zero top/bottom margins are read
    as margin: 0 auto.
    """
    if margin.left == "auto" and margin.right == "auto":
        return CenteringKind.AUTO_MARGINS

    sides = (margin.top, margin.right, margin.bottom, margin.left)
    if not all(_PX_RE.match(side) for side in sides):
        return None

    left = parse_px(margin.left)
    right = parse_px(margin.right)
    if (
        left >= CENTERING_MIN_MARGIN
        and right >= CENTERING_MIN_MARGIN
        and abs(left - right) <= CENTERING_TOLERANCE
        and parse_px(margin.top) == 0
        and parse_px(margin.bottom) == 0
    ):
        return CenteringKind.SYMMETRIC_MARGINS
    return None


def diagnose(snapshot: AncestorSnapshot) -> AncestorDiagnostics:
    return AncestorDiagnostics(
        clipping_point=is_clipping_point(snapshot),
        scrollable=scroll_overflow(snapshot),
        width_constraint=has_width_constraint(snapshot),
        centering=detect_centering(snapshot.margin),
    )


def build_ancestor_snapshot(raw: Dict[str, Any], index: int) -> AncestorSnapshot:
    """Build a snapshot with diagnostics from one record of the ancestor script"""
    rect = raw.get("rect") or {}
    snapshot = AncestorSnapshot(
        index=index,
        tag=raw.get("tagName", ""),
        test_id=raw.get("testId") or None,
        classes=raw.get("classes") or "",
        rect=Rect(
            x=rect.get("x", 0), y=rect.get("y", 0),
            width=rect.get("width", 0), height=rect.get("height", 0),
        ),
        width=raw.get("width", "auto"),
        min_width=raw.get("minWidth", "0px"),
        max_width=raw.get("maxWidth", "none"),
        margin=Margins(
            shorthand=raw.get("margin", "0px"),
            top=raw.get("marginTop", "0px"),
            right=raw.get("marginRight", "0px"),
            bottom=raw.get("marginBottom", "0px"),
            left=raw.get("marginLeft", "0px"),
        ),
        padding=raw.get("padding", "0px"),
        display=raw.get("display", "block"),
        overflow=raw.get("overflow", "visible"),
        overflow_x=raw.get("overflowX", "visible"),
        overflow_y=raw.get("overflowY", "visible"),
        scroll_height=raw.get("scrollHeight", 0),
        scroll_width=raw.get("scrollWidth", 0),
        client_height=raw.get("clientHeight", 0),
        client_width=raw.get("clientWidth", 0),
        border=Borders(
            shorthand=raw.get("border", ""),
            top=raw.get("borderTop", ""),
            right=raw.get("borderRight", ""),
            bottom=raw.get("borderBottom", ""),
            left=raw.get("borderLeft", ""),
        ),
        flex_direction=raw.get("flexDirection", ""),
        justify_content=raw.get("justifyContent", ""),
        align_items=raw.get("alignItems", ""),
        gap=raw.get("gap", ""),
        grid_template_columns=raw.get("gridTemplateColumns", ""),
        grid_template_rows=raw.get("gridTemplateRows", ""),
        position=raw.get("position"),
        z_index=raw.get("zIndex"),
        transform=raw.get("transform"),
    )
    return snapshot.model_copy(update={"diagnostics": diagnose(snapshot)})


def build_ancestor_chain(records: List[Dict[str, Any]]) -> List[AncestorSnapshot]:
    return [build_ancestor_snapshot(raw, index) for index, raw in enumerate(records)]


def clamp_limit(limit: Optional[int], default: int, maximum: int) -> int:
    if limit is None:
        limit = default
    return max(1, min(limit, maximum))
