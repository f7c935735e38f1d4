"""
Layout pattern detection and sibling geometry

Cheap geometric heuristics over rectangles; no CSS layout introspection.
"""

from typing import Optional, Sequence, Tuple

from .types import ElementSnapshot, LayoutPattern, Rect


NEAR_GAP = 50
FAR_GAP = 20
SIBLING_GAP = 10


def axis_gaps(first: Rect, second: Rect) -> Tuple[int, int]:
    """Separation of two rectangles along x and y, 0 where their projections overlap"""
    horizontal = max(second.x - (first.x + first.width), first.x - (second.x + second.width), 0)
    vertical = max(second.y - (first.y + first.height), first.y - (second.y + second.height), 0)
    return horizontal, vertical


def detect_layout_pattern(first: Rect, second: Rect) -> LayoutPattern:
    horizontal_gap, vertical_gap = axis_gaps(first, second)

    if horizontal_gap < NEAR_GAP and vertical_gap >= FAR_GAP:
        return LayoutPattern.VERTICAL
    if vertical_gap < NEAR_GAP and horizontal_gap >= FAR_GAP:
        return LayoutPattern.HORIZONTAL
    if horizontal_gap < NEAR_GAP and vertical_gap < NEAR_GAP:
        return LayoutPattern.GRID
    return LayoutPattern.UNKNOWN


def detect_children_layout(children: Sequence[ElementSnapshot]) -> LayoutPattern:
    """Layout of the first two surfaced children, unknown with fewer than two"""
    if len(children) < 2:
        return LayoutPattern.UNKNOWN
    return detect_layout_pattern(children[0].rect, children[1].rect)


def edge_distances(child: Rect, parent: Rect) -> Tuple[int, int, int, int]:
    """Distances from the parent's left, right, top and bottom edges"""
    left = child.x - parent.x
    right = (parent.x + parent.width) - (child.x + child.width)
    top = child.y - parent.y
    bottom = (parent.y + parent.height) - (child.y + child.height)
    return left, right, top, bottom


def sibling_gap(previous: Rect, current: Rect) -> Optional[Tuple[str, int]]:
    """Gap from the previous sibling as ("vertical"|"horizontal", px), if clear-cut"""
    horizontal_gap, vertical_gap = axis_gaps(previous, current)

    if horizontal_gap < NEAR_GAP and vertical_gap > SIBLING_GAP:
        return "vertical", vertical_gap
    if vertical_gap < NEAR_GAP and horizontal_gap > SIBLING_GAP:
        return "horizontal", horizontal_gap
    return None
