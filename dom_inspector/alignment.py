"""
Alignment comparator

Edge, center and dimension comparison of two bounding boxes.
"""

import math
from typing import Mapping

from .types import AlignmentMeasure, AlignmentReport, ElementDescriptor, Rect


ALIGNMENT_TOLERANCE = 2  # px
SIGNIFICANT_DIFF = 5  # px


def js_round(value: float) -> int:
    """Round half up, like JavaScript's Math.round"""
    return int(math.floor(value + 0.5))


def measure(value1: float, value2: float, tolerance: int = ALIGNMENT_TOLERANCE) -> AlignmentMeasure:
    v1 = js_round(value1)
    v2 = js_round(value2)
    diff = abs(v1 - v2)
    return AlignmentMeasure(aligned=diff <= tolerance, value1=v1, value2=v2, diff=diff)


def rect_from_box(box: Mapping[str, float]) -> Rect:
    return Rect(
        x=js_round(box["x"]),
        y=js_round(box["y"]),
        width=js_round(box["width"]),
        height=js_round(box["height"]),
    )


def compare_boxes(box1: Mapping[str, float], box2: Mapping[str, float],
                  element1: ElementDescriptor, element2: ElementDescriptor) -> AlignmentReport:
    """Compare two bounding boxes ({x, y, width, height} in CSS px)"""
    x1, y1, w1, h1 = box1["x"], box1["y"], box1["width"], box1["height"]
    x2, y2, w2, h2 = box2["x"], box2["y"], box2["width"], box2["height"]

    edges = {
        "top": measure(y1, y2),
        "left": measure(x1, x2),
        "right": measure(x1 + w1, x2 + w2),
        "bottom": measure(y1 + h1, y2 + h2),
    }
    misaligned = not any(m.aligned for m in edges.values())
    significant = any(m.diff > SIGNIFICANT_DIFF for m in edges.values())

    return AlignmentReport(
        element1=element1,
        element2=element2,
        center_horizontal=measure(x1 + w1 / 2, x2 + w2 / 2),
        center_vertical=measure(y1 + h1 / 2, y2 + h2 / 2),
        width=measure(w1, w2),
        height=measure(h1, h2),
        suggest_ancestor_inspection=misaligned and significant,
        **edges,
    )
