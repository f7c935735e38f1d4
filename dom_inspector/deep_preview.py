"""
Deep-preview scanner

When wrappers dominate an inspection, look past max_depth for the first few
semantic elements so the caller knows whether a deeper call is worth it.
"""

from typing import List

from .classifier import is_semantic
from .snapshot import build_snapshot, follow_up_selector
from .types import DeepPreviewCandidate, DomNode


PREVIEW_TEXT_LIMIT = 80
DEFAULT_PREVIEW_LIMIT = 3


def preview_ceiling(max_depth: int) -> int:
    """Deepest level the scanner visits"""
    return min(max(max_depth + 5, 12), 20)


def collector_depth(max_depth: int) -> int:
    """Levels below the target the collector walks"""
    return max_depth + 1


def suggested_max_depth(max_depth: int, candidate_depth: int) -> int:
    return max(max_depth + 3, candidate_depth + 1)


def scan_deep_preview(target: DomNode, include_hidden: bool = False, max_depth: int = 5,
                      limit: int = DEFAULT_PREVIEW_LIMIT) -> List[DeepPreviewCandidate]:
    """Depth-first search for semantic elements strictly deeper than max_depth.

    Direct children of target are depth 1. The search descends into every
    visited node, semantic or not, and stops once limit candidates are found
    or the ceiling is reached.
    """
    ceiling = preview_ceiling(max_depth)
    target_area = max(target.rect.area, 1)
    candidates: List[DeepPreviewCandidate] = []

    def walk(elements: List[DomNode], depth: int) -> None:
        if len(candidates) >= limit or depth > ceiling:
            return

        for child in elements:
            if not include_hidden and not child.visible:
                continue

            if depth > max_depth and is_semantic(child):
                candidates.append(DeepPreviewCandidate(
                    element=build_snapshot(child, PREVIEW_TEXT_LIMIT),
                    depth=depth,
                    area_ratio=child.rect.area / target_area,
                    suggested_selector=follow_up_selector(child),
                    suggested_max_depth=suggested_max_depth(max_depth, depth),
                ))
                if len(candidates) >= limit:
                    break

            walk(child.children, depth + 1)
            if len(candidates) >= limit:
                break

    walk(target.children, 1)
    return candidates
