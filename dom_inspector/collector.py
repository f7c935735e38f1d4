"""
Wrapper-drill collector

Walks the captured children of the inspected element, surfaces semantic
elements and drills through plain wrapper containers up to max_depth.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .classifier import is_interactive, is_semantic
from .snapshot import build_snapshot
from .types import DomNode, ElementSnapshot, InspectionStats


CHILD_TEXT_LIMIT = 100


@dataclass
class CollectedChildren:
    """Outcome of one wrapper-drilling walk"""
    direct_children: int
    examined: int = 0
    children: List[ElementSnapshot] = field(default_factory=list)
    skipped_wrappers: int = 0
    element_counts: Dict[str, int] = field(default_factory=dict)
    interactive_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def semantic_count(self) -> int:
        return len(self.children)

    def stats(self, max_children: int) -> InspectionStats:
        # total_children counts every element the walk looked at, so a wrapper
        # holding several semantic elements cannot push semantic_count past it
        return InspectionStats(
            total_children=self.examined,
            direct_children=self.direct_children,
            semantic_count=self.semantic_count,
            shown_count=min(self.semantic_count, max_children),
            omitted_count=max(0, self.semantic_count - max_children),
            skipped_wrappers=self.skipped_wrappers,
        )


def _bump(counts: Dict[str, int], tag: str) -> None:
    counts[tag] = counts.get(tag, 0) + 1


def collect_semantic_children(target: DomNode, include_hidden: bool = False,
                              max_depth: int = 5) -> CollectedChildren:
    """Collect semantic descendants of target, drilling through wrappers.

    Direct children are depth 0. A depth-0 child that is hidden, or that is
    not semantic and therefore drilled (or abandoned at max_depth), counts as
    one skipped wrapper no matter how many levels lie below it.
    """
    result = CollectedChildren(direct_children=len(target.children))

    def walk(elements: List[DomNode], depth: int) -> None:
        for child in elements:
            result.examined += 1
            if depth == 0:
                _bump(result.element_counts, child.tag)

            if not include_hidden and not child.visible:
                if depth == 0:
                    result.skipped_wrappers += 1
                continue

            if is_semantic(child):
                result.children.append(build_snapshot(child, CHILD_TEXT_LIMIT))
                if is_interactive(child):
                    _bump(result.interactive_counts, child.tag)
            elif depth < max_depth:
                if depth == 0:
                    result.skipped_wrappers += 1
                walk(child.children, depth + 1)
            elif depth == 0:
                result.skipped_wrappers += 1

    walk(target.children, 0)
    return result
