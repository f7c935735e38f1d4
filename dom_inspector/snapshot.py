"""
Snapshot helpers shared by the collector and the deep-preview scanner
"""

from .classifier import is_interactive, scrollable_overflow
from .selection import TEST_ID_SHORTHANDS
from .types import DomNode, ElementSnapshot


def selector_for(node: DomNode) -> str:
    """Short selector: test id, then id, then tag plus first two classes"""
    attr = node.test_id_attribute
    if attr:
        return f'[{attr}="{node.test_ids[attr]}"]'
    if node.id:
        return f"#{node.id}"
    classes = ".".join(node.classes[:2])
    if classes:
        return f"{node.tag}.{classes}"
    return node.tag


def follow_up_selector(node: DomNode) -> str:
    """Selector to suggest to the caller, using the testid shorthand when possible"""
    attr = node.test_id_attribute
    if attr:
        for prefix, shorthand_attr in TEST_ID_SHORTHANDS.items():
            if shorthand_attr == attr:
                return f"{prefix}{node.test_ids[attr]}"
    return selector_for(node)


def build_snapshot(node: DomNode, text_limit: int) -> ElementSnapshot:
    return ElementSnapshot(
        tag=node.tag,
        selector=selector_for(node),
        test_id=node.test_id,
        test_id_attribute=node.test_id_attribute,
        role=node.role or None,
        text=node.text.strip()[:text_limit],
        rect=node.rect,
        is_visible=node.visible,
        is_interactive=is_interactive(node),
        child_count=node.child_count,
        scrollable=scrollable_overflow(node),
    )
