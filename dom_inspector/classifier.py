"""
Semantic classifier

Decides whether a captured DOM node is worth surfacing on its own or is a
plain wrapper to drill through. Each rule is a named predicate; a node is
semantic when any rule holds.
"""

from typing import Callable, Optional, Tuple

from .types import DomNode, ScrollableOverflow


SEMANTIC_TAGS = frozenset({
    "header", "nav", "main", "article", "section", "aside", "footer",
    "form", "button", "input", "select", "textarea", "a",
    "h1", "h2", "h3", "h4", "h5", "h6", "p",
    "ul", "ol", "li", "table",
    "img", "video", "audio", "svg", "canvas", "iframe",
    "dialog", "details", "summary",
})

INTERACTIVE_TAGS = frozenset({"button", "a", "input", "select", "textarea"})

# Landmarks reported in the page overview, in display order
STRUCTURE_TAGS = ("header", "nav", "main", "article", "section", "aside", "footer")

# Interactive tags in display order
INTERACTIVE_TAG_ORDER = ("button", "a", "input", "select", "textarea")

TOP_LEVEL_CONTAINERS = frozenset({"body", "main"})

MIN_DIRECT_TEXT_LENGTH = 10


def has_semantic_tag(node: DomNode) -> bool:
    return node.tag in SEMANTIC_TAGS


def has_test_id(node: DomNode) -> bool:
    return bool(node.test_ids)


def has_aria_role(node: DomNode) -> bool:
    # role="" still counts: the attribute is present
    return node.role is not None


def has_inline_interaction(node: DomNode) -> bool:
    return node.has_onclick or node.has_contenteditable


def has_significant_direct_text(node: DomNode) -> bool:
    return len(node.direct_text.strip()) > MIN_DIRECT_TEXT_LENGTH


def has_vertical_overflow(node: DomNode) -> bool:
    return node.scroll_height > node.client_height


def has_horizontal_overflow(node: DomNode) -> bool:
    return node.scroll_width > node.client_width


def has_genuine_overflow(node: DomNode) -> bool:
    """Rendered overflow only; an overflow:auto declaration alone does not count"""
    return has_vertical_overflow(node) or has_horizontal_overflow(node)


SEMANTIC_RULES: Tuple[Callable[[DomNode], bool], ...] = (
    has_semantic_tag,
    has_test_id,
    has_aria_role,
    has_inline_interaction,
    has_significant_direct_text,
    has_genuine_overflow,
)


def is_semantic(node: DomNode) -> bool:
    """Whether a node is meaningful enough to surface without drilling"""
    return any(rule(node) for rule in SEMANTIC_RULES)


def is_interactive(node: DomNode) -> bool:
    return (
        node.tag in INTERACTIVE_TAGS
        or node.has_onclick
        or node.has_contenteditable
        or node.role == "button"
    )


def scrollable_overflow(node: DomNode) -> Optional[ScrollableOverflow]:
    vertical = has_vertical_overflow(node)
    horizontal = has_horizontal_overflow(node)
    if not (vertical or horizontal):
        return None
    return ScrollableOverflow(
        vertical=vertical,
        horizontal=horizontal,
        overflow_y=node.scroll_height - node.client_height if vertical else None,
        overflow_x=node.scroll_width - node.client_width if horizontal else None,
    )
