"""
Tests for the semantic classifier rules.
"""

import pytest

from dom_inspector.classifier import (
    has_aria_role, has_genuine_overflow, has_significant_direct_text, has_test_id,
    is_interactive, is_semantic, scrollable_overflow,
)
from tests.helpers import dom


class TestSemanticRules:
    """Each rule alone makes a node semantic."""

    def test_plain_div_is_wrapper(self):
        assert not is_semantic(dom("div"))

    @pytest.mark.parametrize("tag", ["header", "nav", "form", "button", "li", "svg", "dialog", "summary"])
    def test_semantic_tags(self, tag):
        assert is_semantic(dom(tag))

    @pytest.mark.parametrize("tag", ["span", "div", "label", "strong"])
    def test_non_semantic_tags(self, tag):
        assert not is_semantic(dom(tag))

    def test_test_id_attribute(self):
        node = dom("div", test_ids={"data-cy": "card"})
        assert has_test_id(node)
        assert is_semantic(node)

    def test_empty_test_id_attribute_still_counts(self):
        node = dom("div", test_ids={"data-testid": ""})
        assert is_semantic(node)
        assert node.test_id is None

    def test_role_present_even_when_empty(self):
        assert has_aria_role(dom("div", role=""))
        assert not has_aria_role(dom("div"))

    def test_inline_handlers(self):
        assert is_semantic(dom("div", has_onclick=True))
        assert is_semantic(dom("span", has_contenteditable=True))

    def test_direct_text_must_exceed_ten_characters(self):
        assert not has_significant_direct_text(dom("div", direct_text="abcdefghij"))
        assert has_significant_direct_text(dom("div", direct_text="abcdefghijk"))
        assert not has_significant_direct_text(dom("div", direct_text="   short   "))

    def test_overflow_requires_real_scroll_extent(self):
        assert not has_genuine_overflow(dom("div", scroll_height=100, client_height=100))
        assert has_genuine_overflow(dom("div", scroll_height=300, client_height=100))
        assert has_genuine_overflow(dom("div", scroll_width=900, client_width=400))


class TestInteractivity:
    @pytest.mark.parametrize("tag", ["button", "a", "input", "select", "textarea"])
    def test_interactive_tags(self, tag):
        assert is_interactive(dom(tag))

    def test_role_button(self):
        assert is_interactive(dom("div", role="button"))
        assert not is_interactive(dom("div", role="navigation"))

    def test_handlers(self):
        assert is_interactive(dom("div", has_onclick=True))
        assert is_interactive(dom("div", has_contenteditable=True))

    def test_headings_are_not_interactive(self):
        assert not is_interactive(dom("h1"))


class TestScrollableOverflow:
    def test_none_without_overflow(self):
        assert scrollable_overflow(dom("div")) is None

    def test_vertical_amount(self):
        overflow = scrollable_overflow(dom("div", scroll_height=450, client_height=200))
        assert overflow.vertical
        assert not overflow.horizontal
        assert overflow.overflow_y == 250
        assert overflow.overflow_x is None

    def test_both_axes(self):
        overflow = scrollable_overflow(dom(
            "div", scroll_height=250, client_height=200, scroll_width=700, client_width=500,
        ))
        assert overflow.vertical and overflow.horizontal
        assert (overflow.overflow_y, overflow.overflow_x) == (50, 200)
