"""
Tests for the deep-preview scanner.
"""

import pytest

from dom_inspector.deep_preview import (
    collector_depth, preview_ceiling, scan_deep_preview, suggested_max_depth,
)
from tests.helpers import dom, nest, node


def body(*children):
    return dom("body", list(children), rect=(0, 0, 1000, 1000))


@pytest.mark.parametrize("max_depth,ceiling", [(1, 12), (5, 12), (7, 12), (10, 15), (15, 20), (30, 20)])
def test_preview_ceiling(max_depth, ceiling):
    assert preview_ceiling(max_depth) == ceiling


def test_collector_depth():
    assert collector_depth(5) == 6
    assert collector_depth(0) == 1


@pytest.mark.parametrize("max_depth", [0, 5, 15, 30])
def test_preview_reads_past_collector(max_depth):
    assert preview_ceiling(max_depth) > collector_depth(max_depth)


def test_suggested_max_depth():
    assert suggested_max_depth(5, 7) == 8
    assert suggested_max_depth(5, 10) == 11
    assert suggested_max_depth(1, 3) == 4


class TestScan:
    def test_finds_candidate_past_max_depth(self):
        button = node("button", rect=(10, 10, 100, 50), text="Deep action",
                      test_ids={"data-testid": "deep-btn"})
        target = body(nest(3, button))

        candidates = scan_deep_preview(target, max_depth=1)

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.depth == 3
        assert candidate.element.tag == "button"
        assert candidate.area_ratio == pytest.approx(0.005)
        assert candidate.suggested_selector == "testid:deep-btn"
        assert candidate.suggested_max_depth == 4

    def test_ignores_semantic_nodes_within_max_depth_but_descends(self):
        deep = node("a", id="more")
        target = body(node("section", [node("div", [node("div", [deep])])]))

        candidates = scan_deep_preview(target, max_depth=2)

        assert [c.element.tag for c in candidates] == ["a"]
        assert candidates[0].depth == 4
        assert candidates[0].suggested_selector == "#more"

    def test_stops_at_limit(self):
        target = body(*[nest(4, node("button")) for _ in range(5)])
        candidates = scan_deep_preview(target, max_depth=2, limit=3)
        assert len(candidates) == 3

    def test_respects_ceiling(self):
        target = body(nest(13, node("button")))
        assert scan_deep_preview(target, max_depth=1) == []

    def test_candidate_at_ceiling_is_found(self):
        target = body(nest(12, node("button")))
        candidates = scan_deep_preview(target, max_depth=1)
        assert [c.depth for c in candidates] == [12]

    def test_hidden_subtrees_skipped(self):
        hidden = node("div", [node("div", [node("button")])], visible=False)
        target = body(hidden)

        assert scan_deep_preview(target, max_depth=1) == []
        assert len(scan_deep_preview(target, include_hidden=True, max_depth=1)) == 1

    def test_zero_area_target(self):
        target = dom("body", [nest(3, node("button", rect=(0, 0, 10, 10)))], rect=(0, 0, 0, 0))
        candidates = scan_deep_preview(target, max_depth=1)
        assert candidates[0].area_ratio == 100.0
