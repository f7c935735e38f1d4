"""
Text rendering of inspection results

Compact, line-oriented output meant to be read by an agent: positions as
@ (x,y) WxHpx, status symbols (✓ ✗ ⚡) and copyable follow-up calls.
"""

from typing import List, Optional

from .alignment import js_round
from .classifier import INTERACTIVE_TAG_ORDER, STRUCTURE_TAGS
from .layout import edge_distances, sibling_gap
from .types import (
    AlignmentMeasure, AlignmentReport, AncestorChain, AncestorSnapshot,
    CenteringKind, ElementSnapshot, InspectionResult, LayoutPattern,
    Rect, ScrollableOverflow, SelectionInfo,
)


WRAPPER_TIP_THRESHOLD = 3
ANCESTOR_HINT_THRESHOLD = 6
LARGE_WRAPPER_PCT = 35

_TEST_ID_PREFIXES = ("testid:", "data-test:", "data-cy:", "[data-testid=", "[data-test=", "[data-cy=")


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"


def _interactive_label(tag: str) -> str:
    return "link" if tag == "a" else tag


def _position(rect: Rect) -> str:
    return f"@ ({rect.x},{rect.y}) {rect.width}x{rect.height}px"


# ---------------------------------------------------------------------------
# Selection warnings
# ---------------------------------------------------------------------------

def duplicate_selector_tip(selector: str) -> str:
    if selector.startswith(_TEST_ID_PREFIXES):
        return "\n".join([
            "💡 Tip: Test IDs should be unique. Consider making this test ID unique to avoid ambiguity.",
            "   Primary fix: assign a unique data-testid to the intended element.",
            "   Workaround: if you cannot change markup, pass element_index temporarily.",
        ])
    return "\n".join([
        "💡 Tip: Consider adding a unique data-testid attribute for more reliable selection.",
        "   Primary fix: add data-testid and target it (e.g., testid:submit).",
        "   Workaround: pass element_index only when you can't add test IDs.",
    ])


def element_index_hint(selector: str, total_count: int) -> str:
    trimmed = selector.strip()
    if not trimmed or ">> nth=" in trimmed:
        return ""
    return "\n".join([
        "Workaround: pass element_index (1-based) to target a specific match when you cannot change markup.",
        "   Example: element_index=1 (first match)",
        f"   Or: element_index={total_count} (last match)",
        "Note: positional selection is brittle and may break with layout/content changes.",
    ])


def format_selection_info(info: SelectionInfo) -> str:
    """Warning block for selectors that matched several elements, '' otherwise"""
    uses_nth = ">> nth=" in info.selector
    if info.total_count <= 1:
        if uses_nth:
            return "💡 Tip: Selector uses '>> nth='. Prefer adding a unique data-testid for robust selection."
        return ""

    base = (
        f'⚠ Found {info.total_count} elements matching "{info.selector}", '
        f"using element {info.element_index + 1}"
    )
    if not info.explicit:
        base += " (first visible)"

    hints = [duplicate_selector_tip(info.selector), element_index_hint(info.selector, info.total_count)]
    if uses_nth:
        hints.append("💡 Tip: Avoid relying on '>> nth='; add a unique data-testid instead.")
    return "\n".join([base] + [h for h in hints if h])


# ---------------------------------------------------------------------------
# inspect_dom
# ---------------------------------------------------------------------------

def format_scrollable(scrollable: ScrollableOverflow) -> str:
    icons = []
    if scrollable.vertical:
        icons.append(f"↕️ {scrollable.overflow_y}px")
    if scrollable.horizontal:
        icons.append(f"↔️ {scrollable.overflow_x}px")
    return f"scrollable {' '.join(icons)}"


def _element_label(element: ElementSnapshot) -> str:
    if element.test_id:
        return f'<{element.tag} {element.test_id_attribute}="{element.test_id}">'
    selector = element.selector
    if not selector or selector == element.tag:
        return f"<{element.tag}>"
    if selector.startswith(f"{element.tag}."):
        return f"<{selector}>"
    return f"<{element.tag} {selector}>"


def _child_status(child: ElementSnapshot) -> str:
    parts = ["✓ visible" if child.is_visible else "✗ hidden"]
    if child.is_interactive:
        parts.append("⚡ interactive")
    if child.scrollable:
        parts.append(format_scrollable(child.scrollable))
    if child.child_count > 0:
        parts.append(f"{child.child_count} children")
    if child.test_id:
        parts.append("has test ID")
    return ", ".join(parts)


def _format_overview(result: InspectionResult) -> List[str]:
    tree = result.tree_counts
    lines = ["Page Overview:"]

    structure = ", ".join(
        _plural(tree.counts[tag], tag) for tag in STRUCTURE_TAGS if tree.counts.get(tag, 0) > 0
    )
    if structure:
        lines.append(f"  Structure: {structure}")

    interactive = ", ".join(
        _plural(tree.interactive_counts[tag], _interactive_label(tag))
        for tag in INTERACTIVE_TAG_ORDER if tree.interactive_counts.get(tag, 0) > 0
    )
    if interactive:
        lines.append(f"  Interactive: {interactive}")

    forms = tree.counts.get("form", 0)
    inputs = sum(tree.counts.get(tag, 0) for tag in ("input", "select", "textarea"))
    if forms > 0:
        lines.append(f"  Forms: {_plural(forms, 'form')} with {inputs} input{'' if inputs == 1 else 's'}")

    if tree.test_id_count > 0:
        lines.append(f"  Test Coverage: {_plural(tree.test_id_count, 'element')} with test IDs")

    lines.append("")
    return lines


def _format_children(result: InspectionResult) -> List[str]:
    stats = result.stats
    parent = result.target.rect
    skipped = f", skipped {stats.skipped_wrappers} wrappers" if stats.skipped_wrappers > 0 else ""
    lines = [f"Children ({stats.shown_count} of {stats.semantic_count}{skipped}):", ""]

    for index, child in enumerate(result.children):
        role = f" | {child.role}" if child.role else ""
        lines.append(f"[{index}] {_element_label(child)}{role}")
        lines.append(f"    {_position(child.rect)}")

        left, right, top, bottom = edge_distances(child.rect, parent)
        lines.append(f"    from edges: ←{left}px →{right}px ↑{top}px ↓{bottom}px")

        if index > 0:
            gap = sibling_gap(result.children[index - 1].rect, child.rect)
            if gap is not None:
                direction, px = gap
                arrow = "↓" if direction == "vertical" else "→"
                lines.append(f"    gap from [{index - 1}]: {arrow}{px}px ({direction} layout)")

        if child.text:
            lines.append(f'    "{child.text}"')
        lines.append(f"    {_child_status(child)}")
        lines.append("")

    if stats.omitted_count > 0:
        lines.append(f"... {stats.omitted_count} more semantic children omitted (use max_children to show more)")
        lines.append("")

    if result.layout_pattern != LayoutPattern.UNKNOWN:
        lines.append(f"Layout: {result.layout_pattern.value}")

    if stats.skipped_wrappers >= WRAPPER_TIP_THRESHOLD:
        lines.append("")
        lines.append(f"💡 Tip: Some elements found, but {stats.skipped_wrappers} wrapper containers were skipped.")
        lines.append("   Consider adding test IDs to key elements for easier selection.")

    if stats.skipped_wrappers >= ANCESTOR_HINT_THRESHOLD:
        lines.append("")
        lines.append(f"💡 Lots of wrapper containers ({stats.skipped_wrappers}). To inspect parent constraints:")
        lines.append(f'   inspect_ancestors(selector="{result.selection.selector}")')

    return lines


def _format_deep_preview(result: InspectionResult) -> List[str]:
    lines = [f"Deep preview (first {len(result.deep_preview)} semantic candidates past max_depth):"]
    for candidate in result.deep_preview:
        element = candidate.element
        lines.append(f"  • depth {candidate.depth}: {_element_label(element)}")

        parts = ["✓ visible" if element.is_visible else "✗ hidden"]
        if element.is_interactive:
            parts.append("⚡ interactive")
        if element.scrollable:
            parts.append(format_scrollable(element.scrollable))
        if element.role:
            parts.append(f"role={element.role}")
        if element.child_count > 0:
            parts.append(f"{element.child_count} children")
        lines.append(f"    {', '.join(parts)}")

        pct = js_round(candidate.area_ratio * 100)
        lines.append(f"    size ≈ {pct}% of parent area")
        if 0 < pct < LARGE_WRAPPER_PCT:
            lines.append("    ↘ Large wrapper detected: child occupies a small portion of the container.")

        if element.text:
            lines.append(f'    "{element.text}"')
        lines.append(
            f'    Try: inspect_dom(selector="{candidate.suggested_selector}", '
            f"max_depth={candidate.suggested_max_depth})"
        )
    lines.append("")
    return lines


def _format_empty(result: InspectionResult) -> List[str]:
    stats = result.stats
    state = result.target_state
    max_depth = result.max_depth
    selector = result.selection.selector

    wrapper_note = ""
    if stats.skipped_wrappers > 0:
        wrapper_note = f" (skipped {stats.skipped_wrappers} wrapper{'' if stats.skipped_wrappers == 1 else 's'})"
    lines = [f"Children (0 semantic{wrapper_note}):", ""]

    if state.is_semantic or state.is_interactive:
        lines.append(
            f"Target element is already semantic{' and interactive' if state.is_interactive else ''}; "
            f"no semantic descendants surfaced within max_depth={max_depth}."
        )
        lines.append("")

    if result.interactive_counts:
        lines.append("Interactive elements exist deeper in the tree:")
        for tag in INTERACTIVE_TAG_ORDER:
            count = result.interactive_counts.get(tag, 0)
            if count > 0:
                lines.append(f"  • {_plural(count, _interactive_label(tag))}")
        lines.append("  • Increase max_depth or drill down with more specific selectors.")
    else:
        lines.append("⚠ No semantic or interactive descendants surfaced at this level.")
        lines.append("   Likely dominated by anonymous <div> wrappers without ARIA roles or test IDs.")
    lines.append("")

    if result.deep_preview:
        lines.extend(_format_deep_preview(result))
    elif stats.skipped_wrappers > 0:
        lines.append(f"💡 Increase max_depth (e.g., {max_depth + 3}) to drill through wrapper divs.")
        lines.append("")

    lines.append("Next steps:")
    lines.append(
        f'1. Re-run inspect_dom(selector="{selector}", max_depth={max(max_depth + 3, 8)}) '
        "to include deeper children"
    )
    lines.append("2. Add data-testid attributes or semantic tags to reduce wrapper skipping")

    tree = result.tree_counts
    if tree is not None and not result.interactive_counts and tree.interactive_counts:
        lines.append("")
        lines.append("Selectors to surface known interactive elements:")
        for tag in ("button", "input", "a"):
            if tree.interactive_counts.get(tag, 0) > 0:
                lines.append(f'   inspect_dom(selector="{selector} {tag}")')
    return lines


def format_inspection(result: InspectionResult) -> str:
    target = result.target
    lines: List[str] = []

    warning = format_selection_info(result.selection)
    if warning:
        lines.append(warning)

    lines.append(f"DOM Inspection: {_element_label(target)}")
    lines.append(_position(target.rect))

    state = ["✓ visible" if target.is_visible else "✗ hidden"]
    if result.target_state.is_interactive:
        state.append("⚡ interactive")
    if result.target_state.is_semantic:
        state.append("semantic element")
    if target.test_id:
        state.append(f"testid={target.test_id}")
    if target.role:
        state.append(f"role={target.role}")
    lines.append(f"State: {', '.join(state)}")
    if target.text:
        lines.append(f'Text: "{target.text}"')
    lines.append("")

    if result.tree_counts is not None:
        lines.extend(_format_overview(result))

    if result.stats.semantic_count == 0:
        lines.extend(_format_empty(result))
    else:
        lines.extend(_format_children(result))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# inspect_ancestors
# ---------------------------------------------------------------------------

def _visible_value(value: Optional[str]) -> bool:
    return bool(value) and value != "none" and not value.startswith("0px")


def format_border(ancestor: AncestorSnapshot) -> Optional[str]:
    border = ancestor.border
    if _visible_value(border.shorthand):
        return f"border: {border.shorthand}"
    sides = [
        f"{name}:{value}"
        for name, value in (("top", border.top), ("right", border.right),
                            ("bottom", border.bottom), ("left", border.left))
        if _visible_value(value)
    ]
    return f"border: {', '.join(sides)}" if sides else None


def _axis_overflow(label: str, value: str, overflow: int, icon: str) -> str:
    info = ""
    mark = ""
    if value == "hidden":
        mark = "🔒"
        if overflow:
            info = f" ({overflow}px clipped)"
    elif value in ("auto", "scroll"):
        if overflow:
            mark = icon
            info = f" ({overflow}px scrollable)"
        elif value == "scroll":
            mark = icon
            info = " (no overflow)"
    return f"{label}: {mark} {value}{info}"


def format_overflow(ancestor: AncestorSnapshot) -> Optional[str]:
    scroll = ancestor.diagnostics.scrollable
    vertical = scroll.overflow_y if scroll and scroll.vertical else 0
    horizontal = scroll.overflow_x if scroll and scroll.horizontal else 0
    styled_x = ancestor.overflow_x != "visible"
    styled_y = ancestor.overflow_y != "visible"

    if not (styled_x or styled_y or vertical or horizontal):
        return None

    uniform = ancestor.overflow
    if uniform != "visible" and ancestor.overflow_x == uniform and ancestor.overflow_y == uniform:
        icon = ""
        info = ""
        if uniform == "hidden":
            icon = "🔒"
            clipped = []
            if vertical:
                clipped.append(f"↕️ {vertical}px clipped")
            if horizontal:
                clipped.append(f"↔️ {horizontal}px clipped")
            if clipped:
                info = f" ({', '.join(clipped)})"
        elif uniform in ("auto", "scroll"):
            scrolled = []
            if vertical:
                icon = "↕️"
                scrolled.append(f"↕️ {vertical}px")
            if horizontal:
                icon = "↕️↔️" if vertical else "↔️"
                scrolled.append(f"↔️ {horizontal}px")
            if scrolled:
                info = f" ({', '.join(scrolled)} scrollable)"
            elif uniform == "scroll":
                info = " (no overflow)"
        return f"overflow: {icon} {uniform}{info}"

    parts = []
    if styled_y or vertical:
        parts.append(_axis_overflow("overflow-y", ancestor.overflow_y, vertical, "↕️"))
    if styled_x or horizontal:
        parts.append(_axis_overflow("overflow-x", ancestor.overflow_x, horizontal, "↔️"))
    return ", ".join(parts)


def format_layout_context(ancestor: AncestorSnapshot) -> Optional[str]:
    parts = []
    has_gap = ancestor.gap and ancestor.gap not in ("0px", "normal")

    if ancestor.display in ("flex", "inline-flex"):
        flex = ["flex"]
        if ancestor.flex_direction and ancestor.flex_direction != "row":
            flex.append(ancestor.flex_direction)
        if ancestor.justify_content and ancestor.justify_content not in ("normal", "flex-start"):
            flex.append(f"justify:{ancestor.justify_content}")
        if ancestor.align_items and ancestor.align_items not in ("normal", "stretch"):
            flex.append(f"items:{ancestor.align_items}")
        if has_gap:
            flex.append(f"gap:{ancestor.gap}")
        parts.append(" ".join(flex))

    if ancestor.display in ("grid", "inline-grid"):
        grid = ["grid"]
        if ancestor.grid_template_columns and ancestor.grid_template_columns != "none":
            grid.append(f"cols:{ancestor.grid_template_columns}")
        if ancestor.grid_template_rows and ancestor.grid_template_rows != "none":
            grid.append(f"rows:{ancestor.grid_template_rows}")
        if has_gap:
            grid.append(f"gap:{ancestor.gap}")
        parts.append(" ".join(grid))

    return " | ".join(parts) if parts else None


def _margin_arrows(ancestor: AncestorSnapshot) -> str:
    m = ancestor.margin
    parts = []
    for arrow, value in (("↑", m.top), ("→", m.right), ("↓", m.bottom), ("←", m.left)):
        if value != "0px":
            parts.append(f"{arrow}{value}")
    return f"margin: {' '.join(parts)}"


def format_margin_details(ancestor: AncestorSnapshot) -> Optional[str]:
    m = ancestor.margin
    centering = ancestor.diagnostics.centering
    has_auto = "auto" in m.shorthand or "auto" in (m.top, m.right, m.bottom, m.left)

    if has_auto:
        text = _margin_arrows(ancestor)
        if centering == CenteringKind.AUTO_MARGINS:
            text += " ← Horizontally centered by auto margins"
        return text

    if centering == CenteringKind.SYMMETRIC_MARGINS:
        return f"margin: →{m.right} ←{m.left} ← Horizontally centered (likely margin:0 auto)"

    if m.shorthand == "0px":
        return None

    non_uniform = m.top != m.bottom or m.left != m.right or m.top != m.left
    return _margin_arrows(ancestor) if non_uniform else None


def format_diagnostics(ancestor: AncestorSnapshot) -> List[str]:
    diag = ancestor.diagnostics
    lines = []
    if diag.clipping_point:
        lines.append("🎯 CLIPPING POINT - May clip overflowing children")
    if diag.scrollable:
        axes = []
        if diag.scrollable.vertical:
            axes.append("vertically")
        if diag.scrollable.horizontal:
            axes.append("horizontally")
        lines.append(f"🎯 SCROLLABLE CONTAINER - {' & '.join(axes)}")
    if diag.width_constraint:
        lines.append("🎯 WIDTH CONSTRAINT")
    return lines


def format_ancestor(ancestor: AncestorSnapshot) -> str:
    identifier = f"[{ancestor.index}] <{ancestor.tag}>"
    if ancestor.test_id:
        identifier += f" | testid:{ancestor.test_id}"
    elif ancestor.classes.strip():
        identifier += f" | {' '.join(ancestor.classes.split()[:3])}"

    summary = [f"w:{ancestor.width}"]
    if ancestor.display != "block":
        summary.append(f"display:{ancestor.display}")
    if ancestor.margin.shorthand != "0px":
        summary.append(f"m:{ancestor.margin.shorthand}")
    if ancestor.padding != "0px":
        summary.append(f"p:{ancestor.padding}")
    if ancestor.max_width != "none":
        summary.append(f"max-w:{ancestor.max_width}")
    if ancestor.min_width != "0px":
        summary.append(f"min-w:{ancestor.min_width}")

    lines = [identifier, f"    {_position(ancestor.rect)} | {' '.join(summary)}"]

    for detail in (format_layout_context(ancestor), format_margin_details(ancestor),
                   format_border(ancestor), format_overflow(ancestor)):
        if detail:
            lines.append(f"    {detail}")

    extra = []
    if ancestor.position:
        extra.append(f"position:{ancestor.position}")
    if ancestor.z_index:
        extra.append(f"z-index:{ancestor.z_index}")
    if ancestor.transform:
        extra.append(f"transform:{ancestor.transform}")
    if extra:
        lines.append(f"    {', '.join(extra)}")

    lines.extend(f"    {d}" for d in format_diagnostics(ancestor))
    return "\n".join(lines)


def format_ancestor_chain(chain: AncestorChain) -> str:
    warning = format_selection_info(chain.selection)
    if warning:
        header = f"{warning}\nAncestor Chain:"
    else:
        header = f"Ancestor Chain: {chain.selection.selector}"
    return "\n\n".join([header] + [format_ancestor(a) for a in chain.ancestors])


# ---------------------------------------------------------------------------
# compare_element_alignment
# ---------------------------------------------------------------------------

def format_alignment_measure(m: AlignmentMeasure) -> str:
    if m.aligned and m.diff == 0:
        return f"✓ aligned (both @ {m.value1}px)"
    if m.aligned:
        return f"✓ aligned ({m.value1}px vs {m.value2}px, diff: {m.diff}px)"
    return f"✗ not aligned ({m.value1}px vs {m.value2}px, diff: {m.diff}px)"


def format_dimension_measure(m: AlignmentMeasure) -> str:
    if m.aligned and m.diff == 0:
        return f"✓ same ({m.value1}px)"
    if m.aligned:
        return f"✓ same ({m.value1}px vs {m.value2}px, diff: {m.diff}px)"
    return f"✗ different ({m.value1}px vs {m.value2}px, diff: {m.diff}px)"


def format_alignment(report: AlignmentReport) -> str:
    e1, e2 = report.element1, report.element2
    lines = []

    warnings = [w for w in (format_selection_info(e1.selection), format_selection_info(e2.selection)) if w]
    if warnings:
        lines.append("\n".join(warnings))
        lines.append("")

    lines.extend([
        f"Alignment: {e1.descriptor} vs {e2.descriptor}",
        f"  {e1.short_name}: @ ({e1.rect.x},{e1.rect.y}) {e1.rect.width}×{e1.rect.height}px",
        f"  {e2.short_name}: @ ({e2.rect.x},{e2.rect.y}) {e2.rect.width}×{e2.rect.height}px",
        "",
        "Edges:",
        f"  Top:    {format_alignment_measure(report.top)}",
        f"  Left:   {format_alignment_measure(report.left)}",
        f"  Right:  {format_alignment_measure(report.right)}",
        f"  Bottom: {format_alignment_measure(report.bottom)}",
        "",
        "Centers:",
        f"  Horizontal: {format_alignment_measure(report.center_horizontal)}",
        f"  Vertical:   {format_alignment_measure(report.center_vertical)}",
        "",
        "Dimensions:",
        f"  Width:  {format_dimension_measure(report.width)}",
        f"  Height: {format_dimension_measure(report.height)}",
    ])

    if report.suggest_ancestor_inspection:
        lines.append("")
        lines.append("💡 Alignment issue detected. Check if parent layout affects positioning:")
        lines.append(f'   inspect_ancestors(selector="{e1.selection.selector}")')
        lines.append(f'   inspect_ancestors(selector="{e2.selection.selector}")')

    return "\n".join(lines)
