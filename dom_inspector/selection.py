"""
Selector normalization and element selection

Expands testid shorthands, repairs common escaping mistakes and picks one
element out of a Playwright locator that may match several.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from playwright.async_api import Error as PlaywrightError, Locator

from .errors import ElementIndexError, ElementNotFoundError, InvalidSelectorError
from .types import SelectionInfo


logger = logging.getLogger(__name__)


TEST_ID_SHORTHANDS = {
    "testid:": "data-testid",
    "data-test:": "data-test",
    "data-cy:": "data-cy",
}

_STANDALONE_ID_RE = re.compile(r"^#[^\s>+~]+$")

_SELECTOR_TIPS = "\n".join([
    "💡 Tips:",
    "  • Tailwind arbitrary values need escaping in class selectors: .min-w-\\[300px\\]",
    "  • Colons in class names must be escaped: .dark\\:bg-gray-700",
    "  • Prefer robust selectors: use testid:name or [data-testid=\"...\"]",
    "  • Attribute selectors avoid escaping issues: [class*=\"min-w-[300px]\"]",
    "",
    "Examples:",
    "  ✓ .min-w-\\[300px\\] .flex-1",
    "  ✓ testid:submit-button",
    "  ✓ #login-form",
])


def normalize_selector(selector: str) -> str:
    """Expand shorthands and fix escaping so Playwright accepts the selector.

    testid:foo becomes [data-testid="foo"] (likewise data-test: and data-cy:).
    A standalone id containing ':', '[', ']' or backslashes switches to
    Playwright's id= engine. Elsewhere, runs of backslashes before '[', ']'
    and ':' collapse to a single one.
    """
    for prefix, attr in TEST_ID_SHORTHANDS.items():
        if selector.startswith(prefix):
            return f'[{attr}="{selector[len(prefix):]}"]'

    trimmed = selector.strip()

    if _STANDALONE_ID_RE.match(trimmed):
        token = trimmed[1:]
        if any(ch in token for ch in ("\\", ":", "[", "]")):
            unescaped = re.sub(r"\\+([:\[\]])", r"\1", token)
            return f"id={unescaped}"
        return trimmed

    return re.sub(r"\\{2,}(?=[\[\]:])", r"\\", trimmed)


def sanitize_engine_message(message: str) -> str:
    """Keep only the syntax error part of a selector engine message"""
    if not message:
        return ""
    for phrase in ("is not a valid selector.", "is not a valid selector"):
        idx = message.find(phrase)
        if idx != -1:
            return message[:idx + len(phrase)].strip()

    lines = [
        line for line in message.splitlines()
        if not re.match(r"^\s*at\b", line) and not re.search(r"<anonymous>:\d+:\d+", line)
    ]
    return "\n".join(lines).strip()


def _looks_like_selector_error(message: str) -> bool:
    return any(marker in message for marker in (
        "Unexpected token", "Invalid selector", "SyntaxError", "selector",
    ))


async def count_matches(locator: Locator, original_selector: str) -> int:
    """Number of matches; selector syntax errors become InvalidSelectorError"""
    try:
        return await locator.count()
    except PlaywrightError as e:
        message = str(e)
        if not _looks_like_selector_error(message):
            raise
        concise = sanitize_engine_message(message)
        text = f'Invalid CSS selector: "{original_selector}"\n\n'
        if concise:
            text += f"Selector syntax error: {concise}\n\n"
        raise InvalidSelectorError(text + _SELECTOR_TIPS) from e


@dataclass
class PreferredElement:
    """Locator narrowed to one match, with the selection bookkeeping"""
    locator: Locator
    info: SelectionInfo


async def select_preferred_element(locator: Locator, original_selector: str,
                                   element_index: Optional[int] = None,
                                   not_found_label: Optional[str] = None) -> PreferredElement:
    """Pick one match: explicit 1-based index, the only match, the first visible
    match, or the first match when none is visible."""
    count = await count_matches(locator, original_selector)
    if count == 0:
        raise ElementNotFoundError(original_selector, not_found_label)

    if element_index is not None:
        if element_index < 1 or element_index > count:
            raise ElementIndexError(element_index, count)
        return PreferredElement(
            locator=locator.nth(element_index - 1),
            info=SelectionInfo(
                selector=original_selector, element_index=element_index - 1, total_count=count, explicit=True,
            ),
        )

    if count == 1:
        return PreferredElement(
            locator=locator.first,
            info=SelectionInfo(selector=original_selector, element_index=0, total_count=1),
        )

    for i in range(count):
        nth = locator.nth(i)
        if await nth.is_visible():
            logger.debug(f"Selector {original_selector!r}: using visible match {i + 1} of {count}")
            return PreferredElement(
                locator=nth,
                info=SelectionInfo(selector=original_selector, element_index=i, total_count=count),
            )

    logger.debug(f"Selector {original_selector!r}: no visible match among {count}, using first")
    return PreferredElement(
        locator=locator.first,
        info=SelectionInfo(selector=original_selector, element_index=0, total_count=count),
    )
