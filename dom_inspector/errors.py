"""
Errors raised by DOM Inspector

Warnings (several matches, skipped wrappers, no semantic children) are never
raised: they annotate successful results.
"""

from typing import Optional


class InspectionError(RuntimeError):
    """Base class for inspection failures reported to the caller."""

    code = "OPERATION_FAILED"


class ElementNotFoundError(InspectionError):
    """Selector resolved to zero elements."""

    code = "NOT_FOUND"

    def __init__(self, selector: str, label: Optional[str] = None):
        self.selector = selector
        self.label = label
        if label:
            message = f"{label} element not found: {selector}"
        else:
            message = f"Element not found: {selector}"
        super().__init__(message)


class HiddenOrZeroSizeError(InspectionError):
    """Selector matched, but the element has no bounding box."""

    code = "HIDDEN_OR_ZERO_SIZE"

    def __init__(self, descriptor: str, label: Optional[str] = None):
        self.descriptor = descriptor
        prefix = f"{label} element" if label else "Element"
        super().__init__(f"{prefix} is hidden or has no dimensions: {descriptor}")


class EvaluationError(InspectionError):
    """The injected page script threw; the browser message is kept verbatim."""

    code = "EVALUATION_FAILED"


class InvalidSelectorError(InspectionError):
    """The selector engine rejected the selector."""

    code = "INVALID_SELECTOR"


class ElementIndexError(InspectionError):
    """Requested 1-based element index is outside the matched range."""

    code = "ELEMENT_INDEX"

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Only {count} element(s) found, cannot select element {index}")
