"""
DOM Inspector Package

Structural analysis of live web pages through Playwright: semantic children
behind wrapper divs, ancestor layout constraints and two-element alignment.
"""

from .browser_session import BrowserSession
from .config import (
    AncestorConfig, BrowserConfig, InspectionConfig, InspectorConfig, load_config,
)
from .dom_inspector import DOMInspector
from .errors import (
    ElementIndexError, ElementNotFoundError, EvaluationError,
    HiddenOrZeroSizeError, InspectionError, InvalidSelectorError,
)
from .mcp_server import create_server
from .mcp_tools import MCPInspectorTools
from .types import (
    AlignmentReport, AncestorChain, AncestorSnapshot, DeepPreviewCandidate,
    ElementSnapshot, InspectionResult, InspectionStats, LayoutPattern,
)

__version__ = "0.1.0"

__all__ = [
    "BrowserSession",
    "AncestorConfig",
    "BrowserConfig",
    "InspectionConfig",
    "InspectorConfig",
    "load_config",
    "DOMInspector",
    "ElementIndexError",
    "ElementNotFoundError",
    "EvaluationError",
    "HiddenOrZeroSizeError",
    "InspectionError",
    "InvalidSelectorError",
    "create_server",
    "MCPInspectorTools",
    "AlignmentReport",
    "AncestorChain",
    "AncestorSnapshot",
    "DeepPreviewCandidate",
    "ElementSnapshot",
    "InspectionResult",
    "InspectionStats",
    "LayoutPattern",
]
