"""
Data types for DOM Inspector

Value objects for captured DOM snapshots, inspection results, ancestor chains
and alignment reports. Every model is frozen: results are created per call and
discarded once rendered.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class LayoutPattern(str, Enum):
    """Spatial arrangement of the first two surfaced children"""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    GRID = "grid"
    UNKNOWN = "unknown"


class CenteringKind(str, Enum):
    """How an ancestor was detected as horizontally centered"""
    AUTO_MARGINS = "auto-margins"
    SYMMETRIC_MARGINS = "symmetric-margins"


class Rect(BaseModel):
    """Viewport rectangle rounded to whole pixels"""
    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="Left edge")
    y: int = Field(..., description="Top edge")
    width: int = Field(..., description="Width")
    height: int = Field(..., description="Height")

    @property
    def area(self) -> int:
        return max(self.width * self.height, 0)


class ScrollableOverflow(BaseModel):
    """Genuine overflow of an element, in pixels per axis"""
    model_config = ConfigDict(frozen=True)

    vertical: bool = Field(..., description="Content overflows vertically")
    horizontal: bool = Field(..., description="Content overflows horizontally")
    overflow_y: Optional[int] = Field(None, description="Hidden vertical content in px")
    overflow_x: Optional[int] = Field(None, description="Hidden horizontal content in px")


class DomNode(BaseModel):
    """One element of a captured subtree, as serialized by the capture script"""
    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Lowercase tag name")
    id: Optional[str] = Field(None, description="Element id")
    classes: List[str] = Field(default_factory=list, description="Class list")
    test_ids: Dict[str, str] = Field(default_factory=dict, description="Present test-id attributes, in configured order")
    role: Optional[str] = Field(None, description="role attribute; empty string when present without a value")
    has_onclick: bool = Field(False, description="onclick attribute present")
    has_contenteditable: bool = Field(False, description="contenteditable attribute present")
    direct_text: str = Field("", description="Trimmed text of direct text-node children")
    text: str = Field("", description="Trimmed, truncated textContent")
    rect: Rect = Field(..., description="Bounding client rect")
    visible: bool = Field(True, description="Rendered, non-transparent and non-empty")
    scroll_height: int = Field(0, description="scrollHeight")
    client_height: int = Field(0, description="clientHeight")
    scroll_width: int = Field(0, description="scrollWidth")
    client_width: int = Field(0, description="clientWidth")
    child_count: int = Field(0, description="Number of element children in the live DOM")
    children: List["DomNode"] = Field(default_factory=list, description="Captured children (empty past the capture depth)")

    @property
    def test_id(self) -> Optional[str]:
        """Preferred test id: first configured attribute that carries a value"""
        for value in self.test_ids.values():
            if value:
                return value
        return None

    @property
    def test_id_attribute(self) -> Optional[str]:
        for attr, value in self.test_ids.items():
            if value:
                return attr
        return None


DomNode.model_rebuild()


class TreeCounts(BaseModel):
    """Full-subtree tally produced for top-level containers (body/main)"""
    model_config = ConfigDict(frozen=True)

    counts: Dict[str, int] = Field(default_factory=dict, description="Tag -> element count")
    interactive_counts: Dict[str, int] = Field(default_factory=dict, description="Tag -> interactive element count")
    test_id_count: int = Field(0, description="Descendants carrying any test-id attribute")


class CapturedSubtree(BaseModel):
    """Raw result of the capture script"""
    model_config = ConfigDict(frozen=True)

    root: DomNode
    tree_counts: Optional[TreeCounts] = None


class ElementSnapshot(BaseModel):
    """Element surfaced by an inspection"""
    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Lowercase tag name")
    selector: str = Field(..., description="Selector that identifies the element")
    test_id: Optional[str] = Field(None, description="Test id value")
    test_id_attribute: Optional[str] = Field(None, description="Attribute the test id came from")
    role: Optional[str] = Field(None, description="ARIA role")
    text: str = Field("", description="Truncated text content")
    rect: Rect = Field(..., description="Viewport rectangle")
    is_visible: bool = Field(..., description="Visibility flag")
    is_interactive: bool = Field(..., description="Interactivity flag")
    child_count: int = Field(0, description="Immediate element children")
    scrollable: Optional[ScrollableOverflow] = Field(None, description="Genuine overflow, if any")


class InspectionStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_children: int = Field(..., description="Elements examined by the walk (direct children and drilled descendants)")
    direct_children: int = Field(0, description="Immediate children of the target")
    semantic_count: int = Field(..., description="Semantic elements surfaced before truncation")
    shown_count: int = Field(..., description="Semantic elements kept after maxChildren")
    omitted_count: int = Field(..., description="Semantic elements dropped by maxChildren")
    skipped_wrappers: int = Field(..., description="Depth-0 children that were hidden or drilled through")

    @model_validator(mode="after")
    def _check_ordering(self) -> "InspectionStats":
        if not (self.shown_count <= self.semantic_count <= self.total_children):
            raise ValueError(
                f"inconsistent stats: shown={self.shown_count} "
                f"semantic={self.semantic_count} total={self.total_children}"
            )
        return self


class DeepPreviewCandidate(BaseModel):
    """Semantic element found past maxDepth, with a suggested follow-up call"""
    model_config = ConfigDict(frozen=True)

    element: ElementSnapshot
    depth: int = Field(..., description="Depth below the target, direct children are depth 1")
    area_ratio: float = Field(..., description="Candidate area / target area")
    suggested_selector: str = Field(..., description="Selector for a follow-up inspection")
    suggested_max_depth: int = Field(..., description="maxDepth for a follow-up inspection")


class SelectionInfo(BaseModel):
    """Which of the matched elements was used"""
    model_config = ConfigDict(frozen=True)

    selector: str = Field(..., description="Selector as given by the caller")
    element_index: int = Field(0, description="0-based index of the used match")
    total_count: int = Field(1, description="Number of matches")
    explicit: bool = Field(False, description="Chosen by an explicit elementIndex")


class TargetState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_semantic: bool
    is_interactive: bool


class InspectionResult(BaseModel):
    """Result of a wrapper-drilling DOM inspection"""
    model_config = ConfigDict(frozen=True)

    selection: SelectionInfo
    target: ElementSnapshot
    target_state: TargetState
    max_depth: int
    children: List[ElementSnapshot] = Field(default_factory=list)
    stats: InspectionStats
    element_counts: Dict[str, int] = Field(default_factory=dict)
    interactive_counts: Dict[str, int] = Field(default_factory=dict)
    tree_counts: Optional[TreeCounts] = None
    layout_pattern: LayoutPattern = LayoutPattern.UNKNOWN
    deep_preview: List[DeepPreviewCandidate] = Field(default_factory=list)


class Margins(BaseModel):
    model_config = ConfigDict(frozen=True)

    shorthand: str = "0px"
    top: str = "0px"
    right: str = "0px"
    bottom: str = "0px"
    left: str = "0px"


class Borders(BaseModel):
    model_config = ConfigDict(frozen=True)

    shorthand: str = ""
    top: str = ""
    right: str = ""
    bottom: str = ""
    left: str = ""


class AncestorDiagnostics(BaseModel):
    """CSS facts inferred for one ancestor"""
    model_config = ConfigDict(frozen=True)

    clipping_point: bool = False
    scrollable: Optional[ScrollableOverflow] = None
    width_constraint: bool = False
    centering: Optional[CenteringKind] = None


class AncestorSnapshot(BaseModel):
    """Box model and layout context of one node in the ancestor chain"""
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., description="0 is the starting element")
    tag: str
    test_id: Optional[str] = None
    classes: str = ""
    rect: Rect
    width: str = "auto"
    min_width: str = "0px"
    max_width: str = "none"
    margin: Margins = Field(default_factory=Margins)
    padding: str = "0px"
    display: str = "block"
    overflow: str = "visible"
    overflow_x: str = "visible"
    overflow_y: str = "visible"
    scroll_height: int = 0
    scroll_width: int = 0
    client_height: int = 0
    client_width: int = 0
    border: Borders = Field(default_factory=Borders)
    flex_direction: str = ""
    justify_content: str = ""
    align_items: str = ""
    gap: str = ""
    grid_template_columns: str = ""
    grid_template_rows: str = ""
    position: Optional[str] = None
    z_index: Optional[str] = None
    transform: Optional[str] = None
    diagnostics: AncestorDiagnostics = Field(default_factory=AncestorDiagnostics)

    @model_validator(mode="before")
    @classmethod
    def _clamp_scroll_extents(cls, data):
        # scroll extents never report less than the client box
        if isinstance(data, dict):
            data = dict(data)
            data["scroll_height"] = max(data.get("scroll_height", 0), data.get("client_height", 0))
            data["scroll_width"] = max(data.get("scroll_width", 0), data.get("client_width", 0))
        return data


class AncestorChain(BaseModel):
    model_config = ConfigDict(frozen=True)

    selection: SelectionInfo
    ancestors: List[AncestorSnapshot] = Field(default_factory=list)


class AlignmentMeasure(BaseModel):
    """One compared quantity: edge, center or dimension"""
    model_config = ConfigDict(frozen=True)

    aligned: bool
    value1: int
    value2: int
    diff: int


class ElementDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    descriptor: str = Field(..., description="Compact tag descriptor, e.g. <div #left-panel>")
    short_name: str = Field(..., description="Test id, id or the selector")
    selection: SelectionInfo
    rect: Rect


class AlignmentReport(BaseModel):
    """Edge, center and dimension comparison of two elements"""
    model_config = ConfigDict(frozen=True)

    element1: ElementDescriptor
    element2: ElementDescriptor
    top: AlignmentMeasure
    left: AlignmentMeasure
    right: AlignmentMeasure
    bottom: AlignmentMeasure
    center_horizontal: AlignmentMeasure
    center_vertical: AlignmentMeasure
    width: AlignmentMeasure
    height: AlignmentMeasure
    suggest_ancestor_inspection: bool = False

    @property
    def edges(self) -> Dict[str, AlignmentMeasure]:
        return {"top": self.top, "left": self.left, "right": self.right, "bottom": self.bottom}
