from pydantic import BaseModel, Field, PrivateAttr
from typing import List, Optional, Dict, Literal, Union, Annotated
from enum import Enum

class DiagnosticLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"

class DiagnosticKind(str, Enum):
    PARSE_ERROR = "ParseError"
    UNKNOWN_CATEGORY = "UnknownCategoryWarning"
    UNKNOWN_MARKUP = "UnknownMarkupWarning"
    UNCLOSED_DIRECTIVE = "UnclosedDirectiveWarning"

class Diagnostic(BaseModel):
    level: DiagnosticLevel
    kind: DiagnosticKind
    message: str
    source: Optional[str] = None

class TotalsMap(BaseModel):
    """Per-document point totals; categories keep first-encounter order."""
    grand_total: int = 0
    categories: Dict[str, int] = {}

    def add(self, points: int, category: Optional[str], grand_total_label: str) -> None:
        self.grand_total += points
        if category is None or category == grand_total_label:
            return
        self.categories[category] = self.categories.get(category, 0) + points

    def bonus_entries(self) -> List[tuple[str, int]]:
        return list(self.categories.items())

    def as_dict(self, grand_total_label: str) -> Dict[str, int]:
        """Flat view keyed by category, with the grand total under its label."""
        flat = {grand_total_label: self.grand_total}
        flat.update(self.categories)
        return flat

class Text(BaseModel):
    type: Literal["text"] = "text"
    value: str = ""

class InlineCode(BaseModel):
    type: Literal["inlineCode"] = "inlineCode"
    value: str = ""

class Strong(BaseModel):
    type: Literal["strong"] = "strong"
    children: List["Node"] = []

class Emphasis(BaseModel):
    type: Literal["emphasis"] = "emphasis"
    children: List["Node"] = []

class Heading(BaseModel):
    type: Literal["heading"] = "heading"
    depth: int = Field(1, ge=1, le=6)
    children: List["Node"] = []

class Paragraph(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    children: List["Node"] = []

class ListBlock(BaseModel):
    type: Literal["list"] = "list"
    ordered: bool = False
    start: int = 1
    children: List["ListItem"] = []

class ListItem(BaseModel):
    type: Literal["listItem"] = "listItem"
    children: List["Node"] = []

class CodeBlock(BaseModel):
    type: Literal["code"] = "code"
    lang: Optional[str] = None
    value: str = ""

class PointAnnotation(BaseModel):
    type: Literal["points"] = "points"
    points: int = Field(..., ge=0)
    category: Optional[str] = None
    children: List[Text] = []

class ReportPlaceholder(BaseModel):
    type: Literal["pointReport"] = "pointReport"
    children: List["Node"] = []
    totals: Optional[TotalsMap] = None

class Root(BaseModel):
    type: Literal["root"] = "root"
    children: List["Node"] = []
    _points_transformed: bool = PrivateAttr(default=False)

    @property
    def points_transformed(self) -> bool:
        return self._points_transformed

    def mark_points_transformed(self) -> None:
        self._points_transformed = True

Node = Annotated[
    Union[
        Text,
        InlineCode,
        Strong,
        Emphasis,
        Heading,
        Paragraph,
        ListBlock,
        ListItem,
        CodeBlock,
        PointAnnotation,
        ReportPlaceholder,
    ],
    Field(discriminator="type"),
]

for _model in (Strong, Emphasis, Heading, Paragraph, ListBlock, ListItem, ReportPlaceholder, Root):
    _model.model_rebuild()
