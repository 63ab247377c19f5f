"""Points extension: role, directive and transform bundled for a document host."""
import logging
from typing import Callable, Optional

from pydantic import BaseModel

from core.config import ExtensionConfig
from core.diagnostics import DiagnosticsCollector
from core.schema import Diagnostic, Root, TotalsMap
from pipeline.markup import parse_document, render_markdown
from pipeline.points_transform import points_transform
from producers.point_report_directive import point_report
from producers.points_role import parse_points

logger = logging.getLogger(__name__)


class TransformAlreadyAppliedError(RuntimeError):
    """Raised when the points transform is asked to run twice on one tree."""


class HookSpec(BaseModel):
    name: str
    doc: str


class BuildResult(BaseModel):
    tree: Root
    totals: TotalsMap
    diagnostics: list[Diagnostic]
    markdown: str


class PointsExtension:
    """
    Defines one role, `points`, which displays points and records them in the total,
    one directive, `pointreport`, which displays the totals for the current document,
    and the `points-transform` that ties them together.
    """

    name = "Points Extension"
    author = "Rowan Cockett"
    license = "MIT"

    role_specs = [HookSpec(name="points", doc="Display points and record the number in the total.")]
    directive_specs = [HookSpec(name="pointreport", doc="Report all of the points in a document.")]
    transform_specs = [
        HookSpec(
            name="points-transform",
            doc="Add up all of the points in a document, and transform the `points` role "
                "and the `pointreport` to text.",
        )
    ]

    def __init__(
        self,
        config: Optional[ExtensionConfig] = None,
        diagnostics: Optional[DiagnosticsCollector] = None,
    ) -> None:
        self._config = config or ExtensionConfig()
        self._diagnostics = diagnostics if diagnostics is not None else DiagnosticsCollector()

    @property
    def config(self) -> ExtensionConfig:
        return self._config

    @property
    def diagnostics(self) -> DiagnosticsCollector:
        return self._diagnostics

    @property
    def roles(self) -> dict[str, Callable[[str], list]]:
        return {"points": self.run_points_role}

    @property
    def directives(self) -> dict[str, Callable[[str], list]]:
        return {"pointreport": point_report}

    def run_points_role(self, body: str) -> list:
        return parse_points(body, self._diagnostics, known_categories=self._config.known_categories)

    def transform(self, tree: Root) -> TotalsMap:
        """Run the points transform on `tree`; each tree may be transformed only once."""
        if tree.points_transformed:
            raise TransformAlreadyAppliedError("Points transform already applied to this document")
        tree.mark_points_transformed()
        return points_transform(tree, config=self._config)

    def build(self, source: str) -> BuildResult:
        """Read `source`, run the transform exactly once and render the result."""
        tree = parse_document(source, self.roles, self.directives, self._diagnostics)
        totals = self.transform(tree)
        logger.info(
            "Built document: %d points total, %d diagnostics",
            totals.grand_total,
            len(self._diagnostics),
        )
        return BuildResult(
            tree=tree,
            totals=totals,
            diagnostics=self._diagnostics.get_diagnostics(),
            markdown=render_markdown(tree),
        )


def build_document(source: str, config: Optional[ExtensionConfig] = None) -> BuildResult:
    """Build one document with a fresh extension and diagnostics collector."""
    return PointsExtension(config=config).build(source)
