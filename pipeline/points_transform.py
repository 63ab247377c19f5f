"""
Points transform: add up every `points` annotation in a document and render
both the annotations and the `pointreport` placeholders to text.
Runs once per document, after the tree is fully assembled.
"""
import logging
from typing import Iterator, Optional

from core.config import ExtensionConfig
from core.schema import (
    CodeBlock,
    Emphasis,
    Heading,
    InlineCode,
    ListBlock,
    ListItem,
    Node,
    Paragraph,
    PointAnnotation,
    ReportPlaceholder,
    Root,
    Strong,
    Text,
    TotalsMap,
)

logger = logging.getLogger(__name__)


def walk(node: Root | Node) -> Iterator[Node]:
    """Yield every node below `node` in document (pre-)order."""
    match node:
        case Root(children=children) | Heading(children=children) | Paragraph(children=children) \
                | ListBlock(children=children) | ListItem(children=children) \
                | Strong(children=children) | Emphasis(children=children):
            for child in children:
                yield child
                yield from walk(child)
        case PointAnnotation() | ReportPlaceholder():
            # Annotation and report content is owned by this transform, never walked.
            return
        case Text() | InlineCode() | CodeBlock():
            return


def render_points(annotation: PointAnnotation) -> str:
    category = f"{annotation.category} " if annotation.category else ""
    plural = "" if annotation.points == 1 else "s"
    return f"({annotation.points} {category}point{plural})"


def render_bonus(totals: TotalsMap) -> str:
    return ", ".join(f"+ {points} {category} points" for category, points in totals.bonus_entries())


def render_report(totals: TotalsMap) -> list[Node]:
    bonus = render_bonus(totals)
    suffix = f" ({bonus})" if bonus else ""
    return [
        Strong(children=[Text(value="Total Points:")]),
        Text(value=f" {totals.grand_total}{suffix}"),
    ]


def points_transform(tree: Root, config: Optional[ExtensionConfig] = None) -> TotalsMap:
    """
    Compute document totals and rewrite annotations and report placeholders in place.

    The grand total counts every annotation; each category gets its own subtotal in
    first-encounter order. A category named like the configured grand total label only
    counts toward the grand total. Not idempotent: call once per tree.
    """
    grand_total_label = (config or ExtensionConfig()).grand_total_label
    totals = TotalsMap()
    annotations: list[PointAnnotation] = []
    reports: list[ReportPlaceholder] = []

    for node in walk(tree):
        match node:
            case PointAnnotation():
                annotations.append(node)
            case ReportPlaceholder():
                reports.append(node)
            case _:
                pass

    for annotation in annotations:
        totals.add(annotation.points, annotation.category, grand_total_label=grand_total_label)
        annotation.children = [Text(value=render_points(annotation))]

    for report in reports:
        report.totals = totals.model_copy(deep=True)
        report.children = render_report(totals)

    logger.debug(
        "Points transform: %d annotations, %d reports, totals=%s",
        len(annotations),
        len(reports),
        totals.as_dict(grand_total_label),
    )
    return totals
