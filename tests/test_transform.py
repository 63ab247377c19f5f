"""Tests for the points transform."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
from core.schema import (
    Emphasis,
    InlineCode,
    ListBlock,
    ListItem,
    Paragraph,
    PointAnnotation,
    ReportPlaceholder,
    Root,
    Strong,
    Text,
    TotalsMap,
)
from core.config import ExtensionConfig
from pipeline.markup import render_markdown, to_text
from pipeline.points_transform import points_transform, render_points, walk


def make_tree(*annotations, reports=1):
    children = [ReportPlaceholder() for _ in range(reports)]
    for i, (points, category) in enumerate(annotations):
        children.append(
            ListItem(children=[Text(value=f"Task {i + 1}: "), PointAnnotation(points=points, category=category)])
        )
    return Root(children=children)


def annotations_of(tree):
    return [n for n in walk(tree) if isinstance(n, PointAnnotation)]


def reports_of(tree):
    return [n for n in walk(tree) if isinstance(n, ReportPlaceholder)]


def test_totals_and_report_text():
    tree = make_tree((2, None), (2, "bonus"), (1, None))
    totals = points_transform(tree)
    assert totals.grand_total == 5
    assert totals.categories == {"bonus": 2}
    (report,) = reports_of(tree)
    assert to_text(report) == "Total Points: 5 (+ 2 bonus points)"


def test_report_label_is_bold():
    tree = make_tree((1, None))
    points_transform(tree)
    (report,) = reports_of(tree)
    assert isinstance(report.children[0], Strong)
    assert to_text(report.children[0]) == "Total Points:"
    assert report.children[1] == Text(value=" 1")


@pytest.mark.parametrize(
    "points, category, expected",
    [
        (1, None, "(1 point)"),
        (2, None, "(2 points)"),
        (0, None, "(0 points)"),
        (1, "bonus", "(1 bonus point)"),
        (3, "bonus", "(3 bonus points)"),
    ],
)
def test_annotation_text(points, category, expected):
    tree = make_tree((points, category))
    points_transform(tree)
    (annotation,) = annotations_of(tree)
    assert annotation.children == [Text(value=expected)]
    assert render_points(PointAnnotation(points=points, category=category)) == expected


def test_empty_document_reports_zero():
    tree = make_tree()
    totals = points_transform(tree)
    assert totals == TotalsMap()
    assert to_text(reports_of(tree)[0]) == "Total Points: 0"


def test_multiple_reports_render_identically():
    tree = make_tree((4, None), (1, "bonus"), reports=2)
    points_transform(tree)
    first, second = reports_of(tree)
    assert to_text(first) == to_text(second) == "Total Points: 5 (+ 1 bonus points)"
    assert first.totals == second.totals
    assert first.totals is not second.totals


def test_category_order_is_first_encounter():
    tree = make_tree((1, "zeta"), (9, "alpha"), (2, "zeta"))
    totals = points_transform(tree)
    assert list(totals.categories) == ["zeta", "alpha"]
    assert to_text(reports_of(tree)[0]) == "Total Points: 12 (+ 3 zeta points, + 9 alpha points)"


def test_unknown_category_still_counted():
    totals = points_transform(make_tree((2, "xyz")))
    assert totals.categories == {"xyz": 2}
    assert totals.grand_total == 2


def test_categories_compared_exactly():
    totals = points_transform(make_tree((1, "Bonus"), (1, "bonus")))
    assert totals.categories == {"Bonus": 1, "bonus": 1}


def test_grand_total_label_category_merges():
    tree = make_tree((2, "all"), (1, None))
    totals = points_transform(tree)
    assert totals.grand_total == 3
    assert totals.categories == {}
    assert annotations_of(tree)[0].children == [Text(value="(2 all points)")]
    assert to_text(reports_of(tree)[0]) == "Total Points: 3"


def test_custom_grand_total_label():
    config = ExtensionConfig(grand_total_label="total")
    totals = points_transform(make_tree((2, "all"), (1, "total")), config=config)
    assert totals.grand_total == 3
    assert totals.categories == {"all": 2}
    assert totals.as_dict("total") == {"total": 3, "all": 2}


def test_report_totals_attached():
    tree = make_tree((2, None), (3, "bonus"))
    totals = points_transform(tree)
    report = reports_of(tree)[0]
    assert report.totals == totals
    assert report.totals.as_dict("all") == {"all": 5, "bonus": 3}


def test_annotations_nested_in_paragraphs():
    tree = Root(
        children=[
            Paragraph(children=[Strong(children=[PointAnnotation(points=2)])]),
            ReportPlaceholder(),
            Paragraph(children=[Text(value="see "), PointAnnotation(points=1, category="bonus")]),
        ]
    )
    totals = points_transform(tree)
    assert totals.grand_total == 3
    assert to_text(tree.children[1]) == "Total Points: 3 (+ 1 bonus points)"


def test_walk_is_document_order():
    tree = make_tree((1, "a"), (1, "b"))
    kinds = [n.type for n in walk(tree)]
    assert kinds == ["pointReport", "listItem", "text", "points", "listItem", "text", "points"]


def test_walk_descends_lists_and_emphasis():
    tree = Root(
        children=[
            ReportPlaceholder(),
            ListBlock(
                ordered=True,
                children=[
                    ListItem(children=[Emphasis(children=[PointAnnotation(points=2)])]),
                    ListItem(children=[InlineCode(value="{points}`7`"), PointAnnotation(points=1, category="bonus")]),
                ],
            ),
        ]
    )
    totals = points_transform(tree)
    assert totals.grand_total == 3
    assert to_text(tree.children[0]) == "Total Points: 3 (+ 1 bonus points)"


def test_bold_annotation_not_double_bolded():
    tree = Root(children=[Paragraph(children=[Text(value="Task "), Strong(children=[PointAnnotation(points=2)])])])
    points_transform(tree)
    assert render_markdown(tree) == "Task **(2 points)**\n"
