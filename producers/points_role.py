"""Role `points`: parse an inline point annotation such as `2` or `2 bonus`."""

import re
from typing import Optional, Sequence

from core.config import ExtensionConfig
from core.diagnostics import DiagnosticsCollector
from core.schema import DiagnosticKind, PointAnnotation


# Non-negative base-10 integer, nothing else
POINTS_PATTERN = re.compile(r"\d+")


def parse_points(
    body: str,
    diagnostics: DiagnosticsCollector,
    known_categories: Optional[Sequence[str]] = None,
) -> list[PointAnnotation]:
    """
    Parse the role body into a PointAnnotation.
    Returns an empty list (and records a ParseError) when the points are not an integer.
    Unknown categories are kept verbatim and reported as a warning.
    """
    if known_categories is None:
        known_categories = ExtensionConfig().known_categories
    known = tuple(known_categories)
    tokens = body.split()
    raw_points = tokens[0] if tokens else ""
    category = tokens[1] if len(tokens) > 1 else None

    if not POINTS_PATTERN.fullmatch(raw_points):
        diagnostics.error(
            DiagnosticKind.PARSE_ERROR,
            f'Points must be an integer, received: "{raw_points}"',
            source=body,
        )
        return []
    if category and category not in known:
        diagnostics.warning(
            DiagnosticKind.UNKNOWN_CATEGORY,
            f'Unknown point category "{category}"',
            source=body,
        )
    return [PointAnnotation(points=int(raw_points), category=category)]
