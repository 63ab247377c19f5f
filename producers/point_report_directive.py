"""Directive `pointreport`: leave a placeholder that the transform fills in later."""

from typing import Optional

from core.schema import ReportPlaceholder


def point_report(body: Optional[str] = None) -> list[ReportPlaceholder]:
    """Return one empty report placeholder. The directive body is ignored."""
    return [ReportPlaceholder()]
