"""Producers for the `points` role and the `pointreport` directive."""

from producers.points_role import parse_points
from producers.point_report_directive import point_report

__all__ = [
    "parse_points",
    "point_report",
]
