"""Document pipeline: host reader → points transform → rendered Markdown."""

from pipeline.points_transform import points_transform
from pipeline.extension import PointsExtension, build_document

__all__ = ["points_transform", "PointsExtension", "build_document"]
