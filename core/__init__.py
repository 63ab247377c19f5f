"""Core schema, configuration and diagnostics for the points extension."""

from core.schema import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticLevel,
    CodeBlock,
    Emphasis,
    InlineCode,
    ListBlock,
    Heading,
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
from core.config import ConfigError, ExtensionConfig, load_config
from core.diagnostics import DiagnosticsCollector

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLevel",
    "CodeBlock",
    "Emphasis",
    "InlineCode",
    "ListBlock",
    "Heading",
    "ListItem",
    "Node",
    "Paragraph",
    "PointAnnotation",
    "ReportPlaceholder",
    "Root",
    "Strong",
    "Text",
    "TotalsMap",
    "ConfigError",
    "ExtensionConfig",
    "load_config",
    "DiagnosticsCollector",
]
