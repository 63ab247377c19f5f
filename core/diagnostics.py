"""Diagnostics collector shared by the producers and the host reader."""
import logging
from typing import Optional

from core.schema import Diagnostic, DiagnosticKind, DiagnosticLevel

logger = logging.getLogger(__name__)


class DiagnosticsCollector:
    """Collects errors and warnings for one document build and mirrors them to the log."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def error(self, kind: DiagnosticKind, message: str, source: Optional[str] = None) -> Diagnostic:
        diagnostic = Diagnostic(level=DiagnosticLevel.ERROR, kind=kind, message=message, source=source)
        self._diagnostics.append(diagnostic)
        logger.error(message)
        return diagnostic

    def warning(self, kind: DiagnosticKind, message: str, source: Optional[str] = None) -> Diagnostic:
        diagnostic = Diagnostic(level=DiagnosticLevel.WARNING, kind=kind, message=message, source=source)
        self._diagnostics.append(diagnostic)
        logger.warning(message)
        return diagnostic

    def get_diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def get_errors(self) -> list[Diagnostic]:
        """Return error-level diagnostics only."""
        return [d for d in self._diagnostics if d.level == DiagnosticLevel.ERROR]

    def get_warnings(self) -> list[Diagnostic]:
        return [d for d in self._diagnostics if d.level == DiagnosticLevel.WARNING]

    def __len__(self) -> int:
        return len(self._diagnostics)
