"""Diagnostic types for XML tree facade operations.

This module defines the diagnostic records attached to parse failures so that
callers can inspect every message the underlying parser reported.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Warnings about potential issues
    ERROR = auto()      # Errors reported by the parser
    CRITICAL = auto()   # Fatal errors that stopped parsing

    @classmethod
    def from_level_name(cls, level_name: str) -> "DiagnosticSeverity":
        """Map an lxml error log level name (``ERROR``, ``FATAL``...) to a severity."""
        if level_name == "FATAL":
            return cls.CRITICAL
        return cls.__members__.get(level_name, cls.ERROR)


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    @property
    def line(self) -> Optional[int]:
        """Line number of the diagnostic, if known."""
        return self.position.get("line") if self.position else None

    @property
    def column(self) -> Optional[int]:
        """Column number of the diagnostic, if known."""
        return self.position.get("column") if self.position else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to dictionary representation."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": dict(self.position) if self.position else None,
            "details": dict(self.details) if self.details else None,
            "correlation_id": self.correlation_id,
        }
