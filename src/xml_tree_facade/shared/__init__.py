"""Shared utilities for the XML tree facade.

This module provides the configuration objects, error hierarchy, diagnostic
types and logging helpers used across all facade layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
)
from .errors import (
    ConfigValidationError,
    DocumentIOError,
    DocumentParseError,
    InvalidArgumentError,
    XMLFacadeError,
)
from .config import (
    FacadeConfig,
    FileIOConfig,
    LoggingConfig,
    ParsingConfig,
    SerializationConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ConfigValidationError",
    "DocumentIOError",
    "DocumentParseError",
    "InvalidArgumentError",
    "XMLFacadeError",
    "FacadeConfig",
    "FileIOConfig",
    "LoggingConfig",
    "ParsingConfig",
    "SerializationConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
