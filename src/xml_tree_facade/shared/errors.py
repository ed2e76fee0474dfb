"""Exception hierarchy for the XML tree facade.

Every failure is raised synchronously at the call site that caused it. The
original exception from lxml or the filesystem is always chained as
``__cause__`` so nothing from the underlying diagnostic is lost.
"""

from pathlib import Path
from typing import List, Optional, Union

from .result import DiagnosticEntry


class XMLFacadeError(Exception):
    """Base exception for all XML tree facade errors."""


class InvalidArgumentError(XMLFacadeError, ValueError):
    """Raised for malformed tag names, selector arguments or tree operations.

    Also a ``ValueError`` so callers treating bad input generically keep working.
    """

    def __init__(self, message: str, argument: Optional[str] = None) -> None:
        super().__init__(message)
        self.argument = argument


class DocumentParseError(XMLFacadeError):
    """Raised when XML text is not well-formed.

    Attributes:
        message: Parser message for the first fatal error
        line: Line of the error (1-based) when the parser reported one
        column: Column of the error when the parser reported one
        diagnostics: Every entry of the parser error log
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        diagnostics: Optional[List[DiagnosticEntry]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.diagnostics = diagnostics or []

    @property
    def position(self) -> Optional[dict]:
        """Position of the error as a ``{"line", "column"}`` dict."""
        if self.line is None:
            return None
        return {"line": self.line, "column": self.column or 0}


class DocumentIOError(XMLFacadeError):
    """Raised when the file I/O provider fails to read or write."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        operation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None
        self.operation = operation


class ConfigValidationError(XMLFacadeError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
