"""Structured logging utilities for the XML tree facade.

Every record emitted by a facade operation carries the component name and the
caller's correlation ID in its ``extra`` fields. Failures are logged once,
where they are raised, as plain records: the exception itself propagates to
the caller, so no traceback is attached here.
"""

import logging
from typing import Any, Dict, Optional

PACKAGE_LOGGER_NAME = "xml_tree_facade"


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information.

    Attributes:
        logger: Underlying standard library logger
        correlation_id: Correlation ID added to every record
        component: Component name added to every record
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split('.')[-1]

    def _log(self, level: int, message: str, extra: Optional[Dict[str, Any]]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        fields = {"component": self.component, "correlation_id": self.correlation_id}
        if extra:
            fields.update(extra)
        self.logger.log(level, message, extra=fields)

    def is_debug_enabled(self) -> bool:
        """Check whether debug records would be emitted.

        Callers use this to skip building expensive fields such as tree paths.
        """
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.WARNING, message, extra)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        """Log a failure that is about to be raised to the caller.

        Args:
            message: Short description of the failed operation
            extra: Operation fields (paths, sizes, positions...)
            cause: Exception that caused the failure; its message and type are
                recorded as ``error`` and ``error_type``
        """
        fields = dict(extra or {})
        if cause is not None:
            fields.setdefault("error", str(cause))
            fields["error_type"] = type(cause).__name__
        self._log(logging.ERROR, message, fields)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for request tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(level: str) -> None:
    """Set the level of the package logger.

    Handlers are left to the application; only the threshold is changed.

    Args:
        level: Standard level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.getLogger(PACKAGE_LOGGER_NAME).setLevel(level)
