"""Tests for the error hierarchy, diagnostics and logging helpers."""

import logging

import pytest

from xml_tree_facade.shared import (
    ConfigValidationError,
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    DocumentIOError,
    DocumentParseError,
    InvalidArgumentError,
    XMLFacadeError,
    configure_logging,
    get_logger,
)
from xml_tree_facade.shared.logging import PACKAGE_LOGGER_NAME


class TestErrors:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [
            InvalidArgumentError("bad"),
            DocumentParseError("bad"),
            DocumentIOError("bad"),
            ConfigValidationError("bad"),
        ],
    )
    def test_common_base(self, error):
        """Test every facade error shares one base class."""
        assert isinstance(error, XMLFacadeError)
        assert str(error) == "bad"

    def test_invalid_argument_is_value_error(self):
        """Test generic ValueError handlers still catch bad arguments."""
        error = InvalidArgumentError("Element tag cannot be empty", argument="tag")

        assert isinstance(error, ValueError)
        assert error.argument == "tag"

    def test_parse_error_position(self):
        """Test the parse error position helper."""
        error = DocumentParseError("Premature end of data", line=3, column=7)

        assert error.message == "Premature end of data"
        assert error.position == {"line": 3, "column": 7}
        assert error.diagnostics == []

    def test_parse_error_without_position(self):
        assert DocumentParseError("Document is empty").position is None

    def test_io_error_fields(self, tmp_path):
        """Test the I/O error keeps path and operation."""
        path = tmp_path / "missing.xml"
        error = DocumentIOError("Unable to read", path=path, operation="read")

        assert error.path == str(path)
        assert error.operation == "read"

    def test_config_error_fields(self):
        error = ConfigValidationError("bad", field_name="io.encoding", suggestions=["x"])

        assert error.field_name == "io.encoding"
        assert error.suggestions == ["x"]
        assert ConfigValidationError("bad").suggestions == []


class TestDiagnostics:
    """Test diagnostic entries and severities."""

    @pytest.mark.parametrize(
        ("level_name", "severity"),
        [
            ("FATAL", DiagnosticSeverity.CRITICAL),
            ("ERROR", DiagnosticSeverity.ERROR),
            ("WARNING", DiagnosticSeverity.WARNING),
            ("NONE", DiagnosticSeverity.ERROR),
        ],
    )
    def test_severity_from_level_name(self, level_name, severity):
        """Test lxml level names map onto severities."""
        assert DiagnosticSeverity.from_level_name(level_name) is severity

    def test_entry_position_helpers(self):
        """Test line and column accessors."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.CRITICAL,
            message="Opening and ending tag mismatch",
            component="lxml_parser",
            position={"line": 2, "column": 5},
        )

        assert entry.line == 2
        assert entry.column == 5

    def test_entry_without_position(self):
        entry = DiagnosticEntry(DiagnosticSeverity.ERROR, "oops", "lxml_parser")

        assert entry.line is None
        assert entry.column is None

    def test_entry_validation(self):
        """Test empty message and component are rejected."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "", "lxml_parser")

        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "oops", "")

    def test_entry_to_dict(self):
        """Test dictionary conversion uses the severity name."""
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.CRITICAL,
            message="Document is empty",
            component="lxml_parser",
            position={"line": 1, "column": 1},
            details={"domain": "PARSER"},
            correlation_id="abc",
        )

        assert entry.to_dict() == {
            "severity": "CRITICAL",
            "message": "Document is empty",
            "component": "lxml_parser",
            "position": {"line": 1, "column": 1},
            "details": {"domain": "PARSER"},
            "correlation_id": "abc",
        }


class TestLogging:
    """Test correlation-aware logging."""

    def test_records_carry_component_and_correlation_id(self, caplog):
        """Test structured fields are attached to every record."""
        logger = get_logger(f"{PACKAGE_LOGGER_NAME}.sample", "req-42", "sample")

        with caplog.at_level(logging.INFO, logger=PACKAGE_LOGGER_NAME):
            logger.info("Sample message", extra={"file_path": "a.xml"})

        record = caplog.records[-1]
        assert record.getMessage() == "Sample message"
        assert record.component == "sample"
        assert record.correlation_id == "req-42"
        assert record.file_path == "a.xml"

    def test_component_defaults_to_module_name(self):
        logger = CorrelationLogger("xml_tree_facade.api.lifecycle")

        assert logger.component == "lifecycle"
        assert logger.correlation_id is None

    def test_error_records_cause_without_traceback(self, caplog):
        """Test failures are summarized into fields instead of a traceback."""
        logger = get_logger(f"{PACKAGE_LOGGER_NAME}.sample", "req-1")

        with caplog.at_level(logging.ERROR, logger=PACKAGE_LOGGER_NAME):
            logger.error(
                "Document read failed",
                extra={"file_path": "a.xml"},
                cause=FileNotFoundError("no such file"),
            )

        record = caplog.records[-1]
        assert record.exc_info is None
        assert record.error == "no such file"
        assert record.error_type == "FileNotFoundError"
        assert record.file_path == "a.xml"

    def test_explicit_error_field_is_kept(self, caplog):
        """Test a caller-supplied error message wins over the cause text."""
        logger = get_logger(f"{PACKAGE_LOGGER_NAME}.sample")

        with caplog.at_level(logging.ERROR, logger=PACKAGE_LOGGER_NAME):
            logger.error("Malformed XML", extra={"error": "tag mismatch"}, cause=ValueError("raw"))

        assert caplog.records[-1].error == "tag mismatch"
        assert caplog.records[-1].error_type == "ValueError"

    def test_disabled_level_emits_nothing(self, caplog):
        logger = get_logger(f"{PACKAGE_LOGGER_NAME}.sample")

        with caplog.at_level(logging.WARNING, logger=PACKAGE_LOGGER_NAME):
            logger.info("Hidden")

        assert caplog.records == []

    def test_configure_logging_sets_package_level(self):
        """Test the package logger threshold is adjustable."""
        package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        previous = package_logger.level
        try:
            configure_logging("DEBUG")
            assert package_logger.level == logging.DEBUG
            assert get_logger(f"{PACKAGE_LOGGER_NAME}.sample").is_debug_enabled()

            configure_logging("WARNING")
            assert not get_logger(f"{PACKAGE_LOGGER_NAME}.sample").is_debug_enabled()
        finally:
            package_logger.setLevel(previous)
