"""Tests for the file I/O provider."""

import asyncio
import os
from pathlib import Path

import pytest

from xml_tree_facade.fileio import FileIOProvider, LocalFileProvider, join_path
from xml_tree_facade.shared import DocumentIOError


class TestLocalFileProvider:
    """Test the filesystem-backed provider."""

    def test_write_then_read_lines(self, tmp_path: Path) -> None:
        """Test lines come back without terminators."""
        provider = LocalFileProvider()
        path = tmp_path / "doc.xml"

        asyncio.run(provider.write_all("<r>\n<x/>\n</r>", path))
        lines = asyncio.run(provider.read_all_lines(path))

        assert lines == ["<r>", "<x/>", "</r>"]

    def test_write_is_verbatim(self, tmp_path: Path) -> None:
        """Test no newline translation happens on write."""
        path = tmp_path / "doc.xml"

        asyncio.run(LocalFileProvider().write_all("a\nb", path))

        assert path.read_bytes() == b"a\nb"

    def test_write_truncates_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.xml"
        path.write_text("old content that is longer", encoding="utf-8")

        asyncio.run(LocalFileProvider().write_all("new", path))

        assert path.read_text(encoding="utf-8") == "new"

    def test_crlf_lines_are_split(self, tmp_path: Path) -> None:
        """Test Windows line endings do not leak into lines."""
        path = tmp_path / "doc.xml"
        path.write_bytes(b"<r>\r\n</r>\r\n")

        assert asyncio.run(LocalFileProvider().read_all_lines(path)) == ["<r>", "</r>", ""]

    def test_unicode_line_separators_stay_in_text(self, tmp_path: Path) -> None:
        """Test NEL and LINE SEPARATOR characters are not treated as line breaks."""
        provider = LocalFileProvider()
        path = tmp_path / "doc.xml"
        text = "<r>a\x85b\u2028c\u2029d</r>\n<!-- tail -->"

        asyncio.run(provider.write_all(text, path))
        lines = asyncio.run(provider.read_all_lines(path))

        assert lines == ["<r>a\x85b\u2028c\u2029d</r>", "<!-- tail -->"]
        assert "\n".join(lines) == text

    def test_configured_encoding(self, tmp_path: Path) -> None:
        """Test the provider encodes with its configured codec."""
        path = tmp_path / "doc.xml"

        asyncio.run(LocalFileProvider("latin-1").write_all("café", path))

        assert path.read_bytes() == b"caf\xe9"

    def test_accepts_string_paths(self, tmp_path: Path) -> None:
        path = str(tmp_path / "doc.xml")

        asyncio.run(LocalFileProvider().write_all("<r/>", path))

        assert asyncio.run(LocalFileProvider().read_all_lines(path)) == ["<r/>"]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test read failures become DocumentIOError with the cause chained."""
        path = tmp_path / "missing.xml"

        with pytest.raises(DocumentIOError) as exc_info:
            asyncio.run(LocalFileProvider().read_all_lines(path))

        assert exc_info.value.path == str(path)
        assert exc_info.value.operation == "read"
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        """Test decode errors are reported as read failures."""
        path = tmp_path / "binary.xml"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(DocumentIOError) as exc_info:
            asyncio.run(LocalFileProvider().read_all_lines(path))

        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_missing_directory_on_write_raises(self, tmp_path: Path) -> None:
        """Test write failures become DocumentIOError."""
        path = tmp_path / "no" / "such" / "dir" / "doc.xml"

        with pytest.raises(DocumentIOError) as exc_info:
            asyncio.run(LocalFileProvider().write_all("<r/>", path))

        assert exc_info.value.operation == "write"

    def test_unencodable_text_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.xml"

        with pytest.raises(DocumentIOError):
            asyncio.run(LocalFileProvider("ascii").write_all("café", path))


class TestFileIOProvider:
    """Test the abstract provider contract."""

    def test_cannot_instantiate_abstract_provider(self) -> None:
        with pytest.raises(TypeError):
            FileIOProvider()  # type: ignore

    def test_custom_provider(self) -> None:
        """Test a minimal in-memory provider satisfies the contract."""

        class MemoryProvider(FileIOProvider):
            def __init__(self) -> None:
                self.files = {}

            async def read_all_lines(self, path):
                return self.files[str(path)].split("\n")

            async def write_all(self, text, path):
                self.files[str(path)] = text

        provider = MemoryProvider()
        asyncio.run(provider.write_all("a\nb", "mem.xml"))

        assert asyncio.run(provider.read_all_lines("mem.xml")) == ["a", "b"]


class TestJoinPath:
    """Test path joining."""

    def test_join_segments(self) -> None:
        assert join_path("data", "docs", "a.xml") == os.path.join("data", "docs", "a.xml")

    def test_single_segment(self) -> None:
        assert join_path("a.xml") == "a.xml"

    def test_accepts_path_objects(self, tmp_path: Path) -> None:
        assert join_path(tmp_path, "a.xml") == str(tmp_path / "a.xml")

    def test_no_segments(self) -> None:
        with pytest.raises(ValueError):
            join_path()
