"""File I/O collaborators used by the document lifecycle.

The lifecycle only depends on the two coroutines of ``FileIOProvider``.
``LocalFileProvider`` implements them over the local filesystem and runs
the blocking calls in a worker thread so the event loop keeps running.
"""

import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from xml_tree_facade.shared import DocumentIOError, get_logger

PathType = Union[str, "os.PathLike[str]"]


def join_path(*segments: PathType) -> str:
    """Join path segments using the host platform's separator conventions."""
    if not segments:
        raise ValueError("join_path requires at least one segment")
    return os.path.join(*segments)


class FileIOProvider(ABC):
    """Abstract read/write contract the lifecycle relies on."""

    @abstractmethod
    async def read_all_lines(self, path: PathType) -> List[str]:
        """Read a file and return its lines split on "\\n", without terminators.

        Raises:
            DocumentIOError: If the file cannot be read
        """

    @abstractmethod
    async def write_all(self, text: str, path: PathType) -> None:
        """Write ``text`` verbatim to ``path``, creating or truncating it.

        Raises:
            DocumentIOError: If the file cannot be written
        """


class LocalFileProvider(FileIOProvider):
    """File I/O provider backed by the local filesystem.

    Attributes:
        encoding: Text encoding used for both reading and writing
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.logger = get_logger(__name__, component="local_file_provider")

    async def read_all_lines(self, path: PathType) -> List[str]:
        path_obj = Path(path)
        try:
            content = await asyncio.to_thread(
                path_obj.read_text, encoding=self.encoding
            )
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(
                "File read failed",
                extra={"file_path": str(path_obj)},
                cause=e,
            )
            raise DocumentIOError(
                f"Unable to read {path_obj}: {e}", path=path_obj, operation="read"
            ) from e

        self.logger.debug(
            "File read",
            extra={"file_path": str(path_obj), "characters": len(content)}
        )
        # read_text already folds \r\n and \r into \n; other Unicode line
        # separators such as U+0085 and U+2028 are text, not line breaks
        return content.split("\n")

    async def write_all(self, text: str, path: PathType) -> None:
        path_obj = Path(path)
        try:
            # newline="" keeps the text byte-for-byte, no platform translation
            await asyncio.to_thread(
                path_obj.write_text, text, encoding=self.encoding, newline=""
            )
        except (OSError, UnicodeEncodeError) as e:
            self.logger.error(
                "File write failed",
                extra={"file_path": str(path_obj)},
                cause=e,
            )
            raise DocumentIOError(
                f"Unable to write {path_obj}: {e}", path=path_obj, operation="write"
            ) from e

        self.logger.debug(
            "File written",
            extra={"file_path": str(path_obj), "characters": len(text)}
        )
