"""File I/O collaborators for loading and saving documents."""

from .provider import (
    FileIOProvider,
    LocalFileProvider,
    PathType,
    join_path,
)

__all__ = [
    "FileIOProvider",
    "LocalFileProvider",
    "PathType",
    "join_path",
]
