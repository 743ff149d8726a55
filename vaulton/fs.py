"""Read-only file access, on disk or in memory."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path, PurePath

PathLike = str | os.PathLike


class FileSystem(ABC):
    """Interface for reading files as text."""

    @abstractmethod
    def read_to_string(self, path: PathLike) -> str:
        """Return the whole file as text; raise ``OSError`` on failure."""


class LocalFileSystem(FileSystem):
    """The real file system."""

    def read_to_string(self, path: PathLike) -> str:
        return Path(path).read_text(encoding="utf-8")


class MemoryFileSystem(FileSystem):
    """Files held in a dictionary. Directories are stored as empty files."""

    def __init__(self) -> None:
        self._files: dict[PurePath, str] = {}

    def with_file(self, path: PathLike, contents: str) -> MemoryFileSystem:
        self._files[PurePath(path)] = str(contents)
        return self

    def with_dir(self, path: PathLike) -> MemoryFileSystem:
        return self.with_file(path, "")

    def has_path(self, path: PathLike) -> bool:
        return PurePath(path) in self._files

    def read_to_string(self, path: PathLike) -> str:
        try:
            return self._files[PurePath(path)]
        except KeyError:
            raise FileNotFoundError(f"File not found: {PurePath(path)}") from None