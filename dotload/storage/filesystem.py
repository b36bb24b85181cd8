"""
Абстракция файловой системы для загрузчика.

Загрузчику нужны только две операции: stat (существует ли путь и директория ли это)
и open на чтение. Боевой вариант: OSFileSystem. Для тестов и встроенного
содержимого есть MemoryFileSystem.
"""

from __future__ import annotations

import io
import posixpath
import stat
from pathlib import Path
from typing import Mapping, Protocol, TextIO

from dotload.domain.models import FileInfo


class FileSystem(Protocol):
    def stat(self, path: str) -> FileInfo:
        """Бросает FileNotFoundError, если пути нет, и OSError при прочих сбоях."""
        ...

    def open(self, path: str) -> TextIO:
        ...


class OSFileSystem:
    """Реальная ФС; относительные пути считаются от root."""

    def __init__(self, root: str | Path = ".") -> None:
        root_path = Path(root)
        if not root_path.exists():
            raise FileNotFoundError(f"filesystem root does not exist: {root_path}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"filesystem root is not a directory: {root_path}")
        self._root = root_path

    def _full_path(self, path: str) -> Path:
        return self._root / path

    def stat(self, path: str) -> FileInfo:
        full = self._full_path(path)
        # Path.stat пробрасывает FileNotFoundError / PermissionError как есть
        info = full.stat()
        return FileInfo(path=path, is_dir=stat.S_ISDIR(info.st_mode))

    def open(self, path: str) -> TextIO:
        return self._full_path(path).open("r", encoding="utf-8", newline="\n")


class MemoryFileSystem:
    """
    ФС в памяти. Ключи: пути через "/", значения: содержимое файлов.

    Директории не хранятся явно: "app" существует, если есть хотя бы один файл "app/...".
    Корень "." существует всегда.
    """

    def __init__(self, files: Mapping[str, str | bytes] | None = None) -> None:
        self._files: dict[str, str] = {}
        for name, content in (files or {}).items():
            if isinstance(content, bytes):
                content = content.decode("utf-8")
            self._files[_clean(name)] = content

    def _is_dir(self, path: str) -> bool:
        if path == ".":
            return True
        prefix = path + "/"
        return any(name.startswith(prefix) for name in self._files)

    def stat(self, path: str) -> FileInfo:
        cleaned = _clean(path)
        if cleaned in self._files:
            return FileInfo(path=path, is_dir=False)
        if self._is_dir(cleaned):
            return FileInfo(path=path, is_dir=True)
        raise FileNotFoundError(f"no such file or directory: {path}")

    def open(self, path: str) -> TextIO:
        cleaned = _clean(path)
        if cleaned not in self._files:
            if self._is_dir(cleaned):
                raise IsADirectoryError(f"is a directory: {path}")
            raise FileNotFoundError(f"no such file or directory: {path}")
        return io.StringIO(self._files[cleaned])


def _clean(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/")) if path else "."
