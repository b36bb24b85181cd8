from __future__ import annotations

import logging
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from typing import TextIO

from dotload.errors import EnvWriteError, LoadError, ReleaseError
from dotload.storage.filesystem import FileSystem

logger = logging.getLogger(__name__)

_QUOTES = ('"', "'")


def strip_quotes(value: str) -> str:
    """Снимает ровно одну пару одинаковых внешних кавычек, без экранирования."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def parse_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if not line or line.startswith("#"):
        return None

    eq = line.find("=")
    # нет "=" или пустой ключ, строку молча пропускаем
    if eq <= 0:
        return None

    key = line[:eq].strip()
    value = strip_quotes(line[eq + 1:].strip())
    if not key:
        return None
    return key, value


def iter_lines(handle: TextIO, path: str) -> Iterator[str]:
    while True:
        try:
            raw = handle.readline()
        except (OSError, ValueError) as exc:
            raise LoadError(f"read {path}: {exc}", path=path) from exc
        if not raw:
            return
        yield raw.strip()


@contextmanager
def open_scoped(fs: FileSystem, path: str) -> Iterator[TextIO]:
    """
    Открывает файл и гарантированно закрывает его на любом выходе.

    Если упали и обработка, и закрытие, обе ошибки уходят вместе в ReleaseError.
    """
    try:
        handle = fs.open(path)
    except OSError as exc:
        raise LoadError(f"open {path!r}: {exc}", path=path) from exc

    released = False
    try:
        yield handle
    except Exception as exc:
        released = True
        try:
            handle.close()
        except OSError as close_exc:
            raise ReleaseError(
                f"{exc}; also failed to close file {path!r}: {close_exc}",
                path=path,
                errors=(exc, close_exc),
            ) from exc
        raise
    finally:
        # KeyboardInterrupt, GeneratorExit и т.п. тоже закрывают файл
        if not released:
            released = True
            try:
                handle.close()
            except OSError as close_exc:
                raise ReleaseError(
                    f"failed to close file {path!r}: {close_exc}",
                    path=path,
                    errors=(close_exc,),
                ) from close_exc


def apply_file(fs: FileSystem, path: str, environ: MutableMapping[str, str]) -> int:
    """Записывает пары из файла в environ по мере чтения. Возвращает число присваиваний."""
    applied = 0
    with open_scoped(fs, path) as handle:
        for line in iter_lines(handle, path):
            pair = parse_line(line)
            if pair is None:
                continue
            key, value = pair
            try:
                environ[key] = value
            except Exception as exc:  # noqa: BLE001
                raise EnvWriteError(f"setenv {key}: {exc}", key=key, path=path) from exc
            applied += 1

    logger.debug("applied %d entries from %s", applied, path)
    return applied
