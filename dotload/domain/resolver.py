from __future__ import annotations

import posixpath

from dotload.domain.models import DOTENV_FILENAME
from dotload.errors import LoadError
from dotload.observability.logging import DiagnosticsLogger
from dotload.storage.filesystem import FileSystem


def join_dotenv(directory: str) -> str:
    return posixpath.normpath(posixpath.join(directory, DOTENV_FILENAME))


def resolve_dotenv(fs: FileSystem, path: str, logger: DiagnosticsLogger) -> str | None:
    """
    Превращает путь-кандидат в файл для чтения.

    Директория означает "<dir>/.env". Отсутствие пути или файла не ошибка:
    пишем warning и возвращаем None. Любой другой сбой stat даёт фатальный LoadError.
    """
    try:
        info = fs.stat(path)
    except FileNotFoundError:
        logger.warning("path not found", path=path)
        return None
    except OSError as exc:
        raise LoadError(f"stat {path}: {exc}", path=path) from exc

    if info.is_dir:
        env_path = join_dotenv(path)
        logger.info("directory detected; joining dotenv", path=path, dotenv=env_path)
    else:
        env_path = path

    try:
        fs.stat(env_path)
    except FileNotFoundError:
        logger.warning("dotenv not found", path=env_path)
        return None
    except OSError as exc:
        raise LoadError(f"stat {env_path}: {exc}", path=env_path) from exc

    return env_path
