from __future__ import annotations

import os
from collections.abc import MutableMapping, Sequence

from dotload.config import DEFAULT_PATHS, LoadOptions, validate_options
from dotload.domain.parser import apply_file
from dotload.domain.resolver import resolve_dotenv
from dotload.errors import ConfigError
from dotload.observability.logging import DiagnosticsLogger, NopLogger
from dotload.storage.filesystem import FileSystem, OSFileSystem


def load_dotenv(
    paths: Sequence[str] | str | None = None,
    *,
    fs: FileSystem | None = None,
    logger: DiagnosticsLogger | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> list[str]:
    """
    Загружает KEY=VALUE из .env-файлов в окружение процесса.

    Пути обрабатываются слева направо, поздние перекрывают ранние. Директория
    означает "<dir>/.env". Отсутствующие пути только логируются как warning.
    Можно вызывать повторно. Возвращает список прочитанных файлов.

    Args:
        paths: файлы или директории; по умолчанию текущая директория
        fs: корень ФС; по умолчанию OSFileSystem(".")
        logger: приёмник диагностики; по умолчанию NopLogger
        environ: куда писать; по умолчанию os.environ
    """
    if paths is None:
        paths = DEFAULT_PATHS
    elif isinstance(paths, str):
        paths = (paths,)

    if fs is None:
        try:
            fs = OSFileSystem(".")
        except OSError as exc:
            raise ConfigError(f"failed to create filesystem from current directory: {exc}") from exc

    options = LoadOptions(
        paths=tuple(paths),
        fs=fs,
        logger=logger if logger is not None else NopLogger(),
    )
    try:
        validate_options(options)
    except ConfigError as exc:
        raise ConfigError(f"can't export .env file with these options: {exc}") from exc

    return load(options, os.environ if environ is None else environ)


def load(options: LoadOptions, environ: MutableMapping[str, str]) -> list[str]:
    """
    Низкоуровневая загрузка: все три опции обязательны.

    Первая фатальная ошибка прерывает загрузку; уже записанные значения
    не откатываются.
    """
    validate_options(options)

    loaded: list[str] = []
    for path in options.paths:
        env_path = resolve_dotenv(options.fs, path, options.logger)
        if env_path is None:
            continue
        apply_file(options.fs, env_path, environ)
        loaded.append(env_path)
    return loaded
