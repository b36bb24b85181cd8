from __future__ import annotations

import os
from dataclasses import dataclass

from dotload.errors import ConfigError
from dotload.observability.logging import DiagnosticsLogger
from dotload.storage.filesystem import FileSystem

DEFAULT_PATHS = (".",)


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _parse_csv(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    items = [part.strip() for part in raw.split(",")]
    return [item for item in items if item]


@dataclass(frozen=True)
class LoadOptions:
    """
    Параметры одной загрузки.

    paths: кандидаты (файлы или директории) в порядке переопределения,
           поздние перекрывают ранние.
    fs:    корень, от которого открываются пути.
    logger: приёмник диагностики (info/warning).
    """

    paths: tuple[str, ...] = DEFAULT_PATHS
    fs: FileSystem | None = None
    logger: DiagnosticsLogger | None = None


def validate_options(options: LoadOptions) -> None:
    if not options.paths:
        raise ConfigError("should provide at least a single path")
    if options.fs is None:
        raise ConfigError("should provide root fs")
    if options.logger is None:
        raise ConfigError("logger should be provided")


@dataclass(frozen=True)
class Settings:
    paths: list[str]
    root: str
    log_level: str
    json_logs: bool

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            paths=_parse_csv("DOTLOAD_PATHS", ",".join(DEFAULT_PATHS)),
            root=os.getenv("DOTLOAD_ROOT", "."),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_logs=_parse_bool("LOG_FORMAT_JSON", False),
        )
