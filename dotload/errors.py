from __future__ import annotations


class DotenvError(Exception):
    """Базовая ошибка загрузки .env."""


class ConfigError(DotenvError):
    pass


class LoadError(DotenvError):
    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class EnvWriteError(LoadError):
    def __init__(self, message: str, key: str, path: str | None = None) -> None:
        super().__init__(message, path=path)
        self.key = key


class ReleaseError(LoadError):
    """
    Файл не удалось закрыть.

    errors: исходная ошибка обработки (если была) и ошибка закрытия, в этом порядке.
    """

    def __init__(self, message: str, path: str, errors: tuple[BaseException, ...]) -> None:
        super().__init__(message, path=path)
        self.errors = errors
