from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Protocol

_RECORD_FIELDS = {
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message",
    "taskName", "asctime",
}


class DiagnosticsLogger(Protocol):
    """Любой объект с info/warning подходит как приёмник диагностики."""

    def info(self, msg: str, **fields: Any) -> None: ...

    def warning(self, msg: str, **fields: Any) -> None: ...


class NopLogger:
    def info(self, msg: str, **fields: Any) -> None:
        return None

    def warning(self, msg: str, **fields: Any) -> None:
        return None


class LoggingDiagnostics:
    """
    Переходник от DiagnosticsLogger к стандартному logging.Logger.

    Поля попадают и в текст сообщения ("dotenv not found | path=.env"),
    и в extra, откуда их забирает JsonFormatter.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def info(self, msg: str, **fields: Any) -> None:
        self._log(logging.INFO, msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log(logging.WARNING, msg, fields)

    def _log(self, level: int, msg: str, fields: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        text = msg
        if fields:
            text += " | " + " ".join(f"{key}={value}" for key, value in fields.items())
        extra = {key: value for key, value in fields.items() if key not in _RECORD_FIELDS}
        self._logger.log(level, "%s", text, extra=extra)


class JsonFormatter(logging.Formatter):
    """
    Форматирует логи в JSON для удобного парсинга в Grafana/ELK/Loki.

    Пример вывода:
    {"ts":"2026-02-25T10:00:00Z","level":"WARNING","logger":"dotload","msg":"dotenv not found | path=.env","path":".env"}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # extra-поля, переданные через logging.info(..., extra={...})
        for key, val in record.__dict__.items():
            if key not in _RECORD_FIELDS and not key.startswith("_"):
                payload[key] = val

        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """
    Настраивает логирование.

    Args:
        level: уровень логирования (INFO, DEBUG, WARNING, ERROR)
        json_logs: True = JSON-формат, False = plain text.
                   None = авто (JSON если LOG_FORMAT=json или не TTY)
    """
    if json_logs is None:
        log_format = os.getenv("LOG_FORMAT", "").lower()
        json_logs = log_format == "json" or not os.isatty(1)

    handler = logging.StreamHandler()

    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Убираем дефолтные хендлеры, чтобы не было дублей
    root.handlers.clear()
    root.addHandler(handler)
