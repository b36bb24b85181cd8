from __future__ import annotations

from dataclasses import dataclass

DOTENV_FILENAME = ".env"


@dataclass(frozen=True)
class FileInfo:
    path: str
    is_dir: bool
