from dotload.domain.resolver import join_dotenv, resolve_dotenv
from dotload.observability.logging import NopLogger
from dotload.storage.filesystem import MemoryFileSystem, OSFileSystem


class _ListLogger:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def info(self, msg: str, **fields) -> None:
        self.lines.append(f"INFO {msg} {fields}")

    def warning(self, msg: str, **fields) -> None:
        self.lines.append(f"WARN {msg} {fields}")


def test_join_dotenv_normalizes() -> None:
    assert join_dotenv(".") == ".env"
    assert join_dotenv("app") == "app/.env"
    assert join_dotenv("app/") == "app/.env"


def test_resolve_file_path_as_is() -> None:
    fs = MemoryFileSystem({"config/prod.env": "A=1\n"})

    assert resolve_dotenv(fs, "config/prod.env", NopLogger()) == "config/prod.env"


def test_resolve_directory_logs_join() -> None:
    fs = MemoryFileSystem({"app/.env": "A=1\n"})
    lg = _ListLogger()

    assert resolve_dotenv(fs, "app", lg) == "app/.env"
    assert lg.lines == ["INFO directory detected; joining dotenv {'path': 'app', 'dotenv': 'app/.env'}"]


def test_resolve_missing_path_warns() -> None:
    lg = _ListLogger()

    assert resolve_dotenv(MemoryFileSystem(), "nowhere", lg) is None
    assert lg.lines == ["WARN path not found {'path': 'nowhere'}"]


def test_resolve_on_real_filesystem(tmp_path) -> None:
    (tmp_path / "svc").mkdir()
    (tmp_path / "svc" / ".env").write_text("A=1\n", encoding="utf-8")
    fs = OSFileSystem(tmp_path)

    assert resolve_dotenv(fs, "svc", NopLogger()) == "svc/.env"
    assert resolve_dotenv(fs, ".", NopLogger()) is None
