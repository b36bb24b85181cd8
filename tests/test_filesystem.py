import pytest

from dotload.domain.parser import apply_file
from dotload.storage.filesystem import MemoryFileSystem, OSFileSystem


def test_memory_fs_implies_directories() -> None:
    fs = MemoryFileSystem({"a/b/.env": "X=1\n"})

    assert fs.stat("a").is_dir is True
    assert fs.stat("a/b").is_dir is True
    assert fs.stat("a/b/.env").is_dir is False
    assert fs.stat(".").is_dir is True


def test_memory_fs_missing_path() -> None:
    fs = MemoryFileSystem({"a/.env": "X=1\n"})

    with pytest.raises(FileNotFoundError):
        fs.stat("ab")
    with pytest.raises(FileNotFoundError):
        fs.open("a/.env.local")
    with pytest.raises(IsADirectoryError):
        fs.open("a")


def test_memory_fs_accepts_bytes() -> None:
    fs = MemoryFileSystem({"app/.env": b"GREETING=hello\n"})

    with fs.open("./app/.env") as handle:
        assert handle.read() == "GREETING=hello\n"


def test_os_fs_resolves_relative_to_root(tmp_path) -> None:
    (tmp_path / ".env").write_text("A=1\n", encoding="utf-8")
    fs = OSFileSystem(tmp_path)

    assert fs.stat(".").is_dir is True
    assert fs.stat(".env").is_dir is False
    with fs.open(".env") as handle:
        assert handle.read() == "A=1\n"
    with pytest.raises(FileNotFoundError):
        fs.stat("missing")


def test_os_fs_rejects_bad_root(tmp_path) -> None:
    file_path = tmp_path / "file"
    file_path.write_text("", encoding="utf-8")

    with pytest.raises(FileNotFoundError):
        OSFileSystem(tmp_path / "missing")
    with pytest.raises(NotADirectoryError):
        OSFileSystem(file_path)


def test_lone_carriage_return_is_not_a_line_break(tmp_path) -> None:
    content = b"A=x\rB=y\n"
    (tmp_path / ".env").write_bytes(content)
    from_disk: dict[str, str] = {}
    from_memory: dict[str, str] = {}

    apply_file(OSFileSystem(tmp_path), ".env", from_disk)
    apply_file(MemoryFileSystem({".env": content}), ".env", from_memory)

    assert from_disk == from_memory == {"A": "x\rB=y"}


def test_crlf_line_endings_are_trimmed(tmp_path) -> None:
    (tmp_path / ".env").write_bytes(b"A=1\r\nB=2\r\n")
    env: dict[str, str] = {}

    apply_file(OSFileSystem(tmp_path), ".env", env)

    assert env == {"A": "1", "B": "2"}
