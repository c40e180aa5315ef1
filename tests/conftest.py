"""Shared fixtures for mdprompt tests."""

import zipfile
from pathlib import Path

import pytest


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (relative path -> text) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, text in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
    return root


def write_damaged_zip(path: Path, damaged: dict[str, str], intact: dict[str, str]) -> Path:
    """Create a deflated zip whose `damaged` members have scrambled data."""
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, text in {**damaged, **intact}.items():
            zf.writestr(name, text)
        infos = [zf.getinfo(name) for name in damaged]

    raw = bytearray(path.read_bytes())
    for info in infos:
        offset = info.header_offset
        name_len = int.from_bytes(raw[offset + 26 : offset + 28], "little")
        extra_len = int.from_bytes(raw[offset + 28 : offset + 30], "little")
        start = offset + 30 + name_len + extra_len
        for i in range(start, start + info.compress_size):
            raw[i] ^= 0xFF
    path.write_bytes(bytes(raw))
    return path


@pytest.fixture
def in_dir(tmp_path):
    return tmp_path / "IN"


@pytest.fixture
def out_dir(tmp_path):
    out = tmp_path / "OUT"
    out.mkdir()
    return out


@pytest.fixture
def deny_read(monkeypatch):
    """Make Path.read_bytes fail with EACCES for the given file names."""

    def _deny(*names: str) -> None:
        original = Path.read_bytes

        def read_bytes(self):
            if self.name in names:
                raise PermissionError(13, "Permission denied", str(self))
            return original(self)

        monkeypatch.setattr(Path, "read_bytes", read_bytes)

    return _deny
