"""Shared fixtures for romswap tests."""

from __future__ import annotations

import builtins
import io
import logging
from pathlib import Path

import pytest

from romswap.swap import swap_words
from romswap.types import RomType

# 16 body bytes, laid out big-endian
BODY_BE = bytes(range(1, 17))


def make_rom(rom_type: RomType, body_be: bytes = BODY_BE) -> bytes:
    """Build an image in *rom_type* order from a big-endian body."""
    return rom_type.header_bytes + swap_words(body_be, RomType.BIG_ENDIAN, rom_type)


@pytest.fixture(name="make_rom")
def make_rom_fixture():
    return make_rom


@pytest.fixture()
def rom_factory(tmp_path: Path):
    """Write an image of the given type and return its path."""

    def _make(rom_type: RomType, name: str | None = None, body_be: bytes = BODY_BE) -> Path:
        path = tmp_path / (name or f"game{rom_type.file_ext}")
        path.write_bytes(make_rom(rom_type, body_be))
        return path

    return _make


@pytest.fixture()
def z64_file(rom_factory) -> Path:
    return rom_factory(RomType.BIG_ENDIAN)


@pytest.fixture()
def v64_file(rom_factory) -> Path:
    return rom_factory(RomType.BYTE_SWAPPED)


@pytest.fixture()
def config_yaml(tmp_path: Path) -> Path:
    """Write a sample romswap.yaml and return its path."""
    p = tmp_path / "romswap.yaml"
    p.write_text("default_type: little-endian\nforce: true\nchunk_size: 8\n")
    return p


@pytest.fixture(autouse=True)
def _isolate_cwd(tmp_path, monkeypatch):
    """Keep a stray ./romswap.yaml out of the tests."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop the stream handler ``romswap.cli.main`` may install."""
    yield
    root = logging.getLogger()
    for h in list(root.handlers):
        if type(h) is logging.StreamHandler:
            root.removeHandler(h)


class _CloseFailingFile(io.BytesIO):
    """Output whose final flush fails on close, like a full disk."""

    def close(self):
        if self.closed:
            return
        super().close()
        raise OSError(28, "No space left on device")


@pytest.fixture()
def close_failing_open(monkeypatch):
    """Make output files opened by ``convert_file`` fail when closed."""
    real_open = builtins.open

    def _open(path, mode="r", *args, **kwargs):
        if mode in ("wb", "xb"):
            return _CloseFailingFile()
        return real_open(path, mode, *args, **kwargs)

    monkeypatch.setattr("romswap.convert.open", _open, raising=False)
