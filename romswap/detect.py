"""Recognise the byte order of an image from its header or filename."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from romswap.types import (
    HEADER_SIZE,
    RomIOError,
    RomType,
    TruncatedHeaderError,
    UnrecognizedFormatError,
)

logger = logging.getLogger(__name__)

_BY_HEADER = {t.header_bytes: t for t in RomType}
_BY_EXT = {t.file_ext: t for t in RomType}


def identify_header(header: bytes) -> RomType | None:
    """Return the type whose signature equals *header* exactly, else ``None``."""
    return _BY_HEADER.get(bytes(header))


def detect_ext(filename: str) -> str | None:
    """Return everything from the last ``.`` of *filename*, or ``None``.

    ``"a.b.z64"`` gives ``".z64"``; a bare ``".z64"`` is returned whole.
    """
    idx = filename.rfind(".")
    if idx < 0:
        return None
    return filename[idx:]


def guess_type(ext: str | None) -> RomType | None:
    """Map a filename suffix to a type, ignoring case."""
    if not ext:
        return None
    return _BY_EXT.get(ext.lower())


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read up to *size* bytes, looping over short reads until EOF."""
    buf = bytearray()
    while len(buf) < size:
        chunk = stream.read(size - len(buf))
        if not chunk:
            break
        buf += chunk
    return bytes(buf)


def read_header(stream: BinaryIO, name: str | None = None) -> RomType:
    """Consume the 4-byte header from *stream* and classify it.

    Args:
        stream: Binary stream positioned at the start of the image.
        name: Display name used in error messages.

    Raises:
        TruncatedHeaderError: Fewer than 4 bytes were available.
        UnrecognizedFormatError: The header is not a known signature.
        RomIOError: The underlying read failed.
    """
    try:
        header = read_exact(stream, HEADER_SIZE)
    except OSError as exc:
        raise RomIOError("read", f"Error reading file: {name or 'input'}: {exc}") from exc

    if len(header) < HEADER_SIZE:
        raise TruncatedHeaderError(len(header), name)

    rom_type = identify_header(header)
    if rom_type is None:
        raise UnrecognizedFormatError(header, name)
    logger.debug("Header %s identified as %s", header.hex(" "), rom_type)
    return rom_type


def identify_file(path: str | Path) -> RomType:
    """Open *path* and return the byte order named by its header."""
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise RomIOError("open-input", f"Unable to open file: {path}: {exc}") from exc
    with fh:
        return read_header(fh, str(path))
