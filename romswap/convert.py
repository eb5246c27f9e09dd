"""Rewrite an image from one byte order to another.

A run has two phases. The 4-byte header is read and classified first; once
the target order is known the destination signature is written and the body
is streamed through :func:`romswap.swap.swap_words` chunk by chunk.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO

from romswap.config import DEFAULT_CHUNK_SIZE, RomSwapConfig
from romswap.detect import detect_ext, guess_type, read_header
from romswap.swap import swap_words
from romswap.types import (
    WORD_SIZE,
    ConversionResult,
    ConversionStatus,
    OutputExistsError,
    RomIOError,
    RomSwapError,
    RomType,
    SameFileError,
)

logger = logging.getLogger(__name__)


def resolve_target(
    rom_type: RomType | None = None,
    destination: str | Path | None = None,
    default: RomType = RomType.BIG_ENDIAN,
) -> RomType:
    """Pick the output order: explicit type, then destination suffix, then *default*."""
    resolvers = (
        lambda: rom_type,
        lambda: guess_type(detect_ext(os.path.basename(str(destination)))) if destination else None,
    )
    for resolve in resolvers:
        found = resolve()
        if found is not None:
            return found
    return default


def default_output_name(filename: str | Path, target: RomType) -> str:
    """Swap a 3-letter extension on *filename* for the canonical one of *target*.

    ``game.v64`` becomes ``game.z64``; a name without such an extension just
    gets the suffix appended.
    """
    name = str(filename)
    if len(name) >= 4 and name[-4] == ".":
        name = name[:-4]
    return name + target.file_ext


def write_converted(
    reader: BinaryIO,
    writer: BinaryIO,
    src: RomType,
    dst: RomType,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> tuple[int, int]:
    """Write the *dst* header and the reordered body of *reader* to *writer*.

    *reader* must be positioned just after the header. A trailing partial
    word at end of input is not written.

    Returns:
        ``(words, dropped)``: body words written and trailing bytes ignored.

    Raises:
        RomIOError: A read or write failed.
    """
    try:
        writer.write(dst.header_bytes)
    except OSError as exc:
        raise RomIOError("write", f"Unable to write to output file: {exc}") from exc

    words = 0
    pending = b""
    while True:
        try:
            chunk = reader.read(chunk_size)
        except OSError as exc:
            raise RomIOError("read", f"Error reading input: {exc}") from exc
        if not chunk:
            break

        data = pending + chunk if pending else chunk
        usable = len(data) - len(data) % WORD_SIZE
        pending = data[usable:]
        if not usable:
            continue

        try:
            writer.write(swap_words(memoryview(data)[:usable], src, dst))
        except OSError as exc:
            raise RomIOError("write", f"Error during output: {exc}") from exc
        words += usable // WORD_SIZE

    try:
        writer.flush()
    except OSError as exc:
        raise RomIOError("write", f"Error during output: {exc}") from exc

    if pending:
        logger.debug("Dropping %d trailing byte(s) that do not form a full word", len(pending))
    return words, len(pending)


def convert_stream(
    reader: BinaryIO,
    writer: BinaryIO,
    rom_type: RomType | None = None,
    destination: str | Path | None = None,
    config: RomSwapConfig | None = None,
    name: str | None = None,
) -> ConversionResult:
    """Convert the image in *reader* into *writer*.

    Nothing is written when the header is rejected or when the image is
    already in the requested order.

    Args:
        reader: Binary stream positioned at the header.
        writer: Binary stream receiving the converted image.
        rom_type: Explicit output order.
        destination: Output filename, consulted for its suffix only.
        config: Run settings; defaults apply when omitted.
        name: Display name of the input for messages.
    """
    cfg = config or RomSwapConfig()
    cfg.validate()
    src = read_header(reader, name)
    dst = resolve_target(rom_type, destination, cfg.default_type)
    if src == dst:
        logger.info("File is already %s", dst)
        return ConversionResult(ConversionStatus.ALREADY_TARGET, src, dst)

    words, dropped = write_converted(reader, writer, src, dst, cfg.chunk_size)
    return ConversionResult(ConversionStatus.CONVERTED, src, dst, words=words, dropped=dropped)


def convert_file(
    filename: str | Path,
    destination: str | Path | None = None,
    rom_type: RomType | None = None,
    force: bool | None = None,
    config: RomSwapConfig | None = None,
) -> ConversionResult:
    """Convert the image stored at *filename*.

    Args:
        filename: Input image.
        destination: Output path; derived from *filename* and the target
            order when omitted.
        rom_type: Explicit output order.
        force: Overwrite an existing destination. Falls back to
            ``config.force``.
        config: Run settings; defaults apply when omitted.

    Returns:
        A :class:`ConversionResult`. No output file is created when its
        status is ``ALREADY_TARGET``.

    Raises:
        RomSwapError: On any failure; see :mod:`romswap.types`.
    """
    cfg = config or RomSwapConfig()
    cfg.validate()
    overwrite = cfg.force if force is None else force
    in_name = str(filename)

    try:
        reader = open(in_name, "rb")
    except OSError as exc:
        raise RomIOError("open-input", f"Unable to open file: {in_name}: {exc}") from exc

    with reader:
        src = read_header(reader, in_name)
        dst = resolve_target(rom_type, destination, cfg.default_type)
        if src == dst:
            logger.info("File is already %s", dst)
            return ConversionResult(ConversionStatus.ALREADY_TARGET, src, dst)

        out_name = str(destination) if destination else default_output_name(in_name, dst)
        if Path(in_name).resolve() == Path(out_name).resolve():
            raise SameFileError(out_name)

        try:
            writer = open(out_name, "wb" if overwrite else "xb")
        except FileExistsError as exc:
            raise OutputExistsError(out_name) from exc
        except OSError as exc:
            raise RomIOError(
                "open-output", f"Unable to open file {out_name} for output. Error {exc}"
            ) from exc

        logger.info("Converting %s (%s) -> %s (%s)", in_name, src, out_name, dst)
        try:
            with writer:
                words, dropped = write_converted(reader, writer, src, dst, cfg.chunk_size)
        except RomSwapError:
            logger.warning("Conversion failed, %s is incomplete", out_name)
            raise
        except OSError as exc:
            # raised by close() when the final flush fails
            logger.warning("Conversion failed, %s is incomplete", out_name)
            raise RomIOError("write", f"Error during output: {exc}") from exc

    return ConversionResult(
        ConversionStatus.CONVERTED, src, dst, words=words, dropped=dropped, output=out_name
    )
