"""Data classes, enums and exceptions for romswap."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

HEADER_SIZE = 4
WORD_SIZE = 4

# N64 header magic, one per byte order
BIG_ENDIAN_MAGIC = b"\x80\x37\x12\x40"
BYTE_SWAPPED_MAGIC = b"\x37\x80\x40\x12"
LITTLE_ENDIAN_MAGIC = b"\x40\x12\x37\x80"


class RomType(str, Enum):
    """Byte order of a cartridge image."""

    BIG_ENDIAN = "big-endian"
    BYTE_SWAPPED = "byte-swapped"
    LITTLE_ENDIAN = "little-endian"

    @property
    def header_bytes(self) -> bytes:
        return _HEADERS[self]

    @property
    def file_ext(self) -> str:
        return _EXTENSIONS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    def get_header_bytes(self) -> bytes:
        """Return the 4-byte signature that starts an image in this order."""
        return self.header_bytes

    def get_file_ext(self) -> str:
        """Return the canonical filename suffix, dot included."""
        return self.file_ext

    def __str__(self) -> str:
        return f"{self.label} ({self.file_ext})"

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    @classmethod
    def parse(cls, text: str) -> "RomType":
        """Parse a user supplied type name.

        Accepts the enum value (``byte-swapped``), the member name
        (``BYTE_SWAPPED``), the short alias ``byte-swap`` or a canonical
        suffix with or without the dot (``v64``, ``.V64``).

        Raises:
            ValueError: If *text* names no known type.
        """
        key = text.strip().lower().replace("_", "-")
        if key in _ALIASES:
            return _ALIASES[key]
        suffix = key if key.startswith(".") else f".{key}"
        for member in cls:
            if member.file_ext == suffix:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown ROM type '{text}' (choose from {choices}, z64, v64, n64)")


_HEADERS = {
    RomType.BIG_ENDIAN: BIG_ENDIAN_MAGIC,
    RomType.BYTE_SWAPPED: BYTE_SWAPPED_MAGIC,
    RomType.LITTLE_ENDIAN: LITTLE_ENDIAN_MAGIC,
}

_EXTENSIONS = {
    RomType.BIG_ENDIAN: ".z64",
    RomType.BYTE_SWAPPED: ".v64",
    RomType.LITTLE_ENDIAN: ".n64",
}

_LABELS = {
    RomType.BIG_ENDIAN: "BigEndian",
    RomType.BYTE_SWAPPED: "ByteSwapped",
    RomType.LITTLE_ENDIAN: "LittleEndian",
}

_ALIASES = {
    "big-endian": RomType.BIG_ENDIAN,
    "bigendian": RomType.BIG_ENDIAN,
    "byte-swapped": RomType.BYTE_SWAPPED,
    "byteswapped": RomType.BYTE_SWAPPED,
    "byte-swap": RomType.BYTE_SWAPPED,
    "byteswap": RomType.BYTE_SWAPPED,
    "little-endian": RomType.LITTLE_ENDIAN,
    "littleendian": RomType.LITTLE_ENDIAN,
}


class ConversionStatus(str, Enum):
    """Successful outcomes of a conversion run."""

    CONVERTED = "converted"
    ALREADY_TARGET = "already-target"


# ---------------------------------------------------------------------------
# Result data classes
# ---------------------------------------------------------------------------

@dataclass
class ConversionResult:
    """Outcome of one conversion run."""

    status: ConversionStatus
    source: RomType
    target: RomType
    words: int = 0
    dropped: int = 0
    output: str | None = None

    @property
    def converted(self) -> bool:
        return self.status is ConversionStatus.CONVERTED


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class RomSwapError(Exception):
    """Base exception for romswap operations."""


class UnrecognizedFormatError(RomSwapError):
    """Raised when the header matches none of the known signatures."""

    def __init__(self, header: bytes, name: str | None = None) -> None:
        self.header = bytes(header)
        self.name = name
        where = f"File {name}" if name else "Input"
        super().__init__(f"{where} not recognized! (header {self.header.hex(' ')})")


class TruncatedHeaderError(RomSwapError):
    """Raised when fewer than 4 bytes are available for the header."""

    def __init__(self, size: int, name: str | None = None) -> None:
        self.size = size
        self.name = name
        where = name or "input"
        super().__init__(f"Error reading {where}: only {size} byte(s), header needs {HEADER_SIZE}")


class RomIOError(RomSwapError):
    """Raised when opening, reading or writing a stream fails.

    Attributes:
        stage: One of ``open-input``, ``read``, ``open-output``, ``write``.
        detail: Human readable description of the underlying failure.
    """

    def __init__(self, stage: str, detail: str) -> None:
        self.stage = stage
        self.detail = detail
        super().__init__(f"{stage}: {detail}")


class OutputExistsError(RomIOError):
    """Raised when the destination exists and overwrite was not requested."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__("open-output", f"{path} already exists (use --force to overwrite)")


class SameFileError(RomSwapError):
    """Raised when input and output name the same file."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Input and Output filenames are identical {path}, consider renaming input file"
        )


class ConfigError(RomSwapError):
    """Raised when romswap.yaml is invalid or missing."""
