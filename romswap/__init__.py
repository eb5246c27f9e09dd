"""romswap: convert N64 cartridge images between .z64, .v64 and .n64 byte orders.

Usage::

    from romswap import RomType, convert_file, identify_file

    identify_file("game.v64")                 # RomType.BYTE_SWAPPED
    convert_file("game.v64")                  # writes game.z64
    convert_file("game.z64", rom_type=RomType.LITTLE_ENDIAN)
"""
__version__ = "0.1.0"

from romswap.convert import convert_file, convert_stream, resolve_target
from romswap.detect import detect_ext, guess_type, identify_file, identify_header
from romswap.swap import swap, swap_words
from romswap.types import (
    ConversionResult,
    ConversionStatus,
    RomSwapError,
    RomType,
)

__all__ = [
    "ConversionResult",
    "ConversionStatus",
    "RomSwapError",
    "RomType",
    "convert_file",
    "convert_stream",
    "detect_ext",
    "guess_type",
    "identify_file",
    "identify_header",
    "resolve_target",
    "swap",
    "swap_words",
]
