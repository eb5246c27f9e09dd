"""Command-line entry-point for romswap.

Usage::

    romswap identify <file>
    romswap convert <file> [destination] [--type TYPE] [--force]
    romswap [--config romswap.yaml] [-v] <command> ...
"""

from __future__ import annotations

import argparse
import logging
import sys

from romswap import __version__
from romswap.config import RomSwapConfig, find_config
from romswap.convert import convert_file
from romswap.detect import identify_file
from romswap.types import ConversionStatus, RomSwapError, RomType


def _rom_type(text: str) -> RomType:
    try:
        return RomType.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


# ---------------------------------------------------------------------------
# Sub-command handlers
# ---------------------------------------------------------------------------

def _cmd_identify(cfg: RomSwapConfig, args: argparse.Namespace) -> int:
    rom_type = identify_file(args.filename)
    print(f"File {args.filename} is {rom_type}")
    return 0


def _cmd_convert(cfg: RomSwapConfig, args: argparse.Namespace) -> int:
    result = convert_file(
        args.filename,
        args.destination,
        rom_type=args.type,
        force=True if args.force else None,
        config=cfg,
    )
    if result.status is ConversionStatus.ALREADY_TARGET:
        print(f"File is already {result.target}!")
        return 0
    print(f"Converted {args.filename} -> {result.output} ({result.target})")
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="romswap", description="Convert N64 ROM images between byte orders"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to romswap.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("identify", help="Identify rom type (and exit)")
    p.add_argument("filename", help="Input filename")

    p = sub.add_parser("convert", help="Convert a rom to another byte order")
    p.add_argument("filename", help="Input filename")
    p.add_argument("destination", nargs="?", default=None, help="Output filename")
    p.add_argument(
        "-t", "--type",
        type=_rom_type,
        default=None,
        help="Output type: big-endian (z64), byte-swapped (v64) or little-endian (n64)",
    )
    p.add_argument("-f", "--force", action="store_true", help="Force overwrite output file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry-point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dispatch = {
        "identify": _cmd_identify,
        "convert": _cmd_convert,
    }
    handler = dispatch.get(args.command or "")
    if handler is None:
        parser.print_help()
        return 1

    try:
        cfg = find_config(args.config)
        return handler(cfg, args)
    except RomSwapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
