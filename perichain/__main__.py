#!/usr/bin/env python3
"""
CLI entry point for perichain.

Builds the peripheral chain of an FPGA image from a peripheral list:
    perichain perilist > main_body.v

Allows running the tool via: python -m perichain <perilist>
"""

import sys
import argparse
from pathlib import Path

import yaml

from .allocator import DRIVER_TABLE_CAPACITY, build_chain
from .config import builtin_boards, load_board, load_registry
from .errors import ChainError, ChainIOError, ConfigFormatError, UsageError
from .netlist import build_netlist
from .perilist import HEADER_LINES, read_peripheral_names
from .registry import default_registry
from .verilog import DEFAULT_INCLUDE_DIR, render, render_sources

PROG = "perichain"


class _ArgumentParser(argparse.ArgumentParser):
    """Report usage problems as UsageError so they exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Generate the peripheral chain and driver ID table of an FPGA build",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate the chain for the default board (baseboard4)
  perichain perilist > chain.v

  # Target another board and write the sources list elsewhere
  perichain --board basys3 --sources build/sources.tmp -o build/chain.v perilist

  # Show the peripherals that can appear in a peripheral list
  perichain --list-peripherals
        """
    )

    parser.add_argument("perilist", nargs="?", help="Peripheral list file")
    parser.add_argument(
        "-o", "--output",
        help="Write the generated Verilog here instead of stdout"
    )
    parser.add_argument(
        "--sources",
        default="sources.tmp",
        help="File that receives one `include per peripheral (default: sources.tmp)"
    )
    parser.add_argument(
        "--include-dir",
        default=DEFAULT_INCLUDE_DIR,
        help=f"Directory of peripheral sources used in includes (default: {DEFAULT_INCLUDE_DIR})"
    )

    board_group = parser.add_mutually_exclusive_group()
    board_group.add_argument(
        "--board",
        help=f"Builtin board name ({', '.join(builtin_boards())})"
    )
    board_group.add_argument(
        "--board-file", type=Path,
        help="Board definition YAML file"
    )
    parser.add_argument(
        "--catalog", type=Path,
        help="Peripheral catalog YAML file (default: builtin catalog)"
    )
    parser.add_argument(
        "--header-lines",
        type=int,
        default=HEADER_LINES,
        help=f"Header lines to skip in the peripheral list (default: {HEADER_LINES})"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report progress on stderr"
    )
    parser.add_argument(
        "--list-peripherals",
        action="store_true",
        help="List the peripheral catalog and exit"
    )
    parser.add_argument(
        "--list-boards",
        action="store_true",
        help="List the builtin boards and exit"
    )
    parser.add_argument("--version", action="store_true", help="Show version information")
    return parser


def _open(path, mode: str):
    try:
        return open(path, mode)
    except OSError:
        purpose = "writing" if "w" in mode else "reading"
        raise ChainIOError(f"Unable to open '{path}' for {purpose}") from None


def _write(stream, text: str, name: str):
    try:
        stream.write(text)
        stream.flush()
    except OSError as e:
        raise ChainIOError(f"Write error on {name}: {e}") from e


def _load_configuration(args):
    try:
        registry = load_registry(args.catalog) if args.catalog else default_registry()
        board = load_board(args.board_file, args.board)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigFormatError(str(e)) from e
    except OSError as e:
        raise ChainIOError(str(e)) from e
    return registry, board


def _list_peripherals(registry):
    print(f"{'name':<12} {'id':>3}  {'module':<12} {'pins':>4}  dirs")
    for desc in registry:
        alias = "  (alias)" if desc.is_alias else ""
        print(f"{desc.name:<12} {desc.driver_id:>3}  {desc.source_module:<12} "
              f"{desc.pin_count:>4}  0x{desc.pin_dir_mask:02x}{alias}")


def run(args) -> int:
    """Build the chain described by parsed arguments."""
    if args.version:
        from . import __version__
        print(f"{PROG} version {__version__}")
        return 0

    if args.list_boards:
        for name in builtin_boards():
            print(name)
        return 0

    registry, board = _load_configuration(args)

    if args.list_peripherals:
        _list_peripherals(registry)
        return 0

    if not args.perilist:
        raise UsageError("expects a single filename argument")
    if args.header_lines < 0:
        raise UsageError("--header-lines must not be negative")

    def log(msg):
        if args.verbose:
            print(msg, file=sys.stderr)

    log(f"Board: {board.name} (pins 0-{board.max_physical_pin}, {board.max_slots} cores)")

    with _open(args.sources, "w") as sources, _open(args.perilist, "r") as perilist:
        log(f"Reading {args.perilist}...")
        names = read_peripheral_names(perilist, args.header_lines)
        chain = build_chain(names, registry, board)

        log(f"Allocated {chain.slot_count} cores using {chain.pin_count} pins")
        for slot in chain.peripherals:
            log(f"  core {slot.index:2d}: {slot.descriptor.name} "
                f"(pins {slot.pin_range.start}-{slot.pin_range.stop - 1})")

        if chain.slot_count > board.max_slots:
            print(f"Warning: {chain.slot_count} cores exceed the {board.max_slots} "
                  f"supported by {board.name}", file=sys.stderr)
        dropped = chain.dropped_pins()
        if dropped:
            print(f"Warning: pins {dropped[0]}-{dropped[-1]} are past the last "
                  f"{board.name} pin ({board.max_physical_pin}) and are not connected",
                  file=sys.stderr)
        for slot in chain.repeated_board_io():
            print(f"Warning: core {slot.index} is {slot.descriptor.name}, the {board.name} "
                  f"board IO peripheral, which is always core 0; leave it out of "
                  f"{args.perilist}", file=sys.stderr)

        _write(sources, render_sources(chain.slots, args.include_dir), args.sources)

    code = render(build_netlist(chain))
    if args.output:
        with _open(args.output, "w") as f:
            _write(f, code, args.output)
        log(f"Successfully wrote chain to {args.output}")
    else:
        _write(sys.stdout, code, "stdout")

    log(f"Driver ID table: {chain.slot_count} of {DRIVER_TABLE_CAPACITY} entries used")
    return 0


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        return run(args)
    except ChainError as e:
        print(f"FATAL: {PROG}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
