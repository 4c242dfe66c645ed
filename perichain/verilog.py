#!/usr/bin/env python3
"""
Write netlist records as Verilog text.

All formatting of the generated main.v body and the sources list lives
here; the emitters in perichain.netlist only produce records.
"""

from typing import Iterable, List, Sequence

from .allocator import Slot
from .netlist import (
    PHYSICAL_PINS, BUS_ADDRESS_HIGH, AddressDecode, Assign, Blank, Comment,
    DriverIdTable, EndModule, Instance, OrReduce, PinBinding, Record, Wire,
    slot_prefix,
)

INDENT = "    "
# Declarations are padded so their trailing comments line up
DECL_COLUMN = 22
OR_TERM_INDENT = " " * 14

DEFAULT_INCLUDE_DIR = "../../../peripherals"


def _render_wire(rec: Wire) -> str:
    decl = rec.kind
    if rec.width is not None:
        decl += f" [{rec.width - 1}:0]"
    decl += f" {rec.name};"
    if rec.comment:
        return f"{INDENT}{decl.ljust(DECL_COLUMN)}// {rec.comment}"
    return f"{INDENT}{decl}"


def _render_pin(rec: PinBinding) -> str:
    pins = f"{slot_prefix(rec.slot)}pins"
    if rec.output:
        return f"{INDENT}assign {PHYSICAL_PINS}[{rec.physical}] = {pins}[{rec.pin}];"
    return f"{INDENT}assign {pins}[{rec.pin}] = {PHYSICAL_PINS}[{rec.physical:2d}];"


def _render_or(rec: OrReduce) -> List[str]:
    lines = [f"assign {rec.target} = "]
    for term in rec.terms[:-1]:
        lines.append(f"{OR_TERM_INDENT}{term} |")
    lines.append(f"{OR_TERM_INDENT}{rec.terms[-1]};")
    return lines


def _render_table(table: DriverIdTable) -> List[str]:
    """
    The table is a chain of ternaries, one per core, with the last
    core as the default:

        (core == 4'h0) ? 16'h002a :
        ...
                         16'h0000 ;
    """
    lines = [
        "module perilist(core, id);",
        "    input  [3:0] core;",
        "    output [15:0] id;",
        "    assign id = ",
    ]
    ids = list(table)
    for core, driver_id in enumerate(ids[:-1]):
        lines.append(f"            (core == 4'h{core:1x}) ? 16'h{driver_id:04x} : ")
    lines.append(f"                             16'h{ids[-1]:04x} ; ")
    lines.append("endmodule")
    return lines


def render_record(rec: Record) -> List[str]:
    """Return the lines of Verilog for one record."""
    if isinstance(rec, Blank):
        return [""]
    if isinstance(rec, Comment):
        return [f"// {rec.text}"]
    if isinstance(rec, Wire):
        return [_render_wire(rec)]
    if isinstance(rec, Instance):
        return [f"{INDENT}{rec.module} {rec.name}({','.join(rec.ports)});"]
    if isinstance(rec, PinBinding):
        return [_render_pin(rec)]
    if isinstance(rec, AddressDecode):
        return [f"{INDENT}assign {slot_prefix(rec.slot)}STB_O = "
                f"({BUS_ADDRESS_HIGH} == {rec.slot}) ? 1'b1 : 1'b0;"]
    if isinstance(rec, Assign):
        return [f"{' ' * rec.indent}assign {rec.lhs} = {rec.rhs};"]
    if isinstance(rec, OrReduce):
        return _render_or(rec)
    if isinstance(rec, EndModule):
        return ["endmodule"]
    if isinstance(rec, DriverIdTable):
        return _render_table(rec)
    raise TypeError(f"Cannot render {type(rec).__name__}")


def render(records: Iterable[Record]) -> str:
    """Serialize records to Verilog source text."""
    lines = []
    for rec in records:
        lines.extend(render_record(rec))
    return "\n".join(lines) + "\n"


def render_sources(slots: Sequence[Slot], include_dir: str = DEFAULT_INCLUDE_DIR) -> str:
    """
    List the Verilog sources the chain needs, one include per core.

    The board IO source is added by the build system, so slot 0 is
    left out.
    """
    return "".join(f'`include "{include_dir}/{slot.module}.v"\n'
                   for slot in slots if not slot.is_board_io)
