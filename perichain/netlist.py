#!/usr/bin/env python3
"""
Structural netlist records for a peripheral chain.

The emitters in this module decide what the generated Verilog says;
perichain.verilog decides how it is written. Each stage returns an
ordered list of records:

1. emit_slot: wires, instance, pin bindings and address decode per slot
2. stitch_bus: the DAT_I/DAT_O daisy chain and the STALL_I/ACK_I ORs
3. driver_id_table: the core -> driver ID lookup module
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .allocator import DRIVER_TABLE_CAPACITY, Chain, Slot
from .config import BoardSpec
from .errors import CapacityError

# Bus signals shared by every core, in port order
BUS_PORTS = ("CLK_O", "WE_O", "TGA_O")
ADDRESS_PORT = "ADR_O[7:0]"
CLOCKS = "bc0clocks"
BOARD_IO_PORTS = ("BRDIO", "PCPIN")
PHYSICAL_PINS = "PCPIN"

# Host bus side of the daisy chain
BUS_DATA_IN = "bi0datin"
BUS_DATA_OUT = "bi0datout"
BUS_ADDRESS_HIGH = "bi0addr[11:8]"


def slot_prefix(index: int) -> str:
    return f"p{index:02d}"


# ============================================================================
# Records
# ============================================================================

@dataclass(frozen=True)
class Blank:
    """Empty line"""


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Wire:
    """Net declaration like 'wire [7:0] p01DAT_I;  // comment'"""
    name: str
    width: Optional[int] = None  # None for a single bit
    comment: Optional[str] = None
    kind: str = "wire"


@dataclass(frozen=True)
class Instance:
    """Module instantiation with positional port connections"""
    module: str
    name: str
    ports: Tuple[str, ...]


@dataclass(frozen=True)
class PinBinding:
    """Connection between a core's private pin and the shared PCPIN vector"""
    slot: int
    pin: int        # pin within the core
    physical: int   # index into PCPIN
    output: bool    # True when the core drives PCPIN


@dataclass(frozen=True)
class AddressDecode:
    """Strobe for a core, set when the high address bits select it"""
    slot: int


@dataclass(frozen=True)
class Assign:
    lhs: str
    rhs: str
    indent: int = 4


@dataclass(frozen=True)
class OrReduce:
    """OR of all terms driven onto target, terms in slot order"""
    target: str
    terms: Tuple[str, ...]


@dataclass(frozen=True)
class EndModule:
    """Closes the module the chain is generated into"""


class DriverIdTable:
    """
    Fixed size core -> driver ID table.

    The capacity is shared with the host runtime and never grows.
    Unassigned entries are 0.
    """

    def __init__(self, capacity: int = DRIVER_TABLE_CAPACITY):
        self._ids = [0] * capacity

    @classmethod
    def from_slots(cls, slots: Sequence[Slot]) -> 'DriverIdTable':
        table = cls()
        for slot in slots:
            table[slot.index] = slot.driver_id
        return table

    def __setitem__(self, index: int, driver_id: int):
        if not 0 <= index < len(self._ids):
            raise CapacityError(
                f"Core {index} is outside the driver ID table (0-{len(self._ids) - 1})")
        self._ids[index] = driver_id

    def __getitem__(self, index: int) -> int:
        return self._ids[index]

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self):
        return iter(self._ids)

    def __eq__(self, other):
        if isinstance(other, DriverIdTable):
            return self._ids == other._ids
        return NotImplemented

    def __repr__(self):
        return f"DriverIdTable({self._ids})"


Record = Union[Blank, Comment, Wire, Instance, PinBinding, AddressDecode,
               Assign, OrReduce, EndModule, DriverIdTable]


# ============================================================================
# Instantiation
# ============================================================================

def _bus_wires(prefix: str) -> List[Record]:
    return [
        Wire(f"{prefix}STB_O", comment="==1 if this peri is being addressed"),
        Wire(f"{prefix}STALL_O", comment="==1 if we need more clk cycles"),
        Wire(f"{prefix}ACK_O", comment="==1 for peri to acknowledge transfer"),
        Wire(f"{prefix}DAT_I", width=8, comment="Data INto the peripheral;"),
        Wire(f"{prefix}DAT_O", width=8,
             comment="Data OUTput from the peripheral, = DAT_I if not us."),
    ]


def _bus_ports(prefix: str) -> Tuple[str, ...]:
    return BUS_PORTS + (
        f"{prefix}STB_O", ADDRESS_PORT, f"{prefix}STALL_O", f"{prefix}ACK_O",
        f"{prefix}DAT_I", f"{prefix}DAT_O", CLOCKS)


def emit_slot(slot: Slot, board: BoardSpec) -> List[Record]:
    """
    Generate the records that declare and instantiate one core.

    Slot 0 is the board IO core and gets the raw board IO and the full
    PCPIN vector. Every other core gets a private tri-state pin bus, and
    one binding per pin onto PCPIN in the direction given by its pin
    mask. Pins that land past board.max_physical_pin are not connected.
    """
    prefix = slot_prefix(slot.index)
    records: List[Record] = [Blank(), Comment(f"Slot: {slot.index}   {slot.module}")]
    records.extend(_bus_wires(prefix))

    if slot.is_board_io:
        records.append(Instance(slot.module, prefix, _bus_ports(prefix) + BOARD_IO_PORTS))
        records.append(AddressDecode(slot.index))
        return records

    pins = f"{prefix}pins"
    desc = slot.descriptor
    records.append(Wire(pins, width=desc.pin_count, kind="tri"))
    records.append(Instance(slot.module, prefix, _bus_ports(prefix) + (pins,)))
    for pin, physical in enumerate(slot.pin_range):
        # IO pins are not always a multiple of 4
        if physical > board.max_physical_pin:
            continue
        records.append(PinBinding(slot.index, pin, physical, desc.is_output(pin)))
    records.append(AddressDecode(slot.index))
    return records


# ============================================================================
# Bus interconnect
# ============================================================================

def stitch_bus(slots: Sequence[Slot]) -> List[Record]:
    """
    Link the cores' data lines into a chain and OR their status lines.

    Read data enters at the last core from the host bus, passes down
    through each core (a core not being addressed copies DAT_I to
    DAT_O) and leaves slot 0 back to the host bus.
    """
    if not slots:
        raise ValueError("Bus needs at least the board IO slot")

    prefixes = [slot_prefix(s.index) for s in slots]
    records: List[Record] = [
        Blank(),
        Assign(BUS_DATA_IN, f"{prefixes[0]}DAT_O", indent=0),
        Blank(),
    ]
    for lower, upper in zip(prefixes, prefixes[1:]):
        records.append(Assign(f"{lower}DAT_I", f"{upper}DAT_O", indent=0))
    records.append(Assign(f"{prefixes[-1]}DAT_I", BUS_DATA_OUT, indent=0))

    records.append(Blank())
    records.append(OrReduce("STALL_I", tuple(f"{p}STALL_O" for p in prefixes)))
    records.append(Blank())
    records.append(OrReduce("ACK_I", tuple(f"{p}ACK_O" for p in prefixes)))
    records.append(Blank())
    records.append(EndModule())
    records.append(Blank())
    return records


# ============================================================================
# Driver ID table
# ============================================================================

def driver_id_table(slots: Sequence[Slot]) -> List[Record]:
    """Generate the perilist module that maps core number to driver ID."""
    return [Blank(), DriverIdTable.from_slots(slots), Blank()]


def build_netlist(chain: Chain) -> List[Record]:
    """Run every emission stage over a chain, in output order."""
    records: List[Record] = []
    for slot in chain.slots:
        records.extend(emit_slot(slot, chain.board))
    records.extend(stitch_bus(chain.slots))
    records.extend(driver_id_table(chain.slots))
    return records
