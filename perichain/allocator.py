#!/usr/bin/env python3
"""
Slot and pin allocation.

Walks the peripheral names in order and gives each one the next bus
address (slot) and the next free block of physical pins. Slot 0 is
always the board IO peripheral from the board definition; it uses no
pins from the shared PCPIN walk since it owns the whole vector.

In the FPGA peripherals are called "cores", on the host "slots". Both
names refer to the same thing.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from .config import BoardSpec
from .errors import CapacityError
from .registry import PeripheralDescriptor, Registry

# Entries in the driver ID table. Cores are addressed with 4 bits, and
# the host runtime reads exactly this many IDs.
DRIVER_TABLE_CAPACITY = 16


@dataclass(frozen=True)
class PinRange:
    """Contiguous block of physical pins."""
    start: int
    count: int

    @property
    def stop(self) -> int:
        return self.start + self.count

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.stop))


@dataclass(frozen=True)
class Slot:
    """One addressable peripheral instance on the bus."""
    index: int
    descriptor: PeripheralDescriptor
    pin_range: PinRange
    driver_id: int

    @property
    def is_board_io(self) -> bool:
        return self.index == 0

    @property
    def module(self) -> str:
        return self.descriptor.source_module


def allocate_slots(names: Iterable[str], registry: Registry, board: BoardSpec) -> Iterator[Slot]:
    """
    Yield one Slot per peripheral, preceded by the board IO slot 0.

    Pins past board.max_physical_pin are still allocated; the emitter
    leaves them unconnected.

    Raises:
        CapacityError: Before resolving a name that would need slot 16
        UnknownPeripheralError: If a name is not in the registry
    """
    board_io = board.board_io
    yield Slot(index=0, descriptor=board_io, pin_range=PinRange(0, 0),
               driver_id=board_io.driver_id)

    index = 1
    pin = 0
    for name in names:
        if index >= DRIVER_TABLE_CAPACITY:
            raise CapacityError(
                f"Too many peripherals: {name} would be core {index}, "
                f"at most {DRIVER_TABLE_CAPACITY} cores are addressable")

        desc = registry.lookup(name)
        yield Slot(index=index, descriptor=desc,
                   pin_range=PinRange(pin, desc.pin_count),
                   driver_id=desc.driver_id)

        index += 1
        pin += desc.pin_count


@dataclass
class Chain:
    """All slots of one build, in bus order."""
    board: BoardSpec
    slots: List[Slot] = field(default_factory=list)

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    @property
    def pin_count(self) -> int:
        return sum(s.pin_range.count for s in self.slots)

    @property
    def peripherals(self) -> List[Slot]:
        """Slots other than the board IO slot."""
        return self.slots[1:]

    def repeated_board_io(self) -> List[Slot]:
        """Peripheral slots that name the board IO core again."""
        board_io = self.board.board_io
        return [s for s in self.peripherals
                if s.descriptor.name == board_io.name
                or s.module == board_io.source_module]

    def dropped_pins(self) -> List[int]:
        """Physical pin indices allocated past the board's last pin."""
        return [pin for s in self.peripherals for pin in s.pin_range
                if pin > self.board.max_physical_pin]


def build_chain(names: Iterable[str], registry: Registry, board: BoardSpec) -> Chain:
    """Allocate every name and collect the result."""
    return Chain(board=board, slots=list(allocate_slots(names, registry, board)))
