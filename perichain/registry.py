#!/usr/bin/env python3
"""
Peripheral descriptor registry.

The registry maps a peripheral name to the descriptor that tells the
chain builder which Verilog module to instantiate, how many FPGA pins
it takes, which way each pin points, and which driver ID the host
should load for it. It is built once and never modified.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Tuple

from .catalog import CATALOG
from .errors import UnknownPeripheralError

# Longest peripheral name, including the terminator slot. Names are
# compared on their first MAX_NAME_LENGTH - 1 characters.
MAX_NAME_LENGTH = 20


def _key(name: str) -> str:
    return name[:MAX_NAME_LENGTH - 1]


@dataclass(frozen=True)
class PeripheralDescriptor:
    """Catalog record for one peripheral."""
    name: str
    driver_id: int
    source_module: str
    pin_dir_mask: int  # bit set == output, LSB is pin 0
    pin_count: int

    @property
    def is_alias(self) -> bool:
        """True when this entry reuses another peripheral's hardware."""
        return self.source_module != self.name

    def is_output(self, pin: int) -> bool:
        return bool(self.pin_dir_mask & (1 << pin))

    @classmethod
    def from_row(cls, row: Tuple[str, int, str, int, int]) -> 'PeripheralDescriptor':
        name, driver_id, source_module, pin_dir_mask, pin_count = row
        return cls(name=name, driver_id=driver_id, source_module=source_module,
                   pin_dir_mask=pin_dir_mask, pin_count=pin_count)


class Registry:
    """Read-only name -> PeripheralDescriptor lookup."""

    def __init__(self, descriptors: Iterable[PeripheralDescriptor]):
        table = {}
        for desc in descriptors:
            key = _key(desc.name)
            if key in table:
                raise ValueError(f"Duplicate peripheral name in catalog: {desc.name}")
            table[key] = desc
        self._table = MappingProxyType(table)

    def lookup(self, name: str) -> PeripheralDescriptor:
        """
        Resolve a peripheral name.

        Raises:
            UnknownPeripheralError: If no catalog entry matches name
        """
        try:
            return self._table[_key(name)]
        except KeyError:
            raise UnknownPeripheralError(name) from None

    def __contains__(self, name: str) -> bool:
        return _key(name) in self._table

    def __iter__(self) -> Iterator[PeripheralDescriptor]:
        return iter(self._table.values())

    def __len__(self) -> int:
        return len(self._table)

    def aliases_of(self, source_module: str) -> list:
        """Return every descriptor built from the given Verilog module."""
        return [d for d in self if d.source_module == source_module]


def default_registry() -> Registry:
    """Build the registry from the builtin catalog table."""
    return Registry(PeripheralDescriptor.from_row(row) for row in CATALOG)
