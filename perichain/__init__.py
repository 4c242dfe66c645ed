"""
perichain - Peripheral chain generator for Demand Peripherals style FPGA builds.

This package provides tools for:
- Reading peripheral lists (the per-build list of peripheral names)
- Allocating bus slots and physical pins to each peripheral
- Generating the Verilog that instantiates and daisy-chains the peripherals
- Generating the core -> driver ID table read by the host runtime

Example peripheral list (after the 8 line licence header):
    # motor controller
    dc2 dc2
    quad2
    out4 in4
"""

__version__ = "0.1.0"

from .errors import (
    ChainError,
    UsageError,
    ChainIOError,
    ConfigFormatError,
    UnknownPeripheralError,
    CapacityError,
)

from .registry import (
    PeripheralDescriptor,
    Registry,
    default_registry,
)

from .config import (
    BoardSpec,
    load_board,
    load_registry,
)

from .perilist import read_peripheral_names

from .allocator import (
    DRIVER_TABLE_CAPACITY,
    PinRange,
    Slot,
    Chain,
    allocate_slots,
    build_chain,
)

from .netlist import (
    DriverIdTable,
    emit_slot,
    stitch_bus,
    driver_id_table,
    build_netlist,
)

from .verilog import render, render_sources

__all__ = [
    # Errors
    "ChainError",
    "UsageError",
    "ChainIOError",
    "ConfigFormatError",
    "UnknownPeripheralError",
    "CapacityError",
    # Registry and configuration
    "PeripheralDescriptor",
    "Registry",
    "default_registry",
    "BoardSpec",
    "load_board",
    "load_registry",
    # Chain building
    "read_peripheral_names",
    "DRIVER_TABLE_CAPACITY",
    "PinRange",
    "Slot",
    "Chain",
    "allocate_slots",
    "build_chain",
    # Code generation
    "DriverIdTable",
    "emit_slot",
    "stitch_bus",
    "driver_id_table",
    "build_netlist",
    "render",
    "render_sources",
]
