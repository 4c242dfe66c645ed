#!/usr/bin/env python3
"""
Board and catalog configuration for perichain.

This module handles loading and validating YAML files that describe an
FPGA board (how many physical pins it exposes, how many peripherals it
is meant to carry, and which board IO peripheral sits in slot 0) and
optional replacement peripheral catalogs. This allows the chain builder
to target different boards without code changes.
"""

import yaml
import jsonschema
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass

from .registry import PeripheralDescriptor, Registry


BOARDS_DIR = Path(__file__).parent / "boards"
DEFAULT_BOARD = "baseboard4"


# JSON Schema for validating board definition YAML files
BOARD_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "perichain Board Definition",
    "description": "Pin and slot bounds for one FPGA board",
    "type": "object",
    "required": ["board", "max_physical_pin", "max_slots", "board_io"],
    "properties": {
        "board": {
            "type": "string",
            "description": "Board name (e.g., baseboard4, basys3)"
        },
        "max_physical_pin": {
            "type": "integer",
            "minimum": 0,
            "description": "Highest addressable index of the shared PCPIN vector"
        },
        "max_slots": {
            "type": "integer",
            "minimum": 1,
            "description": "Number of peripherals the board is meant to carry"
        },
        "board_io": {
            "type": "object",
            "required": ["name", "driver_id"],
            "properties": {
                "name": {"type": "string", "description": "Board IO peripheral name"},
                "driver_id": {"type": "integer", "minimum": 0, "maximum": 0xffff},
                "source_module": {"type": "string", "description": "Verilog module, defaults to name"}
            },
            "additionalProperties": False
        }
    },
    "additionalProperties": False
}

# JSON Schema for validating peripheral catalog YAML files
CATALOG_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "perichain Peripheral Catalog",
    "type": "object",
    "required": ["peripherals"],
    "properties": {
        "peripherals": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "driver_id", "pin_dir_mask", "pin_count"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "driver_id": {"type": "integer", "minimum": 0, "maximum": 0xffff},
                    "source_module": {"type": "string"},
                    "pin_dir_mask": {
                        "oneOf": [
                            {"type": "integer", "minimum": 0},
                            {"type": "string", "pattern": "^0[xX][0-9a-fA-F]+$"}
                        ],
                        "description": "Pin directions, bit set == output"
                    },
                    "pin_count": {"type": "integer", "minimum": 0}
                },
                "additionalProperties": False
            }
        }
    },
    "additionalProperties": False
}


def _load_yaml(path: Path, schema: Dict[str, Any]) -> Dict[str, Any]:
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Invalid config file {path}: {e.message}") from e

    return data


@dataclass(frozen=True)
class BoardSpec:
    """Board specific bounds and the slot 0 board IO peripheral."""
    name: str
    max_physical_pin: int  # inclusive
    max_slots: int
    board_io: PeripheralDescriptor

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'BoardSpec':
        """Create BoardSpec from dictionary (loaded from YAML)."""
        io = d['board_io']
        board_io = PeripheralDescriptor(
            name=io['name'],
            driver_id=io['driver_id'],
            source_module=io.get('source_module', io['name']),
            pin_dir_mask=0,
            pin_count=0,
        )
        return cls(
            name=d['board'],
            max_physical_pin=d['max_physical_pin'],
            max_slots=d['max_slots'],
            board_io=board_io,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> 'BoardSpec':
        """Load and validate a board definition from YAML file.

        Raises:
            ValueError: If the file doesn't match the board schema
            yaml.YAMLError: If YAML is malformed
            FileNotFoundError: If file doesn't exist
        """
        return cls.from_dict(_load_yaml(yaml_path, BOARD_SCHEMA))

    @property
    def physical_pin_count(self) -> int:
        return self.max_physical_pin + 1


def builtin_boards() -> List[str]:
    """Names of the board definitions shipped with the package."""
    return sorted(p.stem for p in BOARDS_DIR.glob("*.yaml"))


def load_board(board_path: Optional[Path] = None, target: Optional[str] = None) -> BoardSpec:
    """
    Load a board definition from file or use a builtin one.

    Args:
        board_path: Path to board YAML file
        target: Name of a builtin board ('baseboard4', 'basys3', ...)

    Returns:
        BoardSpec object

    Priority:
        1. board_path if provided
        2. builtin board matching target name
        3. default board (baseboard4)

    Raises:
        FileNotFoundError: If board_path or the named builtin board is missing
    """
    if board_path:
        return BoardSpec.from_yaml(board_path)

    name = target or DEFAULT_BOARD
    builtin_path = BOARDS_DIR / f"{name}.yaml"
    if not builtin_path.exists():
        raise FileNotFoundError(
            f"Unknown board '{name}' (available: {', '.join(builtin_boards())})")
    return BoardSpec.from_yaml(builtin_path)


def _parse_mask(value) -> int:
    if isinstance(value, str):
        return int(value, 16)
    return value


def load_registry(catalog_path: Path) -> Registry:
    """
    Build a registry from a YAML peripheral catalog.

    Raises:
        ValueError: If the catalog doesn't match the schema or repeats a name
    """
    data = _load_yaml(catalog_path, CATALOG_SCHEMA)
    return Registry(
        PeripheralDescriptor(
            name=p['name'],
            driver_id=p['driver_id'],
            source_module=p.get('source_module', p['name']),
            pin_dir_mask=_parse_mask(p['pin_dir_mask']),
            pin_count=p['pin_count'],
        )
        for p in data['peripherals']
    )
