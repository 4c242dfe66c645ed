import pytest

from perichain.allocator import PinRange, Slot, build_chain
from perichain.config import load_board
from perichain.errors import CapacityError
from perichain.netlist import (
    AddressDecode, Assign, DriverIdTable, EndModule, Instance, OrReduce,
    PinBinding, Wire, build_netlist, driver_id_table, emit_slot, stitch_bus,
)


def of_type(records, cls):
    return [r for r in records if isinstance(r, cls)]


def test_board_io_slot(registry, board):
    slot = build_chain([], registry, board).slots[0]
    records = emit_slot(slot, board)
    [inst] = of_type(records, Instance)
    assert inst.module == "bb4io"
    assert inst.name == "p00"
    assert inst.ports[-3:] == ("bc0clocks", "BRDIO", "PCPIN")
    assert of_type(records, PinBinding) == []
    assert of_type(records, AddressDecode) == [AddressDecode(0)]
    assert [w.name for w in of_type(records, Wire)] == \
        ["p00STB_O", "p00STALL_O", "p00ACK_O", "p00DAT_I", "p00DAT_O"]


def test_peripheral_slot(registry, board):
    chain = build_chain(["out4", "in4"], registry, board)
    out4 = emit_slot(chain.slots[1], board)
    in4 = emit_slot(chain.slots[2], board)

    [inst] = of_type(out4, Instance)
    assert inst.module == "out4"
    assert inst.ports == ("CLK_O", "WE_O", "TGA_O", "p01STB_O", "ADR_O[7:0]",
                          "p01STALL_O", "p01ACK_O", "p01DAT_I", "p01DAT_O",
                          "bc0clocks", "p01pins")
    assert Wire("p01pins", width=4, kind="tri") in out4
    assert of_type(out4, PinBinding) == [PinBinding(1, p, p, True) for p in range(4)]
    assert of_type(in4, PinBinding) == [PinBinding(2, p, 4 + p, False) for p in range(4)]
    assert of_type(in4, AddressDecode) == [AddressDecode(2)]


def test_alias_instantiates_source_module(registry, board):
    slot = build_chain(["pwmout4"], registry, board).slots[1]
    [inst] = of_type(emit_slot(slot, board), Instance)
    assert inst.module == "pgen16"


def test_mixed_pin_directions(registry, board):
    slot = build_chain(["rcrx"], registry, board).slots[1]
    bindings = of_type(emit_slot(slot, board), PinBinding)
    assert [b.output for b in bindings] == [False, True, True, True]


def test_pins_past_the_board_are_dropped(registry):
    stepxo2 = load_board(target="stepxo2")  # pins 0-33
    desc = registry.lookup("gpio4")
    slot = Slot(index=9, descriptor=desc, pin_range=PinRange(32, 4), driver_id=desc.driver_id)
    records = emit_slot(slot, stepxo2)
    bindings = of_type(records, PinBinding)
    assert [b.physical for b in bindings] == [32, 33]
    assert [b.pin for b in bindings] == [0, 1]
    # the core itself is still instantiated and addressable
    assert len(of_type(records, Instance)) == 1
    assert of_type(records, AddressDecode) == [AddressDecode(9)]


def test_slot_fully_past_the_board(registry, board):
    chain = build_chain(["out4"] * 9, registry, board)
    records = emit_slot(chain.slots[9], board)
    assert of_type(records, PinBinding) == []
    assert Wire("p09pins", width=4, kind="tri") in records


def test_daisy_chain(registry, board):
    chain = build_chain(["out4", "in4"], registry, board)
    assigns = of_type(stitch_bus(chain.slots), Assign)
    assert [(a.lhs, a.rhs) for a in assigns] == [
        ("bi0datin", "p00DAT_O"),
        ("p00DAT_I", "p01DAT_O"),
        ("p01DAT_I", "p02DAT_O"),
        ("p02DAT_I", "bi0datout"),
    ]


def test_status_lines(registry, board):
    chain = build_chain(["out4", "in4"], registry, board)
    records = stitch_bus(chain.slots)
    assert of_type(records, OrReduce) == [
        OrReduce("STALL_I", ("p00STALL_O", "p01STALL_O", "p02STALL_O")),
        OrReduce("ACK_I", ("p00ACK_O", "p01ACK_O", "p02ACK_O")),
    ]
    assert len(of_type(records, EndModule)) == 1


def test_single_slot_bus(registry, board):
    chain = build_chain([], registry, board)
    records = stitch_bus(chain.slots)
    assigns = of_type(records, Assign)
    assert [(a.lhs, a.rhs) for a in assigns] == [
        ("bi0datin", "p00DAT_O"),
        ("p00DAT_I", "bi0datout"),
    ]
    for reduce in of_type(records, OrReduce):
        assert len(reduce.terms) == 1


def test_empty_bus_rejected():
    with pytest.raises(ValueError):
        stitch_bus([])


def test_driver_id_table(registry, board):
    chain = build_chain(["out4", "in4"], registry, board)
    [table] = of_type(driver_id_table(chain.slots), DriverIdTable)
    assert len(table) == 16
    assert list(table) == [42, 24, 23] + [0] * 13


def test_driver_id_table_board_only(registry, board):
    [table] = of_type(driver_id_table(build_chain([], registry, board).slots), DriverIdTable)
    assert list(table) == [42] + [0] * 15


def test_driver_id_table_does_not_grow():
    table = DriverIdTable()
    table[15] = 7
    assert table[15] == 7
    with pytest.raises(CapacityError):
        table[16] = 1
    with pytest.raises(CapacityError):
        table[-1] = 1
    assert len(table) == 16


def test_netlist_order(registry, board):
    chain = build_chain(["out4"], registry, board)
    records = build_netlist(chain)
    decodes = [i for i, r in enumerate(records) if isinstance(r, AddressDecode)]
    end = next(i for i, r in enumerate(records) if isinstance(r, EndModule))
    table = next(i for i, r in enumerate(records) if isinstance(r, DriverIdTable))
    assert decodes[0] < decodes[1] < end < table
