"""
Builtin peripheral catalog.

Each row is (name, driver_id, source_module, pin_dir_mask, pin_count).

- name: the peripheral name as it appears in a peripheral list and the
  name of the host driver that manages it.
- driver_id: identifier placed in the FPGA driver ID table. The host
  runtime keeps an identical table, so IDs must never be renumbered.
- source_module: the Verilog module that implements the peripheral.
  It differs from name when the entry is an alias that reuses existing
  hardware with a different host driver (touch4 is four counters, so it
  is built from count4).
- pin_dir_mask: one bit per pin, 1 = output, 0 = input. LSB is the
  lowest pin. Bidirectional lines are listed as outputs.
- pin_count: number of FPGA pins the peripheral uses.

The board IO peripherals (bb4io, axo2, tang4k, stpxo2, basys3) are kept
here so the host can map their driver IDs, but slot 0 is always taken
from the board definition.
"""

CATALOG = [
    ("null", 1, "null", 0x0, 0),
    ("serout8", 2, "serout", 0xff, 8),
    ("qtr8", 3, "qtr8", 0xff, 8),
    ("qtr4", 4, "qtr4", 0xf, 4),
    ("ws2812", 5, "ws2812", 0xf, 4),
    ("rcrx", 6, "rcrx", 0xe, 4),
    ("serout4", 7, "serout", 0xf, 4),
    ("dproten", 8, "dproten", 0x8, 4),
    ("servo4", 9, "servo4", 0xf, 4),
    ("stepu", 10, "stepu", 0xf, 4),
    ("stepb", 11, "stepb", 0xf, 4),
    ("pwmout4", 12, "pgen16", 0xf, 4),
    ("quad2", 13, "quad2", 0x0, 4),
    ("pwmin4", 14, "pwmin4", 0x0, 4),
    ("ping4", 15, "ping4", 0xf, 4),
    ("pgen16", 16, "pgen16", 0xf, 4),
    ("irio", 17, "irio", 0x7, 4),
    ("pulse2", 18, "pulse2", 0xf, 4),
    ("touch4", 19, "count4", 0xf, 4),
    ("dc2", 20, "dc2", 0xf, 4),
    ("count4", 21, "count4", 0x0, 4),
    ("gpio4", 22, "gpio4", 0xf, 4),
    ("in4", 23, "in4", 0x0, 4),
    ("out4", 24, "out4", 0xf, 4),
    ("out4l", 25, "out4l", 0xf, 4),
    ("dpespi", 26, "dpespi", 0x7, 4),
    ("dpei2c", 27, "dpei2c", 0x7, 4),
    ("dplcd6", 28, "dplcd6", 0xf, 4),
    ("dpin32", 29, "dpin32", 0x7, 4),
    ("dpio8", 30, "dpio8", 0x7, 4),
    ("aamp", 31, "out4", 0xf, 4),
    ("dpdac8", 32, "dpespi", 0x7, 4),
    ("dpqpot", 33, "dpespi", 0x7, 4),
    ("dprtc", 34, "dpespi", 0x7, 4),
    ("dpavr", 35, "dpespi", 0x7, 4),
    ("dpadc812", 36, "dpadc12", 0x7, 4),
    ("dpslide4", 37, "dpadc12", 0x7, 4),
    ("dptif", 38, "dptif", 0x7, 4),
    ("dpus8", 39, "dpus8", 0x7, 4),
    ("rfob", 40, "rfob", 0xc, 4),
    ("dpout32", 41, "dpout32", 0xf, 4),
    ("bb4io", 42, "bb4io", 0x0, 0),
    ("axo2", 43, "axo2", 0x0, 0),
    ("tang4k", 44, "tang4k", 0x0, 0),
    ("tonegen", 45, "tonegen", 0xf, 4),
    ("stpxo2", 46, "stpxo2", 0x0, 0),
    ("basys3", 47, "basys3", 0x0, 0),
]
