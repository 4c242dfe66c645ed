import pytest

from perichain.config import load_board
from perichain.registry import default_registry

LICENCE_HEADER = """\
# *********************************************************
# Copyright (c) 2022 Demand Peripherals, Inc.
#
# This file is licensed separately for private and commercial
# use.  See LICENSE.txt which should have accompanied this file
# for details.
#
# *********************************************************
"""


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def board():
    return load_board(target="baseboard4")


@pytest.fixture
def write_perilist(tmp_path):
    def write(body, name="perilist"):
        path = tmp_path / name
        path.write_text(LICENCE_HEADER + body)
        return path
    return write
