"""Tests for the built-in board definitions."""

import pytest

from pinpoint_planner.boards import BOARDS
from pinpoint_planner.models import DATA_CAPABILITIES, Capability


@pytest.mark.parametrize("board_id", ["rpi4", "uno", "esp32"])
class TestBuiltinBoards:
    def test_id_matches_key(self, board_id):
        assert BOARDS[board_id].id == board_id

    def test_has_both_rails(self, board_id):
        board = BOARDS[board_id]
        assert board.pin_indexes(Capability.POWER)
        assert board.pin_indexes(Capability.GROUND)

    def test_has_data_pins(self, board_id):
        board = BOARDS[board_id]
        assert any(p.capability in DATA_CAPABILITIES for p in board.pins)

    def test_data_labels_unique(self, board_id):
        labels = [p.label for p in BOARDS[board_id].pins if not p.capability.is_rail]
        assert len(labels) == len(set(labels))

    def test_every_pin_titled(self, board_id):
        assert all(p.title for p in BOARDS[board_id].pins)


class TestBoardDetails:
    def test_starter_code_language(self):
        assert BOARDS["rpi4"].language == "python"
        assert BOARDS["uno"].language == "arduino"
        assert BOARDS["esp32"].language == "arduino"

    def test_logic_voltage(self):
        assert BOARDS["uno"].logic_voltage == 5.0
        assert BOARDS["rpi4"].logic_voltage == 3.3

    def test_rpi4_i2c_pins(self):
        board = BOARDS["rpi4"]
        assert [board.pins[i].label for i in board.pin_indexes(Capability.I2C)] == ["2", "3", "ID_SD", "ID_SC"]

    def test_is_rail(self):
        assert Capability.GROUND.is_rail
        assert not Capability.UART.is_rail
