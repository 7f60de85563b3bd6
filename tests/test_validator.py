"""Tests for placement validation."""

import pytest

from pinpoint_planner.catalog import Catalog, default_catalog
from pinpoint_planner.errors import NotFoundError, PlacementRejected, RejectReason
from pinpoint_planner.models import BoardDefinition, Capability, ComponentDefinition, PinSpec
from pinpoint_planner.tracker import BoardState
from pinpoint_planner.validator import validate_placement


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def state(catalog):
    return BoardState(catalog.board("rpi4"))


def _tight_catalog(pins):
    board = BoardDefinition("tight", "Tight", pins)
    comp = ComponentDefinition("sensor", "Sensor", (Capability.I2C,), power=1, ground=1)
    return Catalog({"sensor": comp}, {"tight": board})


class TestAccepted:
    def test_gpio_component_on_gpio_pin(self, catalog, state):
        verdict = validate_placement(catalog, "dht22", 6, state)
        assert verdict.ok
        assert verdict.reason is None

    def test_i2c_component_on_i2c_pin(self, catalog, state):
        assert validate_placement(catalog, "bmp280", 2, state).ok

    def test_multi_bus_component(self, catalog, state):
        assert validate_placement(catalog, "bme680", 2, state).ok
        assert validate_placement(catalog, "bme680", 18, state).ok

    def test_validation_does_not_mutate(self, catalog, state):
        validate_placement(catalog, "dht22", 6, state)
        assert len(state) == 0


class TestRejected:
    def test_already_assigned(self, catalog, state):
        state.place("dht22", 6)
        verdict = validate_placement(catalog, "dht22", 10, state)
        assert verdict.reason == RejectReason.ALREADY_ASSIGNED
        assert verdict.details["pin_index"] == 6

    def test_pin_occupied(self, catalog, state):
        state.place("dht22", 6)
        verdict = validate_placement(catalog, "pir", 6, state)
        assert verdict.reason == RejectReason.PIN_OCCUPIED
        assert verdict.details["occupant"] == "dht22"

    def test_already_assigned_wins_over_pin_occupied(self, catalog, state):
        state.place("dht22", 6)
        assert validate_placement(catalog, "dht22", 6, state).reason == RejectReason.ALREADY_ASSIGNED

    @pytest.mark.parametrize("pin_index", [0, 1, 5, 8])
    def test_rail_pins_never_carry_data(self, catalog, state, pin_index):
        verdict = validate_placement(catalog, "dht22", pin_index, state)
        assert verdict.reason == RejectReason.NON_DATA_PIN

    def test_incompatible_bus(self, catalog, state):
        verdict = validate_placement(catalog, "bmp280", 6, state)
        assert verdict.reason == RejectReason.INCOMPATIBLE_BUS
        assert verdict.details["allowed"] == ["i2c"]
        assert verdict.details["capability"] == "gpio"

    def test_every_incompatible_pairing_rejects(self, catalog, state):
        board = state.board
        for comp in catalog.list_components():
            for i, pin in enumerate(board.pins):
                if pin.capability.is_rail or comp.accepts(pin.capability):
                    continue
                assert validate_placement(catalog, comp.id, i, state).reason == RejectReason.INCOMPATIBLE_BUS

    def test_insufficient_power(self):
        catalog = _tight_catalog([
            PinSpec("SDA", Capability.I2C),
            PinSpec("GND", Capability.GROUND),
        ])
        state = BoardState(catalog.board("tight"))
        verdict = validate_placement(catalog, "sensor", 0, state)
        assert verdict.reason == RejectReason.INSUFFICIENT_POWER
        assert verdict.details == {"component": "sensor", "required": 1, "available": 0}

    def test_insufficient_ground(self):
        catalog = _tight_catalog([
            PinSpec("3V3", Capability.POWER),
            PinSpec("SDA", Capability.I2C),
        ])
        state = BoardState(catalog.board("tight"))
        verdict = validate_placement(catalog, "sensor", 1, state)
        assert verdict.reason == RejectReason.INSUFFICIENT_GROUND
        assert verdict.details["available"] == 0

    def test_bus_checked_before_power(self):
        catalog = _tight_catalog([PinSpec("D1", Capability.GPIO)])
        state = BoardState(catalog.board("tight"))
        assert validate_placement(catalog, "sensor", 0, state).reason == RejectReason.INCOMPATIBLE_BUS


class TestErrors:
    def test_unknown_component(self, catalog, state):
        with pytest.raises(NotFoundError):
            validate_placement(catalog, "nope", 6, state)

    def test_pin_off_board(self, catalog, state):
        with pytest.raises(NotFoundError):
            validate_placement(catalog, "dht22", 99, state)

    def test_raise_for_rejection(self, catalog, state):
        verdict = validate_placement(catalog, "dht22", 0, state)
        with pytest.raises(PlacementRejected) as exc:
            verdict.raise_for_rejection()
        assert exc.value.reason == RejectReason.NON_DATA_PIN
        assert exc.value.to_dict()["reason"] == "non_data_pin"

    def test_accepted_does_not_raise(self, catalog, state):
        validate_placement(catalog, "dht22", 6, state).raise_for_rejection()

    def test_to_dict(self, catalog, state):
        d = validate_placement(catalog, "bmp280", 6, state).to_dict()
        assert d["ok"] is False
        assert d["reason"] == "incompatible_bus"
        assert d["pinIndex"] == 6
