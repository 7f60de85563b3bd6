"""Tests for the bill of materials."""

import csv
import io

import pytest

from pinpoint_planner.bom import bom_for_state, generate_bom, render_bom, render_bom_csv
from pinpoint_planner.catalog import default_catalog
from pinpoint_planner.errors import NotFoundError
from pinpoint_planner.project import PlannerSession


@pytest.fixture
def catalog():
    return default_catalog()


class TestGenerateBom:
    def test_main_components(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["dht22"])
        assert len(bom.main_components) == 1
        item = bom.main_components[0]
        assert (item.quantity, item.name, item.details) == (1, "DHT22 Sensor", "3.3V-5V")
        assert bom.dependency_count == 0

    def test_resistor_tally(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["ds18b20"])
        assert bom.resistors == {"4.7kΩ (pull_up)": 1}

    def test_tallies_merge_across_components(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["mpu6050", "mpu9250"])
        assert bom.resistors == {"4.7kΩ (i2c_pullup)": 4}

    def test_quantity_scales_with_component_count(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["mpu6050", "mpu6050"])
        assert bom.main_components[0].quantity == 2
        assert bom.resistors == {"4.7kΩ (i2c_pullup)": 4}

    def test_not_needed_dependency_becomes_note(self, catalog):
        bom = generate_bom(catalog, "uno", ["ultrasonic_hcsr04"])
        assert bom.breakout_boards == []
        assert bom.notes == [
            "HC-SR04 Ultrasonic Sensor (Voltage divider or level shifter for ECHO pin): Arduino Uno operates at 5V"
        ]

    def test_breakout_on_3v3_board(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["ultrasonic_hcsr04"])
        assert [b.name for b in bom.breakout_boards] == ["Voltage divider or level shifter for ECHO pin"]

    def test_alternative_noted(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["relay"])
        assert bom.other == []
        assert "Relay Module: Most relay modules include optocoupler isolation" in bom.notes

    def test_optional_tallied_and_noted(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["servo"])
        assert bom.power_supplies[0].details == "5V 1A+ (External 5V power supply)"
        assert any("is optional" in n for n in bom.notes)

    def test_free_form_quantity(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["dip_switch"])
        assert bom.resistors == {"10kΩ (pull_up_down)": 1}
        assert any("per_switch" in n for n in bom.notes)

    def test_capacitor_and_supply(self, catalog):
        bom = generate_bom(catalog, "uno", ["ws2812_strip"])
        assert bom.capacitors == {"1000µF (power_smoothing)": 1}
        assert len(bom.power_supplies) == 1
        assert bom.breakout_boards == []

    def test_warnings_collected(self, catalog):
        bom = generate_bom(catalog, "rpi4", ["led"])
        assert bom.warnings == ["Never connect LED directly to GPIO - will damage both LED and board"]

    def test_unknown_component(self, catalog):
        with pytest.raises(NotFoundError):
            generate_bom(catalog, "rpi4", ["ghost"])

    def test_from_state(self, catalog):
        session = PlannerSession(catalog, "rpi4")
        session.assign("ds18b20", 6)
        session.assign("led", 10)
        bom = bom_for_state(catalog, session.state)
        assert [i.name for i in bom.main_components] == ["DS18B20 Temperature Sensor", "LED"]


class TestRenderBom:
    def test_empty(self, catalog):
        assert render_bom(generate_bom(catalog, "rpi4", [])) == "No components or dependencies to list."

    def test_text_sections(self, catalog):
        text = render_bom(generate_bom(catalog, "uno", ["ds18b20", "ultrasonic_hcsr04"]))
        assert text.startswith("Bill of Materials\n=================")
        assert "--- MAIN COMPONENTS ---" in text
        assert "--- REQUIRED DEPENDENCIES ---" in text
        assert "Resistor: 4.7kΩ (pull_up)" in text
        assert "--- NOTES & ALTERNATIVES ---" in text
        assert "--- WARNINGS ---" in text

    def test_csv(self, catalog):
        out = render_bom_csv(generate_bom(catalog, "rpi4", ["ds18b20", "relay"]))
        rows = list(csv.reader(io.StringIO(out)))
        assert rows[0] == ["Category", "Quantity", "Item", "Details"]
        assert ["Main Component", "1", "DS18B20 Temperature Sensor", "Voltage: 3.3V-5V"] in rows
        assert ["Dependency", "1", "Resistor", "4.7kΩ (pull_up)"] in rows
        assert rows[-1][0] == "Warning"

    def test_csv_quotes_commas(self, catalog):
        out = render_bom_csv(generate_bom(catalog, "rpi4", ["servo"]))
        rows = list(csv.reader(io.StringIO(out)))
        notes = [r for r in rows if r[0] == "Note"]
        assert notes
        assert all(len(r) == 4 for r in rows)

    def test_to_dict(self, catalog):
        d = generate_bom(catalog, "rpi4", ["ds18b20"]).to_dict()
        assert d["dependencies"]["resistors"] == {"4.7kΩ (pull_up)": 1}
        assert d["mainComponents"][0]["name"] == "DS18B20 Temperature Sensor"
