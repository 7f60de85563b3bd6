"""Tests for Markdown and JSON exports."""

import json

from pinpoint_planner.catalog import default_catalog
from pinpoint_planner.export import export_filename, export_json, export_markdown
from pinpoint_planner.project import PlannerSession


def _session():
    session = PlannerSession(default_catalog(), "rpi4")
    session.assign("dht22", 6)
    session.assign("bmp280", 2)
    return session


class TestMarkdown:
    def test_header_and_table(self):
        session = _session()
        md = export_markdown(session.catalog, session.state)
        assert md.startswith("# PinPoint Planner Export: Raspberry Pi 4 Model B\n")
        assert "| Component | Assigned Pin | Pin Type |" in md
        assert "| BMP280 Pressure Sensor | 2 | I2C |" in md
        assert "| DHT22 Sensor | 4 | GPIO |" in md
        assert md.rstrip().endswith("*Generated by PinPoint Planner*")

    def test_rows_in_pin_order(self):
        session = _session()
        md = export_markdown(session.catalog, session.state)
        assert md.index("BMP280") < md.index("DHT22")


class TestJson:
    def test_matches_project(self):
        session = _session()
        assert json.loads(export_json(session.catalog, session.state)) == session.to_project()

    def test_reimports_cleanly(self):
        session = _session()
        fresh = PlannerSession(default_catalog(), "uno")
        report = fresh.load_project(json.loads(export_json(session.catalog, session.state)))
        assert report.ok
        assert len(report.placed) == 2


class TestFilename:
    def test_slug(self):
        assert export_filename("Raspberry Pi 4 Model B", "plan.md") == "raspberry-pi-4-model-b-plan.md"
