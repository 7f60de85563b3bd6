"""Tests for the planner session and project import/export."""

import json

import pytest

from pinpoint_planner.catalog import default_catalog
from pinpoint_planner.errors import (
    InvariantViolation,
    NotFoundError,
    PlacementRejected,
    ProjectFormatError,
    RejectReason,
)
from pinpoint_planner.models import Capability
from pinpoint_planner.project import (
    PlannerSession,
    check_project,
    read_project_file,
    write_project_file,
)


@pytest.fixture
def session():
    return PlannerSession(default_catalog(), "rpi4")


class TestSession:
    def test_assign(self, session):
        assignment = session.assign("dht22", 6)
        assert assignment.pin_index == 6
        assert session.state.is_component_placed("dht22")

    def test_rejected_assign_leaves_state(self, session):
        with pytest.raises(PlacementRejected) as exc:
            session.assign("bmp280", 6)
        assert exc.value.reason == RejectReason.INCOMPATIBLE_BUS
        assert len(session.state) == 0

    def test_assign_by_label(self, session):
        assignment = session.assign_label("bmp280", "2")
        assert assignment.pin_index == 2

    def test_unknown_label(self, session):
        with pytest.raises(NotFoundError):
            session.assign_label("dht22", "99")

    def test_unassign(self, session):
        session.assign("dht22", 6)
        assert session.unassign(6).component_id == "dht22"
        assert session.unassign(6) is None

    def test_select_board_discards_assignments(self, session):
        session.assign("dht22", 6)
        session.select_board("uno")
        assert session.board.id == "uno"
        assert len(session.state) == 0

    def test_select_unknown_board(self, session):
        with pytest.raises(NotFoundError):
            session.select_board("nope")

    def test_dependencies_follow_board(self, session):
        assert session.dependencies("ultrasonic_hcsr04")[0].required_status is True
        session.select_board("uno")
        assert session.dependencies("ultrasonic_hcsr04")[0].required_status is False


class TestExport:
    def test_project_shape(self, session):
        session.assign("pir", 10)
        session.assign("dht22", 6)
        project = session.to_project()
        assert project["boardId"] == "rpi4"
        assert project["boardName"] == "Raspberry Pi 4 Model B"
        assert project["assignments"] == [
            {"componentId": "dht22", "componentName": "DHT22 Sensor", "pin": "4", "pinType": "gpio"},
            {"componentId": "pir", "componentName": "PIR Motion Sensor", "pin": "17", "pinType": "gpio"},
        ]

    def test_empty_project(self, session):
        assert session.to_project()["assignments"] == []


class TestImport:
    def test_round_trip(self, session):
        session.assign("dht22", 6)
        session.assign("bmp280", 2)
        exported = session.to_project()

        fresh = PlannerSession(default_catalog(), "uno")
        report = fresh.load_project(exported)
        assert report.ok
        assert fresh.board.id == "rpi4"
        assert fresh.to_project() == exported

    def test_rejections_are_reported(self, session):
        report = session.load_project({
            "boardId": "rpi4",
            "assignments": [
                {"componentId": "dht22", "pin": "4"},
                {"componentId": "bmp280", "pin": "17"},
                {"componentId": "pir", "pin": "4"},
                {"componentId": "ghost", "pin": "22"},
                {"componentId": "led", "pin": "Z9"},
            ],
        })
        assert [a.component_id for a in report.placed] == ["dht22"]
        assert [r["componentId"] for r in report.rejected] == ["bmp280", "pir", "ghost", "led"]
        assert report.rejected[0]["reason"] == "incompatible_bus"
        assert report.rejected[1]["reason"] == "pin_occupied"
        assert report.rejected[2]["kind"] == "component"
        assert report.rejected[3]["kind"] == "pin"
        assert not report.ok

    def test_rejected_imports_logged(self, session, caplog):
        with caplog.at_level("WARNING", logger="pinpoint_planner"):
            session.load_project({"boardId": "rpi4", "assignments": [{"componentId": "bmp280", "pin": "17"}]})
        assert "bmp280" in caplog.text

    def test_rail_label_import_rejected(self, session):
        report = session.load_project({"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": "GND"}]})
        assert report.rejected[0]["reason"] == "non_data_pin"

    def test_unknown_board(self, session):
        with pytest.raises(NotFoundError):
            session.load_project({"boardId": "nope", "assignments": []})

    def test_import_replaces_existing(self, session):
        session.assign("pir", 10)
        session.load_project({"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": "4"}]})
        assert not session.state.is_component_placed("pir")

    def test_trusted_skips_validation(self, session):
        report = session.load_project(
            {"boardId": "rpi4", "assignments": [{"componentId": "bmp280", "pin": "17"}]},
            trusted=True,
        )
        assert report.ok
        assert session.state.component_at(10) == "bmp280"

    def test_trusted_reports_unknown_component(self, session):
        report = session.load_project(
            {"boardId": "rpi4", "assignments": [
                {"componentId": "ghost", "pin": "4"},
                {"componentId": "dht22", "pin": "17"},
            ]},
            trusted=True,
        )
        assert [a.component_id for a in report.placed] == ["dht22"]
        assert report.rejected[0]["componentId"] == "ghost"
        assert report.rejected[0]["exit_code"] == 2
        assert session.state.component_at(6) is None

    def test_trusted_still_enforces_invariants(self, session):
        with pytest.raises(InvariantViolation):
            session.load_project({"boardId": "rpi4", "assignments": [
                {"componentId": "dht22", "pin": "4"},
                {"componentId": "dht22", "pin": "17"},
            ]}, trusted=True)

    def test_import_does_not_touch_rails(self, session):
        session.load_project({"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": "4"}]})
        assert session.state.available_count(Capability.POWER) == 4

    def test_report_to_dict(self, session):
        report = session.load_project({"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": "4"}]})
        assert report.to_dict() == {
            "boardId": "rpi4",
            "placed": [{"pinIndex": 6, "componentId": "dht22"}],
            "rejected": [],
        }


class TestProjectFormat:
    @pytest.mark.parametrize("doc", [
        [],
        {"assignments": []},
        {"boardId": "rpi4"},
        {"boardId": "rpi4", "assignments": {}},
        {"boardId": "", "assignments": []},
        {"boardId": "rpi4", "assignments": [{"componentId": "dht22"}]},
        {"boardId": ["rpi4"], "assignments": []},
        {"boardId": "rpi4", "assignments": [{"componentId": ["dht22"], "pin": "4"}]},
        {"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": ["4"]}]},
        {"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": None}]},
        {"boardId": "rpi4", "assignments": [{"componentId": "dht22", "pin": True}]},
    ])
    def test_malformed_documents(self, doc):
        with pytest.raises(ProjectFormatError) as exc:
            check_project(doc)
        assert exc.value.exit_code == 4

    def test_corrupted_entry_stops_import(self, session):
        with pytest.raises(ProjectFormatError):
            session.load_project({"boardId": "rpi4", "assignments": [{"componentId": ["dht22"], "pin": "4"}]})
        assert len(session.state) == 0

    def test_integer_pin_label_accepted(self, session):
        report = session.load_project({"boardId": "uno", "assignments": [{"componentId": "led", "pin": 9}]})
        assert report.ok

    def test_extra_fields_allowed(self):
        doc = {"boardId": "rpi4", "boardName": "x", "id": "proj-1", "assignments": []}
        assert check_project(doc) is doc


class TestProjectFiles:
    def test_write_and_read(self, tmp_path, session):
        session.assign("dht22", 6)
        path = tmp_path / "plan.json"
        write_project_file(path, session.to_project())
        assert read_project_file(path) == session.to_project()

    def test_non_ascii_written_verbatim(self, tmp_path):
        path = tmp_path / "plan.json"
        write_project_file(path, {"boardId": "rpi4", "boardName": "Ω board", "assignments": []})
        assert "Ω board" in path.read_text(encoding="utf-8")

    def test_bad_json(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("{broken")
        with pytest.raises(ProjectFormatError):
            read_project_file(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({"assignments": []}))
        with pytest.raises(ProjectFormatError):
            read_project_file(path)
