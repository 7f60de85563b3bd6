"""Planner session and project import/export for pinpoint-planner."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.errors import NotFoundError, PlannerError, ProjectFormatError
from pinpoint_planner.models import Assignment, BoardDefinition
from pinpoint_planner.resolver import ResolvedDependency, resolve_dependencies
from pinpoint_planner.tracker import BoardState
from pinpoint_planner.validator import Verdict, validate_placement

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    """What happened when a project document was replayed onto a board."""
    board_id: str
    placed: list[Assignment] = field(default_factory=list)
    rejected: list[dict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected

    def to_dict(self) -> dict:
        return {
            "boardId": self.board_id,
            "placed": [{"pinIndex": a.pin_index, "componentId": a.component_id} for a in self.placed],
            "rejected": self.rejected,
        }


class PlannerSession:
    """The active board and its assignments for one user."""

    def __init__(self, catalog: Catalog, board_id: str):
        self.catalog = catalog
        self.state = BoardState(catalog.board(board_id))

    @property
    def board(self) -> BoardDefinition:
        return self.state.board

    def select_board(self, board_id: str) -> None:
        """Switch boards. Existing assignments are discarded."""
        self.state = BoardState(self.catalog.board(board_id))

    def clear(self) -> None:
        self.state.clear()

    def validate(self, component_id: str, pin_index: int) -> Verdict:
        return validate_placement(self.catalog, component_id, pin_index, self.state)

    def assign(self, component_id: str, pin_index: int) -> Assignment:
        """Validate and place in one step. Raises PlacementRejected and leaves state unchanged on failure."""
        self.validate(component_id, pin_index).raise_for_rejection()
        return self.state.place(component_id, pin_index)

    def assign_label(self, component_id: str, label: str) -> Assignment:
        return self.assign(component_id, self.pin_index(label))

    def unassign(self, pin_index: int) -> Assignment | None:
        return self.state.remove(pin_index)

    def pin_index(self, label: str) -> int:
        """Header position of a printed pin label. Raises NotFoundError."""
        index = self.board.find_pin(label)
        if index is None:
            raise NotFoundError("pin", label)
        return index

    def dependencies(self, component_id: str) -> list[ResolvedDependency]:
        return resolve_dependencies(self.catalog, component_id, self.board.id)

    def snapshot(self) -> list[Assignment]:
        return self.state.snapshot()

    def to_project(self) -> dict:
        return project_from_state(self.catalog, self.state)

    def load_project(self, data: dict, trusted: bool = False) -> ImportReport:
        """Replace the session contents with a project document.

        Each assignment is replayed through validation unless `trusted`.
        Entries that fail are collected in the report instead of being
        applied. Raises NotFoundError for an unknown board and
        ProjectFormatError for a malformed document.
        """
        data = check_project(data)
        self.select_board(data["boardId"])
        report = ImportReport(board_id=self.board.id)

        for entry in data["assignments"]:
            component_id = entry.get("componentId")
            label = str(entry.get("pin", ""))
            try:
                pin_index = self.pin_index(label)
                if trusted:
                    self.catalog.component(component_id)
                    placed = self.state.place(component_id, pin_index)
                else:
                    placed = self.assign(component_id, pin_index)
            except PlannerError as e:
                if trusted and not isinstance(e, NotFoundError):
                    raise
                logger.warning("Skipping %s on pin %s: %s", component_id, label, e.message)
                report.rejected.append({"componentId": component_id, "pin": label, **e.to_dict()})
                continue
            report.placed.append(placed)

        logger.debug("Loaded project on %s: %d placed, %d rejected",
                     self.board.id, len(report.placed), len(report.rejected))
        return report


def project_from_state(catalog: Catalog, state: BoardState) -> dict:
    """Build the exported project shape from board state."""
    board = state.board
    assignments = []
    for a in state.snapshot():
        pin = board.pins[a.pin_index]
        name = catalog.component(a.component_id).name if catalog.has_component(a.component_id) else "Unknown Component"
        assignments.append({
            "componentId": a.component_id,
            "componentName": name,
            "pin": pin.label,
            "pinType": pin.capability.value,
        })
    return {"boardId": board.id, "boardName": board.name, "assignments": assignments}


def check_project(data) -> dict:
    """Check the shape of a project document. Raises ProjectFormatError."""
    if not isinstance(data, dict):
        raise ProjectFormatError("Invalid project file format. Expected a JSON object.")
    if not isinstance(data.get("boardId"), str) or not data["boardId"] or not isinstance(data.get("assignments"), list):
        raise ProjectFormatError(
            "Invalid project file format. The file must contain 'boardId' and 'assignments' properties."
        )
    for i, entry in enumerate(data["assignments"]):
        if not isinstance(entry, dict) or "componentId" not in entry or "pin" not in entry:
            raise ProjectFormatError(f"Assignment {i} must have 'componentId' and 'pin'.")
        if not isinstance(entry["componentId"], str):
            raise ProjectFormatError(f"Assignment {i}: 'componentId' must be a string.")
        if isinstance(entry["pin"], bool) or not isinstance(entry["pin"], (str, int)):
            raise ProjectFormatError(f"Assignment {i}: 'pin' must be a pin label.")
    return data


def read_project_file(path: Path | str) -> dict:
    """Read and shape-check a project JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ProjectFormatError(
            f"Could not parse {path.name}. Make sure it is a valid project export."
        ) from e
    return check_project(data)


def write_project_file(path: Path | str, project: dict) -> None:
    Path(path).write_text(json.dumps(project, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
