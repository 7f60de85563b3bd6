"""Named project storage under .pinpoint/projects.json."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from pinpoint_planner.config import STATE_DIR, ensure_state_dir
from pinpoint_planner.errors import NotFoundError, PlannerError, ProjectFormatError
from pinpoint_planner.project import check_project

logger = logging.getLogger(__name__)

STORE_FILE = "projects.json"


class ProjectStore:
    """Saved projects for one project directory, oldest first."""

    def __init__(self, project_dir: Path | str):
        self.project_dir = Path(project_dir)

    @property
    def path(self) -> Path:
        return self.project_dir / STATE_DIR / STORE_FILE

    def _read(self) -> list[dict]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ProjectFormatError(f"Project store is corrupted: {self.path}") from e
        if not isinstance(data, list):
            raise ProjectFormatError(f"Project store is corrupted: {self.path}")
        return data

    def _write(self, projects: list[dict]) -> None:
        ensure_state_dir(self.project_dir)
        self.path.write_text(json.dumps(projects, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")

    def list(self) -> list[dict]:
        return self._read()

    def save(self, project: dict, name: str) -> dict:
        """Store a project under a display name. Returns the stored record with its new id."""
        name = (name or "").strip()
        if not name:
            raise PlannerError("Project name must not be empty.")
        check_project(project)
        if not project["assignments"]:
            raise PlannerError("Cannot save an empty project. Please assign some components first.")

        projects = self._read()
        taken = {p.get("id") for p in projects}
        stamp = int(time.time() * 1000)
        while f"proj-{stamp}" in taken:
            stamp += 1

        record = {**project, "id": f"proj-{stamp}", "name": name}
        projects.append(record)
        self._write(projects)
        logger.debug("Saved project %s (%s)", record["id"], name)
        return record

    def load(self, project_id: str) -> dict:
        """Get a stored project by id. Raises NotFoundError."""
        for p in self._read():
            if p.get("id") == project_id:
                return p
        raise NotFoundError("project", project_id)

    def delete(self, project_id: str) -> dict:
        """Remove a stored project. Returns it. Raises NotFoundError."""
        projects = self._read()
        for i, p in enumerate(projects):
            if p.get("id") == project_id:
                del projects[i]
                self._write(projects)
                logger.debug("Deleted project %s", project_id)
                return p
        raise NotFoundError("project", project_id)
