"""Markdown and JSON project exports."""

from __future__ import annotations

import json
import re

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.project import project_from_state
from pinpoint_planner.tracker import BoardState


def export_markdown(catalog: Catalog, state: BoardState) -> str:
    """Pinout table for the assigned components."""
    project = project_from_state(catalog, state)
    lines = [
        f"# PinPoint Planner Export: {project['boardName']}",
        "",
        "## Component Pinout",
        "",
        "| Component | Assigned Pin | Pin Type |",
        "| :--- | :--- | :--- |",
    ]
    for a in project["assignments"]:
        lines.append(f"| {a['componentName']} | {a['pin']} | {a['pinType'].upper()} |")
    lines += ["", "---", "*Generated by PinPoint Planner*"]
    return "\n".join(lines) + "\n"


def export_json(catalog: Catalog, state: BoardState) -> str:
    return json.dumps(project_from_state(catalog, state), indent=2, ensure_ascii=False) + "\n"


def export_filename(board_name: str, suffix: str) -> str:
    """Download name for an export, e.g. raspberry-pi-4-model-b-plan.md."""
    slug = re.sub(r"\s+", "-", board_name.lower())
    return f"{slug}-{suffix}"
