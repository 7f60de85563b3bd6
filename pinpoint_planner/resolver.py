"""Supporting-dependency resolution for pinpoint-planner."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.models import DependencyRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedDependency:
    """A dependency rule evaluated against one board."""
    type: str
    required_status: bool | str
    board_reason: str | None
    rule: DependencyRule

    def to_dict(self) -> dict:
        d = {
            "type": self.type,
            "requiredStatus": self.required_status,
            "boardReason": self.board_reason,
        }
        for key in ("value", "purpose", "description", "reason", "quantity",
                    "connection", "alternative", "condition"):
            val = getattr(self.rule, key)
            if val not in ("", None):
                d[key] = val
        return d


def resolve_dependencies(catalog: Catalog, component_id: str, board_id: str) -> list[ResolvedDependency]:
    """Resolve a component's dependency rules for a board, in declaration order.

    A board override replaces the default requirement and supplies the
    board reason. Boards without an override, including ids the catalog
    does not know, fall back to the default with no reason.

    Raises NotFoundError for an unknown component.
    """
    component = catalog.component(component_id)
    resolved = []
    for rule in component.dependencies:
        override = rule.board_overrides.get(board_id)
        if override is not None:
            resolved.append(ResolvedDependency(rule.type, override.required, override.reason, rule))
        else:
            resolved.append(ResolvedDependency(rule.type, rule.default_required, None, rule))
    logger.debug("Resolved %d dependencies for %s on %s", len(resolved), component_id, board_id)
    return resolved


def required_dependencies(catalog: Catalog, component_id: str, board_id: str) -> list[ResolvedDependency]:
    """Only the dependencies that are strictly required on this board."""
    return [d for d in resolve_dependencies(catalog, component_id, board_id) if d.required_status is True]
