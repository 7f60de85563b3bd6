"""Placement validation for pinpoint-planner."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.errors import PlacementRejected, RejectReason
from pinpoint_planner.models import Capability
from pinpoint_planner.tracker import BoardState

logger = logging.getLogger(__name__)


@dataclass
class Verdict:
    """Outcome of validating one placement."""
    component_id: str
    pin_index: int
    reason: RejectReason | None = None
    details: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.reason is None

    def raise_for_rejection(self) -> None:
        if self.reason is not None:
            raise PlacementRejected(self.reason, self.details)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "componentId": self.component_id,
            "pinIndex": self.pin_index,
            "reason": self.reason.value if self.reason else None,
            "details": self.details,
        }


def validate_placement(catalog: Catalog, component_id: str, pin_index: int, state: BoardState) -> Verdict:
    """Decide whether `component_id` may occupy `pin_index` on the board.

    Checks run in a fixed order and the first failure wins: already placed,
    pin occupied, rail pin, bus compatibility, power budget, ground budget.
    Nothing is mutated; the caller places on success.

    Raises NotFoundError for an unknown component or a pin off the board.
    """
    component = catalog.component(component_id)
    pin = state.board.pin(pin_index)
    verdict = Verdict(component_id, pin_index)

    if state.is_component_placed(component_id):
        verdict.reason = RejectReason.ALREADY_ASSIGNED
        verdict.details = {"component": component_id, "pin_index": state.pin_of(component_id)}
    elif state.is_assigned(pin_index):
        verdict.reason = RejectReason.PIN_OCCUPIED
        verdict.details = {"pin": pin.label, "pin_index": pin_index, "occupant": state.component_at(pin_index)}
    elif pin.capability.is_rail:
        verdict.reason = RejectReason.NON_DATA_PIN
        verdict.details = {"pin": pin.label, "pin_index": pin_index, "capability": pin.capability.value}
    elif not component.accepts(pin.capability):
        verdict.reason = RejectReason.INCOMPATIBLE_BUS
        verdict.details = {
            "component": component_id,
            "allowed": [c.value for c in component.data],
            "capability": pin.capability.value,
        }
    else:
        for capability, needed, reason in (
            (Capability.POWER, component.power, RejectReason.INSUFFICIENT_POWER),
            (Capability.GROUND, component.ground, RejectReason.INSUFFICIENT_GROUND),
        ):
            available = state.available_count(capability)
            if available < needed:
                verdict.reason = reason
                verdict.details = {"component": component_id, "required": needed, "available": available}
                break

    if verdict.ok:
        logger.debug("Placement of %s on pin %d accepted", component_id, pin_index)
    else:
        logger.debug("Placement of %s on pin %d rejected: %s", component_id, pin_index, verdict.reason.value)
    return verdict
