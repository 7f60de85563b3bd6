"""Board occupancy tracking for pinpoint-planner."""

from __future__ import annotations

import logging

from pinpoint_planner.errors import InvariantViolation
from pinpoint_planner.models import RAIL_CAPABILITIES, Assignment, BoardDefinition, Capability

logger = logging.getLogger(__name__)


class BoardState:
    """Current assignments on one board.

    At most one component per pin and one pin per component. Callers
    validate before placing; `place` only re-checks those two invariants.
    """

    def __init__(self, board: BoardDefinition):
        self.board = board
        self._by_pin: dict[int, str] = {}
        self._by_component: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._by_pin)

    def is_assigned(self, pin_index: int) -> bool:
        return pin_index in self._by_pin

    def is_component_placed(self, component_id: str) -> bool:
        return component_id in self._by_component

    def component_at(self, pin_index: int) -> str | None:
        return self._by_pin.get(pin_index)

    def pin_of(self, component_id: str) -> int | None:
        return self._by_component.get(component_id)

    def unassigned_pins(self, capability: Capability) -> list[int]:
        """Free pin indexes with this capability, in header order."""
        return [i for i in self.board.pin_indexes(capability) if i not in self._by_pin]

    def available_count(self, capability: Capability) -> int:
        """Number of free rail pins of the given kind (power or ground)."""
        capability = Capability(capability)
        if capability not in RAIL_CAPABILITIES:
            raise ValueError(f"available_count only tracks rail pins, got: {capability.value}")
        return len(self.unassigned_pins(capability))

    def place(self, component_id: str, pin_index: int) -> Assignment:
        """Record an assignment. Raises InvariantViolation on a duplicate pin or component."""
        self.board.pin(pin_index)
        if pin_index in self._by_pin:
            raise InvariantViolation(
                f"Pin {pin_index} already holds {self._by_pin[pin_index]}; validate before placing"
            )
        if component_id in self._by_component:
            raise InvariantViolation(
                f"{component_id} is already placed on pin {self._by_component[component_id]}; validate before placing"
            )
        self._by_pin[pin_index] = component_id
        self._by_component[component_id] = pin_index
        logger.debug("Placed %s on %s pin %d", component_id, self.board.id, pin_index)
        return Assignment(pin_index, component_id)

    def remove(self, pin_index: int) -> Assignment | None:
        """Free a pin. Returns the removed assignment, or None if it was already free."""
        component_id = self._by_pin.pop(pin_index, None)
        if component_id is None:
            return None
        del self._by_component[component_id]
        logger.debug("Removed %s from %s pin %d", component_id, self.board.id, pin_index)
        return Assignment(pin_index, component_id)

    def clear(self) -> None:
        self._by_pin.clear()
        self._by_component.clear()

    def snapshot(self) -> list[Assignment]:
        """All assignments ordered by pin position."""
        return [Assignment(i, self._by_pin[i]) for i in sorted(self._by_pin)]

    def in_placement_order(self) -> list[Assignment]:
        """All assignments in the order they were placed."""
        return [Assignment(i, c) for c, i in self._by_component.items()]
