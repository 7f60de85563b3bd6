"""Wiring list generation for pinpoint-planner."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.models import BoardDefinition, Capability
from pinpoint_planner.resolver import ResolvedDependency, required_dependencies
from pinpoint_planner.tracker import BoardState

logger = logging.getLogger(__name__)

POWER_PLACEHOLDER = "an available Power Pin"
GROUND_PLACEHOLDER = "an available Ground Pin"


@dataclass
class ComponentWiring:
    """Connections and notes for one placed component."""
    component_id: str
    component_name: str
    pin: str
    connections: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    power_pins: list[str] = field(default_factory=list)
    ground_pins: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "componentId": self.component_id,
            "componentName": self.component_name,
            "pin": self.pin,
            "powerPins": self.power_pins,
            "groundPins": self.ground_pins,
            "connections": self.connections,
            "dependencies": self.dependencies,
            "warnings": self.warnings,
        }


def _claim(free: list[int], count: int, board: BoardDefinition, placeholder: str) -> list[str]:
    """Pop `count` rail pins off the end of `free`, naming a placeholder once they run out."""
    claimed = []
    for _ in range(count):
        if free:
            claimed.append(f"`{board.name} (Pin {board.pins[free.pop()].label})`")
        else:
            claimed.append(placeholder)
    return claimed


def dependency_instruction(dep: ResolvedDependency, pin: str, board: BoardDefinition) -> str:
    """One line of wiring advice for a required dependency."""
    rule = dep.rule
    if dep.type == "resistor":
        if rule.connection == "series_with_data":
            return (f"Place a `{rule.value}` resistor in series between `Pin {pin}` "
                    f"and the component's data line.")
        if rule.connection == "gpio_to_power":
            return (f"Connect a `{rule.value}` pull-up resistor from `Pin {pin}` "
                    f"to a `{board.logic_voltage:g}V` pin.")
        if rule.connection == "sda_scl_to_power":
            text = f"Connect `{rule.value}` pull-up resistors to the I2C lines (SDA and SCL)."
            if rule.alternative:
                text += f" Note: {rule.alternative}"
            return text
        return f"A `{rule.value}` resistor is required. Purpose: {rule.description}."
    if dep.type == "level_shifter":
        return (f"Use a `{rule.description}`. Connect `Pin {pin}` to the low-voltage side, "
                f"and the component's data line to the high-voltage side.")
    if dep.type == "power_supply":
        return (f"Use an external power supply (`{rule.value}`). "
                f"Do not power this component from the board's pins.")
    if dep.type == "capacitor":
        if rule.connection == "across_power_supply":
            return (f"Place a `{rule.value}` capacitor across the external power supply's "
                    f"VCC and GND lines, close to the component.")
        return f"A `{rule.value}` capacitor is required. Purpose: {rule.description}."
    if dep.type == "driver_board":
        return f"This component requires a `{rule.description}` to function."
    return f"Requires a `{rule.description or dep.type}`."


def plan_wiring(catalog: Catalog, state: BoardState) -> list[ComponentWiring]:
    """Build the wiring list for every assignment, in placement order.

    Power and ground rails are handed out greedily from the end of the free
    rail list. Running out is not an error: the connection names a
    placeholder instead.
    """
    board = state.board
    free_power = state.unassigned_pins(Capability.POWER)
    free_ground = state.unassigned_pins(Capability.GROUND)
    plan = []

    for assignment in state.in_placement_order():
        if not catalog.has_component(assignment.component_id):
            logger.warning("No catalog entry for %s; leaving it out of the wiring list", assignment.component_id)
            continue
        comp = catalog.component(assignment.component_id)
        label = board.pins[assignment.pin_index].label
        entry = ComponentWiring(comp.id, comp.name, label)

        entry.connections.append(f"Connect `{comp.name} (DATA)` to `{board.name} (Pin {label})`.")
        entry.power_pins = _claim(free_power, comp.power, board, POWER_PLACEHOLDER)
        entry.ground_pins = _claim(free_ground, comp.ground, board, GROUND_PLACEHOLDER)
        for target in entry.power_pins:
            entry.connections.append(f"Connect `{comp.name} (VCC/VIN)` to {target}.")
        for target in entry.ground_pins:
            entry.connections.append(f"Connect `{comp.name} (GND)` to {target}.")

        for dep in required_dependencies(catalog, comp.id, board.id):
            entry.dependencies.append(dependency_instruction(dep, label, board))
        entry.warnings = list(comp.warnings)
        plan.append(entry)

    if POWER_PLACEHOLDER in (p for e in plan for p in e.power_pins):
        logger.info("Ran out of power pins on %s while planning wiring", board.id)
    if GROUND_PLACEHOLDER in (p for e in plan for p in e.ground_pins):
        logger.info("Ran out of ground pins on %s while planning wiring", board.id)
    return plan


def render_wiring(plan: list[ComponentWiring]) -> str:
    """Plain-text wiring list."""
    if not plan:
        return "No components assigned."
    lines = ["Wiring Diagram", "=============="]
    for entry in plan:
        lines.append("")
        lines.append(f"--- {entry.component_name} on Pin {entry.pin} ---")
        lines.extend(f"- {c}" for c in entry.connections)
        lines.extend(f"- Dependency: {d}" for d in entry.dependencies)
        lines.extend(f"- Warning: {w}" for w in entry.warnings)
    return "\n".join(lines)
