"""Bill of materials for a board plan, including supporting parts."""

from __future__ import annotations

import csv
import io
import logging
from collections import Counter
from dataclasses import dataclass, field

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.models import OPTIONAL
from pinpoint_planner.resolver import resolve_dependencies
from pinpoint_planner.tracker import BoardState

logger = logging.getLogger(__name__)

BREAKOUT_TYPES = ("level_shifter", "i2c_backpack", "breakout_board")


@dataclass
class BomItem:
    quantity: int
    name: str
    details: str = ""


@dataclass
class BillOfMaterials:
    main_components: list[BomItem] = field(default_factory=list)
    resistors: dict[str, int] = field(default_factory=dict)
    capacitors: dict[str, int] = field(default_factory=dict)
    power_supplies: list[BomItem] = field(default_factory=list)
    breakout_boards: list[BomItem] = field(default_factory=list)
    other: list[BomItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def dependency_count(self) -> int:
        return (len(self.resistors) + len(self.capacitors) + len(self.power_supplies)
                + len(self.breakout_boards) + len(self.other))

    def is_empty(self) -> bool:
        return not self.main_components

    def to_dict(self) -> dict:
        def items(lst):
            return [{"quantity": i.quantity, "name": i.name, "details": i.details} for i in lst]
        return {
            "mainComponents": items(self.main_components),
            "dependencies": {
                "resistors": dict(self.resistors),
                "capacitors": dict(self.capacitors),
                "powerSupplies": items(self.power_supplies),
                "breakoutBoards": items(self.breakout_boards),
                "other": items(self.other),
            },
            "warnings": list(self.warnings),
            "notes": list(self.notes),
        }


def _per_unit(quantity) -> int:
    # Free-form quantities such as "per_switch" count once per component.
    if isinstance(quantity, int) and not isinstance(quantity, bool) and quantity > 0:
        return quantity
    return 1


def generate_bom(catalog: Catalog, board_id: str, component_ids: list[str]) -> BillOfMaterials:
    """Tally components and the supporting parts they need on `board_id`.

    Dependencies resolved as not required are left out of the tallies;
    their alternative and board reason become notes. Optional ones are
    tallied and noted with their condition.
    """
    bom = BillOfMaterials()
    counts = Counter(component_ids)

    for component_id, count in counts.items():
        comp = catalog.component(component_id)
        bom.main_components.append(BomItem(count, comp.name, comp.voltage or "N/A"))
        bom.warnings.extend(comp.warnings)

        for dep in resolve_dependencies(catalog, component_id, board_id):
            rule = dep.rule
            if dep.required_status is False:
                if rule.alternative:
                    bom.notes.append(f"{comp.name}: {rule.alternative}")
                if dep.board_reason:
                    bom.notes.append(f"{comp.name} ({rule.description}): {dep.board_reason}")
                continue

            if dep.required_status == OPTIONAL:
                note = f"{comp.name}: {rule.description or dep.type} is optional"
                bom.notes.append(f"{note} ({rule.condition})" if rule.condition else note)
            if not isinstance(rule.quantity, int):
                bom.notes.append(f"{comp.name}: {rule.description or dep.type} quantity is {rule.quantity}")

            quantity = _per_unit(rule.quantity) * count
            if dep.type in ("resistor", "capacitor"):
                tally = bom.resistors if dep.type == "resistor" else bom.capacitors
                key = f"{rule.value} ({rule.purpose})"
                tally[key] = tally.get(key, 0) + quantity
            elif dep.type == "power_supply":
                bom.power_supplies.append(BomItem(count, "Power Supply", f"{rule.value} ({rule.description})"))
            elif dep.type in BREAKOUT_TYPES:
                bom.breakout_boards.append(BomItem(count, rule.description, rule.purpose))
            else:
                bom.other.append(BomItem(quantity, rule.description or dep.type, dep.type))

    logger.debug("BOM for %s: %d components, %d dependency lines",
                 board_id, len(bom.main_components), bom.dependency_count)
    return bom


def bom_for_state(catalog: Catalog, state: BoardState) -> BillOfMaterials:
    return generate_bom(catalog, state.board.id, [a.component_id for a in state.snapshot()])


def _dependency_rows(bom: BillOfMaterials) -> list[tuple[int, str, str]]:
    rows = [(q, "Resistor", key) for key, q in bom.resistors.items()]
    rows += [(q, "Capacitor", key) for key, q in bom.capacitors.items()]
    rows += [(i.quantity, i.name, i.details) for i in bom.power_supplies]
    rows += [(i.quantity, i.name, i.details) for i in bom.breakout_boards]
    rows += [(i.quantity, i.name, i.details) for i in bom.other]
    return rows


def render_bom(bom: BillOfMaterials) -> str:
    """Plain-text bill of materials."""
    if bom.is_empty():
        return "No components or dependencies to list."

    lines = ["Bill of Materials", "================="]
    lines.append("")
    lines.append("--- MAIN COMPONENTS ---")
    for item in bom.main_components:
        lines.append(f"{item.quantity:>3}  {item.name} ({item.details})")

    deps = _dependency_rows(bom)
    if deps:
        lines.append("")
        lines.append("--- REQUIRED DEPENDENCIES ---")
        for quantity, name, details in deps:
            lines.append(f"{quantity:>3}  {name}: {details}")

    if bom.notes:
        lines.append("")
        lines.append("--- NOTES & ALTERNATIVES ---")
        lines.extend(f"- {n}" for n in bom.notes)

    if bom.warnings:
        lines.append("")
        lines.append("--- WARNINGS ---")
        lines.extend(f"- {w}" for w in bom.warnings)
    return "\n".join(lines)


def render_bom_csv(bom: BillOfMaterials) -> str:
    """CSV with Category, Quantity, Item, Details columns."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["Category", "Quantity", "Item", "Details"])
    for item in bom.main_components:
        writer.writerow(["Main Component", item.quantity, item.name, f"Voltage: {item.details}"])
    for quantity, name, details in _dependency_rows(bom):
        writer.writerow(["Dependency", quantity, name, details])
    for note in bom.notes:
        writer.writerow(["Note", "", "", note])
    for warning in bom.warnings:
        writer.writerow(["Warning", "", "", warning])
    return buf.getvalue()
