"""Catalog of boards and components, with load-time consistency checks."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path

from pinpoint_planner.errors import CatalogError, NotFoundError
from pinpoint_planner.models import (
    DATA_CAPABILITIES,
    OPTIONAL,
    BoardDefinition,
    BoardOverride,
    Capability,
    ComponentDefinition,
    DependencyRule,
    ValidationError,
)

logger = logging.getLogger(__name__)

CATEGORY_ORDER = [
    "Sensors", "Displays", "Input", "Output", "Communication",
    "Motors & Drivers", "Advanced & ICs", "Power Management", "Custom",
]

_REQUIREMENT_VALUES = (True, False, OPTIONAL)


class Catalog:
    """Read-only lookup of component and board definitions."""

    def __init__(self, components: dict[str, ComponentDefinition], boards: dict[str, BoardDefinition]):
        self._components = dict(components)
        self._boards = dict(boards)

    def component(self, component_id: str) -> ComponentDefinition:
        """Get a component by id. Raises NotFoundError if not found."""
        if component_id not in self._components:
            raise NotFoundError("component", component_id)
        return self._components[component_id]

    def board(self, board_id: str) -> BoardDefinition:
        """Get a board by id. Raises NotFoundError if not found."""
        if board_id not in self._boards:
            raise NotFoundError("board", board_id)
        return self._boards[board_id]

    def has_component(self, component_id: str) -> bool:
        return component_id in self._components

    def has_board(self, board_id: str) -> bool:
        return board_id in self._boards

    def list_components(self) -> list[ComponentDefinition]:
        return list(self._components.values())

    def list_boards(self) -> list[BoardDefinition]:
        return list(self._boards.values())

    def compatible_components(self, board_id: str) -> list[ComponentDefinition]:
        """Components usable on a board. Components with no board list work everywhere."""
        return [c for c in self._components.values() if c.boards is None or board_id in c.boards]

    def components_by_category(self, board_id: str | None = None) -> dict[str, list[str]]:
        """Group component ids by category, known categories first."""
        pool = self.compatible_components(board_id) if board_id else self.list_components()
        groups: dict[str, list[str]] = {}
        for comp in pool:
            name = comp.category or ("Custom" if comp.id.startswith("custom-") else "Other")
            groups.setdefault(name, []).append(comp.id)

        ordered = {name: groups.pop(name) for name in CATEGORY_ORDER if name in groups}
        for name in sorted(groups):
            ordered[name] = groups[name]
        return ordered

    def validate(self) -> list[ValidationError]:
        """Run all consistency checks across the catalog."""
        errs: list[ValidationError] = []
        for board in self._boards.values():
            errs.extend(_validate_board(board))
        for comp in self._components.values():
            errs.extend(_validate_component(comp, self._boards))
        return errs


# ── Validation ─────────────────────────────────────────────────────

def _validate_board(board: BoardDefinition) -> list[ValidationError]:
    errs: list[ValidationError] = []
    if not board.pins:
        errs.append(ValidationError(board.id, "pins", "Board has no pins"))
    for i, pin in enumerate(board.pins):
        if not isinstance(pin.capability, Capability):
            errs.append(ValidationError(board.id, f"pins[{i}].capability",
                                        f"Unknown capability '{pin.capability}'"))
    return errs


def _validate_component(comp: ComponentDefinition, boards: dict[str, BoardDefinition]) -> list[ValidationError]:
    errs: list[ValidationError] = []
    cid = comp.id

    if not comp.data:
        errs.append(ValidationError(cid, "data", "Must list at least one data capability"))
    for cap in comp.data:
        if cap not in DATA_CAPABILITIES:
            errs.append(ValidationError(cid, "data", f"'{getattr(cap, 'value', cap)}' is not a data capability"))

    for name in ("power", "ground"):
        count = getattr(comp, name)
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            errs.append(ValidationError(cid, name, "Must be a non-negative integer"))

    if comp.boards is not None:
        for board_id in comp.boards:
            if board_id not in boards:
                errs.append(ValidationError(cid, "boards", f"References unknown board '{board_id}'"))

    for i, dep in enumerate(comp.dependencies):
        where = f"dependencies[{i}]"
        if not dep.type:
            errs.append(ValidationError(cid, f"{where}.type", "Must not be empty"))
        if dep.default_required not in _REQUIREMENT_VALUES:
            errs.append(ValidationError(cid, f"{where}.default_required",
                                        f"Unknown requirement '{dep.default_required}'"))
        for board_id, override in dep.board_overrides.items():
            if board_id not in boards:
                errs.append(ValidationError(cid, f"{where}.board_overrides",
                                            f"References unknown board '{board_id}'"))
            if override.required not in _REQUIREMENT_VALUES:
                errs.append(ValidationError(cid, f"{where}.board_overrides.{board_id}",
                                            f"Unknown requirement '{override.required}'"))
    return errs


def _drop_unknown_overrides(comp: ComponentDefinition, boards: dict[str, BoardDefinition]) -> ComponentDefinition:
    """Copy of `comp` without board overrides that name missing boards."""
    rules = []
    changed = False
    for dep in comp.dependencies:
        known = {b: o for b, o in dep.board_overrides.items() if b in boards}
        if len(known) != len(dep.board_overrides):
            for board_id in set(dep.board_overrides) - set(known):
                logger.warning("Ignoring %s override for unknown board '%s' on %s", dep.type, board_id, comp.id)
            dep = replace(dep, board_overrides=known)
            changed = True
        rules.append(dep)
    return replace(comp, dependencies=rules) if changed else comp


# ── Parsing ────────────────────────────────────────────────────────

def _parse_requirement(value, condition: str = "") -> bool | str:
    # Legacy packs write optional parts as required=false plus a condition.
    if value is False and condition:
        return OPTIONAL
    return value


def _malformed(component_id: str, field: str, message: str) -> CatalogError:
    return CatalogError([ValidationError(component_id, field, message)])


def _parse_capability(tag):
    # Unknown tags are kept as-is so validation can report them.
    try:
        return Capability(tag)
    except ValueError:
        return tag


def _parse_requires(component_id: str, requires) -> tuple[list, int, int]:
    """Return (data tags, power count, ground count) from a `requires` entry.

    Legacy packs list plain tags, e.g. ["gpio", "power", "ground"]; each
    power or ground tag counts as one rail pin.
    """
    if isinstance(requires, list):
        if not all(isinstance(tag, str) for tag in requires):
            raise _malformed(component_id, "requires", "Tag list must contain only strings")
        caps = [_parse_capability(tag) for tag in requires if tag not in ("power", "ground")]
        return caps, requires.count("power"), requires.count("ground")
    if not isinstance(requires, dict):
        raise _malformed(component_id, "requires", "Must be an object or a list of tags")

    data = requires.get("data", [])
    if not isinstance(data, list):
        raise _malformed(component_id, "requires.data", "Must be a list of capabilities")
    caps = [_parse_capability(tag) for tag in data]
    return caps, requires.get("power", 0), requires.get("ground", 0)


def _parse_dependency(component_id: str, data) -> DependencyRule:
    if not isinstance(data, dict):
        raise _malformed(component_id, "dependencies", "Each dependency must be an object")
    condition = data.get("condition", "")
    overrides_data = data.get("board_overrides", data.get("boardSpecific", {}))
    if not isinstance(overrides_data, dict):
        raise _malformed(component_id, "dependencies.board_overrides", "Must map board ids to overrides")
    overrides = {}
    for board_id, o in overrides_data.items():
        if not isinstance(o, dict):
            raise _malformed(component_id, f"dependencies.board_overrides.{board_id}", "Must be an object")
        overrides[board_id] = BoardOverride(
            required=_parse_requirement(o.get("required")),
            reason=o.get("reason"),
        )
    return DependencyRule(
        type=data.get("type", ""),
        default_required=_parse_requirement(data.get("required", True), condition),
        board_overrides=overrides,
        value=data.get("value", ""),
        purpose=data.get("purpose", ""),
        description=data.get("description", ""),
        reason=data.get("reason", ""),
        quantity=data.get("quantity", 1),
        connection=data.get("connection", ""),
        alternative=data.get("alternative", ""),
        condition=condition,
    )


def parse_component(component_id: str, data: dict) -> ComponentDefinition:
    """Parse one JSON component entry.

    Raises CatalogError when the entry's structure cannot be read. Unknown
    capability tags are left in `data` for `Catalog.validate` to report.
    """
    if not isinstance(data, dict):
        raise _malformed(component_id, "entry", "Component must be a JSON object")
    caps, power, ground = _parse_requires(component_id, data.get("requires", {}))
    dependencies = data.get("dependencies", [])
    if not isinstance(dependencies, list):
        raise _malformed(component_id, "dependencies", "Must be a list")
    boards = data.get("boards", data.get("boardSpecific"))
    if not isinstance(boards, list):
        boards = None
    return ComponentDefinition(
        id=component_id,
        name=data.get("name", component_id),
        data=tuple(caps),
        power=power,
        ground=ground,
        dependencies=[_parse_dependency(component_id, d) for d in dependencies],
        category=data.get("category", "Custom"),
        tip=data.get("tip", ""),
        voltage=data.get("voltage", ""),
        complexity=data.get("complexity", ""),
        notes=data.get("notes", ""),
        warnings=list(data.get("warnings", [])),
        i2c_address=data.get("i2cAddress"),
        code_hints=dict(data.get("codeHints", {})),
        boards=list(boards) if boards is not None else None,
    )


def load_pack(path: Path | str, strict: bool = True) -> dict[str, ComponentDefinition]:
    """Read a JSON component pack: an object of component id -> definition.

    With `strict` off, entries that cannot be parsed are logged and skipped.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Component pack not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogError([ValidationError(path.name, "json", str(e))]) from e
    if not isinstance(data, dict):
        raise CatalogError([ValidationError(path.name, "json", "Pack must be a JSON object")])

    components = {}
    for cid, entry in data.items():
        try:
            components[cid] = parse_component(cid, entry)
        except CatalogError as e:
            if strict:
                raise
            for err in e.errors:
                logger.warning("Skipping component: %s", err)
    logger.debug("Loaded %d components from %s", len(components), path)
    return components


# ── Building ───────────────────────────────────────────────────────

def build_catalog(
    components: dict[str, ComponentDefinition] | None = None,
    boards: dict[str, BoardDefinition] | None = None,
    packs: list[Path | str] | tuple = (),
    strict: bool = True,
) -> Catalog:
    """Build and check a catalog.

    Defaults to the built-in boards and components. Packs are merged over
    the components in order. In strict mode any consistency error raises
    CatalogError; otherwise overrides for unknown boards are dropped and
    components that still fail are skipped.
    """
    if components is None:
        from pinpoint_planner.components import COMPONENTS
        components = COMPONENTS
    if boards is None:
        from pinpoint_planner.boards import BOARDS
        boards = BOARDS

    merged = dict(components)
    for pack in packs:
        merged.update(load_pack(pack, strict=strict))

    catalog = Catalog(merged, boards)
    errors = catalog.validate()
    if not errors:
        return catalog
    if strict:
        raise CatalogError(errors)

    cleaned = {}
    for cid, comp in merged.items():
        comp = _drop_unknown_overrides(comp, boards)
        comp_errors = _validate_component(comp, boards)
        if comp_errors:
            for err in comp_errors:
                logger.warning("Skipping component: %s", err)
            continue
        cleaned[cid] = comp
    return Catalog(cleaned, boards)


_DEFAULT: Catalog | None = None


def default_catalog() -> Catalog:
    """The built-in catalog, built once."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = build_catalog()
    return _DEFAULT
