"""CLI entry point for pinpoint-planner."""

import json as jsonmod
from pathlib import Path

import click

from pinpoint_planner.bom import bom_for_state, render_bom, render_bom_csv
from pinpoint_planner.catalog import build_catalog, default_catalog
from pinpoint_planner.codegen import render_code
from pinpoint_planner.config import (
    CONFIG_FILE, load_config_or_default, get_config_value, set_config_value, list_config,
)
from pinpoint_planner.errors import NotFoundError, PlacementRejected, PlannerError, RejectReason
from pinpoint_planner.export import export_json, export_markdown
from pinpoint_planner.logging_config import setup_logging
from pinpoint_planner.models import Capability, OPTIONAL
from pinpoint_planner.project import PlannerSession, check_project, read_project_file, write_project_file
from pinpoint_planner.resolver import resolve_dependencies
from pinpoint_planner.store import ProjectStore
from pinpoint_planner.wiring import plan_wiring, render_wiring


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose):
    """Plan pin assignments for hobby electronics boards."""
    config = load_config_or_default(Path.cwd())
    setup_logging("DEBUG" if verbose else config.logging.level)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(e: PlannerError, use_json: bool = False):
    if use_json:
        click.echo(jsonmod.dumps(e.to_dict()), err=True)
    else:
        click.echo(f"Error: {_describe(e)}", err=True)
    raise SystemExit(e.exit_code)


def _describe(e: PlannerError) -> str:
    """Human-readable text for an error."""
    if not isinstance(e, PlacementRejected):
        return e.message
    d = e.details
    if e.reason == RejectReason.ALREADY_ASSIGNED:
        return f"{d['component']} is already assigned (pin index {d['pin_index']})."
    if e.reason == RejectReason.PIN_OCCUPIED:
        return f"Pin {d['pin']} is already used by {d['occupant']}."
    if e.reason == RejectReason.NON_DATA_PIN:
        return f"Pin {d['pin']} is a {d['capability']} pin and cannot carry a data line."
    if e.reason == RejectReason.INCOMPATIBLE_BUS:
        needs = "/".join(a.upper() for a in d["allowed"])
        return f"{d['component']} needs {needs}, but this pin is {d['capability'].upper()}."
    kind = "power" if e.reason == RejectReason.INSUFFICIENT_POWER else "ground"
    return (f"Not enough {kind} pins for {d['component']}: "
            f"needs {d['required']}, {d['available']} available.")


def _catalog():
    """Catalog for the current directory, honouring [catalog] packs and strict."""
    project_dir = Path.cwd()
    config = load_config_or_default(project_dir)
    if not config.catalog.packs and config.catalog.strict:
        return default_catalog()
    return build_catalog(packs=config.pack_paths(project_dir), strict=config.catalog.strict)


def _default_board() -> str:
    return load_config_or_default(Path.cwd()).planner.board


def _open_session(catalog, project_path, board=None, create=False):
    """Load a project file into a session. Rejected entries are reported, not applied."""
    path = Path(project_path)
    if not path.exists():
        if not create:
            raise NotFoundError("project file", str(path))
        return PlannerSession(catalog, board or _default_board())

    data = read_project_file(path)
    session = PlannerSession(catalog, data["boardId"])
    report = session.load_project(data)
    if board and board != report.board_id:
        raise PlannerError(f"{path.name} is planned for board '{report.board_id}', not '{board}'.")
    for r in report.rejected:
        click.echo(f"Warning: skipped {r['componentId']} on pin {r['pin']}: {r['error']}", err=True)
    return session


def _resolve_pin(session, pin, by_index):
    if not by_index:
        return session.pin_index(pin)
    try:
        return int(pin)
    except ValueError:
        raise PlannerError(f"Pin index must be an integer, got: {pin}", exit_code=2) from None


def _status_label(status) -> str:
    if status is True:
        return "required"
    if status == OPTIONAL:
        return "optional"
    return "not needed"


# ---------------------------------------------------------------------------
# Catalog queries
# ---------------------------------------------------------------------------


@main.command()
def boards():
    """List supported boards."""
    try:
        catalog = _catalog()
    except PlannerError as e:
        _fail(e)

    board_list = catalog.list_boards()
    click.echo(f"Supported boards ({len(board_list)}):\n")
    for b in board_list:
        click.echo(f"  {b.id:<10} {b.name:<28} {len(b.pins)} pins, {b.logic_voltage:g}V logic")


@main.command()
@click.option("--board", type=str, help="Only components usable on this board.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def components(board, use_json):
    """List components by category."""
    try:
        catalog = _catalog()
        if board:
            catalog.board(board)
    except PlannerError as e:
        _fail(e, use_json)

    groups = catalog.components_by_category(board)
    if use_json:
        click.echo(jsonmod.dumps(groups, indent=2))
        return

    total = sum(len(ids) for ids in groups.values())
    click.echo(f"Components ({total}):\n")
    for category, ids in groups.items():
        click.echo(f"  {category}:")
        for cid in ids:
            click.echo(f"    {cid:<26} {catalog.component(cid).name}")
        click.echo()


@main.command()
@click.argument("component")
@click.option("--board", type=str, help="Board id. Defaults to [planner] board.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def deps(component, board, use_json):
    """Show the supporting parts a component needs on a board."""
    board = board or _default_board()
    try:
        catalog = _catalog()
        catalog.board(board)
        comp = catalog.component(component)
        resolved = resolve_dependencies(catalog, component, board)
    except PlannerError as e:
        _fail(e, use_json)

    if use_json:
        click.echo(jsonmod.dumps({
            "componentId": comp.id,
            "boardId": board,
            "dependencies": [d.to_dict() for d in resolved],
        }, indent=2, ensure_ascii=False))
        return

    if not resolved:
        click.echo(f"{comp.name} needs no supporting parts on {board}.")
        return
    click.echo(f"{comp.name} on {board}:")
    for d in resolved:
        label = d.rule.description or d.type
        value = f" {d.rule.value}" if d.rule.value else ""
        click.echo(f"  [{_status_label(d.required_status)}] {d.type}{value}: {label}")
        if d.rule.reason:
            click.echo(f"      {d.rule.reason}")
        if d.board_reason:
            click.echo(f"      Board note: {d.board_reason}")
        if d.required_status == OPTIONAL and d.rule.condition:
            click.echo(f"      When: {d.rule.condition}")


@main.command()
@click.option("--board", type=str, help="Board id. Defaults to [planner] board.")
@click.option("--project", "project_path", type=click.Path(), help="Show occupancy from a project file.")
def pins(board, project_path):
    """Show a board's header pins and what occupies them."""
    try:
        catalog = _catalog()
        if project_path:
            session = _open_session(catalog, project_path, board)
        else:
            session = PlannerSession(catalog, board or _default_board())
    except PlannerError as e:
        _fail(e)

    state = session.state
    click.echo(f"{session.board.name} ({session.board.id}):\n")
    for i, pin in enumerate(session.board.pins):
        occupant = state.component_at(i) or ""
        click.echo(f"  {i:>3}  {pin.label:<8} {pin.capability.value:<7} {occupant}".rstrip())
    click.echo(
        f"\nFree power pins: {state.available_count(Capability.POWER)}, "
        f"free ground pins: {state.available_count(Capability.GROUND)}"
    )


# ---------------------------------------------------------------------------
# Editing a project file
# ---------------------------------------------------------------------------


@main.command()
@click.argument("component")
@click.argument("pin")
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
@click.option("--board", type=str, help="Board for a new project. Defaults to [planner] board.")
@click.option("--index", "by_index", is_flag=True, help="Treat PIN as a header index, not a label.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def place(component, pin, project_path, board, by_index, use_json):
    """Assign COMPONENT to PIN, writing the project file."""
    try:
        catalog = _catalog()
        session = _open_session(catalog, project_path, board, create=True)
        assignment = session.assign(component, _resolve_pin(session, pin, by_index))
        needed = [d for d in session.dependencies(component) if d.required_status is True]
    except PlannerError as e:
        _fail(e, use_json)

    write_project_file(project_path, session.to_project())
    label = session.board.pins[assignment.pin_index].label
    if use_json:
        click.echo(jsonmod.dumps({
            "ok": True,
            "componentId": component,
            "pin": label,
            "pinIndex": assignment.pin_index,
            "dependencies": [d.to_dict() for d in needed],
        }, indent=2, ensure_ascii=False))
        return

    click.echo(f"Placed {catalog.component(component).name} on pin {label} ({session.board.name}).")
    for d in needed:
        click.echo(f"  Needs: {d.rule.description or d.type}" + (f" ({d.rule.value})" if d.rule.value else ""))


@main.command()
@click.argument("pin")
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
@click.option("--index", "by_index", is_flag=True, help="Treat PIN as a header index, not a label.")
def remove(pin, project_path, by_index):
    """Free PIN, writing the project file."""
    try:
        catalog = _catalog()
        session = _open_session(catalog, project_path)
        removed = session.unassign(_resolve_pin(session, pin, by_index))
    except PlannerError as e:
        _fail(e)

    if removed is None:
        click.echo(f"Pin {pin} is not assigned.")
        return
    write_project_file(project_path, session.to_project())
    click.echo(f"Removed {removed.component_id} from pin {pin}.")


@main.command()
@click.argument("project_file", type=click.Path())
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def check(project_file, use_json):
    """Replay a project file through validation."""
    try:
        catalog = _catalog()
        data = read_project_file(project_file)
        session = PlannerSession(catalog, data["boardId"])
        report = session.load_project(data)
    except FileNotFoundError:
        _fail(NotFoundError("project file", project_file), use_json)
    except PlannerError as e:
        _fail(e, use_json)

    if use_json:
        click.echo(jsonmod.dumps({"ok": report.ok, **report.to_dict()}, indent=2))
    else:
        click.echo(f"{session.board.name}: {len(report.placed)} placed, {len(report.rejected)} rejected")
        for r in report.rejected:
            click.echo(f"  [!!] {r['componentId']} on pin {r['pin']}: {r['error']}")
    if not report.ok:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


def _load_for_output(project_path):
    try:
        catalog = _catalog()
        return catalog, _open_session(catalog, project_path)
    except PlannerError as e:
        _fail(e)


@main.command()
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def wiring(project_path, use_json):
    """Print a wiring list for a project."""
    catalog, session = _load_for_output(project_path)
    plan = plan_wiring(catalog, session.state)
    if use_json:
        click.echo(jsonmod.dumps([w.to_dict() for w in plan], indent=2, ensure_ascii=False))
    else:
        click.echo(render_wiring(plan))


@main.command()
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
@click.option("--csv", "use_csv", is_flag=True, help="Output CSV.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def bom(project_path, use_csv, use_json):
    """Print a bill of materials for a project."""
    catalog, session = _load_for_output(project_path)
    result = bom_for_state(catalog, session.state)
    if use_json:
        click.echo(jsonmod.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif use_csv:
        click.echo(render_bom_csv(result), nl=False)
    else:
        click.echo(render_bom(result))


@main.command()
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
def code(project_path):
    """Print starter code for a project."""
    catalog, session = _load_for_output(project_path)
    _, text = render_code(catalog, session.state)
    click.echo(text)


@main.command("export")
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
@click.option("--format", "fmt", type=click.Choice(["md", "json"]), default="md", help="Export format.")
@click.option("--output", "output_path", type=click.Path(), help="Write to a file instead of stdout.")
def export_cmd(project_path, fmt, output_path):
    """Export a project as a Markdown pinout or JSON."""
    catalog, session = _load_for_output(project_path)
    if not len(session.state):
        click.echo("Error: Cannot export an empty board. Please assign some components first.", err=True)
        raise SystemExit(1)

    text = export_markdown(catalog, session.state) if fmt == "md" else export_json(catalog, session.state)
    if output_path:
        Path(output_path).write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output_path}")
    else:
        click.echo(text, nl=False)


# ---------------------------------------------------------------------------
# Project store
# ---------------------------------------------------------------------------

@main.group()
def projects():
    """Saved projects under .pinpoint/."""
    pass


@projects.command("list")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def projects_list_cmd(use_json):
    """List saved projects."""
    try:
        saved = ProjectStore(Path.cwd()).list()
    except PlannerError as e:
        _fail(e, use_json)

    if use_json:
        click.echo(jsonmod.dumps([
            {"id": p.get("id"), "name": p.get("name"), "boardId": p.get("boardId")} for p in saved
        ], indent=2))
        return
    if not saved:
        click.echo("No saved projects.")
        return
    for p in saved:
        click.echo(f"  {p.get('id'):<20} {p.get('name')} ({p.get('boardId')}, {len(p.get('assignments', []))} components)")


@projects.command("save")
@click.option("--project", "project_path", type=click.Path(), required=True, help="Project JSON file.")
@click.option("--name", type=str, required=True, help="Display name.")
def projects_save_cmd(project_path, name):
    """Save a project file into the store."""
    try:
        catalog = _catalog()
        session = _open_session(catalog, project_path)
        record = ProjectStore(Path.cwd()).save(session.to_project(), name)
    except PlannerError as e:
        _fail(e)
    click.echo(f"Saved {record['name']} as {record['id']}")


@projects.command("load")
@click.argument("project_id")
@click.option("--project", "project_path", type=click.Path(), required=True, help="File to write the project to.")
def projects_load_cmd(project_id, project_path):
    """Write a saved project to a project file."""
    try:
        catalog = _catalog()
        stored = check_project(ProjectStore(Path.cwd()).load(project_id))
        session = PlannerSession(catalog, stored["boardId"])
        report = session.load_project(stored)
    except PlannerError as e:
        _fail(e)

    for r in report.rejected:
        click.echo(f"Warning: skipped {r['componentId']} on pin {r['pin']}: {r['error']}", err=True)
    write_project_file(project_path, session.to_project())
    click.echo(f"Loaded {stored.get('name')} into {project_path}")


@projects.command("delete")
@click.argument("project_id")
def projects_delete_cmd(project_id):
    """Delete a saved project."""
    try:
        removed = ProjectStore(Path.cwd()).delete(project_id)
    except PlannerError as e:
        _fail(e)
    click.echo(f"Deleted {removed.get('name')} ({project_id})")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@main.command("config")
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--list", "show_list", is_flag=True, help="Show every setting in pinpoint.toml.")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def config_cmd(key, value, show_list, use_json):
    """Read or change pinpoint.toml settings.

    With no KEY, lists every setting. Setting planner.board checks the id
    against the catalog first.
    """
    project_dir = Path.cwd()

    if show_list or not key:
        settings = list_config(project_dir)
        if use_json:
            click.echo(jsonmod.dumps(settings, indent=2))
        elif not settings:
            click.echo(f"No settings in {CONFIG_FILE}. Try: pinpoint config planner.board uno")
        else:
            for k in sorted(settings):
                click.echo(f"  {k} = {settings[k]}")
        return

    if value is None:
        current = get_config_value(project_dir, key)
        if use_json:
            click.echo(jsonmod.dumps({key: current}))
        elif current is None:
            click.echo(f"{key} is not set.")
        else:
            click.echo(f"{key} = {current}")
        return

    try:
        if key == "planner.board":
            _catalog().board(value)
        set_config_value(project_dir, key, value)
    except ValueError as e:
        _fail(PlannerError(str(e)), use_json)
    except PlannerError as e:
        _fail(e, use_json)
    click.echo(f"Set {key} = {value}")
