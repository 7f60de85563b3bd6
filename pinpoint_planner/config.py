"""Project configuration and state management for pinpoint-planner."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_FILE = "pinpoint.toml"
STATE_DIR = ".pinpoint"


@dataclass
class PlannerConfig:
    board: str = "rpi4"


@dataclass
class CatalogConfig:
    packs: list[str] = field(default_factory=list)
    strict: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class ProjectConfig:
    planner: PlannerConfig = field(default_factory=PlannerConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def pack_paths(self, project_dir: Path | str) -> list[Path]:
        """Pack paths, relative ones resolved against the project directory."""
        return [Path(project_dir) / p for p in self.catalog.packs]


def _read_toml(toml_path: Path) -> dict:
    if tomllib is None:
        raise ImportError("No TOML parser available (need Python 3.11+ or tomli)")
    with open(toml_path, "rb") as f:
        return tomllib.load(f)


def load_project_config(project_dir: Path | str) -> ProjectConfig:
    """Parse pinpoint.toml and return a typed ProjectConfig."""
    project_dir = Path(project_dir)
    toml_path = project_dir / CONFIG_FILE
    if not toml_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILE} not found in {project_dir}")

    data = _read_toml(toml_path)
    planner_data = data.get("planner", {})
    catalog_data = data.get("catalog", {})
    logging_data = data.get("logging", {})

    packs = catalog_data.get("packs", [])
    if isinstance(packs, str):
        packs = [packs]

    return ProjectConfig(
        planner=PlannerConfig(board=planner_data.get("board", "rpi4")),
        catalog=CatalogConfig(packs=list(packs), strict=bool(catalog_data.get("strict", True))),
        logging=LoggingConfig(level=str(logging_data.get("level", "WARNING")).upper()),
    )


def load_config_or_default(project_dir: Path | str) -> ProjectConfig:
    """Like load_project_config, but defaults when pinpoint.toml is absent."""
    try:
        return load_project_config(project_dir)
    except FileNotFoundError:
        return ProjectConfig()


def get_config_value(project_dir: Path | str, key: str):
    """Dotted key lookup, e.g. 'planner.board', 'catalog.strict'."""
    toml_path = Path(project_dir) / CONFIG_FILE
    if not toml_path.exists() or tomllib is None:
        return None

    data = _read_toml(toml_path)
    parts = key.split(".", 1)
    if len(parts) == 2:
        section, k = parts
        return data.get(section, {}).get(k)
    return data.get(key)


def _coerce(value):
    if not isinstance(value, str):
        return value
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        return value


def _format(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format(v) for v in value) + "]"
    return json.dumps(str(value))


def set_config_value(project_dir: Path | str, key: str, value) -> None:
    """Write a value to pinpoint.toml using line-based editing."""
    toml_path = Path(project_dir) / CONFIG_FILE

    parts = key.split(".", 1)
    if len(parts) != 2:
        raise ValueError(f"Key must be dotted (section.key), got: {key}")
    section, k = parts
    val_str = _format(_coerce(value))

    lines = toml_path.read_text().splitlines(keepends=True) if toml_path.exists() else []

    section_header = f"[{section}]"
    section_idx = None
    key_idx = None
    next_section_idx = None

    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped == section_header:
            section_idx = i
        elif section_idx is not None and next_section_idx is None:
            if stripped.startswith("[") and stripped.endswith("]"):
                next_section_idx = i
            elif re.match(rf"^{re.escape(k)}\s*=", stripped):
                key_idx = i

    if key_idx is not None:
        lines[key_idx] = f"{k} = {val_str}\n"
    elif section_idx is not None:
        insert_at = next_section_idx if next_section_idx is not None else len(lines)
        if insert_at == len(lines) and lines and not lines[-1].endswith("\n"):
            lines[-1] += "\n"
        lines.insert(insert_at, f"{k} = {val_str}\n")
    else:
        if lines and not lines[-1].endswith("\n"):
            lines.append("\n")
        if lines:
            lines.append("\n")
        lines.append(f"{section_header}\n")
        lines.append(f"{k} = {val_str}\n")

    toml_path.write_text("".join(lines))


def list_config(project_dir: Path | str) -> dict:
    """Return a flat dotted-key dict of all config values."""
    toml_path = Path(project_dir) / CONFIG_FILE
    if not toml_path.exists() or tomllib is None:
        return {}

    result = {}
    for section, values in _read_toml(toml_path).items():
        if isinstance(values, dict):
            for k, v in values.items():
                result[f"{section}.{k}"] = v
        else:
            result[section] = values
    return result


def ensure_state_dir(project_dir: Path | str) -> Path:
    """Create .pinpoint/ directory with .gitignore containing '*'."""
    state_dir = Path(project_dir) / STATE_DIR
    state_dir.mkdir(exist_ok=True)
    gitignore = state_dir / ".gitignore"
    if not gitignore.exists():
        gitignore.write_text("*\n")
    return state_dir
