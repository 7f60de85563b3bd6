"""Starter code rendering for pinpoint-planner."""

from __future__ import annotations

import json
import re

from pinpoint_planner.catalog import Catalog
from pinpoint_planner.tracker import BoardState

EMPTY_MESSAGE = "Assign some components to generate starter code."


def pin_constant(component_name: str) -> str:
    """Constant name for a component's pin, e.g. "HC-SR04 Sensor" -> HC_SR04_SENSOR_PIN."""
    return re.sub(r"[^A-Z0-9_]", "_", component_name.upper()) + "_PIN"


def _pin_rows(catalog: Catalog, state: BoardState) -> list[tuple[str, str, str, str]]:
    """(component name, constant, pin label, code hint) per assignment, in pin order."""
    board = state.board
    rows = []
    seen = set()
    for a in state.snapshot():
        comp = catalog.component(a.component_id)
        const = pin_constant(comp.name)
        if const in seen:
            continue
        seen.add(const)
        rows.append((comp.name, const, board.pins[a.pin_index].label, comp.code_hints.get(board.id, "")))
    return rows


def render_code(catalog: Catalog, state: BoardState) -> tuple[str, str]:
    """Render starter code for the board's language.

    Returns (language, code). Language is "python", "cpp", or "text" when
    nothing is assigned.
    """
    if not len(state):
        return "text", EMPTY_MESSAGE
    rows = _pin_rows(catalog, state)
    if state.board.language == "python":
        return "python", render_python(state.board.name, rows)
    return "cpp", render_arduino(state.board.name, rows)


def render_python(board_name: str, rows: list[tuple[str, str, str, str]]) -> str:
    sections = [
        _python_header(board_name),
        _python_pins(rows),
        _python_setup(rows),
        _python_loop(),
    ]
    return "\n".join(s for s in sections if s)


def render_arduino(board_name: str, rows: list[tuple[str, str, str, str]]) -> str:
    sections = [
        _arduino_header(board_name),
        _arduino_pins(rows),
        _arduino_setup(rows),
        _arduino_loop(),
    ]
    return "\n".join(s for s in sections if s)


# ---------------------------------------------------------------------------
# Python sections
# ---------------------------------------------------------------------------


def _python_header(board_name: str) -> str:
    return f"""# PinPoint Planner: Python starter code for {board_name}

import time
# import RPi.GPIO as GPIO  # Uncomment if needed"""


def _python_value(label: str) -> str:
    # Named pins such as ID_SD are not Python names.
    return label if label.isdigit() else json.dumps(label)


def _python_pins(rows) -> str:
    defs = "\n\n".join(f"# Pin for {name}\n{const} = {_python_value(label)}" for name, const, label, _ in rows)
    return f"""
# --- Pin Definitions ---
{defs}"""


def _python_setup(rows) -> str:
    hints = "".join(f"\n# {name}: {hint}" for name, _, _, hint in rows if hint)
    return f"""
# --- Setup ---
# Initialize your components here.
# Example: GPIO.setmode(GPIO.BCM)
# Example: GPIO.setup({rows[0][1]}, GPIO.OUT){hints}
print("Setup complete. Starting main loop...")"""


def _python_loop() -> str:
    return """
try:
    while True:
        # --- Main Loop ---
        # Add your component logic here.
        print("Looping...")
        time.sleep(2)

except KeyboardInterrupt:
    print("Program stopped.")
finally:
    # Add cleanup code here if needed (e.g., GPIO.cleanup())
    pass
"""


# ---------------------------------------------------------------------------
# Arduino sections
# ---------------------------------------------------------------------------


def _arduino_header(board_name: str) -> str:
    return f"// PinPoint Planner: Arduino C++ starter code for {board_name}"


def _arduino_pins(rows) -> str:
    defs = "\n".join(f"// Pin for {name}\n#define {const} {label}" for name, const, label, _ in rows)
    return f"""
// --- Pin Definitions ---
{defs}"""


def _arduino_setup(rows) -> str:
    hints = "".join(f"\n    // {name}: {hint}" for name, _, _, hint in rows if hint)
    return f"""
void setup() {{
    Serial.begin(9600);
    // Initialize your components here.
    // Example: pinMode({rows[0][1]}, OUTPUT);{hints}
}}"""


def _arduino_loop() -> str:
    return """
void loop() {
    // --- Main Loop ---
    // Add your component logic here.
    delay(2000);
}
"""
