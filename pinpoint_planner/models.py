"""Catalog dataclasses: boards, pins, components and their dependency rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pinpoint_planner.errors import NotFoundError

# Requirement status of a supporting dependency: True, False or OPTIONAL.
OPTIONAL = "optional"


class Capability(str, Enum):
    """The single function a header pin provides."""
    GPIO = "gpio"
    I2C = "i2c"
    SPI = "spi"
    UART = "uart"
    POWER = "power"
    GROUND = "ground"

    @property
    def is_rail(self) -> bool:
        return self in (Capability.POWER, Capability.GROUND)


DATA_CAPABILITIES = frozenset({Capability.GPIO, Capability.I2C, Capability.SPI, Capability.UART})
RAIL_CAPABILITIES = frozenset({Capability.POWER, Capability.GROUND})


@dataclass(frozen=True)
class PinSpec:
    label: str
    capability: Capability
    title: str = ""


@dataclass
class BoardDefinition:
    """A board and its header pins, in physical order."""
    id: str
    name: str
    pins: list[PinSpec] = field(default_factory=list)
    title: str = ""
    logic_voltage: float = 3.3
    language: str = "arduino"     # starter code: "python" | "arduino"

    def pin(self, index: int) -> PinSpec:
        """Return the pin at a header position. Raises NotFoundError if out of range."""
        if not 0 <= index < len(self.pins):
            raise NotFoundError("pin", index)
        return self.pins[index]

    def find_pin(self, label: str) -> int | None:
        """Index of the pin printed with `label`.

        Labels repeat (GND, 5V), so a data-capable pin wins over a rail pin
        with the same label; otherwise the first match in header order.
        """
        first = None
        for i, pin in enumerate(self.pins):
            if pin.label != label:
                continue
            if not pin.capability.is_rail:
                return i
            if first is None:
                first = i
        return first

    def pin_indexes(self, capability: Capability) -> list[int]:
        return [i for i, p in enumerate(self.pins) if p.capability == capability]


@dataclass
class BoardOverride:
    required: bool | str
    reason: str | None = None


@dataclass
class DependencyRule:
    """A supporting part a component may need, with per-board overrides."""
    type: str
    default_required: bool | str = True
    board_overrides: dict[str, BoardOverride] = field(default_factory=dict)
    value: str = ""
    purpose: str = ""
    description: str = ""
    reason: str = ""
    quantity: int | str = 1
    connection: str = ""
    alternative: str = ""
    condition: str = ""


@dataclass
class ComponentDefinition:
    id: str
    name: str
    data: tuple[Capability, ...]
    power: int = 0
    ground: int = 0
    dependencies: list[DependencyRule] = field(default_factory=list)
    category: str = ""
    tip: str = ""
    voltage: str = ""
    complexity: str = ""
    notes: str = ""
    warnings: list[str] = field(default_factory=list)
    i2c_address: str | None = None
    code_hints: dict[str, str] = field(default_factory=dict)
    # Board ids this component works with; None means every board.
    boards: list[str] | None = None

    def accepts(self, capability: Capability) -> bool:
        return capability in self.data


@dataclass
class ValidationError:
    item_id: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.item_id}] {self.field}: {self.message}"


@dataclass(frozen=True)
class Assignment:
    pin_index: int
    component_id: str
