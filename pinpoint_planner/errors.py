"""Error types for pinpoint-planner."""

from __future__ import annotations

from enum import Enum


class PlannerError(Exception):
    """Structured planner error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def to_dict(self) -> dict:
        return {"error": self.message, "exit_code": self.exit_code}


class NotFoundError(PlannerError):
    """A component, board or pin is not in the catalog."""

    def __init__(self, kind: str, ident):
        super().__init__(f"Unknown {kind}: {ident}", exit_code=2)
        self.kind = kind
        self.ident = ident

    def to_dict(self) -> dict:
        return {**super().to_dict(), "kind": self.kind, "id": self.ident}


class RejectReason(str, Enum):
    ALREADY_ASSIGNED = "already_assigned"
    PIN_OCCUPIED = "pin_occupied"
    NON_DATA_PIN = "non_data_pin"
    INCOMPATIBLE_BUS = "incompatible_bus"
    INSUFFICIENT_POWER = "insufficient_power"
    INSUFFICIENT_GROUND = "insufficient_ground"


class PlacementRejected(PlannerError):
    """A placement failed validation. Expected and user-facing."""

    def __init__(self, reason: RejectReason, details: dict | None = None):
        self.reason = RejectReason(reason)
        self.details = dict(details or {})
        super().__init__(f"Placement rejected: {self.reason.value}", exit_code=1)

    def to_dict(self) -> dict:
        return {**super().to_dict(), "reason": self.reason.value, "details": self.details}


class InvariantViolation(PlannerError):
    """Board state was mutated in a way that breaks its invariants."""

    def __init__(self, message: str):
        super().__init__(message, exit_code=70)


class CatalogError(PlannerError):
    """The catalog failed its load-time consistency checks."""

    def __init__(self, errors: list):
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors[:3])
        if len(self.errors) > 3:
            summary += f" (+{len(self.errors) - 3} more)"
        super().__init__(f"Invalid catalog: {summary}", exit_code=3)

    def to_dict(self) -> dict:
        return {**super().to_dict(), "errors": [str(e) for e in self.errors]}


class ProjectFormatError(PlannerError):
    """A project document does not have the expected shape."""

    def __init__(self, message: str):
        super().__init__(message, exit_code=4)
