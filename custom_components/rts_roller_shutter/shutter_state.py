"""State model for a simulated RTS roller shutter.

Uses Home Assistant convention: 0 = fully closed, 100 = fully open.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .const import POSITION_CLOSED, POSITION_OPEN


class MotionState(Enum):
    """Believed direction of travel."""

    IDLE = "idle"
    OPENING = "opening"
    CLOSING = "closing"


@dataclass(frozen=True)
class ShutterConfig:
    """Static configuration of one shutter."""

    shutter_id: str
    open_duration_ms: float
    close_duration_ms: float
    locking_duration_ms: float
    name: str | None = None
    has_prog_button: bool = False

    def __post_init__(self) -> None:
        if not self.shutter_id:
            raise ValueError("Shutter id is required")
        for field_name in (
            "open_duration_ms",
            "close_duration_ms",
            "locking_duration_ms",
        ):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{field_name} must be a number, got {value!r}")
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value!r}")


@dataclass
class ShutterState:
    """Mutable simulated state, owned by the cover entity."""

    current_position: float
    target_position: float
    motion_state: MotionState = MotionState.IDLE

    @classmethod
    def settled_at(cls, position: float) -> ShutterState:
        """Return a state resting at position, as assumed after a restart."""
        return cls(
            current_position=position,
            target_position=position,
            motion_state=MotionState.IDLE,
        )

    def is_at_target(self) -> bool:
        """Return True if the simulated position has reached the target."""
        return self.current_position == self.target_position

    def is_at_endpoint(self) -> bool:
        """Return True if the target is a hard endpoint where the motor auto-stops."""
        return self.target_position in (POSITION_CLOSED, POSITION_OPEN)


def is_valid_position(value) -> bool:
    """Return True if value is a number within the 0..100 travel range."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return POSITION_CLOSED <= value <= POSITION_OPEN
