"""Position estimator for RF shutters without position feedback.

Advances the simulated position by one fixed tick. The final percent
before the closed end is the locking zone: the slats unlock/lock there and
the shutter travels much slower than over the rest of its range.
"""

from __future__ import annotations

from .const import TICK_INTERVAL_MS
from .shutter_state import ShutterConfig, ShutterState

LOCKING_ZONE_LIMIT = 1


def step_size(state: ShutterState, config: ShutterConfig, tick_ms: float) -> float:
    """Return how many percentage points the shutter travels in one tick."""
    # Keyed on the current position only, whatever the direction.
    if state.current_position <= LOCKING_ZONE_LIMIT:
        return tick_ms * LOCKING_ZONE_LIMIT / config.locking_duration_ms
    if state.target_position > state.current_position:
        return tick_ms * 100 / config.open_duration_ms
    return tick_ms * 100 / config.close_duration_ms


def advance(
    state: ShutterState,
    config: ShutterConfig,
    tick_ms: float = TICK_INTERVAL_MS,
) -> float:
    """Return the current position after one tick of travel toward the target.

    Never overshoots the target. Does not touch the motion state.
    """
    current = state.current_position
    target = state.target_position
    if current == target:
        return current

    step = step_size(state, config, tick_ms)
    if target > current:
        return min(current + step, target)
    return max(current - step, target)


def ticks_to_target(
    state: ShutterState,
    config: ShutterConfig,
    tick_ms: float = TICK_INTERVAL_MS,
) -> int:
    """Return how many ticks the shutter needs to reach its target."""
    probe = ShutterState(
        current_position=state.current_position,
        target_position=state.target_position,
        motion_state=state.motion_state,
    )
    ticks = 0
    while not probe.is_at_target():
        probe.current_position = advance(probe, config, tick_ms)
        ticks += 1
    return ticks
