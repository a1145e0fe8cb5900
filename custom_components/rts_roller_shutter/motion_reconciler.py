"""Decide which RF command a new target needs, given the current motion."""

from __future__ import annotations

from typing import NamedTuple

from .command_port import RtsCommand
from .shutter_state import MotionState, ShutterState


class Reconciliation(NamedTuple):
    """Outcome of a target change: the next motion state and at most one command."""

    motion_state: MotionState
    command: RtsCommand | None


def reconcile(state: ShutterState, new_target: float) -> Reconciliation:
    """Return the motion state and command for moving from state to new_target.

    The caller adopts new_target unconditionally. No command is sent while
    the shutter already travels the right way: the remote keeps the motor
    running after a single press.
    """
    current = state.current_position

    if current > new_target:
        if state.motion_state == MotionState.CLOSING:
            return Reconciliation(MotionState.CLOSING, None)
        return Reconciliation(MotionState.CLOSING, RtsCommand.CLOSE)

    if current < new_target:
        if state.motion_state == MotionState.OPENING:
            return Reconciliation(MotionState.OPENING, None)
        return Reconciliation(MotionState.OPENING, RtsCommand.OPEN)

    if state.motion_state == MotionState.IDLE:
        return Reconciliation(MotionState.IDLE, None)
    # Moving and asked to rest where it is: halt the motor here.
    return Reconciliation(MotionState.IDLE, RtsCommand.STOP_OR_PAIR)
