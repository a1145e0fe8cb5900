"""Shared fixtures for rts_roller_shutter tests."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from custom_components.rts_roller_shutter.command_port import CommandPort
from custom_components.rts_roller_shutter.cover import RtsRollerShutter
from custom_components.rts_roller_shutter.shutter_state import ShutterConfig
from custom_components.rts_roller_shutter.store import TargetStore

OPEN_DURATION_MS = 20000
CLOSE_DURATION_MS = 18000
LOCKING_DURATION_MS = 2000


@pytest.fixture
def make_hass():
    """Return a factory that creates a minimal mock HA instance."""

    def _make():
        hass = MagicMock()
        hass.services.async_call = AsyncMock()
        hass.async_create_task = lambda coro: asyncio.ensure_future(coro)
        hass.async_add_executor_job = AsyncMock(side_effect=lambda func, *args: func(*args))
        return hass

    return _make


@pytest.fixture
def make_config():
    """Return a factory for shutter configurations."""

    def _make(
        shutter_id="living_room",
        name="Living Room",
        open_duration_ms=OPEN_DURATION_MS,
        close_duration_ms=CLOSE_DURATION_MS,
        locking_duration_ms=LOCKING_DURATION_MS,
        has_prog_button=False,
    ):
        return ShutterConfig(
            shutter_id=shutter_id,
            name=name,
            open_duration_ms=open_duration_ms,
            close_duration_ms=close_duration_ms,
            locking_duration_ms=locking_duration_ms,
            has_prog_button=has_prog_button,
        )

    return _make


@pytest.fixture
def make_shutter(make_hass, make_config):
    """Return a factory that creates a shutter wired to recording doubles."""

    def _make(initial_target=100, **config_kwargs):
        shutter = RtsRollerShutter(
            make_config(**config_kwargs),
            MagicMock(spec=CommandPort),
            MagicMock(spec=TargetStore),
            initial_target,
        )
        shutter.hass = make_hass()
        shutter.entity_id = "cover.living_room"
        shutter.async_write_ha_state = MagicMock()
        return shutter

    return _make


def sent_commands(shutter):
    """Return the commands the shutter sent, in order."""
    return [c.args[0] for c in shutter._command_port.send.call_args_list]


def run_until_idle(shutter, max_ticks=10000):
    """Tick until the shutter rests; return the number of ticks taken."""
    for ticks in range(1, max_ticks + 1):
        shutter.tick()
        if shutter.current_position == shutter.target_position:
            return ticks
    raise AssertionError(f"shutter did not converge within {max_ticks} ticks")
