"""Integration test fixtures for rts_roller_shutter.

Uses pytest-homeassistant-custom-component for a real HA instance.
A mocked remote.send_command service records the RF commands.
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
    async_mock_service,
)

DOMAIN = "rts_roller_shutter"
COVER_ENTITY_ID = "cover.living_room"
STORAGE_KEY = f"{DOMAIN}.living_room"


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    """Enable custom integrations for all tests in this directory."""
    return


@pytest.fixture
def remote_calls(hass: HomeAssistant):
    """Record remote.send_command calls instead of transmitting."""
    return async_mock_service(hass, "remote", "send_command")


@pytest.fixture
def base_options():
    """Return options for a shutter without the Prog button."""
    return {
        "name": "Living Room",
        "id": "living_room",
        "remote_entity_id": "remote.rf_bridge",
        "remote_device": "living_room_shutter",
        "open_duration_ms": 20000,
        "close_duration_ms": 18000,
        "locking_duration_ms": 2000,
        "prog": False,
    }


@pytest.fixture
async def make_entry(hass: HomeAssistant, base_options):
    """Return a factory that adds and sets up a config entry."""
    entries = []

    async def _make(**overrides):
        entry = MockConfigEntry(
            domain=DOMAIN,
            version=1,
            title="Living Room",
            unique_id=base_options["id"],
            data={},
            options={**base_options, **overrides},
        )
        entry.add_to_hass(hass)
        await hass.config_entries.async_setup(entry.entry_id)
        await hass.async_block_till_done()
        entries.append(entry)
        return entry

    yield _make

    # Unload to cancel the ticker and pending resets.
    for entry in entries:
        await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()


async def advance_ticks(hass: HomeAssistant, ticks: int) -> None:
    """Fire the 100 ms ticker the given number of times."""
    now = dt_util.utcnow()
    for i in range(1, ticks + 1):
        async_fire_time_changed(
            hass, now + timedelta(milliseconds=100 * i), fire_all=True
        )
        await hass.async_block_till_done()
