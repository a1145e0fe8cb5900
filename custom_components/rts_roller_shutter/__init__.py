"""RTS Roller Shutter integration."""

import logging

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryError

from .const import DOMAIN
from .helpers import (
    ShutterRuntime,
    command_port_from_options,
    shutter_config_from_options,
    validate_options,
)
from .store import TargetStore

_LOGGER = logging.getLogger(__name__)

PLATFORMS: list[Platform] = [Platform.COVER, Platform.SWITCH]


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up an RTS roller shutter from a config entry."""
    try:
        options = validate_options(entry.options)
        config = shutter_config_from_options(options)
    except (vol.Invalid, ValueError) as err:
        raise ConfigEntryError(f"Invalid shutter configuration: {err}") from err

    # A corrupt or unreadable store aborts setup before any entity exists.
    store = TargetStore(hass, config.shutter_id)
    initial_target = await store.async_load()
    _LOGGER.debug(
        "async_setup_entry :: %s starts settled at %s", config.shutter_id, initial_target
    )

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = ShutterRuntime(
        config=config,
        command_port=command_port_from_options(hass, options),
        store=store,
        initial_target=initial_target,
    )

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(async_update_options))

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unloaded:
        hass.data[DOMAIN].pop(entry.entry_id, None)
    return unloaded


async def async_update_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle options update - reload the entry."""
    await hass.config_entries.async_reload(entry.entry_id)
