"""Momentary Prog button used to pair the remote with a motor."""

import logging

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.event import async_call_later

from .command_port import CommandPort, RtsCommand
from .const import DOMAIN, PAIR_RESET_DELAY
from .helpers import shutter_device_info
from .shutter_state import ShutterConfig

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the pair switch when the Prog button is enabled."""
    runtime = hass.data[DOMAIN][entry.entry_id]
    if not runtime.config.has_prog_button:
        return
    async_add_entities([RtsPairSwitch(runtime.config, runtime.command_port)])


class RtsPairSwitch(SwitchEntity):
    """Stateless Prog button exposed as a switch that turns itself off."""

    def __init__(self, config: ShutterConfig, command_port: CommandPort):
        self._config = config
        self._command_port = command_port
        self._is_on = False
        self._cancel_reset = None
        self._name = f"{config.name or config.shutter_id} Prog"

    @property
    def name(self):
        return self._name

    @property
    def unique_id(self):
        return f"{DOMAIN}_{self._config.shutter_id}_prog"

    @property
    def device_info(self) -> DeviceInfo:
        return shutter_device_info(self._config)

    @property
    def is_on(self) -> bool:
        return self._is_on

    async def async_turn_on(self, **kwargs):
        """Send the pairing command and report a short press."""
        _LOGGER.debug("(%s) async_turn_on :: sending pair", self.entity_id)
        self._command_port.send(RtsCommand.PAIR)
        self._is_on = True
        self.async_write_ha_state()

        self._cancel_pending_reset()
        self._cancel_reset = async_call_later(
            self.hass, PAIR_RESET_DELAY, self._reset_hook
        )

    async def async_turn_off(self, **kwargs):
        self._cancel_pending_reset()
        self._is_on = False
        self.async_write_ha_state()

    async def async_will_remove_from_hass(self):
        self._cancel_pending_reset()

    @callback
    def _reset_hook(self, _now):
        """Flip the switch back to off after the press."""
        self._cancel_reset = None
        self._is_on = False
        self.async_write_ha_state()

    def _cancel_pending_reset(self):
        if self._cancel_reset is not None:
            self._cancel_reset()
            self._cancel_reset = None
