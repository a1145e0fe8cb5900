"""RF command output for RTS shutters.

Commands are fire-and-forget: the shutter never acknowledges them, so a
failed transmission is only logged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum

import voluptuous as vol
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError

_LOGGER = logging.getLogger(__name__)

REMOTE_DOMAIN = "remote"
SERVICE_SEND_COMMAND = "send_command"


class RtsCommand(Enum):
    """Motion commands understood by an RTS motor."""

    OPEN = "open"
    CLOSE = "close"
    STOP_OR_PAIR = "stop_or_pair"
    PAIR = "pair"

    @property
    def button(self) -> str:
        """Return the name of the remote button sending this command."""
        return _BUTTONS[self]


_BUTTONS = {
    RtsCommand.OPEN: "Up",
    RtsCommand.CLOSE: "Down",
    RtsCommand.STOP_OR_PAIR: "My",
    RtsCommand.PAIR: "Prog",
}


class CommandPort(ABC):
    """Sink for RTS commands."""

    @abstractmethod
    def send(self, command: RtsCommand) -> None:
        """Dispatch a command without waiting for it to be transmitted."""


class RemoteCommandPort(CommandPort):
    """Send RTS commands through a Home Assistant remote entity.

    The remote (an RF bridge such as a Broadlink) must have learned the
    Up, Down, My and Prog buttons under the configured device name.
    """

    def __init__(self, hass: HomeAssistant, remote_entity_id: str, device: str):
        self.hass = hass
        self._remote_entity_id = remote_entity_id
        self._device = device

    def send(self, command: RtsCommand) -> None:
        _LOGGER.debug(
            "send :: %s (%s) via %s",
            command.value,
            command.button,
            self._remote_entity_id,
        )
        self.hass.async_create_task(self._async_send(command))

    async def _async_send(self, command: RtsCommand) -> None:
        try:
            await self.hass.services.async_call(
                REMOTE_DOMAIN,
                SERVICE_SEND_COMMAND,
                {
                    "entity_id": self._remote_entity_id,
                    "device": self._device,
                    "command": command.button,
                },
                True,
            )
        except (HomeAssistantError, vol.Invalid) as err:
            _LOGGER.error(
                "Failed to send %s to %s: %s",
                command.button,
                self._remote_entity_id,
                err,
            )
