"""Persistence of the last requested target position."""

from __future__ import annotations

import logging
import os

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store
from homeassistant.util import slugify

from .const import ATTR_TARGET_POSITION, DEFAULT_TARGET_POSITION, DOMAIN, STORAGE_VERSION
from .shutter_state import is_valid_position

_LOGGER = logging.getLogger(__name__)


def storage_key(shutter_id: str) -> str:
    """Return the storage key holding the target of a shutter."""
    return f"{DOMAIN}.{slugify(shutter_id)}"


class TargetStore:
    """Load and save the target position of one shutter.

    Only the target survives a restart; the shutter is assumed to have
    settled there while Home Assistant was down.
    """

    def __init__(self, hass: HomeAssistant, shutter_id: str):
        self.hass = hass
        self._shutter_id = shutter_id
        self._store = Store(hass, STORAGE_VERSION, storage_key(shutter_id))

    async def async_load(self) -> float:
        """Return the saved target, writing the default if none is stored.

        Errors other than a missing record propagate. Home Assistant moves
        an undecodable file aside and loads nothing, so a file that existed
        before the load but yielded no data is a read failure.
        """
        existed = await self.hass.async_add_executor_job(
            os.path.exists, self._store.path
        )
        data = await self._store.async_load()
        if data is None and existed:
            raise HomeAssistantError(
                f"Stored target for {self._shutter_id} could not be read"
            )
        if data is None or ATTR_TARGET_POSITION not in data:
            _LOGGER.info(
                "No stored target for %s, defaulting to %s",
                self._shutter_id,
                DEFAULT_TARGET_POSITION,
            )
            await self._store.async_save({ATTR_TARGET_POSITION: DEFAULT_TARGET_POSITION})
            return DEFAULT_TARGET_POSITION
        target = data[ATTR_TARGET_POSITION]
        if not is_valid_position(target):
            raise HomeAssistantError(
                f"Stored target for {self._shutter_id} is invalid: {target!r}"
            )
        return target

    async def async_save(self, target_position: float) -> None:
        """Write the target, logging instead of raising on failure."""
        try:
            await self._store.async_save({ATTR_TARGET_POSITION: target_position})
        except (HomeAssistantError, OSError, ValueError) as err:
            _LOGGER.error(
                "Failed to store target %s for %s: %s",
                target_position,
                self._shutter_id,
                err,
            )

    def schedule_save(self, target_position: float) -> None:
        """Write the target in the background."""
        self.hass.async_create_task(self.async_save(target_position))
