"""Shared helper functions for the rts_roller_shutter integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import homeassistant.helpers.config_validation as cv
import voluptuous as vol
from homeassistant.const import CONF_ID, CONF_NAME
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceInfo

from .command_port import CommandPort, RemoteCommandPort
from .const import (
    CONF_CLOSE_DURATION_MS,
    CONF_LOCKING_DURATION_MS,
    CONF_OPEN_DURATION_MS,
    CONF_PROG,
    CONF_REMOTE_DEVICE,
    CONF_REMOTE_ENTITY_ID,
    DOMAIN,
)
from .shutter_state import ShutterConfig
from .store import TargetStore

POSITIVE_DURATION = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

SHUTTER_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME): cv.string,
        vol.Required(CONF_ID): vol.All(cv.string, vol.Length(min=1)),
        vol.Required(CONF_OPEN_DURATION_MS): POSITIVE_DURATION,
        vol.Required(CONF_CLOSE_DURATION_MS): POSITIVE_DURATION,
        vol.Required(CONF_LOCKING_DURATION_MS): POSITIVE_DURATION,
        vol.Optional(CONF_PROG, default=False): cv.boolean,
        vol.Required(CONF_REMOTE_ENTITY_ID): cv.entity_domain("remote"),
        vol.Required(CONF_REMOTE_DEVICE): vol.All(cv.string, vol.Length(min=1)),
    },
    extra=vol.ALLOW_EXTRA,
)


@dataclass
class ShutterRuntime:
    """Objects shared by the cover and switch platforms of one entry."""

    config: ShutterConfig
    command_port: CommandPort
    store: TargetStore
    initial_target: float


def validate_options(options: dict[str, Any]) -> dict[str, Any]:
    """Validate entry options, raising vol.Invalid with the offending key."""
    return SHUTTER_SCHEMA(dict(options))


def shutter_config_from_options(options: dict[str, Any]) -> ShutterConfig:
    """Build the shutter configuration from validated options."""
    return ShutterConfig(
        shutter_id=options[CONF_ID],
        name=options.get(CONF_NAME),
        open_duration_ms=options[CONF_OPEN_DURATION_MS],
        close_duration_ms=options[CONF_CLOSE_DURATION_MS],
        locking_duration_ms=options[CONF_LOCKING_DURATION_MS],
        has_prog_button=options.get(CONF_PROG, False),
    )


def shutter_device_info(config: ShutterConfig) -> DeviceInfo:
    """Group the cover and its pair switch under one device."""
    return DeviceInfo(
        identifiers={(DOMAIN, config.shutter_id)},
        name=config.name or config.shutter_id,
        manufacturer="Somfy",
        model="RTS roller shutter",
    )


def command_port_from_options(
    hass: HomeAssistant, options: dict[str, Any]
) -> CommandPort:
    """Build the RF command port from validated options."""
    return RemoteCommandPort(
        hass, options[CONF_REMOTE_ENTITY_ID], options[CONF_REMOTE_DEVICE]
    )
