"""Config flow for RTS Roller Shutter integration."""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlow,
)
from homeassistant.const import CONF_ID, CONF_NAME
from homeassistant.core import callback
from homeassistant.helpers.selector import (
    BooleanSelector,
    EntitySelector,
    EntitySelectorConfig,
    NumberSelector,
    NumberSelectorConfig,
    NumberSelectorMode,
    TextSelector,
)

from .const import (
    CONF_CLOSE_DURATION_MS,
    CONF_LOCKING_DURATION_MS,
    CONF_OPEN_DURATION_MS,
    CONF_PROG,
    CONF_REMOTE_DEVICE,
    CONF_REMOTE_ENTITY_ID,
    DOMAIN,
)
from .helpers import validate_options

DURATION_SELECTOR = NumberSelector(
    NumberSelectorConfig(
        min=1,
        max=600000,
        step=1,
        unit_of_measurement="ms",
        mode=NumberSelectorMode.BOX,
    )
)

REMOTE_ENTITY_SELECTOR = EntitySelector(EntitySelectorConfig(domain="remote"))


def _build_shutter_schema(
    defaults: dict[str, Any] | None = None,
    include_id: bool = True,
) -> vol.Schema:
    """Build the form schema, prefilled with defaults."""
    d = defaults or {}
    fields: dict[vol.Marker, Any] = {}

    if include_id:
        fields[vol.Required(CONF_NAME, default=d.get(CONF_NAME, vol.UNDEFINED))] = (
            TextSelector()
        )
        fields[vol.Required(CONF_ID, default=d.get(CONF_ID, vol.UNDEFINED))] = (
            TextSelector()
        )

    fields[
        vol.Required(
            CONF_REMOTE_ENTITY_ID,
            default=d.get(CONF_REMOTE_ENTITY_ID, vol.UNDEFINED),
        )
    ] = REMOTE_ENTITY_SELECTOR
    fields[
        vol.Required(
            CONF_REMOTE_DEVICE, default=d.get(CONF_REMOTE_DEVICE, vol.UNDEFINED)
        )
    ] = TextSelector()

    for key in (
        CONF_OPEN_DURATION_MS,
        CONF_CLOSE_DURATION_MS,
        CONF_LOCKING_DURATION_MS,
    ):
        fields[vol.Required(key, default=d.get(key, vol.UNDEFINED))] = (
            DURATION_SELECTOR
        )

    fields[vol.Optional(CONF_PROG, default=d.get(CONF_PROG, False))] = (
        BooleanSelector()
    )

    return vol.Schema(fields)


def _validate_input(data: dict[str, Any]) -> dict[str, str]:
    """Return form errors keyed by the offending field."""
    try:
        validate_options(data)
    except vol.Invalid as err:
        field = str(err.path[0]) if err.path else "base"
        return {field: "invalid_value"}
    return {}


class RtsRollerShutterConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for RTS Roller Shutter."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Configure the shutter, its remote and its travel durations."""
        errors: dict[str, str] = {}
        if user_input is not None:
            errors = _validate_input(user_input)
            if not errors:
                await self.async_set_unique_id(user_input[CONF_ID])
                self._abort_if_unique_id_configured()
                return self.async_create_entry(
                    title=user_input[CONF_NAME],
                    data={},
                    options=dict(user_input),
                )

        return self.async_show_form(
            step_id="user",
            data_schema=_build_shutter_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: ConfigEntry,
    ) -> RtsRollerShutterOptionsFlow:
        """Get the options flow for this handler."""
        return RtsRollerShutterOptionsFlow()


class RtsRollerShutterOptionsFlow(OptionsFlow):
    """Handle options flow for reconfiguring a shutter.

    The id cannot change: it keys the stored target.
    """

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Edit the remote and the travel durations."""
        current = dict(self.config_entry.options)
        errors: dict[str, str] = {}
        if user_input is not None:
            data = {**current, **user_input}
            errors = _validate_input(data)
            if not errors:
                return self.async_create_entry(title="", data=data)
            current = data

        return self.async_show_form(
            step_id="init",
            data_schema=_build_shutter_schema(current, include_id=False),
            errors=errors,
        )
