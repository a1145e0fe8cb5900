"""Simulated-position cover for an RTS roller shutter."""

import logging

from homeassistant.components.cover import (
    ATTR_POSITION,
    CoverDeviceClass,
    CoverEntity,
    CoverEntityFeature,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.event import async_track_time_interval

from .command_port import CommandPort, RtsCommand
from .const import (
    ATTR_MOTION_STATE,
    ATTR_TARGET_POSITION,
    CONF_CLOSE_DURATION_MS,
    CONF_LOCKING_DURATION_MS,
    CONF_OPEN_DURATION_MS,
    DOMAIN,
    POSITION_CLOSED,
    POSITION_OPEN,
    TICK_INTERVAL,
)
from .helpers import shutter_device_info
from .motion_reconciler import reconcile
from .position_estimator import advance, ticks_to_target
from .shutter_state import MotionState, ShutterConfig, ShutterState, is_valid_position
from .store import TargetStore

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the shutter cover from a config entry."""
    runtime = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [
            RtsRollerShutter(
                runtime.config,
                runtime.command_port,
                runtime.store,
                runtime.initial_target,
            )
        ]
    )


class RtsRollerShutter(CoverEntity):
    """Roller shutter whose position is simulated from travel durations.

    Owns the shutter state. Two things mutate it: the 100 ms ticker, which
    moves the position toward the target, and target requests, which pick
    the direction and the RF command. Both run as plain callbacks on the
    event loop, so neither can interrupt the other.
    """

    def __init__(
        self,
        config: ShutterConfig,
        command_port: CommandPort,
        store: TargetStore,
        initial_target: float,
    ):
        """Initialize the shutter, settled at its last known target."""
        self._config = config
        self._command_port = command_port
        self._store = store
        self._state = ShutterState.settled_at(initial_target)
        self._unsubscribe_ticker = None

        if config.name:
            self._name = config.name
        else:
            self._name = config.shutter_id

    def _log(self, msg, *args):
        """Log a debug message prefixed with the entity ID."""
        _LOGGER.debug("(%s) " + msg, self.entity_id, *args)

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    async def async_added_to_hass(self):
        """Start the position ticker."""
        self._log(
            "async_added_to_hass :: settled at %s", self._state.current_position
        )
        self._unsubscribe_ticker = async_track_time_interval(
            self.hass, self._tick_hook, TICK_INTERVAL
        )

    async def async_will_remove_from_hass(self):
        """Stop the position ticker."""
        if self._unsubscribe_ticker is not None:
            self._unsubscribe_ticker()
            self._unsubscribe_ticker = None

    # -----------------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------------

    @property
    def name(self):
        """Return the name of the cover."""
        return self._name

    @property
    def unique_id(self):
        """Return the unique id."""
        return f"{DOMAIN}_{self._config.shutter_id}"

    @property
    def device_info(self) -> DeviceInfo:
        return shutter_device_info(self._config)

    @property
    def device_class(self):
        """Return the device class of the cover."""
        return CoverDeviceClass.SHUTTER

    @property
    def assumed_state(self):
        """Return True because the motor never reports its position."""
        return True

    @property
    def supported_features(self) -> CoverEntityFeature:
        """Flag supported features."""
        return (
            CoverEntityFeature.OPEN
            | CoverEntityFeature.CLOSE
            | CoverEntityFeature.STOP
            | CoverEntityFeature.SET_POSITION
        )

    @property
    def current_position(self) -> float:
        """Return the simulated position, unrounded."""
        return self._state.current_position

    @property
    def target_position(self) -> float:
        """Return the last requested position."""
        return self._state.target_position

    @property
    def motion_state(self) -> MotionState:
        """Return the believed direction of travel."""
        return self._state.motion_state

    @property
    def current_cover_position(self) -> int:
        """Return the current position of the cover."""
        return int(round(self._state.current_position))

    @property
    def is_opening(self):
        """Return if the cover is opening or not."""
        return self._state.motion_state == MotionState.OPENING

    @property
    def is_closing(self):
        """Return if the cover is closing or not."""
        return self._state.motion_state == MotionState.CLOSING

    @property
    def is_closed(self):
        """Return if the cover is closed."""
        return self._state.current_position == POSITION_CLOSED

    @property
    def extra_state_attributes(self):
        """Return the device state attributes."""
        return {
            ATTR_TARGET_POSITION: self._state.target_position,
            ATTR_MOTION_STATE: self._state.motion_state.value,
            CONF_OPEN_DURATION_MS: self._config.open_duration_ms,
            CONF_CLOSE_DURATION_MS: self._config.close_duration_ms,
            CONF_LOCKING_DURATION_MS: self._config.locking_duration_ms,
        }

    # -----------------------------------------------------------------------
    # Public HA service handlers
    # -----------------------------------------------------------------------

    async def async_open_cover(self, **kwargs):
        """Open the cover fully."""
        self._log("async_open_cover")
        self.set_target_position(POSITION_OPEN)

    async def async_close_cover(self, **kwargs):
        """Close the cover fully."""
        self._log("async_close_cover")
        self.set_target_position(POSITION_CLOSED)

    async def async_stop_cover(self, **kwargs):
        """Stop the cover where it currently is."""
        self._log("async_stop_cover")
        self.set_target_position(self._state.current_position)

    async def async_set_cover_position(self, **kwargs):
        """Move the cover to a specific position."""
        if ATTR_POSITION in kwargs:
            position = kwargs[ATTR_POSITION]
            self._log("async_set_cover_position: %s", position)
            self.set_target_position(position)

    # -----------------------------------------------------------------------
    # State machine
    # -----------------------------------------------------------------------

    @callback
    def set_target_position(self, value):
        """Adopt a new target and send the RF command it requires, if any.

        The target is kept even if the command or the save fails.
        """
        if not is_valid_position(value):
            raise HomeAssistantError(
                f"Target position must be between {POSITION_CLOSED} and "
                f"{POSITION_OPEN}, got {value!r}"
            )

        outcome = reconcile(self._state, value)
        self._state.target_position = value
        self._state.motion_state = outcome.motion_state
        if _LOGGER.isEnabledFor(logging.DEBUG):
            self._log(
                "set_target_position :: current: %s, target: %s, %s, command: %s, eta: %d ticks",
                self._state.current_position,
                value,
                outcome.motion_state.name,
                outcome.command.value if outcome.command else None,
                ticks_to_target(self._state, self._config),
            )

        if outcome.command is not None:
            self._command_port.send(outcome.command)
        self._store.schedule_save(value)
        self.async_write_ha_state()

    @callback
    def tick(self):
        """Advance the simulated position by one tick."""
        if self._state.is_at_target():
            return

        self._state.current_position = advance(self._state, self._config)
        if self._state.is_at_target():
            self._log("tick :: target %s reached", self._state.target_position)
            self._state.motion_state = MotionState.IDLE
            # The motor stops on its own at the hard endpoints.
            if not self._state.is_at_endpoint():
                self._command_port.send(RtsCommand.STOP_OR_PAIR)
        self.async_write_ha_state()

    @callback
    def _tick_hook(self, now):
        """Call for the ticker."""
        self.tick()
