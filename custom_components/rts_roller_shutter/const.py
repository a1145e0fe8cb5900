"""Constants for the rts_roller_shutter integration."""

from datetime import timedelta

DOMAIN = "rts_roller_shutter"

CONF_OPEN_DURATION_MS = "open_duration_ms"
CONF_CLOSE_DURATION_MS = "close_duration_ms"
CONF_LOCKING_DURATION_MS = "locking_duration_ms"
CONF_PROG = "prog"
CONF_REMOTE_ENTITY_ID = "remote_entity_id"
CONF_REMOTE_DEVICE = "remote_device"

ATTR_TARGET_POSITION = "target_position"
ATTR_MOTION_STATE = "motion_state"

POSITION_CLOSED = 0
POSITION_OPEN = 100
DEFAULT_TARGET_POSITION = POSITION_OPEN

TICK_INTERVAL_MS = 100
TICK_INTERVAL = timedelta(milliseconds=TICK_INTERVAL_MS)

# Seconds before the pair switch flips back to off
PAIR_RESET_DELAY = 0.5

STORAGE_VERSION = 1
