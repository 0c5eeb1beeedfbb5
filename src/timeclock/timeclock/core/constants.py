"""Constants and defaults.

Note: Keep business numbers here to avoid magic numbers spread across code.
"""

# Organization default when no schedule applies: 8h minus a 60 minute break.
DEFAULT_EXPECTED_MINUTES = 420
DEFAULT_BREAK_MINUTES = 60

PUNCH_COOLDOWN_MINUTES = 3

MAX_FAILED_PIN_ATTEMPTS = 5
LOCKOUT_MINUTES = 2
PIN_LENGTH = 6

DEFAULT_UNIT = "Demo"
AUTO_DEVICE_NAME = "Auto device"

SELFIE_CONTENT_TYPE = "image/jpeg"

DEFAULT_LEDGER_LIMIT = 200
PUNCH_LOCK_TIMEOUT_SECONDS = 5
