"""Constants for the Magic Home LED controller protocol."""

DEFAULT_PORT = 5577

# The status reply always has this size.
STATUS_RESPONSE_LENGTH = 14

DEFAULT_RECEIVE_TIMEOUT = 1.0
DEFAULT_AUTO_REFRESH_INTERVAL = 5.0

# Opcodes
CMD_POWER = 0x71
CMD_SET_COLOR = 0x41
CMD_STATUS_QUERY = (0x81, 0x8A, 0x8B)

POWER_ON = 0x23
POWER_OFF = 0x24

# Trailing byte of power and color commands.
TERMINATOR_LOCAL = 0x0F

# Mode codes reported at offset 3 of the status reply.
MODE_CODES_COLOR = frozenset({0x61, 0x62, 0x41})
MODE_CODES_CUSTOM = frozenset({0x60})
MODE_CODES_PRESET = frozenset(range(0x2A, 0x30))
PRESET_FALLBACK_MIN = 25
PRESET_FALLBACK_MAX = 38

# Environment variables read by the entry points.
ENV_HOST = "MAGICHOME_HOST"
ENV_PORT = "MAGICHOME_PORT"
ENV_CHECKSUM = "MAGICHOME_CHECKSUM"
ENV_TIMEOUT = "MAGICHOME_TIMEOUT"
ENV_AUTO_REFRESH = "MAGICHOME_AUTO_REFRESH"
ENV_AUTO_REFRESH_INTERVAL = "MAGICHOME_AUTO_REFRESH_INTERVAL"
ENV_CALIBRATION_DELAY = "MAGICHOME_CALIBRATION_DELAY"
ENV_DEBUG = "MAGICHOME_DEBUG"
