"""
UC8179 Init Sequences & Configuration Constants
===============================================
Register tables for each initialization mode, timing, busy timeouts,
and the pixel nibble codes used on the wire.

Every init sequence runs as:

    hardware reset
    -> PRE table
    -> POWER ON, settle, wait BUSY
    -> POST table

Each table is a tuple of (command, data) pairs, data being a tuple of
bytes or None. Swapping a table is enough to support another panel
revision.
"""
from . import commands as CMD
from .state import RefreshMode
from ..buffer.convert import NIBBLE_BLACK, NIBBLE_WHITE

# =============================================================================
# Full Refresh (OTP waveform)
# =============================================================================

INIT_FULL_PRE = (
    (CMD.CMD_POWER_SETTING, (0x07, 0x07, 0x3F, 0x3F)),  # VGH=20V VGL=-20V VDH=15V VDL=-15V
    (CMD.CMD_BOOSTER_SOFT_START, (0x17, 0x17, 0x28, 0x17)),
)

INIT_FULL_POST = (
    (CMD.CMD_PANEL_SETTING, (0x1F,)),                 # KW mode, LUT from OTP
    (CMD.CMD_RESOLUTION, (0x03, 0x20, 0x01, 0xE0)),   # 800 x 480
    (CMD.CMD_DUAL_SPI, (0x00,)),
    (CMD.CMD_VCOM_INTERVAL, (0x10, 0x07)),
    (CMD.CMD_TCON, (0x22,)),
)

# =============================================================================
# Fast Refresh
# =============================================================================

INIT_FAST_PRE = (
    (CMD.CMD_PANEL_SETTING, (0x1F,)),
    (CMD.CMD_VCOM_INTERVAL, (0x10, 0x07)),
)

INIT_FAST_POST = (
    (CMD.CMD_BOOSTER_SOFT_START, (0x27, 0x27, 0x18, 0x17)),
    (CMD.CMD_CASCADE, (0x02,)),
    (CMD.CMD_FORCE_TEMP, (0x5A,)),                    # fast LUT
)

# =============================================================================
# Partial Refresh
# =============================================================================

INIT_PARTIAL_PRE = (
    (CMD.CMD_PANEL_SETTING, (0x1F,)),
)

INIT_PARTIAL_POST = (
    (CMD.CMD_CASCADE, (0x02,)),
    (CMD.CMD_FORCE_TEMP, (0x6E,)),                    # partial LUT
)

INIT_SEQUENCES = {
    RefreshMode.FULL: (INIT_FULL_PRE, INIT_FULL_POST),
    RefreshMode.FAST: (INIT_FAST_PRE, INIT_FAST_POST),
    RefreshMode.PARTIAL: (INIT_PARTIAL_PRE, INIT_PARTIAL_POST),
}

# =============================================================================
# Deep Sleep (Register 0x07)
# =============================================================================

DEEP_SLEEP_CHECK = 0xA5       # Check code, anything else is ignored

# =============================================================================
# Settle Delays (milliseconds)
# =============================================================================

POWER_ON_SETTLE_MS = 100      # After POWER ON, before polling BUSY
REFRESH_SETTLE_MS = 100       # After DISPLAY REFRESH, before polling BUSY

# =============================================================================
# Busy Timeouts (seconds)
# =============================================================================

TIMEOUT_POWER = 5.0           # Power on/off: well under 1s typical
TIMEOUT_REFRESH = 30.0        # Full refresh: ~4s typical at 25°C

# =============================================================================
# Pixel Nibble Codes
# =============================================================================
# Each pixel is sent as a 4-bit code (see buffer.convert).

CLEAR_FILL = (NIBBLE_WHITE << 4) | NIBBLE_WHITE   # 0x33
WIRE_BYTES_PER_BYTE = 4       # 8 pixels -> 8 nibbles -> 4 wire bytes
