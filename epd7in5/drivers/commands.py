"""
UC8179 Command Constants
========================
Register addresses and command bytes for the 7.5" 800x480 EPD controller.

Organized by functional category for easier navigation.
Values are fixed by the panel datasheet.
"""

# =============================================================================
# Panel Configuration
# =============================================================================

CMD_PANEL_SETTING = 0x00      # Panel Setting - LUT source, scan direction
CMD_RESOLUTION = 0x61         # TCON Resolution - source/gate window (800x480)
CMD_DUAL_SPI = 0x15           # Dual SPI mode - 0x00 disables MM input
CMD_TCON = 0x60               # TCON Setting - source/gate non-overlap period
CMD_VCOM_INTERVAL = 0x50      # VCOM and Data Interval Setting

# =============================================================================
# Power Control
# =============================================================================

CMD_POWER_SETTING = 0x01      # Power Setting - VGH/VGL/VDH/VDL rails
CMD_POWER_OFF = 0x02          # Power OFF
CMD_POWER_OFF_SEQ = 0x03      # Power OFF Sequence Setting
CMD_POWER_ON = 0x04           # Power ON - BUSY low until rails settle
CMD_BOOSTER_SOFT_START = 0x06 # Booster Soft Start - charge pump phases
CMD_DEEP_SLEEP = 0x07         # Deep Sleep - requires check code 0xA5

# =============================================================================
# Display Update
# =============================================================================

CMD_DATA_START_1 = 0x10       # Data Start Transmission 1 - pixel stream
CMD_DISPLAY_REFRESH = 0x12    # Display Refresh - drives the waveform

# =============================================================================
# Cascade / Mode Select
# =============================================================================

CMD_CASCADE = 0xE0            # Cascade Setting - 0x02 enables temp override
CMD_FORCE_TEMP = 0xE5         # Force Temperature - selects fast/partial LUT
