"""
EPD 7.5" Driver Library
=======================
Driver for the Waveshare 7.5" 800x480 black/white e-paper display,
running on Linux boards through the CircuitPython HAL (Adafruit Blinka).

Architecture
------------
The library is organized into layers:

    EPD7in5         Lifecycle: reset, init, clear, display, sleep
       │
       ├── DriverState    Operating mode + precondition checks
       │
       ├── sequences      Register tables per refresh mode
       │
       └── SPIDevice      Byte framing, reset pulse, BUSY polling

    convert         Pillow image -> packed device buffer (independent)

Quick Start
-----------
    from PIL import Image
    from epd7in5 import EPD7in5, RefreshMode

    with EPD7in5.create() as epd:
        epd.init(RefreshMode.FULL)
        epd.display(epd.convert(Image.open("photo.png")))

Advanced Usage
--------------
    # Dependency injection for testing or custom wiring
    from epd7in5.hardware.spi import SPIDevice
    from epd7in5.drivers.epd7in5 import EPD7in5

    spi = SPIDevice.from_board(dc_pin="D22", busy_pin="D27")
    epd = EPD7in5(spi, timeout=60.0)

Module Structure
----------------
    epd7in5/
    ├── errors.py            Exception hierarchy
    ├── buffer/
    │   └── convert.py       Image conversion, nibble expansion
    ├── drivers/
    │   ├── base.py          DisplayDriver protocol
    │   ├── epd7in5.py       7.5" panel driver
    │   ├── commands.py      Command constants
    │   ├── sequences.py     Init tables, timing, timeouts
    │   └── state.py         Driver state machine
    └── hardware/
        └── spi.py           SPI communication layer
"""

# Buffer layer
from .buffer import convert, expand, buffer_size

# Hardware layer
from .hardware import SPIDevice

# Driver layer
from .drivers import EPD7in5, DisplayDriver, DisplayState, DriverState, RefreshMode

# Errors
from .errors import (
    EPDError,
    TransportError,
    ConfigurationError,
    ProtocolPreconditionError,
    NotReadyError,
    BufferSizeError,
    BufferContentError,
    BusyTimeoutError,
)

__all__ = [
    # Driver
    "EPD7in5",
    "DisplayDriver",
    "DisplayState",
    "DriverState",
    "RefreshMode",
    # Hardware
    "SPIDevice",
    # Buffer
    "convert",
    "expand",
    "buffer_size",
    # Errors
    "EPDError",
    "TransportError",
    "ConfigurationError",
    "ProtocolPreconditionError",
    "NotReadyError",
    "BufferSizeError",
    "BufferContentError",
    "BusyTimeoutError",
]

__version__ = "2.0.0"
