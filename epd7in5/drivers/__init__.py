"""
Display driver layer.
"""
from .state import DisplayState, DriverState, RefreshMode
from .base import DisplayDriver
from .epd7in5 import EPD7in5

__all__ = [
    "DisplayState",
    "DriverState",
    "RefreshMode",
    "DisplayDriver",
    "EPD7in5",
]
