"""
DisplayDriver - Abstract Base for EPD Drivers
==============================================
Defines the lifecycle every panel driver in this package exposes.

High-level code (image loaders, schedulers) can drive any panel
through this interface without knowing its register tables.

Note: Using duck typing instead of ABC, matching CircuitPython builds.
"""

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from PIL.Image import Image
        from .state import DriverState
except ImportError:
    pass


class DisplayDriver:
    """
    Abstract base class for e-paper display drivers.

    Properties:
        WIDTH: Physical display width in pixels
        HEIGHT: Physical display height in pixels
        BUFFER_SIZE: Required buffer size in bytes
        state: Current DriverState
    """

    # Subclasses must define these
    WIDTH: int = 0
    HEIGHT: int = 0
    BUFFER_SIZE: int = 0

    def reset(self):
        """Pulse the reset line. Leaves the panel uninitialized."""
        raise NotImplementedError

    def init(self, mode: int = 0):
        """
        Program the panel for a RefreshMode.

        Must be called after power-on, reset or sleep.
        """
        raise NotImplementedError

    def clear(self):
        """Clear display to white with a refresh."""
        raise NotImplementedError

    def display(self, data: bytes) -> float:
        """
        Display a device buffer.

        Args:
            data: BUFFER_SIZE bytes, 1 bit per pixel

        Returns:
            Refresh time in seconds
        """
        raise NotImplementedError

    def convert(self, image: "Image") -> bytearray:
        """Convert an image into a device buffer for this panel."""
        raise NotImplementedError

    def sleep(self):
        """Enter deep sleep mode."""
        raise NotImplementedError

    def wake(self):
        """Wake from deep sleep (performs hardware reset)."""
        raise NotImplementedError

    def deinit(self):
        """Release hardware resources."""
        raise NotImplementedError

    # Properties

    @property
    def state(self) -> "DriverState":
        """Current driver state."""
        raise NotImplementedError

    @property
    def is_sleeping(self) -> bool:
        """Check if display is in deep sleep."""
        raise NotImplementedError
