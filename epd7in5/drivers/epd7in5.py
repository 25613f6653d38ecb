"""
EPD7in5 - E-Paper Display Driver
================================
Driver for the Waveshare 7.5" 800x480 black/white e-paper panel
(UC8179-class controller).

Architecture
------------
This driver uses a layered architecture:
  - SPIDevice: Byte framing, reset pulse, BUSY polling
  - DriverState: Operating mode and precondition checks
  - sequences: Register tables per refresh mode
  - EPD7in5: Lifecycle sequencing

The panel is fed through DATA START 1 with one 4-bit code per pixel,
so every device buffer byte turns into 4 bytes on the wire.
"""
import logging
import time

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from PIL.Image import Image
        from ..hardware.spi import SPIDevice
except ImportError:
    pass

from ..buffer.convert import WIDTH as _PANEL_WIDTH, HEIGHT as _PANEL_HEIGHT, convert, expand, buffer_size
from ..errors import BufferContentError, BufferSizeError
from .base import DisplayDriver
from .state import DriverState, RefreshMode
from . import commands as CMD
from . import sequences as SEQ

logger = logging.getLogger(__name__)

_UNSET = object()


class EPD7in5(DisplayDriver):
    """
    7.5" E-Paper Display Driver.

    Supports full, fast and partial refresh modes and deep sleep.

    Example:
        from epd7in5 import EPD7in5, RefreshMode

        with EPD7in5.create() as epd:
            epd.init(RefreshMode.FULL)
            epd.clear()
            epd.display(epd.convert(image))
            epd.sleep()
    """
    WIDTH = _PANEL_WIDTH
    HEIGHT = _PANEL_HEIGHT
    BUFFER_SIZE = buffer_size(WIDTH, HEIGHT)

    def __init__(self, spi: "SPIDevice", timeout=_UNSET):
        """
        Initialize the driver.

        Args:
            spi: Configured SPIDevice instance, owned by this driver
            timeout: Busy-wait limit in seconds for every operation.
                Defaults to the per-operation limits in sequences;
                None waits forever.
        """
        self._spi = spi
        self._state = DriverState()
        self._timeout = timeout

    @classmethod
    def create(cls, timeout=_UNSET, **pins) -> "EPD7in5":
        """
        Factory method that claims the board hardware.

        Args:
            timeout: See __init__
            **pins: Forwarded to SPIDevice.from_board (dc_pin, cs_pin, ...)

        Returns:
            Configured EPD7in5 instance
        """
        from ..hardware.spi import SPIDevice
        spi = SPIDevice.from_board(**pins)
        return cls(spi, timeout=timeout)

    def deinit(self):
        """Put a ready panel to sleep, then release hardware."""
        try:
            if self._state.is_ready:
                self.sleep()
        finally:
            self._spi.deinit()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.deinit()
        return False

    # =========================================================================
    # Helpers
    # =========================================================================

    def _timeout_for(self, default: float):
        return default if self._timeout is _UNSET else self._timeout

    def _wait(self, default_timeout: float, operation: str) -> float:
        return self._spi.wait_until_idle(
            timeout=self._timeout_for(default_timeout),
            operation=operation,
        )

    def _send_table(self, table):
        for cmd, data in table:
            self._spi.write_command(cmd, data)

    def _power_on(self):
        self._spi.send_command(CMD.CMD_POWER_ON)
        time.sleep(SEQ.POWER_ON_SETTLE_MS / 1000)
        self._wait(SEQ.TIMEOUT_POWER, "power on")

    def _refresh(self) -> float:
        """Trigger DISPLAY REFRESH and wait for the waveform to finish."""
        self._spi.send_command(CMD.CMD_DISPLAY_REFRESH)
        time.sleep(SEQ.REFRESH_SETTLE_MS / 1000)
        t = self._wait(SEQ.TIMEOUT_REFRESH, "display refresh")
        self._state.on_refresh_complete()
        return t

    def _check_buffer(self, data) -> bytes:
        """Return data as bytes, rejecting bad values and wrong sizes."""
        if isinstance(data, int):
            raise BufferContentError("Buffer must be a byte sequence, not an int")
        try:
            data = bytes(data)
        except (TypeError, ValueError) as exc:
            raise BufferContentError(f"Buffer must hold byte values: {exc}") from exc
        if len(data) != self.BUFFER_SIZE:
            raise BufferSizeError(
                f"Buffer must be {self.BUFFER_SIZE} bytes, got {len(data)}"
            )
        return data

    # =========================================================================
    # Initialization
    # =========================================================================

    def reset(self):
        """
        Hardware reset pulse.

        Also wakes the panel from deep sleep. Registers return to POR
        values, so init() must follow before clear() or display().
        """
        try:
            self._spi.hardware_reset()
        finally:
            self._state.on_reset()

    def wake(self):
        """Wake from deep sleep."""
        self.reset()

    def init(self, mode: int = RefreshMode.FULL):
        """
        Reset and program the panel for a refresh mode.

        Args:
            mode: RefreshMode.FULL, FAST or PARTIAL

        Raises:
            ValueError: If mode is unknown
        """
        try:
            pre, post = SEQ.INIT_SEQUENCES[mode]
        except KeyError:
            raise ValueError(f"unknown refresh mode: {mode!r}") from None

        logger.info("e-paper init (%s)", RefreshMode.name(mode))
        self.reset()
        try:
            self._send_table(pre)
            self._power_on()
            self._send_table(post)
        except BaseException:
            self._state.on_fault()
            raise
        self._state.on_init_complete(mode)

    def init_full(self):
        self.init(RefreshMode.FULL)

    def init_fast(self):
        self.init(RefreshMode.FAST)

    def init_partial(self):
        self.init(RefreshMode.PARTIAL)

    # =========================================================================
    # Public API
    # =========================================================================

    def clear(self) -> float:
        """
        Clear display to white with a refresh.

        Returns:
            Refresh time in seconds

        Raises:
            NotReadyError: If not initialized
        """
        self._state.require_ready("clear")
        try:
            self._spi.send_command(CMD.CMD_DATA_START_1)
            for _ in range(self.BUFFER_SIZE * SEQ.WIRE_BYTES_PER_BYTE):
                self._spi.send_data(SEQ.CLEAR_FILL)
            return self._refresh()
        except BaseException:
            self._state.on_fault()
            raise

    def display(self, data: bytes) -> float:
        """
        Display a device buffer.

        Args:
            data: Buffer from convert(), BUFFER_SIZE bytes, 1 = white

        Returns:
            Refresh time in seconds

        Raises:
            NotReadyError: If not initialized
            BufferSizeError: If buffer size is incorrect
            BufferContentError: If a value is not a byte (0-255)
        """
        self._state.require_ready("display")
        data = self._check_buffer(data)

        logger.info("e-paper display start")
        try:
            self._spi.send_command(CMD.CMD_DATA_START_1)
            for value in data:
                for wire in expand(value):
                    self._spi.send_data(wire)
            logger.debug("e-paper frame sent")
            t = self._refresh()
        except BaseException:
            self._state.on_fault()
            raise
        logger.info("e-paper display done in %.2fs", t)
        return t

    def convert(self, image: "Image") -> bytearray:
        """Convert an image into a device buffer for this panel."""
        return convert(image, self.WIDTH, self.HEIGHT)

    # =========================================================================
    # Power Management
    # =========================================================================

    def sleep(self):
        """
        Power off and enter deep sleep.

        Only reset() (and a following init()) brings the panel back.
        """
        if self._state.is_sleeping:
            return

        logger.info("e-paper sleep")
        try:
            self._spi.send_command(CMD.CMD_POWER_OFF)
            self._wait(SEQ.TIMEOUT_POWER, "power off")
            self._spi.write_command(CMD.CMD_DEEP_SLEEP, SEQ.DEEP_SLEEP_CHECK)
        except BaseException:
            self._state.on_fault()
            raise
        self._state.on_sleep()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def mode(self) -> int:
        """Current DisplayState value."""
        return self._state.state

    @property
    def is_ready(self) -> bool:
        return self._state.is_ready

    @property
    def is_sleeping(self) -> bool:
        return self._state.is_sleeping
