"""
SPIDevice - Low-Level SPI Communication for the 7.5" EPD
========================================================
Handles all direct hardware interaction: SPI bus, GPIO pins, timing.

This class encapsulates:
- SPI bus configuration (5MHz, mode 0, configured once)
- GPIO pin management (DC, CS, RST, BUSY)
- Byte framing: every command and data byte gets its own CS window
- Hardware reset pulse
- Busy-wait polling with an optional deadline

Separating this from the display driver allows:
- Easier testing (fake pins and bus record a line trace)
- Cleaner driver code (register tables only)
"""
import logging
import time

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from digitalio import DigitalInOut
        from busio import SPI
except ImportError:
    pass

from ..errors import BusyTimeoutError, ConfigurationError, TransportError

logger = logging.getLogger(__name__)

# HAL failures that abort a transfer
_HAL_ERRORS = (OSError, RuntimeError)


class SPIDevice:
    """
    Byte-level command/data transport for UC8179-class EPD controllers.

    DC selects command (low) or data (high). CS is driven by hand, low
    for exactly one byte at a time. BUSY reads low while the panel is
    working and high once it is idle.

    Attributes:
        DEFAULT_BAUDRATE: SPI clock speed (5MHz)
        DEFAULT_POLL_MS: Busy line poll interval
        DEFAULT_PINS: Waveshare HAT wiring on a Raspberry Pi (BCM names)
    """
    DEFAULT_BAUDRATE = 5_000_000
    DEFAULT_POLL_MS = 5

    DEFAULT_PINS = {
        "dc_pin": "D25",
        "cs_pin": "D8",
        "rst_pin": "D17",
        "busy_pin": "D24",
    }

    # Reset pulse timing (ms): high, low, high
    RESET_HOLD_MS = 20
    RESET_PULSE_MS = 2

    def __init__(
        self,
        spi: "SPI",
        cs: "DigitalInOut",
        dc: "DigitalInOut",
        rst: "DigitalInOut",
        busy: "DigitalInOut",
    ):
        """
        Wrap already-claimed hardware.

        Args:
            spi: Configured SPI bus instance
            cs: Chip Select pin (active low)
            dc: Data/Command pin (low=command, high=data)
            rst: Reset pin (active low)
            busy: Busy status pin (low while busy)
        """
        self.spi = spi
        self.cs = cs
        self.dc = dc
        self.rst = rst
        self.busy = busy

        self._byte_buf = bytearray(1)

    @staticmethod
    def _resolve_pin(board, pin, role: str):
        if not isinstance(pin, str):
            return pin
        found = getattr(board, pin, None)
        if found is None:
            raise ConfigurationError(f"{role} pin {pin!r} not found on this board")
        return found

    @classmethod
    def from_board(
        cls,
        dc_pin=None,
        cs_pin=None,
        rst_pin=None,
        busy_pin=None,
        sck_pin=None,
        mosi_pin=None,
        baudrate: int = DEFAULT_BAUDRATE,
    ) -> "SPIDevice":
        """
        Create SPIDevice using board pin definitions.

        Pins may be given as board attribute names ("D25") or pin objects.
        Unset pins fall back to DEFAULT_PINS; the bus defaults to
        board.SCK / board.MOSI.

        Every resource claimed before a failure is released again, so a
        failed call leaves nothing held.

        Returns:
            Configured SPIDevice instance

        Raises:
            ConfigurationError: If a pin cannot be found or claimed
        """
        import board
        import busio
        import digitalio

        dc_pin = cls._resolve_pin(board, dc_pin or cls.DEFAULT_PINS["dc_pin"], "DC")
        cs_pin = cls._resolve_pin(board, cs_pin or cls.DEFAULT_PINS["cs_pin"], "CS")
        rst_pin = cls._resolve_pin(board, rst_pin or cls.DEFAULT_PINS["rst_pin"], "RST")
        busy_pin = cls._resolve_pin(board, busy_pin or cls.DEFAULT_PINS["busy_pin"], "BUSY")
        sck_pin = cls._resolve_pin(board, sck_pin or "SCK", "SCK")
        mosi_pin = cls._resolve_pin(board, mosi_pin or "MOSI", "MOSI")

        claimed = []
        try:
            dc = digitalio.DigitalInOut(dc_pin)
            claimed.append(dc)
            dc.switch_to_output(value=False)

            cs = digitalio.DigitalInOut(cs_pin)
            claimed.append(cs)
            cs.switch_to_output(value=True)  # Deselected (active low)

            rst = digitalio.DigitalInOut(rst_pin)
            claimed.append(rst)
            rst.switch_to_output(value=False)

            busy = digitalio.DigitalInOut(busy_pin)
            claimed.append(busy)
            busy.switch_to_input(pull=digitalio.Pull.DOWN)

            spi = busio.SPI(sck_pin, MOSI=mosi_pin)
            claimed.append(spi)
            start = time.monotonic()
            while not spi.try_lock():
                if time.monotonic() - start > 1.0:
                    raise ConfigurationError("SPI lock timeout during initialization")
            try:
                spi.configure(baudrate=baudrate, phase=0, polarity=0)
            finally:
                spi.unlock()
        except ConfigurationError:
            cls._release(claimed)
            raise
        except (*_HAL_ERRORS, ValueError) as exc:
            cls._release(claimed)
            raise ConfigurationError(f"failed to claim EPD hardware: {exc}") from exc

        logger.debug("EPD hardware claimed at %d Hz", baudrate)
        return cls(spi, cs, dc, rst, busy)

    @staticmethod
    def _release(resources):
        for res in reversed(resources):
            try:
                res.deinit()
            except _HAL_ERRORS:
                logger.warning("failed to release %r", res, exc_info=True)

    def deinit(self):
        """Release all hardware resources."""
        self._release([self.dc, self.cs, self.rst, self.busy, self.spi])

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.deinit()
        return False

    # =========================================================================
    # Framing
    # =========================================================================

    def _exchange(self, value: int, is_data: bool):
        """Frame a single byte: DC, CS low, one SPI byte, CS high."""
        while not self.spi.try_lock():
            pass
        try:
            self.dc.value = is_data
            self.cs.value = False
            self._byte_buf[0] = value
            self.spi.write(self._byte_buf)
            self.cs.value = True
        except _HAL_ERRORS as exc:
            self._deselect()
            kind = "data" if is_data else "command"
            raise TransportError(f"failed to send {kind} byte 0x{value:02X}") from exc
        finally:
            self.spi.unlock()

    def _deselect(self):
        """Drive CS high after a failed transfer."""
        try:
            self.cs.value = True
        except _HAL_ERRORS:
            logger.warning("failed to release CS after transfer error", exc_info=True)

    def send_command(self, cmd: int):
        """Send one command byte (DC low)."""
        self._exchange(cmd, is_data=False)

    def send_data(self, data: int):
        """Send one data byte (DC high)."""
        self._exchange(data, is_data=True)

    def write_command(self, cmd: int, data=None):
        """
        Send a command followed by its data bytes.

        Args:
            cmd: Command byte (0x00-0xFF)
            data: None, int, or any iterable of ints (tuple, bytes, ...)
        """
        self.send_command(cmd)
        if data is None:
            return
        if isinstance(data, int):
            data = (data,)
        for b in data:
            self.send_data(b)

    # =========================================================================
    # Timing
    # =========================================================================

    def hardware_reset(self):
        """
        Pulse RST: high, low, high.

        This is the only way to wake from deep sleep. After reset,
        all registers return to power-on-reset (POR) values.
        """
        try:
            self.rst.value = True
            time.sleep(self.RESET_HOLD_MS / 1000)
            self.rst.value = False
            time.sleep(self.RESET_PULSE_MS / 1000)
            self.rst.value = True
            time.sleep(self.RESET_HOLD_MS / 1000)
        except _HAL_ERRORS as exc:
            raise TransportError("failed to drive RST line") from exc

    def wait_until_idle(
        self,
        timeout: float | None = None,
        poll_interval_ms: int = DEFAULT_POLL_MS,
        operation: str | None = None,
    ) -> float:
        """
        Wait for the display to finish processing (BUSY goes high).

        Args:
            timeout: Maximum wait time in seconds (None = wait forever)
            poll_interval_ms: Milliseconds between polls
            operation: Optional operation name for logs and errors

        Returns:
            Time spent waiting in seconds

        Raises:
            BusyTimeoutError: If timeout exceeded
            TransportError: If the BUSY line cannot be read
        """
        logger.debug("e-paper busy%s", f" ({operation})" if operation else "")
        start = time.monotonic()
        while self.is_busy:
            if timeout is not None and time.monotonic() - start > timeout:
                op_str = f" during {operation}" if operation else ""
                raise BusyTimeoutError(f"EPD timeout{op_str} (>{timeout}s)")
            time.sleep(poll_interval_ms / 1000)
        time.sleep(poll_interval_ms / 1000)
        logger.debug("e-paper busy release")
        return time.monotonic() - start

    @property
    def is_busy(self) -> bool:
        """Check if display is currently busy (BUSY low)."""
        try:
            return not self.busy.value
        except _HAL_ERRORS as exc:
            raise TransportError("failed to read BUSY line") from exc
