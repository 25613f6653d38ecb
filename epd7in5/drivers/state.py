"""
DisplayState - State Management for the EPD Driver
==================================================
Explicit operating-mode state owned by each driver instance.

Benefits over a module-level flag:
- Self-documenting state names
- Several drivers (or fakes in tests) never share state
- Precondition checks live next to the transitions they guard
"""

from ..errors import NotReadyError


class RefreshMode:
    """
    Refresh mode enumeration.

    Selects which init table programs the panel.
    """
    FULL = 0     # OTP waveform, best quality, slowest
    FAST = 1     # Fast LUT via forced temperature
    PARTIAL = 2  # Partial-update LUT via forced temperature

    _names = {
        0: "FULL",
        1: "FAST",
        2: "PARTIAL",
    }

    @classmethod
    def name(cls, mode: int) -> str:
        """Get human-readable mode name."""
        return cls._names.get(mode, f"UNKNOWN({mode})")


class DisplayState:
    """
    Display driver state enumeration.

    State Diagram:
        any --> UNINITIALIZED (after reset / wake / failed sequence)
        any --> FULL_READY | FAST_READY | PARTIAL_READY (after init)
        *_READY --> SLEEPING (after sleep())
        SLEEPING --> UNINITIALIZED (after reset)
    """
    UNINITIALIZED = 0  # Power-on or post-reset, registers at POR values
    FULL_READY = 1     # Programmed for full refresh
    FAST_READY = 2     # Programmed for fast refresh
    PARTIAL_READY = 3  # Programmed for partial refresh
    SLEEPING = 4       # Deep sleep, only a reset wakes the panel

    _names = {
        0: "UNINITIALIZED",
        1: "FULL_READY",
        2: "FAST_READY",
        3: "PARTIAL_READY",
        4: "SLEEPING",
    }

    READY_STATES = (FULL_READY, FAST_READY, PARTIAL_READY)

    @classmethod
    def name(cls, state: int) -> str:
        """Get human-readable state name."""
        return cls._names.get(state, f"UNKNOWN({state})")

    @classmethod
    def for_mode(cls, mode: int) -> int:
        """Ready state reached by initializing in the given RefreshMode."""
        try:
            return {
                RefreshMode.FULL: cls.FULL_READY,
                RefreshMode.FAST: cls.FAST_READY,
                RefreshMode.PARTIAL: cls.PARTIAL_READY,
            }[mode]
        except KeyError:
            raise ValueError(f"unknown refresh mode: {mode!r}") from None


class DriverState:
    """
    Driver state container.

    Attributes:
        state: Current DisplayState
        refresh_count: Display refreshes since the last init
    """

    def __init__(self, state: int = DisplayState.UNINITIALIZED):
        self.state = state
        self.refresh_count = 0

    def on_reset(self):
        """Transition after a hardware reset pulse."""
        self.state = DisplayState.UNINITIALIZED

    def on_init_complete(self, mode: int):
        """Transition after an init table has been sent."""
        self.state = DisplayState.for_mode(mode)
        self.refresh_count = 0

    def on_refresh_complete(self):
        self.refresh_count += 1

    def on_sleep(self):
        """Transition to sleep state."""
        self.state = DisplayState.SLEEPING

    def on_fault(self):
        """A sequence aborted half-way; the panel state is unknown."""
        self.state = DisplayState.UNINITIALIZED

    def require_ready(self, operation: str):
        """
        Raise NotReadyError unless in one of the ready states.

        Args:
            operation: Name used in the error message
        """
        if not self.is_ready:
            raise NotReadyError(
                f"{operation}() requires an initialized panel, "
                f"state is {DisplayState.name(self.state)}"
            )

    @property
    def is_sleeping(self) -> bool:
        return self.state == DisplayState.SLEEPING

    @property
    def is_ready(self) -> bool:
        return self.state in DisplayState.READY_STATES

    def __repr__(self) -> str:
        return (
            f"DriverState("
            f"state={DisplayState.name(self.state)}, "
            f"refreshes={self.refresh_count})"
        )
