import pytest

from epd7in5.drivers.state import DisplayState, DriverState, RefreshMode
from epd7in5.errors import NotReadyError, ProtocolPreconditionError


def test_starts_uninitialized():
    state = DriverState()
    assert state.state == DisplayState.UNINITIALIZED
    assert not state.is_ready
    assert not state.is_sleeping


@pytest.mark.parametrize("mode, expected", [
    (RefreshMode.FULL, DisplayState.FULL_READY),
    (RefreshMode.FAST, DisplayState.FAST_READY),
    (RefreshMode.PARTIAL, DisplayState.PARTIAL_READY),
])
def test_init_reaches_ready_state(mode, expected):
    state = DriverState()
    state.on_init_complete(mode)
    assert state.state == expected
    assert state.is_ready


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        DriverState().on_init_complete(7)


def test_sleep_and_reset():
    state = DriverState()
    state.on_init_complete(RefreshMode.FULL)
    state.on_sleep()
    assert state.is_sleeping
    assert not state.is_ready
    state.on_reset()
    assert state.state == DisplayState.UNINITIALIZED


def test_fault_drops_to_uninitialized():
    state = DriverState()
    state.on_init_complete(RefreshMode.FAST)
    state.on_fault()
    assert state.state == DisplayState.UNINITIALIZED


def test_refresh_count_restarts_on_init():
    state = DriverState()
    state.on_init_complete(RefreshMode.FULL)
    state.on_refresh_complete()
    state.on_refresh_complete()
    assert state.refresh_count == 2
    state.on_init_complete(RefreshMode.PARTIAL)
    assert state.refresh_count == 0


@pytest.mark.parametrize("setup", ["fresh", "sleeping"])
def test_require_ready_outside_ready_states(setup):
    state = DriverState()
    if setup == "sleeping":
        state.on_init_complete(RefreshMode.FULL)
        state.on_sleep()
    with pytest.raises(NotReadyError, match="display\\(\\)"):
        state.require_ready("display")


def test_not_ready_error_hierarchy():
    assert issubclass(NotReadyError, ProtocolPreconditionError)
    assert issubclass(NotReadyError, RuntimeError)


def test_names():
    assert DisplayState.name(DisplayState.PARTIAL_READY) == "PARTIAL_READY"
    assert DisplayState.name(42) == "UNKNOWN(42)"
    assert RefreshMode.name(RefreshMode.FAST) == "FAST"
    assert "SLEEPING" in repr(DriverState(DisplayState.SLEEPING))
