"""
Shared fakes: digitalio-style pins and a busio-style SPI bus that record
every line change and byte into one trace, plus a fake clock.
"""
import pytest

from epd7in5.drivers.epd7in5 import EPD7in5
from epd7in5.hardware.spi import SPIDevice


class FakePin:
    """Output pin that records every level change as (name, value)."""

    def __init__(self, name, trace, value=False):
        self.name = name
        self._trace = trace
        self._value = value
        self.released = False
        self.fail_on_write = False

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, v):
        if self.fail_on_write:
            raise OSError(f"{self.name} write failed")
        self._value = bool(v)
        self._trace.append((self.name, bool(v)))

    def switch_to_output(self, value=False, **kwargs):
        self._value = value

    def switch_to_input(self, pull=None):
        self.pull = pull

    def deinit(self):
        self.released = True


class FakeBusyPin:
    """BUSY input: replays scripted levels, then reports idle (high)."""

    def __init__(self, levels=(), idle=True):
        self._levels = list(levels)
        self.idle = idle
        self.reads = 0
        self.released = False

    def script(self, *levels):
        self._levels.extend(levels)

    @property
    def value(self):
        self.reads += 1
        if self._levels:
            return self._levels.pop(0)
        return self.idle

    def switch_to_input(self, pull=None):
        self.pull = pull

    def deinit(self):
        self.released = True


class FakeSPI:
    """SPI bus recording written bytes as ("spi", byte)."""

    def __init__(self, trace):
        self._trace = trace
        self.locked = False
        self.released = False
        self.fail_on_write = False
        self.config = None

    def try_lock(self):
        if self.locked:
            return False
        self.locked = True
        return True

    def unlock(self):
        self.locked = False

    def configure(self, **kwargs):
        self.config = kwargs

    def write(self, buf):
        if self.fail_on_write:
            raise OSError("spi write failed")
        for b in bytes(buf):
            self._trace.append(("spi", b))

    def deinit(self):
        self.released = True


class FakeClock:
    """Stands in for the time module: sleep() advances monotonic()."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def frames(trace):
    """
    Decode a trace into (kind, byte) pairs, kind being "cmd" or "data".

    Asserts the framing rules on the way: CS goes low for exactly one
    byte and returns high before the next one.
    """
    out = []
    dc = None
    cs_low = False
    pending = []
    for name, value in trace:
        if name == "dc":
            assert not cs_low, "DC changed inside a CS window"
            dc = value
        elif name == "cs":
            if not value:
                assert not cs_low, "CS asserted twice"
                cs_low = True
                pending = []
            else:
                assert cs_low, "CS released without a window"
                assert len(pending) == 1, "one byte per CS window"
                out.append(("data" if dc else "cmd", pending[0]))
                cs_low = False
        elif name == "spi":
            assert cs_low, "byte sent with CS high"
            pending.append(value)
    assert not cs_low
    return out


@pytest.fixture
def trace():
    return []


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr("epd7in5.hardware.spi.time", fake)
    monkeypatch.setattr("epd7in5.drivers.epd7in5.time", fake)
    return fake


@pytest.fixture
def pins(trace):
    return {
        "spi": FakeSPI(trace),
        "cs": FakePin("cs", trace, value=True),
        "dc": FakePin("dc", trace),
        "rst": FakePin("rst", trace),
        "busy": FakeBusyPin(),
    }


@pytest.fixture
def device(pins, clock):
    return SPIDevice(pins["spi"], pins["cs"], pins["dc"], pins["rst"], pins["busy"])


@pytest.fixture
def epd(device):
    return EPD7in5(device)
