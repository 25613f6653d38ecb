"""
Driver Errors
=============
Exception hierarchy shared by the hardware and driver layers.

    EPDError
     ├── TransportError          line or SPI exchange failed (also OSError)
     ├── ConfigurationError      pin could not be located or claimed
     ├── ProtocolPreconditionError
     │    ├── NotReadyError      clear/display outside a ready mode
     │    ├── BufferSizeError    buffer length does not match the panel
     │    └── BufferContentError buffer holds values outside 0..255
     └── BusyTimeoutError        BUSY never released (also TimeoutError)

Nothing is retried. Recovery is always reset() followed by init().
"""


class EPDError(Exception):
    """Base class for all e-paper driver errors."""


class TransportError(EPDError, OSError):
    """A control line write or SPI byte exchange failed."""


class ConfigurationError(EPDError):
    """A required pin or bus could not be located or claimed."""


class ProtocolPreconditionError(EPDError):
    """An operation was issued in a state the panel protocol forbids."""


class NotReadyError(ProtocolPreconditionError, RuntimeError):
    """clear() or display() called while uninitialized or sleeping."""


class BufferSizeError(ProtocolPreconditionError, ValueError):
    """Frame buffer length differs from bytes-per-row * rows."""


class BufferContentError(ProtocolPreconditionError, ValueError):
    """Frame buffer is not a sequence of byte values."""


class BusyTimeoutError(EPDError, TimeoutError):
    """The BUSY line did not report idle before the deadline."""
