"""
Hardware abstraction layer.

Modules:
    spi: Byte framing, reset pulse and BUSY polling for the EPD
"""
from .spi import SPIDevice

__all__ = ["SPIDevice"]
