"""
Buffer subsystem - image conversion and wire expansion.

Modules:
    convert: Pillow image -> packed device buffer, byte -> nibble codes
"""
from .convert import convert, expand, is_white, buffer_size, WIDTH, HEIGHT

__all__ = [
    "convert",
    "expand",
    "is_white",
    "buffer_size",
    "WIDTH",
    "HEIGHT",
]
