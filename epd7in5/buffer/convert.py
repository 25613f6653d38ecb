"""
Frame Conversion - Image to Device Buffer
==========================================
Turns an arbitrary Pillow image into the panel's packed frame buffer,
and expands that buffer into the nibble stream sent on the wire.

Device buffer (what convert() returns):
    1 bit per pixel, MSB = leftmost pixel, 1 = white, 0 = black.
    Row stride is WIDTH // 8 bytes, HEIGHT rows.

Wire stream (what the driver sends after DATA START 1):
    Each pixel becomes a 4-bit code, two pixels per byte, high nibble
    first. One buffer byte therefore expands to 4 wire bytes.

Optimized with:
- Per-colour threshold cache (images rarely use many colours)
- LUT-based byte expansion
"""

try:
    from typing import TYPE_CHECKING
    if TYPE_CHECKING:
        from PIL.Image import Image
except ImportError:
    pass

# =============================================================================
# Geometry
# =============================================================================

WIDTH = 800
HEIGHT = 480

# =============================================================================
# Bit Manipulation Constants
# =============================================================================

_BITS_PER_BYTE = 8
_FILL_WHITE = b'\xff'  # All bits set (white)

# Reference palette as premultiplied 16-bit RGBA, first entry wins ties
_PALETTE = (
    (0x0000, 0x0000, 0x0000, 0xFFFF),  # black
    (0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF),  # white
)

_BIT_MASKS = tuple(1 << (7 - i) for i in range(_BITS_PER_BYTE))

# =============================================================================
# Pixel Nibble Codes
# =============================================================================
# Each pixel is sent as a 4-bit code, two pixels per wire byte.
# Polarity is a calibration constant: swap the two codes if a panel
# revision shows an inverted image.

NIBBLE_BLACK = 0x0
NIBBLE_WHITE = 0x3

# =============================================================================
# Expansion Table
# =============================================================================


def _build_expand_lut():
    lut = []
    for value in range(256):
        out = bytearray(4)
        for i in range(4):
            hi = NIBBLE_WHITE if value & _BIT_MASKS[2 * i] else NIBBLE_BLACK
            lo = NIBBLE_WHITE if value & _BIT_MASKS[2 * i + 1] else NIBBLE_BLACK
            out[i] = (hi << 4) | lo
        lut.append(bytes(out))
    return tuple(lut)


_LUT_EXPAND = _build_expand_lut()


def expand(value: int) -> bytes:
    """
    Expand one device buffer byte (8 pixels) into 4 wire bytes.

    Example:
        expand(0xFF) == b'\\x33\\x33\\x33\\x33'   # all white
        expand(0x00) == b'\\x00\\x00\\x00\\x00'   # all black
    """
    return _LUT_EXPAND[value]


def _premultiply(rgba):
    """8-bit straight-alpha RGBA -> 16-bit premultiplied RGBA."""
    if len(rgba) == 3:
        r, g, b = rgba
        a = 0xFF
    else:
        r, g, b, a = rgba
    a16 = a * 0x101
    return (
        r * 0x101 * a16 // 0xFFFF,
        g * 0x101 * a16 // 0xFFFF,
        b * 0x101 * a16 // 0xFFFF,
        a16,
    )


def _distance(c1, c2) -> int:
    # Each channel's squared difference is scaled down by 4 before summing
    return sum(((x - y) * (x - y)) >> 2 for x, y in zip(c1, c2))


def is_white(rgba) -> bool:
    """
    Nearest match of an RGB or RGBA pixel against the {black, white} palette.

    Alpha takes part in the match: a fully transparent pixel is black.
    White is chosen only when strictly closer; ties resolve to black.
    """
    c = _premultiply(rgba)
    return _distance(c, _PALETTE[1]) < _distance(c, _PALETTE[0])


def buffer_size(width: int = WIDTH, height: int = HEIGHT) -> int:
    """Bytes in a device buffer for the given geometry."""
    return (width // _BITS_PER_BYTE) * height


def convert(image: "Image", width: int = WIDTH, height: int = HEIGHT) -> bytearray:
    """
    Convert an image into a device frame buffer.

    Pixels outside the image bounds are white. Pixels outside the panel
    are ignored. The result always has buffer_size(width, height) bytes
    and depends only on the image contents.

    Args:
        image: Pillow image in any mode
        width: Panel width in pixels (multiple of 8)
        height: Panel height in pixels

    Returns:
        Packed 1-bit buffer, 1 = white
    """
    row_bytes = width // _BITS_PER_BYTE
    buf = bytearray(_FILL_WHITE * (row_bytes * height))

    src = image.convert("RGBA")
    src_w, src_h = src.size
    pixels = src.load()
    cache = {}

    for y in range(min(height, src_h)):
        row = y * row_bytes
        for xb in range(row_bytes):
            x0 = xb * _BITS_PER_BYTE
            if x0 >= src_w:
                break  # rest of the row stays white
            byte = 0
            for bit in range(_BITS_PER_BYTE):
                x = x0 + bit
                if x < src_w:
                    rgba = pixels[x, y]
                    white = cache.get(rgba)
                    if white is None:
                        white = cache[rgba] = is_white(rgba)
                else:
                    white = True
                if white:
                    byte |= _BIT_MASKS[bit]
            buf[row + xb] = byte

    return buf
