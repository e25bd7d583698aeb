"""Conversion of stored 15-bit pixels to the display's 16-bit layout.

Graphics in MKF archives are stored as little-endian RGB555 words. The
display may use another layout, and each pixel is rewritten in place
before use.
"""

from __future__ import annotations

from enum import IntEnum


class PixelFormat(IntEnum):
    """The 16-bit pixel layouts a display surface can have."""

    RGB555 = 0
    RGB565 = 1
    BGR565 = 2
    RGB444 = 3


_MASKS: dict[tuple[int, int], PixelFormat] = {
    (0x7C00, 0x03E0): PixelFormat.RGB555,
    (0xF800, 0x07E0): PixelFormat.RGB565,
    (0x001F, 0x07E0): PixelFormat.BGR565,
    (0x0F00, 0x00F0): PixelFormat.RGB444,
}


def pixel_format_from_masks(red_mask: int, green_mask: int) -> PixelFormat | None:
    """Identify a surface's layout from its red and green bit masks.

    Returns None when the masks match no known layout.
    """
    return _MASKS.get((red_mask, green_mask))


def _to_rgb565(word: int) -> int:
    return (word & 0x001F) | ((word * 2) & 0xFFC0)


def _to_bgr565(word: int) -> int:
    return (
        ((word & 0x7C00) >> 10)
        | ((word & 0x03E0) << 1)
        | (((word & 0x001F) << 11) & 0xFFFF)
    )


def _to_rgb444(word: int) -> int:
    return ((word & 0x7800) >> 3) | ((word & 0x03C0) >> 2) | ((word & 0x001E) >> 1)


_CONVERTERS = {
    PixelFormat.RGB565: _to_rgb565,
    PixelFormat.BGR565: _to_bgr565,
    PixelFormat.RGB444: _to_rgb444,
}


def convert_pixels(data: bytes, pixel_format: PixelFormat | int) -> bytes:
    """Rewrite little-endian RGB555 words into the given layout.

    A trailing odd byte is left as it is. RGB555 data comes back
    unchanged.
    """
    data = bytes(data)
    convert = _CONVERTERS.get(PixelFormat(pixel_format))
    if convert is None:
        return data
    whole = len(data) & ~1
    out = bytearray(data)
    for pos in range(0, whole, 2):
        word = convert(int.from_bytes(data[pos:pos + 2], "little"))
        out[pos:pos + 2] = word.to_bytes(2, "little")
    return bytes(out)