"""Helpers for the game's captions, which are BIG5 byte strings."""

from __future__ import annotations

from typing import TypeVar

_Text = TypeVar("_Text", str, bytes)


def strip_spaces(text: str) -> str:
    """Return ``text`` with every space character removed."""
    return text.replace(" ", "")


def swap_rgb(value: int) -> int:
    """Turn a 0xRRGGBB colour into 0xBBGGRR, dropping any higher byte."""
    return ((value & 0xFF) << 16) | (value & 0xFF00) | ((value & 0xFF0000) >> 16)


def split_speech_tag(text: _Text) -> tuple[int | None, _Text]:
    """Split a leading ``#NNNN`` speech tag from a caption.

    Returns the tag number, or None when there is no tag, together with
    the rest of the caption.
    """
    marker = "#" if isinstance(text, str) else b"#"
    if not text.startswith(marker):
        return None, text
    digits = text[1:5]
    if len(digits) != 4 or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"malformed speech tag in {text!r}")
    return int(digits), text[5:]


def _glyphs(text: bytes):
    """Yield the glyphs of a BIG5 string: one byte, or two after a lead byte."""
    text = text.split(b"\0", 1)[0]
    pos = 0
    while pos < len(text):
        width = 2 if text[pos] & 0x80 else 1
        yield text[pos:pos + width]
        pos += width


def vertical_layout(
    text: str | bytes,
    x: int,
    y: int,
    font_height: int,
    spacing: int,
    style: int,
) -> list[tuple[int, int, bytes]]:
    """Place each glyph of a caption one below the other.

    Returns ``(x, y, glyph)`` for every glyph. The step between rows is
    the font height plus the spacing, and one pixel more when the style
    draws a border (flag bits 1 or 2).
    """
    if isinstance(text, str):
        text = text.encode("big5")
    step = font_height + spacing + (1 if style & 0x06 else 0)
    return [
        (x, y + row * step, glyph) for row, glyph in enumerate(_glyphs(text))
    ]


def _half(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return -(-value // 2) if value < 0 else value // 2


def anchor_position(
    anchor: int, x: int, y: int, width: int, height: int
) -> tuple[int, int]:
    """Return the top-left corner of a box of the given size at an anchor.

    Anchor 1 is right-aligned; 2, 3 and 4 are centred on both axes; 5
    centres vertically only; 6 is right-aligned and vertically centred;
    7 is centred horizontally above the point. Any other anchor leaves
    the point as the top-left corner.
    """
    if anchor == 1:
        x -= width
    elif anchor in (2, 3, 4):
        x -= _half(width)
        y -= _half(height)
    elif anchor == 5:
        y -= _half(height)
    elif anchor == 6:
        x -= width
        y -= _half(height)
    elif anchor == 7:
        x -= _half(width)
        y -= height
    return x, y