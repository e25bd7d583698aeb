"""16-bit pixel graphs: allocation, cropping, bounds and blitting."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

SCREEN_WIDTH = 640
SCREEN_HEIGHT = 480
FONT_SURFACE_STRIDE = 0x200


@dataclass(frozen=True)
class Rect:
    """A rectangle given by its edges."""

    left: int
    top: int
    right: int
    bottom: int


SCREEN = Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT)


@dataclass
class Graph:
    """A width x height block of 16-bit pixels with a drawing offset."""

    width: int
    height: int
    pixels: list[int] = field(repr=False)
    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("graph size must not be negative")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"{self.width}x{self.height} graph needs "
                f"{self.width * self.height} pixels, got {len(self.pixels)}"
            )

    @classmethod
    def blank(cls, width: int, height: int, x: int = 0, y: int = 0) -> Graph:
        """Return a graph of the given size with every pixel zero."""
        return cls(width, height, [0] * (width * height), x, y)

    def crop(self, x: int, y: int, width: int, height: int) -> Graph:
        """Return the width x height block whose top-left corner is (x, y)."""
        if (
            x < 0
            or y < 0
            or width < 0
            or height < 0
            or x + width > self.width
            or y + height > self.height
        ):
            raise ValueError("crop region lies outside the graph")
        pixels: list[int] = []
        for row in range(y, y + height):
            start = row * self.width + x
            pixels.extend(self.pixels[start:start + width])
        return Graph(width, height, pixels)


def surface_bound(
    surface: Sequence[int], region: Rect, stride: int = FONT_SURFACE_STRIDE
) -> Rect:
    """Find the smallest box holding every non-zero pixel in a region.

    The result's right and bottom edges are inclusive. When the region
    holds no set pixel the result is an all-zero rectangle.
    """
    columns: list[int] = []
    rows: list[int] = []
    for row in range(region.top, region.bottom):
        base = row * stride
        for col in range(region.left, region.right):
            if surface[base + col]:
                columns.append(col)
                rows.append(row)
    if not columns:
        return Rect(0, 0, 0, 0)
    return Rect(min(columns), min(rows), max(columns), max(rows))


def overlay(
    target: MutableSequence[int],
    target_width: int,
    source: Graph,
    x: int,
    y: int,
    src_x: int,
    src_y: int,
    width: int,
    height: int,
    clip: Rect | None = None,
) -> None:
    """Copy a block of ``source`` onto ``target``, skipping zero pixels.

    The block at (src_x, src_y) lands at (x, y) less the source's own
    offset, clipped to ``clip`` (the 640x480 screen by default).
    """
    clip = SCREEN if clip is None else clip
    x -= source.x
    y -= source.y

    if x >= clip.right or x + width <= clip.left:
        return
    if x + width > clip.right:
        width = clip.right - x
    if x < clip.left:
        width -= clip.left - x
        src_x += clip.left - x
        x = clip.left

    if y >= clip.bottom or y + height <= clip.top:
        return
    if y + height > clip.bottom:
        height = clip.bottom - y
    if y < clip.top:
        height -= clip.top - y
        src_y += clip.top - y
        y = clip.top

    if (
        src_x < 0
        or src_y < 0
        or src_x + width > source.width
        or src_y + height > source.height
    ):
        raise ValueError("source block lies outside the source graph")

    for row in range(height):
        src_start = (src_y + row) * source.width + src_x
        dst_start = (y + row) * target_width + x
        line = source.pixels[src_start:src_start + width]
        for col, pixel in enumerate(line):
            if pixel:
                target[dst_start + col] = pixel