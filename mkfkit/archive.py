"""Reading chunks out of MKF archives.

An MKF file starts with a 32-bit little-endian offset to its chunk
table. The table runs from that offset to the end of the file and holds
one 32-bit offset per chunk. Each chunk starts with four 32-bit words:
the size of its data, the size stored in the file, the offset of any
pixel data within the chunk and the size of that pixel data. When the
two sizes differ the stored bytes are compressed.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from .decompress import decompress
from .graphics import Graph
from .pixels import PixelFormat, convert_pixels

_TABLE_POINTER = struct.Struct("<i")
_CHUNK_HEADER = struct.Struct("<4I")
_SPRITE_HEADER = struct.Struct("<4sii")
_FRAME_ENTRY = struct.Struct("<hhhhI")
_SPR_PREFIX = 0x200

SPRITE_SIGNATURES = (b"SPR\0", b"SMP\0")


@dataclass(frozen=True)
class ChunkInfo:
    """Where a chunk lies and the four words of its header."""

    offset: int
    real_size: int
    stored_size: int
    graphics_offset: int
    graphics_size: int

    @property
    def compressed(self) -> bool:
        return self.stored_size != self.real_size


@dataclass
class Sprite:
    """A set of frames decoded from an ``SPR`` or ``SMP`` chunk."""

    kind: str
    frames: list[Graph] = field(default_factory=list)


def parse_sprite(data: bytes) -> Sprite:
    """Split an ``SPR`` or ``SMP`` chunk into its frames.

    Each frame's pixels follow the previous frame's, starting at the
    chunk's data offset (0x200 bytes later for ``SPR``). The size of
    each frame's block is taken from its table entry.
    """
    data = bytes(data)
    if len(data) < _SPRITE_HEADER.size:
        raise ValueError("sprite chunk is too short")
    signature, count, start = _SPRITE_HEADER.unpack_from(data)
    if signature not in SPRITE_SIGNATURES:
        raise ValueError(f"not a sprite chunk: signature {signature!r}")
    kind = signature[:3].decode("ascii")
    count = max(count, 0)
    table_end = _SPRITE_HEADER.size + count * _FRAME_ENTRY.size
    if table_end > len(data):
        raise ValueError("sprite frame table is truncated")

    position = start + (_SPR_PREFIX if kind == "SPR" else 0)
    frames: list[Graph] = []
    for width, height, x, y, block_size in _FRAME_ENTRY.iter_unpack(
        data[_SPRITE_HEADER.size:table_end]
    ):
        if width < 0 or height < 0:
            raise ValueError(f"frame {len(frames)} has a negative size")
        nbytes = width * height * 2
        if position < 0 or position + nbytes > len(data):
            raise ValueError(f"pixels of frame {len(frames)} are truncated")
        pixels = list(struct.unpack_from(f"<{width * height}H", data, position))
        frames.append(Graph(width, height, pixels, x, y))
        position += block_size
    return Sprite(kind=kind, frames=frames)


class MkfArchive:
    """An open MKF archive whose chunks can be read by index."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        pixel_format: PixelFormat | int = PixelFormat.RGB555,
    ) -> None:
        self.pixel_format = PixelFormat(pixel_format)
        self._file: BinaryIO | None = open(path, "rb")
        try:
            self._offsets = self._read_table(self._file)
        except BaseException:
            self.close()
            raise

    @staticmethod
    def _read_table(handle: BinaryIO) -> tuple[int, ...]:
        head = handle.read(_TABLE_POINTER.size)
        if len(head) < _TABLE_POINTER.size:
            raise ValueError("MKF file is too short")
        (table_offset,) = _TABLE_POINTER.unpack(head)
        size = handle.seek(0, os.SEEK_END)
        if table_offset < 0 or table_offset > size:
            raise ValueError(
                f"chunk table offset {table_offset} lies outside the file"
            )
        handle.seek(table_offset)
        table = handle.read(size - table_offset)
        count = len(table) // 4
        return struct.unpack(f"<{count}I", table[:count * 4])

    def close(self) -> None:
        """Close the underlying file; further reads raise ValueError."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> MkfArchive:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._offsets)

    def _handle(self) -> BinaryIO:
        if self._file is None:
            raise ValueError("archive is closed")
        return self._file

    def chunk_info(self, index: int) -> ChunkInfo:
        """Return the location and header words of a chunk."""
        handle = self._handle()
        if not 0 <= index < len(self._offsets):
            raise IndexError(f"chunk {index} out of range 0..{len(self) - 1}")
        offset = self._offsets[index]
        handle.seek(offset)
        header = handle.read(_CHUNK_HEADER.size)
        if len(header) < _CHUNK_HEADER.size:
            raise ValueError(f"header of chunk {index} is truncated")
        return ChunkInfo(offset, *_CHUNK_HEADER.unpack(header))

    def read(self, index: int) -> bytes:
        """Return a chunk's data, decompressed and with pixels converted."""
        info = self.chunk_info(index)
        handle = self._handle()
        stored = handle.read(info.stored_size)
        if len(stored) < info.stored_size:
            raise ValueError(f"data of chunk {index} is truncated")
        if info.compressed:
            data = decompress(stored)
            if len(data) < info.real_size:
                raise ValueError(
                    f"chunk {index} decompressed to {len(data)} bytes, "
                    f"expected {info.real_size}"
                )
            data = data[:info.real_size]
        else:
            data = stored

        if info.graphics_size:
            start = info.graphics_offset
            end = start + info.graphics_size
            if end > len(data):
                raise ValueError(f"pixel data of chunk {index} lies outside it")
            data = (
                data[:start]
                + convert_pixels(data[start:end], self.pixel_format)
                + data[end:]
            )
        return data