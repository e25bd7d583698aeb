"""Reading RIFF WAVE sound effects stored in MKF archives."""

from __future__ import annotations

import struct
from dataclasses import dataclass

_FORMAT = struct.Struct("<HHIIHH")
_FIRST_CHUNK = 12
_HEADER = 8


@dataclass(frozen=True)
class WaveFormat:
    """The PCM format fields of a WAVE file."""

    format_tag: int
    channels: int
    samples_per_sec: int
    avg_bytes_per_sec: int
    block_align: int
    bits_per_sample: int


PRIMARY_FORMAT = WaveFormat(
    format_tag=1,
    channels=1,
    samples_per_sec=22050,
    avg_bytes_per_sec=22050,
    block_align=1,
    bits_per_sample=8,
)


@dataclass(frozen=True)
class WaveSound:
    """A decoded sound: its format and its raw sample bytes."""

    format: WaveFormat
    data: bytes


def _chunk_header(data: bytes, offset: int) -> tuple[bytes, int]:
    if offset + _HEADER > len(data):
        raise ValueError("WAVE data has no 'data' chunk")
    return data[offset:offset + 4], int.from_bytes(data[offset + 4:offset + 8], "little")


def parse_wav(data: bytes) -> WaveSound:
    """Parse a RIFF file whose first chunk holds the format.

    Chunks after the first are skipped until the ``data`` chunk, whose
    contents become the samples. Raises ValueError on a missing RIFF
    signature, a short format chunk, a missing data chunk or truncated
    samples.
    """
    data = bytes(data)
    if data[:4] != b"RIFF":
        raise ValueError("not a RIFF file")
    _, first_size = _chunk_header(data, _FIRST_CHUNK)
    fmt_start = _FIRST_CHUNK + _HEADER
    if first_size < _FORMAT.size or fmt_start + _FORMAT.size > len(data):
        raise ValueError("WAVE format chunk is too short")
    wave_format = WaveFormat(*_FORMAT.unpack_from(data, fmt_start))

    offset = fmt_start + first_size
    while True:
        sig, size = _chunk_header(data, offset)
        if sig == b"data":
            break
        offset += _HEADER + size

    start = offset + _HEADER
    if start + size > len(data):
        raise ValueError("WAVE sample data is truncated")
    return WaveSound(format=wave_format, data=data[start:start + size])