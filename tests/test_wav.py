import struct

import pytest

from mkfkit.wav import PRIMARY_FORMAT, WaveFormat, WaveSound, parse_wav


def chunk(sig, body):
    return sig + struct.pack("<I", len(body)) + body


def make_wav(fmt_fields, samples, extra=()):
    fmt = chunk(b"fmt ", struct.pack("<HHIIHH", *fmt_fields))
    body = b"WAVE" + fmt + b"".join(chunk(s, b) for s, b in extra) + chunk(b"data", samples)
    return b"RIFF" + struct.pack("<I", len(body)) + body


FIELDS = (1, 2, 44100, 176400, 4, 16)
PRIMARY_FIELDS = (1, 1, 22050, 22050, 1, 8)


def test_parse_format_and_samples():
    sound = parse_wav(make_wav(FIELDS, b"\x01\x02\x03\x04"))
    assert sound == WaveSound(WaveFormat(*FIELDS), b"\x01\x02\x03\x04")


def test_skips_chunks_before_data():
    wav = make_wav(FIELDS, b"abc", extra=[(b"LIST", b"metadata"), (b"fact", b"\0\0\0\0")])
    assert parse_wav(wav).data == b"abc"


def test_first_chunk_longer_than_format():
    fmt = chunk(b"fmt ", struct.pack("<HHIIHH", *FIELDS) + b"\0\0")
    body = b"WAVE" + fmt + chunk(b"data", b"xy")
    wav = b"RIFF" + struct.pack("<I", len(body)) + body
    sound = parse_wav(wav)
    assert sound.format.samples_per_sec == 44100
    assert sound.data == b"xy"


def test_empty_samples():
    assert parse_wav(make_wav(FIELDS, b"")).data == b""


def test_not_riff_raises():
    wav = make_wav(FIELDS, b"abc")
    with pytest.raises(ValueError):
        parse_wav(b"RIFX" + wav[4:])


def test_missing_data_chunk_raises():
    fmt = chunk(b"fmt ", struct.pack("<HHIIHH", *FIELDS))
    wav = b"RIFF" + struct.pack("<I", 4 + len(fmt)) + b"WAVE" + fmt
    with pytest.raises(ValueError):
        parse_wav(wav)


def test_truncated_samples_raise():
    wav = make_wav(FIELDS, b"abcdef")
    with pytest.raises(ValueError):
        parse_wav(wav[:-2])


def test_short_format_chunk_raises():
    body = b"WAVE" + chunk(b"fmt ", b"\x01\x00") + chunk(b"data", b"a")
    wav = b"RIFF" + struct.pack("<I", len(body)) + body
    with pytest.raises(ValueError):
        parse_wav(wav)


def test_primary_format_is_8bit_mono():
    assert PRIMARY_FORMAT.samples_per_sec == 22050
    assert PRIMARY_FORMAT.bits_per_sample == 8
    assert PRIMARY_FORMAT.channels == 1
    sound = parse_wav(make_wav(PRIMARY_FIELDS, b"\x80"))
    assert sound.format == PRIMARY_FORMAT
    assert sound.data == b"\x80"