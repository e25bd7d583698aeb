import random

import pytest

from mkfkit.decompress import decompress
from mkfkit.tables import (
    FREQ_LIMIT,
    LEAF_COUNT,
    NODE_COUNT,
    OFFSET_BITS,
    OFFSET_HIGH,
    ROOT,
    fresh_tables,
)


class _Encoder:
    """Produces streams in the MKF chunk coding, for feeding the decoder."""

    def __init__(self):
        self.tables = fresh_tables()
        self.bits = []

    def _bump(self, symbol):
        freq, son, parent = self.tables.freq, self.tables.son, self.tables.parent
        node = parent[NODE_COUNT + symbol]
        while True:
            freq[node] += 1
            weight = freq[node]
            if weight > freq[node + 1]:
                target = node + 1
                while freq[target] == weight - 1:
                    target += 1
                target -= 1
                freq[node] = freq[target]
                freq[target] = weight
                mine, theirs = son[node], son[target]
                parent[theirs] = node
                if theirs < NODE_COUNT:
                    parent[theirs + 1] = node
                parent[mine] = target
                if mine < NODE_COUNT:
                    parent[mine + 1] = target
                son[node], son[target] = theirs, mine
                node = parent[target]
            else:
                node = parent[node]
            if node == 0:
                break

    def _rescale(self):
        freq, parent = self.tables.freq, self.tables.parent
        for symbol in range(LEAF_COUNT):
            if freq[parent[NODE_COUNT + symbol]] & 1:
                self._bump(symbol)
        for node in range(NODE_COUNT):
            freq[node] >>= 1

    def symbol(self, symbol):
        son, parent = self.tables.son, self.tables.parent
        path = []
        node = parent[NODE_COUNT + symbol]
        while node != ROOT:
            up = parent[node]
            path.append(node - son[up])
            node = up
        self.bits.extend(reversed(path))
        if self.tables.freq[ROOT] == FREQ_LIMIT:
            self._rescale()
        self._bump(symbol)

    def offset(self, distance):
        high, low = distance >> 6, distance & 0x3F
        code = next(b for b in range(256) if OFFSET_HIGH[b] == high)
        width = OFFSET_BITS[code]
        self.bits.extend((code >> k) & 1 for k in range(width))
        self.bits.extend((low >> k) & 1 for k in range(6))

    def finish(self):
        self.symbol(256)
        self.offset(0xFFF)
        out = bytearray((len(self.bits) + 7) // 8)
        for index, bit in enumerate(self.bits):
            out[index >> 3] |= bit << (index & 7)
        return bytes(out)


def encode(tokens):
    enc = _Encoder()
    for token in tokens:
        if isinstance(token, int):
            enc.symbol(token)
        else:
            length, distance = token
            enc.symbol(length - 3 + 256)
            enc.offset(distance)
    return enc.finish()


def test_empty_stream():
    assert decompress(encode([])) == b""


def test_literals_round_trip():
    text = b"hello world"
    assert decompress(encode(list(text))) == text


def test_every_byte_value():
    data = bytes(range(256))
    assert decompress(encode(list(data))) == data


def test_overlapping_match():
    assert decompress(encode([ord("a"), ord("b"), (6, 1)])) == b"abababab"


def test_match_from_distance():
    assert decompress(encode([ord("a"), ord("b"), ord("c"), (3, 2)])) == b"abcabc"


def test_longest_match():
    out = decompress(encode([ord("z"), (67, 0)]))
    assert out == b"z" * 68


def test_accepts_bytearray():
    data = b"mkf"
    assert decompress(bytearray(encode(list(data)))) == data


def test_mixed_tokens_with_far_offsets():
    rng = random.Random(7)
    prefix = bytes(rng.randrange(256) for _ in range(3000))
    tokens = list(prefix) + [(10, 2999), (5, 1000), (4, 64)]
    expected = bytearray(prefix)
    for length, distance in [(10, 2999), (5, 1000), (4, 64)]:
        start = len(expected) - 1 - distance
        expected += expected[start:start + length]
    assert decompress(encode(tokens)) == bytes(expected)


def test_long_stream_passes_rescale():
    rng = random.Random(1)
    data = bytes(rng.randrange(256) for _ in range(33000))
    assert decompress(encode(list(data))) == data


def test_empty_input_is_truncated():
    with pytest.raises(ValueError):
        decompress(b"")


def test_truncated_stream():
    rng = random.Random(3)
    packed = encode([rng.randrange(256) for _ in range(200)])
    with pytest.raises(ValueError):
        decompress(packed[: len(packed) // 2])


def test_reference_before_start():
    with pytest.raises(ValueError):
        decompress(encode([(3, 5)]))