"""Decoder for the compressed chunks stored in MKF archives.

A chunk is coded with an adaptive Huffman tree over 321 symbols. Symbols
below 256 are literal bytes. The others start a back-reference: the
symbol gives the length (symbol - 253, so 3 to 67 bytes) and a prefix
coded 12-bit offset follows in the bit stream. An offset of 0xFFF ends
the stream.
"""

from __future__ import annotations

from .tables import (
    FREQ_LIMIT,
    LEAF_COUNT,
    NODE_COUNT,
    OFFSET_BITS,
    OFFSET_HIGH,
    ROOT,
    CodeTables,
    fresh_tables,
)

LITERALS = 256
MIN_MATCH = 3
END_OFFSET = 0xFFF


class _BitReader:
    """Reads a byte string as a stream of bits, least significant first."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._limit = len(data) * 8
        self.pos = 0

    def bit(self) -> int:
        if self.pos >= self._limit:
            raise ValueError("compressed data is truncated")
        value = (self._data[self.pos >> 3] >> (self.pos & 7)) & 1
        self.pos += 1
        return value

    def peek(self) -> int:
        """Return the bits at the current position, at least 25 of them."""
        start = self.pos >> 3
        chunk = self._data[start:start + 4].ljust(4, b"\0")
        return int.from_bytes(chunk, "little") >> (self.pos & 7)

    def skip(self, count: int) -> None:
        if self.pos + count > self._limit:
            raise ValueError("compressed data is truncated")
        self.pos += count


class _AdaptiveTree:
    """The adaptive Huffman tree shared by every chunk's decoder."""

    def __init__(self) -> None:
        self.tables: CodeTables = fresh_tables()

    def _bump(self, symbol: int) -> None:
        freq = self.tables.freq
        son = self.tables.son
        parent = self.tables.parent
        node = parent[NODE_COUNT + symbol]
        while True:
            freq[node] = (freq[node] + 1) & 0xFFFF
            weight = freq[node]
            if weight > freq[node + 1]:
                target = node + 1
                while target < len(freq) and freq[target] == weight - 1:
                    target += 1
                target -= 1
                freq[node] = freq[target]
                freq[target] = weight

                mine = son[node]
                theirs = son[target]
                parent[theirs] = node
                if theirs < NODE_COUNT:
                    parent[theirs + 1] = node
                parent[mine] = target
                if mine < NODE_COUNT:
                    parent[mine + 1] = target
                son[node] = theirs
                son[target] = mine
                node = parent[target]
            else:
                node = parent[node]
            if node == 0:
                break

    def _rescale(self) -> None:
        freq = self.tables.freq
        parent = self.tables.parent
        for symbol in range(LEAF_COUNT):
            if freq[parent[NODE_COUNT + symbol]] & 1:
                self._bump(symbol)
        for node in range(NODE_COUNT):
            freq[node] >>= 1

    def decode(self, bits: _BitReader) -> int:
        son = self.tables.son
        node = son[ROOT]
        while node < NODE_COUNT:
            node = son[node + bits.bit()]
        symbol = node - NODE_COUNT
        if self.tables.freq[ROOT] == FREQ_LIMIT:
            self._rescale()
        self._bump(symbol)
        return symbol


def decompress(src: bytes) -> bytes:
    """Decode one compressed MKF chunk and return its bytes.

    Raises ValueError when the data ends before the end marker or when a
    back-reference points before the start of the output.
    """
    bits = _BitReader(bytes(src))
    tree = _AdaptiveTree()
    out = bytearray()
    while True:
        symbol = tree.decode(bits)
        if symbol < LITERALS:
            out.append(symbol)
            continue

        word = bits.peek()
        code = word & 0xFF
        prefix = OFFSET_BITS[code]
        offset = (OFFSET_HIGH[code] << 6) | ((word >> prefix) & 0x3F)
        bits.skip(prefix + 6)
        if offset == END_OFFSET:
            return bytes(out)

        length = symbol - LITERALS + MIN_MATCH
        start = len(out) - 1 - offset
        if start < 0:
            raise ValueError(
                f"back-reference {offset + 1} bytes back, "
                f"but only {len(out)} bytes decoded"
            )
        if length <= offset + 1:
            out += out[start:start + length]
        else:
            for index in range(start, start + length):
                out.append(out[index])