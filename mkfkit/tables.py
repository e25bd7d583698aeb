"""Static tables for the adaptive Huffman coder used by MKF chunks.

The coder keeps a frequency-ordered tree of 321 symbols: 256 literal
bytes and 65 match lengths. Nodes are numbered 0..640, and the root is
node 640. A ``son`` entry of ``NODE_COUNT`` or more marks a leaf that
holds symbol ``son - NODE_COUNT``. Otherwise it names the left child,
and the right child is the next node. Match offsets use a fixed prefix
code, read least significant bit first: ``OFFSET_BITS`` gives how many
bits the prefix takes and ``OFFSET_HIGH`` gives the upper six bits of
the offset. Both are looked up by the next eight bits of the stream.
"""

from __future__ import annotations

from dataclasses import dataclass

LEAF_COUNT = 321
NODE_COUNT = 2 * LEAF_COUNT - 1
ROOT = NODE_COUNT - 1
FREQ_LIMIT = 0x8000
SENTINEL = 0xFFFF

OFFSET_BITS: tuple[int, ...] = (8, 5, 6, 4, 7, 5, 6, 3, 7, 5, 6, 4, 7, 4, 5, 3) * 16

OFFSET_HIGH: tuple[int, ...] = (
    0x3F, 0x0B, 0x17, 0x03, 0x2F, 0x0A, 0x16, 0x00,
    0x2E, 0x09, 0x15, 0x02, 0x2D, 0x01, 0x08, 0x00,
    0x3E, 0x07, 0x14, 0x03, 0x2C, 0x06, 0x13, 0x00,
    0x2B, 0x05, 0x12, 0x02, 0x2A, 0x01, 0x04, 0x00,
    0x3D, 0x0B, 0x11, 0x03, 0x29, 0x0A, 0x10, 0x00,
    0x28, 0x09, 0x0F, 0x02, 0x27, 0x01, 0x08, 0x00,
    0x3C, 0x07, 0x0E, 0x03, 0x26, 0x06, 0x0D, 0x00,
    0x25, 0x05, 0x0C, 0x02, 0x24, 0x01, 0x04, 0x00,
    0x3B, 0x0B, 0x17, 0x03, 0x23, 0x0A, 0x16, 0x00,
    0x22, 0x09, 0x15, 0x02, 0x21, 0x01, 0x08, 0x00,
    0x3A, 0x07, 0x14, 0x03, 0x20, 0x06, 0x13, 0x00,
    0x1F, 0x05, 0x12, 0x02, 0x1E, 0x01, 0x04, 0x00,
    0x39, 0x0B, 0x11, 0x03, 0x1D, 0x0A, 0x10, 0x00,
    0x1C, 0x09, 0x0F, 0x02, 0x1B, 0x01, 0x08, 0x00,
    0x38, 0x07, 0x0E, 0x03, 0x1A, 0x06, 0x0D, 0x00,
    0x19, 0x05, 0x0C, 0x02, 0x18, 0x01, 0x04, 0x00,
    0x37, 0x0B, 0x17, 0x03, 0x2F, 0x0A, 0x16, 0x00,
    0x2E, 0x09, 0x15, 0x02, 0x2D, 0x01, 0x08, 0x00,
    0x36, 0x07, 0x14, 0x03, 0x2C, 0x06, 0x13, 0x00,
    0x2B, 0x05, 0x12, 0x02, 0x2A, 0x01, 0x04, 0x00,
    0x35, 0x0B, 0x11, 0x03, 0x29, 0x0A, 0x10, 0x00,
    0x28, 0x09, 0x0F, 0x02, 0x27, 0x01, 0x08, 0x00,
    0x34, 0x07, 0x0E, 0x03, 0x26, 0x06, 0x0D, 0x00,
    0x25, 0x05, 0x0C, 0x02, 0x24, 0x01, 0x04, 0x00,
    0x33, 0x0B, 0x17, 0x03, 0x23, 0x0A, 0x16, 0x00,
    0x22, 0x09, 0x15, 0x02, 0x21, 0x01, 0x08, 0x00,
    0x32, 0x07, 0x14, 0x03, 0x20, 0x06, 0x13, 0x00,
    0x1F, 0x05, 0x12, 0x02, 0x1E, 0x01, 0x04, 0x00,
    0x31, 0x0B, 0x11, 0x03, 0x1D, 0x0A, 0x10, 0x00,
    0x1C, 0x09, 0x0F, 0x02, 0x1B, 0x01, 0x08, 0x00,
    0x30, 0x07, 0x0E, 0x03, 0x1A, 0x06, 0x0D, 0x00,
    0x19, 0x05, 0x0C, 0x02, 0x18, 0x01, 0x04, 0x00,
)


@dataclass
class CodeTables:
    """Mutable state of the adaptive Huffman tree.

    ``freq`` has one weight per node followed by a sentinel. ``son``
    gives each node's child or leaf marker. ``parent`` gives each node's
    parent, and after that, at ``NODE_COUNT + symbol``, the node that
    holds each symbol's leaf.
    """

    freq: list[int]
    son: list[int]
    parent: list[int]


def fresh_tables() -> CodeTables:
    """Build the starting tree, in which every symbol has weight one."""
    freq = [1] * LEAF_COUNT
    son = [NODE_COUNT + symbol for symbol in range(LEAF_COUNT)]
    parent = [0] * (NODE_COUNT + LEAF_COUNT)
    for symbol in range(LEAF_COUNT):
        parent[NODE_COUNT + symbol] = symbol
    for node in range(LEAF_COUNT, NODE_COUNT):
        left = 2 * (node - LEAF_COUNT)
        freq.append(freq[left] + freq[left + 1])
        son.append(left)
        parent[left] = parent[left + 1] = node
    freq.append(SENTINEL)
    return CodeTables(freq=freq, son=son, parent=parent)