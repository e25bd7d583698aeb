# mkfkit

Tools for reading MKF archives, the resource container used by an old
Windows board game. An archive holds numbered chunks. A chunk may be
compressed with an adaptive Huffman / LZ scheme, may hold a block of 16-bit
pixels, and may be an `SPR` or `SMP` sprite sheet made of several frames.

## Installing

    pip install .

## Reading an archive

```python
from mkfkit.archive import MkfArchive, parse_sprite
from mkfkit.pixels import PixelFormat

with MkfArchive("Data.mkf", PixelFormat.RGB565) as mkf:
    print(len(mkf), "chunks")

    info = mkf.chunk_info(1)
    print(info.offset, info.real_size, info.stored_size, info.compressed)

    data = mkf.read(1)
    sprite = parse_sprite(data)
    print(sprite.kind)
    for frame in sprite.frames:
        print(frame.width, frame.height, frame.x, frame.y)
```

`MkfArchive.read` returns a chunk's bytes, decompressed when needed, with
its pixel block converted to the archive's pixel format (RGB555, the stored
layout, by default). `chunk_info` returns a `ChunkInfo` with the chunk's
offset and its four header words. Reading from a closed archive raises
`ValueError`; an index outside the table raises `IndexError`.

`parse_sprite` returns a `Sprite` whose `frames` are `Graph` objects.

## Other modules

- `mkfkit.decompress.decompress(src)`: decode one compressed chunk body.
  Raises `ValueError` on truncated data or a back-reference before the
  start of the output.
- `mkfkit.tables`: the coder's static tables, `CodeTables` and
  `fresh_tables()`, which builds the starting tree.
- `mkfkit.pixels`: `PixelFormat` (`RGB555`, `RGB565`, `BGR565`, `RGB444`),
  `convert_pixels(data, pixel_format)` to rewrite little-endian RGB555 words
  into another layout, and `pixel_format_from_masks(red_mask, green_mask)`,
  which returns the matching format or `None`.
- `mkfkit.graphics`: `Rect`, and `Graph` with `Graph.blank` and `crop`;
  `overlay` copies a block of a graph onto a pixel list, skipping zero
  pixels and clipping to a `Rect` (the 640x480 screen by default);
  `surface_bound` finds the smallest box holding every non-zero pixel of a
  region.
- `mkfkit.wav.parse_wav(data)`: read a RIFF WAVE sound into a `WaveSound`
  holding its `WaveFormat` and sample bytes.
- `mkfkit.text`: caption helpers: `strip_spaces`, `swap_rgb` (0xRRGGBB to
  0xBBGGRR), `split_speech_tag` (splits a leading `#NNNN` tag),
  `vertical_layout` (positions of BIG5 glyphs drawn top to bottom) and
  `anchor_position` (top-left corner of a box placed at an anchor).

## Command line

    mkfkit --help

Every command takes the archive path and `--pixel-format`
(`rgb555`, `rgb565`, `bgr565` or `rgb444`; default `rgb565`).

    mkfkit info Data.mkf

prints each chunk's offset and header words.

    mkfkit dump Data.mkf -o out --no-smp-spr

writes every chunk to `out/NNN.data` (the current directory without `-o`);
`--no-smp-spr` leaves sprite chunks out.

    mkfkit sprite Data.mkf 1 -o out

prints the size and offset of each frame of sprite chunk 1 and writes its
pixels to `out/data1.NN.data`.

Errors are reported on standard error with exit status 1.

## What it does not do

The package only reads. It cannot create or modify MKF archives, and it
does not display graphics, draw text with a font or play sounds: it hands
back pixels, glyph positions and sample bytes for other code to use.