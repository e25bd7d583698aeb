"""Read MKF resource archives: chunks, compression, sprites, pixels, sounds and captions."""

__version__ = "0.1.0"

__all__ = ["archive", "cli", "decompress", "graphics", "pixels", "tables", "text", "wav"]