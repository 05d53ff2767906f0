"""
ledgif - animated image to LED display stream converter

Turns the frames of an animated image (GIF first and foremost) into the raw
byte streams or C array source consumed by LED matrix and LED ring firmware.

Core modules:
- frames: Pillow-backed frame source exposing 16-bit RGBA samplers
- encoders: full-color, 1-bit packed and circular (polar) pixel encoders
- emitter: raw byte / hex token output formatting
- config: immutable output configuration
- converter: per-file conversion tasks and the fan-out driver
- cli: command-line entry point
"""

__version__ = "0.1.0"
