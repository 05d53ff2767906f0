"""Pixel encoders for LED matrix and LED ring firmware.

Three strategies turn an AnimationSequence into a byte stream:

- encode_rectangular: premultiplied RGB for every pixel of every frame
- encode_monochrome: 1 bit per pixel over a fixed grid, 8 pixels per byte
- encode_circular: premultiplied RGB resampled along 360 radial arms

Each encoder writes to a binary file object and returns the number of output
units written (bytes, or hex tokens for the C array form).

The premultiplication divides a 16-bit product by 255 rather than 65535 and
keeps the low 8 bits. Firmware built against these streams depends on that
exact scaling, so it is not corrected here.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import BinaryIO

from ledgif.config import OutputConfiguration
from ledgif.emitter import LINE_BREAK, emit_byte
from ledgif.frames import AnimationSequence, Frame, PixelSample

LOGGER = logging.getLogger(__name__)

LUMINANCE_THRESHOLD = 20000
PREMULTIPLY_DIVISOR = 255
ARM_COUNT = 360

Encoder = Callable[[BinaryIO, AnimationSequence, OutputConfiguration], int]


def premultiply(sample: PixelSample) -> bytes:
    """Scale r, g, b by alpha and truncate each to one byte."""
    r, g, b, a = sample
    return bytes(
        (
            (r * a // PREMULTIPLY_DIVISOR) & 0xFF,
            (g * a // PREMULTIPLY_DIVISOR) & 0xFF,
            (b * a // PREMULTIPLY_DIVISOR) & 0xFF,
        )
    )


def is_dark(sample: PixelSample) -> bool:
    """A pixel is lit in 1-bit output when any color channel is below the threshold."""
    r, g, b, _ = sample
    return r < LUMINANCE_THRESHOLD or g < LUMINANCE_THRESHOLD or b < LUMINANCE_THRESHOLD


def encode_rectangular(output: BinaryIO, frames: AnimationSequence, config: OutputConfiguration) -> int:
    written = 0
    for frame in frames:
        bounds = frame.bounds
        chunk = bytearray()
        for y in range(bounds.max_y):
            for x in range(bounds.max_x):
                chunk += premultiply(frame.sample(x, y))
        output.write(chunk)
        written += len(chunk)
    return written


def pack_row(frame: Frame, y: int, width: int, *, hex_array: bool) -> tuple[bytes, int]:
    """Pack one grid row, MSB first. Returns the encoded row and its unit count."""
    bounds = frame.bounds
    row = bytearray()
    units = 0
    packed = 0
    for x in range(width):
        # Grid cells beyond the frame stay background.
        if y < bounds.max_y and x < bounds.max_x and is_dark(frame.sample(x, y)):
            packed |= 1 << (7 - x % 8)
        if x % 8 == 7:
            row += emit_byte(packed, hex_array=hex_array)
            units += 1
            packed = 0
    if width % 8:
        row += emit_byte(packed, hex_array=hex_array)
        units += 1
    if hex_array:
        row += LINE_BREAK
    return bytes(row), units


def encode_monochrome(output: BinaryIO, frames: AnimationSequence, config: OutputConfiguration) -> int:
    width, height = config.grid_width, config.grid_height
    LOGGER.debug("1-bit grid: w=%d h=%d", width, height)
    units = 0
    for index, frame in enumerate(frames, start=1):
        LOGGER.debug("Frame %d: rows=%d cols=%d", index, frame.bounds.max_y, frame.bounds.max_x)
        chunk = bytearray()
        for y in range(height):
            row, count = pack_row(frame, y, width, hex_array=config.hex_array)
            chunk += row
            units += count
        output.write(chunk)
    return units


def resample_frame(frame: Frame, led_count: int, led_offset: int) -> bytes:
    """Sample ``led_count`` pixels along each of 360 arms from the frame center.

    Arms are visited by increasing angle in whole degrees, samples by
    increasing radius. The first ``led_offset`` steps of each arm are skipped
    and the remaining samples are spread over the rest of the radius.
    Coordinates are truncated toward zero and not clipped.
    """
    bounds = frame.bounds
    center_x = float((bounds.max_x - bounds.min_x) // 2)
    center_y = float((bounds.max_y - bounds.min_y) // 2)
    radius = min(center_x, center_y)
    offset_ratio = (led_count - led_offset) / led_count

    out = bytearray()
    for angle in range(ARM_COUNT):
        theta = angle / 180 * math.pi
        dx = radius * math.cos(theta) / led_count
        dy = radius * math.sin(theta) / led_count
        x = center_x + dx * led_offset
        y = center_y + dy * led_offset
        dx *= offset_ratio
        dy *= offset_ratio
        for _ in range(led_count):
            out += premultiply(frame.sample(int(x), int(y)))
            x += dx
            y += dy
    return bytes(out)


def encode_circular(output: BinaryIO, frames: AnimationSequence, config: OutputConfiguration) -> int:
    written = 0
    for frame in frames:
        data = resample_frame(frame, config.led_count, config.led_offset)
        output.write(data)
        written += len(data)
    return written


def select_encoder(config: OutputConfiguration) -> Encoder:
    if config.one_bit:
        return encode_monochrome
    if config.circular:
        return encode_circular
    return encode_rectangular
