"""Pillow-backed frame source.

Decodes an animated image into an immutable sequence of frames. Each frame
samples pixels as premultiplied 16-bit ``(r, g, b, a)`` tuples, the range the
encoders' thresholds and premultiplication constants are calibrated for.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from PIL import GifImagePlugin, Image, ImageSequence, UnidentifiedImageError

from ledgif.errors import DecodeError, InputOpenError

LOGGER = logging.getLogger(__name__)

PixelSample = tuple[int, int, int, int]

OPAQUE = 0xFFFF
TRANSPARENT: PixelSample = (0, 0, 0, 0)


def expand_rgba(r: int, g: int, b: int, a: int) -> PixelSample:
    """Expand a straight-alpha 8-bit RGBA color to premultiplied 16-bit channels."""
    return (
        r * 0x101 * a // 0xFF,
        g * 0x101 * a // 0xFF,
        b * 0x101 * a // 0xFF,
        a * 0x101,
    )


@dataclass(frozen=True, slots=True)
class Bounds:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y


@dataclass(frozen=True, slots=True)
class Frame:
    """One still image of an animation.

    ``pixels`` holds the samples of ``bounds`` in row-major order. Sampling
    outside the bounds returns ``background``.
    """

    bounds: Bounds
    pixels: tuple[PixelSample, ...]
    background: PixelSample = TRANSPARENT

    def __post_init__(self) -> None:
        expected = self.bounds.width * self.bounds.height
        if len(self.pixels) != expected:
            raise ValueError(f"frame expects {expected} pixels, got {len(self.pixels)}")

    @property
    def width(self) -> int:
        return self.bounds.width

    @property
    def height(self) -> int:
        return self.bounds.height

    def sample(self, x: int, y: int) -> PixelSample:
        bounds = self.bounds
        if not bounds.contains(x, y):
            return self.background
        return self.pixels[(y - bounds.min_y) * bounds.width + (x - bounds.min_x)]


AnimationSequence = tuple[Frame, ...]

GIF_SIGNATURES = (b"GIF87a", b"GIF89a")


class RawGifImageFile(GifImagePlugin.GifImageFile):
    """GIF reader that keeps each frame's own pixels.

    Pillow composites every frame onto the logical screen. Before that
    happens, ``load`` records the palette indices inside the frame's own
    rectangle (the transparent index included) together with the palette and
    transparency index in effect for that frame.
    """

    frame_indices: bytes = b""
    frame_palette: bytes | None = None
    frame_transparency: int | None = None

    def load_prepare(self) -> None:
        palette = self._frame_palette
        self.frame_palette = bytes(palette.palette) if palette else None
        self.frame_transparency = self._frame_transparency
        # Write the transparent index instead of skipping it.
        self.tile = [tile._replace(args=(*tile.args[:2], -1)) for tile in self.tile]
        super().load_prepare()

    def load_end(self) -> None:
        own = self._new(self._crop(self.im, self.dispose_extent))
        self.frame_indices = own.tobytes()
        super().load_end()


def palette_sample(index: int, palette: bytes | None, transparency: int | None) -> PixelSample:
    """Color of one palette index. Without a palette the index is a gray level."""
    if index == transparency:
        return TRANSPARENT
    if palette is None:
        return expand_rgba(index, index, index, 0xFF)
    start = index * 3
    if start + 3 > len(palette):
        raise ValueError(f"pixel index {index} outside the {len(palette) // 3}-color palette")
    return expand_rgba(palette[start], palette[start + 1], palette[start + 2], 0xFF)


def gif_frames(image: RawGifImageFile) -> AnimationSequence:
    """Decode each GIF frame over its own rectangle.

    Outside the rectangle a frame reads as its palette entry 0, which is
    transparent when index 0 is that frame's transparency index.
    """
    frames = []
    for _ in ImageSequence.Iterator(image):
        image.load()
        palette, transparency = image.frame_palette, image.frame_transparency
        colors = {index: palette_sample(index, palette, transparency) for index in set(image.frame_indices)}
        frames.append(
            Frame(
                bounds=Bounds(*image.dispose_extent),
                pixels=tuple(colors[index] for index in image.frame_indices),
                background=palette_sample(0, palette, transparency),
            )
        )
    return tuple(frames)


def _background_sample(image: Image.Image) -> PixelSample:
    """Color reported for coordinates outside a frame: palette entry 0."""
    if image.mode not in ("P", "L"):
        return TRANSPARENT
    if image.info.get("transparency") == 0:
        return TRANSPARENT
    if image.mode == "L":
        return (0, 0, 0, OPAQUE)
    palette: Sequence[int] = image.getpalette() or (0, 0, 0)
    r, g, b = palette[:3]
    return expand_rgba(r, g, b, 0xFF)


def frame_from_image(image: Image.Image, background: PixelSample = TRANSPARENT) -> Frame:
    rgba = image.convert("RGBA")
    width, height = rgba.size
    raw = rgba.tobytes()
    pixels = tuple(expand_rgba(raw[i], raw[i + 1], raw[i + 2], raw[i + 3]) for i in range(0, len(raw), 4))
    return Frame(bounds=Bounds(0, 0, width, height), pixels=pixels, background=background)


def frames_from_image(image: Image.Image) -> AnimationSequence:
    """Decode every frame of an already opened Pillow image.

    GIFs opened as RawGifImageFile keep per-frame rectangles. Other formats
    yield Pillow's full-canvas frames.
    """
    if isinstance(image, RawGifImageFile):
        return gif_frames(image)
    background = _background_sample(image)
    return tuple(frame_from_image(frame, background) for frame in ImageSequence.Iterator(image))


def open_image(handle: BinaryIO) -> Image.Image:
    """Open ``handle`` with Pillow, routing GIFs through RawGifImageFile."""
    signature = handle.read(len(GIF_SIGNATURES[0]))
    handle.seek(0)
    if signature in GIF_SIGNATURES:
        return RawGifImageFile(handle)
    return Image.open(handle)


def load_animation(path: str | Path) -> AnimationSequence:
    """Open and fully decode an animated image.

    Raises:
        InputOpenError: the file cannot be opened for reading.
        DecodeError: Pillow cannot identify or decode it, or it has no frames.
    """
    try:
        handle = open(path, "rb")  # noqa: SIM115 - closed by the with block below
    except OSError as exc:
        raise InputOpenError(path, exc.strerror or str(exc)) from exc

    with handle:
        try:
            with open_image(handle) as image:
                frames = frames_from_image(image)
        except (UnidentifiedImageError, OSError, EOFError, ValueError, SyntaxError) as exc:
            raise DecodeError(path, str(exc) or type(exc).__name__) from exc

    if not frames:
        raise DecodeError(path, "no frames")
    LOGGER.debug("Decoded %s: %d frame(s), %dx%d", path, len(frames), frames[0].width, frames[0].height)
    return frames
