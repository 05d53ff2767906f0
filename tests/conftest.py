"""Shared test fixtures for the ledgif test suite.

This module provides reusable fixtures for:
- In-memory frames built from 16-bit samples
- Small animated GIFs written with Pillow
- Output configurations
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from ledgif.config import OutputConfiguration
from ledgif.frames import TRANSPARENT, Bounds, Frame, PixelSample
from PIL import Image

WHITE: PixelSample = (0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF)

# ============================================================================
# Frame Fixtures
# ============================================================================


def _build_frame(
    rows: Sequence[Sequence[PixelSample]],
    *,
    origin: tuple[int, int] = (0, 0),
    background: PixelSample = TRANSPARENT,
) -> Frame:
    height = len(rows)
    width = len(rows[0]) if rows else 0
    min_x, min_y = origin
    pixels = tuple(sample for row in rows for sample in row)
    return Frame(
        bounds=Bounds(min_x, min_y, min_x + width, min_y + height),
        pixels=pixels,
        background=background,
    )


@pytest.fixture
def frame_from_rows() -> Callable[..., Frame]:
    """Factory building a Frame from rows of 16-bit samples.

    Usage:
        frame = frame_from_rows([[WHITE, BLACK]], origin=(1, 0))
    """
    return _build_frame


@pytest.fixture
def solid_frame() -> Callable[..., Frame]:
    """Factory for single-color frames.

    Usage:
        frame = solid_frame(4, 2, BLACK)
    """

    def _create(width: int, height: int, sample: PixelSample = WHITE, background: PixelSample = TRANSPARENT) -> Frame:
        return _build_frame([[sample] * width for _ in range(height)], background=background)

    return _create


# ============================================================================
# GIF Fixtures
# ============================================================================


@pytest.fixture
def write_gif(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an animated GIF of solid-color frames.

    Usage:
        path = write_gif("anim.gif", (8, 2), [(0, 0, 0), (255, 255, 255)])
    """

    def _create(name: str, size: tuple[int, int], colors: Sequence[tuple[int, int, int]]) -> Path:
        path = tmp_path / name
        frames = [Image.new("RGB", size, color) for color in colors]
        frames[0].save(path, save_all=True, append_images=frames[1:], duration=100, loop=0)
        return path

    return _create


@pytest.fixture
def write_gif_with_touch_up(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a solid GIF whose second frame changes a few pixels.

    Pillow stores the second frame as the smallest rectangle covering the
    changed pixels, and unchanged pixels inside it as transparent.

    Usage:
        path = write_gif_with_touch_up("anim.gif", (8, 8), (0, 0, 0), {(0, 0): (255, 255, 255)})
    """

    def _create(
        name: str,
        size: tuple[int, int],
        color: tuple[int, int, int],
        changes: dict[tuple[int, int], tuple[int, int, int]],
    ) -> Path:
        path = tmp_path / name
        first = Image.new("RGB", size, color)
        second = first.copy()
        for xy, changed in changes.items():
            second.putpixel(xy, changed)
        first.save(path, save_all=True, append_images=[second], duration=100, loop=0)
        return path

    return _create


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def mono_config() -> OutputConfiguration:
    """1-bit raw output over an 8x1 grid."""
    return OutputConfiguration(color_depth="1bit", text_encoding="raw", grid_width=8, grid_height=1)


@pytest.fixture
def full_color_config() -> OutputConfiguration:
    return OutputConfiguration(color_depth="full", text_encoding="raw")
