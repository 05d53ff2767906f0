"""Output configuration for the LED stream converter."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from ledgif.errors import ConfigurationError
from ledgif.utils import parse_bool, parse_int

Geometry = Literal["rectangular", "circular"]
ColorDepth = Literal["full", "1bit"]
TextEncoding = Literal["raw", "hex"]

DEFAULT_GRID_WIDTH = 50
DEFAULT_GRID_HEIGHT = 50

ENV_PREFIX = "LEDGIF_"


@dataclass(frozen=True)
class OutputConfiguration:
    """How every input file of a run is encoded.

    ``color_depth="1bit"`` always produces the rectangular packed stream,
    whatever ``geometry`` says. ``text_encoding`` only affects the 1-bit
    encoder and the output file suffix.
    """

    geometry: Geometry = "rectangular"
    color_depth: ColorDepth = "1bit"
    text_encoding: TextEncoding = "hex"
    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    led_count: int = 0
    led_offset: int = 0

    @classmethod
    def from_flags(
        cls,
        *,
        circular: bool = False,
        num_leds: int = 0,
        led_offset: int = 0,
        bit2: bool = True,
        width: int = DEFAULT_GRID_WIDTH,
        height: int = DEFAULT_GRID_HEIGHT,
        c51: bool = True,
    ) -> OutputConfiguration:
        return cls(
            geometry="circular" if circular else "rectangular",
            color_depth="1bit" if bit2 else "full",
            text_encoding="hex" if c51 else "raw",
            grid_width=width,
            grid_height=height,
            led_count=num_leds,
            led_offset=led_offset,
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> OutputConfiguration:
        source = os.environ if env is None else env

        def _get(name: str) -> str | None:
            return source.get(ENV_PREFIX + name)

        return cls.from_flags(
            circular=parse_bool(_get("CIRCULAR"), False),
            num_leds=parse_int(_get("NUM_LEDS"), 0),
            led_offset=parse_int(_get("LED_OFFSET"), 0),
            bit2=parse_bool(_get("BIT2"), True),
            width=parse_int(_get("WIDTH"), DEFAULT_GRID_WIDTH),
            height=parse_int(_get("HEIGHT"), DEFAULT_GRID_HEIGHT),
            c51=parse_bool(_get("C51"), True),
        )

    @property
    def circular(self) -> bool:
        return self.geometry == "circular"

    @property
    def one_bit(self) -> bool:
        return self.color_depth == "1bit"

    @property
    def hex_array(self) -> bool:
        return self.text_encoding == "hex"

    @property
    def output_suffix(self) -> str:
        return ".c" if self.hex_array else ".bin"

    def output_path(self, input_path: str | Path) -> Path:
        """Append the output suffix to the full input name (``anim.gif`` -> ``anim.gif.c``)."""
        return Path(f"{input_path}{self.output_suffix}")

    def validate(self) -> OutputConfiguration:
        """Raise ConfigurationError for settings no input could satisfy."""
        if self.circular and self.led_count <= 0:
            raise ConfigurationError("must specify a LED count higher than 0 when using circular geometry")
        return self
