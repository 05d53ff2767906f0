"""Command-line entry point: convert animated images to LED display streams."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping, Sequence

from ledgif.config import OutputConfiguration
from ledgif.converter import convert_all
from ledgif.errors import ConfigurationError

LOGGER = logging.getLogger("ledgif")

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def build_parser(env: Mapping[str, str] | None = None) -> argparse.ArgumentParser:
    """Build the argument parser; option defaults come from LEDGIF_* variables."""
    source = os.environ if env is None else env
    defaults = OutputConfiguration.from_env(source)

    parser = argparse.ArgumentParser(
        prog="gif2led",
        description=(
            "Convert animated images into raw LED matrix / LED ring streams. "
            "Each input is written next to itself as <input>.c (C array) or <input>.bin."
        ),
    )
    parser.add_argument(
        "files", nargs="+", metavar="FILE", help="Input images (GIF or any animated format Pillow reads)."
    )
    parser.add_argument(
        "--circular",
        action=argparse.BooleanOptionalAction,
        default=defaults.circular,
        help="Resample each frame along 360 radial arms for LED rings (full-color mode only).",
    )
    parser.add_argument(
        "--num-leds",
        type=int,
        default=defaults.led_count,
        help="LEDs per radial arm (required when using --circular).",
    )
    parser.add_argument(
        "--led-offset",
        type=int,
        default=defaults.led_offset,
        help="Radial offset of the first LED, in LED steps (only used with --circular).",
    )
    parser.add_argument(
        "--bit2",
        action=argparse.BooleanOptionalAction,
        default=defaults.one_bit,
        help="Output the black-and-white 1-bit packed format (default: on).",
    )
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=defaults.grid_width,
        help="1-bit grid width (default: 50). Negative widths are accepted and yield empty rows.",
    )
    parser.add_argument(
        "-H",
        "--height",
        type=int,
        default=defaults.grid_height,
        help="1-bit grid height (default: 50). Zero or negative heights yield empty frames.",
    )
    parser.add_argument(
        "--c51",
        action=argparse.BooleanOptionalAction,
        default=defaults.hex_array,
        help="Write C array source instead of raw binary (default: on).",
    )
    parser.add_argument("--log-level", default=source.get("LEDGIF_LOG_LEVEL", "INFO"))
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    config = OutputConfiguration.from_flags(
        circular=args.circular,
        num_leds=args.num_leds,
        led_offset=args.led_offset,
        bit2=args.bit2,
        width=args.width,
        height=args.height,
        c51=args.c51,
    )
    try:
        results = convert_all(args.files, config)
    except ConfigurationError as exc:
        LOGGER.error("%s", exc)
        return 2

    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
