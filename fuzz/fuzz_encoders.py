import io
import sys

import atheris

with atheris.instrument_imports():
    from ledgif.config import OutputConfiguration
    from ledgif.encoders import encode_circular, encode_monochrome
    from ledgif.frames import Bounds, Frame, expand_rgba


def _frame_from_bytes(fdp: atheris.FuzzedDataProvider) -> Frame:
    width = fdp.ConsumeIntInRange(1, 16)
    height = fdp.ConsumeIntInRange(1, 16)
    raw = fdp.ConsumeBytes(width * height * 4).ljust(width * height * 4, b"\x00")
    pixels = tuple(expand_rgba(*raw[i : i + 4]) for i in range(0, len(raw), 4))
    return Frame(bounds=Bounds(0, 0, width, height), pixels=pixels)


def TestOneInput(data: bytes) -> None:
    fdp = atheris.FuzzedDataProvider(data)
    frame = _frame_from_bytes(fdp)
    grid_width = fdp.ConsumeIntInRange(-16, 40)
    grid_height = fdp.ConsumeIntInRange(0, 20)
    hex_array = fdp.ConsumeBool()

    config = OutputConfiguration(
        text_encoding="hex" if hex_array else "raw",
        grid_width=grid_width,
        grid_height=grid_height,
        led_count=fdp.ConsumeIntInRange(1, 8),
    )

    # Packed output size depends only on the grid, never on the frame
    out = io.BytesIO()
    units = encode_monochrome(out, (frame,), config)
    row_units = max(grid_width, 0) // 8 + (1 if grid_width % 8 else 0)
    assert units == row_units * grid_height

    out = io.BytesIO()
    encode_circular(out, (frame,), config)
    assert len(out.getvalue()) == 360 * config.led_count * 3


def main() -> None:
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
