import sys

import atheris

with atheris.instrument_imports():
    from ledgif.config import OutputConfiguration
    from ledgif.utils import parse_bool, parse_int


def TestOneInput(data: bytes) -> None:
    """Fuzz env-style value parsing with arbitrary input."""
    value = data.decode("utf-8", errors="ignore")

    # Parsers fall back to their defaults and should never raise
    parse_bool(value)
    parse_int(value, default=0)

    OutputConfiguration.from_env(
        {
            "LEDGIF_CIRCULAR": value,
            "LEDGIF_NUM_LEDS": value,
            "LEDGIF_WIDTH": value,
            "LEDGIF_C51": value,
        }
    )


def main() -> None:
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
