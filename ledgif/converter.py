"""Per-file conversion tasks and the driver that fans them out."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ledgif.config import OutputConfiguration
from ledgif.encoders import select_encoder
from ledgif.errors import FileConversionError, OutputOpenError, OutputWriteError
from ledgif.frames import load_animation

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionResult:
    input_path: Path
    output_path: Path | None = None
    frames: int = 0
    units: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def convert_file(input_path: str | Path, config: OutputConfiguration) -> ConversionResult:
    """Decode one image and write its encoded stream next to it.

    Failures are logged with the offending filename and returned on the
    result; they never raise. A partially written output file is left in place.
    """
    result = ConversionResult(input_path=Path(input_path))
    encoder = select_encoder(config)
    try:
        frames = load_animation(input_path)
        result.frames = len(frames)

        output_path = config.output_path(input_path)
        try:
            handle = output_path.open("wb")
        except OSError as exc:
            raise OutputOpenError(output_path, exc.strerror or str(exc)) from exc
        result.output_path = output_path

        with handle:
            try:
                result.units = encoder(handle, frames, config)
            except OSError as exc:
                raise OutputWriteError(output_path, exc.strerror or str(exc)) from exc
    except FileConversionError as exc:
        LOGGER.error("error: %s", exc)
        result.error = exc
        return result

    LOGGER.info(
        "Wrote %s (%d frame(s), %d %s)",
        result.output_path,
        result.frames,
        result.units,
        "tokens" if config.hex_array and config.one_bit else "bytes",
    )
    return result


def convert_all(paths: Iterable[str | Path], config: OutputConfiguration) -> list[ConversionResult]:
    """Convert every path on its own thread and wait for all of them.

    The configuration is validated before any thread starts, so a
    ConfigurationError aborts the whole run. Results come back in input order;
    the threads themselves finish in no particular order.
    """
    config.validate()
    inputs = [Path(path) for path in paths]
    results: list[ConversionResult | None] = [None] * len(inputs)

    def _task(index: int, path: Path) -> None:
        try:
            results[index] = convert_file(path, config)
        except Exception as exc:  # noqa: BLE001 - one bad file must not take down its siblings
            LOGGER.exception("Unexpected failure converting %s", path)
            results[index] = ConversionResult(input_path=path, error=exc)

    threads = [
        threading.Thread(target=_task, args=(index, path), name=f"ledgif-{path.name}", daemon=True)
        for index, path in enumerate(inputs)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    return [result for result in results if result is not None]
