"""Byte formatting for raw binary and C array output."""

from __future__ import annotations

LINE_BREAK = b"\r\n"


def hex_token(value: int) -> bytes:
    """Render one byte as a C array element, e.g. ``b" 0x3F,"``."""
    return f" 0x{value & 0xFF:02X},".encode("ascii")


def emit_byte(value: int, *, hex_array: bool) -> bytes:
    if hex_array:
        return hex_token(value)
    return bytes((value & 0xFF,))
