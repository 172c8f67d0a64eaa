"""Byte-order helpers shared by the BLE modules."""

from __future__ import annotations


def swap_buf(data: bytes | bytearray) -> bytes:
    """Return a byte-reversed copy of ``data``; the input is left untouched."""
    return bytes(data)[::-1]