"""Frame codec for the Magic Home LED controller protocol.

A frame is the command payload, optionally followed by one checksum byte.
There is no length prefix and no start or stop marker.
"""
from __future__ import annotations

from collections.abc import Iterable

from magichome import const


def checksum(data: Iterable[int]) -> int:
    """Return the low 8 bits of the sum of all bytes."""
    return sum(data) & 0xFF


def frame(data: bytes | bytearray | Iterable[int], use_checksum: bool = True) -> bytes:
    """Return the bytes to put on the wire for ``data``."""
    payload = bytes(data)
    if not use_checksum:
        return payload
    return payload + bytes([checksum(payload)])


def _channel(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {value!r}")
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be 0-255, got {value}")
    return value


def power_command(on: bool) -> bytes:
    """Build the power payload: ``71 23 0F`` for on, ``71 24 0F`` for off."""
    return bytes(
        [
            const.CMD_POWER,
            const.POWER_ON if on else const.POWER_OFF,
            const.TERMINATOR_LOCAL,
        ]
    )


def color_command(red: int, green: int, blue: int) -> bytes:
    """Build the color payload: ``41 R G B 00 00 0F``.

    Raises:
        ValueError: if a channel is not an int in 0..255.
    """
    return bytes(
        [
            const.CMD_SET_COLOR,
            _channel("red", red),
            _channel("green", green),
            _channel("blue", blue),
            0x00,
            0x00,
            const.TERMINATOR_LOCAL,
        ]
    )


def status_query() -> bytes:
    """Build the status query payload: ``81 8A 8B``."""
    return bytes(const.CMD_STATUS_QUERY)
