"""Decoding of the Magic Home status reply."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from magichome import const
from magichome.errors import LightResponseError

# Layout of the 14 byte reply:
# pos  0  1  2  3  4  5  6  7  8  9 10 11 12 13
#    81 25 23 61 21 06 38 05 06 f9 01 00 0f 9d
#     |  |  |  |  |  |  |  |  |
#     |  |  |  |  |  |  |  |  blue
#     |  |  |  |  |  |  |  green
#     |  |  |  |  |  |  red
#     |  |  |  mode
#     |  |  power: 23 on, anything else off
#     |  model
#     head
POWER_OFFSET = 2
MODE_OFFSET = 3
RED_OFFSET = 6
GREEN_OFFSET = 7
BLUE_OFFSET = 8


class LightMode(Enum):
    """Operating mode reported by the light."""

    COLOR = "Color"
    WHITE = "White"
    CUSTOM = "Custom"
    PRESET = "Preset"
    UNKNOWN = "Unknown"


class Color(NamedTuple):
    """An RGB color; ``alpha == 0`` marks a color with no meaning."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Return the color as an ``(r, g, b)`` tuple."""
        return (self.red, self.green, self.blue)


WHITE = Color(255, 255, 255)
TRANSPARENT = Color(255, 255, 255, 0)


def decode_power_state(code: int) -> bool:
    """Return True only for the "on" code; every other value reads as off."""
    return code == const.POWER_ON


def _preset_fallback(code: int) -> bool:
    # Firmware reports preset numbers as hex digits, e.g. 0x37 for preset 37.
    digits = f"{code:X}"
    if not digits.isdigit():
        return False
    return const.PRESET_FALLBACK_MIN <= int(digits) <= const.PRESET_FALLBACK_MAX


def decode_mode(code: int) -> LightMode:
    """Map the mode byte to a LightMode."""
    if code in const.MODE_CODES_COLOR:
        return LightMode.COLOR
    if code in const.MODE_CODES_CUSTOM:
        return LightMode.CUSTOM
    if code in const.MODE_CODES_PRESET or _preset_fallback(code):
        return LightMode.PRESET
    return LightMode.UNKNOWN


def decode_color(mode: LightMode, data: bytes) -> Color:
    """Return the color for ``mode``.

    Only COLOR reads the RGB bytes. WHITE is reported as pure white and every
    other mode as TRANSPARENT.
    """
    if mode is LightMode.COLOR:
        return Color(data[RED_OFFSET], data[GREEN_OFFSET], data[BLUE_OFFSET])
    if mode is LightMode.WHITE:
        return WHITE
    return TRANSPARENT


@dataclass(frozen=True, slots=True)
class StatusResponse:
    """A decoded status reply."""

    raw: bytes
    is_on: bool
    mode: LightMode
    color: Color

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> StatusResponse:
        """Decode a status reply.

        Bytes past the fixed length are ignored.

        Raises:
            LightResponseError: if fewer than 14 bytes were received.
        """
        if len(data) < const.STATUS_RESPONSE_LENGTH:
            raise LightResponseError(
                f"Status reply too short: expected {const.STATUS_RESPONSE_LENGTH} "
                f"bytes, got {len(data)} ({bytes(data).hex(' ')})"
            )
        raw = bytes(data[: const.STATUS_RESPONSE_LENGTH])
        mode = decode_mode(raw[MODE_OFFSET])
        return cls(
            raw=raw,
            is_on=decode_power_state(raw[POWER_OFFSET]),
            mode=mode,
            color=decode_color(mode, raw),
        )
