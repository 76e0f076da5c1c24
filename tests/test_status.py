"""Tests for status reply decoding."""
from __future__ import annotations

import pytest

from magichome import status
from magichome.errors import LightResponseError
from magichome.status import TRANSPARENT, WHITE, Color, LightMode, StatusResponse

from .conftest import make_status


def test_power_on_code() -> None:
    assert status.decode_power_state(0x23) is True


@pytest.mark.parametrize("code", [0x24, 0x00, 0x22, 0xFF])
def test_other_power_codes_read_as_off(code: int) -> None:
    assert status.decode_power_state(code) is False


@pytest.mark.parametrize(
    ("code", "mode"),
    [
        (0x61, LightMode.COLOR),
        (0x62, LightMode.COLOR),
        (0x41, LightMode.COLOR),
        (0x60, LightMode.CUSTOM),
        (0x2A, LightMode.PRESET),
        (0x2F, LightMode.PRESET),
        (0x25, LightMode.PRESET),
        (0x29, LightMode.PRESET),
        (0x30, LightMode.PRESET),
        (0x38, LightMode.PRESET),
        (0x00, LightMode.UNKNOWN),
        (0x19, LightMode.UNKNOWN),
        (0x22, LightMode.UNKNOWN),
        (0x24, LightMode.UNKNOWN),
        (0x39, LightMode.UNKNOWN),
        (0x63, LightMode.UNKNOWN),
        (0xFF, LightMode.UNKNOWN),
    ],
)
def test_decode_mode(code: int, mode: LightMode) -> None:
    assert status.decode_mode(code) is mode


def test_color_mode_reads_rgb_bytes() -> None:
    data = make_status(mode=0x61, rgb=(0, 128, 255))
    assert status.decode_color(LightMode.COLOR, data) == Color(0, 128, 255)


def test_white_mode_reports_white() -> None:
    data = make_status(rgb=(1, 2, 3))
    assert status.decode_color(LightMode.WHITE, data) == WHITE


@pytest.mark.parametrize(
    "mode", [LightMode.CUSTOM, LightMode.PRESET, LightMode.UNKNOWN]
)
def test_other_modes_report_transparent(mode: LightMode) -> None:
    color = status.decode_color(mode, make_status())
    assert color == TRANSPARENT
    assert color.alpha == 0


def test_from_bytes() -> None:
    response = StatusResponse.from_bytes(make_status(0x23, 0x61, (9, 8, 7)))
    assert response.is_on is True
    assert response.mode is LightMode.COLOR
    assert response.color.rgb == (9, 8, 7)
    assert len(response.raw) == 14


def test_from_bytes_off_preset() -> None:
    response = StatusResponse.from_bytes(make_status(0x24, 0x2B, (9, 8, 7)))
    assert response.is_on is False
    assert response.mode is LightMode.PRESET
    assert response.color == TRANSPARENT


def test_from_bytes_ignores_trailing_bytes() -> None:
    data = make_status() + b"\x00\x01"
    assert StatusResponse.from_bytes(data).raw == make_status()


def test_from_bytes_rejects_short_reply() -> None:
    with pytest.raises(LightResponseError):
        StatusResponse.from_bytes(make_status()[:9])
    with pytest.raises(LightResponseError):
        StatusResponse.from_bytes(b"")
