"""Debug helper for a Magic Home light.

Connects with auto refresh enabled, cycles through red, green and blue, then
restores the state the light had when the helper connected. Configured through
``MAGICHOME_*`` environment variables.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os

from magichome import const
from magichome.errors import MagicHomeError
from magichome.light import Light

CALIBRATION_COLORS = ((255, 0, 0), (0, 255, 0), (0, 0, 255))


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on", "y"}


def _env_int(name: str, default: int) -> int:
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return int(val.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return float(val.strip())
    except ValueError:
        return default


def light_from_env(host: str | None = None) -> Light:
    """Build a Light from ``MAGICHOME_*`` environment variables."""
    return Light(
        host or os.environ.get(const.ENV_HOST),
        port=_env_int(const.ENV_PORT, const.DEFAULT_PORT),
        use_checksum=_env_bool(const.ENV_CHECKSUM, True),
        receive_timeout=_env_float(const.ENV_TIMEOUT, const.DEFAULT_RECEIVE_TIMEOUT),
        auto_refresh_enabled=_env_bool(const.ENV_AUTO_REFRESH, True),
        auto_refresh_interval=_env_float(
            const.ENV_AUTO_REFRESH_INTERVAL, const.DEFAULT_AUTO_REFRESH_INTERVAL
        ),
        on_refresh_error=lambda err: print("auto-refresh-error", err),
    )


def _dump(label: str, light: Light) -> None:
    print(label, json.dumps(light.as_dict(), indent=2))


async def calibrate(light: Light, delay: float = 1.0) -> None:
    """Cycle through the calibration colors, then restore the initial state."""
    print("Calibrating...")
    for red, green, blue in CALIBRATION_COLORS:
        await light.set_color(red, green, blue)
        await asyncio.sleep(delay)
    print("Restoring state...")
    await light.restore()


async def main() -> None:
    if _env_bool(const.ENV_DEBUG):
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    light = light_from_env()
    if not light.address:
        print(f"{const.ENV_HOST} is not set")
        return
    delay = _env_float(const.ENV_CALIBRATION_DELAY, 1.0)

    try:
        await light.connect()
    except (MagicHomeError, OSError, asyncio.TimeoutError) as exc:
        print("connect-error", exc)
        return

    try:
        _dump("connected", light)
        await light.turn_on()
        await calibrate(light, delay)
        _dump("restored", light)
    except (MagicHomeError, OSError, asyncio.TimeoutError) as exc:
        print("light-error", exc)
    finally:
        await light.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
