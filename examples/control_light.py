#!/usr/bin/env python
"""Connect to a Magic Home light, switch it on, set a color and switch it off."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os

from magichome import const
from magichome.debug_magichome import _env_bool, _env_float, _env_int
from magichome.errors import LightConnectionError
from magichome.light import Light


def _parse_color(value: str) -> tuple[int, int, int]:
    parts = value.split(",")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError("color must be R,G,B")
    try:
        rgb = tuple(int(part) for part in parts)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"invalid color {value!r}") from err
    if not all(0 <= channel <= 255 for channel in rgb):
        raise argparse.ArgumentTypeError("color channels must be 0-255")
    return rgb  # type: ignore[return-value]


async def run(args: argparse.Namespace) -> None:
    """Run the control example."""
    host = args.host or input("Enter IP address of light:\n").strip()
    light = Light(
        host,
        port=args.port,
        use_checksum=not args.no_checksum,
        receive_timeout=args.timeout,
    )

    try:
        await light.connect()
    except (LightConnectionError, OSError, asyncio.TimeoutError) as exc:
        print(f"connect failed: {exc}")
        return

    try:
        await light.turn_on()
        print(json.dumps(light.as_dict(), indent=2))

        await light.set_color(*args.color)
        await light.turn_off()

        if args.restore:
            await light.restore()
        print(json.dumps(light.as_dict(), indent=2))
    finally:
        await light.disconnect()


def parse_args() -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Control a Magic Home WiFi LED controller."
    )
    parser.add_argument(
        "--host",
        default=os.environ.get(const.ENV_HOST),
        help=f"Light IP address (env: {const.ENV_HOST}); prompted when missing",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=_env_int(const.ENV_PORT, const.DEFAULT_PORT),
        help=f"Light TCP port (env: {const.ENV_PORT}, default: {const.DEFAULT_PORT})",
    )
    parser.add_argument(
        "--color",
        type=_parse_color,
        default=(255, 255, 255),
        help="Color to set as R,G,B (default: 255,255,255)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=_env_float(const.ENV_TIMEOUT, const.DEFAULT_RECEIVE_TIMEOUT),
        help=f"Status read timeout in seconds (env: {const.ENV_TIMEOUT})",
    )
    parser.add_argument(
        "--no-checksum",
        action="store_true",
        default=not _env_bool(const.ENV_CHECKSUM, True),
        help=f"Do not append the checksum byte to outgoing frames (env: {const.ENV_CHECKSUM}=0)",
    )
    parser.add_argument(
        "--restore",
        action="store_true",
        help="Restore the initial state before exiting",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_env_bool(const.ENV_DEBUG),
        help=f"Log wire traffic (env: {const.ENV_DEBUG})",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point."""
    args = parse_args()
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
