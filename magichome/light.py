"""State mirror and control of a single Magic Home light."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from magichome import const, protocol
from magichome.connection import LightConnection
from magichome.errors import LightStateError
from magichome.scheduler import AutoRefreshScheduler
from magichome.status import TRANSPARENT, Color, LightMode, StatusResponse

_LOGGER = logging.getLogger(__name__)


class Light:
    """A WiFi LED controller reached over TCP.

    Power and color commands update the local state as soon as they are sent,
    without reading the device back. ``refresh()`` is the only call that
    overwrites the state with what the device reports.

    All transport use is serialised by one lock per light, so a scheduled
    refresh never interleaves its query and reply with a foreground command.

    Usage::

        async with Light("192.168.1.50") as light:
            await light.turn_on()
            await light.set_color(255, 0, 0)
            await light.restore()
    """

    def __init__(
        self,
        address: str | None = None,
        *,
        port: int = const.DEFAULT_PORT,
        use_checksum: bool = True,
        receive_timeout: float = const.DEFAULT_RECEIVE_TIMEOUT,
        auto_refresh_enabled: bool = False,
        auto_refresh_interval: float = const.DEFAULT_AUTO_REFRESH_INTERVAL,
        on_refresh_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self._address = address
        self._port = port
        self.use_checksum = use_checksum
        self.receive_timeout = receive_timeout
        self.auto_refresh_enabled = auto_refresh_enabled
        self.auto_refresh_interval = auto_refresh_interval
        self.on_refresh_error = on_refresh_error

        self._is_on = False
        self._color: Color = TRANSPARENT
        self._mode = LightMode.UNKNOWN
        self._initial_color: Color | None = None
        self._initial_power_state: bool | None = None

        self._connection: LightConnection | None = None
        self._scheduler: AutoRefreshScheduler | None = None
        self._io_lock = asyncio.Lock()
        self._disposed = False

    def __repr__(self) -> str:
        return (
            f"<Light {self._address} connected={self.connected} "
            f"on={self._is_on} mode={self._mode.value} color={self._color.rgb}>"
        )

    async def __aenter__(self) -> Light:
        await self.connect()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.disconnect()

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def port(self) -> int:
        return self._port

    @property
    def connected(self) -> bool:
        """Return whether the transport to the light is open."""
        return self._connection is not None and self._connection.connected

    @property
    def is_on(self) -> bool:
        return self._is_on

    @property
    def color(self) -> Color:
        """Return the last known color; only meaningful in COLOR mode."""
        return self._color

    @property
    def mode(self) -> LightMode:
        return self._mode

    @property
    def initial_color(self) -> Color | None:
        """Return the color captured right after connecting."""
        return self._initial_color

    @property
    def initial_power_state(self) -> bool | None:
        """Return the power state captured right after connecting."""
        return self._initial_power_state

    @property
    def auto_refresh_running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def connect(
        self, address: str | None = None, *, timeout: float | None = None
    ) -> None:
        """Connect, read the device state and start the auto refresh timer.

        Raises:
            LightConnectionError: if the light cannot be reached.
            LightStateError: if the light was disposed, or is already
                connected to a different address.
        """
        if self._disposed:
            raise LightStateError(
                "Light has been disconnected; create a new Light to reconnect"
            )
        if address is not None and address != self._address:
            if self.connected:
                raise LightStateError(
                    f"Light is already connected to {self._address}"
                )
            self._address = address
        if not self._address:
            raise ValueError("An address is required to connect")
        if self.connected:
            _LOGGER.warning("Light at %s is already connected", self._address)
            return

        self._connection = LightConnection(self._address, self._port)
        await self._connection.open(timeout=timeout)
        try:
            await self.refresh()
        except BaseException:
            await self._connection.close()
            raise

        if self._initial_color is None:
            self._initial_color = self._color
            self._initial_power_state = self._is_on
            _LOGGER.debug(
                "Captured initial state of %s: on=%s color=%s",
                self._address,
                self._initial_power_state,
                self._initial_color,
            )

        if self._scheduler is None:
            self._scheduler = AutoRefreshScheduler(
                self.refresh,
                self.auto_refresh_interval,
                lambda: self.auto_refresh_enabled,
                on_error=self._handle_refresh_error,
                name=self._address,
            )
        self._scheduler.start()

    async def disconnect(self) -> None:
        """Stop the auto refresh timer and release the transport.

        The light cannot be connected again afterwards.
        """
        self._disposed = True
        if self._scheduler is not None:
            await self._scheduler.stop()
        if self._connection is not None:
            await self._connection.close()

    close = disconnect

    def _handle_refresh_error(self, err: Exception) -> None:
        if self.on_refresh_error is not None:
            self.on_refresh_error(err)

    def _require_connection(self) -> LightConnection:
        if self._disposed:
            raise LightStateError("Light has been disconnected")
        if self._connection is None:
            raise LightStateError("Light is not connected; call connect() first")
        return self._connection

    async def send(self, *payload: int) -> None:
        """Send raw payload bytes, framed according to ``use_checksum``."""
        await self._send(bytes(payload))

    async def _send(self, payload: bytes) -> None:
        connection = self._require_connection()
        async with self._io_lock:
            await connection.send(payload, self.use_checksum)

    async def refresh(self) -> None:
        """Query the light and overwrite the local state with its reply.

        Raises:
            asyncio.TimeoutError: if no reply arrives within ``receive_timeout``.
            LightResponseError: if the reply is shorter than a status frame.
        """
        connection = self._require_connection()
        async with self._io_lock:
            await connection.send(protocol.status_query(), self.use_checksum)
            data = await connection.receive(self.receive_timeout)
        status = StatusResponse.from_bytes(data)
        self._is_on = status.is_on
        self._mode = status.mode
        self._color = status.color
        _LOGGER.debug(
            "Refreshed %s: on=%s mode=%s color=%s",
            self._address,
            self._is_on,
            self._mode.value,
            self._color,
        )

    async def set_power(self, on: bool) -> None:
        """Switch the light on or off."""
        await self._send(protocol.power_command(on))
        self._is_on = on

    async def turn_on(self) -> None:
        await self.set_power(True)

    async def turn_off(self) -> None:
        await self.set_power(False)

    async def set_color(self, red: int, green: int, blue: int) -> None:
        """Set a static RGB color; the light switches to COLOR mode."""
        await self._send(protocol.color_command(red, green, blue))
        self._color = Color(red, green, blue)
        self._mode = LightMode.COLOR

    async def restore(self) -> None:
        """Put back the color and power state captured when connecting.

        Raises:
            LightStateError: if no state was ever captured.
        """
        if self._initial_color is None or self._initial_power_state is None:
            raise LightStateError(
                "No initial state to restore; connect() never completed"
            )
        await self.set_color(*self._initial_color.rgb)
        await self.set_power(self._initial_power_state)

    def as_dict(self) -> dict[str, Any]:
        """Return the public state, ready for JSON serialisation."""
        return {
            "address": self._address,
            "port": self._port,
            "connected": self.connected,
            "is_on": self._is_on,
            "color": list(self._color),
            "mode": self._mode.value,
            "use_checksum": self.use_checksum,
            "receive_timeout": self.receive_timeout,
            "auto_refresh_enabled": self.auto_refresh_enabled,
            "auto_refresh_interval": self.auto_refresh_interval,
        }
