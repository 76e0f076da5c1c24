"""TCP transport to a single Magic Home light."""
from __future__ import annotations

import asyncio
import logging

from magichome import const, protocol
from magichome.errors import LightConnectionError, LightStateError

_LOGGER = logging.getLogger(__name__)


class LightConnection:
    """Owns the stream to one light: open, framed send, timed receive, close."""

    def __init__(self, host: str, port: int = const.DEFAULT_PORT) -> None:
        self._host = host
        self._port = port
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def connected(self) -> bool:
        """Return whether the stream is open."""
        return self._writer is not None and not self._writer.is_closing()

    async def open(self, timeout: float | None = None) -> None:
        """Open the stream. One attempt, no retry.

        Raises:
            LightConnectionError: if the light cannot be reached.
        """
        if self.connected:
            return
        _LOGGER.debug("Connecting to %s:%s", self._host, self._port)
        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(self._host, self._port), timeout=timeout
            )
        except (OSError, asyncio.TimeoutError) as err:
            _LOGGER.error(
                "Connection to %s:%s failed: %s", self._host, self._port, err
            )
            await self.close()
            raise LightConnectionError(
                self._host,
                f"Not able to connect to light with IP address {self._host}: {err}",
            ) from err

        if not self.connected:
            await self.close()
            raise LightConnectionError(self._host)
        _LOGGER.info("Connected to light at %s:%s", self._host, self._port)

    def _require_open(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        if self._reader is None or self._writer is None:
            raise LightStateError(f"Light at {self._host} is not connected")
        return self._reader, self._writer

    async def send(self, payload: bytes, use_checksum: bool = True) -> None:
        """Frame ``payload`` and write it in one piece."""
        _, writer = self._require_open()
        data = protocol.frame(payload, use_checksum)
        _LOGGER.debug("%s <= %s", self._host, data.hex(" "))
        writer.write(data)
        await writer.drain()

    async def receive(self, timeout: float | None = const.DEFAULT_RECEIVE_TIMEOUT) -> bytes:
        """Read one status-sized buffer, waiting at most ``timeout`` seconds.

        The byte count is not checked here; a short read returns fewer bytes.

        Raises:
            asyncio.TimeoutError: if nothing arrives in time.
        """
        reader, _ = self._require_open()
        data = await asyncio.wait_for(
            reader.read(const.STATUS_RESPONSE_LENGTH), timeout=timeout
        )
        _LOGGER.debug("%s => %s", self._host, data.hex(" "))
        return data

    async def close(self) -> None:
        """Close the stream. Safe to call more than once."""
        writer = self._writer
        self._reader = None
        self._writer = None
        if writer is None:
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as err:
            _LOGGER.debug("Error while closing %s: %s", self._host, err)
        _LOGGER.info("Disconnected from light at %s", self._host)
