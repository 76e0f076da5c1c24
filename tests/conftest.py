"""Shared fixtures: a fake light listening on localhost."""
from __future__ import annotations

import asyncio
import socket
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio

from magichome import protocol

# Payload length per opcode, without checksum.
_PAYLOAD_LENGTHS = {0x81: 3, 0x71: 3, 0x41: 7}


def make_status(
    power: int = 0x23,
    mode: int = 0x61,
    rgb: tuple[int, int, int] = (0x10, 0x20, 0x30),
) -> bytes:
    """Build a 14 byte status reply."""
    body = bytes([0x81, 0x25, power, mode, 0x21, 0x06, *rgb, 0x00, 0x01, 0x00, 0x0F])
    return body + bytes([protocol.checksum(body)])


class FakeLight:
    """Minimal device: records frames and answers status queries."""

    def __init__(self, use_checksum: bool = True) -> None:
        self.use_checksum = use_checksum
        self.status = make_status()
        self.respond = True
        self.frames: list[bytes] = []
        self.port = 0
        self._server: asyncio.AbstractServer | None = None
        self._writers: list[asyncio.StreamWriter] = []
        self._cond = asyncio.Condition()

    @property
    def queries(self) -> list[bytes]:
        return [f for f in self.frames if f[0] == 0x81]

    @property
    def commands(self) -> list[bytes]:
        return [f for f in self.frames if f[0] != 0x81]

    async def start(self) -> None:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        self.port = self._server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        for writer in self._writers:
            writer.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def wait_for_frames(self, count: int, timeout: float = 2.0) -> list[bytes]:
        async with self._cond:
            await asyncio.wait_for(
                self._cond.wait_for(lambda: len(self.frames) >= count), timeout
            )
        return self.frames

    async def _handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self._writers.append(writer)
        buffer = bytearray()
        extra = 1 if self.use_checksum else 0
        while True:
            chunk = await reader.read(1024)
            if not chunk:
                break
            buffer.extend(chunk)
            while buffer:
                length = _PAYLOAD_LENGTHS.get(buffer[0], len(buffer)) + extra
                if len(buffer) < length:
                    break
                frame = bytes(buffer[:length])
                del buffer[:length]
                async with self._cond:
                    self.frames.append(frame)
                    self._cond.notify_all()
                if frame[0] == 0x81 and self.respond:
                    writer.write(self.status)
                    await writer.drain()
        writer.close()


@pytest_asyncio.fixture
async def fake_light() -> AsyncIterator[FakeLight]:
    device = FakeLight()
    await device.start()
    yield device
    await device.stop()


@pytest.fixture
def unused_port() -> int:
    """Return a localhost port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
