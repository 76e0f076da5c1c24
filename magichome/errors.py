"""Exceptions raised by the Magic Home client."""
from __future__ import annotations


class MagicHomeError(Exception):
    """Base error for the Magic Home client."""


class LightConnectionError(MagicHomeError):
    """The light could not be reached."""

    def __init__(self, address: str, message: str | None = None) -> None:
        self.address = address
        super().__init__(
            message or f"Not able to connect to light with IP address {address}"
        )


class LightStateError(MagicHomeError):
    """The operation is not valid in the light's current lifecycle state."""


class LightResponseError(MagicHomeError):
    """The light answered with a malformed status reply."""
