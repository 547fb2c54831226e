"""Channel interface.

This is the (small) contract that a channel adapter follows: bytes in,
bytes out, over one established, ordered, connection-oriented stream. It
lives outside :mod:`legacyipc.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A receive did not complete in the time allowed."""


class TransportConnectionError(TransportError):
    """The connection could not be established, or was lost."""


class TransportPortError(TransportError):
    """The listening port could not be bound."""


class FramingError(TransportError):
    """The byte stream does not contain a valid frame length."""


class Channel(ABC):
    """Minimal contract for a bidirectional message channel."""

    @abstractmethod
    def send(self, frame: bytes) -> None:
        """Send one complete message."""

    @abstractmethod
    def receive(self, timeout: Optional[float] = None) -> bytes:
        """Block until one complete message is available, and return it."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection."""

    @property
    def is_open(self) -> bool:
        """Whether the channel is currently connected."""
        return False
