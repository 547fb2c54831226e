"""Transport layer implementations."""

from .base import (
    Channel,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportPortError,
    FramingError,
)

from . import framing
from . import stream
