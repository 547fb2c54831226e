"""Length-prefixed framing for the legacy TCP IPC stream.

Each message on the wire is a 4-byte little-endian signed length, followed
by exactly that many bytes of UTF-8 JSON:

    [length: int32 LE][envelope JSON ...]

TCP preserves order but not message boundaries; :class:`FrameBuffer`
reassembles complete frames from however the bytes happen to arrive.
"""

from __future__ import annotations

import struct
from typing import List

from .base import FramingError


_HEADER = struct.Struct('<i')

HEADER_SIZE = _HEADER.size

# Default upper bound on a single frame, in bytes.

MAX_FRAME = 16 * 1024 * 1024


def pack(frame: bytes) -> bytes:
    """Prefix *frame* with its length."""

    if len(frame) > 0x7FFFFFFF:
        raise FramingError('frame too large to encode: %d bytes' % (len(frame)))

    return _HEADER.pack(len(frame)) + frame


class FrameBuffer:
    """Accumulate stream bytes and split them into complete frames."""

    def __init__(self, max_frame: int = MAX_FRAME):
        self.max_frame = max_frame
        self._buffer = bytearray()

    def __len__(self):
        return len(self._buffer)

    def feed(self, chunk: bytes) -> List[bytes]:
        """Append *chunk* and return every frame it completes, in order.

        A negative or oversize length means the stream can no longer be
        interpreted; :class:`FramingError` is raised and the buffer is left
        as-is, so the caller is expected to drop the connection.
        """

        self._buffer += chunk
        frames = list()

        while len(self._buffer) >= HEADER_SIZE:
            (length,) = _HEADER.unpack_from(self._buffer)

            if length < 0 or length > self.max_frame:
                raise FramingError('invalid frame length: %d' % (length))

            end = HEADER_SIZE + length
            if len(self._buffer) < end:
                break

            frames.append(bytes(self._buffer[HEADER_SIZE:end]))
            del self._buffer[:end]

        return frames
