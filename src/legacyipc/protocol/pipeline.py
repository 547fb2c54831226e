""" The receive pipeline: one inbound frame in, at most one outbound frame
    out. A :class:`Pipeline` instance carries no per-message state beyond
    the diagnostic :attr:`Pipeline.state`, and a transport is expected to
    use one instance per connection so that messages on a connection are
    processed strictly in order.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional

from . import envelope
from .errors import MalformedEnvelope, SchemaMismatch, UnknownType
from .registry import Registry


class State(enum.Enum):
    IDLE = 'idle'
    ENVELOPE_DECODING = 'envelope decoding'
    PAYLOAD_DECODING = 'payload decoding'
    DISPATCHING = 'dispatching'
    RESPONSE_ENCODING = 'response encoding'


class Pipeline:
    """ Decode, dispatch, and re-encode individual messages using the
        supplied :class:`Registry`. Failures to decode a message are
        logged and the message is dropped; they never propagate to the
        caller, and they never affect the handling of later messages.
    """

    def __init__(self, registry: Registry, log: Optional[logging.Logger] = None):

        if log is None:
            log = logging.getLogger(__name__)

        self.registry = registry
        self.log = log
        self.state = State.IDLE


    def incoming(self, frame: bytes) -> Optional[bytes]:
        """ Process a single inbound *frame*. Returns the encoded response
            envelope, or None if nothing should be sent back.
        """

        try:
            return self._incoming(frame)
        finally:
            self.state = State.IDLE


    def _incoming(self, frame):

        self.log.debug('processing legacy IPC message: %r', frame)

        self.state = State.ENVELOPE_DECODING

        try:
            env = envelope.decode(frame)
        except MalformedEnvelope as e:
            self.log.warning('dropping malformed envelope (%s): %r', e, frame)
            return None

        self.state = State.PAYLOAD_DECODING

        try:
            request = self.registry.decode_payload(env.type, env.data)
        except UnknownType:
            self.log.debug('dropping message of unknown type %r', env.type)
            return None
        except SchemaMismatch as e:
            self.log.warning('dropping message: %s: %r', e, e.raw)
            return None

        # Handlers are expected to absorb their own failures. Anything that
        # escapes is still confined to this one message.

        try:
            self.state = State.DISPATCHING
            result = self.registry.dispatch(request)

            if result is None:
                return None

            self.state = State.RESPONSE_ENCODING
            return self.registry.encode(result)

        except Exception:
            self.log.exception('processing legacy IPC message failed: %r', frame)
            return None


# end of class Pipeline


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
