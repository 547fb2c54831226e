""" The outer envelope of every message: a JSON object with exactly two
    fields, a string type tag and an opaque payload::

        {"type": "DifficultyCalculationRequest", "data": {...}}

    The codec here never looks inside ``data``; interpreting the payload is
    the job of the :class:`legacyipc.protocol.registry.Registry`, which knows
    which schema belongs to which tag.
"""

from __future__ import annotations

from typing import Annotated, Any

import msgspec

from .. import json
from . import fields
from .errors import MalformedEnvelope


Tag = Annotated[str, msgspec.Meta(min_length=1)]


class Envelope(msgspec.Struct, frozen=True, rename={"type": fields.TYPE, "data": fields.DATA}):
    """ A tagged container for one message. The *data* field is kept as a
        :class:`msgspec.Raw` so that decoding the envelope never commits to
        a payload shape.
    """

    type: Tag
    data: msgspec.Raw


def wrap(tag: str, payload: Any) -> Envelope:
    """ Build an :class:`Envelope` for *payload*, which may be a message
        struct, any JSON-serializable value, or JSON that has already been
        encoded (bytes or :class:`msgspec.Raw`).
    """

    if not isinstance(tag, str) or tag == '':
        raise ValueError('envelope type must be a non-empty string')

    if isinstance(payload, msgspec.Raw):
        data = payload
    elif isinstance(payload, (bytes, bytearray, memoryview)):
        data = msgspec.Raw(bytes(payload))
    else:
        data = msgspec.Raw(json.dumps(payload))

    return Envelope(type=tag, data=data)


def encode(tag: str, payload: Any) -> bytes:
    """ Return the wire representation of *payload* tagged with *tag*.
        This is the exact structural inverse of :func:`decode`.
    """

    return encode_envelope(wrap(tag, payload))


def encode_envelope(envelope: Envelope) -> bytes:
    return json.dumps(envelope)


def decode(frame) -> Envelope:
    """ Parse the outer envelope from *frame*. Anything that is not a JSON
        object with a non-empty string ``type`` and a ``data`` value raises
        :class:`MalformedEnvelope`; the content of ``data`` is not checked.
    """

    try:
        return json.decode(frame, schema=Envelope)
    except (msgspec.DecodeError, TypeError) as e:
        raise MalformedEnvelope(str(e)) from e


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
