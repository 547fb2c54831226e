from . import errors
from . import fields
from . import message
from . import envelope
from . import registry
from . import pipeline

from .envelope import Envelope
from .errors import ProtocolError, MalformedEnvelope, UnknownType, SchemaMismatch
from .message import DifficultyCalculationRequest, DifficultyCalculationResponse
from .pipeline import Pipeline
from .registry import Registry


"""
legacyipc Protocol Layer
========================

This package defines the transport-agnostic message protocol spoken with
the legacy client: the envelope, the typed message kinds, the registry that
ties the two together, and the receive pipeline.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Transport (legacyipc.transport)
    Moves length-prefixed frames over TCP

    │
    ▼
Receive Pipeline (pipeline.py)
    One frame in, at most one frame out
    - Drops malformed or unknown messages
    - Never raises for a bad message

    │
    ▼
Type Registry (registry.py)
    Tag -> schema, variant -> handler
    - decode_payload()
    - dispatch()
    - encode()

    │
    ▼
Envelope Codec (envelope.py)
    {"type": <tag>, "data": <opaque payload>}
    Never inspects the payload

    │
    ▼
Message Model (message.py)
    Immutable typed message kinds
    - DifficultyCalculationRequest
    - DifficultyCalculationResponse

    │
    ▼
Field Vocabulary (fields.py)
    Canonical names for envelope fields and tags

---------------------------------------------------------------------

Design Principles
-----------------

1. Transport Agnostic
   Frames are plain bytes; the protocol never sees a socket.

2. Shape and Behavior are Separate
   The tag selects the schema, the decoded variant selects the handler.
   A new message kind is a struct plus a handler, nothing more.

3. Failures are Per-Message
   A bad message is dropped; the next message is processed normally.

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
