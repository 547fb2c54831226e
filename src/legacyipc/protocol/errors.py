"""Protocol error taxonomy.

Every error raised while turning bytes into a typed message derives from
:class:`ProtocolError`. These are per-message failures: the receive
pipeline drops the offending message and carries on.
"""


class ProtocolError(Exception):
    """Base class for all protocol-layer errors."""


class MalformedEnvelope(ProtocolError):
    """The outer ``{type, data}`` structure could not be parsed."""


class UnknownType(ProtocolError):
    """No schema is registered for the envelope's type tag."""

    def __init__(self, tag):
        ProtocolError.__init__(self, 'unknown type: ' + repr(tag))
        self.tag = tag


class SchemaMismatch(ProtocolError):
    """The payload does not fit the schema registered for its tag."""

    def __init__(self, tag, raw, reason=None):
        text = 'payload does not match schema for ' + repr(tag)
        if reason:
            text += ': ' + str(reason)

        ProtocolError.__init__(self, text)
        self.tag = tag
        self.raw = raw
        self.reason = reason
