""" The type registry maps envelope tags to payload schemas, and request
    variants to the handlers that service them. The two lookups are kept
    separate on purpose: the tag decides *which shape* a payload has, the
    runtime class of the decoded value decides *which behavior* applies.

    A registry is populated at startup and then sealed; after that it is
    read-only and may be shared by any number of connections without
    locking.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Type

import msgspec

from .. import json
from . import envelope
from . import message
from .errors import SchemaMismatch, UnknownType


Handler = Callable[[Any], Optional[Any]]


class Registry:
    """ Associates tags with :class:`msgspec.Struct` schemas, and schemas
        with handlers. The optional *log* is a :class:`logging.Logger` used
        for diagnostics only.
    """

    def __init__(self, log: Optional[logging.Logger] = None):

        if log is None:
            log = logging.getLogger(__name__)

        self.log = log
        self.sealed = False

        self._by_tag: Dict[str, Type] = {}
        self._by_schema: Dict[Type, str] = {}
        self._handlers: Dict[Type, Handler] = {}


    def __contains__(self, tag):
        return tag in self._by_tag


    def _check_sealed(self):
        if self.sealed:
            raise RuntimeError('the registry is sealed, no further changes are allowed')


    def register(self, schema: Type, tag: Optional[str] = None) -> str:
        """ Register *schema* under *tag*; the tag defaults to the class name
            of the schema. Registering the same pair twice is harmless,
            registering a different schema under an existing tag is not.
        """

        self._check_sealed()

        if tag is None:
            tag = schema.__name__

        if tag == '':
            raise ValueError('tags must be non-empty strings')

        existing = self._by_tag.get(tag)
        if existing is not None and existing is not schema:
            raise ValueError('tag %r is already registered to %s' % (tag, existing.__name__))

        self._by_tag[tag] = schema
        self._by_schema[schema] = tag
        return tag


    def on(self, schema: Type, handler: Handler) -> None:
        """ Bind *handler* to the request variant *schema*. The handler
            receives the decoded value and returns either a message to send
            back, or None for no response.
        """

        self._check_sealed()

        if schema not in self._by_schema:
            raise KeyError('schema is not registered: ' + schema.__name__)

        self._handlers[schema] = handler


    def seal(self) -> 'Registry':
        self.sealed = True
        return self


    def schema(self, tag: str) -> Type:
        try:
            return self._by_tag[tag]
        except KeyError:
            raise UnknownType(tag) from None


    def tag(self, value: Any) -> str:
        try:
            return self._by_schema[type(value)]
        except KeyError:
            raise UnknownType(type(value).__name__) from None


    def decode_payload(self, tag: str, raw) -> Any:
        """ Decode the opaque *raw* payload according to the schema
            registered for *tag*. Raises :class:`UnknownType` if there is no
            such schema, :class:`SchemaMismatch` if the payload does not fit.
        """

        schema = self.schema(tag)

        try:
            return json.decode(raw, schema=schema)
        except msgspec.DecodeError as e:
            # ValidationError is a subclass of DecodeError; both mean the
            # payload cannot be coerced into the registered shape.
            raise SchemaMismatch(tag, _as_bytes(raw), e) from e


    def decode(self, frame) -> Any:
        """ Decode a complete envelope into a typed value.
        """

        env = envelope.decode(frame)
        return self.decode_payload(env.type, env.data)


    def encode(self, value: Any) -> bytes:
        """ Tag *value* with its registered name and return the complete
            envelope, ready to be framed and sent.
        """

        return envelope.encode(self.tag(value), value)


    def dispatch(self, value: Any) -> Optional[Any]:
        """ Hand *value* to the handler bound to its runtime class, and
            return whatever the handler returns. A well-formed value with
            no bound handler is ignored: nothing is raised, and None is
            returned.
        """

        try:
            handler = self._handlers[type(value)]
        except KeyError:
            self.log.debug('unhandled message kind: %s', type(value).__name__)
            return None

        return handler(value)


# end of class Registry



def _as_bytes(raw):
    if isinstance(raw, str):
        return raw.encode()
    return bytes(raw)



def default(log: Optional[logging.Logger] = None) -> Registry:
    """ Return a new, unsealed :class:`Registry` with every known message
        kind registered under its canonical tag. No handlers are bound.
    """

    registry = Registry(log)

    for tag, schema in message.KINDS:
        registry.register(schema, tag)

    return registry


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
