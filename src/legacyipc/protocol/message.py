""" Typed representations of the messages exchanged with the legacy client.
    Each message kind is a frozen :class:`msgspec.Struct`; the attribute
    names are the Python spelling, and the wire names are the camelCase
    spelling the legacy peer expects (``rulesetId``, ``beatmapFile``, ...).

    Adding a message kind means adding a struct here, listing it in
    :data:`KINDS`, and binding a handler for it in the
    :class:`legacyipc.protocol.registry.Registry`; nothing in the envelope
    codec or the transport changes.
"""

from __future__ import annotations

from typing import Annotated, Union

import msgspec

from . import fields


class Message(msgspec.Struct, frozen=True, rename="camel"):
    """ Common base for every message kind. Messages are immutable once
        constructed, and exist only for the duration of one exchange.
    """


class DifficultyCalculationRequest(Message, frozen=True, rename="camel"):
    """ Ask for the star rating of the chart in *beatmap_file*, interpreted
        under the rule variant *ruleset_id* (0-3) with the legacy modifier
        bitflag *mods* applied.
    """

    ruleset_id: int
    mods: int
    beatmap_file: str


class DifficultyCalculationResponse(Message, frozen=True, rename="camel"):
    """ The star rating computed for a :class:`DifficultyCalculationRequest`.
        A rating of zero doubles as the "calculation failed" sentinel; the
        legacy client cannot interpret anything richer.
    """

    star_rating: Annotated[float, msgspec.Meta(ge=0)] = 0.0


# The closed set of request kinds that the dispatcher routes to handlers.
# Responses are registered too, so that the requesting side can decode
# them, but they never reach a handler on the serving side.

Request = Union[DifficultyCalculationRequest]

KINDS = (
    (fields.DIFFICULTY_REQUEST, DifficultyCalculationRequest),
    (fields.DIFFICULTY_RESPONSE, DifficultyCalculationResponse),
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
