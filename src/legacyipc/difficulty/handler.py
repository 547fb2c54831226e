""" The handler servicing :class:`DifficultyCalculationRequest` messages.
    It is a total function: whatever goes wrong, the legacy client gets a
    structurally valid :class:`DifficultyCalculationResponse` back, with a
    star rating of zero standing in for any failure.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Tuple

from ..protocol.message import DifficultyCalculationRequest, DifficultyCalculationResponse
from . import ruleset as rulesetmodule
from .beatmap import WorkingBeatmap


class DifficultyCalculationHandler:
    """ Resolve the rule variant, translate the legacy modifiers, load the
        chart, and run the variant's difficulty calculator.

        *rulesets* maps a legacy ruleset id to a
        :class:`legacyipc.difficulty.ruleset.Ruleset` (raising for unknown
        ids); *load* builds a working beatmap from a path and a ruleset.
        Both default to the built-in implementations.
    """

    def __init__(self, rulesets: Optional[Callable] = None, load: Optional[Callable] = None, log: Optional[logging.Logger] = None):

        if rulesets is None:
            rulesets = rulesetmodule.resolve

        if load is None:
            load = WorkingBeatmap.from_file

        if log is None:
            log = logging.getLogger(__name__)

        self.rulesets = rulesets
        self.load = load
        self.log = log


    def __call__(self, request: DifficultyCalculationRequest) -> DifficultyCalculationResponse:
        return self.handle(request)


    def calculate(self, request: DifficultyCalculationRequest) -> float:
        """ Return the star rating for *request*. Unlike :func:`handle`,
            any failure is raised to the caller.
        """

        ruleset = self.rulesets(request.ruleset_id)
        mods = ruleset.convert_from_legacy_mods(request.mods)
        beatmap = self.load(request.beatmap_file, ruleset)

        calculator = ruleset.create_difficulty_calculator(beatmap)
        star_rating = calculator.calculate(mods).star_rating

        # Calculators are pluggable; nothing but a finite, non-negative
        # number may reach the wire.

        try:
            star_rating = float(star_rating)
        except (TypeError, ValueError):
            raise ArithmeticError('star rating is not a number: ' + repr(star_rating)) from None

        if math.isfinite(star_rating) == False or star_rating < 0:
            raise ArithmeticError('star rating is out of range: ' + repr(star_rating))

        return star_rating


    def evaluate(self, request: DifficultyCalculationRequest) -> Tuple[DifficultyCalculationResponse, Optional[Exception]]:
        """ Return the response for *request* along with the exception that
            caused a failure, if any. The second element is the only way to
            tell a failed calculation from a chart that legitimately rates
            zero stars; it never goes on the wire.
        """

        try:
            star_rating = self.calculate(request)
            response = DifficultyCalculationResponse(star_rating=star_rating)
        except Exception as e:
            return DifficultyCalculationResponse(), e

        return response, None


    def handle(self, request: DifficultyCalculationRequest) -> DifficultyCalculationResponse:

        response, error = self.evaluate(request)

        if error is None:
            self.log.info('ruleset %d, mods %d, %s: %.4f stars', request.ruleset_id, request.mods, request.beatmap_file, response.star_rating)
        else:
            self.log.warning('difficulty calculation failed for %r: %s: %s', request.beatmap_file, type(error).__name__, error)
            self.log.debug('difficulty calculation failure detail', exc_info=error)

        return response


# end of class DifficultyCalculationHandler


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
