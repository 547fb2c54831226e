""" Rule variants. The legacy client identifies a variant by a small integer;
    :func:`resolve` is the only place that mapping is made, and any integer
    outside the fixed table is rejected.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from . import calculator as calculators
from . import mods


class InvalidRulesetId(ValueError):
    """ The requested rule variant id is not one of the known variants.
    """

    def __init__(self, ruleset_id):
        ValueError.__init__(self, 'invalid ruleset id: ' + repr(ruleset_id))
        self.ruleset_id = ruleset_id


class Ruleset:
    """ A rule variant: how chart data is interpreted, which modifiers
        exist, and how difficulty is calculated. The *calculator* argument
        replaces the default :class:`calculators.DifficultyCalculator`
        subclass for this variant; it is called with the ruleset and the
        working beatmap, and must return an object with a ``calculate(mods)``
        method.
    """

    id = None
    short_name = None
    name = None

    calculator = calculators.DifficultyCalculator
    supported_mods = ()

    def __init__(self, calculator=None):
        if calculator is not None:
            self.calculator = calculator


    def __repr__(self):
        return '<Ruleset %d %s>' % (self.id, self.short_name)


    def convert_from_legacy_mods(self, bits: int) -> List[mods.Mod]:
        return mods.convert_from_legacy(bits, self.supported_mods)


    def create_difficulty_calculator(self, beatmap):
        return self.calculator(self, beatmap)


# end of class Ruleset


_common = (
    mods.NoFail, mods.Easy, mods.Hidden, mods.HardRock, mods.SuddenDeath,
    mods.Perfect, mods.DoubleTime, mods.Nightcore, mods.HalfTime,
    mods.Flashlight, mods.Autoplay, mods.Cinema, mods.ScoreV2,
)


class OsuRuleset(Ruleset):
    id = 0
    short_name = 'osu'
    name = 'osu!'
    calculator = calculators.OsuDifficultyCalculator
    supported_mods = _common + (
        mods.TouchDevice, mods.Relax, mods.Autopilot, mods.SpunOut, mods.Target,
    )


class TaikoRuleset(Ruleset):
    id = 1
    short_name = 'taiko'
    name = 'osu!taiko'
    calculator = calculators.TaikoDifficultyCalculator
    supported_mods = _common + (mods.Relax, mods.Random)


class CatchRuleset(Ruleset):
    id = 2
    short_name = 'fruits'
    name = 'osu!catch'
    calculator = calculators.CatchDifficultyCalculator
    supported_mods = _common + (mods.Relax, mods.Mirror)


class ManiaRuleset(Ruleset):
    id = 3
    short_name = 'mania'
    name = 'osu!mania'
    calculator = calculators.ManiaDifficultyCalculator
    supported_mods = _common + (
        mods.FadeIn, mods.Random, mods.Mirror, mods.DualStages,
    ) + tuple(mods.Keys.values())


VARIANTS = (OsuRuleset, TaikoRuleset, CatchRuleset, ManiaRuleset)


class RulesetStore:
    """ The fixed table of rule variants, indexed by their legacy id. A
        custom table can be supplied as *rulesets*, for example to swap in
        a different calculator for one variant.
    """

    def __init__(self, rulesets: Iterable[Ruleset] = None):

        if rulesets is None:
            rulesets = [variant() for variant in VARIANTS]

        self._by_id: Dict[int, Ruleset] = dict()
        for ruleset in rulesets:
            self._by_id[ruleset.id] = ruleset


    def __call__(self, ruleset_id):
        return self.resolve(ruleset_id)


    def __iter__(self):
        return iter(self._by_id.values())


    def resolve(self, ruleset_id) -> Ruleset:

        # bool is an int subclass; True is not a ruleset id.

        if isinstance(ruleset_id, bool) or not isinstance(ruleset_id, int):
            raise InvalidRulesetId(ruleset_id)

        try:
            return self._by_id[ruleset_id]
        except KeyError:
            raise InvalidRulesetId(ruleset_id) from None


# end of class RulesetStore


_default = RulesetStore()


def resolve(ruleset_id) -> Ruleset:
    """ Return the :class:`Ruleset` for the legacy *ruleset_id* (0-3), or
        raise :class:`InvalidRulesetId`.
    """

    return _default.resolve(ruleset_id)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
