""" Difficulty calculation for the legacy bridge: rule variants, legacy
    modifier translation, chart loading, the strain-based calculators, and
    the message handler tying them together.
"""

from . import mods
from . import beatmap
from . import calculator
from . import ruleset
from . import handler

from .beatmap import BeatmapError, WorkingBeatmap
from .handler import DifficultyCalculationHandler
from .ruleset import InvalidRulesetId, Ruleset, RulesetStore, resolve

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
