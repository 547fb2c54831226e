""" Gameplay modifiers. The legacy client encodes the selected modifiers as
    a single integer bitflag (:class:`LegacyMods`); each rule variant has
    its own native set of :class:`Mod` instances, and knows how to translate
    the legacy bitflag into that set.
"""

from __future__ import annotations

import enum
from typing import Iterable, List, Optional


class LegacyMods(enum.IntFlag):
    """ The bit assignments used by the legacy client. Several flags are
        composites: a Nightcore selection also sets the DoubleTime bit, and
        a Perfect selection also sets the SuddenDeath bit.
    """

    NONE = 0
    NoFail = 1 << 0
    Easy = 1 << 1
    TouchDevice = 1 << 2
    Hidden = 1 << 3
    HardRock = 1 << 4
    SuddenDeath = 1 << 5
    DoubleTime = 1 << 6
    Relax = 1 << 7
    HalfTime = 1 << 8
    Nightcore = 1 << 9 | 1 << 6
    Flashlight = 1 << 10
    Autoplay = 1 << 11
    SpunOut = 1 << 12
    Autopilot = 1 << 13
    Perfect = 1 << 14 | 1 << 5
    Key4 = 1 << 15
    Key5 = 1 << 16
    Key6 = 1 << 17
    Key7 = 1 << 18
    Key8 = 1 << 19
    FadeIn = 1 << 20
    Random = 1 << 21
    Cinema = 1 << 22
    Target = 1 << 23
    Key9 = 1 << 24
    KeyCoop = 1 << 25
    Key1 = 1 << 26
    Key3 = 1 << 27
    Key2 = 1 << 28
    ScoreV2 = 1 << 29
    Mirror = 1 << 30

    KeyMod = Key1 | Key2 | Key3 | Key4 | Key5 | Key6 | Key7 | Key8 | Key9 | KeyCoop


class Mod:
    """ A native modifier. The difficulty-relevant effects are described
        declaratively: *clock_rate* scales the passage of time, and the
        remaining attributes adjust the chart's difficulty settings.
    """

    def __init__(self, acronym, name, clock_rate=1.0, setting_scale=1.0, circle_size_scale=1.0, key_count=None):
        self.acronym = acronym
        self.name = name
        self.clock_rate = clock_rate
        self.setting_scale = setting_scale
        self.circle_size_scale = circle_size_scale
        self.key_count = key_count


    def __repr__(self):
        return '<Mod ' + self.acronym + '>'


    def __eq__(self, other):
        if isinstance(other, Mod):
            return self.acronym == other.acronym
        return NotImplemented


    def __hash__(self):
        return hash(self.acronym)


# end of class Mod


NoFail = Mod('NF', 'No Fail')
Easy = Mod('EZ', 'Easy', setting_scale=0.5, circle_size_scale=0.5)
TouchDevice = Mod('TD', 'Touch Device')
Hidden = Mod('HD', 'Hidden')
HardRock = Mod('HR', 'Hard Rock', setting_scale=1.4, circle_size_scale=1.3)
SuddenDeath = Mod('SD', 'Sudden Death')
Perfect = Mod('PF', 'Perfect')
DoubleTime = Mod('DT', 'Double Time', clock_rate=1.5)
Nightcore = Mod('NC', 'Nightcore', clock_rate=1.5)
HalfTime = Mod('HT', 'Half Time', clock_rate=0.75)
Relax = Mod('RX', 'Relax')
Autopilot = Mod('AP', 'Autopilot')
Flashlight = Mod('FL', 'Flashlight')
Autoplay = Mod('AT', 'Autoplay')
Cinema = Mod('CN', 'Cinema')
SpunOut = Mod('SO', 'Spun Out')
Target = Mod('TP', 'Target Practice')
FadeIn = Mod('FI', 'Fade In')
Random = Mod('RD', 'Random')
Mirror = Mod('MR', 'Mirror')
DualStages = Mod('DS', 'Dual Stages')
ScoreV2 = Mod('SV2', 'Score V2')

Keys = dict()
for _count in range(1, 10):
    Keys[_count] = Mod('%dK' % (_count), '%d Keys' % (_count), key_count=_count)


# Legacy flags that map one-to-one onto a native mod, in the order the
# native mods are reported. The composite flags are handled separately
# in convert_from_legacy().

_simple = (
    (LegacyMods.NoFail, NoFail),
    (LegacyMods.Easy, Easy),
    (LegacyMods.TouchDevice, TouchDevice),
    (LegacyMods.Hidden, Hidden),
    (LegacyMods.HardRock, HardRock),
    (LegacyMods.HalfTime, HalfTime),
    (LegacyMods.Relax, Relax),
    (LegacyMods.Autopilot, Autopilot),
    (LegacyMods.Flashlight, Flashlight),
    (LegacyMods.Autoplay, Autoplay),
    (LegacyMods.Cinema, Cinema),
    (LegacyMods.SpunOut, SpunOut),
    (LegacyMods.Target, Target),
    (LegacyMods.FadeIn, FadeIn),
    (LegacyMods.Random, Random),
    (LegacyMods.Mirror, Mirror),
    (LegacyMods.KeyCoop, DualStages),
    (LegacyMods.ScoreV2, ScoreV2),
    (LegacyMods.Key1, Keys[1]),
    (LegacyMods.Key2, Keys[2]),
    (LegacyMods.Key3, Keys[3]),
    (LegacyMods.Key4, Keys[4]),
    (LegacyMods.Key5, Keys[5]),
    (LegacyMods.Key6, Keys[6]),
    (LegacyMods.Key7, Keys[7]),
    (LegacyMods.Key8, Keys[8]),
    (LegacyMods.Key9, Keys[9]),
)


def convert_from_legacy(bits: int, supported: Iterable[Mod]) -> List[Mod]:
    """ Translate the legacy bitflag *bits* into native mods, keeping only
        those in the *supported* set. Flags with no native equivalent are
        silently dropped. Unknown high bits are ignored as well.
    """

    supported = set(supported)
    bits = LegacyMods(int(bits) & _known_bits)

    converted = list()

    def _add(mod):
        if mod in supported:
            converted.append(mod)

    # Composite flags take precedence over the flag they imply.

    if (bits & LegacyMods.Nightcore) == LegacyMods.Nightcore:
        _add(Nightcore)
    elif bits & LegacyMods.DoubleTime:
        _add(DoubleTime)

    if (bits & LegacyMods.Perfect) == LegacyMods.Perfect:
        _add(Perfect)
    elif bits & LegacyMods.SuddenDeath:
        _add(SuddenDeath)

    for flag, mod in _simple:
        if bits & flag:
            _add(mod)

    return converted


def clock_rate(mods: Iterable[Mod]) -> float:
    rate = 1.0
    for mod in mods:
        rate *= mod.clock_rate
    return rate


def key_count(mods: Iterable[Mod]) -> Optional[int]:
    for mod in mods:
        if mod.key_count is not None:
            return mod.key_count
    return None


# Bits 0 through 30 are assigned; anything above is ignored.

_known_bits = (1 << 31) - 1


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
