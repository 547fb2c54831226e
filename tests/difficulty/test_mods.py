from legacyipc.difficulty import mods, ruleset
from legacyipc.difficulty.mods import LegacyMods


def acronyms(converted):
    return [mod.acronym for mod in converted]


def test_no_mods():
    for variant in ruleset.RulesetStore():
        assert variant.convert_from_legacy_mods(0) == []


def test_simple_flags():

    osu = ruleset.resolve(0)
    bits = LegacyMods.Hidden | LegacyMods.HardRock | LegacyMods.DoubleTime

    assert sorted(acronyms(osu.convert_from_legacy_mods(bits))) == ['DT', 'HD', 'HR']


def test_composite_flags():

    osu = ruleset.resolve(0)

    # Nightcore and Perfect each carry the bit of the mod they extend.

    assert int(LegacyMods.Nightcore) == 576
    assert int(LegacyMods.Perfect) == 16416

    assert acronyms(osu.convert_from_legacy_mods(576)) == ['NC']
    assert acronyms(osu.convert_from_legacy_mods(64)) == ['DT']
    assert acronyms(osu.convert_from_legacy_mods(16416)) == ['PF']
    assert acronyms(osu.convert_from_legacy_mods(32)) == ['SD']


def test_unsupported_flags_dropped():

    taiko = ruleset.resolve(1)
    mania = ruleset.resolve(3)
    osu = ruleset.resolve(0)

    # Key mods mean nothing outside mania; relax means nothing in mania.

    assert taiko.convert_from_legacy_mods(LegacyMods.Key4) == []
    assert mania.convert_from_legacy_mods(LegacyMods.Relax) == []
    assert osu.convert_from_legacy_mods(LegacyMods.Mirror | LegacyMods.FadeIn) == []

    assert acronyms(mania.convert_from_legacy_mods(LegacyMods.Key4 | LegacyMods.Mirror)) == ['MR', '4K']


def test_unknown_bits_ignored():

    osu = ruleset.resolve(0)

    assert osu.convert_from_legacy_mods(1 << 31) == []
    assert acronyms(osu.convert_from_legacy_mods((1 << 40) | 1)) == ['NF']


def test_clock_rate():

    assert mods.clock_rate([]) == 1.0
    assert mods.clock_rate([mods.DoubleTime]) == 1.5
    assert mods.clock_rate([mods.Nightcore, mods.Hidden]) == 1.5
    assert mods.clock_rate([mods.HalfTime]) == 0.75


def test_key_count():

    assert mods.key_count([mods.Hidden]) is None
    assert mods.key_count([mods.Hidden, mods.Keys[7]]) == 7


def test_mod_identity():

    assert mods.Keys[4] == mods.Mod('4K', 'another name')
    assert mods.Hidden != mods.HardRock
    assert len(set([mods.Hidden, mods.Hidden, mods.Flashlight])) == 2


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
