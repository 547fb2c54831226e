import pytest

from legacyipc.difficulty import ruleset
from legacyipc.difficulty.ruleset import InvalidRulesetId


def test_resolve():

    expected = {0: 'osu', 1: 'taiko', 2: 'fruits', 3: 'mania'}

    for ruleset_id, short_name in expected.items():
        variant = ruleset.resolve(ruleset_id)
        assert variant.id == ruleset_id
        assert variant.short_name == short_name

    # The same instance every time.
    assert ruleset.resolve(2) is ruleset.resolve(2)


def test_invalid():

    for ruleset_id in (-1, 4, 9, 2**31, None, '0', 0.0, True):
        with pytest.raises(InvalidRulesetId) as caught:
            ruleset.resolve(ruleset_id)
        assert caught.value.ruleset_id == ruleset_id

    # Also a ValueError, for callers that do not care about the detail.
    with pytest.raises(ValueError):
        ruleset.resolve(9)


def test_store():

    store = ruleset.RulesetStore()
    assert [variant.id for variant in store] == [0, 1, 2, 3]
    assert store(3).short_name == 'mania'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
