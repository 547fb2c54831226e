import pytest

import legacyipc
from legacyipc import bridge
from legacyipc.config import Config
from legacyipc.protocol.message import DifficultyCalculationRequest, DifficultyCalculationResponse
from legacyipc.transport import stream


@pytest.fixture
def running():

    instance = bridge.Bridge(Config(port=0))

    yield instance

    instance.shutdown()


def test_registry():

    registry = bridge.build_registry()

    assert registry.sealed
    assert 'DifficultyCalculationRequest' in registry

    response = registry.dispatch(DifficultyCalculationRequest(ruleset_id=9, mods=0, beatmap_file='x'))
    assert response == DifficultyCalculationResponse()


def test_custom_handler(chart):

    instance = bridge.Bridge(Config(port=0), handler=lambda request: DifficultyCalculationResponse(star_rating=7.0))

    try:
        client = stream.Client('127.0.0.1', instance.port)
        request = DifficultyCalculationRequest(ruleset_id=0, mods=0, beatmap_file=chart)
        assert client.request(request, timeout=10).star_rating == 7.0
        client.close()
    finally:
        instance.shutdown()


def test_bridge(running, chart):

    client = stream.Client('127.0.0.1', running.port)

    try:
        request = DifficultyCalculationRequest(ruleset_id=0, mods=0, beatmap_file=chart)
        response = client.request(request, timeout=10)
    finally:
        client.close()

    assert response.star_rating > 0


def test_request_main(running, chart, capsys):

    status = bridge.request_main(['--port', str(running.port), '--ruleset', '0', chart])
    assert status == 0

    printed = capsys.readouterr().out.strip()
    assert float(printed) > 0


def test_request_main_invalid_ruleset(running, capsys):

    status = bridge.request_main(['--port', str(running.port), '--ruleset', '9', 'x'])
    assert status == 0
    assert float(capsys.readouterr().out.strip()) == 0


def test_request_main_bad_arguments():

    with pytest.raises(SystemExit):
        bridge.request_main(['--port', 'not-a-number', 'chart.osu'])

    with pytest.raises(SystemExit):
        bridge.request_main(['--log-level', 'loud', 'chart.osu'])


def test_main_port_in_use(running):

    assert bridge.main(['--port', str(running.port)]) == 1


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
