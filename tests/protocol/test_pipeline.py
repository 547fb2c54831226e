import logging

import msgspec

import legacyipc
from legacyipc.protocol import envelope, registry as registrymodule
from legacyipc.protocol.message import DifficultyCalculationRequest, DifficultyCalculationResponse
from legacyipc.protocol.pipeline import Pipeline, State


def fixed_rating(request):
    return DifficultyCalculationResponse(star_rating=float(request.ruleset_id) + 0.5)


def make_pipeline(handler=fixed_rating):
    registry = registrymodule.default()
    registry.on(DifficultyCalculationRequest, handler)
    return Pipeline(registry.seal())


def request_frame(ruleset_id=0, mods=0, beatmap_file='chart.osu'):
    request = DifficultyCalculationRequest(ruleset_id=ruleset_id, mods=mods, beatmap_file=beatmap_file)
    return envelope.encode('DifficultyCalculationRequest', request)


def test_request_response():

    pipeline = make_pipeline()
    response = pipeline.incoming(request_frame(ruleset_id=2))

    assert legacyipc.json.loads(response) == {
        'type': 'DifficultyCalculationResponse',
        'data': {'starRating': 2.5},
    }

    assert pipeline.state is State.IDLE


def test_unknown_type_is_silent(caplog):

    pipeline = make_pipeline()

    with caplog.at_level(logging.DEBUG, logger='legacyipc'):
        response = pipeline.incoming(envelope.encode('Nonsense', {'a': 1}))

    assert response is None
    assert pipeline.state is State.IDLE
    assert 'Nonsense' in caplog.text

    # The next valid message is processed normally.
    assert pipeline.incoming(request_frame()) is not None


def test_malformed_envelope(caplog):

    pipeline = make_pipeline()

    with caplog.at_level(logging.WARNING, logger='legacyipc'):
        assert pipeline.incoming(b'{"type": "DifficultyCalculationRequest"}') is None
        assert pipeline.incoming(b'garbage') is None

    assert 'malformed' in caplog.text
    assert pipeline.state is State.IDLE
    assert pipeline.incoming(request_frame()) is not None


def test_schema_mismatch_logs_raw_content(caplog):

    pipeline = make_pipeline()
    frame = b'{"type": "DifficultyCalculationRequest", "data": {"rulesetId": "zero"}}'

    with caplog.at_level(logging.WARNING, logger='legacyipc'):
        assert pipeline.incoming(frame) is None

    assert '"rulesetId": "zero"' in caplog.text
    assert pipeline.incoming(request_frame()) is not None


def test_response_kind_is_not_handled():

    # Responses are registered but have no handler on the serving side.

    pipeline = make_pipeline()
    frame = envelope.encode('DifficultyCalculationResponse', DifficultyCalculationResponse(star_rating=1.0))

    assert pipeline.incoming(frame) is None


def test_no_response():

    pipeline = make_pipeline(lambda request: None)
    assert pipeline.incoming(request_frame()) is None


def test_handler_failure_is_confined(caplog):

    def explode(request):
        if request.ruleset_id == 1:
            raise RuntimeError('boom')
        return fixed_rating(request)

    pipeline = make_pipeline(explode)

    with caplog.at_level(logging.ERROR, logger='legacyipc'):
        assert pipeline.incoming(request_frame(ruleset_id=1)) is None

    assert 'boom' in caplog.text
    assert pipeline.state is State.IDLE
    assert pipeline.incoming(request_frame(ruleset_id=0)) is not None


def test_states_visited():

    visited = list()
    pipeline = None

    def observe(request):
        visited.append(pipeline.state)
        return fixed_rating(request)

    pipeline = make_pipeline(observe)
    pipeline.incoming(request_frame())

    assert visited == [State.DISPATCHING]
    assert pipeline.state is State.IDLE


def test_ordering():

    pipeline = make_pipeline()
    frames = [request_frame(ruleset_id=number) for number in range(4)]
    responses = [pipeline.incoming(frame) for frame in frames]

    ratings = list()
    for response in responses:
        env = envelope.decode(response)
        decoded = msgspec.json.decode(env.data, type=DifficultyCalculationResponse)
        ratings.append(decoded.star_rating)

    assert ratings == [0.5, 1.5, 2.5, 3.5]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
