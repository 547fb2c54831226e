import logging

import pytest

import legacyipc


# A short standard-variant chart: a few circles, a slider and a spinner,
# close enough together to produce a non-trivial rating.

CHART = """osu file format v14

[General]
AudioFilename: audio.mp3
Mode: 0

[Metadata]
Title:unit test

[Difficulty]
HPDrainRate:5
CircleSize:4
OverallDifficulty:8
ApproachRate:9
SliderMultiplier:1.8
SliderTickRate:1

[HitObjects]
64,192,1000,1,0,0:0:0:0:
192,192,1150,1,0,0:0:0:0:
320,192,1300,1,0,0:0:0:0:
448,192,1450,5,0,0:0:0:0:
256,64,1600,2,0,B|256:320,1,180
256,320,1900,1,0,0:0:0:0:
64,64,2050,1,0,0:0:0:0:
448,320,2200,1,0,0:0:0:0:
256,192,2500,12,0,3500,0:0:0:0:
128,192,3700,1,0,0:0:0:0:
384,192,3800,1,0,0:0:0:0:
"""


# A native mania chart, four keys, with a jack in the first column.

MANIA_CHART = """osu file format v14

[General]
Mode: 3

[Difficulty]
HPDrainRate:7
CircleSize:4
OverallDifficulty:7

[HitObjects]
64,192,1000,1,0,0:0:0:0:
64,192,1100,1,0,0:0:0:0:
64,192,1200,1,0,0:0:0:0:
192,192,1250,1,0,0:0:0:0:
320,192,1300,128,0,1600:0:0:0:0:
448,192,1400,1,0,0:0:0:0:
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """ Undo any logging configuration a test performed, such as a call to
        one of the command-line entry points.
    """

    yield

    root = legacyipc.log.get()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)


@pytest.fixture
def chart_text():
    return CHART


@pytest.fixture
def mania_chart_text():
    return MANIA_CHART


@pytest.fixture
def chart(tmp_path):
    path = tmp_path / 'chart.osu'
    path.write_text(CHART, encoding='utf-8')
    return str(path)


@pytest.fixture
def mania_chart(tmp_path):
    path = tmp_path / 'mania.osu'
    path.write_text(MANIA_CHART, encoding='utf-8')
    return str(path)


@pytest.fixture
def registry():
    return legacyipc.build_registry()


@pytest.fixture
def server(registry):

    server = legacyipc.transport.stream.Server(registry, port=0)

    yield server

    server.shutdown()


@pytest.fixture
def client(server):

    client = legacyipc.transport.stream.Client('127.0.0.1', server.port)

    yield client

    client.close()

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
