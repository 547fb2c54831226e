import json

import msgspec
import pytest

import legacyipc


def test_json_encode_and_decode():
    encode_and_decode(json.dumps, json.loads, dump_is_bytes=False)


def test_legacyipc_encode_and_decode():
    encode_and_decode(legacyipc.json.dumps, legacyipc.json.loads)


def encode_and_decode(dumps, loads, dump_is_bytes=True):

    input_dictionary = dict()
    input_dictionary['list'] = [1, 2, 3, 'a', 'b', None, 'c', 'z']
    input_dictionary['dict'] = {'one': 1, 'two': 2.5}
    input_dictionary['none'] = None
    input_dictionary['true'] = True
    input_dictionary['false'] = False

    encoded = dumps(input_dictionary)

    if dump_is_bytes:
        assert isinstance(encoded, bytes)
    else:
        assert isinstance(encoded, str)

    # Whitespace handling differs between JSON libraries, so the encoded
    # form is not compared directly; the decoded value must match.

    decoded = loads(encoded)
    assert decoded == input_dictionary


def test_typed_decode():

    class Point(msgspec.Struct):
        x: int
        y: int

    point = legacyipc.json.decode(b'{"x": 1, "y": 2}', schema=Point)
    assert point == Point(1, 2)

    # Typed decoders are cached for reuse.

    assert Point in legacyipc.json._decoders

    with pytest.raises(msgspec.ValidationError):
        legacyipc.json.decode(b'{"x": "one", "y": 2}', schema=Point)

    with pytest.raises(msgspec.DecodeError):
        legacyipc.json.decode(b'{"x": 1,', schema=Point)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
