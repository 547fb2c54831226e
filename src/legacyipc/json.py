''' Wrapper module around msgspec to handle the equivalent of
    :func:`json.loads` and :func:`json.dumps`, plus typed decoding into
    :class:`msgspec.Struct` schemas.
'''

import msgspec


# The msgspec 'encode' operation returns bytes. Everything that goes on the
# wire is bytes, so that is the expected return type of dumps() as well.

encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

# Typed decoders are cached per schema; constructing a msgspec Decoder is
# not free, and the set of schemas is small and fixed after startup.

_decoders = dict()


def decode(raw, schema):
    """ Decode the JSON in *raw* (bytes, str, or :class:`msgspec.Raw`) as
        an instance of *schema*. Raises :class:`msgspec.ValidationError` if
        the content is valid JSON of the wrong shape, and
        :class:`msgspec.DecodeError` if it is not valid JSON at all.
    """

    try:
        typed = _decoders[schema]
    except KeyError:
        typed = msgspec.json.Decoder(schema)
        _decoders[schema] = typed

    return typed.decode(raw)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
