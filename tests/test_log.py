import io
import logging

import pytest

import legacyipc


def test_namespace():

    assert legacyipc.log.get().name == 'legacyipc'
    assert legacyipc.log.get('bridge').name == 'legacyipc.bridge'
    assert legacyipc.log.get('legacyipc.transport').name == 'legacyipc.transport'


def test_configure():

    first = io.StringIO()
    second = io.StringIO()

    root = legacyipc.log.configure('warning', first)
    assert root.level == logging.WARNING

    # Configuring again replaces the handler rather than adding one.

    legacyipc.log.configure('info', second)
    legacyipc.log.get('unittest').info('hello')

    assert first.getvalue() == ''
    assert 'hello' in second.getvalue()
    assert 'legacyipc.unittest' in second.getvalue()

    handlers = [handler for handler in root.handlers if getattr(handler, '_legacyipc', False)]
    assert len(handlers) == 1

    root.removeHandler(handlers[0])
    root.setLevel(logging.NOTSET)


def test_bad_level():

    with pytest.raises(ValueError):
        legacyipc.log.configure('loud')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
