''' Logging setup for the command-line entry points. Library code never
    configures logging; components accept a :class:`logging.Logger` as an
    explicit *log* argument, and fall back to a logger named after their
    module, all under the ``legacyipc`` namespace.
'''

import logging


log_format = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'


def get(name=None):
    """ Return the logger for *name* within the ``legacyipc`` namespace,
        or the namespace root if no name is given.
    """

    if name is None:
        return logging.getLogger('legacyipc')

    if name == 'legacyipc' or name.startswith('legacyipc.'):
        return logging.getLogger(name)

    return logging.getLogger('legacyipc.' + name)


def configure(level='INFO', stream=None):
    """ Attach a single stream handler to the ``legacyipc`` logger and set
        its *level*. Calling this more than once replaces the handler
        rather than adding another.
    """

    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if isinstance(numeric, int) == False:
            raise ValueError('unknown log level: ' + repr(level))
        level = numeric

    root = get()

    for handler in list(root.handlers):
        if getattr(handler, '_legacyipc', False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(log_format))
    handler._legacyipc = True

    root.addHandler(handler)
    root.setLevel(level)
    return root


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
