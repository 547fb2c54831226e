""" Runtime configuration for the bridge. Every setting has a built-in
    default, can be overridden by an environment variable, and can be
    overridden again by the command line:

    ``LEGACYIPC_HOST``
        Address to listen on. Defaults to the loopback interface; the
        bridge is a point-to-point link to a client on the same machine.

    ``LEGACYIPC_PORT``
        TCP port to listen on. Defaults to 45357, the port the legacy client
        connects to.

    ``LEGACYIPC_MAX_FRAME``
        Largest acceptable frame, in bytes.

    ``LEGACYIPC_LOG_LEVEL``
        Logging threshold for the ``legacyipc`` loggers.
"""

import os

from .transport import framing


default_host = '127.0.0.1'
default_port = 45357
default_max_frame = framing.MAX_FRAME
default_log_level = 'INFO'


class Config:
    """ An immutable set of configuration values. Use
        :func:`from_environment` to build one from the process environment,
        and :func:`replace` to apply command-line overrides.
    """

    __slots__ = ('host', 'port', 'max_frame', 'log_level')

    def __init__(self, host=default_host, port=default_port, max_frame=default_max_frame, log_level=default_log_level):

        port = int(port)
        if port < 0 or port > 65535:
            raise ValueError('port out of range: ' + str(port))

        max_frame = int(max_frame)
        if max_frame <= 0:
            raise ValueError('maximum frame size must be positive: ' + str(max_frame))

        object.__setattr__(self, 'host', str(host))
        object.__setattr__(self, 'port', port)
        object.__setattr__(self, 'max_frame', max_frame)
        object.__setattr__(self, 'log_level', str(log_level).upper())


    def __setattr__(self, name, value):
        raise AttributeError('Config instances are immutable')


    def __repr__(self):
        return 'Config(host=%r, port=%d, max_frame=%d, log_level=%r)' % (self.host, self.port, self.max_frame, self.log_level)


    def __eq__(self, other):
        if isinstance(other, Config):
            return self._values() == other._values()
        return NotImplemented


    def _values(self):
        return dict((name, getattr(self, name)) for name in self.__slots__)


    def replace(self, **overrides):
        """ Return a new :class:`Config` with the non-None *overrides*
            applied.
        """

        values = self._values()

        for key, value in overrides.items():
            if key not in values:
                raise TypeError('unknown configuration setting: ' + key)
            if value is not None:
                values[key] = value

        return Config(**values)


    @classmethod
    def from_environment(cls, environ=None):
        """ Build a :class:`Config` from *environ*, which defaults to
            :data:`os.environ`. A malformed value raises :class:`ValueError`
            naming the offending variable.
        """

        if environ is None:
            environ = os.environ

        values = dict()

        for key, variable in _variables:
            try:
                values[key] = environ[variable]
            except KeyError:
                continue

        try:
            return cls(**values)
        except ValueError as e:
            names = ', '.join(variable for key, variable in _variables if key in values)
            raise ValueError('invalid configuration in %s: %s' % (names, e)) from None


# end of class Config


_variables = (
    ('host', 'LEGACYIPC_HOST'),
    ('port', 'LEGACYIPC_PORT'),
    ('max_frame', 'LEGACYIPC_MAX_FRAME'),
    ('log_level', 'LEGACYIPC_LOG_LEVEL'),
)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
