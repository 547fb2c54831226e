""" Wiring for the legacy bridge: a sealed registry with the difficulty
    handler bound, served over the TCP stream transport. The :func:`main`
    and :func:`request_main` functions are the command-line entry points
    ``legacyipc-bridge`` and ``legacyipc-request``.
"""

import argparse
import sys
import time

from . import config as configmodule
from . import log as logmodule
from .difficulty.handler import DifficultyCalculationHandler
from .protocol import registry as registrymodule
from .protocol.message import DifficultyCalculationRequest
from .transport import stream
from .transport.base import TransportError


def build_registry(handler=None, log=None):
    """ Return the sealed :class:`legacyipc.protocol.registry.Registry`
        the bridge serves: every known message kind, with *handler*
        (by default a :class:`DifficultyCalculationHandler`) bound to
        difficulty calculation requests.
    """

    if log is None:
        log = logmodule.get('protocol')

    if handler is None:
        handler = DifficultyCalculationHandler(log=logmodule.get('difficulty'))

    registry = registrymodule.default(log)
    registry.on(DifficultyCalculationRequest, handler)
    return registry.seal()


class Bridge:
    """ A running bridge. The listening socket is bound when the instance
        is created; :func:`shutdown` stops it.
    """

    def __init__(self, config=None, handler=None):

        if config is None:
            config = configmodule.Config.from_environment()

        self.config = config
        self.log = logmodule.get('bridge')
        self.registry = build_registry(handler)

        self.server = stream.Server(
            self.registry,
            hostname=config.host,
            port=config.port,
            max_frame=config.max_frame,
            log=logmodule.get('transport'),
        )


    @property
    def port(self):
        return self.server.port


    def shutdown(self):
        self.log.info('shutting down')
        self.server.shutdown()


    def wait(self):
        """ Block until interrupted.
        """

        try:
            while self.server.thread.is_alive():
                time.sleep(1)
        except KeyboardInterrupt:
            pass


# end of class Bridge



def _common_arguments(parser):

    parser.add_argument('--host', default=None,
        help='address of the bridge (default: $LEGACYIPC_HOST or %s)' % (configmodule.default_host))
    parser.add_argument('--port', type=int, default=None,
        help='TCP port of the bridge (default: $LEGACYIPC_PORT or %d)' % (configmodule.default_port))
    parser.add_argument('--log-level', default=None,
        help='logging threshold (default: $LEGACYIPC_LOG_LEVEL or %s)' % (configmodule.default_log_level))


def _config(arguments):

    config = configmodule.Config.from_environment()
    return config.replace(host=arguments.host, port=arguments.port, log_level=arguments.log_level)


def main(argv=None):
    """ Run the bridge in the foreground until interrupted.
    """

    parser = argparse.ArgumentParser(description='Serve difficulty calculation requests from legacy clients.')
    _common_arguments(parser)
    parser.add_argument('--max-frame', type=int, default=None,
        help='largest acceptable frame in bytes (default: $LEGACYIPC_MAX_FRAME or %d)' % (configmodule.default_max_frame))

    arguments = parser.parse_args(argv)

    try:
        config = _config(arguments).replace(max_frame=arguments.max_frame)
        logmodule.configure(config.log_level)
    except ValueError as e:
        parser.error(str(e))

    try:
        bridge = Bridge(config)
    except TransportError as e:
        logmodule.get('bridge').error('%s', e)
        return 1

    bridge.wait()
    bridge.shutdown()
    return 0


def request_main(argv=None):
    """ Send a single difficulty calculation request to a running bridge,
        and print the star rating it returns.
    """

    parser = argparse.ArgumentParser(description='Request the star rating of a chart from a running bridge.')
    _common_arguments(parser)
    parser.add_argument('--ruleset', type=int, default=0, help='rule variant id, 0-3 (default: 0)')
    parser.add_argument('--mods', type=int, default=0, help='legacy modifier bitflag (default: 0)')
    parser.add_argument('--timeout', type=float, default=30, help='seconds to wait for a response (default: 30)')
    parser.add_argument('beatmap', help='path to the chart file')

    arguments = parser.parse_args(argv)

    try:
        config = _config(arguments)
        logmodule.configure(config.log_level, sys.stderr)
    except ValueError as e:
        parser.error(str(e))

    request = DifficultyCalculationRequest(
        ruleset_id=arguments.ruleset,
        mods=arguments.mods,
        beatmap_file=arguments.beatmap,
    )

    try:
        client = stream.Client(config.host, config.port)
        try:
            response = client.request(request, timeout=arguments.timeout)
        finally:
            client.close()
    except TransportError as e:
        logmodule.get('request').error('%s', e)
        return 1

    print('%.6f' % (response.star_rating))
    return 0


if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
