""" TCP channel to the legacy client, implemented with ZeroMQ STREAM sockets.
    A STREAM socket speaks raw TCP, so the peer on the other end is an
    ordinary TCP client with no knowledge of ZeroMQ; the length-prefixed
    framing of :mod:`legacyipc.transport.framing` is applied here.
"""

from __future__ import annotations

import collections
import itertools
import logging
import queue
import threading
import time
from typing import Dict

import zmq

from ..protocol import registry as registrymodule
from ..protocol.pipeline import Pipeline
from . import framing
from .base import Channel, FramingError, TransportConnectionError, TransportPortError, TransportTimeout


zmq_context = zmq.Context()

_outbound_ids = itertools.count()


class Connection:
    """ Server-side state for one connected legacy client: the partial
        frame buffer, the queue of complete frames awaiting processing, and
        the worker thread that processes them. Frames on one connection are
        handled one at a time in the order they arrived; connections share
        nothing with each other.
    """

    send_timeout = 1000

    def __init__(self, server, ident):

        self.server = server
        self.ident = ident
        self.buffer = framing.FrameBuffer(server.max_frame)
        self.pipeline = Pipeline(server.registry, server.log)
        self.queue = queue.SimpleQueue()

        self.thread = threading.Thread(target=self._worker_main)
        self.thread.daemon = True
        self.thread.start()


    def feed(self, chunk):
        for frame in self.buffer.feed(chunk):
            self.queue.put(frame)


    def stop(self):
        self.queue.put(None)


    def _worker_main(self):
        """ This is the 'main' method for the worker thread of a single
            connection. Responses are handed to the server's I/O thread via
            a private inproc socket, as ZeroMQ sockets are not thread-safe.
        """

        outbound = zmq_context.socket(zmq.PUSH)
        outbound.setsockopt(zmq.LINGER, 0)
        outbound.setsockopt(zmq.SNDTIMEO, self.send_timeout)
        outbound.connect(self.server.outbound_address)

        try:
            while True:
                frame = self.queue.get()
                if frame is None:
                    break

                response = self.pipeline.incoming(frame)
                if response is None:
                    continue

                try:
                    outbound.send_multipart((self.ident, framing.pack(response)))
                except zmq.error.Again:
                    if self.server.shutdown_requested:
                        break
                    self.server.log.warning('response to legacy client dropped, I/O thread not accepting')
        finally:
            outbound.close()


# end of class Connection



class Server:
    """ Accept connections from legacy clients and answer their requests.
        Every complete inbound frame is run through a per-connection
        :class:`legacyipc.protocol.pipeline.Pipeline` built on the shared,
        read-only *registry*.

        If *port* is None or zero an ephemeral port is chosen; the port in
        use is available as :attr:`port` either way.

        :ivar hostname: The address this server is listening on.
        :ivar port: The port this server is listening on.
    """

    poll_interval = 250
    join_timeout = 1

    def __init__(self, registry, hostname='127.0.0.1', port=None, max_frame=framing.MAX_FRAME, log=None):

        if log is None:
            log = logging.getLogger(__name__)

        self.registry = registry
        self.hostname = hostname
        self.max_frame = max_frame
        self.log = log

        self.connections: Dict[bytes, Connection] = dict()

        self.socket = zmq_context.socket(zmq.STREAM)
        self.socket.setsockopt(zmq.LINGER, 0)

        if port is None or port == 0:
            listen_address = 'tcp://%s:*' % (hostname)
        else:
            listen_address = 'tcp://%s:%d' % (hostname, int(port))

        try:
            self.socket.bind(listen_address)
        except zmq.error.ZMQError as e:
            self.socket.close()
            raise TransportPortError('cannot listen on %s: %s' % (listen_address, e)) from e

        endpoint = self.socket.getsockopt(zmq.LAST_ENDPOINT).decode()
        self.port = int(endpoint.rsplit(':', 1)[1])

        # Worker threads never touch the STREAM socket; responses come back
        # to the I/O thread through this inproc socket instead.

        self.outbound_address = 'inproc://legacyipc.stream.%d' % (next(_outbound_ids))
        self.outbound = zmq_context.socket(zmq.PULL)
        self.outbound.setsockopt(zmq.LINGER, 0)
        self.outbound.bind(self.outbound_address)

        self.shutdown_requested = False
        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()

        self.log.info('listening for legacy IPC connections on %s:%d', self.hostname, self.port)


    def run(self):

        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)
        poller.register(self.outbound, zmq.POLLIN)

        try:
            while self.shutdown_requested == False:
                sockets = dict(poller.poll(self.poll_interval))

                if self.outbound in sockets:
                    parts = self.outbound.recv_multipart()
                    self.socket.send_multipart(parts)

                if self.socket in sockets:
                    ident, chunk = self.socket.recv_multipart()
                    self._incoming(ident, chunk)
        finally:
            connections = list(self.connections.values())
            self.connections.clear()

            for connection in connections:
                connection.stop()

            # Workers busy with a request get a moment to finish; any still
            # running give up once their send times out.

            for connection in connections:
                connection.thread.join(self.join_timeout)

            self.socket.close()
            self.outbound.close()


    def _incoming(self, ident, chunk):
        """ Route a chunk of bytes from the STREAM socket. An empty chunk
            is a connect or disconnect notification for *ident*.
        """

        connection = self.connections.get(ident)

        if chunk == b'':
            if connection is None:
                self.log.info('legacy client connected')
                self.connections[ident] = Connection(self, ident)
            else:
                self.log.info('legacy client disconnected')
                del self.connections[ident]
                connection.stop()
            return

        if connection is None:
            # Every connection is announced before its first data; anything
            # else is a straggler from a connection closed here.
            return

        try:
            connection.feed(chunk)
        except FramingError as e:
            # The stream cannot be resynchronized; drop this client only.
            self.log.warning('closing legacy client connection: %s', e)
            del self.connections[ident]
            connection.stop()
            self.socket.send_multipart((ident, b''))


    def shutdown(self, timeout=5):
        self.shutdown_requested = True
        self.thread.join(timeout)


# end of class Server



class Client(Channel):
    """ A plain request/response channel to a :class:`Server`, standing in
        for the legacy client. Connects to *address* and *port* on
        construction, and raises :class:`TransportConnectionError` if the
        connection is not established within *timeout* seconds.
    """

    def __init__(self, address, port, timeout=5, max_frame=framing.MAX_FRAME, registry=None):

        if registry is None:
            registry = registrymodule.default().seal()

        self.address = address
        self.port = int(port)
        self.registry = registry
        self.buffer = framing.FrameBuffer(max_frame)
        self.pending = collections.deque()
        self.ident = None

        self.socket = zmq_context.socket(zmq.STREAM)
        self.socket.setsockopt(zmq.LINGER, 0)
        self.socket.connect('tcp://%s:%d' % (address, self.port))

        # The STREAM socket announces an established connection with an
        # empty message carrying the routing identity of the peer.

        if self.socket.poll(timeout * 1000) == 0:
            self.socket.close()
            raise TransportConnectionError('no connection to %s:%d after %.1f sec' % (address, self.port, timeout))

        ident, chunk = self.socket.recv_multipart()
        self.ident = ident


    @property
    def is_open(self):
        return self.ident is not None


    def close(self):
        if self.ident is not None:
            self.socket.send_multipart((self.ident, b''))
            self.ident = None
        self.socket.close()


    def send(self, frame):
        if self.ident is None:
            raise TransportConnectionError('not connected')
        self.socket.send_multipart((self.ident, framing.pack(frame)))


    def receive(self, timeout=None):
        """ Return the next complete frame. A *timeout* of None blocks
            indefinitely; otherwise :class:`TransportTimeout` is raised if
            no frame arrives in time.
        """

        if timeout is None:
            deadline = None
        else:
            deadline = time.time() + timeout

        while len(self.pending) == 0:
            if self.ident is None:
                raise TransportConnectionError('not connected')

            if deadline is None:
                wait = None
            else:
                wait = max(deadline - time.time(), 0) * 1000

            if self.socket.poll(wait) == 0:
                raise TransportTimeout('no response in %.2f sec' % (timeout))

            ident, chunk = self.socket.recv_multipart()

            if chunk == b'':
                self.ident = None
                raise TransportConnectionError('connection closed by peer')

            self.pending.extend(self.buffer.feed(chunk))

        return self.pending.popleft()


    def request(self, value, timeout=None):
        """ Send the typed message *value*, and return the typed response.
        """

        self.send(self.registry.encode(value))
        return self.registry.decode(self.receive(timeout))


# end of class Client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
