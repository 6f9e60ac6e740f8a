"""Connection supervisor: connect, declare, consume, and reconnect forever."""

from __future__ import annotations

import enum
import logging
import ssl
import time
from typing import Callable, Optional

import pika
import pika.exceptions

from ... import address
from ...threads import detach
from ..base import TransportConnectionError, TransportError
from ..tls import Identity
from . import topology as _topology

logger = logging.getLogger(__name__)


def parameters(config, identity: Optional[Identity] = None) -> pika.URLParameters:
    """Connection parameters for the command broker described by *config*.
    TLS is used when the configuration asks for secure transport; the
    client certificate, if any, comes from *identity*."""

    params = pika.URLParameters(address.url(config))
    params.heartbeat = config.heartbeat
    params.blocked_connection_timeout = 300

    # Retries are the supervisor's job, not pika's.
    params.connection_attempts = 1

    if config.is_secure:
        if identity is None:
            context = ssl.create_default_context()
        else:
            context = identity.context()
        params.ssl_options = pika.SSLOptions(context, server_hostname=config.host)
    elif identity is not None:
        logger.warning("certificates are configured but is_secure is false; not using TLS")

    return params


class State(enum.Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    CONSUMING = "consuming"
    BACKOFF = "backoff"


class Supervisor:
    """Own the connection to the command broker for the life of the process.

    :meth:`run` drives an explicit state machine::

        IDLE -> CONNECTING -> CONSUMING -> BACKOFF -> CONNECTING -> ...

    Any failure while connecting, declaring the topology, or consuming moves
    the supervisor to BACKOFF; after *reconnect_delay* seconds it connects
    again, with a brand new connection. There is no terminal state.

    Each delivery is acknowledged as soon as its body is in hand, and the
    body is then handed to *on_body* through *spawn*, which by default runs
    it on a thread of its own; handlers never run on the connection thread,
    never wait on one another, and are never retried.

    :ivar attempts: Number of connection attempts made so far.
    :ivar shutdown: Set to True to leave the loop at the next state change.
    """

    def __init__(
        self,
        params: pika.connection.Parameters,
        topology: _topology.Topology,
        on_body: Callable[[bytes], None],
        initial_delay: float = 2.0,
        reconnect_delay: float = 2.0,
        display_url: Optional[str] = None,
        connect: Callable = pika.BlockingConnection,
        sleep: Callable[[float], None] = time.sleep,
        spawn: Callable = detach,
    ):
        self.params = params
        self.topology = topology
        self.on_body = on_body
        self.initial_delay = initial_delay
        self.reconnect_delay = reconnect_delay
        self.display_url = display_url or "the broker"

        self._connect = connect
        self._sleep = sleep
        self._spawn = spawn

        self.state = State.IDLE
        self.attempts = 0
        self.shutdown = False
        self._connection = None

    def run(self) -> None:
        """Connect and consume until :attr:`shutdown` is set, which in normal
        operation never happens."""

        self.state = State.IDLE

        # Give a broker that is starting alongside us a moment to come up.
        self._sleep(self.initial_delay)

        while not self.shutdown:
            self.state = State.CONNECTING
            self.attempts += 1
            logger.info("Connecting to rabbitmq")

            try:
                self._consume()
            except (pika.exceptions.AMQPError, TransportError, OSError) as e:
                logger.error("Error: %s", _describe(e))
            except Exception:
                logger.exception("unexpected error in connection loop")
            finally:
                self._discard()

            self.state = State.BACKOFF
            if self.shutdown:
                break
            self._sleep(self.reconnect_delay)

    def _consume(self) -> None:
        connection = self._connect(self.params)
        self._connection = connection

        channel = connection.channel()
        queue_name = _topology.declare(channel, self.topology)

        channel.basic_consume(
            queue=queue_name,
            on_message_callback=self._on_message,
        )

        self.state = State.CONSUMING
        logger.info(
            "Connected to RabbitMQ at %s, client exchange = %s, client routing_key = %s",
            self.display_url,
            self.topology.client_exchange,
            self.topology.routing_key,
        )

        channel.start_consuming()

        # start_consuming() only returns if the consumer was cancelled.
        raise TransportConnectionError("consumer stopped")

    def _on_message(self, channel, method, _properties, body: bytes) -> None:
        channel.basic_ack(delivery_tag=method.delivery_tag)
        self._spawn(self.on_body, body)

    def _discard(self) -> None:
        """Close the current connection, if any. The next attempt always
        starts from a fresh connection."""

        connection = self._connection
        self._connection = None

        if connection is None:
            return

        try:
            if connection.is_open:
                connection.close()
        except (pika.exceptions.AMQPError, OSError) as e:
            logger.debug("error closing connection: %s", _describe(e))


def _describe(error: BaseException) -> str:
    text = str(error)
    if text:
        return text
    return type(error).__name__
