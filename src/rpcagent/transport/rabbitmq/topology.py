"""Exchange and queue layout for one agent.

Every agent owns an exclusive, server-named queue bound to two topic
exchanges: its own client exchange, for messages addressed to it, and the
shared broadcast exchange, for messages addressed to every agent. The
client exchange is named after the first dot-separated segment of the
client name, so that 'bob.worker' and 'bob.backup' share the 'bob'
exchange and are told apart by routing key.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


BROADCAST_EXCHANGE = "all"
BROADCAST_KEY = "all.#"


class Topology:
    """Routing names derived from a client name. Computed once per process
    and re-declared, unchanged, on every reconnect."""

    broadcast_exchange = BROADCAST_EXCHANGE
    broadcast_key = BROADCAST_KEY

    def __init__(self, client_name: str):
        self.client_name = client_name
        self.routing_key = client_name + ".#"
        self.client_exchange = self.routing_key.split(".", 1)[0]

    def __repr__(self) -> str:
        return (
            f"Topology(client_exchange={self.client_exchange!r}, "
            f"routing_key={self.routing_key!r})"
        )


def declare(channel, topology: Topology) -> str:
    """Declare the queue, both exchanges and both bindings on *channel*.
    Returns the broker-assigned queue name.

    Every step is idempotent. A failure part way through leaves whatever was
    already declared in place; the connection is about to be discarded and
    the whole sequence repeated on the next one.
    """

    result = channel.queue_declare(queue="", exclusive=True)
    queue_name = result.method.queue

    channel.exchange_declare(
        exchange=topology.client_exchange, exchange_type="topic", durable=False
    )
    channel.exchange_declare(
        exchange=topology.broadcast_exchange, exchange_type="topic", durable=False
    )

    channel.queue_bind(
        queue=queue_name,
        exchange=topology.client_exchange,
        routing_key=topology.routing_key,
    )
    channel.queue_bind(
        queue=queue_name,
        exchange=topology.broadcast_exchange,
        routing_key=topology.broadcast_key,
    )

    logger.debug("declared %r on queue %s", topology, queue_name)
    return queue_name
