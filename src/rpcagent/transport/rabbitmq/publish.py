"""Best-effort publication of result text to the local logging exchange."""

from __future__ import annotations

import logging
from typing import Callable

import pika
import pika.exceptions

from ...threads import detach

logger = logging.getLogger(__name__)


EXCHANGE = "logging"
ROUTING_PREFIX = "logging.rpc."


def _broker_params(url: str) -> pika.URLParameters:
    params = pika.URLParameters(url)
    params.connection_attempts = 1
    params.blocked_connection_timeout = 30
    return params


class Reporter:
    """Fire-and-forget publisher of human-readable result strings.

    Each report uses its own short-lived connection, opened and closed on a
    thread of its own, so reporting never touches the consuming connection and
    never blocks the caller. Failures are logged and otherwise ignored.
    """

    def __init__(
        self,
        client_name: str,
        url: str,
        connect: Callable = pika.BlockingConnection,
        spawn: Callable = detach,
    ):
        self.client_name = client_name
        self.url = url
        self.routing_key = ROUTING_PREFIX + client_name
        self._connect = connect
        self._spawn = spawn

    def report(self, text: str) -> None:
        """Queue *text* for publication and return immediately."""
        self._spawn(self._send, text)

    def _send(self, text: str) -> None:
        try:
            self._publish(text)
        except (pika.exceptions.AMQPError, OSError) as e:
            logger.error("Error in send: %s", e)
        except Exception:
            logger.exception("unexpected error publishing report")

    def _publish(self, text: str) -> None:
        connection = self._connect(_broker_params(self.url))
        try:
            channel = connection.channel()
            channel.exchange_declare(
                exchange=EXCHANGE, exchange_type="topic", durable=False
            )
            channel.basic_publish(
                exchange=EXCHANGE,
                routing_key=self.routing_key,
                body=text.encode("utf-8"),
            )
            logger.debug("reported to %s: %s", self.routing_key, text)
        finally:
            _close(connection)


def _close(connection) -> None:
    try:
        if connection.is_open:
            connection.close()
    except (pika.exceptions.AMQPError, OSError) as e:
        logger.debug("error closing report connection: %s", e)
