""" Assembly of a running agent from its configuration.
"""

import logging
import time

import pika

from . import address
from . import handlers
from .protocol import Dispatcher
from .transport import tls
from .transport.rabbitmq import consume
from .transport.rabbitmq import publish
from .threads import detach
from .transport.rabbitmq.topology import Topology


logger = logging.getLogger(__name__)


class Agent:
    """ The :class:`Agent` ties the pieces together: it derives the client
        identity and routing topology from the *config*, loads any TLS
        material, and builds the reporter, dispatcher, and connection
        supervisor. Everything that can be checked before connecting is
        checked here, so that a bad configuration raises from the
        constructor (:class:`rpcagent.config.ConfigurationError`, or
        :class:`OSError` for unreadable TLS files) instead of surfacing as
        an endless series of failed connections.

        Command handlers and result reports each run on a daemon thread of
        their own, started by *spawn*.

        The *connect*, *sleep*, and *spawn* arguments exist for testing; they
        replace :class:`pika.BlockingConnection`, :func:`time.sleep`, and
        :func:`rpcagent.threads.detach`.
    """

    def __init__(self, config, connect=pika.BlockingConnection, sleep=time.sleep,
                 spawn=detach):

        self.config = config
        self.client_name = address.client_name(config)
        self.identity = tls.load_config(config)
        self.topology = Topology(self.client_name)

        self.reporter = publish.Reporter(self.client_name, config.report_url,
                                         connect=connect, spawn=spawn)
        self.dispatcher = Dispatcher(self.client_name, self.reporter, handlers.default())

        params = consume.parameters(config, self.identity)

        self.supervisor = consume.Supervisor(
            params,
            self.topology,
            self.dispatcher.dispatch,
            initial_delay=config.initial_delay,
            reconnect_delay=config.reconnect_delay,
            display_url=address.display_url(config),
            connect=connect,
            sleep=sleep,
            spawn=spawn,
        )

        logger.debug('agent %s using %r', self.client_name, self.topology)


    def run(self):
        """ Connect and process commands. This does not return in normal
            operation.
        """

        self.supervisor.run()


# end of class Agent


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
