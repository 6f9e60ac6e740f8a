""" Python implementation of an AMQP remote-command agent. The agent keeps a
    subscription to a RabbitMQ topic broker, runs the commands addressed to
    it, and reports the results to a local logging exchange.
"""

__version__ = '0.1.0'

# Utility components.

from . import json
from . import secret

# Submodules used by multiple other components.

from . import config
from . import address
from . import protocol
from . import transport
from . import handlers

# Primary public-facing interfaces.

from .agent import Agent
from .config import ConfigurationError, ConnectionConfig
from .protocol import Dispatcher, Envelope, Method

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
