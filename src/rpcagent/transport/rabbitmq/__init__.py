"""RabbitMQ implementation of the agent transport, built on pika."""

from . import topology
from . import publish
from . import consume
