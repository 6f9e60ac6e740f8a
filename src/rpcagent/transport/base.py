"""Transport-level exceptions.

These live outside :mod:`rpcagent.protocol` so the protocol remains
transport-agnostic. Errors raised by pika itself are not wrapped; the
connection supervisor handles both.
"""

from __future__ import annotations


class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""
