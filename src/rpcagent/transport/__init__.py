"""Transport layer: TLS material, broker topology, consuming and reporting."""

from .base import (
    TransportError,
    TransportConnectionError,
)

from . import tls
