""" The agent's message protocol: decoding of inbound envelopes and their
    method-specific payloads, and routing of decoded commands to handlers.
    Nothing in this package depends on the transport.
"""

from . import message
from . import dispatch

from .message import DecodeError, Envelope, Method
from .dispatch import Dispatcher


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
