""" Command handlers. Each handler is a callable accepting the decoded
    payload for its method and a reporter, and is run on a thread of its own;
    handlers may block for as long as the work takes.
"""

from . import credential
from . import liveness
from . import shell

from ..protocol.message import Method


def default():
    """ Return the standard mapping of :class:`Method` to handler, suitable
        for a :class:`rpcagent.protocol.Dispatcher`.
    """

    handlers = dict()
    handlers[Method.GIT_CREDENTIAL] = credential.handle
    handlers[Method.SHELL] = shell.handle
    handlers[Method.TEST] = liveness.handle

    return handlers


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
