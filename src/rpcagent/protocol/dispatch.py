""" Routing of decoded envelopes to command handlers.
"""

import logging

from .message import DecodeError, Envelope, GitCredential, Method, ShellCommand


logger = logging.getLogger(__name__)


# For each method, the class that decodes its payload (None if the payload
# is ignored) and the text reported when that payload is unusable.

payloads = dict()
payloads[Method.GIT_CREDENTIAL] = (GitCredential, 'Invalid git credential JSON')
payloads[Method.SHELL] = (ShellCommand, 'Invalid shell JSON')
payloads[Method.TEST] = (None, None)


class Dispatcher:
    """ Decode raw message bodies and hand them to the appropriate handler.

        *handlers* is a dictionary mapping every known :class:`Method` to a
        callable accepting the decoded payload and the *reporter*; a missing
        entry is an error at construction time rather than a surprise when
        the first such message arrives. The *reporter* is anything with a
        ``report(text)`` method, normally a
        :class:`rpcagent.transport.rabbitmq.publish.Reporter`.

        A :class:`Dispatcher` retains no state between messages, and it is
        safe to call :func:`dispatch` from multiple threads at once.
    """

    def __init__(self, client_name, reporter, handlers):

        missing = [method.value for method in Method.known() if method not in handlers]

        if missing:
            raise ValueError('no handler for: ' + ', '.join(missing))

        self.client_name = client_name
        self.reporter = reporter
        self.handlers = dict(handlers)


    def dispatch(self, body):
        """ Decode and act upon one message *body*. Nothing is raised; every
            failure is logged, and reported where the sender would want to
            know about it.
        """

        try:
            envelope = Envelope.from_bytes(body)
        except DecodeError as e:
            logger.error('Invalid JSON: %s', e)
            return

        # Broadcasts are delivered to every subscriber, including the one
        # that sent them.

        if envelope.sender == self.client_name:
            return

        method = envelope.method

        if method is Method.UNRECOGNIZED:
            logger.error('Unknown method: %s', envelope.method_name)
            return

        logger.info('Received %s from %s', method.value, envelope.sender)

        decoder, invalid = payloads[method]

        if decoder is None:
            command = None
        else:
            try:
                command = decoder.from_json(envelope.payload)
            except DecodeError as e:
                logger.error('%s: %s', invalid, e)
                self.reporter.report('[%s] %s' % (method.value, invalid))
                return

        handler = self.handlers[method]

        try:
            handler(command, self.reporter)
        except Exception:
            logger.exception('[%s] handler failed', method.value)


# end of class Dispatcher


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
