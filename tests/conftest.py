import pytest

import rpcagent


class Reporter:
    """ Stand-in for the result reporter; remembers what it was asked to
        report instead of publishing it.
    """

    def __init__(self):
        self.reports = list()

    def report(self, text):
        self.reports.append(text)


class Method:
    def __init__(self, queue=None, delivery_tag=None):
        self.queue = queue
        self.delivery_tag = delivery_tag


class Result:
    def __init__(self, queue):
        self.method = Method(queue=queue)


class Channel:
    """ Records every call made against it, in order. Deliveries listed in
        *deliveries* are fed to the registered consumer when
        :func:`start_consuming` is called, after which *error* is raised.
    """

    def __init__(self, deliveries=(), error=None):
        self.calls = list()
        self.acks = list()
        self.published = list()
        self.deliveries = list(deliveries)
        self.error = error
        self.callback = None

    def queue_declare(self, **kwargs):
        self.calls.append(('queue_declare', kwargs))
        return Result('amq.gen-test')

    def exchange_declare(self, **kwargs):
        self.calls.append(('exchange_declare', kwargs))

    def queue_bind(self, **kwargs):
        self.calls.append(('queue_bind', kwargs))

    def basic_consume(self, **kwargs):
        self.calls.append(('basic_consume', kwargs))
        self.callback = kwargs['on_message_callback']

    def basic_ack(self, delivery_tag):
        self.acks.append(delivery_tag)

    def basic_publish(self, **kwargs):
        self.calls.append(('basic_publish', kwargs))
        self.published.append(kwargs)

    def start_consuming(self):
        for tag, body in enumerate(self.deliveries, start=1):
            self.callback(self, Method(delivery_tag=tag), None, body)

        if self.error is not None:
            raise self.error


class Connection:

    def __init__(self, params, channel):
        self.params = params
        self._channel = channel
        self.is_open = True
        self.closed = 0

    def channel(self):
        return self._channel

    def close(self):
        self.closed += 1
        self.is_open = False


class Immediate:
    """ Replacement for starting a thread: runs submitted work synchronously,
        so tests can observe its effects without waiting on threads.
    """

    def __init__(self):
        self.submitted = list()

    def submit(self, function, *args):
        self.submitted.append((function, args))
        function(*args)


@pytest.fixture
def reporter():
    return Reporter()


@pytest.fixture
def immediate():
    return Immediate()


@pytest.fixture
def channel_type():
    return Channel


@pytest.fixture
def connection_type():
    return Connection


@pytest.fixture
def settings():
    """ Return a function producing a :class:`rpcagent.ConnectionConfig`
        with the minimum required fields and any overrides applied.
    """

    def make(**overrides):
        arguments = dict(host='broker.example.com', user='bob', password='hunter2')
        arguments.update(overrides)
        return rpcagent.config.ConnectionConfig(**arguments)

    return make


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
