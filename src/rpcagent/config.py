''' Handling of the agent configuration file. The configuration is a single
    JSON object, read once at startup; every problem with it is reported as
    a :class:`ConfigurationError`, which the command line treats as fatal.
'''

import logging
import os

from . import json
from .secret import Secret


logger = logging.getLogger(__name__)


# Where result reports are published. This is expected to be a broker local
# to the agent, not the broker delivering commands. The environment variable
# is consulted each time a configuration file omits report_url.

report_url = 'amqp://127.0.0.1:5672/%2f'
report_url_variable = 'RPCAGENT_REPORT_URL'

initial_delay = 2.0
reconnect_delay = 2.0
heartbeat = 600

tls_fields = ('cafile', 'certfile', 'keyfile')


class ConfigurationError(ValueError):
    """ The configuration is unusable; the agent cannot start.
    """


class ConnectionConfig:
    """ Immutable description of how to reach the command broker, plus the
        handful of tuning parameters the agent needs.

        The *password* is always stored as a :class:`rpcagent.secret.Secret`.
        If any one of *cafile*, *certfile*, or *keyfile* is specified all
        three must be specified.

        :ivar initial_delay: Seconds to wait before the first connection.
        :ivar reconnect_delay: Seconds to wait between connection attempts.
        :ivar heartbeat: AMQP heartbeat interval, in seconds.
        :ivar report_url: AMQP URL of the local broker receiving reports.
    """

    def __init__(self, host, user, password, vhost=None, client_name=None,
                 port=None, is_secure=False, cafile=None, certfile=None,
                 keyfile=None, initial_delay=initial_delay,
                 reconnect_delay=reconnect_delay, heartbeat=heartbeat,
                 report_url=report_url):

        files = (cafile, certfile, keyfile)
        present = [path is not None for path in files]

        if any(present) and not all(present):
            raise ConfigurationError('cafile, certfile and keyfile must be all set')

        self.host = host
        self.user = user
        self.password = Secret(password)
        self.vhost = vhost
        self.client_name = client_name
        self.port = port
        self.is_secure = is_secure
        self.cafile = cafile
        self.certfile = certfile
        self.keyfile = keyfile

        self.initial_delay = initial_delay
        self.reconnect_delay = reconnect_delay
        self.heartbeat = heartbeat
        self.report_url = report_url


    def __repr__(self):
        fields = ('host', 'user', 'password', 'vhost', 'client_name', 'port', 'is_secure')
        pairs = ['%s=%r' % (field, getattr(self, field)) for field in fields]
        return 'ConnectionConfig(' + ', '.join(pairs) + ')'


    def __setattr__(self, name, value):
        if name in vars(self):
            raise AttributeError('ConnectionConfig is immutable')
        object.__setattr__(self, name, value)


    @property
    def tls(self):
        """ True if client certificate material is configured.
        """

        return self.cafile is not None


# end of class ConnectionConfig



def load(path):
    """ Read the JSON configuration file at *path* and return a
        :class:`ConnectionConfig` instance.
    """

    try:
        with open(path, 'rb') as handle:
            raw = handle.read()
    except OSError as e:
        raise ConfigurationError('Failed to read config file: ' + str(e))

    try:
        contents = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError('Failed to parse config file: ' + str(e))

    config = from_dict(contents)
    logger.debug('loaded configuration from %s: %r', path, config)
    return config



def from_dict(contents):
    """ Validate the decoded JSON *contents* and return a
        :class:`ConnectionConfig` instance. The field names are the ones
        used in the configuration file, which is why the password arrives
        as 'pass'. A missing report_url is taken from the
        RPCAGENT_REPORT_URL environment variable, if it is set.
    """

    if not isinstance(contents, dict):
        raise ConfigurationError('the configuration must be a JSON object')

    arguments = dict()
    arguments['host'] = _field(contents, 'host', str, required=True)
    arguments['user'] = _field(contents, 'user', str, required=True)
    arguments['password'] = _field(contents, 'pass', str, required=True)
    arguments['is_secure'] = _field(contents, 'is_secure', bool, required=True)

    for name in ('vhost', 'client_name', 'cafile', 'certfile', 'keyfile', 'report_url'):
        value = _field(contents, name, str)
        if value is not None:
            arguments[name] = value

    if 'report_url' not in arguments:
        arguments['report_url'] = os.environ.get(report_url_variable, report_url)

    for name in ('port', 'heartbeat'):
        value = _field(contents, name, int)
        if value is not None:
            arguments[name] = value

    for name in ('initial_delay', 'reconnect_delay'):
        value = _field(contents, name, (int, float))
        if value is not None:
            arguments[name] = float(value)

    port = arguments.get('port')
    if port is not None and not 0 < port < 65536:
        raise ConfigurationError('port out of range: ' + str(port))

    return ConnectionConfig(**arguments)



def _field(contents, name, kind, required=False):
    """ Return the value of *name* from *contents*, confirming that it is of
        the expected *kind*. JSON null is treated the same as an absent key.
    """

    value = contents.get(name)

    if value is None:
        if required:
            raise ConfigurationError('missing required field: ' + name)
        return None

    # bool is a subclass of int; a port number of 'true' is not acceptable.

    if isinstance(value, bool) and kind is not bool:
        raise ConfigurationError('invalid type for field: ' + name)

    if not isinstance(value, kind):
        raise ConfigurationError('invalid type for field: ' + name)

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
