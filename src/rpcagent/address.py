''' Translate a :class:`rpcagent.config.ConnectionConfig` into the AMQP URL
    used to reach the command broker, and derive the client identity used
    for addressing. Nothing here performs any I/O.
'''

from .config import ConfigurationError
from .secret import mask


default_port = 5672
default_secure_port = 5671

# The broadcast exchange shares its name with the broadcast routing prefix;
# a client using that name would receive every broadcast twice and could not
# be addressed individually.

broadcast = 'all'


def port(config):
    """ Return the broker port for *config*, falling back to the standard
        AMQP port for the selected transport.
    """

    if config.port is not None:
        return config.port

    if config.is_secure:
        return default_secure_port
    else:
        return default_port



def url(config, mask_password=False):
    """ Return the AMQP URL for *config*. If *mask_password* is True the
        password is replaced with a fixed mask, which makes the URL safe
        to display or log.

        The user, password, and vhost are inserted exactly as configured;
        any percent-encoding they need is the responsibility of whoever
        wrote the configuration. The default vhost, for example, is
        written as '%2f'.
    """

    if config.is_secure:
        scheme = 'amqps'
    else:
        scheme = 'amqp'

    if mask_password:
        password = mask
    else:
        password = config.password.reveal()

    location = '%s://%s:%s@%s:%d' % (scheme, config.user, password, config.host, port(config))

    if config.vhost is not None:
        location = location + '/' + config.vhost

    return location



def display_url(config):
    return url(config, mask_password=True)



def client_name(config):
    """ Return the identity this agent uses on the broker: the configured
        client name if there is one, otherwise the broker user name.
    """

    name = config.client_name

    if name is None:
        name = config.user

    if name == broadcast:
        raise ConfigurationError("client_name cannot be '%s'" % (broadcast))

    return name


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
