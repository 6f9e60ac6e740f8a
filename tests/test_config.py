import logging
import os

import pytest

import rpcagent


def write(tmp_path, contents):
    path = tmp_path / 'config.json'

    if isinstance(contents, bytes):
        path.write_bytes(contents)
    else:
        path.write_bytes(rpcagent.json.dumps(contents))

    return str(path)


def test_minimal(tmp_path, monkeypatch):

    monkeypatch.delenv('RPCAGENT_REPORT_URL', raising=False)

    path = write(tmp_path, {'host': 'mq', 'user': 'bob', 'pass': 'hunter2', 'is_secure': False})
    config = rpcagent.config.load(path)

    assert config.host == 'mq'
    assert config.user == 'bob'
    assert config.password.reveal() == 'hunter2'
    assert config.is_secure == False
    assert config.vhost is None
    assert config.client_name is None
    assert config.port is None
    assert config.tls == False

    assert config.initial_delay == 2.0
    assert config.reconnect_delay == 2.0
    assert config.heartbeat == 600
    assert config.report_url == 'amqp://127.0.0.1:5672/%2f'


def test_complete(tmp_path):

    contents = dict()
    contents['host'] = 'mq'
    contents['user'] = 'bob'
    contents['pass'] = 'hunter2'
    contents['vhost'] = 'agents'
    contents['client_name'] = 'bob.worker'
    contents['port'] = 5999
    contents['is_secure'] = True
    contents['cafile'] = '/ca.pem'
    contents['certfile'] = '/cert.pem'
    contents['keyfile'] = '/key.pem'
    contents['reconnect_delay'] = 5
    contents['report_url'] = 'amqp://elsewhere:5672/%2f'

    config = rpcagent.config.load(write(tmp_path, contents))

    assert config.vhost == 'agents'
    assert config.client_name == 'bob.worker'
    assert config.port == 5999
    assert config.is_secure == True
    assert config.tls == True
    assert config.keyfile == '/key.pem'
    assert config.reconnect_delay == 5.0
    assert isinstance(config.reconnect_delay, float)
    assert config.report_url == 'amqp://elsewhere:5672/%2f'


def test_report_url_from_environment(tmp_path, monkeypatch):
    """ The environment is consulted when the configuration is loaded, not
        when the module is imported, and an explicit report_url wins.
    """

    contents = {'host': 'mq', 'user': 'bob', 'pass': 'x', 'is_secure': False}

    monkeypatch.setenv('RPCAGENT_REPORT_URL', 'amqp://reports.example.com:5672/%2f')

    config = rpcagent.config.load(write(tmp_path, contents))
    assert config.report_url == 'amqp://reports.example.com:5672/%2f'

    contents['report_url'] = 'amqp://elsewhere:5672/%2f'

    config = rpcagent.config.load(write(tmp_path, contents))
    assert config.report_url == 'amqp://elsewhere:5672/%2f'


def test_null_optional_fields(tmp_path):

    contents = {'host': 'mq', 'user': 'bob', 'pass': 'x', 'is_secure': False,
                'vhost': None, 'port': None, 'client_name': None}

    config = rpcagent.config.load(write(tmp_path, contents))

    assert config.vhost is None
    assert config.port is None


@pytest.mark.parametrize('missing', ('host', 'user', 'pass', 'is_secure'))
def test_missing_required(tmp_path, missing):

    contents = {'host': 'mq', 'user': 'bob', 'pass': 'x', 'is_secure': False}
    del contents[missing]

    with pytest.raises(rpcagent.ConfigurationError, match=missing):
        rpcagent.config.load(write(tmp_path, contents))


def test_wrong_types(tmp_path):

    base = {'host': 'mq', 'user': 'bob', 'pass': 'x', 'is_secure': False}

    for field, value in (('port', '5672'), ('port', True), ('is_secure', 'yes'), ('host', 7)):
        contents = dict(base)
        contents[field] = value

        with pytest.raises(rpcagent.ConfigurationError):
            rpcagent.config.load(write(tmp_path, contents))


def test_port_range(tmp_path):

    contents = {'host': 'mq', 'user': 'bob', 'pass': 'x', 'is_secure': False, 'port': 70000}

    with pytest.raises(rpcagent.ConfigurationError, match='port'):
        rpcagent.config.load(write(tmp_path, contents))


def test_malformed(tmp_path):

    with pytest.raises(rpcagent.ConfigurationError, match='parse'):
        rpcagent.config.load(write(tmp_path, b'{"host": '))

    with pytest.raises(rpcagent.ConfigurationError, match='object'):
        rpcagent.config.load(write(tmp_path, b'[1, 2, 3]'))


def test_unreadable(tmp_path):

    missing = os.path.join(str(tmp_path), 'does-not-exist.json')

    with pytest.raises(rpcagent.ConfigurationError, match='read'):
        rpcagent.config.load(missing)


@pytest.mark.parametrize('present', (('cafile',), ('certfile', 'keyfile'), ('cafile', 'keyfile')))
def test_incomplete_tls(settings, present):

    files = dict((name, '/' + name) for name in present)

    with pytest.raises(rpcagent.ConfigurationError, match='cafile, certfile and keyfile'):
        settings(**files)


def test_immutable(settings):

    config = settings()

    with pytest.raises(AttributeError):
        config.host = 'elsewhere'


def test_password_never_logged(tmp_path, caplog):
    """ The password must not appear in the representation of the
        configuration, nor in any log line produced while loading it.
    """

    contents = {'host': 'mq', 'user': 'bob', 'pass': 'hunter2', 'is_secure': False}

    with caplog.at_level(logging.DEBUG, logger='rpcagent'):
        config = rpcagent.config.load(write(tmp_path, contents))
        logging.getLogger('rpcagent.test').info('configuration: %s %r', config, config)

    assert 'hunter2' not in repr(config)
    assert 'hunter2' not in str(config)
    assert 'hunter2' not in caplog.text
    assert 'configuration:' in caplog.text


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
