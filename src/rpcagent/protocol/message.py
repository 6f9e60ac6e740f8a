""" Class representations of the messages an agent receives. Every message
    on the wire is an :class:`Envelope`; the envelope's *payload*, when
    present, is a second JSON document whose structure depends on the
    envelope's *method*.
"""

import enum

from .. import json
from ..secret import Secret


class DecodeError(ValueError):
    """ A message or payload could not be interpreted.
    """


class Method(enum.Enum):
    """ The closed set of methods an agent understands. Any other method
        string decodes to :attr:`UNRECOGNIZED` rather than raising, so that
        the dispatcher deals with it explicitly.
    """

    GIT_CREDENTIAL = 'git-credential'
    SHELL = 'shell'
    TEST = 'test'
    UNRECOGNIZED = None

    @classmethod
    def _missing_(cls, value):
        return cls.UNRECOGNIZED


    @classmethod
    def known(cls):
        return tuple(method for method in cls if method is not cls.UNRECOGNIZED)



class Envelope:
    """ The outer structure of every inbound message.

        :ivar sender: Client name of the originating agent or controller.
        :ivar method: A :class:`Method` member.
        :ivar method_name: The method string exactly as received.
        :ivar payload: The method-specific JSON document, as a string, or None.
    """

    def __init__(self, sender, method_name, payload=None):

        self.sender = sender
        self.method_name = method_name
        self.method = Method(method_name)
        self.payload = payload


    def __repr__(self):
        return 'Envelope(sender=%r, method=%r)' % (self.sender, self.method_name)


    @classmethod
    def from_bytes(cls, body):
        """ Decode the raw message *body*. Raises :class:`DecodeError` if it
            is not a JSON object with a string 'sender' and 'method', and an
            optional string 'payload'.
        """

        contents = _load_object(body)

        sender = _string(contents, 'sender')
        method = _string(contents, 'method')
        payload = _string(contents, 'payload', required=False)

        return cls(sender, method, payload)


# end of class Envelope



class GitCredential:
    """ Payload for the 'git-credential' method. The *password* is held as
        a :class:`rpcagent.secret.Secret`.
    """

    def __init__(self, protocol, host, username, password):

        self.protocol = protocol
        self.host = host
        self.username = username
        self.password = Secret(password)


    def __repr__(self):
        return 'GitCredential(protocol=%r, host=%r, username=%r, password=%r)' % (
            self.protocol, self.host, self.username, self.password)


    @classmethod
    def from_json(cls, payload):

        contents = _load_object(payload)

        protocol = _string(contents, 'protocol')
        host = _string(contents, 'host')
        username = _string(contents, 'username')
        password = _string(contents, 'password')

        return cls(protocol, host, username, password)


    def approval(self):
        """ Return the text git expects on the standard input of
            'git credential approve': one key=value pair per line, terminated
            by a blank line.
        """

        lines = list()
        lines.append('protocol=' + self.protocol)
        lines.append('host=' + self.host)
        lines.append('username=' + self.username)
        lines.append('password=' + self.password.reveal())

        return '\n'.join(lines) + '\n\n'


# end of class GitCredential



class ShellCommand:
    """ Payload for the 'shell' method: the argument vector to execute and
        optional environment variable overrides, as (key, value) tuples.
    """

    def __init__(self, command, env=None):

        self.command = list(command)

        if env is None:
            env = list()

        self.env = [tuple(pair) for pair in env]


    def __repr__(self):
        # Environment values can be credentials; only show the names.
        names = [key for key, _value in self.env]
        return 'ShellCommand(command=%r, env=%r)' % (self.command, names)


    @classmethod
    def from_json(cls, payload):

        contents = _load_object(payload)

        try:
            command = contents['command']
        except KeyError:
            raise DecodeError("missing field 'command'")

        if not isinstance(command, list) or not all(isinstance(arg, str) for arg in command):
            raise DecodeError("'command' must be a list of strings")

        env = contents.get('env')

        if env is not None:
            if not isinstance(env, list):
                raise DecodeError("'env' must be a list of [key, value] pairs")

            for pair in env:
                if not isinstance(pair, list) or len(pair) != 2:
                    raise DecodeError("'env' must be a list of [key, value] pairs")
                if not isinstance(pair[0], str) or not isinstance(pair[1], str):
                    raise DecodeError("'env' keys and values must be strings")

        return cls(command, env)


# end of class ShellCommand



def _load_object(raw):

    if raw is None:
        raise DecodeError('no content')

    try:
        contents = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DecodeError(str(e))

    if not isinstance(contents, dict):
        raise DecodeError('expected a JSON object')

    return contents



def _string(contents, field, required=True):

    try:
        value = contents[field]
    except KeyError:
        value = None

    if value is None:
        if required:
            raise DecodeError('missing field ' + repr(field))
        return None

    if not isinstance(value, str):
        raise DecodeError('field %r must be a string' % (field))

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
