''' A thin wrapper for values that must never appear in log output, such as
    broker passwords and git credentials.
'''


mask = '***'


class Secret:
    """ Hold a secret string. The :func:`str` and :func:`repr` of a
        :class:`Secret` are always masked; the only way to get at the
        original value is to call :func:`reveal`, which should only happen
        at the point where the value is handed to the broker or to a
        child process.
    """

    __slots__ = ('_value',)

    def __init__(self, value):

        if isinstance(value, Secret):
            value = value.reveal()

        self._value = value


    def __eq__(self, other):
        if isinstance(other, Secret):
            return self._value == other._value
        return NotImplemented


    def __hash__(self):
        return hash(self._value)


    def __repr__(self):
        return "Secret('" + mask + "')"


    def __str__(self):
        return mask


    def reveal(self):
        """ Return the wrapped value.
        """

        return self._value


# end of class Secret


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
