''' Wrapper module around :mod:`orjson` providing the equivalent of
    :func:`json.loads` and :func:`json.dumps`. As with orjson, :func:`dumps`
    always returns bytes; :func:`loads` accepts either bytes or str.
'''

import orjson


JSONDecodeError = orjson.JSONDecodeError

dumps = orjson.dumps
loads = orjson.loads

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
