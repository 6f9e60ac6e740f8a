''' Run the agent with ``python -m rpcagent``; see :mod:`rpcagent.main`.
'''

import sys

from .main import main

sys.exit(main())

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
