""" Command-line entry point for the agent.
"""

import argparse
import logging

from . import __version__
from . import config
from .agent import Agent


logger = logging.getLogger(__name__)


def main(argv=None):

    parser = argparse.ArgumentParser(
        prog='rpcagent',
        description='Run commands delivered over an AMQP topic broker.'
    )
    parser.add_argument(
        'config',
        help='Path to the JSON connection configuration file'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )

    arguments = parser.parse_args(argv)

    if arguments.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # pika is chatty at INFO about every connection it opens and closes,
    # and the reporter opens one per report.

    if not arguments.verbose:
        logging.getLogger('pika').setLevel(logging.WARNING)

    try:
        configuration = config.load(arguments.config)
        agent = Agent(configuration)
    except (config.ConfigurationError, OSError) as e:
        logger.critical('%s', e)
        return 1

    try:
        agent.run()
    except KeyboardInterrupt:
        return 130

    return 0


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
