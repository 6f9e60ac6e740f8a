""" Handler for the 'test' method, which exists so that a controller can
    confirm an agent is listening.
"""

import logging


logger = logging.getLogger(__name__)

acknowledgment = 'Test message received'


def handle(_payload, reporter):
    logger.info('[test] %s', acknowledgment)
    reporter.report(acknowledgment)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
