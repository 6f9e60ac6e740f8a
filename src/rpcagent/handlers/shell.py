""" Handler for the 'shell' method: run a command on this host.
"""

import logging
import os
import subprocess


logger = logging.getLogger(__name__)

success = '[shell] Command executed successfully'


def handle(command, reporter):
    """ Run the :class:`rpcagent.protocol.message.ShellCommand` *command*
        and report how it went. The child inherits the agent's standard
        input, output, and error; its environment is the agent's own with
        the requested overrides applied. An empty command does nothing.
    """

    logger.info('Received shell command: %r', command)

    if not command.command:
        logger.info('No command provided')
        return

    environment = dict(os.environ)
    environment.update(command.env)

    try:
        child = subprocess.Popen(command.command, env=environment)
    except (OSError, ValueError) as e:
        logger.error('Failed to execute command: %s', e)
        reporter.report('[shell] Failed to execute command: ' + str(e))
        return

    try:
        status = child.wait()
    except OSError as e:
        logger.error('Failed to wait on child process: %s', e)
        reporter.report('[shell] Failed to wait on child process: ' + str(e))
        return

    if status == 0:
        logger.info('Command executed successfully')
        reporter.report(success)
    else:
        logger.error('Command exited with status: %d', status)
        reporter.report(failure(status))



def failure(status):
    """ Return the report text for a command that exited with a non-zero
        *status*. Negative values indicate termination by a signal.
    """

    return '[shell] Command exited with status: %d' % (status)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
