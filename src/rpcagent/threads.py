''' Helper for running work on background threads that nobody waits for.
'''

import threading


def detach(function, *args):
    """ Call *function* with *args* on a new daemon thread and return the
        thread. Each call gets its own thread, so work that blocks forever
        holds up nothing but itself, and does not keep the process alive
        once the main thread exits.
    """

    thread = threading.Thread(target=function, args=args)
    thread.daemon = True
    thread.start()
    return thread


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
