"""TLS identity for connecting to the command broker.

The CA bundle, client certificate and client key are read once at startup,
so that a missing or unreadable file stops the agent before the first
connection attempt instead of failing every reconnect.
"""

from __future__ import annotations

import logging
import ssl
from typing import Optional

logger = logging.getLogger(__name__)


class Identity:
    """In-memory copy of the TLS material for one client."""

    def __init__(
        self,
        ca_chain: str,
        certificate: bytes,
        key: bytes,
        certfile: str,
        keyfile: str,
    ):
        self.ca_chain = ca_chain
        self.certificate = certificate
        self.key = key
        self.certfile = certfile
        self.keyfile = keyfile

    def __repr__(self) -> str:
        return f"Identity(certfile={self.certfile!r}, keyfile={self.keyfile!r})"

    def context(self) -> ssl.SSLContext:
        """Return a client-side SSLContext that trusts only the configured
        CA chain and presents the client certificate."""

        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.load_verify_locations(cadata=self.ca_chain)

        # The ssl module only loads a certificate chain from the filesystem;
        # the files were confirmed readable when the identity was loaded.
        context.load_cert_chain(self.certfile, self.keyfile)
        return context


def load(cafile: str, certfile: str, keyfile: str) -> Identity:
    """Read the three TLS files. Raises OSError if any is unreadable."""

    with open(cafile, "r") as handle:
        ca_chain = handle.read()
    with open(certfile, "rb") as handle:
        certificate = handle.read()
    with open(keyfile, "rb") as handle:
        key = handle.read()

    logger.debug("loaded TLS identity from %s, %s, %s", cafile, certfile, keyfile)
    return Identity(ca_chain, certificate, key, certfile, keyfile)


def load_config(config) -> Optional[Identity]:
    """Return the :class:`Identity` described by a ConnectionConfig, or None
    if no certificate material is configured."""

    if not config.tls:
        return None
    return load(config.cafile, config.certfile, config.keyfile)
