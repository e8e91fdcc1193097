""" Default HTTP transport.

Notes:
    The number of concurrently open connections to the OANDA servers is restricted, as is the number of new
    connections per second. The pool therefore keeps at most `MAX_IDLE_CONNECTIONS_PER_HOST` connections per host.
    Shard across several clients rather than raising this value.
"""
import requests
from requests.adapters import HTTPAdapter


MAX_IDLE_CONNECTIONS_PER_HOST = 2
CONNECT_TIMEOUT = 30.0


class Transport(requests.Session):
    """ `requests.Session` with a bounded connection pool.

    Proxies are taken from the environment (`HTTPS_PROXY`, etc.), as with any session.
    """
    def __init__(self, pool_maxsize: int = MAX_IDLE_CONNECTIONS_PER_HOST):
        super().__init__()
        for prefix in ('https://', 'http://'):
            self.mount(prefix, HTTPAdapter(pool_maxsize=pool_maxsize))

    def close_idle_connections(self) -> None:
        """ Drop every pooled connection. The session stays usable. """
        for adapter in self.adapters.values():
            adapter.close()


def default_transport() -> Transport:
    """ Factory for the transport used when a `Client` is not given one. """
    return Transport()
