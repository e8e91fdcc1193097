""" Runtime selectable debugging and tracing.

A `Tracer` is handed to a `Client` at construction. The default does nothing. `DebugTracer` logs requests and
responses and `TraceTracer` also copies each response body to a sink while it is being decoded.

Example:
    >>> logging.basicConfig(level=logging.DEBUG)
    >>> client = Client.fx_practice(token, tracer=get_tracer('trace'))
"""
import logging
import sys
from typing import IO, Optional

from models.errors import ConfigurationError


LOGGER_NAME = 'oanda'


class Tracer(object):
    """ No-op tracer. """
    level = ''

    def debug(self, msg: str, *args) -> None:
        pass

    def tap(self, chunk: bytes) -> None:
        """ Receives every chunk of a response body as it is read. """
        pass


class DebugTracer(Tracer):
    """ Logs request and response summaries at `DEBUG` level. """
    level = 'debug'

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def debug(self, msg: str, *args) -> None:
        self.logger.debug(msg, *args)


class TraceTracer(DebugTracer):
    """ Also duplicates response bodies to `sink` (`sys.stderr` by default). """
    level = 'trace'

    def __init__(self, logger: Optional[logging.Logger] = None, sink: Optional[IO[bytes]] = None):
        super().__init__(logger)
        self.sink = sink

    def tap(self, chunk: bytes) -> None:
        sink = self.sink
        if sink is None:
            sink = getattr(sys.stderr, 'buffer', None)
        if sink is None:
            # text-only stderr (eg: `redirect_stderr(io.StringIO())`, notebooks)
            sink = sys.stderr
            chunk = chunk.decode('utf-8', 'replace')
        sink.write(chunk)
        sink.flush()


_TRACERS = {t.level: t for t in (Tracer, DebugTracer, TraceTracer)}


def get_tracer(level: Optional[str] = None) -> Tracer:
    """ Return a tracer for `level`.

    Args:
        level:
            One of `''` (or `None`), `'debug'` or `'trace'`. Case-insensitive.

    Raises:
        ConfigurationError: on any other value.
    """
    key = (level or '').lower()
    try:
        return _TRACERS[key]()
    except KeyError:
        raise ConfigurationError(f"Invalid debug level {level!r}") from None
