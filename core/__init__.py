""" Core infrastructure for talking to the OANDA REST API.

`Client` builds requests through its modifier pipeline, dispatches them on a shared transport and decodes either
the expected value or an `ApiError`. `PollRequest` repeats a prepared request with entity tag caching.

Resource specific code (orders, trades, instruments, price streaming) is built on top of these three operations:
`Client.new_request()`, `Client.request_and_decode()` and `Client.new_poll_request()`.
"""
from core.transport import Transport, default_transport, MAX_IDLE_CONNECTIONS_PER_HOST
from core.config import ClientConfig
from core.poll import PollRequest
from core.client import Client
