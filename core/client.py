from typing import Any, Iterable, Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests
from requests.structures import CaseInsensitiveDict

from core.config import ClientConfig
from core.poll import PollRequest
from core.transport import CONNECT_TIMEOUT, default_transport
from models.errors import ConfigurationError, RequestConstructionError
from models.ids import Id
from primitives.decoding import decode_body
from primitives.modifiers import DEFAULT_CONTENT_TYPE, DEFAULT_DATE_FORMAT, Environment, RequestModifier, \
    TokenAuthenticator
from primitives.tracing import Tracer, get_tracer


DEFAULT_TIMEOUT = (CONNECT_TIMEOUT, None)
CHUNK_SIZE = 8192

# methods whose parameters travel in the query string instead of a form-encoded body
BODYLESS_METHODS = ('GET', 'HEAD', 'DELETE', 'OPTIONS')


class Client(object):
    """ Builds, dispatches and decodes requests to the OANDA REST API.

    Every request built by a client passes through its ordered list of `RequestModifier`: the default date format
    and content type first, then environment and authentication, then any modifiers given by the caller.

    Notes:
        A client may be shared across threads for independent requests since each call builds its own request.
        `select_account()` is not synchronised; callers must serialise it against concurrent use.

    Fields:
        valid_environments (tuple[str, ...]):
            Recognized environment names.

        modifiers (list[RequestModifier]):
            Modifiers in application order.

        transport (requests.Session):
            Underlying HTTP transport. Possibly shared with other clients.

        tracer (Tracer):
            Debug/trace capability. No-op by default.

    References:
        http://developer.oanda.com/docs/v1/
    """
    valid_environments = ('fxpractice', 'fxtrade')

    def __init__(self, environment: str, token: str, transport: requests.Session = None,
                 modifiers: Iterable[RequestModifier] = (), tracer: Tracer = None, timeout=DEFAULT_TIMEOUT):
        """
        Args:
            environment:
                'fxpractice' or 'fxtrade'.
            token:
                Personal access token.
            transport:
                HTTP transport. A new bounded transport is created by `default_transport()` when not given.
            modifiers:
                Extra modifiers applied after the defaults, in the order given.
            tracer:
                Debug/trace capability.
            timeout:
                Passed to the transport with every request.

        Raises:
            ConfigurationError: if `environment` is not recognized or `token` is empty.
        """
        if environment not in self.valid_environments:
            raise ConfigurationError(f"Invalid Oanda environment {environment}")
        if not token:
            raise ConfigurationError("No access token")

        self.modifiers = [DEFAULT_DATE_FORMAT, DEFAULT_CONTENT_TYPE,
                          Environment(environment), TokenAuthenticator(token)]
        self.modifiers.extend(modifiers)

        self.environment = environment
        self.transport = transport if transport is not None else default_transport()
        self.tracer = tracer if tracer is not None else Tracer()
        self.timeout = timeout
        self._account_id = Id(0)

    @classmethod
    def fx_practice(cls, token: str, **kwargs) -> 'Client':
        """ Client connected to the fxpractice environment.

        See http://developer.oanda.com/docs/v1/auth/ for further information.
        """
        if not token:
            raise ConfigurationError("No FxPractice access token")
        return cls('fxpractice', token, **kwargs)

    @classmethod
    def fx_trade(cls, token: str, **kwargs) -> 'Client':
        """ Client connected to the fxtrade environment.

        See http://developer.oanda.com/docs/v1/auth/ for further information.
        """
        if not token:
            raise ConfigurationError("No FxTrade access token")
        return cls('fxtrade', token, **kwargs)

    @classmethod
    def from_config(cls, config: ClientConfig = None, **kwargs) -> 'Client':
        """ Build a client from `config`, loading the default config file when not given.

        Account selection, tracer and timeouts are taken from `config`. `kwargs` are passed to `__init__()`.
        """
        if config is None:
            config = ClientConfig.load()
        if 'tracer' not in kwargs:
            kwargs['tracer'] = get_tracer(config.debug)
        kwargs.setdefault('timeout', config.timeout)

        client = cls(config.environment, config.token, **kwargs)
        client.select_account(config.account_id)
        return client

    @property
    def account_id(self) -> Id:
        return self._account_id

    def select_account(self, account_id: int) -> None:
        """ Select the account under which all trades and orders will be booked.

        Use `0` to disable account selection. The id is not validated against the service.
        """
        self._account_id = Id(account_id)

    def new_request(self, method: str, url: str, body: Any = None) -> requests.PreparedRequest:
        """ Create a request ready to be sent.

        All modifiers are applied, in order, before the request is prepared. When the transport knows how to
        prepare requests (eg: `requests.Session`) its defaults are merged in.

        Args:
            method:
                HTTP method.
            url:
                Absolute URL, or a path which the environment modifier completes.
            body:
                Optional request body (`str`, `bytes` or a form mapping).

        Raises:
            RequestConstructionError: if the request cannot be formed.
        """
        try:
            urlsplit(url)
            req = requests.Request(method, url, headers=CaseInsensitiveDict(), data=body)
        except (TypeError, ValueError) as e:
            raise RequestConstructionError(f"Invalid request {method} {url}: {e}") from e

        for modifier in self.modifiers:
            modifier.modify(req)

        prepare = getattr(self.transport, 'prepare_request', None)
        try:
            if prepare is not None:
                return prepare(req)
            return req.prepare()
        except (requests.RequestException, TypeError, ValueError) as e:
            raise RequestConstructionError(f"Invalid request {method} {req.url}: {e}") from e

    def send(self, request: requests.PreparedRequest, stream: bool = False) -> requests.Response:
        """ Dispatch `request` on the transport.

        Transport errors (`requests.RequestException`) propagate unchanged.
        """
        return self.transport.send(request, stream=stream, timeout=self.timeout)

    def decode_response(self, response: requests.Response, into: Any = None) -> Any:
        """ Decode `response` and release it.

        The body is drained and the response closed on every exit path, so that its connection returns to the pool.

        Raises:
            ApiError: if the response status is 400 or above.
            DecodeError: if the body cannot be decoded.

        Returns:
            Decoded success value. See `decode_json()` for the accepted values of `into`.
        """
        try:
            self.tracer.debug("response %s %s", response.status_code, response.reason)
            chunks = []
            for chunk in response.iter_content(CHUNK_SIZE):
                self.tracer.tap(chunk)
                chunks.append(chunk)
            return decode_body(response.status_code, b''.join(chunks), into)
        finally:
            response.close()

    def request_and_decode(self, method: str, url: str, data: Optional[Mapping[str, Any]] = None,
                           into: Any = None) -> Any:
        """ Build and dispatch a request, then decode its response.

        Args:
            method:
                HTTP method.
            url:
                Request URL.
            data:
                Parameters. Form-encoded as the body of POST/PUT/PATCH requests, appended to the query string of
                GET/HEAD/DELETE/OPTIONS requests.
            into:
                Decoding target.

        Raises:
            RequestConstructionError, ApiError, DecodeError, requests.RequestException
        """
        method = method.upper()
        body = None
        if data:
            encoded = urlencode(sorted(data.items()), doseq=True)
            if method in BODYLESS_METHODS:
                url = _add_query(url, encoded)
            else:
                body = encoded

        req = self.new_request(method, url, body)
        self.tracer.debug("request %s %s", req.method, req.url)
        self.tracer.debug("request data %s", data)

        rsp = self.send(req, stream=True)
        return self.decode_response(rsp, into)

    def get_and_decode(self, url: str, into: Any = None, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request_and_decode('GET', url, params, into)

    def new_poll_request(self, request: requests.PreparedRequest) -> PollRequest:
        """ Wrap `request` so that it can be executed repeatedly. """
        return PollRequest(self, request)

    def cancel_request(self, request: requests.PreparedRequest) -> None:
        """ Abort an in-progress request, when the transport supports it. """
        cancel = getattr(self.transport, 'cancel_request', None)
        if cancel is not None:
            cancel(request)

    def close_idle_connections(self) -> None:
        """ Close all idle connections to the OANDA servers, when the transport supports it. """
        close = getattr(self.transport, 'close_idle_connections', None)
        if close is not None:
            close()


def _add_query(url: str, query: str) -> str:
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise RequestConstructionError(f"Invalid url {url}: {e}") from e
    if parts.query:
        query = parts.query + '&' + query
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
