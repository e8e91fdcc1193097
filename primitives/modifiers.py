""" Request modifiers update a pending `requests.Request` before it is prepared and dispatched.

Each modifier is a `str` carrying its single value. A `Client` keeps an ordered list of modifiers and applies all
of them, in registration order, to every request it builds. Later modifiers see the request as left by earlier
ones, so a header written twice keeps the last value.

Example:
    Apply modifiers manually:
        >>> req = requests.Request('GET', '/v1/accounts', headers=CaseInsensitiveDict())
        >>> for mod in (DateFormat('RFC3339'), Environment('fxpractice')):
        >>>     mod.modify(req)
        >>> req.url
        'https://api-fxpractice.oanda.com/v1/accounts'
"""
from abc import ABC, abstractmethod
from urllib.parse import urlsplit, urlunsplit

import requests
from requests.auth import AuthBase


DATETIME_FORMAT_HEADER = 'X-Accept-Datetime-Format'
HOST_PATTERN = 'api-{}.oanda.com'


class RequestModifier(str, ABC):
    """ Mutates a pending request in place.

    Notes:
        `modify()` must not touch anything but the request it receives.
    """
    @abstractmethod
    def modify(self, request: requests.Request) -> None:
        pass

    def __repr__(self):
        return f"{type(self).__name__}({str.__repr__(self)})"


class BearerAuth(AuthBase):
    """ `requests` auth hook writing the Bearer authorization header. """
    def __init__(self, token: str):
        self.token = token

    def __call__(self, request):
        request.headers['Authorization'] = 'Bearer ' + self.token
        return request


class TokenAuthenticator(RequestModifier):
    """ Adds a Bearer authorization header.

    References:
        http://developer.oanda.com/docs/v1/auth/

    Notes:
        The credential is also attached as `request.auth`, which stops `requests` from replacing the header with
        credentials found in `~/.netrc`.
    """
    def modify(self, request: requests.Request) -> None:
        request.headers['Authorization'] = 'Bearer ' + self
        request.auth = BearerAuth(self)

    def __repr__(self):
        # keep credentials out of logs
        return f"{type(self).__name__}('***')"


class Environment(RequestModifier):
    """ Points a request at the OANDA environment named by the modifier.

    The scheme is always forced to `https`. The host is derived from the environment name only when the URL does not
    already carry one, so an explicit endpoint is left untouched and applying the modifier twice changes nothing.
    """
    @property
    def host(self) -> str:
        return HOST_PATTERN.format(self)

    def modify(self, request: requests.Request) -> None:
        parts = urlsplit(request.url)
        netloc = parts.netloc or self.host
        request.url = urlunsplit(('https', netloc, parts.path, parts.query, parts.fragment))


class DateFormat(RequestModifier):
    """ Declares the DateTime encoding the service should use for timestamps in responses (eg: 'UNIX', 'RFC3339'). """
    def modify(self, request: requests.Request) -> None:
        request.headers[DATETIME_FORMAT_HEADER] = str(self)


class ContentType(RequestModifier):
    """ Sets the `Content-Type` header of requests that carry a body. Bodyless requests are not modified. """
    def modify(self, request: requests.Request) -> None:
        if request.data:
            request.headers['Content-Type'] = str(self)


DEFAULT_DATE_FORMAT = DateFormat('UNIX')
DEFAULT_CONTENT_TYPE = ContentType('application/x-www-form-urlencoded')
