""" Error taxonomy shared by `core` and `primitives`.

Notes:
    Every failure surfaces to the caller: configuration problems and malformed requests are local, `ApiError` is
    reported by the remote service, `TransportError` comes from the network and `DecodeError` signals a body which
    does not match the expected shape.
"""
from typing import Any, Mapping

from requests import RequestException


# network, DNS and TLS failures are raised by `requests` and propagate as-is
TransportError = RequestException


class OandaError(Exception):
    """ Base class for all errors raised by this library. """
    pass


class ConfigurationError(OandaError, ValueError):
    """ Invalid environment, missing credential or unusable configuration file. """
    pass


class RequestConstructionError(OandaError, ValueError):
    """ An outgoing request could not be formed (eg: malformed URL). """
    pass


class DecodeError(OandaError, ValueError):
    """ A response body does not match the expected shape. """
    pass


class ApiError(OandaError):
    """ Error details as returned by the OANDA servers for responses with a status of 400 or above.

    Fields:
        code (int):
            Service specific error code.

        message (str):
            Human-readable description.

        more_info (str):
            Reference URL. Sent as `moreInfo` on the wire.

    References:
        http://developer.oanda.com/docs/v1/troubleshooting/
    """
    def __init__(self, code: int = 0, message: str = '', more_info: str = ''):
        super().__init__(code, message, more_info)
        self.code = code
        self.message = message
        self.more_info = more_info

    @classmethod
    def from_json(cls, payload: Any) -> 'ApiError':
        """ Build from a decoded error body.

        Missing keys fall back to their zero values and unknown keys are ignored.

        Raises:
            DecodeError: if `payload` is not a JSON object or holds values of the wrong type.
        """
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Expected error object, got {type(payload).__name__}")

        code = payload.get('code', 0)
        message = payload.get('message', '')
        more_info = payload.get('moreInfo', '')

        if isinstance(code, bool) or not isinstance(code, int):
            raise DecodeError(f"Invalid error code {code!r}")
        for value in (message, more_info):
            if not isinstance(value, str):
                raise DecodeError(f"Invalid error field {value!r}")

        return cls(code, message, more_info)

    def __eq__(self, other):
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self.code, self.message, self.more_info) == (other.code, other.message, other.more_info)

    def __hash__(self):
        return hash((self.code, self.message, self.more_info))

    def __str__(self):
        return f"ApiError{{Code: {self.code}, Message: {self.message}, Moreinfo: {self.more_info}}}"


ServiceError = ApiError
