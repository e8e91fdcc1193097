""" Decoding of response bodies and the success/error routing rule.

Notes:
    There are exactly two branches: a status below 400 decodes the body into whatever the caller asked for, a status
    of 400 or above decodes the body as an `ApiError` and raises it. Partial success or multi-status responses are
    not handled.
"""
import dataclasses
import json
from typing import Any, Optional

from models.errors import ApiError, DecodeError


ERROR_STATUS = 400
JSON_WHITESPACE = ' \t\n\r'

_decoder = json.JSONDecoder()


def is_error_status(status: int) -> bool:
    return status >= ERROR_STATUS


def _from_dataclass(cls: type, payload: Any) -> Any:
    """ Construct dataclass `cls` from the matching keys of `payload`.

    The JSON key of a field defaults to its name and may be overridden with `field(metadata={'json': ...})`.
    Unknown keys are ignored and missing keys fall back to field defaults.
    """
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected object for {cls.__name__}, got {type(payload).__name__}")

    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = f.metadata.get('json', f.name)
        if key in payload:
            kwargs[f.name] = payload[key]
    return cls(**kwargs)


def _populate(target: Any, payload: Any) -> Any:
    """ Fill a `dict` or `list` instance in place. """
    if isinstance(target, dict):
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected object, got {type(payload).__name__}")
        target.clear()
        target.update(payload)
    else:
        if not isinstance(payload, list):
            raise DecodeError(f"Expected array, got {type(payload).__name__}")
        target[:] = payload
    return target


def decode_json(body: bytes, into: Optional[Any] = None) -> Any:
    """ Decode a JSON `body` into `into`.

    Args:
        body:
            Raw response body.

        into:
            Target of the decoding:
                - `None` returns the parsed JSON value,
                - a class defining `from_json()` returns `into.from_json(payload)`,
                - a dataclass type is constructed from the matching keys,
                - a `dict` or `list` instance is populated in place and returned,
                - any other callable returns `into(payload)`.

    Notes:
        Only the first JSON value of `body` is decoded. Anything following it is ignored.

    Raises:
        DecodeError: if `body` does not start with a valid JSON value or does not fit `into`.

    Returns:
        Decoded value.
    """
    try:
        text = body.decode(json.detect_encoding(body), 'surrogatepass')
        payload, _ = _decoder.raw_decode(text.lstrip(JSON_WHITESPACE))
    except ValueError as e:     # JSONDecodeError and UnicodeDecodeError
        raise DecodeError(f"Malformed JSON body: {e}") from e

    try:
        if into is None:
            return payload
        if isinstance(into, (dict, list)):
            return _populate(into, payload)
        if hasattr(into, 'from_json'):
            return into.from_json(payload)
        if isinstance(into, type) and dataclasses.is_dataclass(into):
            return _from_dataclass(into, payload)
        return into(payload)
    except DecodeError:
        raise
    except (TypeError, ValueError, KeyError) as e:
        name = getattr(into, '__name__', type(into).__name__)
        raise DecodeError(f"Unable to decode body into {name}: {e}") from e


def decode_body(status: int, body: bytes, into: Optional[Any] = None) -> Any:
    """ Route `body` to the success or error shape depending on `status`.

    Raises:
        ApiError: when `status` is 400 or above, regardless of `into`.
        DecodeError: when the success body, or the error body itself, cannot be decoded.

    Returns:
        Decoded success value.
    """
    if is_error_status(status):
        raise decode_json(body, ApiError)
    return decode_json(body, into)
