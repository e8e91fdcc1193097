""" Client configuration stored as YAML.

Example `oanda_api.yml`:
    environment: fxpractice
    token: 0123456789abcdef-0123456789abcdef
    account_id: 8108490
    debug: trace
"""
from dataclasses import dataclass, fields
from os import path
from typing import Optional

from yaml import YAMLError, safe_load

from core.transport import CONNECT_TIMEOUT
from misc import CONFIG_F
from models.errors import ConfigurationError


@dataclass
class ClientConfig:
    """ Settings needed to build a `Client`.

    Fields:
        environment (str):
            'fxpractice' or 'fxtrade'.

        token (str):
            Personal access token.

        account_id (int):
            Account to select. `0` leaves selection disabled.

        debug (str):
            Tracer level: '', 'debug' or 'trace'.

        connect_timeout (float):
            Seconds to wait for a connection.

        read_timeout (float):
            Seconds to wait for response data. `None` waits indefinitely.
    """
    environment: str = 'fxpractice'
    token: str = ''
    account_id: int = 0
    debug: str = ''
    connect_timeout: float = CONNECT_TIMEOUT
    read_timeout: Optional[float] = None

    @property
    def timeout(self) -> tuple:
        """ Timeout in the form accepted by `requests`. """
        return self.connect_timeout, self.read_timeout

    @classmethod
    def load(cls, fn: str = None) -> 'ClientConfig':
        """ Read configuration from YAML file `fn`.

        Args:
            fn:
                Path of YAML file. Defaults to `oanda_api.yml` in the project root.

        Raises:
            ConfigurationError: when the file is missing or unreadable, is not a mapping, contains unknown keys
                or holds a value of the wrong type.
        """
        if fn is None:
            fn = CONFIG_F

        try:
            with open(fn, 'r') as f:
                data = safe_load(f)
        except (OSError, YAMLError) as e:
            raise ConfigurationError(f"Unable to read config {path.basename(str(fn))}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {fn} must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        if data.get('debug') is None:
            data['debug'] = ''
        _validate(data)
        return cls(**data)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate(data: dict) -> None:
    """ Check the types of the values read from a config file.

    Raises:
        ConfigurationError: on the first invalid value.
    """
    for key in ('environment', 'token', 'debug'):
        if key in data and not isinstance(data[key], str):
            raise ConfigurationError(f"Config key {key} must be a string, got {type(data[key]).__name__}")

    account_id = data.get('account_id', 0)
    if not isinstance(account_id, int) or isinstance(account_id, bool) or account_id < 0:
        raise ConfigurationError(f"Config key account_id must be a non-negative integer, got {account_id!r}")

    connect_timeout = data.get('connect_timeout', CONNECT_TIMEOUT)
    if not _is_number(connect_timeout) or connect_timeout <= 0:
        raise ConfigurationError(f"Config key connect_timeout must be a positive number, got {connect_timeout!r}")

    read_timeout = data.get('read_timeout')
    if read_timeout is not None and (not _is_number(read_timeout) or read_timeout <= 0):
        raise ConfigurationError(f"Config key read_timeout must be a positive number, got {read_timeout!r}")
