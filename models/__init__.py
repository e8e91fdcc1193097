""" The `models` package contains the data-types exchanged between `core` and `primitives`.

Domain resources (orders, trades, instruments) are not modelled here; only identifiers and the error taxonomy.
"""
from models.ids import Id
from models.errors import OandaError, ConfigurationError, RequestConstructionError, DecodeError, \
    TransportError, ApiError, ServiceError
