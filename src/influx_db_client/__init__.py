"""Public surface for the InfluxDB Python client."""

from .async_client import AsyncInfluxDBClient
from .client import InfluxDBClient
from .config import ClientConfig
from .errors import (
    AuthenticationError,
    BadRequestError,
    DatabaseNotFoundError,
    DecodingError,
    EncodingError,
    InfluxDBError,
    ServerError,
    TransportError,
)
from .point import Point, Points
from .serialization import line_serialization, quote_ident, quote_literal
from .transport import AsyncHttpTransport, HttpTransport, UdpTransport
from .types import ExecuteResult, Node, Precision, QueryResult, Series
from .udp import UdpClient
from .values import BooleanValue, FloatValue, IntegerValue, StringValue, Value, value_of
from .version import __version__

__all__ = [
    "__version__",
    "AsyncHttpTransport",
    "AsyncInfluxDBClient",
    "AuthenticationError",
    "BadRequestError",
    "BooleanValue",
    "ClientConfig",
    "DatabaseNotFoundError",
    "DecodingError",
    "EncodingError",
    "ExecuteResult",
    "FloatValue",
    "HttpTransport",
    "InfluxDBClient",
    "InfluxDBError",
    "IntegerValue",
    "Node",
    "Point",
    "Points",
    "Precision",
    "QueryResult",
    "Series",
    "ServerError",
    "StringValue",
    "TransportError",
    "UdpClient",
    "UdpTransport",
    "Value",
    "line_serialization",
    "quote_ident",
    "quote_literal",
    "value_of",
]
