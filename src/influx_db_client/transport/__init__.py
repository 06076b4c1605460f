"""Transport implementations exposed to users."""

from .base import AsyncTransport, HttpMethod, Transport, TransportKind, TransportResponse
from .http import AsyncHttpTransport, HttpTransport
from .udp import UdpTransport

__all__ = [
    "AsyncHttpTransport",
    "AsyncTransport",
    "HttpMethod",
    "HttpTransport",
    "Transport",
    "TransportKind",
    "TransportResponse",
    "UdpTransport",
]
