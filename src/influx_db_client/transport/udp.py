"""UDP transport using the standard library socket module."""

from __future__ import annotations

import socket
import threading
from typing import Iterable

from ..errors import TransportError
from ..logger import BoundLogger, create_logger
from .base import Transport

Address = tuple[str, int]


class UdpTransport:
    """Sends each payload as one datagram to every address.

    Delivery is fire and forget. Payloads larger than the path's datagram
    limit are not split, so oversized batches are silently dropped by the
    network.
    """

    kind: Transport.Kind = "udp"

    def __init__(self, *, logger: BoundLogger | None = None) -> None:
        self._logger = (logger or create_logger()).child("udp")
        self._sockets: dict[int, socket.socket] = {}
        self._lock = threading.Lock()

    def send(self, payload: bytes, addresses: Iterable[Address]) -> None:
        with self._lock:
            for address in addresses:
                sock = self._socket_for(address)
                self._logger.debug("UDP -> %s:%s bytes=%d", address[0], address[1], len(payload))
                try:
                    sock.sendto(payload, address)
                except OSError as exc:
                    raise TransportError(
                        f"UDP send to {address[0]}:{address[1]} failed: {exc}",
                        context=address,
                    ) from exc

    def close(self) -> None:
        with self._lock:
            for sock in self._sockets.values():
                sock.close()
            self._sockets.clear()

    def _socket_for(self, address: Address) -> socket.socket:
        family = socket.AF_INET6 if ":" in address[0] else socket.AF_INET
        sock = self._sockets.get(family)
        if sock is None:
            try:
                sock = socket.socket(family, socket.SOCK_DGRAM)
            except OSError as exc:
                raise TransportError(f"Cannot open UDP socket: {exc}") from exc
            self._sockets[family] = sock
        return sock


__all__ = ["Address", "UdpTransport"]
