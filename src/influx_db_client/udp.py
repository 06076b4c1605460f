"""Fire-and-forget writes over the InfluxDB UDP listener."""

from __future__ import annotations

from typing import Iterable, Union

from .logger import BoundLogger, LogLevel, create_logger
from .point import Point, Points, as_points
from .transport.udp import Address, UdpTransport

HostSpec = Union[str, Address]


def parse_address(host: HostSpec) -> Address:
    """Accept ``"host:port"``, ``"[v6]:port"`` or a ``(host, port)`` tuple."""
    if isinstance(host, tuple):
        name, port = host
        return str(name), int(port)
    name, sep, port = host.rpartition(":")
    if not sep or not name or not port.isdigit():
        raise ValueError(f"UDP host must look like host:port, got {host!r}")
    return name.strip("[]"), int(port)


class UdpClient:
    """Sends each write as one datagram to every configured host.

    There is no response channel, so a lost datagram is not reported. Keep
    batches below the network's datagram size; nothing here splits them.
    """

    def __init__(
        self,
        hosts: Iterable[HostSpec] = (),
        *,
        transport: UdpTransport | None = None,
        logger: object | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        self._logger: BoundLogger = create_logger(logger=logger, level=log_level)
        self._hosts: list[Address] = [parse_address(host) for host in hosts]
        self._transport = transport or UdpTransport(logger=self._logger)

    def __enter__(self) -> "UdpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def hosts(self) -> tuple[Address, ...]:
        return tuple(self._hosts)

    def add_host(self, host: HostSpec) -> None:
        self._hosts.append(parse_address(host))

    def write_point(self, point: Point) -> None:
        self.write_points(Points.of(point))

    def write_points(self, points: Points | Iterable[Point]) -> None:
        payload = as_points(points).serialize().encode("utf-8")
        self._logger.debug("Sending %d bytes to %d UDP hosts", len(payload), len(self._hosts))
        self._transport.send(payload, self._hosts)

    def close(self) -> None:
        self._transport.close()


__all__ = ["UdpClient", "parse_address"]
