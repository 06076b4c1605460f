"""End-to-end scenario against a local InfluxDB 1.x server."""

from __future__ import annotations

import os
import time

from influx_db_client import (
    ClientConfig,
    InfluxDBClient,
    Point,
    Points,
    Precision,
    ServerError,
    TransportError,
    UdpClient,
)

DATABASE = os.getenv("INFLUXDB_DATABASE", "demo")
UDP_HOST = os.getenv("INFLUXDB_UDP_HOST", "127.0.0.1:8089")


def log_section(title: str) -> None:
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def build_points(now: int) -> Points:
    points = Points()
    for offset, (host, load) in enumerate([("web 1", 0.42), ("web,2", 0.87), ("db", 1.5)]):
        points.append(
            Point("cpu")
            .add_tag("host", host)
            .add_field("load", load)
            .add_field("cores", 8)
            .add_field("healthy", load < 1.0)
            .set_timestamp(now - offset)
        )
    return points


def main() -> None:
    config = ClientConfig.from_env().with_database(DATABASE)
    with InfluxDBClient(config=config) as client:
        log_section("Server")
        if not client.ping():
            raise TransportError(f"Cannot reach {client.base_url}")
        print(f"version={client.get_version()}")

        log_section("Write")
        client.create_database(DATABASE)
        points = build_points(int(time.time()))
        print(points.serialize())
        client.write_points(points, Precision.SECONDS)

        log_section("Query")
        nodes = client.query("SELECT * FROM cpu GROUP BY host", epoch=Precision.SECONDS) or []
        for node in nodes:
            for series in node.series:
                print(series.name, series.tags, series.records())

        try:
            client.query("SELECT * FROM no_such_measurement WHERE")
        except ServerError as exc:
            print(f"server rejected query: {exc}")

        log_section("UDP")
        with UdpClient([UDP_HOST]) as udp:
            udp.write_point(Point("heartbeat").add_field("alive", True))

        client.drop_database(DATABASE)


if __name__ == "__main__":
    main()
