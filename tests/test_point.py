import pytest

from influx_db_client import (
    EncodingError,
    FloatValue,
    IntegerValue,
    Point,
    Points,
    StringValue,
    line_serialization,
)


def _read_escaped(line: str, idx: int, stops: str) -> tuple[str, int]:
    out = []
    while idx < len(line) and line[idx] not in stops:
        if line[idx] == "\\" and idx + 1 < len(line) and line[idx + 1] in ",= ":
            out.append(line[idx + 1])
            idx += 2
        else:
            out.append(line[idx])
            idx += 1
    return "".join(out), idx


def _read_quoted(line: str, idx: int) -> tuple[str, int]:
    out = []
    idx += 1
    while line[idx] != '"':
        if line[idx] == "\\" and line[idx + 1] in '"\\':
            out.append(line[idx + 1])
            idx += 2
        else:
            out.append(line[idx])
            idx += 1
    return "".join(out), idx + 1


def _scalar(raw: str):
    if raw in ("true", "false"):
        return raw == "true"
    if raw.endswith("i"):
        return int(raw[:-1])
    return float(raw)


def parse_line(line: str):
    """Minimal line protocol reader used to check escaping round-trips."""
    measurement, idx = _read_escaped(line, 0, ", ")
    tags = {}
    while line[idx] == ",":
        key, idx = _read_escaped(line, idx + 1, "=")
        value, idx = _read_escaped(line, idx + 1, ", ")
        tags[key] = value

    fields = {}
    idx += 1
    while True:
        key, idx = _read_escaped(line, idx, "=")
        idx += 1
        if line[idx] == '"':
            fields[key], idx = _read_quoted(line, idx)
        else:
            raw, idx = _read_escaped(line, idx, ", ")
            fields[key] = _scalar(raw)
        if idx < len(line) and line[idx] == ",":
            idx += 1
            continue
        break

    timestamp = int(line[idx + 1 :]) if idx < len(line) else None
    return measurement, tags, fields, timestamp


def test_tag_with_space_is_escaped() -> None:
    point = Point("cpu").add_tag("host", "a b").add_field("load", 0.5)
    assert point.serialize() == "cpu,host=a\\ b load=0.5"


def test_full_line_with_timestamp() -> None:
    point = (
        Point("test1")
        .add_tag("region", "eu")
        .add_field("foo", "bar")
        .add_field("integer", 11)
        .add_field("float", 22.3)
        .add_field("boolean", False)
        .set_timestamp(1508981970)
    )
    assert point.serialize() == (
        'test1,region=eu foo="bar",integer=11i,float=22.3,boolean=false 1508981970'
    )


def test_non_string_tags_render_as_plain_text() -> None:
    point = Point("test2", tags={"number": 12, "float": 12.6, "flag": True}, fields={"fd": "'3'"})
    assert point.serialize() == "test2,number=12,float=12.6,flag=true fd=\"'3'\""


def test_measurement_escapes_comma_and_space_only() -> None:
    point = Point("my measure,x=1").add_field("v", 1)
    assert point.serialize() == "my\\ measure\\,x=1 v=1i"


def test_keys_escape_comma_equals_and_space() -> None:
    point = Point("m").add_tag("a,b=c d", "e,f=g h").add_field("x=y z,w", 1.5)
    assert point.serialize() == "m,a\\,b\\=c\\ d=e\\,f\\=g\\ h x\\=y\\ z\\,w=1.5"


def test_field_string_escapes_quotes_and_backslashes() -> None:
    point = Point("m").add_field("msg", 'path C:\\tmp "quoted"')
    assert point.serialize() == 'm msg="path C:\\\\tmp \\"quoted\\""'


def test_overwrite_keeps_first_position() -> None:
    point = Point("m").add_field("a", 1).add_field("b", 2).add_field("a", 3)
    point.add_tag("t1", "x").add_tag("t2", "y").add_tag("t1", "z")
    assert list(point.fields.items()) == [("a", IntegerValue(3)), ("b", IntegerValue(2))]
    assert list(point.tags) == ["t1", "t2"]
    assert point.tags["t1"] == StringValue("z")
    assert point.serialize() == "m,t1=z,t2=y a=3i,b=2i"


def test_set_timestamp_overwrites_and_clears() -> None:
    point = Point("m").add_field("v", 1).set_timestamp(1).set_timestamp(2)
    assert point.serialize() == "m v=1i 2"
    point.set_timestamp(None)
    assert point.serialize() == "m v=1i"


def test_point_without_fields_fails() -> None:
    with pytest.raises(EncodingError):
        Point("cpu").add_tag("host", "a").serialize()


@pytest.mark.parametrize(
    "point",
    [
        Point("").add_field("v", 1),
        Point("m").add_tag("", "x").add_field("v", 1),
        Point("m").add_tag("k", "").add_field("v", 1),
        Point("m").add_field("", 1),
        Point("m", fields={"v": 1}, timestamp=1.5),  # type: ignore[arg-type]
        Point("m\\").add_field("v", 1),
        Point("m").add_tag("path\\", "x").add_field("v", 1),
        Point("m").add_tag("path", "C:\\").add_field("v", 1),
        Point("m").add_field("k\\", 1),
        Point("m\nx").add_field("v", 1),
        Point("m").add_tag("host", "a\nb").add_field("v", 1),
        Point("m").add_tag("host\r", "a").add_field("v", 1),
        Point("m").add_field("a\nb", 1),
    ],
)
def test_invalid_points_fail(point: Point) -> None:
    with pytest.raises(EncodingError):
        point.serialize()


def test_copy_is_independent() -> None:
    original = Point("m").add_field("v", 1)
    clone = original.copy().add_field("w", 2).set_timestamp(5)
    assert original.serialize() == "m v=1i"
    assert clone.serialize() == "m v=1i,w=2i 5"
    assert original != clone


def test_points_join_with_newlines() -> None:
    p1 = Point("a").add_field("v", 1)
    p2 = Point("b").add_field("v", 2.0)
    points = Points.of(p1, p2)
    assert points.serialize() == p1.serialize() + "\n" + p2.serialize()
    assert line_serialization([p1, p2]) == points.serialize()
    assert [p.measurement for p in points] == ["a", "b"]
    assert len(points) == 2


def test_points_keep_duplicates_and_order() -> None:
    p = Point("a").add_field("v", 1)
    points = Points().append(p).extend([Point("z").add_field("v", 1), p])
    assert points.serialize() == "a v=1i\nz v=1i\na v=1i"


def test_empty_points_serialize_to_empty_string() -> None:
    assert Points().serialize() == ""


def test_points_fail_if_any_point_fails() -> None:
    points = Points.of(Point("ok").add_field("v", 1), Point("empty"))
    with pytest.raises(EncodingError):
        points.serialize()


@pytest.mark.parametrize(
    ("measurement", "tags", "fields", "timestamp"),
    [
        ("cpu", {"host": "a b"}, {"load": 0.5}, None),
        ("disk io", {"path,dev": "/dev/sda=1"}, {"read bytes": 1024, "ok": True}, 1700000000),
        ("m,x", {"k=v": "a,b c"}, {"msg": 'he said "hi" \\ bye', "n": -7}, 0),
        ("plain", {}, {"s": "", "f": 1e-5}, 42),
    ],
)
def test_round_trip_through_reference_parser(measurement, tags, fields, timestamp) -> None:
    point = Point(measurement, tags=tags, fields=fields, timestamp=timestamp)
    parsed = parse_line(point.serialize())
    assert parsed == (measurement, tags, fields, timestamp)


def test_float_and_integer_fields_keep_their_wire_types() -> None:
    point = Point("m").add_field("f", FloatValue(2.0)).add_field("i", IntegerValue(2))
    _, _, fields, _ = parse_line(point.serialize())
    assert isinstance(fields["f"], float)
    assert isinstance(fields["i"], int)


def test_injected_line_break_never_reaches_the_batch() -> None:
    points = Points.of(
        Point("m").add_field("v", 1),
        Point("m").add_tag("host", "a\nevil v=666i").add_field("v", 1),
    )
    with pytest.raises(EncodingError):
        points.serialize()


def test_inner_backslashes_still_round_trip() -> None:
    point = Point("m").add_tag("path", "C:\\temp").add_field("v", 1)
    assert parse_line(point.serialize()) == ("m", {"path": "C:\\temp"}, {"v": 1}, None)
