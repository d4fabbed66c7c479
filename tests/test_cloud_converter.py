import struct

import numpy as np
import pytest

from vlcalib.cloud_converter import (
    FieldType,
    PointCloud2,
    PointField,
    RawPoints,
    extract_raw_points,
    from_sec,
    to_sec,
)

XYZ = [(1.5, -2.25, 0.5), (0.0, 4.0, -8.0), (3.0, 0.25, 1.0)]
NS = [0, 250_000_000, 750_000_000]
INTENSITY = [10, 200, 0]


def _make_cloud(fields=None, intensity_name="intensity", sec=2, nanosec=500_000_000):
    # layout: x y z (f32) | t (u32) | intensity (u8) | pad
    step = 20
    data = b"".join(
        struct.pack("<fffIB3x", *xyz, ns, inten)
        for xyz, ns, inten in zip(XYZ, NS, INTENSITY)
    )
    if fields is None:
        fields = [
            PointField("x", 0, FieldType.FLOAT32),
            PointField("y", 4, FieldType.FLOAT32),
            PointField("z", 8, FieldType.FLOAT32),
            PointField("t", 12, FieldType.UINT32),
            PointField(intensity_name, 16, FieldType.UINT8),
        ]
    return PointCloud2(
        width=len(XYZ), height=1, point_step=step, fields=fields, data=data, sec=sec, nanosec=nanosec
    )


def test_field_type_codes_follow_message_format():
    # datatype codes as they appear in a message: FLOAT32=7, UINT32=6, UINT8=2
    fields = [
        PointField("x", 0, FieldType(7)),
        PointField("y", 4, FieldType(7)),
        PointField("z", 8, FieldType(7)),
        PointField("t", 12, FieldType(6)),
        PointField("intensity", 16, FieldType(2)),
    ]
    raw = extract_raw_points(_make_cloud(fields=fields))
    np.testing.assert_array_equal(raw.points[:, :3], np.array(XYZ))
    np.testing.assert_allclose(raw.times, np.array(NS) / 1e9)
    np.testing.assert_array_equal(raw.intensities, np.array(INTENSITY, dtype=float))


def test_extract_points_times_intensities():
    raw = extract_raw_points(_make_cloud())
    assert isinstance(raw, RawPoints)
    assert len(raw) == 3
    np.testing.assert_array_equal(raw.points[:, :3], np.array(XYZ))
    np.testing.assert_array_equal(raw.points[:, 3], np.ones(3))
    np.testing.assert_allclose(raw.times, np.array(NS) / 1e9)
    np.testing.assert_array_equal(raw.intensities, np.array(INTENSITY, dtype=float))
    assert raw.stamp == pytest.approx(to_sec(2, 500_000_000))


def test_custom_intensity_channel():
    msg = _make_cloud(intensity_name="reflectivity")
    raw = extract_raw_points(msg, "reflectivity")
    np.testing.assert_array_equal(raw.intensities, np.array(INTENSITY, dtype=float))
    assert len(extract_raw_points(msg).intensities) == 0


def test_float64_points_without_optional_fields():
    data = b"".join(struct.pack("<ddd", *xyz) for xyz in XYZ)
    fields = [
        PointField("x", 0, FieldType.FLOAT64),
        PointField("y", 8, FieldType.FLOAT64),
        PointField("z", 16, FieldType.FLOAT64),
    ]
    msg = PointCloud2(width=1, height=3, point_step=24, fields=fields, data=data)
    raw = extract_raw_points(msg)
    np.testing.assert_array_equal(raw.points[:, :3], np.array(XYZ))
    assert raw.times.size == 0
    assert raw.intensities.size == 0


def test_missing_coordinate_raises():
    msg = _make_cloud()
    msg.fields = [f for f in msg.fields if f.name != "z"]
    with pytest.raises(ValueError):
        extract_raw_points(msg)


def test_integer_coordinates_raise():
    fields = [
        PointField("x", 0, FieldType.INT32),
        PointField("y", 4, FieldType.INT32),
        PointField("z", 8, FieldType.INT32),
    ]
    with pytest.raises(ValueError):
        extract_raw_points(_make_cloud(fields=fields))


def test_mismatched_coordinate_types_raise():
    fields = [
        PointField("x", 0, FieldType.FLOAT32),
        PointField("y", 0, FieldType.FLOAT64),
        PointField("z", 8, FieldType.FLOAT32),
    ]
    with pytest.raises(ValueError):
        extract_raw_points(_make_cloud(fields=fields))


def test_unsupported_time_type_raises():
    msg = _make_cloud()
    msg.fields[3] = PointField("time", 12, FieldType.INT16)
    with pytest.raises(ValueError):
        extract_raw_points(msg)


def test_unsupported_intensity_type_raises():
    msg = _make_cloud()
    msg.fields[4] = PointField("intensity", 16, FieldType.INT8)
    with pytest.raises(ValueError):
        extract_raw_points(msg)


def test_to_sec_and_from_sec_round_trip():
    assert to_sec(3, 500_000_000) == 3.5
    assert from_sec(3.5) == (3, 500_000_000)
    assert from_sec(to_sec(10, 250_000_000)) == (10, 250_000_000)
    assert from_sec(7.0) == (7, 0)