"""Decoding of point cloud messages into raw point frames."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np


@dataclass
class RawPoints:
    """A raw point cloud frame.

    ``points`` is an (N, 4) array of homogeneous coordinates, ``times`` are
    per-point timestamps relative to the first point, and ``stamp`` is the
    timestamp of the first point.
    """

    stamp: float
    times: np.ndarray
    intensities: np.ndarray
    points: np.ndarray

    def __len__(self) -> int:
        return len(self.points)


class FieldType(IntEnum):
    INT8 = 1
    UINT8 = 2
    INT16 = 3
    UINT16 = 4
    INT32 = 5
    UINT32 = 6
    FLOAT32 = 7
    FLOAT64 = 8


_DTYPES = {
    FieldType.INT8: "<i1",
    FieldType.UINT8: "<u1",
    FieldType.INT16: "<i2",
    FieldType.UINT16: "<u2",
    FieldType.INT32: "<i4",
    FieldType.UINT32: "<u4",
    FieldType.FLOAT32: "<f4",
    FieldType.FLOAT64: "<f8",
}


@dataclass
class PointField:
    name: str
    offset: int
    datatype: int
    count: int = 1


@dataclass
class PointCloud2:
    """A packed point cloud message with little-endian field data."""

    width: int
    height: int
    point_step: int
    fields: list[PointField] = field(default_factory=list)
    data: bytes = b""
    sec: int = 0
    nanosec: int = 0


def to_sec(sec: int, nanosec: int) -> float:
    return sec + nanosec / 1e9


def from_sec(time: float) -> tuple[int, int]:
    """Split a time in seconds into whole seconds and nanoseconds."""
    sec = math.floor(time)
    return sec, int((time - sec) * 1e9)


_TIME_FIELDS = ("t", "time", "time_stamp", "timestamp")
_TIME_TYPES = {FieldType.UINT32, FieldType.FLOAT32, FieldType.FLOAT64}
_INTENSITY_TYPES = {
    FieldType.UINT8,
    FieldType.UINT16,
    FieldType.UINT32,
    FieldType.FLOAT32,
    FieldType.FLOAT64,
}


def _column(msg: PointCloud2, num_points: int, offset: int, datatype: int) -> np.ndarray:
    dtype = np.dtype(_DTYPES[FieldType(datatype)])
    if num_points == 0:
        return np.zeros(0, dtype=np.float64)
    needed = msg.point_step * (num_points - 1) + offset + dtype.itemsize
    if len(msg.data) < needed:
        raise ValueError("point cloud data is shorter than its layout requires")
    column = np.ndarray(
        shape=(num_points,),
        dtype=dtype,
        buffer=msg.data,
        offset=offset,
        strides=(msg.point_step,),
    )
    return column.astype(np.float64)


def extract_raw_points(msg: PointCloud2, intensity_channel: str = "intensity") -> RawPoints:
    """Decode coordinates, per-point times and intensities from ``msg``.

    Raises ``ValueError`` when coordinate fields are missing or a field has an
    unsupported data type.
    """
    num_points = msg.width * msg.height

    slots = {"x": "x", "y": "y", "z": "z"}
    slots.update({name: "time" for name in _TIME_FIELDS})
    slots[intensity_channel] = "intensity"

    layout: dict[str, tuple[int, int]] = {}
    for f in msg.fields:
        slot = slots.get(f.name)
        if slot is not None:
            layout[slot] = (f.datatype, f.offset)

    if not all(axis in layout for axis in ("x", "y", "z")):
        raise ValueError("missing point coordinate fields")

    x_type = layout["x"][0]
    if x_type not in (FieldType.FLOAT32, FieldType.FLOAT64) or x_type != layout["y"][0]:
        raise ValueError("unsupported points type")

    points = np.ones((num_points, 4), dtype=np.float64)
    for col, axis in enumerate(("x", "y", "z")):
        points[:, col] = _column(msg, num_points, layout[axis][1], x_type)

    times = np.zeros(0, dtype=np.float64)
    if "time" in layout:
        time_type, time_offset = layout["time"]
        if time_type not in _TIME_TYPES:
            raise ValueError(f"unsupported time type {time_type}")
        times = _column(msg, num_points, time_offset, time_type)
        if time_type == FieldType.UINT32:
            times = times / 1e9

    intensities = np.zeros(0, dtype=np.float64)
    if "intensity" in layout:
        intensity_type, intensity_offset = layout["intensity"]
        if intensity_type not in _INTENSITY_TYPES:
            raise ValueError(f"unsupported intensity type {intensity_type}")
        intensities = _column(msg, num_points, intensity_offset, intensity_type)

    return RawPoints(
        stamp=to_sec(msg.sec, msg.nanosec),
        times=times,
        intensities=intensities,
        points=points,
    )