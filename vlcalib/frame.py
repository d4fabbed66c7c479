"""Point cloud frames with optional per-point attributes."""

from __future__ import annotations

from typing import Any, Callable, Iterable

import numpy as np


def _to_vec4(values: Any, w: float, name: str) -> np.ndarray:
    """Convert (N, 3) or (N, 4) data into an (N, 4) float array, filling w."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        arr = arr.reshape(0, 4)
    if arr.ndim != 2 or arr.shape[1] not in (3, 4):
        raise ValueError(f"{name} must have shape (N, 3) or (N, 4), got {arr.shape}")
    if arr.shape[1] == 4:
        return arr.copy()
    out = np.empty((len(arr), 4), dtype=np.float64)
    out[:, :3] = arr
    out[:, 3] = w
    return out


def _to_mat4(values: Any) -> np.ndarray:
    """Convert (N, 3, 3) or (N, 4, 4) covariances into (N, 4, 4), zero padded."""
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        arr = arr.reshape(0, 4, 4)
    if arr.ndim != 3 or arr.shape[1:] not in ((3, 3), (4, 4)):
        raise ValueError(f"covs must have shape (N, 3, 3) or (N, 4, 4), got {arr.shape}")
    if arr.shape[1] == 4:
        return arr.copy()
    out = np.zeros((len(arr), 4, 4), dtype=np.float64)
    out[:, :3, :3] = arr
    return out


def _to_scalars(values: Any, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got {arr.shape}")
    return arr.copy()


class Frame:
    """A point cloud with optional times, normals, covariances and intensities.

    Points are stored as homogeneous (x, y, z, 1), normals as (nx, ny, nz, 0)
    and covariances as 4x4 matrices whose last row and column are zero.
    """

    def __init__(
        self,
        points: Any = None,
        *,
        times: Any = None,
        normals: Any = None,
        covs: Any = None,
        intensities: Any = None,
    ) -> None:
        self.points = None if points is None else _to_vec4(points, 1.0, "points")
        self.times = None if times is None else _to_scalars(times, "times")
        self.normals = None if normals is None else _to_vec4(normals, 0.0, "normals")
        self.covs = None if covs is None else _to_mat4(covs)
        self.intensities = None if intensities is None else _to_scalars(intensities, "intensities")
        self.aux_attributes: dict[str, np.ndarray] = {}

        sizes = {
            name: len(arr)
            for name, arr in (
                ("points", self.points),
                ("times", self.times),
                ("normals", self.normals),
                ("covs", self.covs),
                ("intensities", self.intensities),
            )
            if arr is not None
        }
        if len(set(sizes.values())) > 1:
            raise ValueError(f"attribute sizes do not match: {sizes}")
        self.num_points = next(iter(sizes.values()), 0)

    def __len__(self) -> int:
        return self.num_points

    def has_times(self) -> bool:
        return self.times is not None

    def has_points(self) -> bool:
        return self.points is not None

    def has_normals(self) -> bool:
        return self.normals is not None

    def has_covs(self) -> bool:
        return self.covs is not None

    def has_intensities(self) -> bool:
        return self.intensities is not None

    def add_aux_attribute(self, name: str, values: Any) -> None:
        """Attach a named per-point attribute; it must have one entry per point."""
        arr = np.array(values)
        if arr.ndim == 0 or len(arr) != self.num_points:
            raise ValueError(f"attribute {name!r} must have {self.num_points} entries")
        self.aux_attributes[name] = arr

    def aux_attribute(self, name: str) -> np.ndarray:
        """Return a named attribute; raises ``KeyError`` if it does not exist."""
        try:
            return self.aux_attributes[name]
        except KeyError:
            raise KeyError(f"attribute {name!r} not found") from None


def sample(frame: Frame, indices: Iterable[int]) -> Frame:
    """Return a new frame holding the points at ``indices``, in that order."""
    idx = np.asarray(list(indices), dtype=np.intp)
    if len(idx) and (idx.min() < -len(frame) or idx.max() >= len(frame)):
        raise IndexError("point index out of range")

    def pick(arr: np.ndarray | None) -> np.ndarray | None:
        return None if arr is None else arr[idx]

    sampled = Frame(
        pick(frame.points),
        times=pick(frame.times),
        normals=pick(frame.normals),
        covs=pick(frame.covs),
        intensities=pick(frame.intensities),
    )
    if not any(a is not None for a in (frame.points, frame.times, frame.normals, frame.covs, frame.intensities)):
        sampled.num_points = len(idx)
    for name, values in frame.aux_attributes.items():
        sampled.aux_attributes[name] = values[idx]
    return sampled


def filter_points(frame: Frame, pred: Callable[[np.ndarray], bool]) -> Frame:
    """Keep the points for which ``pred(point)`` is true."""
    if frame.points is None:
        raise ValueError("frame has no points")
    return sample(frame, (i for i, point in enumerate(frame.points) if pred(point)))


def filter_by_index(frame: Frame, pred: Callable[[int], bool]) -> Frame:
    """Keep the points whose index satisfies ``pred``."""
    return sample(frame, (i for i in range(len(frame)) if pred(i)))


def sort_points(frame: Frame, key: Callable[[int], Any]) -> Frame:
    """Reorder points by ``key`` applied to each point index."""
    return sample(frame, sorted(range(len(frame)), key=key))