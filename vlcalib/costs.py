"""Cost functions for camera-LiDAR registration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

import numpy as np

from vlcalib.frame import Frame

Projection = Callable[[np.ndarray], np.ndarray]
"""Camera model: maps an (N, 3) array of camera-frame points to (N, 2) pixels."""

_SPLINE_COEFFS = (
    np.array(
        [
            [1.0, -3.0, 3.0, -1.0],
            [4.0, 0.0, -6.0, 3.0],
            [1.0, 3.0, 3.0, -3.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    / 6.0
)

_KNOT_OFFSETS = np.arange(-1, 3)


def _as_transform(T_camera_lidar: Any) -> np.ndarray:
    T = np.asarray(T_camera_lidar, dtype=np.float64)
    if T.shape != (4, 4):
        raise ValueError(f"T_camera_lidar must be a 4x4 matrix, got shape {T.shape}")
    return T


def _entropy(p: np.ndarray) -> float:
    return float(-(p * np.log(p + 1e-6)).sum())


class CostCalculator(ABC):
    """Scores how well a LiDAR-to-camera transformation aligns the data."""

    @abstractmethod
    def calculate(self, T_camera_lidar: Any) -> float:
        """Return the cost of the 4x4 transformation ``T_camera_lidar``."""


class NIDCost(CostCalculator):
    """Normalized information distance between image and LiDAR intensities.

    Image intensities are sampled with cubic B-spline weights around each
    projected point and accumulated into a joint histogram with the point
    intensities. Both ``normalized_image`` and point intensities are expected
    in [0, 1].
    """

    def __init__(self, proj: Projection, normalized_image: Any, points: Frame, bins: int = 16) -> None:
        image = np.array(normalized_image, dtype=np.float64)
        if image.ndim != 2:
            raise ValueError(f"normalized_image must be two-dimensional, got shape {image.shape}")
        if points.points is None or points.intensities is None:
            raise ValueError("points must have coordinates and intensities")
        if bins <= 0:
            raise ValueError("bins must be positive")
        self.proj = proj
        self.normalized_image = image
        self.points = points
        self.bins = int(bins)

    def __call__(self, T_camera_lidar: Any) -> float:
        """Return the NID for ``T_camera_lidar``; raises ``ValueError`` if it is not finite."""
        T = _as_transform(T_camera_lidar)
        bins = self.bins
        image = self.normalized_image
        rows, cols = image.shape

        pts = self.points.points[:, :3]
        pts_camera = pts @ T[:3, :3].T + T[:3, 3]
        projected = np.asarray(self.proj(pts_camera), dtype=np.float64).reshape(-1, 2)

        knots_f = np.floor(projected)
        with np.errstate(invalid="ignore"):
            inside = (
                (knots_f >= 0).all(axis=1)
                & (knots_f[:, 0] < cols)
                & (knots_f[:, 1] < rows)
            )

        intensities = self.points.intensities[inside]
        bin_points = np.clip(np.trunc(intensities * bins), 0, bins - 1).astype(np.intp)
        knots = knots_f[inside].astype(np.intp)
        s = projected[inside] - knots_f[inside]

        hist_points = np.bincount(bin_points, minlength=bins).astype(np.float64)

        powers = np.stack([np.ones_like(s), s, s**2, s**3], axis=1)
        beta = np.einsum("ij,njk->nik", _SPLINE_COEFFS, powers)

        knots_x = np.clip(knots[:, 0, None] + _KNOT_OFFSETS, 0, cols - 1)
        knots_y = np.clip(knots[:, 1, None] + _KNOT_OFFSETS, 0, rows - 1)

        weights = beta[:, :, 0][:, :, None] * beta[:, :, 1][:, None, :]
        pix = image[knots_y[:, None, :], knots_x[:, :, None]]
        bin_image = np.clip(np.trunc(pix * bins), 0, bins - 1).astype(np.intp)

        hist = np.zeros((bins, bins), dtype=np.float64)
        np.add.at(hist, (bin_image, np.broadcast_to(bin_points[:, None, None], bin_image.shape)), weights)
        hist_image = np.bincount(bin_image.ravel(), weights=weights.ravel(), minlength=bins)

        total = hist_points.sum()
        if total == 0:
            raise ValueError("no points project into the image")

        with np.errstate(invalid="ignore", divide="ignore"):
            h_image = _entropy(hist_image / total)
            h_points = _entropy(hist_points / total)
            h_joint = _entropy(hist / total)
            mi = h_image + h_points - h_joint
            nid = (h_joint - mi) / h_joint

        if not np.isfinite(nid):
            raise ValueError(f"NID is not finite (H_joint={h_joint}, MI={mi}, NID={nid})")
        return float(nid)

    def calculate(self, T_camera_lidar: Any) -> float:
        return self(T_camera_lidar)


class ReprojectionCost:
    """Pixel residual between a projected LiDAR point and its observed 2D point."""

    def __init__(self, proj: Projection, point_3d: Any, point_2d: Any) -> None:
        self.proj = proj
        self.point_3d = np.asarray(point_3d, dtype=np.float64)[:3].copy()
        self.point_2d = np.asarray(point_2d, dtype=np.float64)[:2].copy()

    def __call__(self, T_camera_lidar: Any) -> np.ndarray:
        """Return the 2-element residual ``proj(T * point_3d) - point_2d``."""
        T = _as_transform(T_camera_lidar)
        pt_camera = T[:3, :3] @ self.point_3d + T[:3, 3]
        projected = np.asarray(self.proj(pt_camera[None, :]), dtype=np.float64).reshape(-1, 2)[0]
        return projected - self.point_2d