"""Nearest neighbour search over point cloud frames."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from scipy.spatial import cKDTree

logger = logging.getLogger(__name__)


def _empty_result() -> tuple[np.ndarray, np.ndarray]:
    return np.empty(0, dtype=np.intp), np.empty(0, dtype=np.float64)


class NearestNeighborSearch:
    """Interface for k-nearest neighbour search; the base finds nothing."""

    def knn_search(self, pt: Any, k: int) -> tuple[np.ndarray, np.ndarray]:
        """Return the indices and squared distances of up to ``k`` neighbours."""
        return _empty_result()


class KdTree(NearestNeighborSearch):
    """KD-tree search over the xyz coordinates of a frame's points."""

    def __init__(self, frame: Any, search_eps: float = -1.0) -> None:
        self.frame = frame
        self.search_eps = search_eps
        points = getattr(frame, "points", None)
        if points is None or len(points) == 0:
            logger.error("empty frame is given for KdTree")
            self._points = np.empty((0, 3), dtype=np.float64)
            self._tree = None
        else:
            self._points = np.asarray(points, dtype=np.float64)[:, :3]
            self._tree = cKDTree(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def knn_search(self, pt: Any, k: int) -> tuple[np.ndarray, np.ndarray]:
        """Find up to ``k`` nearest points, ordered from nearest to farthest.

        A positive ``search_eps`` allows approximate results.
        """
        if self._tree is None or k <= 0:
            return _empty_result()
        query = np.asarray(pt, dtype=np.float64)[:3]
        count = min(int(k), len(self._points))
        dists, indices = self._tree.query(query, k=count, eps=max(self.search_eps, 0.0))
        dists = np.atleast_1d(dists).astype(np.float64)
        indices = np.atleast_1d(indices).astype(np.intp)
        return indices, dists**2