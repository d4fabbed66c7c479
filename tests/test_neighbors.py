import numpy as np
import pytest

from vlcalib.frame import Frame
from vlcalib.neighbors import KdTree, NearestNeighborSearch


@pytest.fixture
def frame():
    return Frame([[0.0, 0.0, 0.0], [10.0, 0.0, 0.0], [0.0, 10.0, 0.0], [0.0, 0.0, 10.0]])


def test_base_search_finds_nothing():
    indices, dists = NearestNeighborSearch().knn_search([0.0, 0.0, 0.0], 3)
    assert len(indices) == 0
    assert len(dists) == 0


@pytest.mark.parametrize("i", range(4))
def test_exact_query_finds_itself(frame, i):
    tree = KdTree(frame)
    indices, dists = tree.knn_search(frame.points[i], 1)
    assert list(indices) == [i]
    assert dists[0] == pytest.approx(0.0)


def test_squared_distance_reported(frame):
    tree = KdTree(frame)
    indices, dists = tree.knn_search([0.3, 0.4, 0.0], 1)
    assert list(indices) == [0]
    assert dists[0] == pytest.approx(0.25)


def test_k_larger_than_size(frame):
    tree = KdTree(frame)
    indices, dists = tree.knn_search([1.0, 1.0, 1.0], 10)
    assert len(indices) == len(frame)
    assert sorted(indices) == [0, 1, 2, 3]
    assert np.all(np.diff(dists) >= 0)


def test_results_ordered_nearest_first(frame):
    tree = KdTree(frame)
    indices, _ = tree.knn_search([9.0, 0.0, 0.0], 2)
    assert list(indices) == [1, 0]


def test_empty_frame_returns_nothing():
    tree = KdTree(Frame())
    indices, dists = tree.knn_search([0.0, 0.0, 0.0], 1)
    assert len(indices) == 0 and len(dists) == 0


def test_non_positive_k(frame):
    indices, _ = KdTree(frame).knn_search([0.0, 0.0, 0.0], 0)
    assert len(indices) == 0


def test_approximate_search_still_finds_exact_match(frame):
    tree = KdTree(frame, search_eps=0.5)
    indices, dists = tree.knn_search(frame.points[2], 1)
    assert list(indices) == [2]
    assert dists[0] == pytest.approx(0.0)