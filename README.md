# vlcalib

Building blocks for targetless LiDAR-camera calibration in Python.

## Modules

- `vlcalib.frame`: `Frame` is a point cloud with optional per-point times,
  normals, covariances and intensities. Points are stored as (N, 4)
  homogeneous coordinates, normals as (N, 4) with w = 0, and covariances as
  (N, 4, 4). Inputs of shape (N, 3) and (N, 3, 3) are padded to those shapes. Named
  per-point data is attached with `add_aux_attribute` and read back with
  `aux_attribute`. The module also has helpers that return new frames:
  `sample`, `filter_points`, `filter_by_index` and `sort_points`.
- `vlcalib.neighbors`: `KdTree` does k-nearest-neighbour search over a
  frame's xyz coordinates. `knn_search(pt, k)` returns indices and squared
  distances, nearest first. `NearestNeighborSearch` is the base interface, and
  on its own it finds nothing.
- `vlcalib.costs`: `CostCalculator` is the abstract base for costs evaluated
  at a 4x4 `T_camera_lidar` matrix. `NIDCost` computes the normalized
  information distance between a normalized image and LiDAR intensities, with
  cubic B-spline weighting of the image samples. It raises `ValueError` when
  no point projects into the image or when the result is not finite.
  `ReprojectionCost` returns the 2D pixel residual of a single 2D-3D
  correspondence.
- `vlcalib.cloud_converter`: `extract_raw_points` decodes a `PointCloud2`
  (a list of `PointField`, a point step and little-endian bytes) into
  `RawPoints`, which holds coordinates, per-point times and intensities.
  `to_sec` and `from_sec` convert between a time in seconds and a
  (seconds, nanoseconds) pair.
- `vlcalib.calib_config`: reads `calib.json`. It provides `tum_to_pose`,
  `load_transformations`, `load_calibration` and the `CalibrationData`
  result.
- Small utilities:
  - `ConcurrentQueue`, a thread-safe FIFO with an end-of-data signal.
  - `StatisticalMedianFilter`, which estimates a median from a reservoir sample.
  - `combine_hash` and `xor_hash`, two voxel-coordinate hashes.
  - `vlcalib.console.colored`, which adds ANSI colours to terminal text.

## Installation

```
pip install .
```

To run the tests with `pytest`, install with `pip install .[test]`.

## Inspecting a calibration

A preprocessed data directory holds a `calib.json`. The following command lists
the transformations stored in it:

```
vlcalib-viewer path/to/data
```

It checks for three results, in this order: the automatic initial guess, the
manual initial guess and the calibration result. For each one it finds, it
prints a message and the 4x4 `T_lidar_camera` matrix. If `calib.json` holds no
result, an error is printed. Run `vlcalib-viewer --help` for usage.

From Python:

```python
from vlcalib.calib_config import load_calibration, tum_to_pose

pose = tum_to_pose([0.1, 0.0, 0.2, 0.0, 0.0, 0.0, 1.0])  # x y z qx qy qz qw

calib = load_calibration("path/to/data")
label, T_lidar_camera = calib.transformations[calib.selected]
T_camera_lidar = calib.T_camera_lidar
```

## Nearest neighbours

```python
import numpy as np
from vlcalib.frame import Frame
from vlcalib.neighbors import KdTree

frame = Frame(points=np.random.rand(100, 3))
tree = KdTree(frame)
indices, sq_dists = tree.knn_search([0.5, 0.5, 0.5], 3)
```

## Costs

You supply the camera model as a callable. It maps an (N, 3) array of points in
the camera frame to (N, 2) pixel coordinates.

```python
import numpy as np
from vlcalib.costs import NIDCost
from vlcalib.frame import Frame

def pinhole(pts):
    return pts[:, :2] / pts[:, 2:3] * 100.0 + 50.0

image = np.random.rand(100, 100)  # intensities in [0, 1]
points = Frame(
    np.random.rand(500, 3) + [0.0, 0.0, 1.0],
    intensities=np.random.rand(500),
)
cost = NIDCost(pinhole, image, points, bins=16)
print(cost(np.eye(4)))
```

## What this package does not do

- It has no camera models. Projection functions are passed in as callables.
- It does not read bag files, preprocess data or render images.
- It does not run the calibration optimization itself. The costs can be
  handed to an optimizer of your choice.
- `vlcalib-viewer` only prints what `calib.json` contains. It opens no
  interactive 3D view.