[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vlcalib"
version = "0.1.0"
description = "Building blocks for targetless LiDAR-camera calibration: point frames, nearest neighbour search, NID and reprojection costs"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["lidar", "camera", "calibration", "point cloud", "mutual information", "nid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vlcalib-viewer = "vlcalib.calib_config:main"

[tool.hatch.build.targets.wheel]
packages = ["vlcalib"]

[tool.pytest.ini_options]
addopts = "-ra"
