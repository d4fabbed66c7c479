"""Point frames, nearest neighbour search, registration costs and calib.json reading for LiDAR-camera calibration."""

__version__ = "0.1.0"