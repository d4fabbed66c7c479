"""Reading calibration results from a preprocessed data directory."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import numpy as np

from vlcalib.console import colored

_RESULTS = (
    ("init_T_lidar_camera_auto", "INIT_GUESS (AUTO)", "Automatic initial guess result found"),
    ("init_T_lidar_camera", "INIT_GUESS (MANUAL)", "Manual initial guess result found"),
    ("T_lidar_camera", "CALIBRATION_RESULT", "Calibration result found"),
)
_MESSAGES = {label: message for _, label, message in _RESULTS}

NO_TRANSFORMATION = "NONE"


def tum_to_pose(values: Sequence[float]) -> np.ndarray:
    """Convert ``[x, y, z, qx, qy, qz, qw]`` into a 4x4 homogeneous matrix."""
    if len(values) != 7:
        raise ValueError(f"expected 7 values (x y z qx qy qz qw), got {len(values)}")
    tx, ty, tz, x, y, z, w = (float(v) for v in values)

    xx, yy, zz = 2 * x * x, 2 * y * y, 2 * z * z
    xy, xz, yz = 2 * x * y, 2 * x * z, 2 * y * z
    wx, wy, wz = 2 * w * x, 2 * w * y, 2 * w * z

    pose = np.eye(4)
    pose[:3, :3] = [
        [1 - (yy + zz), xy - wz, xz + wy],
        [xy + wz, 1 - (xx + zz), yz - wx],
        [xz - wy, yz + wx, 1 - (xx + yy)],
    ]
    pose[:3, 3] = (tx, ty, tz)
    return pose


def load_transformations(config: dict[str, Any]) -> list[tuple[str, np.ndarray]]:
    """Collect labelled ``T_lidar_camera`` results from a calibration config.

    Results appear in the order automatic guess, manual guess, calibration
    result. If none is present a single identity labelled ``NONE`` is returned.
    """
    results = config.get("results") or {}
    found = [(label, tum_to_pose(results[key])) for key, label, _ in _RESULTS if key in results]
    if not found:
        found.append((NO_TRANSFORMATION, np.eye(4)))
    return found


@dataclass
class CalibrationData:
    """Contents of ``calib.json`` needed to inspect a calibration."""

    config: dict[str, Any]
    transformations: list[tuple[str, np.ndarray]]
    selected: int
    camera_model: str
    intrinsics: list[float]
    distortion_coeffs: list[float]
    bag_names: list[str]

    @property
    def T_camera_lidar(self) -> np.ndarray:
        """Inverse of the selected ``T_lidar_camera``."""
        return np.linalg.inv(self.transformations[self.selected][1])


def load_calibration(data_path: str | Path) -> CalibrationData:
    """Read ``calib.json`` from ``data_path``; the last found result is selected."""
    path = Path(data_path) / "calib.json"
    try:
        with path.open(encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"failed to open {path}") from None

    transformations = load_transformations(config)
    try:
        camera = config["camera"]
        camera_model = str(camera["camera_model"])
        intrinsics = [float(v) for v in camera["intrinsics"]]
        distortion_coeffs = [float(v) for v in camera["distortion_coeffs"]]
        bag_names = [str(name) for name in config["meta"]["bag_names"]]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"{path} is missing required entry {exc}") from None

    return CalibrationData(
        config=config,
        transformations=transformations,
        selected=len(transformations) - 1,
        camera_model=camera_model,
        intrinsics=intrinsics,
        distortion_coeffs=distortion_coeffs,
        bag_names=bag_names,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="viewer", add_help=False)
    parser.add_argument("--help", action="store_true", help="produce help message")
    parser.add_argument("data_path", nargs="?", help="directory that contains preprocessed data")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Report the calibration results stored in a data directory."""
    parser = _build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else list(argv))
    if args.help or args.data_path is None:
        print(parser.format_help())
        return 0

    try:
        calib = load_calibration(args.data_path)
    except (OSError, ValueError) as exc:
        print(colored(f"error: {exc}", "bold_red"), file=sys.stderr)
        return 1

    for label, T_lidar_camera in calib.transformations:
        if label == NO_TRANSFORMATION:
            print(colored("error: no transformation found in calib.json!!", "bold_red"), file=sys.stderr)
            continue
        print(_MESSAGES[label])
        print("--- T_lidar_camera ---")
        print(T_lidar_camera)
    return 0