"""Reading, range filtering, correction and radial subsampling of LiDAR scans."""

from __future__ import annotations

import math
import os

import numpy as np
from scipy.spatial import cKDTree

# Values per point in a .bin scan file: x, y, z, intensity.
NUM_COLUMNS_BIN = 4

# Vertical angle calibration applied to KITTI scans, in radians.
KITTI_VERTICAL_ANGLE_OFFSET = (0.205 * math.pi) / 180.0


def _as_xyz(points) -> np.ndarray:
    array = np.asarray(points, dtype=float)
    if array.size == 0:
        return np.empty((0, 3))
    if array.ndim != 2 or array.shape[1] not in (3, 4):
        raise ValueError(f"points must have shape (N, 3) or (N, 4), got {array.shape}")
    return np.ascontiguousarray(array[:, :3])


def read_bin(path: str | os.PathLike) -> np.ndarray:
    """Read a binary scan of float32 (x, y, z, intensity) records.

    Returns the xyz coordinates as an (N, 3) float64 array; a trailing
    incomplete record is ignored.
    """
    with open(path, "rb") as handle:
        data = handle.read()
    values = np.frombuffer(data, dtype=np.float32, count=len(data) // 4)
    usable = (len(values) // NUM_COLUMNS_BIN) * NUM_COLUMNS_BIN
    records = values[:usable].reshape(-1, NUM_COLUMNS_BIN)
    return records[:, :3].astype(float)


def filter_range(points, min_range: float, max_range: float) -> np.ndarray:
    """Keep the points strictly between the minimum and maximum range."""
    xyz = _as_xyz(points)
    norm2 = np.sum(np.square(xyz), axis=1)
    keep = (norm2 > min_range * min_range) & (norm2 < max_range * max_range)
    return xyz[keep]


def correct_kitti_scan(points) -> np.ndarray:
    """Rotate each point by the KITTI vertical-angle offset.

    Each point is rotated about the normalised axis ``point x (0, 0, 1)``.
    Points on the z axis have a zero axis and are scaled by the cosine of
    the offset, as a rotation about a zero axis does.
    """
    xyz = _as_xyz(points)
    if len(xyz) == 0:
        return xyz.copy()
    axis = np.cross(xyz, np.array([0.0, 0.0, 1.0]))
    lengths = np.linalg.norm(axis, axis=1, keepdims=True)
    unit = np.divide(axis, lengths, out=np.zeros_like(axis), where=lengths > 0)
    c = math.cos(KITTI_VERTICAL_ANGLE_OFFSET)
    s = math.sin(KITTI_VERTICAL_ANGLE_OFFSET)
    along = np.sum(unit * xyz, axis=1, keepdims=True)
    return xyz * c + np.cross(unit, xyz) * s + unit * along * (1.0 - c)


def radial_subsample(points, radius: float) -> np.ndarray:
    """Greedily keep points so that no two kept points are closer than ``radius``.

    Points are visited in order; each kept point removes every later point
    lying strictly within ``radius`` of it.
    """
    xyz = _as_xyz(points)
    if len(xyz) == 0:
        return xyz.copy()
    radius2 = radius * radius
    tree = cKDTree(xyz)
    alive = np.ones(len(xyz), dtype=bool)
    kept = []
    for index, point in enumerate(xyz):
        if not alive[index]:
            continue
        kept.append(index)
        neighbours = np.asarray(tree.query_ball_point(point, radius), dtype=int)
        if neighbours.size == 0:
            continue
        dist2 = np.sum(np.square(xyz[neighbours] - point), axis=1)
        close = neighbours[(dist2 < radius2) & (neighbours != index)]
        alive[close] = False
    return xyz[kept]


class PointCloud:
    """A scan read from disk, range filtered, optionally corrected and subsampled."""

    def __init__(self, subsample_radius: float, max_sensor_range: float,
                 min_sensor_range: float, kitti: bool) -> None:
        self.subsample_radius = float(subsample_radius)
        self.max_sensor_range = float(max_sensor_range)
        self.min_sensor_range = float(min_sensor_range)
        self.kitti = bool(kitti)
        self.points = np.empty((0, 3))

    def read_scan(self, path: str | os.PathLike) -> np.ndarray:
        """Load and process a .bin scan, replacing the current points."""
        xyz = filter_range(read_bin(path), self.min_sensor_range, self.max_sensor_range)
        if self.kitti:
            xyz = correct_kitti_scan(xyz)
        self.points = radial_subsample(xyz, self.subsample_radius)
        return self.points