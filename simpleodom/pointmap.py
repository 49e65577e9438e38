"""Local map of the environment used for scan registration."""

from __future__ import annotations

import numpy as np

from .pointcloud import _as_xyz, radial_subsample


class PointMap:
    """A subsampled local map kept within sensor range of the current pose."""

    def __init__(self, subsample_radius: float, max_sensor_range: float) -> None:
        self.subsample_radius = float(subsample_radius)
        self.max_sensor_range = float(max_sensor_range)
        self.points = np.empty((0, 3))

    def update_map(self, points, pose) -> np.ndarray:
        """Add a scan transformed by ``pose`` and prune the map.

        The merged map is subsampled, then points at or beyond the maximum
        sensor range from the pose position are dropped.
        """
        transform = np.asarray(pose, dtype=float)
        if transform.shape != (4, 4):
            raise ValueError(f"pose must be a 4x4 matrix, got shape {transform.shape}")
        xyz = _as_xyz(points)
        moved = xyz @ transform[:3, :3].T + transform[:3, 3]
        merged = np.vstack([self.points, moved])
        subsampled = radial_subsample(merged, self.subsample_radius)
        offsets = subsampled - transform[:3, 3]
        dist2 = np.sum(np.square(offsets), axis=1)
        self.points = subsampled[dist2 < self.max_sensor_range * self.max_sensor_range]
        return self.points