"""Objective function scoring a transform hypothesis against a map."""

from __future__ import annotations

import numpy as np

from .transforms import homogeneous


class ObjectiveFunction:
    """Negative proximity reward of a scan transformed onto a map.

    ``tree`` is a nearest-neighbour index over the map points (for example a
    ``scipy.spatial.cKDTree``) whose ``query`` returns Euclidean distances.
    ``reward_param`` is ``1 / (2 * sigma**2)``.
    """

    def __init__(self, reward_param: float, scan, tree) -> None:
        points = np.asarray(scan, dtype=float)
        if points.size == 0:
            points = np.empty((0, 3))
        if points.ndim != 2 or points.shape[1] not in (3, 4):
            raise ValueError(f"scan must have shape (N, 3) or (N, 4), got {points.shape}")
        xyz = points[:, :3]
        self.reward_param = float(reward_param)
        self.scan = np.hstack([xyz, np.ones((len(xyz), 1))])
        self.tree = tree

    def __call__(self, params) -> float:
        """Score the hypothesis (roll, pitch, yaw, x, y, z); lower is better."""
        roll, pitch, yaw, x, y, z = (float(v) for v in params)
        if len(self.scan) == 0:
            return 0.0
        hypothesis = homogeneous(roll, pitch, yaw, x, y, z)
        transformed = (self.scan @ hypothesis.T)[:, :3]
        distances, _ = self.tree.query(transformed, k=1)
        scores = np.exp(-np.square(distances) * self.reward_param)
        return 0.0 - float(np.sum(scores))