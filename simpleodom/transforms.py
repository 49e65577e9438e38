"""Rigid-body transform helpers and scan file ordering."""

from __future__ import annotations

import math
import os
import re
from pathlib import PurePath

import numpy as np

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def homogeneous(roll: float, pitch: float, yaw: float,
                x: float, y: float, z: float) -> np.ndarray:
    """Build a 4x4 homogeneous transform from roll, pitch, yaw (radians) and a translation."""
    cr, sr = math.cos(roll), math.sin(roll)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    return np.array(
        [
            [cy * cp, cy * sp * sr - sy * cr, cy * sp * cr + sy * sr, x],
            [sy * cp, sy * sp * sr + cy * cr, sy * sp * cr - cy * sr, y],
            [-sp, cp * sr, cp * cr, z],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=float,
    )


def hom2rpyxyz(transform) -> tuple[float, float, float, float, float, float]:
    """Convert a 4x4 homogeneous transform to (roll, pitch, yaw, x, y, z)."""
    t = np.asarray(transform, dtype=float)
    if t.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {t.shape}")
    roll = math.atan2(t[2, 1], t[2, 2])
    pitch = math.asin(min(1.0, max(-1.0, -t[2, 0])))
    yaw = math.atan2(t[1, 0], t[0, 0])
    return roll, pitch, yaw, float(t[0, 3]), float(t[1, 3]), float(t[2, 3])


def scan_number(path: str | os.PathLike) -> int:
    """Return the frame number encoded in a scan file name such as ``000042.bin``.

    Raises ValueError if the name does not start with an integer.
    """
    name = PurePath(os.fspath(path)).name
    stem = name.split(".bin", 1)[0]
    match = _LEADING_INT.match(stem)
    if match is None:
        raise ValueError(f"scan file name has no leading number: {name!r}")
    return int(match.group(1))