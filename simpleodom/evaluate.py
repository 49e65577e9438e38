"""Translational and rotational drift of an estimated trajectory against ground truth."""

from __future__ import annotations

import math
import os
import sys
from dataclasses import dataclass

import numpy as np

# Segment lengths, in metres, over which drift is measured.
LENGTHS = (100.0, 200.0, 300.0, 400.0, 500.0, 600.0, 700.0, 800.0)

# Start a segment at every tenth frame.
STEP_SIZE = 10

_VALUES_PER_POSE = 12


@dataclass(frozen=True)
class SegmentError:
    """Drift over one segment: errors per metre, length and speed."""

    first_frame: int
    r_err: float
    t_err: float
    length: float
    speed: float


def load_poses(path: str | os.PathLike) -> list[np.ndarray]:
    """Read KITTI poses, twelve numbers each, as 4x4 matrices.

    A missing file yields no poses; reading stops at the first token that
    is not a number, and an incomplete trailing pose is ignored.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            tokens = handle.read().split()
    except OSError:
        return []

    values: list[float] = []
    for token in tokens:
        try:
            values.append(float(token))
        except ValueError:
            break

    poses = []
    for start in range(0, len(values) - _VALUES_PER_POSE + 1, _VALUES_PER_POSE):
        pose = np.eye(4)
        pose[:3, :] = np.reshape(values[start:start + _VALUES_PER_POSE], (3, 4))
        poses.append(pose)
    return poses


def trajectory_distances(poses) -> list[float]:
    """Cumulative distance travelled up to each pose."""
    distances: list[float] = []
    previous = None
    for pose in poses:
        position = np.asarray(pose, dtype=float)[:3, 3]
        if previous is None:
            distances.append(0.0)
        else:
            distances.append(distances[-1] + float(np.linalg.norm(previous - position)))
        previous = position
    return distances


def last_frame_from_segment_length(dist, first_frame: int, length: float) -> int | None:
    """First frame whose distance exceeds that of ``first_frame`` by more than ``length``."""
    target = dist[first_frame] + length
    return next(
        (index for index in range(first_frame, len(dist)) if dist[index] > target),
        None,
    )


def rotation_error(pose_error) -> float:
    """Rotation angle, in radians, of the rotation part of ``pose_error``."""
    m = np.asarray(pose_error, dtype=float)
    d = 0.5 * (m[0, 0] + m[1, 1] + m[2, 2] - 1.0)
    return math.acos(max(min(d, 1.0), -1.0))


def translation_error(pose_error) -> float:
    """Length of the translation part of ``pose_error``."""
    return float(np.linalg.norm(np.asarray(pose_error, dtype=float)[:3, 3]))


def calc_sequence_errors(poses_gt, poses_result) -> list[SegmentError]:
    """Drift over every segment length, starting at every tenth ground-truth frame."""
    dist = trajectory_distances(poses_gt)
    errors: list[SegmentError] = []
    for first_frame in range(0, len(poses_gt), STEP_SIZE):
        for length in LENGTHS:
            last_frame = last_frame_from_segment_length(dist, first_frame, length)
            if last_frame is None:
                continue
            if last_frame >= len(poses_result):
                raise ValueError(
                    f"estimated trajectory has {len(poses_result)} poses, "
                    f"frame {last_frame} is needed"
                )
            delta_gt = np.linalg.inv(poses_gt[first_frame]) @ poses_gt[last_frame]
            delta_result = np.linalg.inv(poses_result[first_frame]) @ poses_result[last_frame]
            pose_error = np.linalg.inv(delta_result) @ delta_gt
            num_frames = float(last_frame - first_frame + 1)
            errors.append(SegmentError(
                first_frame=first_frame,
                r_err=rotation_error(pose_error) / length,
                t_err=translation_error(pose_error) / length,
                length=length,
                speed=length / (0.1 * num_frames),
            ))
    return errors


def summarize(errors) -> tuple[float, float]:
    """Mean translational error in percent and rotational error in degrees per 100 m."""
    errors = list(errors)
    if not errors:
        raise ValueError("no segment errors to summarise")
    count = len(errors)
    t_err = sum(e.t_err for e in errors) / count * 100.0
    r_err = sum(e.r_err for e in errors) / count * 180.0 / math.pi * 100.0
    return t_err, r_err


def evaluate(est_file: str | os.PathLike, gt_file: str | os.PathLike) -> tuple[float, float] | None:
    """Compare an estimated trajectory file with a ground-truth file.

    Returns the summary, or None when the trajectory is too short for any segment.
    """
    poses_gt = load_poses(gt_file)
    poses_result = load_poses(est_file)
    errors = calc_sequence_errors(poses_gt, poses_result)
    return summarize(errors) if errors else None


def main(argv: list[str] | None = None) -> int:
    """Print the drift of an estimate file against a ground-truth file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("Usage: evaluate_odometry gtFile estFile")
        return 1
    gt_file, est_file = args
    try:
        summary = evaluate(est_file, gt_file)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    if summary is not None:
        t_err, r_err = summary
        print(f"{t_err:g}, {r_err:g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())