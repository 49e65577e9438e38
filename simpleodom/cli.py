"""Command-line entry point running LiDAR odometry over a folder of scans."""

from __future__ import annotations

import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

from .config import Config, ConfigError, load_config
from .output import print_progress, write_results
from .pointcloud import PointCloud
from .pointmap import PointMap
from .register import Register
from .transforms import homogeneous, scan_number

_USAGE = "Usage: simple config_file.yaml"


def list_scan_files(scan_path: str | os.PathLike) -> list[Path]:
    """Return the entries of ``scan_path`` ordered by the frame number in their names."""
    return sorted(Path(scan_path).iterdir(), key=scan_number)


def run(config: Config,
        progress: Callable[[float], None] | None = None) -> tuple[list[tuple[float, ...]], float]:
    """Register every scan against the growing local map.

    Returns the pose estimates, one (roll, pitch, yaw, x, y, z, score) tuple
    per scan with the first scan at the origin, and the average time per scan
    in whole milliseconds. ``progress`` is called with the fraction of scans
    done before each scan finishes.
    """
    scan_files = list_scan_files(config.scan_path)
    if not scan_files:
        raise ValueError(f"no scan files in {config.scan_path!r}")

    new_scan = PointCloud(config.r_new, config.max_sensor_range,
                          config.min_sensor_range, config.kitti)
    sub_map = PointMap(config.r_map, config.max_sensor_range)
    register = Register(config.convergence_tol, config.sigma)

    estimates: list[tuple[float, ...]] = []
    start = time.perf_counter()
    for scan_index, path in enumerate(scan_files):
        points = new_scan.read_scan(path)
        if scan_index > 0:
            result = register.register_scan(points, sub_map.points)
            estimate = (*result, register.registration_score)
        else:
            estimate = (0.0,) * 7
        estimates.append(estimate)
        sub_map.update_map(points, homogeneous(*estimate[:6]))
        if progress is not None:
            progress(scan_index / len(scan_files))

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    avg_time_per_scan = float(elapsed_ms // len(scan_files))
    return estimates, avg_time_per_scan


def main(argv: list[str] | None = None) -> int:
    """Run odometry from a YAML configuration given on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(_USAGE, file=sys.stderr)
        return 1

    try:
        config = load_config(args[0])
    except ConfigError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        estimates, avg_time_per_scan = run(config, print_progress)
    except (OSError, ValueError) as exc:
        print(file=sys.stdout)
        print(exc, file=sys.stderr)
        return 1
    print()

    write_results(config, estimates, config.output_file_name, avg_time_per_scan)
    print(f"avgTimePerScan [ms] = {avg_time_per_scan:g};")
    return 0


if __name__ == "__main__":
    sys.exit(main())