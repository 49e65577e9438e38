"""Writing of registration results and terminal progress reporting."""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from typing import TextIO

from .config import Config
from .transforms import homogeneous

_PROGRESS_WIDTH = 60


def _num(value: float) -> str:
    return f"{value:g}"


def write_results(config: Config, pose_estimates, output_file_name: str | os.PathLike,
                  avg_time_per_scan: float) -> tuple[Path, Path]:
    """Write poses in the KITTI format and the run configuration.

    Each pose row holds (roll, pitch, yaw, x, y, z, ...); its line in
    ``<output_file_name>.txt`` holds the first three rows of the 4x4
    transform. The parameters go to ``<output_file_name>_config.txt``.
    Returns the paths of both files.
    """
    base = os.fspath(output_file_name)
    results_path = Path(base + ".txt")
    with open(results_path, "w", encoding="utf-8") as handle:
        for pose in pose_estimates:
            transform = homogeneous(*list(pose)[:6])
            handle.write(" ".join(_num(v) for v in transform[:3, :].ravel()) + "\n")

    config_name = base + "_config.txt"
    config_path = Path(config_name)
    lines = [
        f"% computation finised at : {time.ctime()}",
        "",
        f"scansFolderPath        = \"{config.scan_path}\";",
        f"sigma                  = {_num(config.sigma)}; % [m]",
        f"rMap                   = {_num(config.r_map)}; % [m]",
        f"rNew                   = {_num(config.r_new)}; % [m]",
        f"convergenceTolerance   = {_num(config.convergence_tol)};",
        f"maxSensorRange         = {_num(config.max_sensor_range)}; % [m]",
        f"minSensorRange         = {_num(config.min_sensor_range)}; % [m]",
        f"outputFileName         = \"{config.output_file_name}\";",
        f"outputConfigFileName   = \"{config_name}\";",
        f"avg_time_per_scan      = {_num(avg_time_per_scan)}; % [ms]",
    ]
    with open(config_path, "w", encoding="utf-8") as handle:
        handle.write("\n".join(lines) + "\n")
    return results_path, config_path


def format_progress(fraction: float) -> str:
    """Render a carriage-return prefixed percentage and a 60-column bar."""
    percent = int(fraction * 100)
    filled = int(fraction * _PROGRESS_WIDTH)
    remaining = _PROGRESS_WIDTH - filled
    bar = "|" * (min(filled, _PROGRESS_WIDTH) if filled >= 0 else _PROGRESS_WIDTH)
    return f"\r{percent:3d}% [{bar}{' ' * abs(remaining)}]"


def print_progress(fraction: float, stream: TextIO | None = None) -> None:
    """Write the progress bar for ``fraction`` to ``stream`` (stdout by default)."""
    out = sys.stdout if stream is None else stream
    out.write(format_progress(fraction))
    out.flush()