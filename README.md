# simpleodom

Lidar odometry that registers each new scan against a local map by
maximising a proximity-based reward, plus a small evaluator that reports
translational and rotational drift in the style of the KITTI odometry
benchmark.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Running the odometry

Scans are read from a directory of `.bin` files, each holding `float32`
values in groups of four (x, y, z, intensity); a trailing incomplete group
is ignored. Every entry of the directory is ordered by the number at the
start of its name, so `000000.bin`, `000001.bin`, ... is the expected
layout, and a name without a leading number is an error.

The run is configured by a YAML file with these keys, all required:

```yaml
kitti: true            # apply the vertical-angle correction used for KITTI scans
sigma: 0.3             # standard deviation of the proximity reward [m]
rMap: 0.3              # spatial separation used to subsample the local map [m]
rNew: 0.5              # spatial separation used to subsample each new scan [m]
convergenceTol: 1.0e-6 # minimum reward improvement between solver iterations
maxSensorRange: 120.0  # points at or beyond this range are discarded [m]
minSensorRange: 5.0    # points at or within this range are discarded [m]
scanPath: /data/kitti/sequences/00/velodyne
outputFileName: results_00
```

Run it with:

```
simpleodom config.yaml
```

A progress bar is shown while scans are registered. The first scan is
placed at the origin; each later scan is registered against the local map,
starting from a constant-velocity prediction of the previous results. When
the run finishes two files are written and the average time per scan is
printed:

- `<outputFileName>.txt` — one pose per line, the first three rows of the
  4×4 homogeneous transform flattened row by row (12 values), the format
  used by the KITTI odometry benchmark;
- `<outputFileName>_config.txt` — the parameters of the run and the average
  registration time per scan in milliseconds.

The command exits with status 1 and a message on standard error when the
arguments are wrong, the configuration cannot be read or is missing a key,
or the scan directory is empty or unreadable.

## Evaluating a trajectory

```
simpleodom-evaluate ground_truth.txt results_00.txt
```

The ground-truth file comes first, then the estimate. Both use the
12-values-per-line pose format above; a missing file counts as having no
poses. Segments of 100 m to 800 m are taken every ten ground-truth frames,
and the command prints the average translational error (%) and rotational
error (deg/100 m), separated by a comma. Nothing is printed when the
trajectory is too short for any segment; an estimate with too few poses is
reported as an error.

## Using it as a library

```python
from simpleodom.config import load_config
from simpleodom.cli import run

config = load_config("config.yaml")
estimates, avg_ms = run(config)
```

`run` returns one `(roll, pitch, yaw, x, y, z, score)` tuple per scan and
the average time per scan in milliseconds. It accepts an optional
`progress` callable, called with the fraction of scans done;
`simpleodom.output.print_progress` draws the terminal bar.

The building blocks live in their own modules:

- `simpleodom.config` — `Config` and `load_config`, which raises
  `ConfigError` for unreadable or invalid files;
- `simpleodom.transforms` — `homogeneous` and `hom2rpyxyz` convert between
  roll/pitch/yaw/x/y/z and 4×4 transforms; `scan_number` reads the frame
  number from a scan file name;
- `simpleodom.pointcloud` — `read_bin`, `filter_range`,
  `correct_kitti_scan`, `radial_subsample` and the `PointCloud` scan reader;
- `simpleodom.pointmap` — `PointMap`, the subsampled local map kept within
  sensor range of the current pose;
- `simpleodom.objective` — `ObjectiveFunction`, the negative reward of a pose
  hypothesis against a nearest-neighbour index of the map;
- `simpleodom.register` — `Register`, which minimises the objective with
  BFGS and numerical derivatives from a constant-velocity seed;
- `simpleodom.output` — `write_results`, `format_progress` and
  `print_progress`;
- `simpleodom.cli` — `list_scan_files`, `run` and the `simpleodom` command;
- `simpleodom.evaluate` — `load_poses`, `trajectory_distances`,
  `calc_sequence_errors`, `summarize`, `evaluate` and the
  `simpleodom-evaluate` command.

## What it does not do

The package computes and writes trajectories only. It reads no scan format
other than the `.bin` layout above and does not plot or save the map it
builds.