import io

import numpy as np
import pytest

from simpleodom.config import Config
from simpleodom.output import format_progress, print_progress, write_results
from simpleodom.transforms import hom2rpyxyz


@pytest.fixture
def config():
    return Config(
        kitti=True,
        sigma=0.3,
        r_map=0.5,
        r_new=0.6,
        convergence_tol=1e-5,
        max_sensor_range=80.0,
        min_sensor_range=5.0,
        scan_path="scans",
        output_file_name="run",
    )


def test_identity_pose_line(tmp_path, config):
    base = tmp_path / "out"
    results, _ = write_results(config, [[0, 0, 0, 0, 0, 0, 0]], base, 12.0)
    assert results == tmp_path / "out.txt"
    assert results.read_text().splitlines() == ["1 0 0 0 0 1 0 0 0 0 1 0"]


def test_pose_round_trip(tmp_path, config):
    poses = [
        [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0],
        [0.01, -0.02, 0.3, 1.5, -2.25, 0.125, -150.0],
    ]
    results, _ = write_results(config, poses, tmp_path / "out", 3.0)
    lines = results.read_text().splitlines()
    assert len(lines) == len(poses)
    for line, pose in zip(lines, poses):
        values = [float(v) for v in line.split()]
        assert len(values) == 12
        matrix = np.vstack([np.array(values).reshape(3, 4), [0, 0, 0, 1]])
        assert np.allclose(hom2rpyxyz(matrix), pose[:6], atol=1e-4)


def test_config_file_contents(tmp_path, config):
    base = tmp_path / "out"
    _, config_path = write_results(config, [], base, 42.0)
    assert config_path == tmp_path / "out_config.txt"
    lines = config_path.read_text().splitlines()
    assert lines[0].startswith("% computation finised at : ")
    assert lines[1] == ""
    assert 'scansFolderPath        = "scans";' in lines
    assert "sigma                  = 0.3; % [m]" in lines
    assert "rMap                   = 0.5; % [m]" in lines
    assert "rNew                   = 0.6; % [m]" in lines
    assert "convergenceTolerance   = 1e-05;" in lines
    assert "maxSensorRange         = 80; % [m]" in lines
    assert "minSensorRange         = 5; % [m]" in lines
    assert 'outputFileName         = "run";' in lines
    assert f'outputConfigFileName   = "{base}_config.txt";' in lines
    assert "avg_time_per_scan      = 42; % [ms]" in lines


def test_progress_empty_and_full():
    assert format_progress(0.0) == "\r  0% [" + " " * 60 + "]"
    assert format_progress(1.0) == "\r100% [" + "|" * 60 + "]"


def test_progress_half():
    text = format_progress(0.5)
    assert text.startswith("\r 50% [")
    assert text.count("|") == 30
    assert len(text) == len(format_progress(0.0))


def test_print_progress_writes_to_stream():
    stream = io.StringIO()
    print_progress(0.25, stream)
    assert stream.getvalue() == format_progress(0.25)