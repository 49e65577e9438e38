import pytest

from simpleodom.config import Config, ConfigError, load_config

VALID = """\
kitti: true
sigma: 0.3
rMap: 2.0
rNew: 0.5
convergenceTol: 0.001
maxSensorRange: 120.0
minSensorRange: 5
scanPath: /scans/seq00
outputFileName: results
"""


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_valid(tmp_path):
    config = load_config(_write(tmp_path, VALID))
    assert config == Config(
        kitti=True,
        sigma=0.3,
        r_map=2.0,
        r_new=0.5,
        convergence_tol=0.001,
        max_sensor_range=120.0,
        min_sensor_range=5.0,
        scan_path="/scans/seq00",
        output_file_name="results",
    )


def test_integer_becomes_float(tmp_path):
    config = load_config(_write(tmp_path, VALID))
    assert isinstance(config.min_sensor_range, float)
    assert config.min_sensor_range == 5.0


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")


def test_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "kitti: [true\nsigma: :"))


def test_missing_key(tmp_path):
    text = VALID.replace("sigma: 0.3\n", "")
    with pytest.raises(ConfigError, match="sigma"):
        load_config(_write(tmp_path, text))


def test_wrong_type(tmp_path):
    text = VALID.replace("rMap: 2.0", "rMap: wide")
    with pytest.raises(ConfigError, match="rMap"):
        load_config(_write(tmp_path, text))


def test_non_mapping(tmp_path):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "- 1\n- 2\n"))