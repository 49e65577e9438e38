import math

import numpy as np
import pytest

from simpleodom.transforms import hom2rpyxyz, homogeneous, scan_number


def test_zero_pose_is_identity():
    assert np.allclose(homogeneous(0, 0, 0, 0, 0, 0), np.eye(4))


def test_translation_is_last_column():
    t = homogeneous(0.1, -0.2, 0.3, 4.0, 5.0, 6.0)
    assert np.allclose(t[:3, 3], [4.0, 5.0, 6.0])
    assert np.allclose(t[3], [0, 0, 0, 1])


def test_rotation_is_proper_orthonormal():
    r = homogeneous(0.4, -0.7, 2.1, 1, 2, 3)[:3, :3]
    assert np.allclose(r @ r.T, np.eye(3))
    assert math.isclose(np.linalg.det(r), 1.0, rel_tol=1e-12)


def test_yaw_quarter_turn_maps_x_to_y():
    t = homogeneous(0, 0, math.pi / 2, 0, 0, 0)
    assert np.allclose(t @ np.array([1, 0, 0, 1]), [0, 1, 0, 1])


@pytest.mark.parametrize(
    "pose",
    [
        (0.1, 0.2, 0.3, 1.0, -2.0, 3.5),
        (-1.2, 0.5, -2.9, 0.0, 0.0, 0.0),
        (3.0, -1.4, 1.0, -10.0, 20.0, -30.0),
    ],
)
def test_round_trip(pose):
    assert np.allclose(hom2rpyxyz(homogeneous(*pose)), pose)


def test_hom2rpyxyz_rejects_bad_shape():
    with pytest.raises(ValueError):
        hom2rpyxyz(np.eye(3))


def test_scan_number_from_path():
    assert scan_number("/data/seq/000123.bin") == 123
    assert scan_number("42.bin") == 42


def test_scan_numbers_sort_numerically():
    files = ["/d/10.bin", "/d/2.bin", "/d/1.bin"]
    numbers = [scan_number(f) for f in files]
    assert numbers == [10, 2, 1]
    ordered = [f for _, f in sorted(zip(numbers, files))]
    assert ordered == ["/d/1.bin", "/d/2.bin", "/d/10.bin"]


def test_scan_number_rejects_non_numeric():
    with pytest.raises(ValueError):
        scan_number("/d/scan.bin")