import numpy as np
import pytest

from simpleodom.pointmap import PointMap
from simpleodom.transforms import homogeneous


def test_new_map_is_empty():
    assert PointMap(1.0, 50.0).points.shape == (0, 3)


def test_update_with_identity_subsamples():
    pmap = PointMap(1.0, 50.0)
    pts = np.array([[0.0, 0, 0], [0.5, 0, 0], [2.0, 0, 0]])
    result = pmap.update_map(pts, np.eye(4))
    assert np.allclose(result, [[0.0, 0, 0], [2.0, 0, 0]])


def test_update_applies_pose():
    pmap = PointMap(0.1, 50.0)
    pts = np.array([[1.0, 0, 0], [0.0, 2.0, 0]])
    pose = homogeneous(0.0, 0.0, 0.0, 10.0, -3.0, 1.0)
    result = pmap.update_map(pts, pose)
    assert np.allclose(result, pts + np.array([10.0, -3.0, 1.0]))


def test_update_accepts_homogeneous_points():
    pmap = PointMap(0.1, 50.0)
    pts = np.array([[1.0, 2.0, 3.0, 1.0]])
    result = pmap.update_map(pts, np.eye(4))
    assert np.allclose(result, [[1.0, 2.0, 3.0]])


def test_points_out_of_range_of_pose_are_dropped():
    pmap = PointMap(0.1, 10.0)
    pmap.update_map(np.array([[0.0, 0, 0], [5.0, 0, 0]]), np.eye(4))
    pose = homogeneous(0.0, 0.0, 0.0, 12.0, 0.0, 0.0)
    result = pmap.update_map(np.array([[0.0, 0, 0]]), pose)
    assert np.allclose(result, [[5.0, 0, 0], [12.0, 0, 0]])


def test_repeated_scan_does_not_grow_map():
    pmap = PointMap(0.5, 50.0)
    pts = np.array([[1.0, 0, 0], [3.0, 0, 0], [0.0, 4.0, 0]])
    first = pmap.update_map(pts, np.eye(4)).copy()
    second = pmap.update_map(pts, np.eye(4))
    assert np.allclose(first, second)


def test_map_stays_within_range_invariant():
    rng = np.random.default_rng(3)
    pmap = PointMap(0.3, 5.0)
    pose = homogeneous(0.1, 0.0, 0.3, 2.0, 1.0, 0.0)
    result = pmap.update_map(rng.uniform(-8, 8, size=(200, 3)), pose)
    dists = np.linalg.norm(result - pose[:3, 3], axis=1)
    assert len(result) > 0
    assert np.all(dists < 5.0)


def test_bad_pose_shape_raises():
    with pytest.raises(ValueError):
        PointMap(1.0, 10.0).update_map(np.zeros((1, 3)), np.eye(3))