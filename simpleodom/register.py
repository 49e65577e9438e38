"""Scan-to-map registration with a constant-velocity motion seed."""

from __future__ import annotations

import warnings

import numpy as np
from scipy.optimize import line_search
from scipy.spatial import cKDTree

from .objective import ObjectiveFunction
from .pointcloud import _as_xyz
from .transforms import hom2rpyxyz, homogeneous

# Step used for the central-difference gradient.
_DERIVATIVE_EPS = 1e-7

# Lower bound on the objective; reaching it ends the search.
_MIN_OBJECTIVE = -10000000.0

# Sufficient-decrease and curvature constants of the line search.
_WOLFE_RHO = 0.01
_WOLFE_SIGMA = 0.9

_BACKTRACK_STEPS = 50


def _gradient(func, x: np.ndarray) -> np.ndarray:
    """Central-difference approximation of the gradient of ``func`` at ``x``."""
    return np.array([
        (func(x + _DERIVATIVE_EPS * unit) - func(x - _DERIVATIVE_EPS * unit))
        / (2.0 * _DERIVATIVE_EPS)
        for unit in np.eye(len(x))
    ])


def _line_search(func, grad, x, direction, g, fx):
    """Return a step length and the objective there, or (None, fx) on failure."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        result = line_search(func, grad, x, direction, gfk=g, old_fval=fx,
                             c1=_WOLFE_RHO, c2=_WOLFE_SIGMA)
    alpha, new_f = result[0], result[3]
    if alpha is not None and new_f is not None and new_f <= fx:
        return float(alpha), float(new_f)

    slope = float(g @ direction)
    alpha = 1.0
    for _ in range(_BACKTRACK_STEPS):
        candidate = func(x + alpha * direction)
        if candidate <= fx + _WOLFE_RHO * alpha * slope:
            return alpha, float(candidate)
        alpha *= 0.5
    return None, fx


def _bfgs_minimize(func, x0, min_delta: float, min_f: float):
    """Minimise ``func`` with BFGS and numerical derivatives.

    The search stops once the objective improves by less than ``min_delta``
    between iterations, or once it falls to ``min_f`` or below.
    """
    x = np.asarray(x0, dtype=float)
    fx = float(func(x))
    g = _gradient(func, x)
    size = len(x)
    inverse_hessian = None
    scaled = False
    prev_x = prev_g = None
    prev_f = None

    while (prev_f is None or abs(prev_f - fx) >= min_delta) and fx > min_f:
        prev_f = fx

        if inverse_hessian is None:
            inverse_hessian = np.eye(size)
        else:
            delta = x - prev_x
            gamma = g - prev_g
            dg = float(delta @ gamma)
            if not scaled:
                gg = float(gamma @ gamma)
                if dg != 0 and gg != 0:
                    inverse_hessian = inverse_hessian * (dg / gg)
                scaled = True
            hg = inverse_hessian @ gamma
            gh = gamma @ inverse_hessian
            ghg = float(gamma @ hg)
            if np.isfinite(ghg) and np.isfinite(dg) and dg != 0:
                inverse_hessian = (
                    inverse_hessian
                    + (1.0 + ghg / dg) * np.outer(delta, delta) / dg
                    - (np.outer(delta, gh) + np.outer(hg, delta)) / dg
                )
            else:
                inverse_hessian = np.eye(size)

        direction = -(inverse_hessian @ g)
        slope = float(g @ direction)
        if not slope < 0:
            inverse_hessian = np.eye(size)
            direction = -g
            slope = -float(g @ g)
        if slope == 0:
            break

        alpha, new_f = _line_search(func, lambda p: _gradient(func, p), x, direction, g, fx)
        if alpha is None:
            break

        prev_x, prev_g = x, g
        x = x + alpha * direction
        fx = new_f
        g = _gradient(func, x)

    return x, fx


class Register:
    """Registers successive scans against a local map.

    Each registration starts from a seed predicted by a constant-velocity
    model applied to the two most recent results.
    """

    def __init__(self, convergence_tol: float, sigma: float) -> None:
        self.convergence_tol = float(convergence_tol)
        self.reward_param = float(sigma) ** -2 / 2.0
        self.registration_score = 0.0
        self.seed_const_vel: tuple[float, ...] = (0.0,) * 6
        self.reg_result: tuple[float, ...] = (0.0,) * 6
        self.prev_result: tuple[float, ...] = (0.0,) * 6

    def register_scan(self, scan, map_points) -> tuple[float, ...]:
        """Align ``scan`` with ``map_points``; return (roll, pitch, yaw, x, y, z)."""
        tree = cKDTree(_as_xyz(map_points))
        objective = ObjectiveFunction(self.reward_param, scan, tree)

        result, score = _bfgs_minimize(
            objective, self.seed_const_vel, self.convergence_tol, _MIN_OBJECTIVE
        )
        self.reg_result = tuple(float(v) for v in result)
        self.registration_score = float(score)

        current = homogeneous(*self.reg_result)
        previous = homogeneous(*self.prev_result)
        self.seed_const_vel = hom2rpyxyz(current @ (np.linalg.inv(previous) @ current))
        self.prev_result = self.reg_result
        return self.reg_result