"""Loading of the registration configuration from a YAML file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from numbers import Real

import yaml


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


@dataclass(frozen=True)
class Config:
    """Registration parameters.

    kitti: apply the KITTI vertical-angle correction to scans.
    sigma: standard deviation of the proximity-based reward.
    r_map: spatial separation used to subsample the local map.
    r_new: spatial separation used to subsample new scans.
    convergence_tol: minimum reward improvement between solver iterations.
    max_sensor_range, min_sensor_range: accepted range of scan points.
    scan_path: directory holding the .bin scan files.
    output_file_name: base name of the result files.
    """

    kitti: bool
    sigma: float
    r_map: float
    r_new: float
    convergence_tol: float
    max_sensor_range: float
    min_sensor_range: float
    scan_path: str
    output_file_name: str


def _require(document: dict, key: str):
    try:
        return document[key]
    except KeyError:
        raise ConfigError(f"missing configuration key: {key}") from None


def _as_bool(document: dict, key: str) -> bool:
    value = _require(document, key)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be a boolean, got {value!r}")
    return value


def _as_float(document: dict, key: str) -> float:
    value = _require(document, key)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    return float(value)


def _as_str(document: dict, key: str) -> str:
    value = _require(document, key)
    if value is None or isinstance(value, (dict, list)):
        raise ConfigError(f"{key} must be a string, got {value!r}")
    return str(value)


def load_config(path: str | os.PathLike) -> Config:
    """Read and validate a YAML configuration file."""
    try:
        with open(path, encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"cannot read configuration file {os.fspath(path)!r}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {os.fspath(path)!r}: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigError("configuration must be a YAML mapping")

    return Config(
        kitti=_as_bool(document, "kitti"),
        sigma=_as_float(document, "sigma"),
        r_map=_as_float(document, "rMap"),
        r_new=_as_float(document, "rNew"),
        convergence_tol=_as_float(document, "convergenceTol"),
        max_sensor_range=_as_float(document, "maxSensorRange"),
        min_sensor_range=_as_float(document, "minSensorRange"),
        scan_path=_as_str(document, "scanPath"),
        output_file_name=_as_str(document, "outputFileName"),
    )