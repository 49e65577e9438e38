"""Lidar scan-to-map odometry and trajectory drift evaluation."""

__version__ = "0.1.0"