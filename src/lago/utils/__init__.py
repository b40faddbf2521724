"""Utility functions and helpers for 2D pose graphs."""

from .conversions import gtsam_pose2_to_numpy, numpy_pose_to_gtsam, wrap_angle
from .io import load_g2o, save_g2o

__all__ = [
    "gtsam_pose2_to_numpy",
    "load_g2o",
    "numpy_pose_to_gtsam",
    "save_g2o",
    "wrap_angle",
]
