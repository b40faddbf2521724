"""Pose graph core module.

This module provides the measurement graph consumed by the orientation
initialization pipeline: tagged constraints on planar poses and
orientations, plus GTSAM noise model helpers.
"""

from .edge import (
    Edge,
    EdgeType,
    create_between_pose2,
    create_between_rot2,
    create_prior_pose2,
    create_prior_rot2,
)
from .graph import PoseGraph
from .noise import (
    create_noise_model_diagonal,
    create_noise_model_gaussian,
    create_noise_model_isotropic,
)

__all__ = [
    "PoseGraph",
    "Edge",
    "EdgeType",
    "create_between_pose2",
    "create_between_rot2",
    "create_prior_pose2",
    "create_prior_rot2",
    "create_noise_model_diagonal",
    "create_noise_model_gaussian",
    "create_noise_model_isotropic",
]
