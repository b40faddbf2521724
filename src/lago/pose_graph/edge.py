"""Pose graph edge representation.

This module provides the tagged measurement constraint consumed by the
orientation initialization pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

import gtsam
import numpy as np
import numpy.typing as npt


class EdgeType(Enum):
    """Type of edge constraint."""

    BETWEEN_POSE2 = "between_pose2"  # Relative pose between two Pose2 variables
    BETWEEN_ROT2 = "between_rot2"  # Relative rotation between two orientations
    PRIOR_POSE2 = "prior_pose2"  # Absolute pose measurement
    PRIOR_ROT2 = "prior_rot2"  # Absolute orientation measurement
    PRIOR_POSITION = "prior_position"  # Absolute position (e.g. GPS)
    RANGE = "range"  # Distance between two variables


Measurement = Union[gtsam.Pose2, gtsam.Rot2, npt.NDArray[np.float64], float]

_KEY_COUNT = {
    EdgeType.BETWEEN_POSE2: 2,
    EdgeType.BETWEEN_ROT2: 2,
    EdgeType.PRIOR_POSE2: 1,
    EdgeType.PRIOR_ROT2: 1,
    EdgeType.PRIOR_POSITION: 1,
    EdgeType.RANGE: 2,
}

_NOISE_DIM = {
    EdgeType.BETWEEN_POSE2: 3,
    EdgeType.BETWEEN_ROT2: 1,
    EdgeType.PRIOR_POSE2: 3,
    EdgeType.PRIOR_ROT2: 1,
    EdgeType.PRIOR_POSITION: 2,
    EdgeType.RANGE: 1,
}

POSE_TYPES = frozenset({EdgeType.BETWEEN_POSE2, EdgeType.PRIOR_POSE2})
ROTATION_TYPES = frozenset({EdgeType.BETWEEN_ROT2, EdgeType.PRIOR_ROT2})


@dataclass(frozen=True)
class Edge:
    """Represents a measurement constraint on one or two variables.

    The ``edge_type`` tag decides how ``measured`` is interpreted:
    a ``gtsam.Pose2`` for pose constraints, a ``gtsam.Rot2`` for rotation
    constraints, a 2D position for position priors and a scalar for ranges.
    Relative measurements are expressed from the frame of ``keys[0]`` to the
    frame of ``keys[1]``.
    """

    edge_type: EdgeType
    keys: Tuple[int, ...]
    measured: Measurement
    noise_model: gtsam.noiseModel.Base

    def __post_init__(self) -> None:
        """Validate edge data."""
        object.__setattr__(self, "keys", tuple(int(key) for key in self.keys))

        if len(self.keys) != _KEY_COUNT[self.edge_type]:
            raise ValueError(
                f"{self.edge_type.value} edge needs {_KEY_COUNT[self.edge_type]} keys, "
                f"got {len(self.keys)}"
            )
        if len(self.keys) == 2 and self.keys[0] == self.keys[1]:
            raise ValueError("Edge keys must be distinct")

        if self.edge_type in POSE_TYPES and not isinstance(self.measured, gtsam.Pose2):
            raise ValueError("Pose constraint must carry a gtsam.Pose2 measurement")
        if self.edge_type in ROTATION_TYPES and not isinstance(self.measured, gtsam.Rot2):
            raise ValueError("Rotation constraint must carry a gtsam.Rot2 measurement")
        if self.edge_type == EdgeType.PRIOR_POSITION:
            position = np.asarray(self.measured, dtype=np.float64)
            if position.shape != (2,):
                raise ValueError("Position must be a 2D vector")
            object.__setattr__(self, "measured", position)
        if self.edge_type == EdgeType.RANGE:
            object.__setattr__(self, "measured", float(self.measured))

        expected_dim = _NOISE_DIM[self.edge_type]
        if self.noise_model.dim() != expected_dim:
            raise ValueError(
                f"Noise model for {self.edge_type.value} must have dimension {expected_dim}, "
                f"got {self.noise_model.dim()}"
            )

    @property
    def is_prior(self) -> bool:
        """Whether the edge constrains a single variable."""
        return len(self.keys) == 1

    @property
    def measured_theta(self) -> float:
        """Measured rotation in radians.

        Raises:
            ValueError: If the edge carries no rotation.
        """
        # Pose2 and Rot2 both expose theta()
        if self.edge_type in POSE_TYPES or self.edge_type in ROTATION_TYPES:
            return float(self.measured.theta())
        raise ValueError(f"{self.edge_type.value} edge carries no rotation")


def create_between_pose2(
    from_key: int,
    to_key: int,
    relative_pose: gtsam.Pose2,
    noise_model: gtsam.noiseModel.Base,
) -> Edge:
    """Create a relative pose constraint.

    Args:
        from_key: Source variable key.
        to_key: Target variable key.
        relative_pose: Pose of the target expressed in the source frame.
        noise_model: 3D noise model (x, y, theta).

    Returns:
        Edge instance.
    """
    return Edge(EdgeType.BETWEEN_POSE2, (from_key, to_key), relative_pose, noise_model)


def create_between_rot2(
    from_key: int,
    to_key: int,
    relative_rotation: Union[gtsam.Rot2, float],
    noise_model: gtsam.noiseModel.Base,
) -> Edge:
    """Create a relative rotation constraint.

    Args:
        from_key: Source variable key.
        to_key: Target variable key.
        relative_rotation: Rotation from source to target (Rot2 or radians).
        noise_model: 1D noise model.

    Returns:
        Edge instance.
    """
    if not isinstance(relative_rotation, gtsam.Rot2):
        relative_rotation = gtsam.Rot2.fromAngle(float(relative_rotation))
    return Edge(EdgeType.BETWEEN_ROT2, (from_key, to_key), relative_rotation, noise_model)


def create_prior_pose2(
    key: int,
    prior_pose: gtsam.Pose2,
    noise_model: gtsam.noiseModel.Base,
) -> Edge:
    """Create an absolute pose constraint.

    Args:
        key: Variable key to constrain.
        prior_pose: Prior pose value.
        noise_model: 3D noise model (x, y, theta).

    Returns:
        Edge instance.
    """
    return Edge(EdgeType.PRIOR_POSE2, (key,), prior_pose, noise_model)


def create_prior_rot2(
    key: int,
    prior_rotation: Union[gtsam.Rot2, float],
    noise_model: gtsam.noiseModel.Base,
) -> Edge:
    """Create an absolute orientation constraint.

    Args:
        key: Variable key to constrain.
        prior_rotation: Prior orientation (Rot2 or radians).
        noise_model: 1D noise model.

    Returns:
        Edge instance.
    """
    if not isinstance(prior_rotation, gtsam.Rot2):
        prior_rotation = gtsam.Rot2.fromAngle(float(prior_rotation))
    return Edge(EdgeType.PRIOR_ROT2, (key,), prior_rotation, noise_model)
