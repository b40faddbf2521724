"""Conversion utilities for 2D poses (x, y, theta) using GTSAM Pose2."""

import math

import gtsam
import numpy as np
import numpy.typing as npt


def wrap_angle(theta: float) -> float:
    """Wrap angle to (-pi, pi].

    Args:
        theta: Angle in radians.

    Returns:
        Equivalent angle in (-pi, pi].
    """
    wrapped = math.remainder(theta, 2.0 * math.pi)
    # Map -pi to +pi for consistency
    return math.pi if math.isclose(wrapped, -math.pi) else wrapped


def numpy_pose_to_gtsam(
    position: npt.NDArray[np.float64],
    theta: float,
) -> gtsam.Pose2:
    """Convert numpy position and orientation to GTSAM Pose2.

    Args:
        position: 2D position vector [x, y].
        theta: Orientation in radians.

    Returns:
        GTSAM Pose2 object.
    """
    return gtsam.Pose2(float(position[0]), float(position[1]), float(theta))


def gtsam_pose2_to_numpy(
    pose: gtsam.Pose2,
) -> tuple[npt.NDArray[np.float64], float]:
    """Convert GTSAM Pose2 to numpy arrays.

    Args:
        pose: GTSAM Pose2 object.

    Returns:
        Tuple of (position [x, y], theta).
    """
    position = np.array([pose.x(), pose.y()], dtype=np.float64)
    return position, pose.theta()
