"""Tests for pose conversion utilities."""

import math

import gtsam
import numpy as np
import pytest

from lago.utils.conversions import gtsam_pose2_to_numpy, numpy_pose_to_gtsam, wrap_angle


class TestWrapAngle:
    """Test angle wrapping."""

    @pytest.mark.parametrize(
        ("theta", "expected"),
        [
            (0.0, 0.0),
            (0.5, 0.5),
            (2 * math.pi + 0.5, 0.5),
            (-2 * math.pi - 0.5, -0.5),
            (1.5 * math.pi, -0.5 * math.pi),
            (7 * math.pi, math.pi),
        ],
    )
    def test_wrap(self, theta: float, expected: float) -> None:
        """Test angles are brought into (-pi, pi]."""
        assert wrap_angle(theta) == pytest.approx(expected)

    def test_minus_pi_maps_to_pi(self) -> None:
        """Test the open end of the interval."""
        assert wrap_angle(-math.pi) == pytest.approx(math.pi)


class TestPoseConversions:
    """Test numpy and gtsam pose conversions."""

    def test_numpy_to_gtsam(self) -> None:
        """Test position and heading are copied."""
        pose = numpy_pose_to_gtsam(np.array([1.5, -2.0]), 0.3)

        assert isinstance(pose, gtsam.Pose2)
        assert pose.x() == 1.5
        assert pose.y() == -2.0
        assert pose.theta() == pytest.approx(0.3)

    def test_gtsam_to_numpy(self) -> None:
        """Test a pose splits into position and heading."""
        position, theta = gtsam_pose2_to_numpy(gtsam.Pose2(3.0, 4.0, -1.0))

        np.testing.assert_array_equal(position, [3.0, 4.0])
        assert theta == pytest.approx(-1.0)
