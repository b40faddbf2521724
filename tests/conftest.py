r"""Pytest configuration and fixtures.

The square graph: four poses on a diamond, five relative pose constraints
and a prior on x0.

               x2               0  1
             / | \              1  2
            /  |  \             2  3
          x3   |   x1           2  0
           \   |   /            0  3
            \  |  /
               x0
"""

import gtsam
import pytest

from lago.pose_graph import PoseGraph, create_noise_model_isotropic

X0 = gtsam.symbol("x", 0)
X1 = gtsam.symbol("x", 1)
X2 = gtsam.symbol("x", 2)
X3 = gtsam.symbol("x", 3)

POSE0 = gtsam.Pose2(0.000000, 0.000000, 0.000000)
POSE1 = gtsam.Pose2(1.000000, 1.000000, 1.570796)
POSE2 = gtsam.Pose2(0.000000, 2.000000, 3.141593)
POSE3 = gtsam.Pose2(-1.000000, 1.000000, 4.712389)


@pytest.fixture
def noise_model() -> gtsam.noiseModel.Isotropic:
    """Isotropic Pose2 noise with 0.1 standard deviation."""
    return create_noise_model_isotropic(3, 0.1)


@pytest.fixture
def square_relative_graph(noise_model) -> PoseGraph:
    """The five relative constraints of the square graph, without prior."""
    graph = PoseGraph()
    graph.add_between_pose2(X0, X1, POSE0.between(POSE1), noise_model)
    graph.add_between_pose2(X1, X2, POSE1.between(POSE2), noise_model)
    graph.add_between_pose2(X2, X3, POSE2.between(POSE3), noise_model)
    graph.add_between_pose2(X2, X0, POSE2.between(POSE0), noise_model)
    graph.add_between_pose2(X0, X3, POSE0.between(POSE3), noise_model)
    return graph


@pytest.fixture
def square_graph(square_relative_graph, noise_model) -> PoseGraph:
    """The square graph with a prior on x0."""
    graph = PoseGraph(square_relative_graph.edges)
    graph.add_prior_pose2(X0, POSE0, noise_model)
    return graph


@pytest.fixture
def zero_orientation_guess() -> gtsam.Values:
    """Ground truth positions of the square graph with all orientations set to zero."""
    values = gtsam.Values()
    for key, pose in ((X0, POSE0), (X1, POSE1), (X2, POSE2), (X3, POSE3)):
        values.insert(key, gtsam.Pose2(pose.x(), pose.y(), 0.0))
    return values
