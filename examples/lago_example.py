"""Example of initializing a planar pose graph with LAGO.

This example demonstrates:
1. Creating a pose graph with relative pose constraints and a prior
2. Initializing the orientations from a guess that has them all at zero
3. Refining the initialized poses with GTSAM
"""

import math

import gtsam
import numpy as np

from lago.initialization import LagoInitializer
from lago.pose_graph import EdgeType, PoseGraph, create_noise_model_diagonal
from lago.utils.conversions import numpy_pose_to_gtsam, wrap_angle


def main() -> None:
    """Run the LAGO square graph example."""
    print("LAGO Example")
    print("=" * 50)

    # Ground truth: four poses on a diamond
    truth = [
        gtsam.Pose2(0.0, 0.0, 0.0),
        gtsam.Pose2(1.0, 1.0, 0.5 * math.pi),
        gtsam.Pose2(0.0, 2.0, math.pi),
        gtsam.Pose2(-1.0, 1.0, 1.5 * math.pi),
    ]
    keys = [gtsam.symbol("x", i) for i in range(len(truth))]

    graph = PoseGraph()
    noise = create_noise_model_diagonal(np.array([0.1, 0.1, 0.05]))
    for i, j in ((0, 1), (1, 2), (2, 3), (2, 0), (0, 3)):
        graph.add_between_pose2(keys[i], keys[j], truth[i].between(truth[j]), noise)
    graph.add_prior_pose2(keys[0], truth[0], create_noise_model_diagonal(np.full(3, 1e-3)))
    print(f"\n1. Created pose graph with {graph.size()} constraints")

    # Initial guess: correct positions, every heading at zero
    guess = gtsam.Values()
    for key, pose in zip(keys, truth):
        guess.insert(key, numpy_pose_to_gtsam(np.array([pose.x(), pose.y()]), 0.0))
    print("2. Built initial guess with zero orientations")

    # Initialize
    print("\n3. Initializing orientations...")
    initializer = LagoInitializer()
    estimate = initializer.estimate(graph)
    print(f"   - Tree edges: {len(estimate.partition.tree_edge_ids)}")
    print(f"   - Chords: {len(estimate.partition.chord_ids)}")
    initial = initializer.initialize(graph, guess)

    for i, key in enumerate(keys):
        theta = initial.atPose2(key).theta()
        print(f"   Pose {i}: theta={theta:+.4f} (truth {wrap_angle(truth[i].theta()):+.4f})")

    # Refine with GTSAM, starting from the initialized poses
    print("\n4. Refining with Levenberg-Marquardt...")
    factors = gtsam.NonlinearFactorGraph()
    for edge in graph:
        if edge.edge_type == EdgeType.BETWEEN_POSE2:
            factors.add(gtsam.BetweenFactorPose2(*edge.keys, edge.measured, edge.noise_model))
        elif edge.edge_type == EdgeType.PRIOR_POSE2:
            factors.add(gtsam.PriorFactorPose2(edge.keys[0], edge.measured, edge.noise_model))
    result = gtsam.LevenbergMarquardtOptimizer(factors, initial).optimize()
    print(f"   - Initial error: {factors.error(initial):.6f}")
    print(f"   - Final error: {factors.error(result):.6f}")

    print("\n" + "=" * 50)
    print("Example complete!")


if __name__ == "__main__":
    main()
