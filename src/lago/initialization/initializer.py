"""Orientation initialization of planar pose graphs with LAGO.

LAGO (Linear Approximation for Graph Optimization) estimates the orientation
of every pose without iterating: relative rotations are accumulated along a
spanning tree, loop closures are corrected for whole-turn wraparound, and
the resulting linear system is solved in one shot. Positions are not
estimated; when an initial guess is given its positions are kept.

References:
    L. Carlone, R. Aragues, J. Castellanos, and B. Bona, A fast and accurate
    approximation for planar pose graph optimization, IJRR, 2014.
"""

import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Optional, Set

import gtsam

from ..pose_graph import EdgeType, PoseGraph
from .filtering import build_pose2_graph, make_anchor_key
from .linear_system import (
    DEFAULT_ANCHOR_VARIANCE,
    OrientationEquation,
    build_orientation_equations,
    solve_orientations,
)
from .orientation import TreePartition, compute_thetas_to_root, partition_constraints
from .spanning_tree import PredecessorMap, find_minimum_spanning_tree, find_odometric_path

logger = logging.getLogger(__name__)


@dataclass
class LagoParams:
    """Parameters of the orientation initializer.

    Attributes:
        anchor_variance: Variance of the prior pinning the anchor to zero.
        use_odometric_path: Use the odometry chain (consecutive keys) as the
            spanning tree instead of a minimum spanning tree.
    """

    anchor_variance: float = DEFAULT_ANCHOR_VARIANCE
    use_odometric_path: bool = False

    def __post_init__(self) -> None:
        """Validate parameters."""
        if self.anchor_variance <= 0.0:
            raise ValueError("Anchor variance must be positive")


@dataclass
class OrientationEstimate:
    """Intermediate and final products of one initialization run."""

    anchor_key: int
    pinned_key: Optional[int] = None
    tree: PredecessorMap = field(default_factory=dict)
    partition: TreePartition = field(default_factory=TreePartition)
    thetas_to_root: Dict[int, float] = field(default_factory=dict)
    equations: List[OrientationEquation] = field(default_factory=list)
    orientations: Dict[int, float] = field(default_factory=dict)
    rotation_keys: Set[int] = field(default_factory=set)


def _rotation_only_keys(graph: PoseGraph, anchor_key: int) -> Set[int]:
    """Keys constrained by rotation edges only (orientation variables)."""
    pose_keys: Set[int] = set()
    rotation_keys: Set[int] = set()
    for edge in graph:
        target = pose_keys if edge.edge_type == EdgeType.BETWEEN_POSE2 else rotation_keys
        target.update(edge.keys)
    return rotation_keys - pose_keys - {anchor_key}


def _guessed_pose(initial_guess: gtsam.Values, key: int) -> Optional[gtsam.Pose2]:
    if not initial_guess.exists(key):
        return None
    try:
        return initial_guess.atPose2(key)
    except RuntimeError:
        # the guess holds an orientation variable
        return None


def merge_orientations(
    orientations: Dict[int, float],
    anchor_key: int,
    initial_guess: Optional[gtsam.Values] = None,
    rotation_keys: Collection[int] = (),
):
    """Combine solved orientations with an initial guess.

    Args:
        orientations: Solved orientation per key.
        anchor_key: Synthetic anchor key, left out of the result.
        initial_guess: Optional values holding a Pose2 per pose key.
        rotation_keys: Keys that are orientation variables rather than poses.

    Returns:
        Without a guess, a dict of orientations. With a guess, new values
        holding a Pose2 per key, with the guessed position (origin when
        missing) and the solved orientation. Orientation keys without a
        guessed Pose2 get a Rot2 instead.
    """
    if initial_guess is None:
        return {key: theta for key, theta in orientations.items() if key != anchor_key}

    merged = gtsam.Values()
    for key, theta in orientations.items():
        if key == anchor_key:
            continue
        pose = _guessed_pose(initial_guess, key)
        if pose is None and key in rotation_keys:
            merged.insert(key, gtsam.Rot2.fromAngle(theta))
            continue
        if pose is not None:
            x, y = pose.x(), pose.y()
        else:
            logger.debug("Key %d has no initial guess, placing it at the origin", key)
            x, y = 0.0, 0.0
        merged.insert(key, gtsam.Pose2(x, y, theta))
    return merged


class LagoInitializer:
    """Computes initial orientations for planar pose graphs."""

    def __init__(self, params: Optional[LagoParams] = None) -> None:
        """Initialize the initializer.

        Args:
            params: Initialization parameters. Defaults to ``LagoParams()``.
        """
        self.params = params or LagoParams()

    def estimate(self, graph: PoseGraph) -> OrientationEstimate:
        """Run the full pipeline and keep every intermediate product.

        Args:
            graph: Measurement graph; only pose and rotation constraints are used.

        Returns:
            The orientation estimate, including the synthetic anchor.
        """
        anchor_key = make_anchor_key(graph.keys())
        pose2_graph = build_pose2_graph(graph, anchor_key)
        estimate = OrientationEstimate(anchor_key=anchor_key)

        if pose2_graph.size() == 0:
            logger.warning("Graph holds no pose or rotation constraints, nothing to initialize")
            return estimate

        has_anchor = anchor_key in pose2_graph.keys()
        root = anchor_key if has_anchor else None
        if self.params.use_odometric_path:
            estimate.tree = find_odometric_path(pose2_graph, root)
        else:
            estimate.tree = find_minimum_spanning_tree(pose2_graph, root)

        estimate.partition = partition_constraints(pose2_graph, estimate.tree)
        estimate.thetas_to_root = compute_thetas_to_root(
            estimate.partition.delta_theta, estimate.tree
        )

        # Without priors the tree root fixes the global rotation instead
        estimate.pinned_key = anchor_key if has_anchor else pose2_graph.keys()[0]
        estimate.equations = build_orientation_equations(
            pose2_graph,
            estimate.partition,
            estimate.thetas_to_root,
            estimate.pinned_key,
            self.params.anchor_variance,
        )
        estimate.orientations = solve_orientations(estimate.equations)
        estimate.rotation_keys = _rotation_only_keys(pose2_graph, anchor_key)

        logger.info(
            "Initialized %d orientations (%d tree edges, %d chords)",
            len(estimate.orientations) - int(has_anchor),
            len(estimate.partition.tree_edge_ids),
            len(estimate.partition.chord_ids),
        )
        return estimate

    def initialize_orientations(self, graph: PoseGraph) -> Dict[int, float]:
        """Estimate the orientation of every pose and orientation variable.

        Args:
            graph: Measurement graph.

        Returns:
            Orientation in radians per key. Values are not wrapped to (-pi, pi].
        """
        estimate = self.estimate(graph)
        return merge_orientations(estimate.orientations, estimate.anchor_key)

    def initialize(
        self,
        graph: PoseGraph,
        initial_guess: Optional[gtsam.Values] = None,
    ):
        """Correct the orientations of an initial guess.

        Args:
            graph: Measurement graph.
            initial_guess: Values holding a Pose2 per pose key. When None, only
                the orientations are returned.

        Returns:
            New values with corrected orientations and untouched positions, or
            a dict of orientations when no guess is given.
        """
        estimate = self.estimate(graph)
        return merge_orientations(
            estimate.orientations,
            estimate.anchor_key,
            initial_guess,
            estimate.rotation_keys,
        )


def initialize_lago(
    graph: PoseGraph,
    initial_guess: Optional[gtsam.Values] = None,
    params: Optional[LagoParams] = None,
):
    """Initialize orientations of a planar pose graph.

    Args:
        graph: Measurement graph.
        initial_guess: Optional values holding a Pose2 per pose key.
        params: Initialization parameters.

    Returns:
        See ``LagoInitializer.initialize``.
    """
    return LagoInitializer(params).initialize(graph, initial_guess)
