"""Orientation initialization pipeline (LAGO).

This module turns a planar measurement graph into an initial orientation
per variable: rotation subgraph extraction, spanning tree, wraparound
correction of loop closures and a single linear least-squares solve.
"""

from .filtering import build_pose2_graph, make_anchor_key
from .initializer import (
    LagoInitializer,
    LagoParams,
    OrientationEstimate,
    initialize_lago,
    merge_orientations,
)
from .linear_system import (
    OrientationEquation,
    angular_sigma,
    build_orientation_equations,
    solve_orientations,
    to_gaussian_factor_graph,
)
from .orientation import (
    TreePartition,
    compute_thetas_to_root,
    partition_constraints,
    regularize_chord,
    turn_count,
)
from .spanning_tree import find_minimum_spanning_tree, find_odometric_path

__all__ = [
    "LagoInitializer",
    "LagoParams",
    "OrientationEquation",
    "OrientationEstimate",
    "TreePartition",
    "angular_sigma",
    "build_orientation_equations",
    "build_pose2_graph",
    "compute_thetas_to_root",
    "find_minimum_spanning_tree",
    "find_odometric_path",
    "initialize_lago",
    "make_anchor_key",
    "merge_orientations",
    "partition_constraints",
    "regularize_chord",
    "solve_orientations",
    "to_gaussian_factor_graph",
    "turn_count",
]
