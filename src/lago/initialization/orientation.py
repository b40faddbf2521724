"""Orientation bookkeeping over a spanning tree.

Splits constraints into tree edges and chords, accumulates unwrapped
orientations from the root of the tree, and removes the whole-turn
ambiguity of chord measurements.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List

from ..exceptions import DisconnectedGraphError, MissingAnchorError
from ..pose_graph import PoseGraph
from .spanning_tree import PredecessorMap

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


@dataclass
class TreePartition:
    """Constraints of a graph split with respect to a spanning tree.

    Attributes:
        tree_edge_ids: Indexes of the constraints forming the tree, in graph order.
        chord_ids: Indexes of the remaining constraints, in graph order.
        delta_theta: For every non-root key, the rotation of the tree edge
            from its parent to it.
    """

    tree_edge_ids: List[int] = field(default_factory=list)
    chord_ids: List[int] = field(default_factory=list)
    delta_theta: Dict[int, float] = field(default_factory=dict)


def partition_constraints(graph: PoseGraph, tree: PredecessorMap) -> TreePartition:
    """Classify every two-key constraint as a tree edge or a chord.

    Args:
        graph: Graph of relative constraints.
        tree: Spanning tree of ``graph``.

    Returns:
        The partition, with the parent-to-child rotation of each tree edge.

    Raises:
        DisconnectedGraphError: If a constraint touches a key missing from the tree.
    """
    partition = TreePartition()

    for index, edge in enumerate(graph):
        if len(edge.keys) != 2:
            continue
        key1, key2 = edge.keys
        if key1 not in tree or key2 not in tree:
            raise DisconnectedGraphError(
                f"Constraint {index} touches a key outside the spanning tree"
            )

        delta = edge.measured_theta
        if tree[key1] == key2 and key1 not in partition.delta_theta:
            partition.delta_theta[key1] = -delta
            partition.tree_edge_ids.append(index)
        elif tree[key2] == key1 and key2 not in partition.delta_theta:
            partition.delta_theta[key2] = delta
            partition.tree_edge_ids.append(index)
        else:
            partition.chord_ids.append(index)

    logger.debug(
        "Partitioned %d constraints into %d tree edges and %d chords",
        len(partition.tree_edge_ids) + len(partition.chord_ids),
        len(partition.tree_edge_ids),
        len(partition.chord_ids),
    )
    return partition


def compute_thetas_to_root(
    delta_theta: Dict[int, float],
    tree: PredecessorMap,
) -> Dict[int, float]:
    """Accumulate the orientation of every key with respect to the root.

    Each key walks up towards the root until it reaches the root or a key
    resolved earlier; every key on the walk is then resolved in one pass
    back down. Values are sums of tree edge rotations and are never wrapped.

    Args:
        delta_theta: Parent-to-child rotation of every non-root key.
        tree: Spanning tree the rotations refer to.

    Returns:
        Unwrapped orientation of every key of the tree, 0 for the root.

    Raises:
        MissingAnchorError: If a non-root key has no tree edge rotation.
        DisconnectedGraphError: If a key's ancestors never reach a root.
    """
    thetas: Dict[int, float] = {key: 0.0 for key, parent in tree.items() if key == parent}

    for key in tree:
        if key in thetas:
            continue

        path: List[int] = []
        node = key
        while node not in thetas:
            if node not in delta_theta:
                raise MissingAnchorError(f"Key {node} has no tree edge towards the root")
            path.append(node)
            if len(path) > len(tree):
                raise DisconnectedGraphError(f"Ancestors of key {key} form a cycle")
            node = tree[node]

        for node in reversed(path):
            thetas[node] = thetas[tree[node]] + delta_theta[node]

    return thetas


def turn_count(raw: float) -> int:
    """Number of whole turns in ``raw`` radians, ties rounded away from zero."""
    turns = raw / TWO_PI
    return int(math.copysign(math.floor(abs(turns) + 0.5), turns))


def regularize_chord(measured: float, theta_from: float, theta_to: float) -> float:
    """Express a chord measurement in the unwrapped frame of the tree.

    ``measured + theta_from - theta_to`` is the rotation accumulated around
    the cycle closed by the chord; whole turns of it are removed from the
    measurement.

    Args:
        measured: Measured rotation from the first to the second key.
        theta_from: Orientation of the first key with respect to the root.
        theta_to: Orientation of the second key with respect to the root.

    Returns:
        The regularized rotation.
    """
    k = turn_count(measured + theta_from - theta_to)
    return measured - k * TWO_PI
