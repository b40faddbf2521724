"""Selection of the rotation subgraph and anchoring of absolute priors."""

import logging
from typing import Iterable

import gtsam

from ..pose_graph import Edge, EdgeType, PoseGraph

logger = logging.getLogger(__name__)

ANCHOR_SYMBOL = "A"


def make_anchor_key(keys: Iterable[int]) -> int:
    """Pick a key for the synthetic anchor variable.

    Returns the first ``A<n>`` symbol that is not used by ``keys``.

    Args:
        keys: Keys already present in the caller's graph.

    Returns:
        A key distinct from every key in ``keys``.
    """
    used = set(keys)
    index = 0
    while gtsam.symbol(ANCHOR_SYMBOL, index) in used:
        index += 1
    return gtsam.symbol(ANCHOR_SYMBOL, index)


def build_pose2_graph(graph: PoseGraph, anchor_key: int) -> PoseGraph:
    """Extract the relative rotation subgraph of ``graph``.

    Relative pose and rotation constraints are kept as they are. Every pose or
    orientation prior becomes a relative constraint from the anchor to the
    prior's variable, with the same measurement and noise model. All other
    constraints are dropped.

    Args:
        graph: Input measurement graph.
        anchor_key: Key of the synthetic anchor variable.

    Returns:
        A new graph holding only relative pose and rotation constraints.
    """
    pose2_graph = PoseGraph()
    dropped = 0

    for edge in graph:
        kind = edge.edge_type
        if kind in (EdgeType.BETWEEN_POSE2, EdgeType.BETWEEN_ROT2):
            pose2_graph.add_edge(edge)
        elif kind == EdgeType.PRIOR_POSE2:
            pose2_graph.add_edge(
                Edge(EdgeType.BETWEEN_POSE2, (anchor_key, edge.keys[0]), edge.measured, edge.noise_model)
            )
        elif kind == EdgeType.PRIOR_ROT2:
            pose2_graph.add_edge(
                Edge(EdgeType.BETWEEN_ROT2, (anchor_key, edge.keys[0]), edge.measured, edge.noise_model)
            )
        else:
            dropped += 1

    logger.debug(
        "Rotation subgraph keeps %d of %d edges (%d dropped)",
        pose2_graph.size(),
        graph.size(),
        dropped,
    )
    return pose2_graph
