"""Spanning trees over the variable adjacency of a pose graph.

Trees are returned as predecessor maps: every key maps to its parent and the
root maps to itself.
"""

import logging
from typing import Dict, Optional

import networkx as nx

from ..exceptions import DisconnectedGraphError, MissingAnchorError
from ..pose_graph import PoseGraph

logger = logging.getLogger(__name__)

PredecessorMap = Dict[int, int]


def _adjacency_graph(graph: PoseGraph) -> nx.Graph:
    """Undirected graph with one edge per pair of keys sharing a constraint.

    All constraints cost the same; the weight only ranks them. Keys are
    visited in order of first appearance and each key's adjacencies in
    constraint order, so the first key of the graph gets all of its
    adjacencies before any other key.
    """
    adjacency = nx.Graph()
    for edge in graph:
        if len(edge.keys) == 2:
            adjacency.add_edge(edge.keys[0], edge.keys[1])
    for rank, (key1, key2) in enumerate(adjacency.edges):
        adjacency[key1][key2]["weight"] = float(rank)
    return adjacency


def _select_root(adjacency: nx.Graph, root: Optional[int]) -> int:
    if root is None:
        # Nodes keep the order in which constraints introduced them
        return next(iter(adjacency.nodes))
    if root not in adjacency:
        raise MissingAnchorError(f"Root {root} is not touched by any constraint")
    return root


def _check_connected(adjacency: nx.Graph, what: str) -> None:
    if not nx.is_connected(adjacency):
        components = nx.number_connected_components(adjacency)
        raise DisconnectedGraphError(
            f"{what} has {components} connected components, expected 1"
        )


def _orient(tree: nx.Graph, root: int) -> PredecessorMap:
    """Turn an undirected tree into a predecessor map rooted at ``root``."""
    predecessors: PredecessorMap = {root: root}
    for child, parent in nx.bfs_predecessors(tree, root):
        predecessors[child] = parent
    return predecessors


def find_minimum_spanning_tree(graph: PoseGraph, root: Optional[int] = None) -> PredecessorMap:
    """Compute a minimum spanning tree of the constraint graph.

    All constraints have the same cost. Ties are resolved in adjacency
    order: the adjacencies of the first key come first, then those of the
    next key to appear, and so on, each in constraint order.

    Args:
        graph: Graph of relative constraints.
        root: Key to root the tree at. Defaults to the first key of the graph.

    Returns:
        Predecessor map covering every key of the graph.

    Raises:
        DisconnectedGraphError: If the graph has more than one component.
        MissingAnchorError: If ``root`` is not part of the graph.
    """
    adjacency = _adjacency_graph(graph)
    if adjacency.number_of_nodes() == 0:
        return {}

    root = _select_root(adjacency, root)
    _check_connected(adjacency, "Constraint graph")

    tree = nx.minimum_spanning_tree(adjacency, algorithm="kruskal")
    predecessors = _orient(tree, root)
    logger.debug(
        "Spanning tree over %d keys uses %d of %d adjacencies",
        len(predecessors),
        tree.number_of_edges(),
        adjacency.number_of_edges(),
    )
    return predecessors


def find_odometric_path(graph: PoseGraph, root: Optional[int] = None) -> PredecessorMap:
    """Build the spanning tree formed by the odometry chain.

    Uses the constraints between consecutive keys (``k`` and ``k + 1``) and,
    when the root is not on the chain, the first constraint touching the
    root to attach it.

    Args:
        graph: Graph of relative constraints.
        root: Key to root the tree at. Defaults to the first key of the graph.

    Returns:
        Predecessor map covering every key of the graph.

    Raises:
        DisconnectedGraphError: If the odometry chain does not reach every key.
        MissingAnchorError: If ``root`` is not part of the graph.
    """
    adjacency = _adjacency_graph(graph)
    if adjacency.number_of_nodes() == 0:
        return {}

    root = _select_root(adjacency, root)

    path = nx.Graph()
    path.add_nodes_from(adjacency.nodes)
    for key1, key2 in adjacency.edges:
        if abs(key2 - key1) == 1:
            path.add_edge(key1, key2)

    if path.degree(root) == 0:
        for edge in graph:
            if len(edge.keys) == 2 and root in edge.keys:
                path.add_edge(edge.keys[0], edge.keys[1])
                break

    _check_connected(path, "Odometric path")
    return _orient(path, root)
