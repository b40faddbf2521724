"""Input/Output utilities for planar pose graphs in g2o format."""

import logging
from pathlib import Path
from typing import Tuple, Union

import gtsam

from ..pose_graph import EdgeType, PoseGraph

logger = logging.getLogger(__name__)

VERTEX_TAG = "VERTEX_SE2"
EDGE_TAG = "EDGE_SE2"

# Number of ids and of values following the tag
_LAYOUT = {VERTEX_TAG: (1, 3), EDGE_TAG: (2, 9)}


def _parse(convert, fields, line_number: int):
    try:
        return [convert(value) for value in fields]
    except ValueError as exc:
        raise ValueError(f"Line {line_number}: {exc}") from exc


def _check_g2o_lines(filepath: Path) -> None:
    """Check the field layout of every pose line before handing the file to GTSAM.

    Raises:
        ValueError: Naming the first malformed line.
    """
    with filepath.open() as stream:
        for line_number, line in enumerate(stream, start=1):
            fields = line.split()
            if not fields or fields[0] not in _LAYOUT:
                continue
            num_ids, num_values = _LAYOUT[fields[0]]
            if len(fields) != 1 + num_ids + num_values:
                raise ValueError(
                    f"Line {line_number}: {fields[0]} needs {num_ids + num_values} values"
                )
            _parse(int, fields[1 : 1 + num_ids], line_number)
            _parse(float, fields[1 + num_ids :], line_number)


def load_g2o(filepath: Union[str, Path]) -> Tuple[PoseGraph, gtsam.Values]:
    """Load a planar pose graph from a g2o file.

    Expected lines:
    VERTEX_SE2 id x y theta
    EDGE_SE2 id1 id2 dx dy dtheta I11 I12 I13 I22 I23 I33

    Only pose vertices and relative pose edges are kept.

    Args:
        filepath: Path to the g2o file.

    Returns:
        Tuple of (graph of relative pose constraints, initial poses).
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Pose graph file not found: {filepath}")

    _check_g2o_lines(filepath)
    factors, initial = gtsam.readG2o(str(filepath), False)

    graph = PoseGraph()
    skipped = 0
    for i in range(factors.size()):
        factor = factors.at(i)
        if not isinstance(factor, gtsam.BetweenFactorPose2):
            skipped += 1
            continue
        key1, key2 = factor.keys()
        graph.add_between_pose2(key1, key2, factor.measured(), factor.noiseModel())

    values = gtsam.utilities.allPose2s(initial)
    logger.debug(
        "Loaded %d vertices and %d edges from %s (%d factors skipped)",
        values.size(),
        graph.size(),
        filepath,
        skipped,
    )
    return graph, values


def save_g2o(filepath: Union[str, Path], graph: PoseGraph, values: gtsam.Values) -> None:
    """Save a planar pose graph to a g2o file.

    Only relative pose constraints have a g2o representation; other
    constraints are left out.

    Args:
        filepath: Output file path.
        graph: Graph whose relative pose constraints are written.
        values: Poses written as vertices.
    """
    factors = gtsam.NonlinearFactorGraph()
    for edge in graph:
        if edge.edge_type != EdgeType.BETWEEN_POSE2:
            logger.debug("Skipping %s edge on keys %s", edge.edge_type.value, edge.keys)
            continue
        key1, key2 = edge.keys
        factors.add(gtsam.BetweenFactorPose2(key1, key2, edge.measured, edge.noise_model))

    gtsam.writeG2o(factors, values, str(filepath))
