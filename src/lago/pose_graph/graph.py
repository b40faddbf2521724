"""Planar pose graph container."""

from typing import Dict, Iterable, Iterator, List, Optional

import gtsam
import numpy as np
import numpy.typing as npt

from .edge import (
    Edge,
    EdgeType,
    create_between_pose2,
    create_between_rot2,
    create_prior_pose2,
    create_prior_rot2,
)


class PoseGraph:
    """Ordered collection of measurement constraints.

    The insertion order of edges is the constraint order used by every
    downstream stage, so results are deterministic for a given graph.
    """

    def __init__(self, edges: Optional[Iterable[Edge]] = None) -> None:
        """Initialize a pose graph.

        Args:
            edges: Optional initial edges, kept in the given order.
        """
        self._edges: List[Edge] = []
        for edge in edges or ():
            self.add_edge(edge)

    @property
    def edges(self) -> List[Edge]:
        """Edges in insertion order."""
        return list(self._edges)

    def add_edge(self, edge: Edge) -> int:
        """Add an edge to the graph.

        Args:
            edge: The constraint to add.

        Returns:
            Index of the edge in the graph.
        """
        self._edges.append(edge)
        return len(self._edges) - 1

    def add_between_pose2(
        self,
        from_key: int,
        to_key: int,
        relative_pose: gtsam.Pose2,
        noise_model: gtsam.noiseModel.Base,
    ) -> int:
        """Add a relative pose (odometry or loop closure) constraint.

        Args:
            from_key: Source variable key.
            to_key: Target variable key.
            relative_pose: Relative transformation from source to target.
            noise_model: Noise model for the measurement.

        Returns:
            Index of the edge in the graph.
        """
        return self.add_edge(create_between_pose2(from_key, to_key, relative_pose, noise_model))

    def add_between_rot2(
        self,
        from_key: int,
        to_key: int,
        relative_rotation,
        noise_model: gtsam.noiseModel.Base,
    ) -> int:
        """Add a relative rotation constraint (Rot2 or radians)."""
        return self.add_edge(
            create_between_rot2(from_key, to_key, relative_rotation, noise_model)
        )

    def add_prior_pose2(
        self,
        key: int,
        pose: gtsam.Pose2,
        noise_model: gtsam.noiseModel.Base,
    ) -> int:
        """Add a prior factor to fix a pose.

        Args:
            key: The variable key.
            pose: The prior pose value.
            noise_model: Noise model for the prior.

        Returns:
            Index of the edge in the graph.
        """
        return self.add_edge(create_prior_pose2(key, pose, noise_model))

    def add_prior_rot2(
        self,
        key: int,
        rotation,
        noise_model: gtsam.noiseModel.Base,
    ) -> int:
        """Add a prior on the orientation only (Rot2 or radians)."""
        return self.add_edge(create_prior_rot2(key, rotation, noise_model))

    def add_position_prior(
        self,
        key: int,
        position: npt.NDArray[np.float64],
        noise_model: gtsam.noiseModel.Base,
    ) -> int:
        """Add a GPS/absolute position constraint.

        Args:
            key: The variable key.
            position: 2D position measurement.
            noise_model: 2D noise model for the measurement.

        Returns:
            Index of the edge in the graph.
        """
        return self.add_edge(Edge(EdgeType.PRIOR_POSITION, (key,), position, noise_model))

    def add_range(
        self,
        from_key: int,
        to_key: int,
        distance: float,
        noise_model: gtsam.noiseModel.Base,
    ) -> int:
        """Add a range (distance) constraint between two variables."""
        return self.add_edge(Edge(EdgeType.RANGE, (from_key, to_key), distance, noise_model))

    def keys(self) -> List[int]:
        """Get every key touched by an edge, in order of first appearance.

        Returns:
            List of unique variable keys.
        """
        seen: Dict[int, None] = {}
        for edge in self._edges:
            for key in edge.keys:
                seen.setdefault(key, None)
        return list(seen)

    def size(self) -> int:
        """Get the number of edges in the graph.

        Returns:
            Number of edges.
        """
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self._edges)

    def __getitem__(self, index: int) -> Edge:
        return self._edges[index]
