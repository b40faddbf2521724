"""Tests for tree partitioning, orientation propagation and chord regularization."""

import math

import gtsam
import pytest

from conftest import X0, X1, X2, X3
from lago.exceptions import DisconnectedGraphError, MissingAnchorError
from lago.initialization import (
    compute_thetas_to_root,
    find_minimum_spanning_tree,
    partition_constraints,
    regularize_chord,
    turn_count,
)
from lago.pose_graph import PoseGraph, create_noise_model_isotropic

PI = math.pi


class TestPartitionConstraints:
    """Test splitting constraints into tree edges and chords."""

    def test_square_graph_partition(self, square_relative_graph) -> None:
        """Test tree edges and chords of the square graph."""
        tree = find_minimum_spanning_tree(square_relative_graph)

        partition = partition_constraints(square_relative_graph, tree)

        assert partition.tree_edge_ids == [0, 3, 4]
        assert partition.chord_ids == [1, 2]

    def test_square_graph_delta_theta(self, square_relative_graph) -> None:
        """Test deltas are oriented from parent to child."""
        tree = find_minimum_spanning_tree(square_relative_graph)

        partition = partition_constraints(square_relative_graph, tree)

        assert set(partition.delta_theta) == {X1, X2, X3}
        assert partition.delta_theta[X1] == pytest.approx(PI / 2, abs=1e-6)
        # edge (x2, x0) is traversed backwards
        assert partition.delta_theta[X2] == pytest.approx(-PI, abs=1e-6)
        assert partition.delta_theta[X3] == pytest.approx(-PI / 2, abs=1e-6)

    def test_parallel_constraint_is_chord(self) -> None:
        """Test a second constraint on a tree edge becomes a chord."""
        graph = PoseGraph()
        noise = create_noise_model_isotropic(1, 0.1)
        graph.add_between_rot2(0, 1, 0.5, noise)
        graph.add_between_rot2(1, 0, -0.5, noise)
        tree = {0: 0, 1: 0}

        partition = partition_constraints(graph, tree)

        assert partition.tree_edge_ids == [0]
        assert partition.chord_ids == [1]
        assert partition.delta_theta == {1: pytest.approx(0.5)}

    def test_key_outside_tree(self) -> None:
        """Test a constraint on a key missing from the tree raises an error."""
        graph = PoseGraph()
        graph.add_between_rot2(0, 5, 0.5, create_noise_model_isotropic(1, 0.1))

        with pytest.raises(DisconnectedGraphError):
            partition_constraints(graph, {0: 0, 1: 0})

    def test_every_constraint_classified_once(self, square_graph) -> None:
        """Test each two-key constraint is either a tree edge or a chord."""
        relative = PoseGraph([edge for edge in square_graph if not edge.is_prior])
        tree = find_minimum_spanning_tree(relative)

        partition = partition_constraints(relative, tree)

        ids = partition.tree_edge_ids + partition.chord_ids
        assert sorted(ids) == list(range(relative.size()))
        assert len(partition.tree_edge_ids) == len(tree) - 1


class TestComputeThetasToRoot:
    """Test orientation propagation along the tree."""

    def test_square_graph_orientations(self, square_relative_graph) -> None:
        """Test orientations of the square graph with respect to x0."""
        tree = find_minimum_spanning_tree(square_relative_graph)
        partition = partition_constraints(square_relative_graph, tree)

        thetas = compute_thetas_to_root(partition.delta_theta, tree)

        assert thetas[X0] == 0.0
        assert thetas[X1] == pytest.approx(PI / 2, abs=1e-6)
        assert thetas[X2] == pytest.approx(-PI, abs=1e-6)
        assert thetas[X3] == pytest.approx(-PI / 2, abs=1e-6)

    def test_root_is_zero(self) -> None:
        """Test the root orientation is exactly zero."""
        thetas = compute_thetas_to_root({1: 0.3}, {7: 7, 1: 7})

        assert thetas[7] == 0.0

    def test_deep_chain_is_unwrapped(self) -> None:
        """Test accumulated orientations are never wrapped."""
        tree = {0: 0, 1: 0, 2: 1, 3: 2, 4: 3, 5: 4}
        delta_theta = {key: 2.0 for key in range(1, 6)}

        thetas = compute_thetas_to_root(delta_theta, tree)

        assert thetas[5] == pytest.approx(10.0)
        assert thetas[3] == pytest.approx(6.0)

    def test_tree_consistency(self) -> None:
        """Test child minus parent equals the tree edge delta exactly."""
        tree = {0: 0, 1: 0, 2: 1, 3: 1, 4: 3, 5: 0, 6: 5}
        delta_theta = {1: 1.2, 2: -3.0, 3: 2.9, 4: 3.1, 5: -0.4, 6: -6.0}

        # Resolve the deepest key first so ancestors come from the memo
        ordered = {6: 5, 4: 3, **tree}
        thetas = compute_thetas_to_root(delta_theta, ordered)

        for key, parent in tree.items():
            if key != parent:
                assert thetas[key] - thetas[parent] == pytest.approx(delta_theta[key], abs=1e-12)
        assert thetas[4] == pytest.approx(1.2 + 2.9 + 3.1)

    def test_missing_delta(self) -> None:
        """Test a non-root key without a tree edge raises an error."""
        with pytest.raises(MissingAnchorError):
            compute_thetas_to_root({1: 0.1}, {0: 0, 1: 0, 2: 1})

    def test_parent_cycle(self) -> None:
        """Test a parent map without a root raises an error."""
        with pytest.raises(DisconnectedGraphError):
            compute_thetas_to_root({0: 0.1, 1: 0.2}, {0: 1, 1: 0})


class TestTurnCount:
    """Test whole-turn counting."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (0.0, 0),
            (2 * PI, 1),
            (-2 * PI, -1),
            (2 * PI + 0.1, 1),
            (4 * PI - 0.1, 2),
            (0.49 * 2 * PI, 0),
            (-0.49 * 2 * PI, 0),
        ],
    )
    def test_turn_count(self, raw: float, expected: int) -> None:
        """Test rounding to the nearest whole turn."""
        assert turn_count(raw) == expected

    def test_ties_away_from_zero(self) -> None:
        """Test half turns are rounded away from zero."""
        assert turn_count(PI) == 1
        assert turn_count(-PI) == -1
        assert turn_count(5 * PI) == 3
        assert turn_count(-5 * PI) == -3


class TestRegularizeChord:
    """Test chord regularization."""

    @pytest.mark.parametrize("k", [-3, -1, 0, 1, 2, 5])
    def test_recovers_measurement_modulo_turns(self, k: int) -> None:
        """Test the regularized delta does not depend on the turn count."""
        theta = 0.3
        measured = theta + 2 * PI * k

        assert regularize_chord(measured, 1.7, 1.7) == pytest.approx(theta, abs=1e-9)

    def test_square_graph_chord(self) -> None:
        """Test the x1 -> x2 chord of the square graph."""
        regularized = regularize_chord(PI / 2, PI / 2, -PI)

        assert regularized == pytest.approx(PI / 2 - 2 * PI)

    def test_consistent_chord_unchanged(self) -> None:
        """Test a chord already consistent with the tree is kept."""
        assert regularize_chord(PI / 2, -PI, -PI / 2) == pytest.approx(PI / 2)

    def test_uses_tree_frame(self) -> None:
        """Test the result matches the unwrapped tree orientations."""
        theta_from, theta_to = 5.0, 12.0
        measured = gtsam.Rot2.fromAngle(theta_to - theta_from).theta()

        regularized = regularize_chord(measured, theta_from, theta_to)

        assert regularized == pytest.approx(theta_to - theta_from, abs=1e-9)
