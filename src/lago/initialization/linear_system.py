"""Linear least-squares system over scalar orientations."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

import gtsam
import numpy as np

from ..exceptions import InvalidMeasurementError, SingularSystemError
from ..pose_graph import Edge, PoseGraph
from .orientation import TreePartition, regularize_chord

logger = logging.getLogger(__name__)

DEFAULT_ANCHOR_VARIANCE = 1e-8


@dataclass(frozen=True)
class OrientationEquation:
    """Weighted scalar equation ``sum(c_i * theta_i) = rhs``.

    Attributes:
        keys: Unknowns the equation involves.
        coefficients: One coefficient per key.
        rhs: Right-hand side value in radians.
        sigma: Standard deviation of the right-hand side.
    """

    keys: Tuple[int, ...]
    coefficients: Tuple[float, ...]
    rhs: float
    sigma: float


def angular_sigma(edge: Edge) -> float:
    """Get the standard deviation of the rotation component of a constraint.

    Args:
        edge: Relative pose or rotation constraint.

    Returns:
        Angular standard deviation in radians.

    Raises:
        InvalidMeasurementError: If the noise model is not diagonal or has no
            angular component.
    """
    model = edge.noise_model
    if not isinstance(model, gtsam.noiseModel.Diagonal):
        raise InvalidMeasurementError(
            f"Constraint on keys {edge.keys} needs a diagonal noise model, "
            f"got {type(model).__name__}"
        )
    sigmas = np.asarray(model.sigmas(), dtype=np.float64)
    if sigmas.size == 0:
        raise InvalidMeasurementError(f"Constraint on keys {edge.keys} has no angular sigma")
    # theta is the last tangent coordinate of Pose2 and the only one of Rot2
    return float(sigmas[-1])


def _relative_equation(edge: Edge, rhs: float) -> OrientationEquation:
    return OrientationEquation(
        keys=edge.keys,
        coefficients=(-1.0, 1.0),
        rhs=rhs,
        sigma=angular_sigma(edge),
    )


def build_orientation_equations(
    graph: PoseGraph,
    partition: TreePartition,
    thetas_to_root: Dict[int, float],
    anchor_key: int,
    anchor_variance: float = DEFAULT_ANCHOR_VARIANCE,
) -> List[OrientationEquation]:
    """Assemble the linear orientation system.

    Tree edges keep their measured rotation; chords use their regularized
    rotation. A final tight prior pins ``anchor_key`` to zero.

    Args:
        graph: Graph of relative constraints the partition refers to.
        partition: Tree edges and chords of ``graph``.
        thetas_to_root: Unwrapped orientation of every key.
        anchor_key: Key pinned to zero orientation.
        anchor_variance: Variance of the anchor prior.

    Returns:
        Tree edge equations, then chord equations, then the anchor equation.

    Raises:
        InvalidMeasurementError: If a constraint has no usable angular sigma.
    """
    equations: List[OrientationEquation] = []

    for index in partition.tree_edge_ids:
        edge = graph[index]
        equations.append(_relative_equation(edge, edge.measured_theta))

    for index in partition.chord_ids:
        edge = graph[index]
        key1, key2 = edge.keys
        regularized = regularize_chord(
            edge.measured_theta, thetas_to_root[key1], thetas_to_root[key2]
        )
        equations.append(_relative_equation(edge, regularized))

    equations.append(
        OrientationEquation(
            keys=(anchor_key,),
            coefficients=(1.0,),
            rhs=0.0,
            sigma=math.sqrt(anchor_variance),
        )
    )
    return equations


def to_gaussian_factor_graph(equations: List[OrientationEquation]) -> gtsam.GaussianFactorGraph:
    """Convert scalar equations into a GTSAM linear factor graph.

    Args:
        equations: Weighted scalar equations.

    Returns:
        Gaussian factor graph with one Jacobian factor per equation.
    """
    linear_graph = gtsam.GaussianFactorGraph()
    for equation in equations:
        b = np.array([equation.rhs], dtype=np.float64)
        model = gtsam.noiseModel.Diagonal.Sigmas(np.array([equation.sigma], dtype=np.float64))
        A = [np.array([[coefficient]], dtype=np.float64) for coefficient in equation.coefficients]
        if len(equation.keys) == 1:
            factor = gtsam.JacobianFactor(equation.keys[0], A[0], b, model)
        elif len(equation.keys) == 2:
            factor = gtsam.JacobianFactor(equation.keys[0], A[0], equation.keys[1], A[1], b, model)
        else:
            raise ValueError(f"Equations must involve one or two keys, got {len(equation.keys)}")
        linear_graph.add(factor)
    return linear_graph


def solve_orientations(equations: List[OrientationEquation]) -> Dict[int, float]:
    """Solve the weighted least-squares orientation system.

    Args:
        equations: Weighted scalar equations.

    Returns:
        Orientation of every key that appears in an equation.

    Raises:
        SingularSystemError: If the solver cannot eliminate the system.
    """
    keys: Dict[int, None] = {}
    for equation in equations:
        for key in equation.keys:
            keys.setdefault(key, None)

    linear_graph = to_gaussian_factor_graph(equations)
    try:
        solution = linear_graph.optimize()
    except RuntimeError as exc:
        raise SingularSystemError(str(exc)) from exc

    logger.debug("Solved %d orientations from %d equations", len(keys), len(equations))
    return {key: float(solution.at(key)[0]) for key in keys}
