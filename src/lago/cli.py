"""Command line entry point: initialize the orientations of a g2o file."""

import logging
import sys

import gtsam
import numpy as np

from .initialization import LagoParams, initialize_lago
from .pose_graph import PoseGraph, create_noise_model_diagonal
from .utils.config import parse_args
from .utils.conversions import gtsam_pose2_to_numpy, wrap_angle
from .utils.io import VERTEX_TAG, load_g2o, save_g2o

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv=None) -> int:
    """Run the initializer on a g2o file.

    Args:
        argv: Command line arguments; defaults to ``sys.argv[1:]``.

    Returns:
        Process exit code.
    """
    args = parse_args(argv)
    _configure_logging(args.verbose, args.debug)

    graph, initial = load_g2o(args.input)
    if initial.size() == 0:
        logger.error("No %s vertices found in %s", VERTEX_TAG, args.input)
        return 1

    # g2o files carry no prior; fix the first vertex at the origin
    first_key = min(initial.keys())
    prior_noise = create_noise_model_diagonal(np.full(3, args.prior_sigma))
    anchored = PoseGraph(graph.edges)
    anchored.add_prior_pose2(first_key, gtsam.Pose2(), prior_noise)

    params = LagoParams(
        anchor_variance=args.anchor_variance,
        use_odometric_path=args.odometric,
    )
    result = initialize_lago(anchored, initial, params)

    if args.output:
        save_g2o(args.output, graph, result)
        logger.info("Wrote %d poses to %s", result.size(), args.output)
    else:
        for key in sorted(result.keys()):
            position, theta = gtsam_pose2_to_numpy(result.atPose2(key))
            print(f"{key} {position[0]:.6f} {position[1]:.6f} {wrap_angle(theta):.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
