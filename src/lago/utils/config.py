import argparse


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Initialize the orientations of a planar pose graph with LAGO"
    )

    # Input / output
    parser.add_argument("input", type=str, help="Path to a planar g2o file")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Where to write the initialized g2o file (prints poses when omitted)",
    )

    # Anchoring
    parser.add_argument(
        "--prior-sigma",
        type=float,
        default=1e-3,
        help="Standard deviation of the prior added on the first vertex",
    )
    parser.add_argument(
        "--anchor-variance",
        type=float,
        default=1e-8,
        help="Variance of the prior pinning the anchor orientation to zero",
    )

    # Spanning tree
    parser.add_argument(
        "--odometric",
        action="store_true",
        help="Use the odometry chain (consecutive ids) as spanning tree",
    )

    # Logging
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug mode with verbose logging"
    )

    return parser.parse_args(argv)
