"""LAGO - Planar pose graph orientation initialization.

A Python library that computes a globally consistent initial orientation for
every pose of a planar pose graph by linear approximation, correcting the
angular wraparound of loop closures without nonlinear optimization.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
