"""Exceptions raised by the orientation initialization pipeline."""


class LagoError(Exception):
    """Base class for all errors raised while initializing orientations."""


class InvalidMeasurementError(LagoError, ValueError):
    """A rotation measurement has no usable scalar angular standard deviation.

    Raised when the noise model of a relative rotation constraint is not
    diagonal (or has no angular component), so it cannot be turned into the
    weight of a scalar linear equation.
    """


class DisconnectedGraphError(LagoError):
    """The measurement graph does not form a single connected component."""


class MissingAnchorError(DisconnectedGraphError):
    """Some variable has no path to the root of the spanning tree."""


class SingularSystemError(LagoError, RuntimeError):
    """The linear orientation system could not be solved."""
