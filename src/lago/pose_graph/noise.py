"""Noise model helpers for pose graph constraints."""

import gtsam
import numpy as np
import numpy.typing as npt


def create_noise_model_diagonal(
    sigmas: npt.NDArray[np.float64],
) -> gtsam.noiseModel.Diagonal:
    """Create a diagonal noise model.

    Args:
        sigmas: Standard deviations for each dimension (x, y, theta for Pose2).

    Returns:
        GTSAM diagonal noise model.
    """
    return gtsam.noiseModel.Diagonal.Sigmas(np.asarray(sigmas, dtype=np.float64))


def create_noise_model_gaussian(
    covariance: npt.NDArray[np.float64],
) -> gtsam.noiseModel.Gaussian:
    """Create a Gaussian noise model from covariance.

    Args:
        covariance: Covariance matrix (3x3 for Pose2).

    Returns:
        GTSAM Gaussian noise model.
    """
    return gtsam.noiseModel.Gaussian.Covariance(np.asarray(covariance, dtype=np.float64))


def create_noise_model_isotropic(dim: int, sigma: float) -> gtsam.noiseModel.Isotropic:
    """Create an isotropic noise model.

    Args:
        dim: Dimension of the noise model.
        sigma: Standard deviation (same for all dimensions).

    Returns:
        GTSAM isotropic noise model.
    """
    return gtsam.noiseModel.Isotropic.Sigma(dim, sigma)

