# envgp/core/posterior.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Posterior predictive distribution of a GP given noisy observations.

Functions
---------
posterior_mean_and_covariance(x, y, xt, covparam, noise_variance, prior_mean=None)
    Gaussian conditioning on backend arrays.

predict(x, y, x_query, log_length_scale, log_amplitude, noise_std, prior_mean=None)
    Validated entry point returning a `PosteriorPredictive`.

The predictive covariance is that of the latent function: the
observation noise is not added back at the query points.
"""
import warnings
from typing import NamedTuple

import numpy as np
import envgp.num as gnp
from envgp.config import get_jitter
from envgp.errors import InvalidArgument
from envgp.kernel import sqexp_covariance
from envgp.kernel.utils import (
    as_locations,
    as_observations,
    check_hyperparameters,
    check_noise_std,
    check_prior_mean,
)
from .linalg import observation_covariance, prior_mean_value, symmetrize


class Hyperparameters(NamedTuple):
    """Kernel hyperparameters, on the log scale."""

    log_length_scale: float
    log_amplitude: float

    @property
    def length_scale(self):
        return float(np.exp(self.log_length_scale))

    @property
    def amplitude(self):
        return float(np.exp(self.log_amplitude))


class PosteriorPredictive(NamedTuple):
    """Posterior predictive distribution N(mean, covariance) at query points.

    Attributes
    ----------
    mean : numpy.ndarray, shape (M,)
    covariance : numpy.ndarray, shape (M, M)
        Symmetric; the observation noise is not included.
    """

    mean: np.ndarray
    covariance: np.ndarray

    @property
    def variance(self):
        """Diagonal of the covariance, with negative round-off set to zero."""
        return np.maximum(np.diag(self.covariance), 0.0)

    @property
    def std(self):
        return np.sqrt(self.variance)

    def bands(self, k=2.0):
        """Return (mean - k std, mean + k std)."""
        if not k >= 0.0:
            raise InvalidArgument(f"k must be nonnegative, got {k}")
        std = self.std
        return self.mean - k * std, self.mean + k * std

    def sample_paths(self, nb_paths, method="svd"):
        """Draw joint samples from the posterior predictive distribution.

        Parameters
        ----------
        nb_paths : int
            Number of sample paths.
        method : {'svd', 'chol'}, optional (default: 'svd')
            Square root of the covariance used to color white noise.

        Returns
        -------
        numpy.ndarray, shape (M, nb_paths)

        Notes
        -----
        - 'svd' : S = U diag(s) Uᵀ, draw as (U sqrt(diag(s)) Uᵀ) @ N(0, I).
        - 'chol': S + eps I = C Cᵀ, draw as C @ N(0, I). Posterior
          covariances are often close to singular, hence the jitter.
        """
        if int(nb_paths) < 1:
            raise InvalidArgument("nb_paths must be a positive integer")
        S = gnp.asarray(self.covariance)
        m = S.shape[0]

        if method == "chol":
            C = gnp.cholesky(S + get_jitter() * gnp.eye(m))
        elif method == "svd":
            U, s, Vt = gnp.svd(S, full_matrices=True, hermitian=True)
            C = gnp.matmul(U * gnp.sqrt(gnp.maximum(s, 0.0)), Vt)
        else:
            raise InvalidArgument("method must be 'chol' or 'svd'")

        zsim = gnp.matmul(C, gnp.randn(m, int(nb_paths)))
        return gnp.to_np(zsim) + self.mean.reshape(-1, 1)


def posterior_mean_and_covariance(
    x, y, xt, covparam, noise_variance, prior_mean=None
):
    """Condition the GP on noisy observations.

    Parameters
    ----------
    x : gnp.array, shape (n,)
        Observation points.
    y : gnp.array, shape (n,)
        Observed values.
    xt : gnp.array, shape (m,)
        Prediction points.
    covparam : gnp.array, shape (2,)
        [log(ell), log(sigma)].
    noise_variance : float
        sigma_y^2.
    prior_mean : float, optional
        Constant prior mean. Defaults to the sample mean of y.

    Returns
    -------
    zt_posterior_mean : gnp.array, shape (m,)
    zt_posterior_cov : gnp.array, shape (m, m)

    Notes
    -----
    With A = K(xt, xt), B = K(xt, x) and C = K(x, x) + sigma_y^2 I, the
    system C Z = Bᵀ is solved once through a Cholesky factor of C; then
    m = mu + Zᵀ (y - mu) and S = A - B Z.
    """
    Cii = observation_covariance(x, covparam, noise_variance)
    Kit = sqexp_covariance(x, xt, covparam)

    lambda_t, _ = gnp.cholesky_solve(Cii, Kit)

    mu = prior_mean_value(y, prior_mean)
    zt_posterior_mean = mu + gnp.matmul(lambda_t.T, y - mu)

    Ktt = sqexp_covariance(xt, None, covparam)
    zt_posterior_cov = symmetrize(Ktt - gnp.matmul(Kit.T, lambda_t))
    return zt_posterior_mean, zt_posterior_cov


def predict(
    x, y, x_query, log_length_scale, log_amplitude, noise_std, prior_mean=None
):
    """Posterior predictive distribution at ``x_query``.

    Parameters
    ----------
    x, y : array_like, shape (N,)
        Observation set.
    x_query : array_like, shape (M,)
        Query locations; M and N are independent.
    log_length_scale, log_amplitude : float
        Kernel hyperparameters.
    noise_std : float
        Observation noise standard deviation sigma_y >= 0.
    prior_mean : float, optional
        Constant prior mean. Defaults to the sample mean of y.

    Returns
    -------
    PosteriorPredictive

    Raises
    ------
    envgp.errors.InvalidArgument
        Malformed or empty inputs.
    envgp.errors.NumericalError
        If K(x, x) + sigma_y^2 I cannot be factorized.
    """
    x_, y_ = as_observations(x, y)
    xt_ = as_locations(x_query, "x_query")
    covparam = gnp.asarray(check_hyperparameters(log_length_scale, log_amplitude))
    noise_std = check_noise_std(noise_std)
    prior_mean = check_prior_mean(prior_mean)

    zt_posterior_mean, zt_posterior_cov = posterior_mean_and_covariance(
        x_, y_, xt_, covparam, noise_std**2, prior_mean
    )

    if gnp.any(gnp.diag(zt_posterior_cov) < 0.0):
        warnings.warn(
            "Negative variances detected. Consider using jitter.",
            RuntimeWarning,
        )
    return PosteriorPredictive(
        gnp.to_np(zt_posterior_mean), gnp.to_np(zt_posterior_cov)
    )
