# envgp/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Marginal log-likelihood of a GP with squared-exponential covariance.

The prior mean is a constant, frozen before optimization: the sample
mean of the observations unless a value is given explicitly.
"""
import envgp.num as gnp
from envgp.kernel.utils import (
    as_observations,
    check_hyperparameters,
    check_noise_std,
    check_prior_mean,
)
from .linalg import observation_covariance, prior_mean_value


def negative_log_likelihood(covparam, x, y, noise_variance, prior_mean=None):
    """Computes the negative log-likelihood of noisy observations.

    .. math::
        L = \\frac{1}{2}\\left(n \\log 2\\pi + \\log\\det C
            + (y - \\mu)^T C^{-1} (y - \\mu)\\right)

    with :math:`C = K(x, x) + \\sigma_y^2 I` (plus jitter).

    Parameters
    ----------
    covparam : gnp.array, shape (2,)
        [log(ell), log(sigma)].
    x : gnp.array, shape (n,)
        Observation locations.
    y : gnp.array, shape (n,)
        Observed values.
    noise_variance : float
        sigma_y^2.
    prior_mean : float, optional
        Constant prior mean. Defaults to the sample mean of y.

    Returns
    -------
    nll : scalar
        Negative log-likelihood.

    Raises
    ------
    envgp.errors.NumericalError
        If C is not positive definite or has non-finite entries.
    """
    C = observation_covariance(x, covparam, noise_variance)
    n = C.shape[0]
    centered_y = y - prior_mean_value(y, prior_mean)

    Cinv_y, L = gnp.cholesky_solve(C, centered_y)
    norm2 = gnp.einsum("i..., i...", centered_y, Cinv_y)
    ldetC = 2.0 * gnp.sum(gnp.log(gnp.diag(L)))
    nll = 0.5 * (n * gnp.log(2.0 * gnp.pi) + ldetC + norm2)
    return nll.reshape(())


def negative_log_likelihood_with_noise(param, x, y, prior_mean=None):
    """Same as :func:`negative_log_likelihood` with the noise as a parameter.

    ``param`` is [log(ell), log(sigma), log(sigma_y)].
    """
    noise_variance = gnp.exp(2.0 * param[2])
    return negative_log_likelihood(param[:2], x, y, noise_variance, prior_mean)


def log_marginal_likelihood(
    x, y, log_length_scale, log_amplitude, noise_std, prior_mean=None
):
    """Marginal log-likelihood log p(y | log ell, log sigma).

    Parameters
    ----------
    x, y : array_like, shape (n,)
        Observation set.
    log_length_scale, log_amplitude : float
        Kernel hyperparameters.
    noise_std : float
        Observation noise standard deviation sigma_y >= 0.
    prior_mean : float, optional
        Constant prior mean. Defaults to the sample mean of y.

    Returns
    -------
    float
    """
    x_, y_ = as_observations(x, y)
    covparam = gnp.asarray(check_hyperparameters(log_length_scale, log_amplitude))
    noise_std = check_noise_std(noise_std)
    prior_mean = check_prior_mean(prior_mean)

    nll = negative_log_likelihood(covparam, x_, y_, noise_std**2, prior_mean)
    return -gnp.to_scalar(nll)
