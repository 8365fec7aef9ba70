# envgp/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Linear-algebra utilities shared across envgp.core modules.

This file isolates small, backend-agnostic helpers (built on top of
`envgp.num as gnp`) so they can be reused by the likelihood and the
posterior predictor without import cycles.
"""
import envgp.num as gnp
from envgp.config import get_jitter
from envgp.kernel import sqexp_covariance


def observation_covariance(x, covparam, noise_variance):
    """Covariance of noisy observations at x.

    .. math::
        C = K(x, x) + (\\sigma_y^2 + \\epsilon) I

    where :math:`\\epsilon` is the jitter of the configuration.

    Parameters
    ----------
    x : gnp.array, shape (n,)
    covparam : array_like, shape (2,)
        [log(ell), log(sigma)].
    noise_variance : float
        Observation noise variance sigma_y^2.

    Returns
    -------
    C : gnp.array, shape (n, n)
    """
    K = sqexp_covariance(x, None, covparam)
    n = K.shape[0]
    return K + (noise_variance + get_jitter()) * gnp.eye(n)


def symmetrize(S):
    """Return (S + Sᵀ) / 2."""
    return 0.5 * (S + S.T)


def prior_mean_value(y, prior_mean=None):
    """Constant prior mean: ``prior_mean`` if given, else the sample mean of y."""
    if prior_mean is None:
        return gnp.mean(y)
    return prior_mean
