# envgp/kernel/sqexp.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import envgp.num as gnp
from .utils import as_locations, check_hyperparameters


def sqexp_kernel(h):
    """Squared-exponential kernel profile.

    .. math::
        k(h) = \\exp(-h^2 / 2)

    Parameters
    ----------
    h : gnp.array
        Distances, already divided by the length scale.

    Returns
    -------
    gnp.array
        Kernel values, same shape as ``h``.
    """
    return gnp.exp(-0.5 * h**2)


def sqexp_covariance(x, y, covparam, pairwise=False):
    """Squared-exponential covariance between 1D locations.

    .. math::
        K_{ij} = \\sigma^2 \\exp\\left(-\\frac{(x_i - y_j)^2}{2 \\ell^2}\\right)

    Parameters
    ----------
    x : gnp.array, shape (n,)
    y : gnp.array, shape (m,) or None
        If None, ``y = x``.
    covparam : array_like, shape (2,)
        [log(ell), log(sigma)].
    pairwise : bool
        If True, return the vector k(x_i, y_i) instead of the full matrix.

    Returns
    -------
    gnp.array
        Shape (n, m), or (n,) if ``pairwise``.
    """
    sigma2 = gnp.exp(2.0 * covparam[1])
    invrho = gnp.exp(-covparam[0])

    xs = invrho * x
    if pairwise:
        if y is None:
            return sigma2 * gnp.ones(x.shape[0])
        return sigma2 * sqexp_kernel(gnp.abs(xs - invrho * y))

    ys = xs if y is None else invrho * y
    return sigma2 * sqexp_kernel(gnp.distance(xs, ys))


def evaluate_kernel(a, b, log_length_scale, log_amplitude):
    """Covariance matrix K(a, b) of the squared-exponential kernel.

    Parameters
    ----------
    a : array_like, shape (M,)
    b : array_like, shape (N,)
        May be the same sequence as ``a``.
    log_length_scale, log_amplitude : float
        log(ell) and log(sigma).

    Returns
    -------
    numpy.ndarray, shape (M, N)

    Raises
    ------
    envgp.errors.InvalidArgument
        If ``a`` or ``b`` is empty, not 1D or not finite, or if a
        hyperparameter is not a finite real number.
    """
    a_ = as_locations(a, "a")
    b_ = as_locations(b, "b")
    covparam = gnp.asarray(check_hyperparameters(log_length_scale, log_amplitude))
    return gnp.to_np(sqexp_covariance(a_, b_, covparam))
