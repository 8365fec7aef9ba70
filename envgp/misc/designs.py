## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import numpy as np
import envgp.num as gnp
from envgp.errors import InvalidArgument


def _check_interval(n, lower, upper):
    if int(n) < 1:
        raise InvalidArgument(f"n must be a positive integer, got {n}")
    if not (np.isfinite(lower) and np.isfinite(upper) and lower <= upper):
        raise InvalidArgument(f"invalid interval [{lower}, {upper}]")
    return int(n)


def regulargrid(n, lower, upper):
    """
    Build a regular grid of n points on the interval [lower, upper].

    Parameters
    ----------
    n : int
        Number of points.
    lower, upper : float
        Bounds of the interval, both included.

    Returns
    -------
    numpy.ndarray, shape (n,)
    """
    n = _check_interval(n, lower, upper)
    return np.linspace(lower, upper, n)


def randunif(n, lower, upper, sort=True):
    """
    Generate a random uniform sample on the interval [lower, upper].

    The draw uses the global generator of the numerical backend, see
    ``envgp.num.set_seed``.

    Parameters
    ----------
    n : int
        Number of points in the sample.
    lower, upper : float
        Bounds of the interval.
    sort : bool, optional
        Return the points in increasing order, default is True.

    Returns
    -------
    numpy.ndarray, shape (n,)
    """
    n = _check_interval(n, lower, upper)
    sample = lower + (upper - lower) * gnp.to_np(gnp.rand(n))
    if sort:
        sample = np.sort(sample)
    return sample
