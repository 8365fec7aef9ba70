## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""
Baseline predictors to compare GP regression against.

Piecewise linear interpolation, extrapolated linearly beyond the data,
and two weighted averages of the observed values (IDW and KNN), with
weights proportional to a negative power of the distance to the
prediction point, normalized to sum to one at each prediction point.
"""
import numpy as np
from scipy.interpolate import interp1d
from scipy.spatial.distance import cdist

from envgp.errors import InvalidArgument
from envgp.kernel.utils import as_locations, as_observations
import envgp.num as gnp


def _check_power(power):
    if not (np.isfinite(power) and power > 0.0):
        raise InvalidArgument(f"power must be a positive number, got {power}")


def _distances(x, xt):
    x = gnp.to_np(x).reshape(-1, 1)
    xt = gnp.to_np(xt).reshape(-1, 1)
    return cdist(x, xt)


def _weights(dist, power, mask=None):
    """Normalized inverse distance weights, shape (n, m).

    A prediction point that coincides with observation points gets
    equal weights on those points and zero elsewhere.
    """
    if mask is None:
        mask = np.ones(dist.shape, dtype=bool)
    exact = (dist == 0.0) & mask
    with np.errstate(divide="ignore"):
        w = np.where(mask, dist ** (-power), 0.0)
    hit = exact.any(axis=0)
    w[:, hit] = exact[:, hit]
    return w / w.sum(axis=0, keepdims=True)


def idw(x, y, xt, power=2.0):
    """
    Inverse distance weighting predictor.

    .. math::
        \\hat y(x') = \\sum_n w_n y_n, \\quad
        w_n \\propto |x_n - x'|^{-p}

    Parameters
    ----------
    x, y : array_like, shape (n,)
        Observation set.
    xt : array_like, shape (m,)
        Prediction points.
    power : float, optional
        Exponent p of the distance, default is 2.

    Returns
    -------
    numpy.ndarray, shape (m,)
    """
    x_, y_ = as_observations(x, y)
    xt_ = as_locations(xt, "xt")
    _check_power(power)

    w = _weights(_distances(x_, xt_), power)
    return w.T @ gnp.to_np(y_)


def knn(x, y, xt, k, power=2.0):
    """
    K nearest neighbors predictor.

    Inverse distance weighting restricted, at each prediction point, to
    the k observations with the largest weights. With k = n, this is
    :func:`idw`.

    Parameters
    ----------
    x, y : array_like, shape (n,)
        Observation set.
    xt : array_like, shape (m,)
        Prediction points.
    k : int
        Number of neighbors, 1 <= k <= n.
    power : float, optional
        Exponent of the distance, default is 2.

    Returns
    -------
    numpy.ndarray, shape (m,)
    """
    x_, y_ = as_observations(x, y)
    xt_ = as_locations(xt, "xt")
    _check_power(power)
    n = x_.shape[0]
    if isinstance(k, bool) or int(k) != k or not 1 <= k <= n:
        raise InvalidArgument(f"k must be an integer in [1, {n}], got {k}")

    dist = _distances(x_, xt_)
    # ties are broken by observation order
    nearest = np.argsort(dist, axis=0, kind="stable")[: int(k)]
    mask = np.zeros(dist.shape, dtype=bool)
    np.put_along_axis(mask, nearest, True, axis=0)

    w = _weights(dist, power, mask)
    return w.T @ gnp.to_np(y_)


def linear(x, y, xt):
    """
    Piecewise linear interpolation with linear extrapolation.

    Outside the observed range, the first (resp. last) segment is
    extended. Values observed several times at the same location are
    averaged.

    Parameters
    ----------
    x, y : array_like, shape (n,)
        Observation set, with at least two distinct locations.
    xt : array_like, shape (m,)
        Prediction points.

    Returns
    -------
    numpy.ndarray, shape (m,)
    """
    x_, y_ = as_observations(x, y)
    xt_ = as_locations(xt, "xt")

    xu, inverse = np.unique(gnp.to_np(x_), return_inverse=True)
    if xu.shape[0] < 2:
        raise InvalidArgument("linear interpolation needs two distinct locations")
    counts = np.bincount(inverse)
    yu = np.bincount(inverse, weights=gnp.to_np(y_)) / counts

    f = interp1d(xu, yu, kind="linear", assume_sorted=True, fill_value="extrapolate")
    return f(gnp.to_np(xt_))
