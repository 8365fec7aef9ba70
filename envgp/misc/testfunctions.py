# coding: utf-8
## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import math
import numpy as np
import envgp.num as gnp
from envgp.errors import InvalidArgument


def two_sines(t):
    """
    Computes the response of the TwoSines function at t.

    The TwoSines function is a sum of two periodic components with
    periods 7.2 and 2.5:

       TwoSines(t) = sin(2 pi t / 7.2 + 0.9) + sin(2 pi t / 2.5 + 1.3)

    Parameters
    ----------
    t : numpy.ndarray
        Input array of shape (n,)

    Returns
    -------
    numpy.ndarray
        Output array of shape (n,)
    """
    t = np.asarray(t, dtype=float)
    z = np.sin(2 * math.pi * t / 7.2 + 0.9) + np.sin(2 * math.pi * t / 2.5 + 1.3)
    return z.reshape([-1])


def noisy_observations(f, x, noise_std):
    """
    Observe f at x with additive Gaussian noise N(0, noise_std^2).

    The noise is drawn from the global generator of the numerical
    backend.

    Parameters
    ----------
    f : callable
        Function returning an array of shape (n,) from x.
    x : numpy.ndarray, shape (n,)
    noise_std : float

    Returns
    -------
    numpy.ndarray, shape (n,)
    """
    if not (np.isfinite(noise_std) and noise_std >= 0.0):
        raise InvalidArgument(f"noise_std must be finite and nonnegative, got {noise_std}")
    z = np.asarray(f(x), dtype=float).reshape(-1)
    return z + noise_std * gnp.to_np(gnp.randn(z.shape[0]))
