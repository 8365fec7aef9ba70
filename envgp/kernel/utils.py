# envgp/kernel/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Input validation for 1D observation sets and kernel hyperparameters.

All checks run on concrete arrays, before any criterion is built, so
that the criteria themselves stay free of value-dependent branches.
"""
import math
import envgp.num as gnp
from envgp.errors import InvalidArgument


def as_locations(x, name="x"):
    """Convert ``x`` to a finite, nonempty 1D backend array.

    A single-column 2D array of shape (n, 1) is flattened.
    """
    try:
        x_ = gnp.asarray(x, dtype=gnp.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be a sequence of real numbers") from exc

    if x_.ndim == 2 and x_.shape[1] == 1:
        x_ = x_.reshape(-1)
    if x_.ndim != 1:
        raise InvalidArgument(
            f"{name} must be one-dimensional, got shape {tuple(x_.shape)}"
        )
    if x_.shape[0] == 0:
        raise InvalidArgument(f"{name} must not be empty")
    if not bool(gnp.all(gnp.isfinite(x_))):
        raise InvalidArgument(f"{name} contains non-finite values")
    return x_


def as_observations(x, y):
    """Validate an observation set (x, y) and return backend arrays."""
    x_ = as_locations(x, "x")
    y_ = as_locations(y, "y")
    if x_.shape[0] != y_.shape[0]:
        raise InvalidArgument(
            f"x and y must have the same length ({x_.shape[0]} != {y_.shape[0]})"
        )
    return x_, y_


def _as_real(value, name):
    if isinstance(value, bool):
        raise InvalidArgument(f"{name} must be a real number")
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{name} must be a real number") from exc
    if not math.isfinite(value):
        raise InvalidArgument(f"{name} must be finite, got {value}")
    return value


def check_noise_std(noise_std):
    """Return ``noise_std`` as a float; it must be finite and nonnegative."""
    noise_std = _as_real(noise_std, "noise_std")
    if noise_std < 0.0:
        raise InvalidArgument(f"noise_std must be nonnegative, got {noise_std}")
    return noise_std


def check_hyperparameters(log_length_scale, log_amplitude):
    """Return (log_length_scale, log_amplitude) as finite floats."""
    return (
        _as_real(log_length_scale, "log_length_scale"),
        _as_real(log_amplitude, "log_amplitude"),
    )


def check_prior_mean(prior_mean):
    if prior_mean is None:
        return None
    return _as_real(prior_mean, "prior_mean")
