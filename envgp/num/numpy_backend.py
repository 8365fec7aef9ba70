# envgp/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for envgp.

This module defines the NumPy implementation of the envgp.num API.
"""

from typing import Any, Callable
from envgp.config import get_config, init_backend, get_logger
from envgp.errors import NumericalError
from .shared import derivative_finite_diff, cholesky_failure

ArrayLike = Any
CriterionCallable = Callable[[ArrayLike, ArrayLike, ArrayLike], ArrayLike]

_envgp_backend_: str = init_backend()
_config = get_config()
_logger = get_logger()
_logger.info("Using backend: %s", _envgp_backend_)


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy.typing import NDArray

_np_dtype = numpy.float64

ndarray = NDArray[numpy.floating]
from numpy import (
    copy,
    any,
    all,
    isfinite,
    zeros_like,
    diag,
    abs,
    sqrt,
    exp,
    log,
    sum,
    mean,
    maximum,
    einsum,
    matmul,
)
from numpy.linalg import LinAlgError, svd
from numpy import pi, float64
from scipy.linalg import solve_triangular
from scipy.spatial.distance import cdist

# ..................................................

def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.number):
        return out.astype(_np_dtype, copy=False)
    return out

def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.number):
            return x.astype(_np_dtype, copy=False)
        return x
    elif isinstance(x, (int, float)):
        return numpy.array([x], dtype=_np_dtype)
    else:
        out = numpy.asarray(x)
        if out.size == 0 or numpy.issubdtype(out.dtype, numpy.number):
            return out.astype(_np_dtype, copy=False)
        return out

def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)

def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)

def to_np(x):
    return x

def to_scalar(x):
    return numpy.asarray(x).item()

# ..................................................

def grad(f: Callable[[ArrayLike], ArrayLike]) -> Callable[[ArrayLike], ArrayLike]:
    """
    Return function that computes gradient of scalar f via finite differences.

    Uses 5-point central difference formula for accuracy.
    Suitable for low to moderate dimensional problems.

    Parameters
    ----------
    f : callable
        Scalar-valued function taking an array and returning a scalar.

    Returns
    -------
    callable
        Function grad_f(x) that computes nabla f(x) using finite differences.
    """

    def grad_f(x: ArrayLike) -> ArrayLike:
        x_arr = asarray(x)
        grad_vec = zeros_like(x_arr)
        h = 1e-5  # step size for finite differences

        for i in range(x_arr.shape[0]):

            def f_i(xi_scalar):
                x_copy = copy(x_arr)
                x_copy[i] = xi_scalar
                return f(x_copy)

            # derivative_finite_diff expects scalar input
            grad_vec[i] = derivative_finite_diff(f_i, float(x_arr[i]), h)

        return grad_vec

    return grad_f

class DifferentiableSelectionCriterion:
    """Wrap ``crit(p, x, z)`` into a value/gradient pair for SciPy.

    The gradient is computed by finite differences.
    """

    def __init__(self, crit: CriterionCallable, x: ArrayLike, z: ArrayLike):
        self.crit = crit
        self.x, self.z = x, z
        self._grad = grad(lambda p: self.crit(p, self.x, self.z))

    def __call__(self, p: ArrayLike) -> float:
        return self.evaluate(p)

    def evaluate(self, p: ArrayLike) -> float:
        return float(self.crit(asarray(p), self.x, self.z))

    def gradient(self, p: ArrayLike) -> ArrayLike:
        return self._grad(asarray(p))

# ..................................................

def distance(x: ArrayLike, y: ArrayLike) -> ArrayLike:
    """Pairwise Euclidean distances between 1D location vectors."""
    return cdist(x.reshape(-1, 1), y.reshape(-1, 1))

# ..................................................

def cholesky(A):
    if not isfinite(A).all():
        raise NumericalError("Covariance matrix has non-finite entries.")
    try:
        L = numpy.linalg.cholesky(A)
    except LinAlgError as exc:
        raise cholesky_failure() from exc
    return L

def cholesky_solve(A, b):
    L = cholesky(A)
    y = solve_triangular(L, b, lower=True)
    x = solve_triangular(L.T, y, lower=False)
    return x, L

# ..................................................

# Build one global RNG (or let the user set the seed somewhere):
_np_rng = numpy.random.default_rng(seed=_config.seed)

def set_seed(seed: int) -> None:
    """Set the global NumPy generator seed."""
    global _np_rng
    _config.seed = seed
    _np_rng = numpy.random.default_rng(seed=seed)

def rand(*shape: int) -> ArrayLike:
    return _np_rng.random(shape, dtype=_np_dtype)

def randn(*shape: int) -> ArrayLike:
    return _np_rng.normal(loc=0, scale=1, size=shape).astype(_np_dtype, copy=False)
