# envgp/num/jax_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""JAX numerical backend for envgp.

Same API as the NumPy backend; gradients of selection criteria are
obtained by automatic differentiation instead of finite differences.
"""

import os
from typing import Any, Callable

from envgp.config import get_config, init_backend, get_logger
from envgp.errors import NumericalError
from .shared import cholesky_failure

ArrayLike = Any
CriterionCallable = Callable[[ArrayLike, ArrayLike, ArrayLike], ArrayLike]

_envgp_backend_: str = init_backend()
_config = get_config()
_logger = get_logger()
_logger.info("Using backend: %s", _envgp_backend_)


# -----------------------------------------------------
#
#                      JAX
#
# -----------------------------------------------------

os.environ.setdefault("JAX_PLATFORM_NAME", "cpu")
os.environ.setdefault("XLA_PYTHON_CLIENT_PREALLOCATE", "false")

import numpy
import jax

# set double precision for floats
jax.config.update("jax_enable_x64", True)

ndarray = jax.numpy.ndarray
from jax.numpy import (
    any,
    all,
    isnan,
    isfinite,
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
from jax.numpy.linalg import svd
from jax.numpy import pi, float64
from jax.scipy.linalg import solve_triangular

_jnp_dtype = jax.numpy.float64

# ..................................................

def array(x, dtype=None):
    if dtype is not None:
        return jax.numpy.array(x, dtype=dtype)
    out = jax.numpy.array(x)
    if jax.numpy.issubdtype(out.dtype, jax.numpy.number):
        return out.astype(_jnp_dtype)
    return out

def asarray(x, dtype=None):
    if dtype is not None:
        return jax.numpy.asarray(x, dtype=dtype)
    if isinstance(x, (int, float)):
        return jax.numpy.array([x], dtype=_jnp_dtype)
    out = jax.numpy.asarray(x)
    if out.size == 0 or jax.numpy.issubdtype(out.dtype, jax.numpy.number):
        return out.astype(_jnp_dtype)
    return out

def ones(shape, dtype=None):
    return jax.numpy.ones(shape, dtype=_jnp_dtype if dtype is None else dtype)

def eye(n, m=None, k=0, dtype=None):
    return jax.numpy.eye(n, M=m, k=k, dtype=_jnp_dtype if dtype is None else dtype)

def to_np(x):
    # jax arrays convert to read-only views
    return numpy.array(x)

def to_scalar(x):
    return numpy.asarray(x).item()

# ..................................................

def grad(f: Callable[[ArrayLike], ArrayLike]) -> Callable[[ArrayLike], ArrayLike]:
    """Return the gradient of a scalar function, by automatic differentiation."""
    return jax.grad(f)

class DifferentiableSelectionCriterion:
    """Wrap ``crit(p, x, z)`` into a value/gradient pair for SciPy.

    SciPy works on NumPy float64 arrays: values and gradients are
    converted back on the way out.
    """

    def __init__(self, crit: CriterionCallable, x: ArrayLike, z: ArrayLike):
        self.crit = crit
        self.x, self.z = x, z
        self._grad = jax.grad(lambda p: self.crit(p, self.x, self.z))

    def __call__(self, p: ArrayLike) -> float:
        return self.evaluate(p)

    def evaluate(self, p: ArrayLike) -> float:
        return float(self.crit(asarray(p), self.x, self.z))

    def gradient(self, p: ArrayLike) -> ArrayLike:
        return numpy.array(self._grad(asarray(p)), dtype=numpy.float64)

# ..................................................

def distance(x: ArrayLike, y: ArrayLike) -> ArrayLike:
    """Pairwise Euclidean distances between 1D location vectors."""
    return abs(x.reshape(-1, 1) - y.reshape(1, -1))

# ..................................................

def _is_true(predicate) -> bool:
    try:
        return bool(predicate)
    except jax.errors.ConcretizationTypeError:
        # traced under jit: the concrete evaluation at the same point checks it
        return False

def cholesky(A):
    if _is_true(~isfinite(A).all()):
        raise NumericalError("Covariance matrix has non-finite entries.")
    # jax reports a failed factorization with NaNs instead of raising
    L = jax.numpy.linalg.cholesky(A)
    if _is_true(isnan(L).any()):
        raise cholesky_failure()
    return L

def cholesky_solve(A, b):
    L = cholesky(A)
    y = solve_triangular(L, b, lower=True)
    x = solve_triangular(L.T, y, lower=False)
    return x, L

# ..................................................

# One global key:
_jax_key = jax.random.PRNGKey(_config.seed)

def _update_key():
    global _jax_key
    _jax_key, subkey = jax.random.split(_jax_key)
    return subkey

def set_seed(seed: int) -> None:
    """Set the global JAX key seed."""
    global _jax_key
    _config.seed = seed
    _jax_key = jax.random.PRNGKey(seed)

def rand(*shape: int) -> ArrayLike:
    subkey = _update_key()
    return jax.random.uniform(subkey, shape=shape, dtype=_jnp_dtype)

def randn(*shape: int) -> ArrayLike:
    subkey = _update_key()
    return jax.random.normal(subkey, shape=shape, dtype=_jnp_dtype)
