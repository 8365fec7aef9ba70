# envgp/core/parameter_selection.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Hyperparameter selection by maximum marginal likelihood.
"""

import time
import numpy as np
from scipy.optimize import minimize
import envgp.num as gnp

from envgp.config import get_config, get_logger
from envgp.errors import InvalidArgument, NumericalError
from envgp.kernel.utils import (
    as_observations,
    check_hyperparameters,
    check_noise_std,
    check_prior_mean,
)
from .likelihood import negative_log_likelihood, negative_log_likelihood_with_noise
from .posterior import Hyperparameters

METHODS = ("L-BFGS-B", "SLSQP", "Nelder-Mead")

# SciPy exit statuses meaning "ran out of iterations or evaluations"
_BUDGET_EXHAUSTED = {
    "L-BFGS-B": (1,),
    "SLSQP": (9,),
    "Nelder-Mead": (1, 2),
}


# ---------------------- criterion + gradient maker --------------------
def make_selection_criterion_with_gradient(selection_criterion, x, y):
    """
    Build value and gradient callables of a selection criterion.

    Parameters
    ----------
    selection_criterion : callable
        Criterion ``f(param, x, y) -> scalar`` to be minimized.
    x, y : array_like
        Observation set, fixed during the optimization.

    Returns
    -------
    evaluate : callable
        ``evaluate(p) -> float``.
    gradient : callable
        ``gradient(p) -> array``, by finite differences on the NumPy
        backend and by automatic differentiation on the JAX backend.
    """
    x_ = gnp.asarray(x)
    y_ = gnp.asarray(y)
    crit = gnp.DifferentiableSelectionCriterion(selection_criterion, x_, y_)
    return crit.evaluate, crit.gradient


# ------------------------------ optimizer -----------------------------
def autoselect_parameters(
    p0,
    criterion,
    gradient,
    bounds=None,
    silent=True,
    info=False,
    method="L-BFGS-B",
    maxiter=None,
    method_options=None,
):
    """
    Minimize a scalar selection criterion with SciPy.

    Parameters
    ----------
    p0 : array_like
        Initial parameter vector.
    criterion : callable
        Objective function ``criterion(p) -> scalar``.
    gradient : callable
        Gradient function ``gradient(p) -> array_like``. Not used by
        Nelder-Mead.
    bounds : sequence of tuple, optional
        Bounds passed to SciPy. Unbounded by default.
    silent : bool, default=True
        If False, enable solver output.
    info : bool, default=False
        If True, return the full SciPy result object.
    method : {"L-BFGS-B", "SLSQP", "Nelder-Mead"}, default="L-BFGS-B"
        Optimization method.
    maxiter : int, optional
        Iteration budget. Defaults to ``config.maxiter``.
    method_options : dict, optional
        Additional options passed to SciPy ``minimize``.

    Returns
    -------
    p_opt : numpy.ndarray
        Best parameter vector found.
    info_ret : scipy.optimize.OptimizeResult or None
        Optimization diagnostics if ``info=True``, else None.

    Raises
    ------
    envgp.errors.NumericalError
        If the iteration budget is exhausted, if the optimizer ends on a
        non-finite point, or if the criterion raises it at any evaluated
        point.

    Notes
    -----
    The full optimization history (parameter vectors and criterion
    values) is recorded. If the final SciPy result is worse than the
    best visited point, the best seen one is returned instead and
    ``best_value_returned`` is set to False in the result object.

    Added fields in the returned ``OptimizeResult`` (when ``info=True``):
    ``history_params``, ``history_criterion``, ``initial_params``,
    ``final_params``, ``bounds``, ``selection_criterion``, ``total_time``,
    and ``best_value_returned``.
    """
    if method not in METHODS:
        raise InvalidArgument(
            f"Unknown optimization method {method!r}. Supported: {', '.join(METHODS)}."
        )
    if method_options is None:
        method_options = {}
    if maxiter is None:
        maxiter = get_config().maxiter
    if int(maxiter) < 1:
        raise InvalidArgument("maxiter must be a positive integer")
    maxiter = int(maxiter)
    tic = time.time()

    p0 = np.asarray(p0, dtype=np.float64)

    history_params, history_criterion = [], []
    best_params, best_criterion = None, float("inf")

    def record(p, J):
        nonlocal best_params, best_criterion
        history_params.append(p.copy())
        history_criterion.append(J)
        if J < best_criterion:
            best_criterion, best_params = J, p.copy()

    def criterion_with_history(p):
        J = criterion(p)
        record(p, J)
        return J

    options = {} if silent else {"disp": True}
    if method == "L-BFGS-B":
        options.update(
            dict(
                maxcor=20,
                ftol=1e-10,
                gtol=1e-6,
                maxfun=15000,
                maxiter=maxiter,
                maxls=40,
            )
        )
    elif method == "SLSQP":
        options.update(dict(ftol=1e-10, maxiter=maxiter))
    else:
        options.update(
            dict(
                xatol=1e-6,
                fatol=1e-8,
                maxiter=maxiter,
                maxfev=maxiter * (p0.shape[0] + 2),
            )
        )
    options.update(method_options)

    r = minimize(
        criterion_with_history,
        p0,
        method=method,
        jac=None if method == "Nelder-Mead" else gradient,
        bounds=bounds,
        options=options,
    )

    if not r.success:
        if r.status in _BUDGET_EXHAUSTED[method] or r.nit >= options["maxiter"]:
            raise NumericalError(
                f"{method} did not converge within {options['maxiter']} "
                f"iterations: {r.message}"
            )
        get_logger().warning(
            "%s stopped without success (status %s): %s", method, r.status, r.message
        )

    # ensure returning best seen
    if best_params is not None and r.fun > best_criterion:
        r.x, r.fun, r.best_value_returned = best_params, best_criterion, False
    else:
        r.best_value_returned = True

    if not np.all(np.isfinite(r.x)) or not np.isfinite(r.fun):
        raise NumericalError(f"{method} ended on a non-finite point {r.x}")

    r.history_params = history_params
    r.history_criterion = history_criterion
    r.initial_params = p0
    r.final_params = r.x
    r.bounds = bounds
    r.selection_criterion = criterion
    r.total_time = time.time() - tic

    return (r.x, r) if info else (r.x, None)


# -------------------- high-level parameter selection procedures  ------------
def _check_initial_guess(initial_guess):
    try:
        n = len(initial_guess)
    except TypeError as exc:
        raise InvalidArgument("initial_guess must be a pair of real numbers") from exc
    if n != 2:
        raise InvalidArgument(
            f"initial_guess must be a pair (log_length_scale, log_amplitude), "
            f"got {n} values"
        )
    return check_hyperparameters(*initial_guess)


def select_parameters(
    x,
    y,
    noise_std,
    initial_guess=(0.0, 0.0),
    fit_noise=False,
    prior_mean=None,
    info=False,
    verbosity=0,
    *,
    bounds=None,
    method="L-BFGS-B",
    maxiter=None,
    method_options=None,
):
    """
    Select kernel hyperparameters by maximizing the marginal likelihood.

    Parameters
    ----------
    x, y : array_like, shape (n,)
        Observation set.
    noise_std : float
        Observation noise standard deviation. With ``fit_noise=True``,
        it is the starting point of the noise search and must be > 0.
    initial_guess : pair of float, default (0.0, 0.0)
        Starting point (log_length_scale, log_amplitude).
    fit_noise : bool, default False
        If True, optimize (log ell, log sigma, log sigma_y) jointly.
    prior_mean : float, optional
        Constant prior mean. Defaults to the sample mean of y.
    info : bool, default False
        If True, return optimization diagnostics.
    verbosity : int, default 0
        0: debug-level log messages, 1: info-level messages, 2: also
        SciPy solver output.
    bounds : sequence of tuple, optional
        Bounds forwarded to ``autoselect_parameters``.
    method : str, default "L-BFGS-B"
        "L-BFGS-B", "SLSQP" or "Nelder-Mead".
    maxiter : int, optional
        Iteration budget. Defaults to ``config.maxiter``.
    method_options : dict, optional
        Extra options passed to SciPy ``minimize``.

    Returns
    -------
    param : numpy.ndarray, shape (2,) or (3,)
        Optimized [log ell, log sigma] (and log sigma_y if ``fit_noise``).
    info_ret : scipy.optimize.OptimizeResult | None
        Diagnostics if ``info=True``, else None.
    """
    tic = time.time()
    x_, y_ = as_observations(x, y)
    noise_std = check_noise_std(noise_std)
    covparam0 = _check_initial_guess(initial_guess)
    prior_mean = check_prior_mean(prior_mean)

    if fit_noise:
        if noise_std <= 0.0:
            raise InvalidArgument("noise_std must be positive when fit_noise=True")
        param0 = np.array([*covparam0, np.log(noise_std)])

        def criterion(param, x, y):
            return negative_log_likelihood_with_noise(param, x, y, prior_mean)

    else:
        param0 = np.array(covparam0)
        noise_variance = noise_std**2

        def criterion(covparam, x, y):
            return negative_log_likelihood(covparam, x, y, noise_variance, prior_mean)

    crit, crit_grad = make_selection_criterion_with_gradient(criterion, x_, y_)

    logger = get_logger()
    log = logger.info if verbosity >= 1 else logger.debug
    log(
        "Parameter selection by maximum likelihood (%s, n=%d, fit_noise=%s)...",
        method,
        x_.shape[0],
        fit_noise,
    )

    param_opt, info_ret = autoselect_parameters(
        param0,
        crit,
        crit_grad,
        bounds=bounds,
        silent=not (verbosity == 2),
        info=True,
        method=method,
        maxiter=maxiter,
        method_options=method_options,
    )

    log(
        "done: param=%s, nll=%.6g, nit=%d, nfev=%d",
        np.array2string(param_opt, precision=4),
        info_ret.fun,
        info_ret.nit,
        info_ret.nfev,
    )

    if info:
        info_ret["param0"] = param0
        info_ret["param"] = param_opt
        info_ret["time"] = time.time() - tic
        return param_opt, info_ret
    return param_opt, None


def fit_hyperparameters(
    x, y, noise_std, initial_guess=(0.0, 0.0), method="L-BFGS-B", maxiter=None
):
    """Maximum-likelihood kernel hyperparameters for a fixed noise level.

    Single deterministic local search from ``initial_guess``; no restarts.

    Returns
    -------
    Hyperparameters

    Raises
    ------
    envgp.errors.InvalidArgument
        Malformed inputs or initial guess.
    envgp.errors.NumericalError
        Non positive definite covariance at an evaluated point, or
        optimizer budget exhausted.
    """
    param, _ = select_parameters(
        x, y, noise_std, initial_guess, method=method, maxiter=maxiter
    )
    return Hyperparameters(float(param[0]), float(param[1]))
