# envgp/core/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian Process model class.
"""
import envgp.num as gnp
from envgp.errors import InvalidArgument
from envgp.kernel import sqexp_covariance
from envgp.kernel.utils import (
    as_locations,
    check_hyperparameters,
    check_noise_std,
    check_prior_mean,
)

from . import likelihood
from . import parameter_selection
from . import posterior
from .posterior import Hyperparameters


class Model:
    """1D Gaussian Process (GP) regression model with squared-exponential
    covariance and a constant prior mean.

    Attributes
    ----------
    noise_std : float
        Standard deviation of the observation noise sigma_y.
    hyperparameters : Hyperparameters or None
        (log_length_scale, log_amplitude). None until set or fitted.
    prior_mean : float or None
        Constant prior mean. If None, the sample mean of the
        observations is used each time the model is conditioned.

    Public API (methods)
    --------------------
    covariance
        Prior covariance K(x, y).
    log_marginal_likelihood
        Marginal log-likelihood of an observation set.
    fit
        Maximum-likelihood hyperparameter selection.
    predict
        Posterior predictive distribution at query points.

    Examples
    --------
    >>> import envgp
    >>> x = [0.0, 1.0, 2.0, 3.0, 5.0]
    >>> y = [0.0, 1.2, 2.5, 4.2, 4.3]
    >>> model, _ = envgp.Model(noise_std=0.1).fit(x, y)
    >>> post = model.predict(x, y, [0.5, 4.0])
    >>> lower, upper = post.bands()
    """

    def __init__(self, noise_std, hyperparameters=None, prior_mean=None):
        self.noise_std = check_noise_std(noise_std)
        if hyperparameters is not None:
            hyperparameters = Hyperparameters(*check_hyperparameters(*hyperparameters))
        self.hyperparameters = hyperparameters
        self.prior_mean = check_prior_mean(prior_mean)

    def __repr__(self):
        output = str("<envgp.core.Model object> " + hex(id(self)))
        return output

    def __str__(self):
        return (
            f"GP Model:\n"
            f"  Prior Mean: {'sample mean' if self.prior_mean is None else self.prior_mean}\n"
            f"  Covariance Function: {sqexp_covariance.__name__}\n"
            f"  Hyperparameters: {self.hyperparameters}\n"
            f"  Noise Std: {self.noise_std}"
        )

    @property
    def covparam(self):
        return gnp.asarray(self._require_hyperparameters())

    def _require_hyperparameters(self):
        if self.hyperparameters is None:
            raise InvalidArgument(
                "Model hyperparameters are not set. Call fit() or pass them "
                "to the constructor."
            )
        return self.hyperparameters

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def covariance(self, x, y=None, pairwise=False):
        """Prior covariance between locations x and y (y = x if None).

        Returns
        -------
        numpy.ndarray, shape (n, m), or (n,) if ``pairwise``.
        """
        x_ = as_locations(x, "x")
        y_ = None if y is None else as_locations(y, "y")
        if pairwise and y_ is not None and y_.shape[0] != x_.shape[0]:
            raise InvalidArgument("pairwise covariance needs x and y of equal length")
        return gnp.to_np(sqexp_covariance(x_, y_, self.covparam, pairwise))

    def log_marginal_likelihood(self, x, y):
        """Marginal log-likelihood of (x, y) under the current hyperparameters."""
        hp = self._require_hyperparameters()
        return likelihood.log_marginal_likelihood(
            x, y, hp.log_length_scale, hp.log_amplitude, self.noise_std, self.prior_mean
        )

    def fit(
        self,
        x,
        y,
        initial_guess=(0.0, 0.0),
        fit_noise=False,
        method="L-BFGS-B",
        info=False,
        verbosity=0,
        **kwargs,
    ):
        """Select the hyperparameters by maximum marginal likelihood.

        Parameters
        ----------
        x, y : array_like, shape (n,)
            Observation set.
        initial_guess : pair of float, default (0.0, 0.0)
            Starting (log_length_scale, log_amplitude).
        fit_noise : bool, default False
            If True, the noise standard deviation is also estimated,
            starting from the current ``noise_std``.
        method : str, default "L-BFGS-B"
            SciPy optimization method.
        info : bool, default False
            If True, return the optimization diagnostics.
        verbosity : int, default 0
        **kwargs
            Forwarded to
            :func:`envgp.core.parameter_selection.select_parameters`
            (``bounds``, ``maxiter``, ``method_options``).

        Returns
        -------
        model : Model
            The model itself, with updated hyperparameters.
        info_ret : scipy.optimize.OptimizeResult | None
        """
        param, info_ret = parameter_selection.select_parameters(
            x,
            y,
            self.noise_std,
            initial_guess,
            fit_noise=fit_noise,
            prior_mean=self.prior_mean,
            info=info,
            verbosity=verbosity,
            method=method,
            **kwargs,
        )
        self.hyperparameters = Hyperparameters(float(param[0]), float(param[1]))
        if fit_noise:
            self.noise_std = float(gnp.exp(param[2]))
        return self, info_ret

    def predict(self, x, y, xt):
        """Posterior predictive distribution at xt given the data (x, y).

        Returns
        -------
        PosteriorPredictive
        """
        hp = self._require_hyperparameters()
        return posterior.predict(
            x,
            y,
            xt,
            hp.log_length_scale,
            hp.log_amplitude,
            self.noise_std,
            self.prior_mean,
        )
