# envgp/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the envgp package.

This subpackage contains the marginal likelihood, its maximization
with respect to the kernel hyperparameters, the posterior predictive
distribution, and supporting linear algebra utilities.

Public API
----------
Model : class
    GP regression model façade combining all core routines.
Hyperparameters, PosteriorPredictive : named tuples
predict, log_marginal_likelihood, fit_hyperparameters : functions
"""

from .posterior import Hyperparameters, PosteriorPredictive, predict
from .likelihood import log_marginal_likelihood, negative_log_likelihood
from .parameter_selection import fit_hyperparameters, select_parameters
from .model import Model

__all__ = [
    "Model",
    "Hyperparameters",
    "PosteriorPredictive",
    "predict",
    "log_marginal_likelihood",
    "negative_log_likelihood",
    "fit_hyperparameters",
    "select_parameters",
]
