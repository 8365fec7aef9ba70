# envgp/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance kernel of envgp and input validation.

Modules
-------
sqexp
    Squared-exponential kernel on the real line.
utils
    Validation helpers for observation sets and hyperparameters.

Public API
-----------
- Squared-exponential kernel:
    sqexp_kernel, sqexp_covariance, evaluate_kernel
"""

from .sqexp import sqexp_kernel, sqexp_covariance, evaluate_kernel

__all__ = [
    "sqexp_kernel",
    "sqexp_covariance",
    "evaluate_kernel",
]
