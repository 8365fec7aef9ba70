# envgp/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exceptions raised by envgp.

InvalidArgument
    Malformed or empty inputs (mismatched lengths, empty sequences,
    negative noise standard deviation, ...). Also a ``ValueError``.
NumericalError
    A covariance matrix could not be factorized, or the hyperparameter
    optimizer ran out of its iteration budget. Also a ``RuntimeError``.
"""


class EnvGPError(Exception):
    """Base class of all envgp errors."""


class InvalidArgument(EnvGPError, ValueError):
    pass


class NumericalError(EnvGPError, RuntimeError):
    pass
