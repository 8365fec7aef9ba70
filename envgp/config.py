# envgp/config.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import os
import logging

from .errors import InvalidArgument

_BACKENDS = ("numpy", "jax")

# Read version from VERSION file
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(os.path.abspath(_version_file), "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"


class _EnvGPConfig:
    def __init__(self):
        self.version = __version__
        self.backend = None
        self.seed = 1234
        # added to the diagonal of observed-observed covariance blocks
        self.jitter = 1e-10
        # iteration budget of the hyperparameter optimizer
        self.maxiter = 1000
        # logger lives in config
        self.logger = logging.getLogger("envgp")
        if not self.logger.handlers:
            h = logging.StreamHandler()
            h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            self.logger.addHandler(h)
        self.logger.setLevel(logging.INFO)

    def __str__(self):
        return (
            f"EnvGPConfig("
            f"version={self.version}, "
            f"backend={self.backend}, "
            f"seed={self.seed}, "
            f"jitter={self.jitter}, "
            f"maxiter={self.maxiter})"
        )

    def __repr__(self):
        return (
            f"<EnvGPConfig "
            f"version={self.version!r}, "
            f"backend={self.backend!r}, "
            f"seed={self.seed!r}, "
            f"jitter={self.jitter!r}, "
            f"maxiter={self.maxiter!r}>"
        )

    def update(self, **kwargs):
        for k, v in kwargs.items():
            if not hasattr(self, k):
                raise InvalidArgument(f"Unknown configuration entry '{k}'")
            if k in _CHECKS:
                v = _CHECKS[k](v)
            setattr(self, k, v)
        return self


_config = _EnvGPConfig()


def get_config():
    return _config


def _detect_backend():
    env = os.environ.get("ENVGP_BACKEND")
    if env in _BACKENDS:
        return env
    return "numpy"


def init_backend():
    """Idempotent. Detect and store backend, set env for downstream imports."""
    if _config.backend is None:
        backend = _detect_backend()
        _config.backend = backend
        os.environ["ENVGP_BACKEND"] = backend
    return _config.backend


def set_backend(backend: str):
    """Force a backend ('numpy'|'jax') before importing envgp.num."""
    if backend not in _BACKENDS:
        raise InvalidArgument("backend must be 'numpy' or 'jax'")
    _config.backend = backend
    os.environ["ENVGP_BACKEND"] = backend


def get_backend():
    """Return current backend; triggers detection if not set."""
    return _config.backend or init_backend()


def _check_jitter(jitter):
    jitter = float(jitter)
    if not (jitter >= 0.0 and jitter < float("inf")):
        raise InvalidArgument("jitter must be a finite nonnegative number")
    return jitter


def _check_maxiter(maxiter):
    if int(maxiter) < 1:
        raise InvalidArgument("maxiter must be a positive integer")
    return int(maxiter)


_CHECKS = {"jitter": _check_jitter, "maxiter": _check_maxiter}


def set_jitter(jitter: float):
    _config.jitter = _check_jitter(jitter)


def get_jitter():
    return _config.jitter


def set_maxiter(maxiter: int):
    _config.maxiter = _check_maxiter(maxiter)


def get_logger():
    return _config.logger


def set_log_level(level):
    _config.logger.setLevel(level)
