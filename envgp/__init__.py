# envgp/__init__.py

from . import config
from . import errors
from . import num
from . import kernel
from . import core
from . import misc
from .errors import EnvGPError, InvalidArgument, NumericalError
from .kernel import evaluate_kernel
from .core import (
    Model,
    Hyperparameters,
    PosteriorPredictive,
    predict,
    log_marginal_likelihood,
    fit_hyperparameters,
)

__all__ = [
    "num",
    "kernel",
    "core",
    "misc",
    "Model",
    "Hyperparameters",
    "PosteriorPredictive",
    "evaluate_kernel",
    "fit_hyperparameters",
    "predict",
    "log_marginal_likelihood",
    "EnvGPError",
    "InvalidArgument",
    "NumericalError",
    "__version__",
]

__version__ = config.__version__
