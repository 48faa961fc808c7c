### GammaFit ###
# Date : 10/18/2026
# File : GammaFit.py

import logging
import warnings
from typing import Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field
from scipy.optimize import OptimizeWarning, curve_fit

from .CalibrationMethod import GammaModel
from .Exceptions import FitConvergenceError, InvalidInputError

logger = logging.getLogger(__name__)

TABLE_SIZE = 256
DEFAULT_MAX_EVALUATIONS = 10000

# Range of gamma values seen on CRT and LCD displays
PLAUSIBLE_GAMMA = (1.0, 5.0)


class FitResult(BaseModel):
    """
    Best-fitting power-law parameters for one channel.

    Attributes
    ----------
    model : GammaModel
        Model that was fitted.
    gamma : float
        Fitted exponent.  Always finite and positive.
    low_asymptote : float or None
        Fitted additive offset for ``POWER_WITH_OFFSET``, ``None`` for
        ``POWER``.  Reported for diagnostics only; the inverse table never
        uses it.
    """
    model_config = ConfigDict(frozen=True)

    model: GammaModel
    gamma: float = Field(..., gt=0)
    low_asymptote: Optional[float] = None


def _power(x, gamma):
    return np.power(x, gamma)


def _power_with_offset(x, low_asymptote, gamma):
    return low_asymptote + np.power(x, gamma)


def _model_function(model: GammaModel):
    if model is GammaModel.POWER:
        return _power
    return _power_with_offset


def _parameter_bounds(model: GammaModel):
    # gamma is kept non-negative so 0 ** gamma stays finite
    if model is GammaModel.POWER:
        return ([0.0], [np.inf])
    return ([-np.inf, 0.0], [np.inf, np.inf])


def fit_gamma(norm_gun: Sequence[float],
              norm_lum: Sequence[float],
              model: GammaModel = GammaModel.POWER,
              max_evaluations: int = DEFAULT_MAX_EVALUATIONS) -> FitResult:
    """
    Fit a power-law response to normalized measurements.

    Nonlinear least squares (``scipy.optimize.curve_fit``, trust region
    reflective) starting from gamma = 2 for ``POWER`` and from
    (low_asymptote, gamma) = (0.01, 1) for ``POWER_WITH_OFFSET``.

    Parameters
    ----------
    norm_gun : sequence of float
        Normalized gun values with missing samples already removed.
    norm_lum : sequence of float
        Normalized luminance at the same positions.
    model : GammaModel, optional
        Forward model to fit.  Default is ``POWER``.
    max_evaluations : int, optional
        Upper bound on model evaluations before the fit is abandoned.

    Returns
    -------
    FitResult

    Raises
    ------
    InvalidInputError
        If the vectors differ in length, contain missing values, or hold
        fewer samples than the model has parameters.
    FitConvergenceError
        If the solver stops without converging or yields a non-finite or
        non-positive gamma.
    """
    model = GammaModel(model)
    x = np.asarray(norm_gun, dtype=float)
    y = np.asarray(norm_lum, dtype=float)

    if x.shape != y.shape or x.ndim != 1:
        raise InvalidInputError(
            f"Normalized vectors must be 1-D and equal length, got "
            f"{x.shape} and {y.shape}")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        raise InvalidInputError("Normalized data must not contain missing values")

    n_params = len(model.parameter_names)
    if x.size < n_params:
        raise InvalidInputError(
            f"{model.value} model needs at least {n_params} samples, "
            f"got {x.size}")

    try:
        with warnings.catch_warnings():
            # Covariance is not used, so an inestimable one is irrelevant
            warnings.simplefilter("ignore", OptimizeWarning)
            params, _ = curve_fit(_model_function(model),
                                  x,
                                  y,
                                  p0=model.initial_parameters,
                                  bounds=_parameter_bounds(model),
                                  method="trf",
                                  max_nfev=max_evaluations)
    except RuntimeError as e:
        raise FitConvergenceError(
            f"{model.value} fit did not converge within {max_evaluations} "
            f"evaluations") from e

    values = dict(zip(model.parameter_names, (float(p) for p in params)))
    gamma = values["gamma"]
    if not all(np.isfinite(v) for v in values.values()) or gamma <= 0:
        raise FitConvergenceError(
            f"{model.value} fit produced unusable parameters: {values}")

    if not PLAUSIBLE_GAMMA[0] <= gamma <= PLAUSIBLE_GAMMA[1]:
        logger.warning("Fitted gamma %.3f is outside the usual range %s",
                       gamma, PLAUSIBLE_GAMMA)

    return FitResult(model=model, **values)


def predict_luminance(fit: FitResult, x) -> np.ndarray:
    """Evaluate the fitted forward model at normalized gun values *x*."""
    x = np.asarray(x, dtype=float)
    if fit.model is GammaModel.POWER:
        return _power(x, fit.gamma)
    return _power_with_offset(x, fit.low_asymptote, fit.gamma)


def inverse_gamma_table(gamma: float, size: int = TABLE_SIZE) -> np.ndarray:
    """
    Evaluate the inverse power law on an evenly spaced grid over [0, 1].

    Entry ``i`` is the normalized gun value that produces normalized
    luminance ``i / (size - 1)`` under ``L = I ** gamma``.  Any lower
    asymptote is ignored: the table spans the full output range.

    Parameters
    ----------
    gamma : float
        Fitted exponent, must be positive.
    size : int, optional
        Number of table entries.  Default is 256.

    Returns
    -------
    table : np.ndarray
        1-D array of length *size*, non-decreasing, with ``table[0] == 0``
        and ``table[-1] == 1``.
    """
    if not np.isfinite(gamma) or gamma <= 0:
        raise InvalidInputError(f"gamma must be finite and positive, got {gamma}")
    if size < 2:
        raise InvalidInputError(f"Table needs at least 2 entries, got {size}")

    steps = np.linspace(0.0, 1.0, size)
    return np.power(steps, 1.0 / gamma)
