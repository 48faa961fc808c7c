import logging
from typing import Optional, Sequence, Union

import numpy as np
from pydantic import BaseModel, ConfigDict

from .CalibrationMethod import CalibrationMethod
from .GammaFit import (DEFAULT_MAX_EVALUATIONS, TABLE_SIZE, FitResult,
                       fit_gamma, inverse_gamma_table)
from .Normalization import as_float_vector, normalize_channel

logger = logging.getLogger(__name__)


class ChannelCalibration(BaseModel):
    """
    Calibration result for a single display channel.

    Attributes
    ----------
    fit : FitResult
        Fitted model parameters.
    table : np.ndarray
        Inverse lookup table column, shape ``(256,)``.
    norm_gun : np.ndarray
        Normalized gun values the fit was computed on.
    norm_lum : np.ndarray
        Normalized luminance the fit was computed on.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    fit: FitResult
    table: np.ndarray
    norm_gun: np.ndarray
    norm_lum: np.ndarray


def calibrate_channel(
    gun_values: Sequence[float],
    luminance: Sequence[float],
    method: Union[int, CalibrationMethod] = 1,
    missing_value: Optional[float] = None,
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS,
) -> ChannelCalibration:
    """
    Normalize, fit and tabulate one channel.

    Depends only on its arguments, so channels can be processed in any
    order or in parallel.

    Parameters
    ----------
    gun_values : sequence of float
        Gun values, length S.
    luminance : sequence of float
        Luminance readings for this channel, length S.  NaN or ``None``
        marks a missing reading.
    method : int or CalibrationMethod, optional
        Numeric tag (1, 2, 3) or an explicit method.  Default is 1.
    missing_value : float or None, optional
        If given, missing readings are replaced by this luminance instead
        of being dropped.
    max_evaluations : int, optional
        Solver evaluation budget.

    Returns
    -------
    ChannelCalibration

    Raises
    ------
    InvalidInputError, NumericalError, FitConvergenceError
        Propagated from normalization and fitting.
    """
    if not isinstance(method, CalibrationMethod):
        method = CalibrationMethod.from_tag(method)

    lum = as_float_vector(luminance, "luminance")
    if missing_value is not None:
        lum = np.where(np.isnan(lum), float(missing_value), lum)

    norm_gun, norm_lum = normalize_channel(gun_values, lum,
                                           method.normalization)
    fit = fit_gamma(norm_gun, norm_lum, method.model, max_evaluations)
    table = inverse_gamma_table(fit.gamma, TABLE_SIZE)

    logger.debug("Fitted %s model on %d samples: gamma=%.4f low_asymptote=%s",
                 method.model.value, norm_gun.size, fit.gamma,
                 fit.low_asymptote)

    return ChannelCalibration(fit=fit,
                              table=table,
                              norm_gun=norm_gun,
                              norm_lum=norm_lum)
