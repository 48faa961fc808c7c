### GammaCalibrationConfig Class ###
# Date : 10/18/2026
# File : GammaCalibrationConfig.py

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, Callable, Literal
import numpy as np

from .GammaFit import DEFAULT_MAX_EVALUATIONS


class GammaCalibrationConfig(BaseModel):
    """
    Configuration for a display gamma calibration.

    Pass an instance of this class to ``CalibrationDataFactory.create()``
    to produce a ``GammaCalibration`` object.

    Parameters
    ----------
    gun_values : array_like
        The S gun values sent to the display, in ``[0, 255]``, shared by
        every channel.  Best if the first is 0 and the last 255.
    luminance : array_like
        Measured luminance, shape ``(S, C)`` with ``C`` = 1 (grayscale) or
        3 (red, green, blue).  A 1-D vector is treated as one channel.
        NaN or ``None`` marks a missing reading.  The shape is checked when
        the calibration runs.
    method : {1, 2, 3}, optional
        Fitting method tag.

        * ``1``: normalize to the range, fit ``L = I ** gamma``.
        * ``2``: normalize to the maximum, fit ``L = I ** gamma``.
        * ``3``: normalize to the maximum, fit
          ``L = low_asymptote + I ** gamma``.

        Default is ``1``.
    missing_value : float or None, optional
        Luminance substituted for missing readings.  ``None`` drops them
        from the fit instead.  Default is ``None``.
    max_evaluations : int, optional
        Solver evaluation budget per channel.  Default is ``10000``.
    produce_plot : bool, optional
        Build the diagnostic figure after fitting.  Default is ``False``.
    progress_cb : callable or None, optional
        Callback for progress updates.  Called as
        ``progress_cb(phase, current, total)`` with *phase* ``'fitting'``.
        Default is ``None``.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    gun_values: np.ndarray
    luminance: np.ndarray

    method: Literal[1, 2, 3] = 1
    missing_value: Optional[float] = Field(default=None, ge=0)
    max_evaluations: int = Field(default=DEFAULT_MAX_EVALUATIONS, gt=0)
    produce_plot: bool = False

    progress_cb: Optional[Callable] = None

    @field_validator("gun_values", "luminance", mode="before")
    @classmethod
    def validate_array(cls, v):
        try:
            return np.asarray(v, dtype=float)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Expected numeric array data: {e}") from e
