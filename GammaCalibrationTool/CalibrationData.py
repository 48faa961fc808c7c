### CalibrationData Class ###
# Date : 10/18/2026
# File : CalibrationData.py

from pydantic import BaseModel, ConfigDict, Field
import numpy as np
from typing import Any, List, Optional

from .CalibrationMethod import CalibrationMethod
from .ChannelCalibration import ChannelCalibration


class CalibrationData(BaseModel):
    """
    Base container for display calibration results and the measurements
    that produced them.

    Subclasses populate all fields during their own initialisation.
    This class imposes no calibration procedure; it keeps the input data
    co-located with the results for persistence and auditing by the caller.

    Attributes
    ----------
    gun_values : np.ndarray or None
        1-D array of the S gun values used.
    luminance : np.ndarray or None
        2-D array of luminance readings, shape ``(S, C)``.
    method : CalibrationMethod or None
        Normalization and model used for every channel.
    inverse_table : np.ndarray or None
        Normalized inverse gamma table, shape ``(256, C)``.  Row ``i`` is the
        desired luminance proportion ``i / 255``; values are the gun
        proportions to send to the display.
    fit_gamma : np.ndarray or None
        Fitted exponent per channel, shape ``(C,)``.
    fit_low_asymptote : np.ndarray or None
        Fitted lower asymptote per channel, shape ``(C,)``, only for the
        offset model.  ``None`` otherwise.
    channels : list of ChannelCalibration
        Per-channel results including the normalized data that was fitted.
    figure : matplotlib.figure.Figure or None
        Diagnostic figure, when one was requested.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    gun_values: Optional[np.ndarray] = None
    luminance: Optional[np.ndarray] = None
    method: Optional[CalibrationMethod] = None
    inverse_table: Optional[np.ndarray] = None
    fit_gamma: Optional[np.ndarray] = None
    fit_low_asymptote: Optional[np.ndarray] = None
    channels: List[ChannelCalibration] = Field(default_factory=list)
    figure: Optional[Any] = None

    @property
    def n_channels(self) -> int:
        if self.luminance is None:
            return 0
        return self.luminance.shape[1]
