### LuminanceMeasurement Class ###
# Date : 10/18/2026
# File : Measurement.py

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
import numpy as np

from .Exceptions import InvalidInputError


def screen_levels(n_steps: int) -> np.ndarray:
    """
    Evenly spaced gun values from 0 to 255.

    Halves round away from zero, so 9 steps give
    ``[0, 32, 64, 96, 128, 159, 191, 223, 255]``.

    Parameters
    ----------
    n_steps : int
        Number of luminance steps, at least 2.

    Returns
    -------
    np.ndarray
        Integer gun values, shape ``(n_steps,)``.
    """
    if n_steps < 2:
        raise InvalidInputError(f"Need at least 2 steps, got {n_steps}")
    levels = np.linspace(0, 255, n_steps)
    return np.floor(levels + 0.5).astype(int)


class LuminanceMeasurement(BaseModel):
    """
    Photometer readings from one or more repetitions of a calibration run.

    Attributes
    ----------
    screen_levels : np.ndarray
        Gun values presented, shape ``(S,)``.
    luminance : np.ndarray
        Readings in cd/m^2, shape ``(channels, S, repetitions)``.  Channels
        are 1 (gray), 3 (red, green, blue) or 4 (red, green, blue, gray).
        NaN marks a step where the photometer gave no reading.

    Examples
    --------
    >>> m = LuminanceMeasurement(screen_levels=screen_levels(9),
    ...                          luminance=np.ones((4, 9, 2)))
    >>> m.channel_luminance().shape
    (9, 3)
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    screen_levels: np.ndarray
    luminance: np.ndarray

    @field_validator("screen_levels", "luminance", mode="before")
    @classmethod
    def validate_array(cls, v):
        return np.asarray(v, dtype=float)

    @model_validator(mode="after")
    def check_shape(self):
        if self.luminance.ndim == 2:
            self.luminance = self.luminance[:, :, np.newaxis]
        if self.luminance.ndim != 3:
            raise ValueError("luminance must have shape (channels, steps, reps)")
        if self.luminance.shape[0] not in (1, 3, 4):
            raise ValueError("luminance must hold 1, 3 or 4 channels")
        if self.luminance.shape[1] != self.screen_levels.size:
            raise ValueError("luminance steps do not match screen_levels")
        return self

    @property
    def separate_colors(self) -> bool:
        return self.luminance.shape[0] > 1

    @property
    def mean_luminance(self) -> np.ndarray:
        """Average over repetitions, shape ``(channels, S)``."""
        # A missing reading in any repetition leaves that step missing
        return np.mean(self.luminance, axis=2)

    def channel_luminance(self) -> np.ndarray:
        """S x C luminance of the color channels (or gray if only one)."""
        if self.separate_colors:
            return self.mean_luminance[:3, :].T
        return self.mean_luminance.T

    def gray_luminance(self) -> np.ndarray:
        """S x 1 luminance of the gray channel."""
        if self.luminance.shape[0] == 3:
            raise InvalidInputError("No gray channel was measured")
        return self.mean_luminance[-1:, :].T

    def additivity(self):
        """
        Compare summed red, green and blue luminance with measured gray.

        Returns
        -------
        summed : np.ndarray
            R + G + B luminance per step.
        gray : np.ndarray
            Gray luminance per step.
        """
        if self.luminance.shape[0] != 4:
            raise InvalidInputError(
                "Additivity needs red, green, blue and gray measurements")
        mean = self.mean_luminance
        return np.sum(mean[:3, :], axis=0), mean[3, :]
