import logging
from typing import Sequence, Tuple

import numpy as np

from .CalibrationMethod import NormalizationMethod
from .Exceptions import InvalidInputError, NumericalError

logger = logging.getLogger(__name__)


def as_float_vector(values, name="values") -> np.ndarray:
    """
    Convert a sequence to a 1-D float array.  ``None`` entries become NaN,
    which marks a missing reading.
    """
    array = np.asarray(values, dtype=float)
    if array.ndim != 1:
        raise InvalidInputError(
            f"{name} must be one-dimensional, got shape {array.shape}")
    return array


def _rescale(values, valid, normalization, name):
    """Normalize *values* with its statistics taken over *valid* entries."""
    lowest = np.min(values[valid])
    highest = np.max(values[valid])

    # A flat response has no shape to fit under either convention
    if highest == lowest:
        raise NumericalError(
            f"Cannot normalize {name}: all values equal {highest}")

    if normalization is NormalizationMethod.RANGE:
        denominator = highest - lowest
        offset = lowest
    else:
        denominator = highest
        offset = 0.0

    if denominator == 0 or not np.isfinite(denominator):
        raise NumericalError(
            f"Cannot normalize {name}: {normalization.value} denominator "
            f"is {denominator}")

    return (values - offset) / denominator


def normalize_channel(
    gun_values: Sequence[float],
    luminance: Sequence[float],
    normalization: NormalizationMethod = NormalizationMethod.RANGE,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Normalize one channel's measurements onto [0, 1] and drop missing samples.

    Gun values are normalized over the full vector; luminance statistics
    ignore missing readings.  Missing positions are then removed from both
    vectors together, so ``norm_gun[k]`` is always the stimulus that produced
    ``norm_lum[k]``.

    Parameters
    ----------
    gun_values : sequence of float
        Gun values sent to the display, length S.
    luminance : sequence of float
        Measured luminance, length S.  NaN or ``None`` marks a missing
        reading.
    normalization : NormalizationMethod, optional
        ``RANGE`` (default) or ``MAX``.

    Returns
    -------
    norm_gun : np.ndarray
        Normalized gun values at the valid positions.
    norm_lum : np.ndarray
        Normalized luminance at the valid positions.

    Raises
    ------
    InvalidInputError
        If the vectors differ in length, luminance is negative or no reading
        is present.
    NumericalError
        If the range (``RANGE``) or maximum (``MAX``) of either vector is
        zero.

    Examples
    --------
    >>> normalize_channel([0, 128, 255], [1.0, float("nan"), 9.0])
    (array([0., 1.]), array([0., 1.]))
    """
    normalization = NormalizationMethod(normalization)
    gun = as_float_vector(gun_values, "gun_values")
    lum = as_float_vector(luminance, "luminance")

    if gun.shape != lum.shape:
        raise InvalidInputError(
            f"gun_values has {gun.size} samples but luminance has {lum.size}")
    if np.any(np.isnan(gun)):
        raise InvalidInputError("gun_values must not contain missing values")
    if np.any(gun < 0):
        raise InvalidInputError("gun_values must be non-negative")

    valid = ~np.isnan(lum)
    if not np.any(valid):
        raise InvalidInputError("luminance contains no valid readings")
    if np.any(lum[valid] < 0):
        raise InvalidInputError("luminance readings must be non-negative")

    norm_gun = _rescale(gun, np.ones_like(valid), normalization, "gun_values")
    norm_lum = _rescale(lum, valid, normalization, "luminance")

    dropped = int(np.count_nonzero(~valid))
    if dropped:
        logger.debug("Dropped %d missing luminance readings", dropped)

    return norm_gun[valid], norm_lum[valid]
