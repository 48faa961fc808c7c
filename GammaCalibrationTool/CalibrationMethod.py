### CalibrationMethod Class ###
# Date : 10/18/2026
# File : CalibrationMethod.py

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from .Exceptions import InvalidInputError


class NormalizationMethod(str, Enum):
    """
    Convention used to rescale gun values and luminance onto [0, 1].

    RANGE
        Subtract the minimum, then divide by the range.  Only the shape of
        the response across the measured range matters.
    MAX
        Divide by the maximum, expressing the response as a proportion of
        peak luminance.
    """
    RANGE = "range"
    MAX = "max"


class GammaModel(str, Enum):
    """
    Forward model fitted to the normalized data.

    POWER
        ``L = I ** gamma``
    POWER_WITH_OFFSET
        ``L = low_asymptote + I ** gamma``
    """
    POWER = "power"
    POWER_WITH_OFFSET = "power_with_offset"

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        if self is GammaModel.POWER:
            return ("gamma",)
        return ("low_asymptote", "gamma")

    @property
    def initial_parameters(self) -> Tuple[float, ...]:
        # Ordered as parameter_names
        if self is GammaModel.POWER:
            return (2.0,)
        return (0.01, 1.0)


class CalibrationMethod(BaseModel):
    """
    A normalization convention paired with a fit model.

    The historical numeric tags couple the two axes:

    ===  ===========  ==================
    tag  normalize    model
    ===  ===========  ==================
    1    RANGE        POWER
    2    MAX          POWER
    3    MAX          POWER_WITH_OFFSET
    ===  ===========  ==================

    Tag 1 is the recommended default: the goal is only to linearize the
    variation across the whole range, so the absolute floor is irrelevant.

    Examples
    --------
    >>> CalibrationMethod.from_tag(3).model
    <GammaModel.POWER_WITH_OFFSET: 'power_with_offset'>
    """
    model_config = ConfigDict(frozen=True)

    normalization: NormalizationMethod = NormalizationMethod.RANGE
    model: GammaModel = GammaModel.POWER

    @classmethod
    def from_tag(cls, tag: int) -> "CalibrationMethod":
        """
        Build the method corresponding to a numeric tag.

        Raises
        ------
        InvalidInputError
            If *tag* is not 1, 2 or 3.
        """
        if tag == 1:
            return cls(normalization=NormalizationMethod.RANGE,
                       model=GammaModel.POWER)
        if tag == 2:
            return cls(normalization=NormalizationMethod.MAX,
                       model=GammaModel.POWER)
        if tag == 3:
            return cls(normalization=NormalizationMethod.MAX,
                       model=GammaModel.POWER_WITH_OFFSET)
        raise InvalidInputError(f"Unsupported calibration method: {tag}")

    @property
    def tag(self) -> int | None:
        """Numeric tag of this combination, or ``None`` if it has none."""
        for candidate in (1, 2, 3):
            if CalibrationMethod.from_tag(candidate) == self:
                return candidate
        return None
