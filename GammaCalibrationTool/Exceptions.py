### Calibration Exceptions ###
# Date : 10/18/2026
# File : Exceptions.py


class GammaCalibrationError(Exception):
    """Base class for all gamma calibration failures."""


class InvalidInputError(GammaCalibrationError, ValueError):
    """
    Raised when measurement data cannot be calibrated as supplied.

    Covers a channel count other than 1 or 3, gun values and luminance of
    different lengths, non-monotonic gun values, negative luminance, too few
    valid samples for the model, and unknown method tags.
    """


class NumericalError(GammaCalibrationError, ArithmeticError):
    """
    Raised when a normalization denominator is zero, e.g. every luminance
    reading of a channel is identical.
    """


class FitConvergenceError(GammaCalibrationError, RuntimeError):
    """
    Raised when the least squares solver does not converge within its
    evaluation budget or returns non-finite parameters.
    """
