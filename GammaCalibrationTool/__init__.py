# GammaCalibrationTool/__init__.py

from .Exceptions import (GammaCalibrationError, InvalidInputError,
                         NumericalError, FitConvergenceError)
from .CalibrationMethod import CalibrationMethod, NormalizationMethod, GammaModel
from .Normalization import normalize_channel
from .GammaFit import FitResult, fit_gamma, inverse_gamma_table, predict_luminance
from .ChannelCalibration import ChannelCalibration, calibrate_channel

from .CalibrationDataFactory import CalibrationDataFactory
from .CalibrationData import CalibrationData
from .GammaCalibration import GammaCalibration, make_norm_gamma_table
from .GammaCalibrationConfig import GammaCalibrationConfig
from .Measurement import LuminanceMeasurement, screen_levels
from .CalibrationPlot import plot_calibration

__all__ = [
    "GammaCalibrationError", "InvalidInputError", "NumericalError",
    "FitConvergenceError", "CalibrationMethod", "NormalizationMethod",
    "GammaModel", "normalize_channel", "FitResult", "fit_gamma",
    "inverse_gamma_table", "predict_luminance", "ChannelCalibration",
    "calibrate_channel", "CalibrationDataFactory", "CalibrationData",
    "GammaCalibration", "make_norm_gamma_table", "GammaCalibrationConfig",
    "LuminanceMeasurement", "screen_levels", "plot_calibration"
]
