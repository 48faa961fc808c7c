### GammaCalibration Class ###
# Date : 10/18/2026
# File : GammaCalibration.py

import logging

import numpy as np

from .CalibrationData import CalibrationData
from .CalibrationMethod import CalibrationMethod, GammaModel
from .ChannelCalibration import calibrate_channel
from .Exceptions import GammaCalibrationError, InvalidInputError
from .GammaCalibrationConfig import GammaCalibrationConfig
from .GammaFit import DEFAULT_MAX_EVALUATIONS, TABLE_SIZE

logger = logging.getLogger(__name__)


def check_measurements(gun_values, luminance):
    """
    Validate the shapes of calibration measurements.

    Parameters
    ----------
    gun_values : np.ndarray
        Gun values, expected 1-D of length S in ``[0, 255]`` and
        non-decreasing.
    luminance : np.ndarray
        Luminance, shape ``(S,)`` or ``(S, C)`` with ``C`` in ``{1, 3}``.

    Returns
    -------
    gun_values, luminance : np.ndarray
        Float arrays, with luminance always 2-D.

    Raises
    ------
    InvalidInputError
        If any of the above does not hold.
    """
    gun_values = np.asarray(gun_values, dtype=float)
    luminance = np.asarray(luminance, dtype=float)

    if gun_values.ndim != 1:
        raise InvalidInputError(
            f"gun_values must be one-dimensional, got shape {gun_values.shape}")
    if luminance.ndim == 1:
        luminance = luminance[:, np.newaxis]
    if luminance.ndim != 2 or luminance.shape[1] not in (1, 3):
        raise InvalidInputError(
            "Data should be in a matrix of #_steps x #_color channels "
            f"(RGB = 3, or grayscale = 1), got shape {luminance.shape}")
    if luminance.shape[0] != gun_values.size:
        raise InvalidInputError(
            f"{gun_values.size} gun values but {luminance.shape[0]} "
            "rows of luminance")
    if np.any(~np.isfinite(gun_values)):
        raise InvalidInputError("gun_values must all be finite")
    if np.any(gun_values < 0) or np.any(gun_values > 255):
        raise InvalidInputError("gun_values must lie in [0, 255]")
    if np.any(np.diff(gun_values) < 0):
        raise InvalidInputError("gun_values must be non-decreasing")

    return gun_values, luminance


class GammaCalibration(CalibrationData):
    """
    Fits a gamma function per display channel and builds the normalized
    inverse lookup table that linearizes the display.

    Channels are calibrated independently, in index order.  A failure in
    any channel is raised to the caller, naming the channel; no default
    gamma is ever substituted.
    """

    def __init__(self, config: GammaCalibrationConfig):
        """
        Validates the measurements, fits every channel and assembles the
        table and parameter vectors.
        """
        CalibrationData.__init__(self)
        self.gun_values, self.luminance = check_measurements(
            config.gun_values, config.luminance)
        self.method = CalibrationMethod.from_tag(config.method)

        self.generate_table(config.missing_value, config.max_evaluations,
                            config.progress_cb)

        if config.produce_plot:
            self.figure = self.plot()

    def generate_table(self,
                       missing_value=None,
                       max_evaluations=DEFAULT_MAX_EVALUATIONS,
                       progress_cb=None):
        """
        Runs the per-channel fit and fills ``inverse_table``, ``fit_gamma``
        and ``fit_low_asymptote``.

        Parameters
        ----------
        missing_value : float or None
            Replacement for missing readings, or ``None`` to drop them.
        max_evaluations : int
            Solver evaluation budget per channel.
        progress_cb : callable, optional
            Callback function for GUI progress updates.
        """
        n_chans = self.n_channels

        # Preallocate output, each channel writes its own column
        inverse_table = np.zeros((TABLE_SIZE, n_chans))
        fit_gamma = np.zeros(n_chans)
        fit_low_asymptote = np.zeros(n_chans)
        channels = []

        if progress_cb:
            progress_cb(phase="fitting", current=0, total=n_chans)

        for channel in range(n_chans):
            try:
                result = calibrate_channel(self.gun_values,
                                           self.luminance[:, channel],
                                           self.method,
                                           missing_value=missing_value,
                                           max_evaluations=max_evaluations)
            except GammaCalibrationError as e:
                raise type(e)(f"Channel {channel}: {e}") from e

            inverse_table[:, channel] = result.table
            fit_gamma[channel] = result.fit.gamma
            if result.fit.low_asymptote is not None:
                fit_low_asymptote[channel] = result.fit.low_asymptote
            channels.append(result)

            if progress_cb:
                progress_cb(phase="fitting",
                            current=channel + 1,
                            total=n_chans)

        self.inverse_table = inverse_table
        self.fit_gamma = fit_gamma
        self.fit_low_asymptote = (fit_low_asymptote
                                  if self.method.model is GammaModel.POWER_WITH_OFFSET
                                  else None)
        self.channels = channels

        logger.info("Calibrated %d channel(s) with method %s: gamma=%s",
                    n_chans, self.method.tag, np.round(fit_gamma, 3).tolist())

    def rgb_table(self):
        """
        Return the table with three columns, replicating a grayscale column
        so it can be loaded as a red, green and blue gamma table.
        """
        if self.inverse_table.shape[1] == 1:
            return np.repeat(self.inverse_table, 3, axis=1)
        return self.inverse_table.copy()

    def gun_values_for(self, fraction):
        """
        Look up normalized gun values for desired luminance proportions.

        Parameters
        ----------
        fraction : float or array_like
            Desired luminance as a proportion of the full range, in
            ``[0, 1]``.

        Returns
        -------
        np.ndarray
            Shape ``fraction.shape + (C,)``, linearly interpolated from the
            table.
        """
        fraction = np.asarray(fraction, dtype=float)
        if np.any(fraction < 0) or np.any(fraction > 1):
            raise InvalidInputError("Luminance proportions must lie in [0, 1]")

        steps = np.linspace(0.0, 1.0, TABLE_SIZE)
        columns = [
            np.interp(fraction, steps, self.inverse_table[:, channel])
            for channel in range(self.n_channels)
        ]
        return np.stack(columns, axis=-1)

    def plot(self, figure=None):
        """Build the three-panel diagnostic figure for this calibration."""
        from .CalibrationPlot import plot_calibration
        return plot_calibration(self, figure)


def make_norm_gamma_table(gun_values, luminance, method=1, produce_plot=False):
    """
    Generate an inverse normalized lookup table to linearize a display.

    Parameters
    ----------
    gun_values : array_like
        The S gun values sent to the display, range ``[0, 255]``.
    luminance : array_like
        Luminance measured at each gun value, shape ``(S, C)`` for
        C = 1 or 3 channels.
    method : {1, 2, 3}, optional
        Fitting method tag, see ``GammaCalibrationConfig``.  Default is 1.
    produce_plot : bool, optional
        Build the diagnostic figure as a side effect.

    Returns
    -------
    inverse_table : np.ndarray
        Shape ``(256, C)``.
    fit_gamma : np.ndarray
        Shape ``(C,)``.
    fit_low_asymptote : np.ndarray or None
        Shape ``(C,)`` for method 3, ``None`` otherwise.

    Examples
    --------
    >>> table, gamma, _ = make_norm_gamma_table(
    ...     [0, 64, 128, 192, 255], [0.2, 4.1, 20.0, 52.3, 101.0])
    >>> table.shape
    (256, 1)
    """
    calibration = GammaCalibration(
        GammaCalibrationConfig(gun_values=gun_values,
                               luminance=luminance,
                               method=method,
                               produce_plot=produce_plot))
    return (calibration.inverse_table, calibration.fit_gamma,
            calibration.fit_low_asymptote)
