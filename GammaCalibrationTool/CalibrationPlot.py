import matplotlib.pyplot as plt
import numpy as np

from .CalibrationMethod import GammaModel
from .GammaFit import TABLE_SIZE, predict_luminance


def channel_colors(n_channels):
    """Matplotlib color codes for grayscale or red/green/blue channels."""
    if n_channels == 1:
        return ["k"]
    return ["r", "g", "b"]


def plot_calibration(calibration, figure=None):
    """
    Draw the diagnostic figure for a completed calibration.

    Three panels, left to right: raw luminance against gun value, the
    normalized data with the fitted curves, and the inverse lookup table.

    Parameters
    ----------
    calibration : GammaCalibration
        A populated calibration.
    figure : matplotlib.figure.Figure, optional
        Figure to draw into.  A new 8 x 4 inch figure is created if omitted.

    Returns
    -------
    matplotlib.figure.Figure
    """
    if figure is None:
        figure = plt.figure(figsize=(8, 4), facecolor="w")

    raw_ax, fit_ax, table_ax = figure.subplots(1, 3)
    steps = np.linspace(0.0, 1.0, TABLE_SIZE)
    colors = channel_colors(calibration.n_channels)
    peak = np.nanmax(calibration.luminance)

    for channel, result in enumerate(calibration.channels):
        color = colors[channel]
        lum = calibration.luminance[:, channel]
        good = ~np.isnan(lum)

        raw_ax.plot(calibration.gun_values[good], lum[good], color + "o")

        fit_ax.plot(result.norm_gun, result.norm_lum, color + "o")
        fit_ax.plot(steps, predict_luminance(result.fit, steps), color + "-")
        if result.fit.model is GammaModel.POWER_WITH_OFFSET:
            label = f"{result.fit.gamma:.3f}, {result.fit.low_asymptote:.3f}"
        else:
            label = f"{result.fit.gamma:.3f}"
        fit_ax.text(0.10, 0.98 - 0.06 * (channel + 1), label, color=color)

        table_ax.plot(steps, result.table, color + "-")

    raw_ax.axis([0, 255, 0, peak * 1.1])
    raw_ax.set_xlabel("Gun intensity value")
    raw_ax.set_ylabel("cd / m^2")
    raw_ax.set_title("Raw data")

    fit_ax.axis([0, 1, 0, 1])
    fit_ax.set_xlabel("Gun output (proportion)")
    fit_ax.set_ylabel("Luminance output (proportion)")
    fit_ax.set_title(f"Function fits, method {calibration.method.tag}")

    table_ax.axis([0, 1, 0, 1])
    table_ax.set_xlabel("Desired luminance proportion")
    table_ax.set_ylabel("Gun output value (proportion)")
    table_ax.set_title("Normalized Lookup Table")

    for ax in (raw_ax, fit_ax, table_ax):
        ax.set_box_aspect(1)

    return figure
