"""Tests for the per-channel pipeline and GammaCalibration.

Tests:
    - calibrate_channel() on a single channel
    - Typical display measurements (9 steps, method 1)
    - RGB calibration with independent channels
    - Error propagation with the failing channel named
    - Factory dispatch and config validation
    - Table helpers (rgb_table, gun_values_for)

Run:
    pytest tests/test_gamma_calibration.py -v
"""

import numpy as np
import pytest
from pydantic import ValidationError

from GammaCalibrationTool import (CalibrationDataFactory, CalibrationMethod,
                                  FitConvergenceError, GammaCalibration,
                                  GammaCalibrationConfig, GammaModel,
                                  InvalidInputError, NumericalError,
                                  calibrate_channel, make_norm_gamma_table)


def power_law(gun_values, gamma, peak=100.0):
    return peak * (np.asarray(gun_values, dtype=float) / 255.0)**gamma


# ---------------------------------------------------------------------------
# Single channel
# ---------------------------------------------------------------------------


class TestCalibrateChannel:
    @pytest.mark.parametrize("method", [1, 2])
    def test_recovers_gamma(self, gun_values, method):
        result = calibrate_channel(gun_values, power_law(gun_values, 2.2),
                                   method)
        assert result.fit.gamma == pytest.approx(2.2, abs=1e-3)
        assert result.table.shape == (256,)

    def test_method_three_reports_asymptote(self, gun_values, crt_luminance):
        result = calibrate_channel(gun_values, crt_luminance, 3)
        assert result.fit.model is GammaModel.POWER_WITH_OFFSET
        assert np.isfinite(result.fit.low_asymptote)
        assert result.fit.gamma > 0

    def test_table_ignores_asymptote(self, gun_values, crt_luminance):
        result = calibrate_channel(gun_values, crt_luminance, 3)
        expected = np.linspace(0, 1, 256)**(1 / result.fit.gamma)
        np.testing.assert_allclose(result.table, expected)

    def test_missing_reading_dropped(self, gun_values):
        lum = power_law(gun_values, 2.2)
        lum[1] = np.nan
        result = calibrate_channel(gun_values, lum)
        assert result.norm_gun.size == gun_values.size - 1
        assert 32 / 255 not in result.norm_gun
        assert result.fit.gamma == pytest.approx(2.2, abs=1e-3)

    def test_missing_value_substituted(self, gun_values, crt_luminance):
        lum = crt_luminance.copy()
        lum[0] = np.nan
        result = calibrate_channel(gun_values, lum, missing_value=0.5)
        assert result.norm_gun.size == gun_values.size
        assert result.norm_lum[0] == 0.0

    def test_explicit_method(self, gun_values):
        method = CalibrationMethod.from_tag(2)
        result = calibrate_channel(gun_values, power_law(gun_values, 1.9),
                                   method)
        assert result.fit.gamma == pytest.approx(1.9, abs=1e-3)


# ---------------------------------------------------------------------------
# Full calibration
# ---------------------------------------------------------------------------


class TestTypicalDisplay:
    def test_gamma_and_table(self, gun_values, crt_luminance):
        table, gamma, low_asymptote = make_norm_gamma_table(
            gun_values, crt_luminance.reshape(-1, 1), method=1)

        assert table.shape == (256, 1)
        assert gamma.shape == (1,)
        assert low_asymptote is None
        # Mid-range readings follow roughly L = I ** 3.1
        assert 2.9 < gamma[0] < 3.3
        assert table[0, 0] < table[128, 0] < table[255, 0]
        assert table[0, 0] == 0.0
        assert table[255, 0] == 1.0
        assert np.all(np.diff(table[:, 0]) >= 0)

    def test_one_dimensional_luminance(self, gun_values, crt_luminance):
        table, gamma, _ = make_norm_gamma_table(gun_values, crt_luminance)
        assert table.shape == (256, 1)
        assert gamma.shape == (1,)

    def test_method_three_vectors(self, gun_values, crt_luminance):
        _, gamma, low_asymptote = make_norm_gamma_table(
            gun_values, crt_luminance, method=3)
        assert low_asymptote.shape == gamma.shape == (1,)


class TestRGB:
    @pytest.fixture
    def rgb_luminance(self, gun_values):
        return np.column_stack([
            power_law(gun_values, 1.8, 30.0),
            power_law(gun_values, 2.2, 80.0),
            power_law(gun_values, 2.6, 12.0),
        ])

    def test_channels_independent(self, gun_values, rgb_luminance):
        config = GammaCalibrationConfig(gun_values=gun_values,
                                        luminance=rgb_luminance)
        cal = CalibrationDataFactory.create(config)

        assert isinstance(cal, GammaCalibration)
        assert cal.inverse_table.shape == (256, 3)
        np.testing.assert_allclose(cal.fit_gamma, [1.8, 2.2, 2.6], atol=1e-3)
        assert cal.fit_low_asymptote is None
        assert len(cal.channels) == 3

    def test_channel_order_invariant(self, gun_values, rgb_luminance):
        forward = make_norm_gamma_table(gun_values, rgb_luminance)[1]
        reverse = make_norm_gamma_table(gun_values, rgb_luminance[:, ::-1])[1]
        np.testing.assert_allclose(forward, reverse[::-1])

    def test_progress_callback(self, gun_values, rgb_luminance):
        calls = []

        def progress_cb(phase, current, total):
            calls.append((phase, current, total))

        GammaCalibration(
            GammaCalibrationConfig(gun_values=gun_values,
                                   luminance=rgb_luminance,
                                   progress_cb=progress_cb))
        assert calls == [("fitting", i, 3) for i in range(4)]

    def test_gun_values_for(self, gun_values, rgb_luminance):
        cal = GammaCalibration(
            GammaCalibrationConfig(gun_values=gun_values,
                                   luminance=rgb_luminance))
        looked_up = cal.gun_values_for(0.5)
        assert looked_up.shape == (3,)
        np.testing.assert_allclose(looked_up, 0.5**(1 / cal.fit_gamma),
                                   atol=1e-3)
        assert cal.gun_values_for([0.0, 1.0]).shape == (2, 3)

        with pytest.raises(InvalidInputError):
            cal.gun_values_for(1.5)


class TestRgbTable:
    def test_gray_replicated(self, gun_values, crt_luminance):
        cal = GammaCalibration(
            GammaCalibrationConfig(gun_values=gun_values,
                                   luminance=crt_luminance))
        rgb = cal.rgb_table()
        assert rgb.shape == (256, 3)
        np.testing.assert_array_equal(rgb[:, 0], rgb[:, 2])


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_two_channels_rejected(self, gun_values, crt_luminance):
        with pytest.raises(InvalidInputError):
            make_norm_gamma_table(gun_values,
                                  np.column_stack([crt_luminance] * 2))

    def test_length_mismatch(self, gun_values, crt_luminance):
        with pytest.raises(InvalidInputError):
            make_norm_gamma_table(gun_values[:-1], crt_luminance)

    def test_decreasing_gun_values(self, gun_values, crt_luminance):
        with pytest.raises(InvalidInputError):
            make_norm_gamma_table(gun_values[::-1], crt_luminance)

    def test_gun_values_out_of_range(self, crt_luminance):
        with pytest.raises(InvalidInputError):
            make_norm_gamma_table(np.linspace(0, 300, 9), crt_luminance)

    def test_degenerate_channel_named(self, gun_values, crt_luminance):
        lum = np.column_stack([crt_luminance, np.full(9, 3.0), crt_luminance])
        with pytest.raises(NumericalError, match="Channel 1"):
            make_norm_gamma_table(gun_values, lum)

    def test_no_silent_nan_table(self, gun_values):
        with pytest.raises(NumericalError):
            make_norm_gamma_table(gun_values, np.zeros(9), method=2)

    def test_convergence_failure(self, gun_values, crt_luminance):
        config = GammaCalibrationConfig(gun_values=gun_values,
                                        luminance=crt_luminance,
                                        max_evaluations=1)
        with pytest.raises(FitConvergenceError, match="Channel 0"):
            GammaCalibration(config)

    def test_unknown_method(self, gun_values, crt_luminance):
        with pytest.raises(ValidationError):
            GammaCalibrationConfig(gun_values=gun_values,
                                   luminance=crt_luminance,
                                   method=4)

    def test_unknown_config(self):
        with pytest.raises(ValueError):
            CalibrationDataFactory.create(object())
