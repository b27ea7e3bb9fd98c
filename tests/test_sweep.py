"""
Unit Tests for the frequency sweep and time-domain report.

Test Design Techniques Used:
    - Scenario testing (FIR and analog reference designs)
    - Boundary value analysis (dB floor, grid endpoints)
    - Property testing (constant FIR group delay, phase modulo)

Run: pytest tests/test_sweep.py -v
"""

import math
from dataclasses import replace

import numpy as np
import pytest

from filterlab.frequency_transform.sweep import (
    MAGNITUDE_FLOOR_DB, coefficients_for, frequency_sweep, log_frequency_grid,
    sweep, synthetic_impulse_response, to_db, wrap_phase,
)


class TestGrid:

    def test_endpoints_and_ratio(self):
        f = log_frequency_grid(10.0, 24000.0, 128)
        assert f.size == 128
        assert f[0] == pytest.approx(10.0)
        assert f[-1] == pytest.approx(24000.0)
        ratios = f[1:] / f[:-1]
        np.testing.assert_allclose(ratios, ratios[0])

    def test_analog_span(self, analog_spec):
        report = frequency_sweep(analog_spec)
        assert report.frequency_hz[-1] == pytest.approx(10 * analog_spec.cutoff_hz)

    def test_digital_span_ends_at_nyquist(self, fir_spec):
        report = frequency_sweep(fir_spec)
        assert report.frequency_hz[-1] == pytest.approx(fir_spec.sample_rate_hz / 2)
        assert np.all(np.diff(report.frequency_hz) > 0)


class TestFIRSweep:

    def test_matches_direct_dtft(self, fir_spec):
        report = frequency_sweep(fir_spec)
        h = coefficients_for(fir_spec)
        n = np.arange(h.size)
        # Passband points, where the phase is well away from the +-180 fold
        for i in (0, 20, 40, 60):
            f = report.frequency_hz[i]
            w = 2 * np.pi * f / fir_spec.sample_rate_hz
            re = np.sum(h * np.cos(n * w))
            im = -np.sum(h * np.sin(n * w))
            mag_db = max(-120.0, 20 * math.log10(math.sqrt(re * re + im * im) + 1e-9))
            assert report.magnitude_db[i] == pytest.approx(mag_db, abs=1e-6)
            assert report.phase_deg[i] == pytest.approx(
                math.fmod(math.degrees(math.atan2(im, re)), 180.0), abs=1e-6)

    def test_group_delay_constant(self, fir_spec):
        report = frequency_sweep(fir_spec)
        assert np.all(report.group_delay_samples == (fir_spec.tap_count - 1) / 2)

    def test_passband_and_stopband(self, fir_spec):
        report = frequency_sweep(replace(fir_spec, cutoff_hz=4800.0, tap_count=101))
        assert abs(report.magnitude_db[0]) < 0.5
        assert report.magnitude_db[-1] < -40.0

    def test_highpass_blocks_dc(self, fir_spec):
        report = frequency_sweep(replace(fir_spec, response_type="highpass",
                                                cutoff_hz=4800.0, tap_count=101))
        assert report.magnitude_db[0] < -20.0
        assert abs(report.magnitude_db[-1]) < 0.5


class TestAnalyticSweep:

    def test_butterworth_scenario_at_cutoff(self, analog_spec):
        spec = replace(analog_spec, cutoff_hz=10.0)
        # First grid point is f_min = 10 Hz = cutoff
        report = frequency_sweep(spec)
        assert report.frequency_hz[0] == pytest.approx(10.0)
        assert report.magnitude_db[0] == pytest.approx(-3.0103, abs=1e-3)

    def test_bessel_constant_group_delay(self, analog_spec):
        report = frequency_sweep(replace(analog_spec, topology='bessel'))
        assert np.all(report.group_delay_samples == analog_spec.order)

    def test_group_delay_rolls_off(self, analog_spec):
        gd = frequency_sweep(analog_spec).group_delay_samples
        assert gd[0] == pytest.approx(analog_spec.order, rel=1e-3)
        assert gd[-1] < 0.01

    @pytest.mark.parametrize("topology", ['butterworth', 'chebyshev1', 'chebyshev2',
                                          'elliptic', 'bessel', 'unknown'])
    @pytest.mark.parametrize("response_type", ['lowpass', 'highpass', 'bandpass',
                                               'bandstop', 'notch'])
    def test_magnitude_floor(self, analog_spec, topology, response_type):
        spec = replace(analog_spec, topology=topology, response_type=response_type,
                       order=10, ripple_db=0.0)
        report = frequency_sweep(spec)
        assert np.all(report.magnitude_db >= MAGNITUDE_FLOOR_DB)
        assert not np.any(np.isnan(report.magnitude_db))

    def test_zero_ripple_chebyshev1_is_0_db(self, analog_spec):
        spec = replace(analog_spec, topology='chebyshev1', order=300, ripple_db=0.0)
        report = frequency_sweep(spec)
        np.testing.assert_allclose(report.magnitude_db, 0.0, atol=1e-6)

    def test_unknown_topology_sits_on_floor(self, analog_spec):
        report = frequency_sweep(replace(analog_spec, topology='unknown'))
        assert np.all(report.magnitude_db == MAGNITUDE_FLOOR_DB)


class TestHelpers:

    def test_to_db(self):
        np.testing.assert_allclose(to_db(np.array([1.0, 0.1, 0.0])), [0.0, -20.0, -120.0], atol=1e-6)

    def test_wrap_phase_truncates(self):
        np.testing.assert_allclose(wrap_phase(np.array([-190.0, 190.0, -90.0, 360.0, -540.0])),
                                   [-10.0, 10.0, -90.0, 0.0, -0.0])

    @pytest.mark.parametrize("domain", ['analog', 'digital_iir', 'digital_fir'])
    def test_phase_inside_open_interval(self, analog_spec, domain):
        report = frequency_sweep(replace(analog_spec, domain=domain, order=7))
        assert np.all(np.abs(report.phase_deg) < 180.0)


class TestTimeDomain:

    def test_fir_report(self, fir_spec):
        report = sweep(fir_spec)
        assert report.coefficients.size == 31
        np.testing.assert_array_equal(report.impulse_response, report.coefficients)
        np.testing.assert_allclose(report.step_response, np.cumsum(report.coefficients))

    def test_long_fir_truncated_to_60(self, fir_spec):
        report = sweep(replace(fir_spec, tap_count=101))
        assert report.coefficients.size == 101
        assert report.impulse_response.size == 60
        assert report.step_response.size == 60

    @pytest.mark.parametrize("domain", ['analog', 'digital_iir'])
    def test_synthetic_impulse(self, analog_spec, domain):
        report = sweep(replace(analog_spec, domain=domain))
        assert report.coefficients.size == 64
        assert report.impulse_response.size == 60
        np.testing.assert_allclose(
            report.coefficients,
            synthetic_impulse_response(analog_spec.cutoff_hz, analog_spec.sample_rate_hz,
                                       analog_spec.order))

    def test_synthetic_formula(self):
        h = synthetic_impulse_response(1000.0, 48000.0, 4)
        i = 5
        assert h[0] == 0.0
        assert h[i] == pytest.approx(math.exp(-i / 8) * math.sin(2 * math.pi * i * 1000 / 48000))

    def test_frames(self, fir_spec):
        report = sweep(fir_spec)
        df = report.frequency_report.to_frame()
        assert list(df.columns) == ["freq_Hz", "mag_dB", "phase_deg", "group_delay"]
        assert len(df) == 128
        assert list(report.time_frame().columns) == ["n", "impulse", "step"]

    def test_samples_sequence(self, fir_spec):
        fr = sweep(fir_spec).frequency_report
        assert len(fr) == 128
        first = fr[0]
        assert first.frequency_hz == pytest.approx(10.0)
        assert first.group_delay_samples == 15.0
        assert [s.frequency_hz for s in fr] == sorted(s.frequency_hz for s in fr)
