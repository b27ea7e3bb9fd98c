"""
Unit Tests for the closed-form IIR / analog response model.

Run: pytest tests/test_analytic_response.py -v
"""

import math

import numpy as np
import pytest

from filterlab.frequency_transform.analytic_response import (
    chebyshev_polynomial, group_delay, magnitude, normalized_frequency,
    phase, ripple_epsilon,
)


TOPOLOGIES = ['butterworth', 'chebyshev1', 'chebyshev2', 'elliptic', 'bessel']


class TestButterworth:

    @pytest.mark.parametrize("order", [1, 2, 3, 4, 7, 10])
    def test_half_power_at_cutoff(self, order):
        mag = magnitude(1000.0, 1000.0, order, 'lowpass', 'butterworth')
        assert mag == pytest.approx(1 / math.sqrt(2), abs=1e-6)
        assert 20 * math.log10(mag) == pytest.approx(-3.0103, abs=1e-4)

    def test_formula(self):
        assert magnitude(2000.0, 1000.0, 3, 'lowpass', 'butterworth') == pytest.approx(
            1 / math.sqrt(1 + 2.0 ** 6))

    def test_highpass_mirrors_lowpass(self):
        lp = magnitude(500.0, 1000.0, 4, 'lowpass', 'butterworth')
        hp = magnitude(2000.0, 1000.0, 4, 'highpass', 'butterworth')
        assert hp == pytest.approx(lp)


class TestChebyshev:

    def test_polynomial_branches(self):
        assert chebyshev_polynomial(3, 0.5) == pytest.approx(math.cos(3 * math.acos(0.5)))
        assert chebyshev_polynomial(3, 2.0) == pytest.approx(math.cosh(3 * math.acosh(2.0)))
        # T_3(x) = 4x^3 - 3x
        assert chebyshev_polynomial(3, 2.0) == pytest.approx(4 * 8 - 6)

    def test_chebyshev1_ripple_at_cutoff(self):
        # |T_n(1)| = 1 so the cutoff sits at the ripple level
        eps = ripple_epsilon(1.0)
        mag = magnitude(1000.0, 1000.0, 5, 'lowpass', 'chebyshev1', ripple_db=1.0)
        assert mag == pytest.approx(1 / math.sqrt(1 + eps ** 2))
        assert 20 * math.log10(mag) == pytest.approx(-1.0, abs=1e-9)

    def test_chebyshev1_zero_ripple_is_flat(self):
        f = np.array([100.0, 1000.0, 5000.0])
        np.testing.assert_allclose(magnitude(f, 1000.0, 4, 'lowpass', 'chebyshev1', 0.0), 1.0)

    def test_chebyshev1_zero_ripple_high_order_stays_flat(self):
        # T_300(10) overflows to inf
        assert magnitude(10000.0, 1000.0, 300, 'lowpass', 'chebyshev1', 0.0) == 1.0
        assert magnitude(500.0, 1000.0, 300, 'lowpass', 'elliptic', 0.0) == 1.0

    def test_chebyshev2_finite_and_bounded(self):
        f = np.geomspace(10.0, 10000.0, 64)
        mag = magnitude(f, 1000.0, 4, 'lowpass', 'chebyshev2')
        assert np.all(np.isfinite(mag))
        assert np.all((mag >= 0) & (mag <= 1.0 + 1e-12))

    def test_chebyshev2_formula_in_stopband(self):
        w = 3.0
        t = math.cos(4 * math.acos(1 / w))
        expected = 1 / math.sqrt(1 + 1 / (0.1 * t) ** 2)
        assert magnitude(3000.0, 1000.0, 4, 'lowpass', 'chebyshev2') == pytest.approx(expected)


class TestHeuristicTopologies:

    def test_bessel_formula(self):
        w = 1.5
        expected = 1 / math.sqrt(1 + w ** 8 * 0.3 + w ** 2)
        assert magnitude(1500.0, 1000.0, 4, 'lowpass', 'bessel') == pytest.approx(expected)

    def test_elliptic_passband_is_chebyshev1(self):
        f = 600.0
        assert magnitude(f, 1000.0, 3, 'lowpass', 'elliptic', 2.0) == pytest.approx(
            magnitude(f, 1000.0, 3, 'lowpass', 'chebyshev1', 2.0))

    def test_elliptic_stopband_oscillation(self):
        w, n = 2.0, 3
        eps = ripple_epsilon(1.0)
        expected = (1 / (w ** (2 * n) * eps)) * (1 + 0.1 * math.cos(n * w * 3))
        assert magnitude(2000.0, 1000.0, n, 'lowpass', 'elliptic', 1.0) == pytest.approx(expected)

    def test_unknown_topology_is_zero(self):
        assert magnitude(500.0, 1000.0, 4, 'lowpass', 'legendre') == 0.0
        np.testing.assert_array_equal(
            magnitude(np.array([1.0, 2.0]), 1000.0, 4, 'lowpass', 'legendre'), [0.0, 0.0])


class TestFrequencyRemap:

    def test_remaps(self):
        assert normalized_frequency(2000.0, 1000.0, 'lowpass') == pytest.approx(2.0)
        assert normalized_frequency(2000.0, 1000.0, 'bandstop') == pytest.approx(2.0)
        assert normalized_frequency(2000.0, 1000.0, 'highpass') == pytest.approx(0.5)
        assert normalized_frequency(2000.0, 1000.0, 'bandpass') == pytest.approx(1.5)
        assert normalized_frequency(2000.0, 1000.0, 'notch') == pytest.approx(1 / 1.5)

    def test_bandpass_peaks_at_center(self):
        assert magnitude(1000.0, 1000.0, 4, 'bandpass', 'butterworth') == pytest.approx(1.0)

    def test_notch_rejects_center(self):
        assert magnitude(1000.0, 1000.0, 4, 'notch', 'butterworth') == pytest.approx(0.0, abs=1e-12)

    def test_scalar_in_float_out(self):
        assert isinstance(magnitude(100.0, 1000.0, 2), float)
        assert isinstance(phase(100.0, 1000.0, 2), float)
        assert isinstance(group_delay(100.0, 1000.0, 2), float)


class TestPhaseModel:

    def test_bessel_linear_phase(self):
        assert phase(500.0, 1000.0, 4, 'bessel') == pytest.approx(math.degrees(-0.5 * math.pi / 2 * 4))
        assert group_delay(500.0, 1000.0, 4, 'bessel') == 4.0

    def test_atan_phase(self):
        expected = math.degrees(3 * math.atan(-(2.0 ** 3)))
        assert phase(2000.0, 1000.0, 3, 'butterworth') == pytest.approx(expected)

    def test_group_delay_peak(self):
        assert group_delay(1000.0, 1000.0, 4, 'chebyshev1') == pytest.approx(2.0)
        assert group_delay(10.0, 1000.0, 4, 'chebyshev1') == pytest.approx(4.0, rel=1e-6)
