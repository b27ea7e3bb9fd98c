#!/usr/bin/env python3
"""
sweep.py

Frequency sweep and time-domain report for a FilterSpecification.

Frequency grid (log-spaced, both endpoints included):
    f_i = f_min * (f_max / f_min) ** (i / (N - 1)),   i = 0 .. N-1
with f_min = 10 Hz and f_max = 10*cutoff (analog) or fs/2 (digital).

- digital_fir: DTFT of the designed taps evaluated directly at every f_i
  (scipy.signal.freqz with an explicit frequency vector); constant group
  delay (N-1)/2.
- analog / digital_iir: closed-form magnitude and phase model from
  analytic_response.

Magnitudes are reported in dB as 20*log10(|H| + 1e-9), floored at -120 dB.
Phases are reduced with a truncated floating modulo 180 (numpy.fmod, sign
of the dividend), e.g. -190 -> -10 and 190 -> 10.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional

import numpy as np
import pandas as pd
from scipy import signal

from filterlab.fir_model.fir_design import design_fir
from filterlab.frequency_transform import analytic_response
from filterlab.pipeline.config import FilterSpecification


# Default constants
DEFAULT_NUM_POINTS = 128
DEFAULT_F_MIN_HZ = 10.0
ANALOG_SPAN_FACTOR = 10.0
MAGNITUDE_FLOOR_DB = -120.0
LOG_EPS = 1e-9
PHASE_MODULUS_DEG = 180.0
SYNTHETIC_IMPULSE_LENGTH = 64
TIME_DOMAIN_LENGTH = 60


class FrequencySample(NamedTuple):
    frequency_hz: float
    magnitude_db: float
    phase_deg: float
    group_delay_samples: float


@dataclass(frozen=True, eq=False)
class FrequencyResponseReport:
    """Ascending, log-spaced frequency response table.

    Attributes:
        frequency_hz:        Swept frequencies [Hz].
        magnitude_db:        Magnitude [dB], >= -120.
        phase_deg:           Phase [deg] after the modulo-180 reduction.
        group_delay_samples: Group delay [samples].
    """
    frequency_hz: np.ndarray
    magnitude_db: np.ndarray
    phase_deg: np.ndarray
    group_delay_samples: np.ndarray

    def __len__(self) -> int:
        return int(self.frequency_hz.size)

    def __iter__(self) -> Iterator[FrequencySample]:
        return iter(self.samples)

    def __getitem__(self, i: int) -> FrequencySample:
        return self.samples[i]

    @property
    def samples(self) -> list:
        return [
            FrequencySample(float(f), float(m), float(p), float(g))
            for f, m, p, g in zip(self.frequency_hz, self.magnitude_db,
                                  self.phase_deg, self.group_delay_samples)
        ]

    def to_frame(self) -> pd.DataFrame:
        """Table with columns [freq_Hz, mag_dB, phase_deg, group_delay]."""
        return pd.DataFrame({
            "freq_Hz": self.frequency_hz,
            "mag_dB": self.magnitude_db,
            "phase_deg": self.phase_deg,
            "group_delay": self.group_delay_samples,
        })


@dataclass(frozen=True, eq=False)
class ResponseReport:
    """Complete engine output for one FilterSpecification.

    Every array is read-only, so a report can be shared from a cache.

    Attributes:
        frequency_report: Frequency response table.
        impulse_response: First 60 samples of ``coefficients``.
        step_response:    Running sum of ``impulse_response``.
        coefficients:     FIR taps (digital_fir) or the 64-sample synthetic
                          impulse response (analog / digital_iir).
    """
    frequency_report: FrequencyResponseReport
    impulse_response: np.ndarray
    step_response: np.ndarray
    coefficients: np.ndarray

    def time_frame(self) -> pd.DataFrame:
        """Table with columns [n, impulse, step]."""
        return pd.DataFrame({
            "n": np.arange(self.impulse_response.size),
            "impulse": self.impulse_response,
            "step": self.step_response,
        })


# ------------------------------------------------------------------ #
#  Grids and helpers                                                  #
# ------------------------------------------------------------------ #

def read_only(values) -> np.ndarray:
    """Float copy of *values* with the writeable flag cleared."""
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


def log_frequency_grid(f_min: float, f_max: float, num_points: int = DEFAULT_NUM_POINTS) -> np.ndarray:
    """Geometric grid f_min * (f_max/f_min)^(i/(N-1)), endpoints included."""
    i = np.arange(num_points)
    return f_min * (f_max / f_min) ** (i / (num_points - 1))


def sweep_limits(spec: FilterSpecification) -> tuple:
    """(f_min, f_max) for the spec's domain."""
    if spec.domain == 'analog':
        f_max = spec.cutoff_hz * ANALOG_SPAN_FACTOR
    else:
        f_max = spec.sample_rate_hz / 2.0
    return DEFAULT_F_MIN_HZ, f_max


def to_db(mag: np.ndarray) -> np.ndarray:
    """20*log10(|H| + eps) floored at MAGNITUDE_FLOOR_DB."""
    mag = np.asarray(mag, dtype=float)
    # Undefined model values (0*inf at a pole of the remap) degrade to zero gain
    mag = np.where(np.isnan(mag), 0.0, mag)
    with np.errstate(over='ignore'):
        mag_db = 20.0 * np.log10(mag + LOG_EPS)
    return np.maximum(MAGNITUDE_FLOOR_DB, mag_db)


def wrap_phase(phase_deg: np.ndarray) -> np.ndarray:
    """Truncated modulo 180 (result carries the sign of the input)."""
    return np.fmod(phase_deg, PHASE_MODULUS_DEG)


def synthetic_impulse_response(
    cutoff_hz: float,
    sample_rate_hz: float,
    order: int,
    length: int = SYNTHETIC_IMPULSE_LENGTH,
) -> np.ndarray:
    """Decaying sinusoid exp(-i/(2*order)) * sin(2*pi*i*fc/fs).

    Display stand-in for the analog / IIR impulse response.  It is not
    derived from the analytic magnitude model.
    """
    i = np.arange(length)
    return np.exp(-i / (order * 2.0)) * np.sin(2.0 * np.pi * i * (cutoff_hz / sample_rate_hz))


def coefficients_for(spec: FilterSpecification) -> np.ndarray:
    """FIR taps for digital_fir, synthetic impulse response otherwise."""
    if spec.is_fir:
        return design_fir(spec.tap_count, spec.cutoff_hz, spec.sample_rate_hz,
                          spec.window, spec.response_type)
    return synthetic_impulse_response(spec.cutoff_hz, spec.sample_rate_hz, spec.order)


# ------------------------------------------------------------------ #
#  Sweeps                                                             #
# ------------------------------------------------------------------ #

def _sweep_fir(h: np.ndarray, freqs: np.ndarray, spec: FilterSpecification):
    """DTFT of *h* at *freqs* -> (mag, phase_deg, group_delay)."""
    # H(w) = sum_n h[n] * exp(-j*w*n), w = 2*pi*f/fs
    _, H = signal.freqz(h, worN=freqs, fs=spec.sample_rate_hz)
    mag = np.abs(H)
    ph = np.degrees(np.arctan2(H.imag, H.real))
    gd = np.full(freqs.shape, (spec.tap_count - 1) / 2.0)
    return mag, ph, gd


def _sweep_analytic(freqs: np.ndarray, spec: FilterSpecification):
    """Analytic model at *freqs* -> (mag, phase_deg, group_delay)."""
    mag = analytic_response.magnitude(
        freqs, spec.cutoff_hz, spec.order, spec.response_type,
        spec.topology, spec.ripple_db)
    ph = analytic_response.phase(freqs, spec.cutoff_hz, spec.order, spec.topology)
    gd = analytic_response.group_delay(freqs, spec.cutoff_hz, spec.order, spec.topology)
    return mag, ph, gd


def frequency_sweep(
    spec: FilterSpecification,
    coefficients: Optional[np.ndarray] = None,
    num_points: int = DEFAULT_NUM_POINTS,
) -> FrequencyResponseReport:
    """
    Sweep the frequency response of *spec* over a log grid.

    Args:
        spec:         Filter specification (assumed validated).
        coefficients: Precomputed FIR taps (digital_fir only); designed
                      from *spec* when omitted.
        num_points:   Number of grid points.

    Returns:
        FrequencyResponseReport in ascending frequency order.
    """
    f_min, f_max = sweep_limits(spec)
    freqs = log_frequency_grid(f_min, f_max, num_points)

    if spec.is_fir:
        h = coefficients if coefficients is not None else coefficients_for(spec)
        mag, ph, gd = _sweep_fir(h, freqs, spec)
    else:
        mag, ph, gd = _sweep_analytic(freqs, spec)

    return FrequencyResponseReport(
        frequency_hz=read_only(freqs),
        magnitude_db=read_only(to_db(mag)),
        phase_deg=read_only(wrap_phase(ph)),
        group_delay_samples=read_only(gd),
    )


def time_response(coefficients: np.ndarray, length: int = TIME_DOMAIN_LENGTH):
    """(impulse, step) truncated to the first *length* samples."""
    impulse = np.asarray(coefficients, dtype=float)[:length].copy()
    return impulse, np.cumsum(impulse)


def sweep(spec: FilterSpecification, num_points: int = DEFAULT_NUM_POINTS) -> ResponseReport:
    """Frequency and time-domain report for *spec*."""
    h = coefficients_for(spec)
    impulse, step = time_response(h)
    return ResponseReport(
        frequency_report=frequency_sweep(spec, coefficients=h, num_points=num_points),
        impulse_response=read_only(impulse),
        step_response=read_only(step),
        coefficients=read_only(h),
    )
