#!/usr/bin/env python3
"""
fir_design.py

Windowed-sinc FIR design.

Workflow:
  1. Normalise the cutoff to the sample rate (fc = cutoff / fs).
  2. Sample the ideal lowpass kernel sin(2*pi*fc*m) / (pi*m) around the
     centre tap m = n - (N-1)/2 (value 2*fc at m = 0).
  3. Multiply by the selected window.
  4. For highpass, apply spectral inversion (negate, add 1 at the centre).

Bandpass, bandstop and notch are accepted but use the lowpass kernel
unchanged; only lowpass / highpass have a dedicated transform.  No passband
gain normalisation is applied.
"""

from __future__ import annotations

import numpy as np

from filterlab.fir_model.windows import window_weights


def ideal_lowpass_kernel(tap_count: int, fc: float) -> np.ndarray:
    """Ideal (unwindowed) lowpass impulse response for a normalised cutoff.

    Args:
        tap_count: Number of taps N.
        fc:        Normalised cutoff (cycles/sample, 0 < fc < 0.5).

    Returns:
        h: Length-N array, symmetric about (N-1)/2.
    """
    center = (tap_count - 1) / 2.0
    m = np.arange(tap_count) - center
    # 2*fc*sinc(2*fc*m) == sin(2*pi*fc*m) / (pi*m), with the m = 0 limit 2*fc
    return 2.0 * fc * np.sinc(2.0 * fc * m)


def spectral_inversion(h: np.ndarray) -> np.ndarray:
    """Turn a lowpass kernel into its highpass complement (delta - h)."""
    h_hp = -np.asarray(h, dtype=float)
    center = (h_hp.size - 1) // 2
    h_hp[center] += 1.0
    return h_hp


def design_fir(
    tap_count: int,
    cutoff_hz: float,
    sample_rate_hz: float,
    window: str = 'hamming',
    response_type: str = 'lowpass',
) -> np.ndarray:
    """
    Design FIR coefficients by the window method.

    Args:
        tap_count:      Number of taps (odd, so the centre is a real tap).
        cutoff_hz:      Cutoff frequency [Hz].
        sample_rate_hz: Sampling rate [Hz].
        window:         Window name (unknown names fall back to Hamming).
        response_type:  'highpass' applies spectral inversion; every other
                        type keeps the lowpass kernel.

    Returns:
        h: FIR coefficients, length exactly ``tap_count``.
    """
    fc = cutoff_hz / sample_rate_hz
    h = ideal_lowpass_kernel(tap_count, fc) * window_weights(window, tap_count)

    if response_type == 'highpass':
        h = spectral_inversion(h)

    return h
