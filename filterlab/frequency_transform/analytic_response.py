#!/usr/bin/env python3
"""
analytic_response.py

Closed-form magnitude and phase models for analog / IIR topologies.

These are visualisation-grade approximations, not synthesis-grade transfer
functions:
- butterworth: exact maximally-flat magnitude.
- chebyshev1:  textbook equiripple passband magnitude.
- chebyshev2:  inverse-Chebyshev form with a fixed stopband factor of 0.1.
- bessel:      heuristic 1/sqrt(1 + 0.3*w^(2n) + w^2).
- elliptic:    Chebyshev-I passband; stopband roll-off modulated by
               (1 + 0.1*cos(3*n*w)) to mimic stopband ripple.

All functions accept scalars or numpy arrays.  Scalars in, floats out.
"""

from __future__ import annotations

from typing import Union

import numpy as np

ArrayLike = Union[float, np.ndarray]

# Fixed stopband ripple factor of the inverse-Chebyshev approximation
CHEBYSHEV2_STOPBAND_EPS = 0.1


# ------------------------------------------------------------------ #
#  Helpers                                                            #
# ------------------------------------------------------------------ #

def _scalar_or_array(x: np.ndarray, like) -> ArrayLike:
    """Return a Python float when the caller passed a scalar."""
    return float(x) if np.ndim(like) == 0 else x


def ripple_epsilon(ripple_db: float) -> float:
    """Ripple factor eps = sqrt(10^(ripple_db/10) - 1)."""
    return float(np.sqrt(10.0 ** (ripple_db / 10.0) - 1.0))


def chebyshev_polynomial(order: int, x: np.ndarray) -> np.ndarray:
    """Chebyshev polynomial T_n(x) for x >= 0.

    Uses cos(n*acos(x)) on [0, 1] and cosh(n*acosh(x)) above 1.
    """
    x = np.asarray(x, dtype=float)
    inside = x <= 1.0
    with np.errstate(invalid='ignore', over='ignore'):
        t_in = np.cos(order * np.arccos(np.clip(x, -1.0, 1.0)))
        t_out = np.cosh(order * np.arccosh(np.maximum(x, 1.0)))
    return np.where(inside, t_in, t_out)


def normalized_frequency(f: ArrayLike, cutoff_hz: float, response_type: str) -> np.ndarray:
    """Map f to the lowpass-prototype variable w for the given response type.

    highpass -> 1/w, bandpass -> |w - 1/w|, notch -> |1/(w - 1/w)|;
    lowpass and bandstop keep w = f/cutoff.
    """
    w = np.asarray(f, dtype=float) / cutoff_hz
    with np.errstate(divide='ignore', invalid='ignore'):
        if response_type == 'highpass':
            w = 1.0 / w
        elif response_type == 'bandpass':
            w = np.abs(w - 1.0 / w)
        elif response_type == 'notch':
            w = np.abs(1.0 / (w - 1.0 / w))
    return w


# ------------------------------------------------------------------ #
#  Magnitude per topology                                             #
# ------------------------------------------------------------------ #

def _butterworth(w, order, ripple_db):
    return 1.0 / np.sqrt(1.0 + w ** (2 * order))


def _equiripple_passband(w, order, eps):
    """1/sqrt(1 + (eps*T_n(w))^2); exactly 1 when eps is zero."""
    if eps == 0.0:
        # T_n(w) overflows to inf for large n*w, and 0*inf would give NaN
        return np.ones_like(w, dtype=float)
    return 1.0 / np.sqrt(1.0 + (eps * chebyshev_polynomial(order, w)) ** 2)


def _chebyshev1(w, order, ripple_db):
    return _equiripple_passband(w, order, ripple_epsilon(ripple_db))


def _chebyshev2(w, order, ripple_db):
    t = chebyshev_polynomial(order, 1.0 / w)
    return 1.0 / np.sqrt(1.0 + 1.0 / (CHEBYSHEV2_STOPBAND_EPS * t) ** 2)


def _bessel(w, order, ripple_db):
    return 1.0 / np.sqrt(1.0 + w ** (2 * order) * 0.3 + w ** 2)


def _elliptic(w, order, ripple_db):
    eps = ripple_epsilon(ripple_db)
    passband = _equiripple_passband(w, order, eps)
    stopband = (1.0 / (w ** (2 * order) * eps)) * (1.0 + 0.1 * np.cos(order * w * 3.0))
    return np.where(w < 1.0, passband, stopband)


_TOPOLOGY_MAP = {
    'butterworth': _butterworth,
    'chebyshev1': _chebyshev1,
    'chebyshev2': _chebyshev2,
    'bessel': _bessel,
    'elliptic': _elliptic,
}


def magnitude(
    f: ArrayLike,
    cutoff_hz: float,
    order: int,
    response_type: str = 'lowpass',
    topology: str = 'butterworth',
    ripple_db: float = 1.0,
) -> ArrayLike:
    """
    Linear magnitude |H(f)| of the analytic model.

    Args:
        f:             Frequency [Hz], scalar or array.
        cutoff_hz:     Cutoff frequency [Hz].
        order:         Filter order n.
        response_type: Response type used for the frequency remap.
        topology:      Prototype name; unknown names give magnitude 0.
        ripple_db:     Passband ripple [dB] (chebyshev1 / elliptic).

    Returns:
        Non-negative magnitude with the shape of *f*.
    """
    w = normalized_frequency(f, cutoff_hz, response_type)
    model = _TOPOLOGY_MAP.get(topology)
    if model is None:
        return _scalar_or_array(np.zeros_like(w), f)

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        mag = model(w, order, ripple_db)
    return _scalar_or_array(np.asarray(mag, dtype=float), f)


# ------------------------------------------------------------------ #
#  Phase and group delay                                              #
# ------------------------------------------------------------------ #

def phase(f: ArrayLike, cutoff_hz: float, order: int, topology: str = 'butterworth') -> ArrayLike:
    """Unwrapped model phase in degrees (before the display modulo).

    bessel uses the linear-phase model -(f/fc)*(pi/2)*order; every other
    topology uses order * atan(-(f/fc)^order).
    """
    ratio = np.asarray(f, dtype=float) / cutoff_hz
    if topology == 'bessel':
        phi = -ratio * np.pi / 2.0 * order
    else:
        with np.errstate(over='ignore'):
            phi = np.arctan(-(ratio ** order)) * order
    return _scalar_or_array(np.degrees(phi), f)


def group_delay(f: ArrayLike, cutoff_hz: float, order: int, topology: str = 'butterworth') -> ArrayLike:
    """Model group delay in samples.

    Constant ``order`` for bessel, otherwise order / (1 + (f/fc)^(2*order)),
    which peaks below the cutoff and rolls off above it.
    """
    ratio = np.asarray(f, dtype=float) / cutoff_hz
    if topology == 'bessel':
        tau = np.full_like(ratio, float(order))
    else:
        with np.errstate(over='ignore'):
            tau = order / (1.0 + ratio ** (2 * order))
    return _scalar_or_array(tau, f)
