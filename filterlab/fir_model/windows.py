"""
Window functions for windowed-sinc FIR design.

Provides a pointwise ``weight(kind, n, N)`` and a vectorised
``window_weights(kind, N)``.  Both use the symmetric (N-1) definition, so
the first and last taps carry identical weights.  Unknown window names fall
back to Hamming.
"""

import math

import numpy as np
from scipy.signal.windows import get_window


DEFAULT_WINDOW = 'hamming'

# Name used by scipy.signal.windows for each supported window
_SCIPY_NAMES = {
    'rectangular': 'boxcar',
    'hamming': 'hamming',
    'hanning': 'hann',
    'blackman': 'blackman',
}


def _rectangular(n: int, N: int) -> float:
    return 1.0


def _hamming(n: int, N: int) -> float:
    return 0.54 - 0.46 * math.cos(2.0 * math.pi * n / (N - 1))


def _hanning(n: int, N: int) -> float:
    return 0.5 * (1.0 - math.cos(2.0 * math.pi * n / (N - 1)))


def _blackman(n: int, N: int) -> float:
    return (0.42
            - 0.5 * math.cos(2.0 * math.pi * n / (N - 1))
            + 0.08 * math.cos(4.0 * math.pi * n / (N - 1)))


_WINDOW_MAP = {
    'rectangular': _rectangular,
    'hamming': _hamming,
    'hanning': _hanning,
    'blackman': _blackman,
}


def resolve_window(kind: str) -> str:
    """Return *kind* if it is a known window name, else the Hamming default."""
    return kind if kind in _WINDOW_MAP else DEFAULT_WINDOW


def weight(kind: str, n: int, N: int) -> float:
    """Window weight for tap *n* of an *N*-tap filter (0 <= n < N, N >= 2)."""
    # cosine sums leave round-off just outside [0, 1] (blackman ends at -1.4e-17)
    return min(1.0, max(0.0, _WINDOW_MAP[resolve_window(kind)](n, N)))


def window_weights(kind: str, N: int) -> np.ndarray:
    """Full symmetric window of length *N* as a float array.

    Args:
        kind: 'rectangular', 'hamming', 'hanning' or 'blackman'
              (anything else -> 'hamming').
        N:    Window length (>= 2).

    Returns:
        1-D array of N weights in [0, 1].
    """
    # fftbins=False selects the symmetric variant used for filter design
    return np.clip(get_window(_SCIPY_NAMES[resolve_window(kind)], N, fftbins=False), 0.0, 1.0)
