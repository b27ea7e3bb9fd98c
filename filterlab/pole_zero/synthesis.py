#!/usr/bin/env python3
"""
synthesis.py

Geometric pole/zero layouts for visualisation of the s-plane (analog) and
z-plane (digital) roots.

Poles sit on the standard angular grid
    angle_k = pi * (2k + n + 1) / (2n),   k = 0 .. n-1
which spans the left half-plane.  The radius depends on the domain:
- digital_fir: every pole at the origin (no feedback).
- analog:      unit circle, or the ellipse (0.5*cos, sin) for chebyshev1.
- digital_iir: radius 0.7 for butterworth, 0.85 otherwise.  This is a
               coarse placement inside the unit disk, not a bilinear map.

Zeros: ``n`` zeros at the origin for highpass / bandpass, or ``n`` zeros
spread over the unit circle for digital_fir.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd


IIR_BUTTERWORTH_RADIUS = 0.7
IIR_DEFAULT_RADIUS = 0.85
CHEBYSHEV1_REAL_AXIS_SCALE = 0.5


@dataclass(frozen=True, eq=False)
class PoleZeroSet:
    """Poles and zeros as complex numbers (re + j*im).

    Attributes:
        poles: 1-D complex array.
        zeros: 1-D complex array.
    """
    poles: np.ndarray
    zeros: np.ndarray

    @property
    def max_pole_radius(self) -> float:
        """Largest pole magnitude (0.0 for an empty set)."""
        return float(np.max(np.abs(self.poles))) if self.poles.size else 0.0

    def is_stable(self, domain: str) -> bool:
        """Stability of the layout for *domain*.

        Digital domains require every pole strictly inside the unit disk;
        analog requires every pole strictly in the left half-plane.
        """
        if domain == 'analog':
            return bool(np.all(self.poles.real < 0.0))
        return bool(np.all(np.abs(self.poles) < 1.0))

    def to_frame(self) -> pd.DataFrame:
        """Long-format table with columns [kind, re, im]."""
        return pd.DataFrame({
            "kind": ["pole"] * self.poles.size + ["zero"] * self.zeros.size,
            "re": np.concatenate([self.poles.real, self.zeros.real]),
            "im": np.concatenate([self.poles.imag, self.zeros.imag]),
        })


def pole_angles(order: int) -> np.ndarray:
    """Angular positions pi*(2k + n + 1)/(2n) for k = 0 .. n-1."""
    k = np.arange(order)
    return np.pi * (2 * k + order + 1) / (2 * order)


def _poles(topology: str, order: int, domain: str) -> np.ndarray:
    angle = pole_angles(order)
    if domain == 'digital_fir':
        return np.zeros(order, dtype=complex)
    if domain == 'analog':
        if topology == 'chebyshev1':
            return CHEBYSHEV1_REAL_AXIS_SCALE * np.cos(angle) + 1j * np.sin(angle)
        return np.cos(angle) + 1j * np.sin(angle)
    r = IIR_BUTTERWORTH_RADIUS if topology == 'butterworth' else IIR_DEFAULT_RADIUS
    return r * np.exp(1j * angle)


def _zeros(order: int, response_type: str, domain: str) -> np.ndarray:
    if domain == 'digital_fir':
        i = np.arange(order)
        return np.exp(2j * np.pi * i / order)
    if response_type in ('highpass', 'bandpass'):
        return np.zeros(order, dtype=complex)
    return np.zeros(0, dtype=complex)


def synthesize_pole_zero(
    topology: str,
    order: int,
    response_type: str,
    domain: str,
) -> PoleZeroSet:
    """
    Build the pole/zero layout for a filter description.

    Args:
        topology:      Prototype name (affects analog / IIR pole radius).
        order:         Number of poles to place.
        response_type: 'highpass' / 'bandpass' add zeros at the origin.
        domain:        'analog', 'digital_iir' or 'digital_fir'.

    Returns:
        PoleZeroSet with exactly ``order`` poles.
    """
    return PoleZeroSet(
        poles=_poles(topology, order, domain),
        zeros=_zeros(order, response_type, domain),
    )
