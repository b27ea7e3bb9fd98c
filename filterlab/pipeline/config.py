#!/usr/bin/env python3
"""
config.py

Dataclass-based specification objects for the filter engine.

Two independent specification groups:
- FilterSpecification:   Filter design parameters (domain, topology, window, etc.)
- AdaptiveSpecification: Adaptive-filter simulation settings (algorithm, mu, steps)

Both are plain values: the engine never mutates them and keeps no history
between calls.  ``validate()`` rejects precondition violations before they
reach the numeric core.
"""

import numbers
from dataclasses import asdict, dataclass
from typing import Optional


DOMAINS = ('analog', 'digital_iir', 'digital_fir')
RESPONSE_TYPES = ('lowpass', 'highpass', 'bandpass', 'bandstop', 'notch')
TOPOLOGIES = ('butterworth', 'chebyshev1', 'chebyshev2', 'elliptic', 'bessel')
WINDOWS = ('rectangular', 'hamming', 'hanning', 'blackman')
ALGORITHMS = ('lms', 'nlms', 'rls', 'kalman')

# Adaptive filter length is fixed for every gradient / RLS algorithm
ADAPTIVE_FILTER_ORDER = 8
DEFAULT_STEP_COUNT = 150


def is_integer(value) -> bool:
    """True for int and numpy integer values (bool excluded)."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class FilterSpecification:
    """Filter design parameters.

    Attributes:
        domain:         'analog', 'digital_iir' or 'digital_fir'.
        response_type:  'lowpass', 'highpass', 'bandpass', 'bandstop' or 'notch'.
        topology:       Analog / IIR prototype (ignored for ``digital_fir``).
        window:         FIR window name (used only for ``digital_fir``).
        cutoff_hz:      Cutoff frequency [Hz].
        sample_rate_hz: Sampling rate [Hz].  Also drives the synthetic
                        impulse response of the analog / IIR path.
        order:          Filter order (analog / IIR).
        tap_count:      Number of FIR taps (odd).
        ripple_db:      Passband ripple [dB] for chebyshev1 / elliptic.

    The Nyquist bound ``cutoff_hz < sample_rate_hz / 2`` is deliberately
    not checked; out-of-range cutoffs produce aliased output.
    """
    domain: str = 'analog'
    response_type: str = 'lowpass'
    topology: str = 'butterworth'
    window: str = 'hamming'
    cutoff_hz: float = 1000.0
    sample_rate_hz: float = 48000.0
    order: int = 4
    tap_count: int = 31
    ripple_db: float = 1.0

    def validate(self) -> 'FilterSpecification':
        """Raise ValueError on a precondition violation; return self otherwise."""
        if not self.cutoff_hz > 0:
            raise ValueError(f"cutoff_hz must be positive, got {self.cutoff_hz}")
        if not self.sample_rate_hz > 0:
            raise ValueError(f"sample_rate_hz must be positive, got {self.sample_rate_hz}")
        if not is_integer(self.order):
            raise ValueError(f"order must be an integer, got {self.order!r}")
        if self.order <= 0:
            raise ValueError(f"order must be >= 1, got {self.order}")
        if (not is_integer(self.tap_count) or self.tap_count < 3
                or self.tap_count % 2 == 0):
            raise ValueError(f"tap_count must be an odd integer >= 3, got {self.tap_count}")
        if self.ripple_db < 0:
            raise ValueError(f"ripple_db must be non-negative, got {self.ripple_db}")
        return self

    @property
    def is_fir(self) -> bool:
        return self.domain == 'digital_fir'

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class AdaptiveSpecification:
    """Adaptive-filter simulation settings.

    Attributes:
        algorithm:    'lms', 'nlms', 'rls' or 'kalman'.  Any other name runs
                      as a pass-through (weights and output never change).
        step_size:    Step size mu for LMS / NLMS.
        step_count:   Number of time steps to simulate.
        filter_order: Number of adaptive taps (fixed at 8).
        running:      Run flag; when False the simulation is skipped and an
                      empty trace is returned.
        seed:         Seed for the noise generator.  ``None`` draws fresh
                      entropy, so traces differ between runs.
    """
    algorithm: str = 'lms'
    step_size: float = 0.01
    step_count: int = DEFAULT_STEP_COUNT
    filter_order: int = ADAPTIVE_FILTER_ORDER
    running: bool = True
    seed: Optional[int] = None

    def validate(self) -> 'AdaptiveSpecification':
        """Raise ValueError on a precondition violation; return self otherwise."""
        if not self.step_size > 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.step_count < 0:
            raise ValueError(f"step_count must be non-negative, got {self.step_count}")
        if self.filter_order != ADAPTIVE_FILTER_ORDER:
            raise ValueError(
                f"filter_order is fixed at {ADAPTIVE_FILTER_ORDER}, got {self.filter_order}")
        return self

    def to_dict(self) -> dict:
        return asdict(self)
