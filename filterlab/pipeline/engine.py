#!/usr/bin/env python3
"""
engine.py -- Public entry points of the filter engine.

Public API:
    compute_response(spec)
    compute_pole_zero(topology, order, response_type, domain)
    run_adaptive_simulation(spec, rng=None)

Every call validates its input, computes from scratch and keeps no state
between calls.  Pass a ResponseCache to reuse results for an unchanged
specification.
"""
from __future__ import annotations

from typing import Optional

import numpy as np

from filterlab.fir_model.adaptive_filter import SimulationTrace, simulate
from filterlab.frequency_transform.cache import ResponseCache
from filterlab.frequency_transform.sweep import ResponseReport, sweep
from filterlab.pipeline.config import AdaptiveSpecification, FilterSpecification, is_integer
from filterlab.pole_zero.synthesis import PoleZeroSet, synthesize_pole_zero


def compute_response(spec: FilterSpecification,
                     cache: Optional[ResponseCache] = None) -> ResponseReport:
    """Frequency report, impulse / step response and coefficients for *spec*.

    Raises:
        ValueError: If *spec* violates a precondition.
    """
    spec.validate()
    if cache is not None:
        return cache.get_or_compute(spec, sweep, kind="response")
    return sweep(spec)


def compute_pole_zero(topology: str, order: int, response_type: str,
                      domain: str) -> PoleZeroSet:
    """Pole/zero layout for the given filter description.

    Raises:
        ValueError: If *order* is not a positive integer.
    """
    if not is_integer(order):
        raise ValueError(f"order must be an integer, got {order!r}")
    if order <= 0:
        raise ValueError(f"order must be >= 1, got {order}")
    return synthesize_pole_zero(topology, order, response_type, domain)


def run_adaptive_simulation(spec: AdaptiveSpecification,
                            rng: Optional[np.random.Generator] = None) -> SimulationTrace:
    """Run the adaptive-filter simulation described by *spec*.

    Args:
        spec: Adaptive specification.  ``spec.seed`` seeds the noise source
              when *rng* is not given.
        rng:  Explicit noise generator (overrides ``spec.seed``).

    Raises:
        ValueError: If *spec* violates a precondition.
    """
    return simulate(spec, rng)
