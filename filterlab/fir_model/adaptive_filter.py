#!/usr/bin/env python3
"""
adaptive_filter.py

Adaptive noise-cancellation simulation with LMS, NLMS, simplified RLS and
a scalar Kalman estimator.

Scenario (per step n):
    clean        = sin(2*pi*n/20)
    interference = 0.5*cos(2*pi*n/5)
    d(n)         = clean + interference + U[-0.1, 0.1]      (desired)
    x(n)         = 0.9*interference + U[-0.05, 0.05]        (reference)

The FIR estimators keep an 8-sample regressor buffer
phi = [x(n), x(n-1), ..., x(n-7)] and predict yhat = phi . w.

Update rules:
    lms    : w += 2*mu*e*phi
    nlms   : w += mu*e*phi / (phi.phi + 1e-6)
    rls    : w += 0.5*e*phi          (simplified stand-in; no P matrix)
    kalman : scalar random-walk filter on d(n), Q = 0.1, R = 0.5

Noise is drawn from an injected numpy Generator, so a seeded run is
reproducible bit for bit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from filterlab.pipeline.config import ADAPTIVE_FILTER_ORDER, AdaptiveSpecification


# ------------------------------------------------------------------ #
# Scenario tunables
# ------------------------------------------------------------------ #
CLEAN_PERIOD = 20
INTERFERENCE_PERIOD = 5
INTERFERENCE_AMPLITUDE = 0.5
REFERENCE_GAIN = 0.9
DESIRED_NOISE = 0.1       # half-width of the uniform noise on d(n)
REFERENCE_NOISE = 0.05    # half-width of the uniform noise on x(n)

NLMS_EPS = 1e-6
RLS_GAIN = 0.5
KALMAN_Q = 0.1
KALMAN_R = 0.5


# =====================================================
# Estimators
# =====================================================

class AdaptiveEstimator:
    """Base class for per-sample adaptive estimators.

    Subclasses implement ``step(phi, d)`` returning (output, error).  The
    base class itself is the pass-through estimator: output 0, weights
    never change.

    Attributes:
        weights: Adaptive FIR weights (length ``num_taps``).
    """

    def __init__(self, num_taps: int = ADAPTIVE_FILTER_ORDER):
        self.weights = np.zeros(num_taps)

    def predict(self, phi: np.ndarray) -> float:
        return float(phi.dot(self.weights))

    def step(self, phi: np.ndarray, d: float) -> Tuple[float, float]:
        y = self.predict(phi)
        return y, d - y

    @property
    def weight_norm(self) -> float:
        return float(np.linalg.norm(self.weights))


class LMSEstimator(AdaptiveEstimator):
    """Least Mean Squares: w += 2*mu*e*phi."""

    def __init__(self, mu: float, num_taps: int = ADAPTIVE_FILTER_ORDER):
        super().__init__(num_taps)
        self.mu = mu

    def step(self, phi, d):
        y = self.predict(phi)
        e = d - y
        self.weights += 2.0 * self.mu * e * phi
        return y, e


class NLMSEstimator(AdaptiveEstimator):
    """Normalised LMS: step size scaled by the regressor power."""

    def __init__(self, mu: float, num_taps: int = ADAPTIVE_FILTER_ORDER):
        super().__init__(num_taps)
        self.mu = mu

    def step(self, phi, d):
        y = self.predict(phi)
        e = d - y
        power = phi.dot(phi) + NLMS_EPS
        self.weights += self.mu * e * phi / power
        return y, e


class SimplifiedRLSEstimator(AdaptiveEstimator):
    """Fixed-gain stand-in for RLS.

    A full RLS carries an inverse-correlation matrix P and a gain vector
    K = P*phi / (lambda + phi'*P*phi).  This estimator replaces K with the
    constant 0.5*phi, which mimics the fast initial convergence of RLS
    without the matrix update.
    """

    def step(self, phi, d):
        y = self.predict(phi)
        e = d - y
        self.weights += RLS_GAIN * e * phi
        return y, e


class ScalarKalmanEstimator(AdaptiveEstimator):
    """Scalar Kalman filter with a random-walk state model.

    Predict:  x' = x,           P' = P + Q
    Update:   K  = P'/(P' + R), x  = x' + K*(d - x'),  P = (1 - K)*P'
    Output is the updated estimate; error is the post-update residual d - x.
    The FIR weights are unused and stay at zero.
    """

    def __init__(self, q: float = KALMAN_Q, r: float = KALMAN_R,
                 num_taps: int = ADAPTIVE_FILTER_ORDER):
        super().__init__(num_taps)
        self.q = q
        self.r = r
        self.x = 0.0
        self.P = 1.0

    def step(self, phi, d):
        x_pred = self.x
        P_pred = self.P + self.q
        K = P_pred / (P_pred + self.r)
        innovation = d - x_pred
        self.x = x_pred + K * innovation
        self.P = (1.0 - K) * P_pred
        return self.x, d - self.x


def create_estimator(algorithm: str, mu: float,
                     num_taps: int = ADAPTIVE_FILTER_ORDER) -> AdaptiveEstimator:
    """Create an estimator by short name.

    Available: lms, nlms, rls, kalman.  Unknown names return the
    pass-through base estimator.
    """
    estimator_map = {
        'lms': lambda: LMSEstimator(mu, num_taps),
        'nlms': lambda: NLMSEstimator(mu, num_taps),
        'rls': lambda: SimplifiedRLSEstimator(num_taps),
        'kalman': lambda: ScalarKalmanEstimator(num_taps=num_taps),
    }
    creator = estimator_map.get(algorithm, lambda: AdaptiveEstimator(num_taps))
    return creator()


# =====================================================
# Trace
# =====================================================

@dataclass(frozen=True)
class SimulationStep:
    """One time step of the simulation.

    Attributes:
        n:                Step index.
        desired_signal:   d(n) = clean + interference + noise.
        clean_reference:  Clean tone sin(2*pi*n/20).
        estimator_output: Estimator output yhat(n).
        error:            d(n) - yhat(n) (post-update residual for kalman).
        weight_norm:      ||w|| after the update.
        residual:         error - clean_reference.
    """
    n: int
    desired_signal: float
    clean_reference: float
    estimator_output: float
    error: float
    weight_norm: float
    residual: float


@dataclass(frozen=True)
class SimulationTrace:
    """Immutable, ordered sequence of SimulationStep records."""
    algorithm: str
    steps: Tuple[SimulationStep, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __getitem__(self, i):
        return self.steps[i]

    def to_frame(self) -> pd.DataFrame:
        columns = list(SimulationStep.__dataclass_fields__)
        return pd.DataFrame([[getattr(s, c) for c in columns] for s in self.steps],
                            columns=columns)


# =====================================================
# Simulator
# =====================================================

class AdaptiveSimulator:
    """Single-use simulation run: configured -> running -> completed.

    Args:
        spec: Adaptive specification (validated on construction).
        rng:  Noise source.  Defaults to ``np.random.default_rng(spec.seed)``.
    """

    CONFIGURED = 'configured'
    RUNNING = 'running'
    COMPLETED = 'completed'

    def __init__(self, spec: AdaptiveSpecification, rng: Optional[np.random.Generator] = None):
        self.spec = spec.validate()
        self.rng = rng if rng is not None else np.random.default_rng(spec.seed)
        self.state = self.CONFIGURED
        self.trace: Optional[SimulationTrace] = None

    def _scenario(self, n: int) -> Tuple[float, float, float]:
        """(clean, desired, reference) for step *n*."""
        clean = np.sin(2.0 * np.pi * n / CLEAN_PERIOD)
        interference = INTERFERENCE_AMPLITUDE * np.cos(2.0 * np.pi * n / INTERFERENCE_PERIOD)
        desired = clean + interference + self.rng.uniform(-DESIRED_NOISE, DESIRED_NOISE)
        reference = REFERENCE_GAIN * interference + self.rng.uniform(-REFERENCE_NOISE, REFERENCE_NOISE)
        return float(clean), float(desired), float(reference)

    def run(self) -> SimulationTrace:
        """Execute every step and return the trace."""
        if self.state != self.CONFIGURED:
            raise RuntimeError(f"Simulation already {self.state}; create a new simulator.")

        spec = self.spec
        if not spec.running:
            self.state = self.COMPLETED
            self.trace = SimulationTrace(spec.algorithm)
            return self.trace

        self.state = self.RUNNING
        estimator = create_estimator(spec.algorithm, spec.step_size, spec.filter_order)
        phi = np.zeros(spec.filter_order)   # regressor buffer, newest first
        steps: List[SimulationStep] = []

        for n in range(spec.step_count):
            clean, d, x = self._scenario(n)

            # Update regressor: phi = [x(n), x(n-1), ..., x(n-L+1)]
            phi = np.roll(phi, 1)
            phi[0] = x

            y, e = estimator.step(phi, d)
            steps.append(SimulationStep(
                n=n,
                desired_signal=d,
                clean_reference=clean,
                estimator_output=float(y),
                error=float(e),
                weight_norm=estimator.weight_norm,
                residual=float(e) - clean,
            ))

        self.trace = SimulationTrace(spec.algorithm, tuple(steps))
        self.state = self.COMPLETED
        return self.trace


def simulate(spec: AdaptiveSpecification,
             rng: Optional[np.random.Generator] = None) -> SimulationTrace:
    """Run one adaptive simulation for *spec* and return its trace."""
    return AdaptiveSimulator(spec, rng).run()
