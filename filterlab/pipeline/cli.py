#!/usr/bin/env python3
"""
cli.py

Command-line entry point for the filter engine.

Usage examples:
    python main.py response --domain digital_fir --window blackman --taps 63 --cutoff 2000
    python main.py response --domain analog --topology chebyshev1 --order 5 --ripple 0.5
    python main.py polezero --domain digital_iir --topology elliptic --order 6
    python main.py adaptive --algorithm nlms --mu 0.05 --steps 300 --seed 7
"""

from __future__ import annotations

import argparse
from typing import List, Optional

import pandas as pd

from filterlab.pipeline.config import (
    ALGORITHMS, DEFAULT_STEP_COUNT, DOMAINS, RESPONSE_TYPES, TOPOLOGIES, WINDOWS,
    AdaptiveSpecification, FilterSpecification,
)
from filterlab.pipeline.engine import (
    compute_pole_zero, compute_response, run_adaptive_simulation,
)


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = FilterSpecification()
    parser.add_argument('--domain', type=str, default=defaults.domain, choices=DOMAINS,
                        help=f'Filter domain (default: {defaults.domain})')
    parser.add_argument('--type', dest='response_type', type=str,
                        default=defaults.response_type, choices=RESPONSE_TYPES,
                        help=f'Response type (default: {defaults.response_type})')
    parser.add_argument('--topology', type=str, default=defaults.topology, choices=TOPOLOGIES,
                        help=f'Analog / IIR prototype (default: {defaults.topology})')
    parser.add_argument('--order', type=int, default=defaults.order,
                        help=f'Filter order (default: {defaults.order})')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Filter design, frequency response and adaptive-filter engine",
    )
    sub = parser.add_subparsers(dest='command', required=True)

    # Frequency / time response
    resp = sub.add_parser('response', help='Frequency and time-domain response')
    _add_filter_arguments(resp)
    defaults = FilterSpecification()
    resp.add_argument('--window', type=str, default=defaults.window, choices=WINDOWS,
                      help=f'FIR window (default: {defaults.window})')
    resp.add_argument('--cutoff', type=float, default=defaults.cutoff_hz,
                      help=f'Cutoff frequency in Hz (default: {defaults.cutoff_hz:g})')
    resp.add_argument('--sample-rate', type=float, default=defaults.sample_rate_hz,
                      help=f'Sample rate in Hz (default: {defaults.sample_rate_hz:g})')
    resp.add_argument('--taps', type=int, default=defaults.tap_count,
                      help=f'Number of FIR taps, odd (default: {defaults.tap_count})')
    resp.add_argument('--ripple', type=float, default=defaults.ripple_db,
                      help=f'Passband ripple in dB (default: {defaults.ripple_db:g})')
    resp.add_argument('--rows', type=int, default=16,
                      help='Frequency rows to print (default: 16)')

    # Pole / zero layout
    pz = sub.add_parser('polezero', help='Pole / zero layout')
    _add_filter_arguments(pz)

    # Adaptive simulation
    ad = sub.add_parser('adaptive', help='Adaptive filter simulation')
    ad.add_argument('--algorithm', type=str, default='lms', choices=ALGORITHMS,
                    help='Adaptive algorithm (default: lms)')
    ad.add_argument('--mu', type=float, default=0.01,
                    help='Step size for LMS / NLMS (default: 0.01)')
    ad.add_argument('--steps', type=int, default=DEFAULT_STEP_COUNT,
                    help=f'Number of time steps (default: {DEFAULT_STEP_COUNT})')
    ad.add_argument('--seed', type=int, default=None,
                    help='Noise seed for a reproducible run')
    ad.add_argument('--rows', type=int, default=10,
                    help='Trailing trace rows to print (default: 10)')
    return parser


def _run_response(args) -> None:
    spec = FilterSpecification(
        domain=args.domain, response_type=args.response_type, topology=args.topology,
        window=args.window, cutoff_hz=args.cutoff, sample_rate_hz=args.sample_rate,
        order=args.order, tap_count=args.taps, ripple_db=args.ripple,
    )
    report = compute_response(spec)
    freq_df = report.frequency_report.to_frame()

    print(f"[INFO] {spec.domain} {spec.response_type} "
          f"({spec.window if spec.is_fir else spec.topology}), "
          f"{report.coefficients.size} coefficients")
    step = max(1, len(freq_df) // max(1, args.rows))
    print(freq_df.iloc[::step].to_string(index=False, float_format='%.4f'))
    print(f"\nGroup delay at {freq_df['freq_Hz'].iloc[-1]:.0f} Hz: "
          f"{freq_df['group_delay'].iloc[-1]:.2f} samples")
    print("\nTime-domain response (first samples):")
    print(report.time_frame().head(10).to_string(index=False, float_format='%.5f'))


def _run_pole_zero(args) -> None:
    pz = compute_pole_zero(args.topology, args.order, args.response_type, args.domain)
    print(f"[INFO] {len(pz.poles)} poles, {len(pz.zeros)} zeros "
          f"(max |p| = {pz.max_pole_radius:.3f})")
    print(pz.to_frame().to_string(index=False, float_format='%.4f'))
    print("\nStable" if pz.is_stable(args.domain) else "\nUnstable")


def _run_adaptive(args) -> None:
    spec = AdaptiveSpecification(algorithm=args.algorithm, step_size=args.mu,
                                 step_count=args.steps, seed=args.seed)
    trace = run_adaptive_simulation(spec)
    df = trace.to_frame()
    print(f"[INFO] {spec.algorithm}: {len(trace)} steps")
    if df.empty:
        return
    print(df.tail(args.rows).to_string(index=False, float_format='%.4f'))
    tail = df['residual'].iloc[len(df) // 2:]
    print(f"\nResidual RMS (second half) = {float((tail ** 2).mean() ** 0.5):.4g}")


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI arguments and run the selected engine command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    pd.set_option('display.width', 120)

    runners = {
        'response': _run_response,
        'polezero': _run_pole_zero,
        'adaptive': _run_adaptive,
    }
    try:
        runners[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
