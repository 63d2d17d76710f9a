#!/usr/bin/env python3
"""
Verify and benchmark every sieve implementation.

Usage:
    python run_benchmark.py
    python run_benchmark.py --config config/custom.yaml --save
"""

import argparse
import sys
import time

from eratosthenes.benchmark import load_config, run_benchmark, verify_implementations


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Benchmark sieve of Eratosthenes implementations')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Path to config file')
    parser.add_argument('--save', action='store_true',
                        help='Write benchmark.csv to the configured output_dir')
    parser.add_argument('--skip-verify', action='store_true',
                        help='Skip the known-answer checks')
    args = parser.parse_args(argv)

    config = load_config(args.config)

    print("=" * 60)
    print("Sieve of Eratosthenes - Implementation Benchmark")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  bench_inputs = {config['bench_inputs']}")
    print(f"  repeats = {config['repeats']}")
    print(f"  implementations = {config['implementations']}")
    print()

    total_start = time.time()

    if not args.skip_verify:
        print("-" * 60)
        print("1. Known-answer verification")
        print("-" * 60)
        failures = verify_implementations(config['implementations'])
        if failures:
            print(f"\n✗ {len(failures)} verification failures:")
            for msg in failures[:20]:
                print(f"  {msg}")
            return 1
        print("  ✓ All implementations agree")
        print()

    print("-" * 60)
    print("2. Timing")
    print("-" * 60)
    df = run_benchmark(config['bench_inputs'], config['repeats'], config['implementations'])
    print()

    print("=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(df.to_string(index=False, float_format=lambda x: f"{x:.4f}"))

    if args.save:
        output_dir = config['output_dir']
        output_dir.mkdir(parents=True, exist_ok=True)
        df.to_csv(output_dir / 'benchmark.csv', index=False)
        print(f"\nResults saved to {output_dir.absolute() / 'benchmark.csv'}")

    print(f"\nTotal runtime: {time.time() - total_start:.1f}s")
    return 0


if __name__ == '__main__':
    sys.exit(main())
