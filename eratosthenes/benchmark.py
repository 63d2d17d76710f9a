"""
Cross-check and benchmark the sieve implementations.

Every implementation is first tested against known prime counts and
known prime lists, then timed on the configured inputs. Results come
back as a DataFrame with one row per (implementation, bound).
"""

import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import yaml

from .bit_sieve import bit_sieve_primes
from .primes import compute_primes
from .reference import incremental_sieve, list_sieve


def numpy_sieve(N: int) -> List[int]:
    """compute_primes, materialized."""
    return list(compute_primes(N))


IMPLEMENTATIONS: Dict[str, Callable[[int], List[int]]] = {
    'numpy_sieve': numpy_sieve,
    'bit_sieve': bit_sieve_primes,
    'list_sieve': list_sieve,
    'incremental_sieve': incremental_sieve,
}

# bound -> pi(bound)
KNOWN_COUNTS = {
    -5: 0, -1: 0, 0: 0,
    1: 0, 2: 1, 3: 2,
    5: 3, 7: 4, 10: 4,
    11: 5, 13: 6, 19: 8,
    3_571: 500, 100_000: 9_592, 224_737: 20_000,
}

KNOWN_LISTS = {
    -1: [], 0: [],
    1: [], 2: [2],
    3: [2, 3], 4: [2, 3],
    5: [2, 3, 5], 6: [2, 3, 5],
    7: [2, 3, 5, 7], 11: [2, 3, 5, 7, 11],
    18: [2, 3, 5, 7, 11, 13, 17], 19: [2, 3, 5, 7, 11, 13, 17, 19],
    20: [2, 3, 5, 7, 11, 13, 17, 19],
}

DEFAULT_CONFIG = {
    'bench_inputs': [2, 500_000, 1_000_000],
    'repeats': 3,
    'output_dir': 'data/results',
    'implementations': list(IMPLEMENTATIONS),
}


def load_config(path: Optional[Path] = None) -> dict:
    """
    Load a YAML benchmark config and merge it over DEFAULT_CONFIG.

    Parameters
    ----------
    path : Path, optional
        YAML file. None returns a copy of the defaults.

    Returns
    -------
    dict
        Validated config.
    """
    config = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_CONFIG.items()}
    if path is not None:
        with open(path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{path}: top level must be a mapping")
        unknown = set(loaded) - set(DEFAULT_CONFIG)
        if unknown:
            raise ValueError(f"{path}: unknown keys {sorted(unknown)}")
        config.update(loaded)

    bounds = config['bench_inputs']
    if not isinstance(bounds, list) or not bounds:
        raise ValueError("bench_inputs must be a non-empty list")
    for b in bounds:
        if isinstance(b, bool) or not isinstance(b, int):
            raise ValueError(f"bench_inputs: {b!r} is not an integer")

    repeats = config['repeats']
    if isinstance(repeats, bool) or not isinstance(repeats, int) or repeats < 1:
        raise ValueError(f"repeats must be a positive integer, got {repeats!r}")

    names = config['implementations']
    if not isinstance(names, list) or not names:
        raise ValueError(f"implementations must be a non-empty list, got {names!r}")
    for name in names:
        if not isinstance(name, str) or name not in IMPLEMENTATIONS:
            raise ValueError(
                f"implementations: unknown {name!r} (choose from {list(IMPLEMENTATIONS)})"
            )

    output_dir = config['output_dir']
    if not isinstance(output_dir, (str, Path)) or not str(output_dir):
        raise ValueError(f"output_dir must be a path, got {output_dir!r}")
    config['output_dir'] = Path(output_dir)
    return config


def _select(names: Optional[List[str]]) -> Dict[str, Callable[[int], List[int]]]:
    if names is None:
        return dict(IMPLEMENTATIONS)
    return {name: IMPLEMENTATIONS[name] for name in names}


def verify_implementations(names: Optional[List[str]] = None,
                           verbose: bool = True) -> List[str]:
    """
    Check each implementation against KNOWN_COUNTS and KNOWN_LISTS.

    Returns
    -------
    list
        Failure messages; empty when every implementation agrees.
    """
    failures = []
    for name, func in _select(names).items():
        if verbose:
            print(f"  Testing {name}...", end=" ", flush=True)
        errors = 0

        for bound, expected in KNOWN_COUNTS.items():
            got = len(func(bound))
            if got != expected:
                errors += 1
                failures.append(f"{name}({bound}) found {got} primes, expected {expected}")

        for bound, expected in KNOWN_LISTS.items():
            got = list(func(bound))
            if got != expected:
                errors += 1
                failures.append(f"{name}({bound}) returned {got}, expected {expected}")

        if verbose:
            print("ok" if errors == 0 else f"{errors} failures")

    return failures


def time_implementation(func: Callable[[int], List[int]], bound: int,
                        repeats: int) -> Tuple[float, float, int]:
    """
    Time func(bound) over several runs.

    Returns
    -------
    tuple
        (best_seconds, mean_seconds, prime_count)
    """
    times = []
    count = 0
    for _ in range(repeats):
        t0 = time.perf_counter()
        count = len(func(bound))
        times.append(time.perf_counter() - t0)
    return min(times), float(np.mean(times)), count


def run_benchmark(bounds: List[int], repeats: int = 3,
                  names: Optional[List[str]] = None,
                  verbose: bool = True) -> pd.DataFrame:
    """
    Time every selected implementation on every bound.

    Parameters
    ----------
    bounds : list
        Upper bounds to sieve.
    repeats : int
        Runs per (implementation, bound); the best is reported.
    names : list, optional
        Implementation names. Defaults to all of IMPLEMENTATIONS.
    verbose : bool
        Print progress.

    Returns
    -------
    pd.DataFrame
        Columns: implementation, bound, prime_count, repeats,
        best_seconds, mean_seconds, relative. `relative` is best_seconds
        over the fastest best_seconds for the same bound.
    """
    rows = []
    for bound in bounds:
        if verbose:
            print(f"\nInput parameter value of {bound:,}")
        for name, func in _select(names).items():
            best, mean, count = time_implementation(func, bound, repeats)
            if verbose:
                print(f"  {name:<18} {best:>10.4f}s  ({count:,} primes)")
            rows.append({
                'implementation': name,
                'bound': bound,
                'prime_count': count,
                'repeats': repeats,
                'best_seconds': best,
                'mean_seconds': mean,
            })

    df = pd.DataFrame(rows, columns=['implementation', 'bound', 'prime_count',
                                     'repeats', 'best_seconds', 'mean_seconds'])
    if df.empty:
        df['relative'] = pd.Series(dtype=float)
        return df

    fastest = df.groupby('bound')['best_seconds'].transform('min')
    df['relative'] = df['best_seconds'] / fastest.where(fastest > 0, np.nan)
    return df
