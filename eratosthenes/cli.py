"""
Command-line entry point: print every prime up to a bound.

Usage:
    eratosthenes-primes            # primes <= 3571 (the first 500)
    eratosthenes-primes 20         # 2 3 5 7 11 13 17 19, one per line
    python -m eratosthenes 100000
"""

import argparse
import sys
from itertools import islice
from typing import List, Optional, TextIO

from .primes import SieveMemoryError, compute_primes

# The first 500 primes are found from 2 to 3571
DEFAULT_BOUND = 3571

# Lines per write() call
WRITE_BATCH = 4096


def parse_bound(text: str) -> int:
    """Parse the bound argument; non-integers are a usage error."""
    try:
        return int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid bound {text!r}: expected an integer"
        ) from None


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='eratosthenes-primes',
        description='Print all primes up to BOUND using the sieve of Eratosthenes, one per line.',
    )
    parser.add_argument('bound', nargs='?', type=parse_bound, default=DEFAULT_BOUND,
                        help=f'Inclusive upper limit (default: {DEFAULT_BOUND})')
    return parser


def write_primes(N: int, out: TextIO) -> int:
    """
    Write the primes <= N to out, one decimal per line.

    Returns
    -------
    int
        Number of primes written.
    """
    primes = compute_primes(N)
    written = 0
    while True:
        batch = list(islice(primes, WRITE_BATCH))
        if not batch:
            break
        out.write(''.join(f"{p}\n" for p in batch))
        written += len(batch)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        write_primes(args.bound, sys.stdout)
    except SieveMemoryError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 1

    sys.stdout.flush()
    return 0


if __name__ == '__main__':
    sys.exit(main())
