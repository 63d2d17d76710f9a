"""
Prime generation utilities.

Responsibility: the sieve of Eratosthenes over [0, N]. No I/O, no timing.

The marker array follows the composite convention: marker[i] is True iff
i is known composite. After marking, every i in [2, N] with marker[i]
False is prime. Indices 0 and 1 are never read.
"""

import numbers
from math import isqrt
from typing import Iterator

import numpy as np


class InvalidBoundError(ValueError):
    """Raised when a bound is not an integer."""


class SieveMemoryError(MemoryError):
    """Raised when the marker array for a bound cannot be allocated."""

    def __init__(self, bound: int):
        super().__init__(
            f"cannot allocate a sieve of {bound + 1:,} entries for bound {bound:,}"
        )
        self.bound = bound


def check_bound(N) -> int:
    """
    Validate a bound and return it as a Python int.

    Accepts Python and numpy integers. Booleans, floats and strings
    raise InvalidBoundError.
    """
    if isinstance(N, bool) or not isinstance(N, numbers.Integral):
        raise InvalidBoundError(
            f"bound must be an integer, got {type(N).__name__} {N!r}"
        )
    return int(N)


def composite_flags(N: int) -> np.ndarray:
    """
    Return the composite marker array after the marking phase.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        Boolean array of length N+1 where flags[i] is True iff i is a
        composite found by the sieve. For N < 2 nothing is marked and the
        array has length max(N+1, 0).
    """
    N = check_bound(N)
    try:
        flags = np.zeros(max(N + 1, 0), dtype=bool)
    except (MemoryError, ValueError, OverflowError) as exc:
        # numpy raises ValueError for sizes past its maximum dimension
        raise SieveMemoryError(N) from exc

    # Every composite <= N has a prime factor <= isqrt(N)
    for i in range(2, isqrt(max(N, 0)) + 1):
        if not flags[i]:
            # i*i, i*(i+1), ... ; smaller multiples carry a smaller prime factor
            flags[i * i::i] = True
    return flags


def compute_primes(N: int) -> Iterator[int]:
    """
    Lazily produce all primes <= N in ascending order.

    The bound is validated immediately; sieving starts on first
    iteration. Each call sieves afresh. For N < 2 the iterator is empty
    and no marker array is allocated.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    Iterator[int]
        Primes 2, 3, 5, ... up to N.
    """
    return _iter_primes(check_bound(N))


def _iter_primes(N: int) -> Iterator[int]:
    if N < 2:
        return

    flags = composite_flags(N)

    yield 2
    for i in np.flatnonzero(~flags[3::2]):
        yield 2 * int(i) + 3


def primes_upto(N: int) -> np.ndarray:
    """
    Return array of all primes <= N.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    np.ndarray
        int64 array of primes, empty for N < 2.
    """
    N = check_bound(N)
    if N < 2:
        return np.empty(0, dtype=np.int64)
    flags = composite_flags(N)
    flags[:2] = True
    return np.flatnonzero(~flags).astype(np.int64)


def count_primes(N: int) -> int:
    """Return pi(N), the number of primes <= N."""
    N = check_bound(N)
    if N < 2:
        return 0
    flags = composite_flags(N)
    return int(N - 1 - np.count_nonzero(flags[2:]))
