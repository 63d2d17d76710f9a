"""
Bit-vector sieve.

Same marking scheme as primes.composite_flags, but one bit per integer
instead of one byte, so the marker for N costs about N/8 bytes.

Bit convention: bit i set means i is composite.
"""

from math import isqrt
from typing import List

from bitarray import bitarray
from bitarray.util import zeros

from .primes import SieveMemoryError, check_bound


def bit_composite_flags(N: int) -> bitarray:
    """
    Return the composite bit marker for [0, N].

    Parameters
    ----------
    N : int
        Upper bound (inclusive), N >= 0.

    Returns
    -------
    bitarray
        N+1 bits; bit i is 1 iff i is a composite found by the sieve.
    """
    N = check_bound(N)
    try:
        marks = zeros(max(N + 1, 0))
    except (MemoryError, ValueError, OverflowError) as exc:
        # bitarray raises OverflowError for sizes past ssize_t
        raise SieveMemoryError(N) from exc

    for i in range(2, isqrt(max(N, 0)) + 1):
        if not marks[i]:
            marks[i * i::i] = True
    return marks


def bit_sieve_primes(N: int) -> List[int]:
    """Return all primes <= N, ascending, using a bit-vector marker."""
    N = check_bound(N)
    if N < 2:
        return []
    marks = bit_composite_flags(N)
    primes = [2]
    primes.extend(i for i in range(3, N + 1, 2) if not marks[i])
    return primes


def bit_sieve_count(N: int) -> int:
    """Return pi(N) using the bitarray's population count."""
    N = check_bound(N)
    if N < 2:
        return 0
    marks = bit_composite_flags(N)
    # bits 0 and 1 are never set
    return (N + 1) - 2 - marks.count(1)
