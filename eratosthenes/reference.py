"""
Plain-Python reference sieves.

Slow, dependency-free implementations used to cross-check the numpy and
bit-vector sieves. They follow the algorithm literally instead of using
slice assignment.
"""

from typing import List

from .primes import check_bound


def list_sieve(N: int) -> List[int]:
    """
    Sieve with a Python list, forming each product i*j explicitly.

    Parameters
    ----------
    N : int
        Upper bound (inclusive).

    Returns
    -------
    list
        Primes <= N in ascending order.
    """
    N = check_bound(N)
    if N < 2:
        return []

    composite = [False] * (N + 1)
    i = 2
    while i * i <= N:
        if not composite[i]:
            j = i
            while i * j <= N:
                composite[i * j] = True
                j += 1
        i += 1

    primes = [2]
    primes.extend(k for k in range(3, N + 1, 2) if not composite[k])
    return primes


def incremental_sieve(N: int) -> List[int]:
    """
    Walk every guess in [2, N]; each unmarked guess is prime and marks
    guess^2, guess^2 + guess, ... up to N.
    """
    N = check_bound(N)
    composite = [False] * (max(N, 1) + 1)
    primes = []
    for guess in range(2, N + 1):
        if composite[guess]:
            continue
        primes.append(guess)
        for multiple in range(guess * guess, N + 1, guess):
            composite[multiple] = True
    return primes
