"""Sieve of Eratosthenes: list every prime up to a bound."""
