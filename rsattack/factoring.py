# rsattack/factoring.py
# Plain trial division. Kept O(sqrt n) on purpose: the factoring attack is
# only "fast" next to brute force, and the gap is what the benchmark shows.

from __future__ import annotations
from typing import List, NamedTuple

from .errors import InvalidInteger, MalformedModulus


class PrimeFactorPair(NamedTuple):
    p: int
    q: int


def prime_factors(n: int) -> List[int]:
    """All prime factors of n with multiplicity, in ascending order of discovery."""
    if n < 0:
        raise InvalidInteger("n must be non-negative")
    res: List[int] = []
    if n < 2:
        return res

    # halve until odd
    while n % 2 == 0:
        res.append(2)
        n //= 2

    i = 3
    while i * i <= n:
        while n % i == 0:
            res.append(i)
            n //= i
        i += 2

    # leftover cofactor is prime
    if n > 1:
        res.append(n)
    return res


def factor(n: int) -> PrimeFactorPair:
    """
    Split an RSA modulus into its two primes, smaller first.
    Raises MalformedModulus unless n = p*q with p != q both prime.
    """
    fs = prime_factors(n)
    if len(fs) != 2:
        raise MalformedModulus(
            f"n={n} has {len(fs)} prime factor(s) {fs}, expected exactly two")
    p, q = fs
    if p == q:
        raise MalformedModulus(f"n={n} is the square of {p}, expected distinct primes")
    return PrimeFactorPair(p, q)
