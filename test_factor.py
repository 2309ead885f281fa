import random

import pytest
from sympy import isprime, randprime

from rsattack import MalformedModulus, PrimeFactorPair, factor, prime_factors


def test_textbook_modulus():
    assert factor(3233) == (53, 61)
    assert factor(3233) == PrimeFactorPair(p=53, q=61)


@pytest.mark.parametrize("n,p,q", [
    (1022117, 1009, 1013),
    (100160063, 10007, 10009),
    (6, 2, 3),
    (202, 2, 101),
])
def test_semiprimes(n, p, q):
    res = factor(n)
    assert (res.p, res.q) == (p, q)
    assert res.p * res.q == n


def test_prime_factors_with_multiplicity():
    assert prime_factors(360) == [2, 2, 2, 3, 3, 5]
    assert prime_factors(97) == [97]
    assert prime_factors(1) == []
    assert prime_factors(0) == []


@pytest.mark.parametrize("n", [0, 1, 2, 97, 49, 8, 27, 30, 1001])
def test_malformed_moduli(n):
    with pytest.raises(MalformedModulus):
        factor(n)


def test_random_semiprimes_factor_into_primes():
    random.seed(1234)
    for _ in range(25):
        p = int(randprime(100, 5000))
        q = int(randprime(100, 5000))
        if p == q:
            continue
        res = factor(p * q)
        assert res == (min(p, q), max(p, q))
        assert isprime(res.p) and isprime(res.q)
