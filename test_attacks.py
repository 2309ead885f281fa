import math
import random

import pytest
from sympy import randprime

from rsattack import (
    DivisionByZero, FactoringResult, InvalidInteger, MalformedModulus,
    NoModularInverse, NoSolution, brute_force_attack, factoring_attack, mod_exp,
)


def test_textbook_scenario():
    assert mod_exp(65, 17, 3233) == 2790
    assert brute_force_attack(17, 3233, 2790) == 65
    res = factoring_attack(17, 3233, 2790)
    assert res == FactoringResult(m=65, p=53, q=61, d=2753)


@pytest.mark.parametrize("p,q,e", [(3, 5, 3), (11, 13, 7), (2, 11, 3), (61, 53, 17)])
def test_round_trip(p, q, e):
    n = p * q
    step = 1 if n < 200 else n // 50
    for m in range(0, n, step):
        c = mod_exp(m, e, n)
        assert brute_force_attack(e, n, c) == m
        assert factoring_attack(e, n, c).m == m


def test_attacks_agree_on_random_keys():
    random.seed(99)
    rng = random.Random(99)
    checked = 0
    while checked < 15:
        p = int(randprime(50, 400))
        q = int(randprime(50, 400))
        phi = (p - 1) * (q - 1)
        e = rng.randrange(3, phi)
        if p == q or math.gcd(e, phi) != 1:
            continue
        n = p * q
        m = rng.randrange(n)
        c = mod_exp(m, e, n)
        fr = factoring_attack(e, n, c)
        assert brute_force_attack(e, n, c) == fr.m == m
        assert fr.p * fr.q == n and fr.p < fr.q
        assert (fr.d * e) % phi == 1
        checked += 1


def test_accepts_decimal_strings():
    assert factoring_attack("17", " 3233 ", "2790").m == 65
    assert brute_force_attack("17", "3233", "+2790") == 65


def test_brute_force_returns_smallest_preimage():
    # e=2 is not a valid exponent for n=15, so several m share a square
    assert brute_force_attack(2, 15, 4) == 2


def test_brute_force_no_solution():
    # squares mod 15 are {0, 1, 4, 6, 9, 10}
    with pytest.raises(NoSolution) as ei:
        brute_force_attack(2, 15, 2)
    assert isinstance(ei.value, LookupError)


def test_factoring_malformed_modulus():
    with pytest.raises(MalformedModulus):
        factoring_attack(17, 97, 5)
    with pytest.raises(MalformedModulus):
        factoring_attack(7, 7 * 11 * 13, 5)


def test_factoring_no_inverse():
    # 3 divides phi(3233) = 3120
    with pytest.raises(NoModularInverse):
        factoring_attack(3, 3233, 2790)


@pytest.mark.parametrize("attack", [brute_force_attack, factoring_attack])
def test_zero_modulus(attack):
    with pytest.raises(DivisionByZero):
        attack(17, 0, 0)


@pytest.mark.parametrize("attack", [brute_force_attack, factoring_attack])
@pytest.mark.parametrize("e,n,c", [
    (17, 3233, 3233),
    (17, 3233, 5000),
    (-17, 3233, 2790),
    (17, "abc", 2790),
    (True, 3233, 2790),
    (17, 3233.0, 2790),
])
def test_invalid_inputs(attack, e, n, c):
    with pytest.raises(InvalidInteger):
        attack(e, n, c)


@pytest.mark.parametrize("attack", [brute_force_attack, factoring_attack])
def test_overlong_decimal_string_is_invalid(attack):
    with pytest.raises(InvalidInteger, match="too long"):
        attack(17, "9" * 5000, 1)
