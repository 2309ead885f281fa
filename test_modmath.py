import math

import pytest

from rsattack import (
    DivisionByZero, InvalidInteger, NoModularInverse, mod_exp, mod_inverse, totient,
)


@pytest.mark.parametrize("a,e,m", [
    (65, 17, 3233),
    (2790, 2753, 3233),
    (2, 10, 1000),
    (0, 5, 7),
    (7, 0, 13),
    (5, 3, 1),
    (10**30 + 7, 65537, 2**61 - 1),
])
def test_mod_exp_matches_builtin_pow(a, e, m):
    assert mod_exp(a, e, m) == pow(a, e, m)


def test_mod_exp_zero_exponent_is_one():
    for m in range(2, 60):
        for a in (0, 1, 2, m - 1, m, 10 * m + 3):
            assert mod_exp(a, 0, m) == 1


def test_mod_exp_unit_exponent_reduces_base():
    for m in range(1, 60):
        for a in (0, 1, 5, m, 3 * m + 2):
            assert mod_exp(a, 1, m) == a % m


def test_mod_exp_no_64bit_ceiling():
    n = (2**89 - 1) * (2**107 - 1)
    assert mod_exp(n - 2, 65537, n) == pow(n - 2, 65537, n)


def test_mod_exp_zero_modulus():
    with pytest.raises(DivisionByZero):
        mod_exp(3, 4, 0)
    with pytest.raises(ZeroDivisionError):
        mod_exp(3, 4, 0)


def test_mod_exp_negative_exponent():
    with pytest.raises(InvalidInteger):
        mod_exp(3, -1, 7)


def test_totient():
    assert totient(61, 53) == 3120
    assert totient(2, 3) == 2


@pytest.mark.parametrize("e,phi,d", [
    (17, 3120, 2753),
    (3, 7, 5),
    (20, 7, 6),
    (5, 1, 0),
    (65537, 1020096, pow(65537, -1, 1020096)),
])
def test_mod_inverse_known_values(e, phi, d):
    assert mod_inverse(e, phi) == d


def test_mod_inverse_exhaustive_small():
    for phi in range(2, 150):
        for e in range(0, 2 * phi):
            if math.gcd(e, phi) == 1:
                d = mod_inverse(e, phi)
                assert 0 <= d < phi
                assert (d * e) % phi == 1
            else:
                with pytest.raises(NoModularInverse):
                    mod_inverse(e, phi)


def test_mod_inverse_no_inverse():
    with pytest.raises(NoModularInverse) as ei:
        mod_inverse(2, 4)
    assert isinstance(ei.value, ValueError)
    assert ei.value.kind == "no_modular_inverse"


def test_mod_inverse_bad_inputs():
    with pytest.raises(DivisionByZero):
        mod_inverse(3, 0)
    with pytest.raises(InvalidInteger):
        mod_inverse(-3, 7)
