# rsattack/modmath.py
# Modular arithmetic for the attacks:
# - binary (square-and-multiply) exponentiation
# - Euler's totient of a two-prime modulus
# - modular inverse by the iterative extended Euclidean algorithm
#
# mod_exp is deliberately hand-written instead of pow(b, e, m): brute force
# calls it once per candidate and the timings are what gets compared.

from __future__ import annotations

from .errors import DivisionByZero, InvalidInteger, NoModularInverse


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """Return base**exponent % modulus."""
    if modulus == 0:
        raise DivisionByZero("modulus must be non-zero")
    if modulus < 0 or exponent < 0:
        raise InvalidInteger("exponent and modulus must be non-negative")
    x = 1 % modulus
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            x = (x * base) % modulus
        base = (base * base) % modulus
        exponent >>= 1
    return x


def totient(p: int, q: int) -> int:
    """Euler's phi for n = p*q with p, q distinct primes."""
    return (p - 1) * (q - 1)


def mod_inverse(e: int, phi: int) -> int:
    """
    Return d with e*d = 1 (mod phi) and 0 <= d < phi.

    Runs the Euclidean division chain on (e, phi) while building the
    magnitude of the Bezout coefficient of e in d; the sign alternates
    with each division step, tracked in `sign`.
    """
    if phi == 0:
        raise DivisionByZero("phi(n) must be non-zero")
    if e < 0 or phi < 0:
        raise InvalidInteger("e and phi must be non-negative")

    a, b = e, phi
    d, y = 1, 0
    sign = 1
    while b != 0:
        q, r = divmod(a, b)
        d, y = y, d + q * y
        a, b = b, r
        sign = -sign

    # a == gcd(e, phi)
    if a != 1:
        raise NoModularInverse(f"gcd(e={e}, phi={phi}) = {a}, no inverse exists")

    if sign < 0:
        d = phi - d
    return d % phi
