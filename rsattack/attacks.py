# rsattack/attacks.py
# The two ways of reading an RSA ciphertext without the private key.
#   brute_force_attack : try every m in [0, n) until m^e mod n == c
#   factoring_attack   : factor n, derive d = e^-1 mod phi(n), return c^d mod n

from __future__ import annotations
from typing import NamedTuple

from .errors import NoSolution
from .factoring import factor
from .modmath import mod_exp, mod_inverse, totient
from .numeric import check_public_inputs


class FactoringResult(NamedTuple):
    m: int
    p: int
    q: int
    d: int


def brute_force_attack(e: int, n: int, c: int) -> int:
    """Smallest m in [0, n) with m^e mod n == c; NoSolution if there is none."""
    e, n, c = check_public_inputs(e, n, c)
    for m in range(n):
        if mod_exp(m, e, n) == c:
            return m
    raise NoSolution(f"no m in [0, {n}) satisfies m^{e} mod {n} = {c}")


def factoring_attack(e: int, n: int, c: int) -> FactoringResult:
    """Recover (m, p, q, d). Propagates MalformedModulus and NoModularInverse."""
    e, n, c = check_public_inputs(e, n, c)
    p, q = factor(n)
    d = mod_inverse(e, totient(p, q))
    m = mod_exp(c, d, n)
    return FactoringResult(m=m, p=p, q=q, d=d)
