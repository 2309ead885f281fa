# rsattack/errors.py
# Failure modes of the attack core. Every error is raised to the immediate
# caller; nothing here is fatal to the process.

from __future__ import annotations


class AttackError(Exception):
    """Base for everything the attack core can raise."""
    kind = "attack_error"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": str(self)}


class MalformedModulus(AttackError, ValueError):
    """n is not a product of exactly two distinct primes."""
    kind = "malformed_modulus"


class NoModularInverse(AttackError, ValueError):
    """gcd(e, phi(n)) != 1, so e has no inverse modulo phi(n)."""
    kind = "no_modular_inverse"


class NoSolution(AttackError, LookupError):
    """Brute force scanned all of [0, n) without a match."""
    kind = "no_solution"


class DivisionByZero(AttackError, ZeroDivisionError):
    kind = "division_by_zero"


class InvalidInteger(AttackError, ValueError):
    kind = "invalid_integer"
