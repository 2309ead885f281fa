from .attacks import FactoringResult, brute_force_attack, factoring_attack
from .errors import (
    AttackError,
    DivisionByZero,
    InvalidInteger,
    MalformedModulus,
    NoModularInverse,
    NoSolution,
)
from .factoring import PrimeFactorPair, factor, prime_factors
from .modmath import mod_exp, mod_inverse, totient

__all__ = [
    "AttackError", "DivisionByZero", "FactoringResult", "InvalidInteger",
    "MalformedModulus", "NoModularInverse", "NoSolution", "PrimeFactorPair",
    "brute_force_attack", "factor", "factoring_attack", "mod_exp",
    "mod_inverse", "prime_factors", "totient",
]
