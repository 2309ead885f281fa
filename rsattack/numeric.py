# rsattack/numeric.py
# Integer validation shared by the core and by the CLI / HTTP callers.

from __future__ import annotations
from typing import Any, Tuple

from .errors import DivisionByZero, InvalidInteger


def as_uint(value: Any, name: str = "value") -> int:
    """
    Coerce value to a non-negative int.
    Accepts ints and decimal strings (surrounding whitespace ignored).
    bool is rejected even though it subclasses int.
    """
    if isinstance(value, bool):
        raise InvalidInteger(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        out = value
    elif isinstance(value, str):
        s = value.strip()
        digits = s[1:] if s.startswith("+") else s
        if not (digits.isascii() and digits.isdecimal()):
            raise InvalidInteger(f"{name} must be a non-negative integer, got {value!r}")
        try:
            out = int(s, 10)
        except ValueError:
            # interpreter cap on str -> int conversion length
            raise InvalidInteger(f"{name} is too long ({len(digits)} digits)") from None
    else:
        raise InvalidInteger(f"{name} must be an integer, got {type(value).__name__}")
    if out < 0:
        raise InvalidInteger(f"{name} must be non-negative, got {out}")
    return out


def check_public_inputs(e: Any, n: Any, c: Any) -> Tuple[int, int, int]:
    """Validate (e, n, c) as seen by both attacks: n >= 1 and 0 <= c < n."""
    e = as_uint(e, "e")
    n = as_uint(n, "n")
    c = as_uint(c, "c")
    if n == 0:
        raise DivisionByZero("modulus n must be non-zero")
    if c >= n:
        raise InvalidInteger(f"ciphertext c must satisfy 0 <= c < n (c={c}, n={n})")
    return e, n, c
