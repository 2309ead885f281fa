# rsattack/harness.py
# Runs the attacks with identical inputs, times them and packages the outcome.
# Attack errors are captured into the result; the caller decides how to show them.

from __future__ import annotations
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .attacks import brute_force_attack, factoring_attack
from .errors import AttackError
from .factoring import PrimeFactorPair

logger = logging.getLogger(__name__)

BRUTE_FORCE = "brute_force"
FACTORING = "factoring"


@dataclass(frozen=True)
class AttackResult:
    attack: str
    e: int
    n: int
    c: int
    plaintext: Optional[int] = None
    factors: Optional[PrimeFactorPair] = None
    exponent: Optional[int] = None
    elapsed_ms: float = 0.0
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        # big ints as strings so JSON clients don't round them
        d = {
            "attack": self.attack,
            "ok": self.ok,
            "e": str(self.e), "n": str(self.n), "c": str(self.c),
            "elapsed_ms": round(self.elapsed_ms, 3),
            "m": None if self.plaintext is None else str(self.plaintext),
        }
        if self.factors is not None:
            d["p"], d["q"] = str(self.factors.p), str(self.factors.q)
        if self.exponent is not None:
            d["d"] = str(self.exponent)
        if self.error:
            d["error"] = self.error
            d["message"] = self.message
        return d


def _brute(e: int, n: int, c: int) -> Dict[str, object]:
    return {"plaintext": brute_force_attack(e, n, c)}


def _factoring(e: int, n: int, c: int) -> Dict[str, object]:
    m, p, q, d = factoring_attack(e, n, c)
    return {"plaintext": m, "factors": PrimeFactorPair(p, q), "exponent": d}


ATTACKS: Dict[str, Callable[[int, int, int], Dict[str, object]]] = {
    BRUTE_FORCE: _brute,
    FACTORING: _factoring,
}


def run_attack(name: str, e: int, n: int, c: int) -> AttackResult:
    """Run one attack and time it with perf_counter."""
    try:
        fn = ATTACKS[name]
    except KeyError:
        raise ValueError(f"unknown attack {name!r}; choose from {sorted(ATTACKS)}") from None

    t0 = time.perf_counter()
    try:
        out = fn(e, n, c)
    except AttackError as exc:
        dt = (time.perf_counter() - t0) * 1000
        logger.info("%s failed after %.3f ms: %s", name, dt, exc)
        return AttackResult(attack=name, e=e, n=n, c=c, elapsed_ms=dt,
                            error=exc.kind, message=str(exc))
    dt = (time.perf_counter() - t0) * 1000
    logger.debug("%s n=%s finished in %.3f ms", name, n, dt)
    return AttackResult(attack=name, e=e, n=n, c=c, elapsed_ms=dt, **out)


@dataclass(frozen=True)
class Comparison:
    brute_force: AttackResult
    factoring: AttackResult

    @property
    def agree(self) -> bool:
        return (self.brute_force.ok and self.factoring.ok
                and self.brute_force.plaintext == self.factoring.plaintext)

    @property
    def speedup(self) -> Optional[float]:
        """brute-force time / factoring time, None if either failed."""
        if not (self.brute_force.ok and self.factoring.ok):
            return None
        return self.brute_force.elapsed_ms / max(self.factoring.elapsed_ms, 1e-6)

    def to_dict(self) -> dict:
        sp = self.speedup
        return {
            "brute_force": self.brute_force.to_dict(),
            "factoring": self.factoring.to_dict(),
            "agree": self.agree,
            "speedup": None if sp is None else round(sp, 3),
        }


def compare(e: int, n: int, c: int, parallel: bool = False) -> Comparison:
    """
    Run both attacks on the same (e, n, c).
    parallel=True uses two worker threads; this only shortens wall-clock time
    when the attacks release the GIL, each elapsed time is still measured alone.
    """
    if parallel:
        with ThreadPoolExecutor(max_workers=2) as ex:
            fb = ex.submit(run_attack, BRUTE_FORCE, e, n, c)
            ff = ex.submit(run_attack, FACTORING, e, n, c)
            res = Comparison(brute_force=fb.result(), factoring=ff.result())
    else:
        res = Comparison(brute_force=run_attack(BRUTE_FORCE, e, n, c),
                         factoring=run_attack(FACTORING, e, n, c))
    if res.brute_force.ok and res.factoring.ok and not res.agree:
        logger.warning("attacks disagree on n=%s: brute=%s factoring=%s",
                       n, res.brute_force.plaintext, res.factoring.plaintext)
    return res
