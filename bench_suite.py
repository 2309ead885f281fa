#!/usr/bin/env python3
# bench_suite.py: brute force vs factoring across modulus sizes
#
# For each level a fresh semiprime is built from two random primes, a random
# plaintext is encrypted, and both attacks must hand it back. Timings go to a
# JSON-lines log and a CSV; --plot draws median time per level.
#
#   python bench_suite.py --levels 12,16,20 --trials 3
#   python bench_suite.py --base-url http://127.0.0.1:8082   # against app.py

from __future__ import annotations
import argparse, csv, json, logging, math, random, time
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import numpy as np
import requests
from sympy import randprime

from rsattack.config import Settings
from rsattack.harness import compare
from rsattack.logs import configure_logging
from rsattack.modmath import mod_exp, totient

logger = logging.getLogger("rsattack.bench")

# Common public exponents, tried in order until one is coprime to phi(n).
EXPONENTS = (65537, 257, 17, 5, 3)

# Timing ordering is only asserted where n dwarfs sqrt(n).
ORDERING_MIN_N = 10**6

DEFAULT_LEVELS = (12, 16, 20, 24)
MIN_BITS = 8


@dataclass(frozen=True)
class Instance:
    bits: int
    p: int
    q: int
    e: int
    n: int
    m: int
    c: int


@dataclass
class TrialRow:
    level_bits: int
    trial: int
    n: int
    e: int
    m: int
    brute_ms: Optional[float]
    factoring_ms: Optional[float]
    brute_m: Optional[int]
    factoring_m: Optional[int]
    ok: bool
    ordering_ok: Optional[bool]
    reason: str = ""


def now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def make_instance(bits: int, rng: random.Random) -> Instance:
    """
    Semiprime n with roughly `bits` bits, a valid e and a planted plaintext.
    Benchmark fixture only; p and q are far too small for real use.
    """
    if bits < MIN_BITS:
        raise ValueError(f"bits must be >= {MIN_BITS}")
    half = bits // 2
    while True:
        p = int(randprime(2 ** (half - 1), 2 ** half))
        q = int(randprime(2 ** (bits - half - 1), 2 ** (bits - half)))
        if p == q:
            continue
        phi = totient(p, q)
        e = next((x for x in EXPONENTS if x < phi and math.gcd(x, phi) == 1), None)
        if e is None:
            continue
        n = p * q
        # keep m away from 0/1 so brute force has to walk a real distance
        m = rng.randrange(2, n)
        return Instance(bits=bits, p=min(p, q), q=max(p, q), e=e, n=n, m=m, c=mod_exp(m, e, n))


# ---------- runners ----------

def run_local(inst: Instance, parallel: bool = False) -> Dict:
    return compare(inst.e, inst.n, inst.c, parallel=parallel).to_dict()


class RemoteRunner:
    """Posts instances to a running app.py (/api/compare)."""

    def __init__(self, base_url: str, timeout_s: float = 300.0):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "rsattack-bench/1.0", "Accept": "application/json"})

    def __call__(self, inst: Instance) -> Dict:
        r = self.session.post(f"{self.base_url}/api/compare",
                              json={"e": str(inst.e), "n": str(inst.n), "c": str(inst.c)},
                              timeout=self.timeout_s)
        r.raise_for_status()
        return r.json()


def _opt_int(v) -> Optional[int]:
    return None if v is None else int(v)


def evaluate(inst: Instance, level: int, trial: int, res: Dict) -> TrialRow:
    b, f = res["brute_force"], res["factoring"]
    bm, fm = _opt_int(b.get("m")), _opt_int(f.get("m"))
    reasons = []
    if not b.get("ok"):
        reasons.append(f"brute_force: {b.get('error')}")
    elif bm != inst.m:
        reasons.append(f"brute_force returned {bm}, planted {inst.m}")
    if not f.get("ok"):
        reasons.append(f"factoring: {f.get('error')}")
    elif fm != inst.m:
        reasons.append(f"factoring returned {fm}, planted {inst.m}")
    elif (_opt_int(f.get("p")), _opt_int(f.get("q"))) != (inst.p, inst.q):
        reasons.append("factoring returned wrong primes")

    ordering_ok = None
    if inst.n > ORDERING_MIN_N and b.get("ok") and f.get("ok"):
        ordering_ok = f["elapsed_ms"] < b["elapsed_ms"]
        if not ordering_ok:
            reasons.append("factoring was not faster than brute force")

    return TrialRow(
        level_bits=level, trial=trial, n=inst.n, e=inst.e, m=inst.m,
        brute_ms=b.get("elapsed_ms"), factoring_ms=f.get("elapsed_ms"),
        brute_m=bm, factoring_m=fm,
        ok=not reasons, ordering_ok=ordering_ok, reason="; ".join(reasons),
    )


def run_suite(levels: Sequence[int], trials: int, runner, rng: random.Random,
              log_path: Optional[str] = None) -> List[TrialRow]:
    rows: List[TrialRow] = []
    log_f = open(log_path, "a", encoding="utf-8") if log_path else None
    try:
        for bits in levels:
            logger.info("level %d bits: %d trial(s)", bits, trials)
            for t in range(1, trials + 1):
                inst = make_instance(bits, rng)
                t0 = time.perf_counter()
                row = evaluate(inst, bits, t, runner(inst))
                rows.append(row)
                if not row.ok:
                    logger.warning("level=%d trial=%d FAIL %s", bits, t, row.reason)
                if log_f:
                    rec = {"ts": now(), "event": "trial", **asdict(row),
                           "wall_ms": round((time.perf_counter() - t0) * 1000, 3)}
                    log_f.write(json.dumps(rec, default=str) + "\n")
                    log_f.flush()
    finally:
        if log_f:
            log_f.close()
    return rows


# ---------- reporting ----------

def summarize(rows: Sequence[TrialRow]) -> Dict[int, Dict[str, float]]:
    """Median timings per level (ms), failed attacks excluded."""
    out: Dict[int, Dict[str, float]] = {}
    for bits in sorted({r.level_bits for r in rows}):
        level = [r for r in rows if r.level_bits == bits]
        b = np.array([r.brute_ms for r in level if r.brute_ms is not None], dtype=float)
        f = np.array([r.factoring_ms for r in level if r.factoring_ms is not None], dtype=float)
        out[bits] = {
            "trials": len(level),
            "passed": sum(1 for r in level if r.ok),
            "brute_median_ms": float(np.median(b)) if b.size else float("nan"),
            "factoring_median_ms": float(np.median(f)) if f.size else float("nan"),
        }
    return out


def write_csv(rows: Sequence[TrialRow], path: str) -> None:
    with open(path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(TrialRow.__dataclass_fields__))
        w.writeheader()
        for r in rows:
            w.writerow(asdict(r))


def plot(summary: Dict[int, Dict[str, float]], path: str) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    bits = np.array(sorted(summary))
    brute = np.array([summary[b]["brute_median_ms"] for b in bits])
    fact = np.array([summary[b]["factoring_median_ms"] for b in bits])
    plt.figure(figsize=(8, 5))
    plt.semilogy(bits, brute, "o-", label="brute force  O(n)")
    plt.semilogy(bits, fact, "s-", label="factoring  O(sqrt n)")
    plt.xlabel("modulus bits")
    plt.ylabel("median time (ms)")
    plt.title("RSA attack time comparison")
    plt.grid(True, which="both", alpha=0.3)
    plt.legend()
    plt.savefig(path, dpi=120, bbox_inches="tight")
    plt.close()


def _levels(s: str) -> List[int]:
    try:
        out = [int(x) for x in s.split(",") if x.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"levels must be comma-separated integers: {s!r}") from None
    if not out or min(out) < MIN_BITS:
        raise argparse.ArgumentTypeError(f"every level must be >= {MIN_BITS} bits")
    return out


def main(argv: Optional[List[str]] = None) -> int:
    cfg = Settings.from_env()
    ap = argparse.ArgumentParser(description="Benchmark brute force against factoring.")
    ap.add_argument("--levels", type=_levels, default=list(DEFAULT_LEVELS), help="comma-separated modulus sizes in bits")
    ap.add_argument("--trials", type=int, default=3)
    ap.add_argument("--seed", type=int, default=None, help="seed for plaintext choice and prime generation")
    ap.add_argument("--parallel", action="store_true", help="run the two attacks on worker threads")
    ap.add_argument("--base-url", default=None, help="benchmark a running server instead of in-process")
    ap.add_argument("--log", default=cfg.bench_log, help="JSON-lines log (BENCH_LOG)")
    ap.add_argument("--out", default="bench_results.csv")
    ap.add_argument("--plot", default=None, metavar="PNG", help="write a timing plot")
    args = ap.parse_args(argv)
    configure_logging(cfg.log_level)

    rng = random.Random(args.seed)
    if args.seed is not None:
        # randprime draws from the global generator
        random.seed(args.seed)

    if args.base_url:
        runner = RemoteRunner(args.base_url)
    else:
        runner = lambda inst: run_local(inst, parallel=args.parallel)

    rows = run_suite(args.levels, args.trials, runner, rng, log_path=args.log)
    summary = summarize(rows)

    print("\n=== BENCH SUMMARY ===")
    print(f"{'bits':>5}  {'pass':>7}  {'brute ms':>12}  {'factoring ms':>12}")
    for bits, s in summary.items():
        print(f"{bits:>5}  {s['passed']:>3}/{s['trials']:<3}  {s['brute_median_ms']:>12.3f}  {s['factoring_median_ms']:>12.3f}")

    write_csv(rows, args.out)
    print(f"\nWrote {len(rows)} rows to {args.out}")
    if args.plot:
        plot(summary, args.plot)
        print(f"Wrote plot to {args.plot}")

    return 0 if all(r.ok for r in rows) else 1


if __name__ == "__main__":
    raise SystemExit(main())
